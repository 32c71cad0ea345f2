from typing import List, Optional

from ayusetu.integrations.contracts.compliance import (
    AbdmGatewayLog,
    AccessPattern,
    AuditLogQuery,
    AuditReport,
    AuditReportRequest,
    ComplianceDashboard,
    ComplianceService,
    ConsentAuditLog,
    ConsentTimelineEntry,
    DataAccessLog,
    DateRange,
    UserActivityLog,
)
from ayusetu.integrations.errors import build_model, build_model_list

from .base import RealHttpClientBase


class RealComplianceClient(RealHttpClientBase, ComplianceService):
    prefix = "/compliance"

    async def get_data_access_logs(self, query: AuditLogQuery) -> List[DataAccessLog]:
        msg = "Failed to fetch data access logs"
        data = await self._call("GET", "/data-access-logs", msg, params=query.to_params())
        return build_model_list(DataAccessLog, data, msg)

    async def get_consent_audit_logs(self, query: AuditLogQuery) -> List[ConsentAuditLog]:
        msg = "Failed to fetch consent audit logs"
        data = await self._call("GET", "/consent-audit", msg, params=query.to_params())
        return build_model_list(ConsentAuditLog, data, msg)

    async def get_abdm_gateway_logs(self, query: AuditLogQuery) -> List[AbdmGatewayLog]:
        msg = "Failed to fetch ABDM logs"
        data = await self._call("GET", "/abdm-logs", msg, params=query.to_params())
        return build_model_list(AbdmGatewayLog, data, msg)

    async def get_user_activity_logs(self, query: AuditLogQuery) -> List[UserActivityLog]:
        msg = "Failed to fetch user activity logs"
        data = await self._call("GET", "/user-activity", msg, params=query.to_params())
        return build_model_list(UserActivityLog, data, msg)

    async def get_compliance_dashboard(self, user_id: str) -> ComplianceDashboard:
        msg = "Failed to fetch compliance dashboard"
        data = await self._call("GET", f"/dashboard/{user_id}", msg)
        return build_model(ComplianceDashboard, data, msg)

    async def get_access_patterns(self, user_id: str, date_range: Optional[DateRange] = None) -> List[AccessPattern]:
        msg = "Failed to fetch access patterns"
        params = {"from": date_range.from_, "to": date_range.to} if date_range else None
        data = await self._call("GET", f"/access-patterns/{user_id}", msg, params=params)
        return build_model_list(AccessPattern, data, msg)

    async def get_consent_timeline(
        self, user_id: str, consent_id: Optional[str] = None, limit: Optional[int] = None
    ) -> List[ConsentTimelineEntry]:
        msg = "Failed to fetch consent timeline"
        params = {"consentId": consent_id, "limit": limit}
        data = await self._call("GET", f"/consent-timeline/{user_id}", msg, params=params)
        return build_model_list(ConsentTimelineEntry, data, msg)

    async def generate_audit_report(self, request: AuditReportRequest) -> AuditReport:
        msg = "Failed to generate audit report"
        data = await self._call("POST", "/generate-report", msg, json=request.to_wire())
        return build_model(AuditReport, data, msg)

    async def download_audit_report(self, report_id: str) -> bytes:
        return await self._api.get_bytes(
            f"{self.prefix}/download-report/{report_id}", error_message="Failed to download audit report"
        )
