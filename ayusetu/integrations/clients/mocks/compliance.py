"""
Mock Compliance Client.

Audit data is generated relative to the moment the client was created, so
repeated reads return identical results.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from ayusetu.integrations.contracts.compliance import (
    AbdmGatewayLog,
    AccessActor,
    AccessPattern,
    AuditLogQuery,
    AuditReport,
    AuditReportRequest,
    AuditReportSummary,
    ComplianceDashboard,
    ComplianceService,
    ConsentAuditLog,
    ConsentTimelineEntry,
    DailyActivity,
    DataAccessLog,
    DateRange,
    UserActivityLog,
)

from .base import MockClientBase

logger = logging.getLogger(__name__)

MOCK_REPORT_URL = "https://ayusetu-reports.s3.ap-south-1.amazonaws.com/audit-report-123.pdf"
MOCK_REPORT_BYTES = b"Mock PDF content"

_HOUR = timedelta(hours=1)
_DAY = timedelta(days=1)

_APOLLO = AccessActor(type="hospital", id="hosp-001", name="Dr. Rajesh Kumar",
                      facility_name="Apollo Hospital, Delhi")


def _iso(moment: datetime) -> str:
    return moment.isoformat().replace("+00:00", "Z")


class MockComplianceClient(MockClientBase, ComplianceService):
    label = "COMPLIANCE MOCK"

    def __init__(self, config=None) -> None:
        super().__init__(config)
        self._anchor = datetime.now(timezone.utc)

    def _ago(self, delta: timedelta) -> str:
        return _iso(self._anchor - delta)

    def _ahead(self, delta: timedelta) -> str:
        return _iso(self._anchor + delta)

    # ------------------------------------------------------------------
    # Logs
    # ------------------------------------------------------------------

    async def get_data_access_logs(self, query: AuditLogQuery) -> List[DataAccessLog]:
        logs = [
            DataAccessLog(
                id="access-001", timestamp=self._ago(2 * _HOUR), action="view",
                data_category="diagnostic-report", record_id="report-123",
                record_title="Blood Test Report - Nov 2025",
                accessed_by=AccessActor(type="doctor", id="doc-001", name="Dr. Rajesh Kumar",
                                        facility_id="hosp-001", facility_name="Apollo Hospital, Delhi"),
                purpose="Consultation", consent_id="consent-001", ip_address="103.45.67.89",
                location="New Delhi, India", device_info="Web Browser - Chrome 120", duration=180,
                success=True,
            ),
            DataAccessLog(
                id="access-002", timestamp=self._ago(5 * _HOUR), action="download",
                data_category="prescription", record_id="rx-456", record_title="Prescription - Dr. Sharma",
                accessed_by=AccessActor(type="pharmacy", id="pharm-001", name="MedPlus Pharmacy",
                                        facility_id="pharm-branch-01",
                                        facility_name="MedPlus - Connaught Place"),
                purpose="Medicine dispensing", consent_id="consent-002", ip_address="103.45.67.90",
                location="New Delhi, India", device_info="Android App - v2.5.0", duration=45, success=True,
            ),
            DataAccessLog(
                id="access-003", timestamp=self._ago(_DAY), action="view",
                data_category="discharge-summary", record_id="discharge-789",
                record_title="Discharge Summary - Cardiac Surgery",
                accessed_by=AccessActor(type="doctor", id="doc-002", name="Dr. Priya Mehta",
                                        facility_id="hosp-002", facility_name="Max Hospital, Gurgaon"),
                purpose="Follow-up consultation", consent_id="consent-003", ip_address="103.45.67.91",
                location="Gurgaon, India", device_info="iOS App - v2.5.1", duration=240, success=True,
            ),
            DataAccessLog(
                id="access-004", timestamp=self._ago(2 * _DAY), action="emergency-access",
                data_category="health-document", record_title="Emergency Medical Card",
                accessed_by=AccessActor(type="emergency", id="emerg-001", name="Emergency Personnel",
                                        facility_id="amb-001", facility_name="Emergency Services"),
                purpose="Emergency treatment", ip_address="103.45.67.92", location="Unknown",
                device_info="Mobile Scanner", duration=60, success=True,
            ),
        ]
        if query.source:
            logs = [log for log in logs if log.accessed_by.type == query.source]
        if query.category:
            logs = [log for log in logs if log.data_category == query.category]
        return query.page(logs)

    async def get_consent_audit_logs(self, query: AuditLogQuery) -> List[ConsentAuditLog]:
        logs = [
            ConsentAuditLog(
                id="consent-audit-001", consent_id="consent-001", timestamp=self._ago(3 * _DAY),
                action="granted", requested_by=_APOLLO, purpose="Consultation",
                data_types=["diagnostic-report", "prescription"],
                date_range=DateRange(from_=self._ago(365 * _DAY), to=self._ago(timedelta(0))),
                expiry_date=self._ahead(30 * _DAY), hiu_id="HIU-APOLLO-01", hip_id="HIP-APOLLO-01",
                user_action="approved",
            ),
            ConsentAuditLog(
                id="consent-audit-002", consent_id="consent-001", timestamp=self._ago(2 * _HOUR),
                action="used", requested_by=_APOLLO, purpose="Consultation",
                data_types=["diagnostic-report"], hiu_id="HIU-APOLLO-01",
                details="Data accessed for consultation",
            ),
            ConsentAuditLog(
                id="consent-audit-003", consent_id="consent-005", timestamp=self._ago(10 * _DAY),
                action="revoked",
                requested_by=AccessActor(type="lab", id="lab-001", name="Dr. Lal PathLabs",
                                         facility_name="PathLabs - Delhi"),
                purpose="Lab report sharing", data_types=["diagnostic-report"],
                expiry_date=self._ahead(60 * _DAY), hiu_id="HIU-PATHLABS-01",
                user_action="manual-revoke", details="User manually revoked consent",
            ),
        ]
        if query.consent_id:
            logs = [log for log in logs if log.consent_id == query.consent_id]
        if query.action:
            logs = [log for log in logs if log.action == query.action]
        return query.page(logs)

    async def get_abdm_gateway_logs(self, query: AuditLogQuery) -> List[AbdmGatewayLog]:
        logs = [
            AbdmGatewayLog(
                id="abdm-001", timestamp=self._ago(_HOUR), transaction_id="TXN-20260115-001",
                request_type="data-transfer", direction="outbound", gateway_id="ABDM-GATEWAY-PROD",
                hip_id="HIP-APOLLO-01", hiu_id="HIU-MAX-01", status="success", response_time=1250,
                metadata={"recordsTransferred": 3, "dataSize": "2.5 MB"},
            ),
            AbdmGatewayLog(
                id="abdm-002", timestamp=self._ago(6 * _HOUR), transaction_id="TXN-20260115-002",
                request_type="consent-request", direction="inbound", gateway_id="ABDM-GATEWAY-PROD",
                hiu_id="HIU-APOLLO-01", status="success", response_time=850,
                metadata={"purpose": "Consultation", "requester": "Dr. Rajesh Kumar"},
            ),
            AbdmGatewayLog(
                id="abdm-003", timestamp=self._ago(12 * _HOUR), transaction_id="TXN-20260114-003",
                request_type="link-records", direction="inbound", gateway_id="ABDM-GATEWAY-PROD",
                hip_id="HIP-FORTIS-01", status="failed", error_code="TIMEOUT",
                error_message="Connection timeout", response_time=30000,
            ),
        ]
        if query.request_type:
            logs = [log for log in logs if log.request_type == query.request_type]
        if query.status:
            logs = [log for log in logs if log.status == query.status]
        return query.page(logs)

    async def get_user_activity_logs(self, query: AuditLogQuery) -> List[UserActivityLog]:
        logs = [
            UserActivityLog(
                id="activity-001", user_id=query.user_id, timestamp=self._ago(_HOUR),
                action="record-uploaded", category="record", description="Uploaded lab report - Blood Test",
                records_affected=1, device_info="iOS App v2.5.1", location="New Delhi, India",
            ),
            UserActivityLog(
                id="activity-002", user_id=query.user_id, timestamp=self._ago(3 * _HOUR),
                action="consent-granted", category="consent",
                description="Granted consent to Apollo Hospital for consultation",
                metadata={"consentId": "consent-001", "validUntil": self._ahead(30 * _DAY)},
                device_info="iOS App v2.5.1", location="New Delhi, India",
            ),
            UserActivityLog(
                id="activity-003", user_id=query.user_id, timestamp=self._ago(_DAY), action="download",
                category="export", description="Downloaded health summary PDF",
                device_info="Web Browser - Chrome 120", location="New Delhi, India",
            ),
        ]
        if query.category:
            logs = [log for log in logs if log.category == query.category]
        return query.page(logs)

    # ------------------------------------------------------------------
    # Dashboard / analysis
    # ------------------------------------------------------------------

    async def get_compliance_dashboard(self, user_id: str) -> ComplianceDashboard:
        daily = [(3, 1), (5, 0), (2, 1), (4, 2), (1, 0), (3, 0), (2, 1)]
        return ComplianceDashboard(
            user_id=user_id,
            generated_at=self._ago(timedelta(0)),
            total_consents=12,
            active_consents=5,
            revoked_consents=4,
            expired_consents=3,
            total_data_accesses=48,
            accesses_by_source={"patient": 15, "hip": 8, "hiu": 12, "doctor": 10, "hospital": 8,
                                "lab": 3, "pharmacy": 2, "emergency": 0},
            accesses_by_category={"prescription": 12, "diagnostic-report": 18, "discharge-summary": 5,
                                  "op-consultation": 8, "immunization": 3, "wellness-record": 2,
                                  "health-document": 0},
            accesses_last30_days=28,
            linked_facilities=6,
            total_data_transfers=24,
            failed_transfers=2,
            records_shared=35,
            records_viewed=48,
            downloads_count=12,
            emergency_accesses=0,
            compliance_score=92,
            compliance_level="excellent",
            recommendations=[
                "Review and revoke unused consents",
                "Enable two-factor authentication for enhanced security",
            ],
            recent_activity=[
                DailyActivity(date=self._ago(days * _DAY), access_count=accesses, consent_actions=actions)
                for days, (accesses, actions) in enumerate(daily)
            ],
        )

    async def get_access_patterns(self, user_id: str, date_range: Optional[DateRange] = None) -> List[AccessPattern]:
        return [
            AccessPattern(source="doctor", source_name="Healthcare Providers", total_accesses=22,
                          first_access=self._ago(60 * _DAY), last_access=self._ago(2 * _HOUR),
                          most_accessed_category="diagnostic-report", average_access_duration=180,
                          consent_based=True, emergency_accesses=0),
            AccessPattern(source="lab", source_name="Diagnostic Centers", total_accesses=8,
                          first_access=self._ago(45 * _DAY), last_access=self._ago(5 * _DAY),
                          most_accessed_category="diagnostic-report", average_access_duration=90,
                          consent_based=True, emergency_accesses=0),
            AccessPattern(source="pharmacy", source_name="Pharmacies", total_accesses=5,
                          first_access=self._ago(30 * _DAY), last_access=self._ago(5 * _HOUR),
                          most_accessed_category="prescription", average_access_duration=45,
                          consent_based=True, emergency_accesses=0),
        ]

    async def get_consent_timeline(
        self, user_id: str, consent_id: Optional[str] = None, limit: Optional[int] = None
    ) -> List[ConsentTimelineEntry]:
        entries = [
            ConsentTimelineEntry(id="timeline-001", consent_id="consent-001", timestamp=self._ago(3 * _DAY),
                                 event_type="created",
                                 description="Consent request received from Apollo Hospital",
                                 requested_by="Dr. Rajesh Kumar - Apollo Hospital"),
            ConsentTimelineEntry(id="timeline-002", consent_id="consent-001",
                                 timestamp=self._ago(3 * _DAY - timedelta(minutes=5)), event_type="approved",
                                 description="Consent approved by patient", expiry_date=self._ahead(30 * _DAY)),
            ConsentTimelineEntry(id="timeline-003", consent_id="consent-001", timestamp=self._ago(2 * _HOUR),
                                 event_type="used", description="Data accessed for consultation",
                                 used_by="Dr. Rajesh Kumar", records_accessed=3),
        ]
        if consent_id:
            entries = [entry for entry in entries if entry.consent_id == consent_id]
        if limit:
            entries = entries[:limit]
        return entries

    # ------------------------------------------------------------------
    # Reports
    # ------------------------------------------------------------------

    async def generate_audit_report(self, request: AuditReportRequest) -> AuditReport:
        await self._delay(1.5)
        report = AuditReport(
            id=self._new_id("report"),
            user_id=request.user_id,
            generated_at=self._iso_now(),
            date_range=request.date_range,
            summary=AuditReportSummary(total_logs=125, data_access_logs=48, consent_logs=35,
                                       abdm_logs=24, user_activity_logs=18),
            download_url=MOCK_REPORT_URL,
            expires_at=_iso(datetime.now(timezone.utc) + _DAY),
            format=request.format,
            size_bytes=2458624,
        )
        logger.info("[%s] Audit report %s generated for user %s", self.label, report.id, request.user_id)
        return report

    async def download_audit_report(self, report_id: str) -> bytes:
        return MOCK_REPORT_BYTES
