"""
Contracts for compliance and audit transparency: data-access logs, consent
audit trail, ABDM gateway interactions, user activity and audit reports.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field

from .base import ApiModel

AuditAction = Literal[
    "view",
    "download",
    "share",
    "consent-granted",
    "consent-revoked",
    "record-uploaded",
    "record-deleted",
    "profile-updated",
    "emergency-access",
    "export",
]
AccessSource = Literal["patient", "hip", "hiu", "doctor", "hospital", "lab", "pharmacy", "emergency"]
DataCategory = Literal[
    "prescription",
    "diagnostic-report",
    "discharge-summary",
    "op-consultation",
    "immunization",
    "wellness-record",
    "health-document",
]
ReportFormat = Literal["pdf", "csv", "json"]


class DateRange(ApiModel):
    from_: str = Field(alias="from")
    to: str


# ---------------------------------------------------------------------------
# Log entries
# ---------------------------------------------------------------------------

class AccessActor(ApiModel):
    type: AccessSource
    id: str
    name: str
    facility_id: Optional[str] = None
    facility_name: Optional[str] = None


class DataAccessLog(ApiModel):
    id: str
    timestamp: str
    action: AuditAction
    data_category: DataCategory
    record_id: Optional[str] = None
    record_title: Optional[str] = None
    accessed_by: AccessActor
    purpose: Optional[str] = None
    consent_id: Optional[str] = None
    ip_address: Optional[str] = None
    location: Optional[str] = None
    device_info: Optional[str] = None
    duration: Optional[int] = None  # seconds
    success: bool
    failure_reason: Optional[str] = None


class ConsentAuditLog(ApiModel):
    id: str
    consent_id: str
    timestamp: str
    action: Literal["created", "granted", "denied", "revoked", "expired", "used", "modified"]
    requested_by: AccessActor
    purpose: str
    data_types: List[DataCategory] = Field(default_factory=list)
    date_range: Optional[DateRange] = None
    expiry_date: Optional[str] = None
    hiu_id: Optional[str] = None
    hip_id: Optional[str] = None
    details: Optional[str] = None
    user_action: Optional[Literal["approved", "rejected", "auto-expired", "manual-revoke"]] = None


class AbdmGatewayLog(ApiModel):
    id: str
    timestamp: str
    transaction_id: str
    request_type: Literal["consent-request", "data-transfer", "link-records", "discovery", "authentication"]
    direction: Literal["inbound", "outbound"]
    gateway_id: str
    hip_id: Optional[str] = None
    hiu_id: Optional[str] = None
    status: Literal["success", "failed", "pending"]
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    response_time: Optional[int] = None  # ms
    metadata: Optional[Dict[str, Any]] = None


class UserActivityLog(ApiModel):
    id: str
    user_id: str
    timestamp: str
    action: AuditAction
    category: Literal["record", "consent", "profile", "security", "export"]
    description: str
    records_affected: Optional[int] = None
    metadata: Optional[Dict[str, Any]] = None
    device_info: Optional[str] = None
    location: Optional[str] = None


class AuditLogQuery(ApiModel):
    """Filters shared by the log endpoints. Each endpoint reads the fields it supports."""

    user_id: str
    date_range: Optional[DateRange] = None
    source: Optional[AccessSource] = None
    category: Optional[str] = None
    consent_id: Optional[str] = None
    action: Optional[str] = None
    request_type: Optional[str] = None
    status: Optional[str] = None
    limit: Optional[int] = Field(default=None, ge=1)
    offset: Optional[int] = Field(default=None, ge=0)

    def to_params(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {}
        if self.date_range:
            params["from"] = self.date_range.from_
            params["to"] = self.date_range.to
        for name in ("source", "category", "consent_id", "action", "request_type", "status", "limit", "offset"):
            value = getattr(self, name)
            if value:
                params[type(self).model_fields[name].alias or name] = value
        return params

    def page(self, items: list) -> list:
        start = self.offset or 0
        end = start + self.limit if self.limit else None
        return items[start:end]


# ---------------------------------------------------------------------------
# Dashboard / analysis
# ---------------------------------------------------------------------------

class DailyActivity(ApiModel):
    date: str
    access_count: int
    consent_actions: int


class ComplianceDashboard(ApiModel):
    user_id: str
    generated_at: str

    total_consents: int
    active_consents: int
    revoked_consents: int
    expired_consents: int

    total_data_accesses: int
    accesses_by_source: Dict[str, int] = Field(default_factory=dict)
    accesses_by_category: Dict[str, int] = Field(default_factory=dict)
    accesses_last30_days: int = Field(alias="accessesLast30Days")

    linked_facilities: int
    total_data_transfers: int
    failed_transfers: int

    records_shared: int
    records_viewed: int
    downloads_count: int
    emergency_accesses: int

    compliance_score: int = Field(ge=0, le=100)
    compliance_level: Literal["excellent", "good", "needs-attention"]
    recommendations: List[str] = Field(default_factory=list)

    recent_activity: List[DailyActivity] = Field(default_factory=list)


class AccessPattern(ApiModel):
    source: AccessSource
    source_name: str
    total_accesses: int
    first_access: str
    last_access: str
    most_accessed_category: DataCategory
    average_access_duration: Optional[int] = None
    consent_based: bool
    emergency_accesses: int


class ConsentTimelineEntry(ApiModel):
    id: str
    consent_id: str
    timestamp: str
    event_type: Literal["created", "approved", "used", "revoked", "expired"]
    description: str
    requested_by: Optional[str] = None
    used_by: Optional[str] = None
    records_accessed: Optional[int] = None
    expiry_date: Optional[str] = None


# ---------------------------------------------------------------------------
# Audit reports
# ---------------------------------------------------------------------------

class AuditReportRequest(ApiModel):
    user_id: str
    date_range: DateRange
    include_data_access: bool = True
    include_consents: bool = True
    include_abdm_transactions: bool = Field(default=True, alias="includeABDMTransactions")
    include_user_activity: bool = True
    format: ReportFormat = "pdf"


class AuditReportSummary(ApiModel):
    total_logs: int
    data_access_logs: int
    consent_logs: int
    abdm_logs: int
    user_activity_logs: int


class AuditReport(ApiModel):
    id: str
    user_id: str
    generated_at: str
    date_range: DateRange
    summary: AuditReportSummary
    download_url: str
    expires_at: str
    format: ReportFormat
    size_bytes: int


# ---------------------------------------------------------------------------
# Service interface
# ---------------------------------------------------------------------------

class ComplianceService(ABC):

    @abstractmethod
    async def get_data_access_logs(self, query: AuditLogQuery) -> List[DataAccessLog]:
        """Who accessed which record, when and under which consent."""

    @abstractmethod
    async def get_consent_audit_logs(self, query: AuditLogQuery) -> List[ConsentAuditLog]:
        ...

    @abstractmethod
    async def get_abdm_gateway_logs(self, query: AuditLogQuery) -> List[AbdmGatewayLog]:
        ...

    @abstractmethod
    async def get_user_activity_logs(self, query: AuditLogQuery) -> List[UserActivityLog]:
        ...

    @abstractmethod
    async def get_compliance_dashboard(self, user_id: str) -> ComplianceDashboard:
        ...

    @abstractmethod
    async def get_access_patterns(self, user_id: str, date_range: Optional[DateRange] = None) -> List[AccessPattern]:
        ...

    @abstractmethod
    async def get_consent_timeline(
        self, user_id: str, consent_id: Optional[str] = None, limit: Optional[int] = None
    ) -> List[ConsentTimelineEntry]:
        ...

    @abstractmethod
    async def generate_audit_report(self, request: AuditReportRequest) -> AuditReport:
        ...

    @abstractmethod
    async def download_audit_report(self, report_id: str) -> bytes:
        """Raw report file contents."""
