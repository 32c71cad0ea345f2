"""
Contracts for data export and portability: export jobs, FHIR bundles, health
report templates and generated reports, share links, export statistics and
export consents.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Literal, Optional

from pydantic import ConfigDict, Field

from .base import ApiModel

ExportFormat = Literal["fhir", "pdf", "csv", "json"]
RecordType = Literal[
    "medical_records",
    "prescriptions",
    "lab_results",
    "imaging",
    "appointments",
    "immunizations",
    "care_plans",
    "all",
]
ExportStatus = Literal["pending", "processing", "completed", "failed", "expired"]
ReportFormat = Literal["pdf", "json"]


class DateSpan(ApiModel):
    start_date: str
    end_date: str


class ExportRequest(ApiModel):
    format: ExportFormat
    record_types: List[RecordType]
    date_range: DateSpan
    include_attachments: Optional[bool] = None
    password: Optional[str] = None
    email: Optional[str] = None


class ExportRecord(ApiModel):
    id: str
    user_id: str
    format: ExportFormat
    record_types: List[RecordType]
    date_range: DateSpan
    status: ExportStatus
    file_size: Optional[int] = None  # bytes
    download_url: Optional[str] = None
    expires_at: Optional[str] = None
    created_at: str
    completed_at: Optional[str] = None
    error: Optional[str] = None


class DownloadLink(ApiModel):
    url: str
    expires_at: str


class FhirResource(ApiModel):
    # FHIR resources carry arbitrary extra members
    model_config = ConfigDict(extra="allow")

    resource_type: str
    id: str
    meta: Optional[Dict[str, Any]] = None


class FhirBundleEntry(ApiModel):
    resource: FhirResource
    full_url: Optional[str] = None


class FhirBundle(ApiModel):
    resource_type: Literal["Bundle"] = "Bundle"
    type: Literal["collection", "document"]
    entry: List[FhirBundleEntry] = Field(default_factory=list)
    total: int
    timestamp: str


class ReportSection(ApiModel):
    id: str
    title: str
    type: Literal["vitals", "medications", "lab_results", "trends", "summary", "custom"]
    data_points: List[str] = Field(default_factory=list)
    chart_type: Optional[Literal["line", "bar", "pie", "table"]] = None
    include_by_default: bool


class ReportTemplate(ApiModel):
    id: str
    name: str
    description: str
    category: Literal["diabetes", "cardiac", "annual", "maternal", "pediatric", "custom"]
    sections: List[ReportSection] = Field(default_factory=list)
    icon: str
    color: str


class ReportSectionRequest(ApiModel):
    section_id: str
    data_points: List[str] = Field(default_factory=list)
    date_range: Optional[DateSpan] = None


class CustomReportRequest(ApiModel):
    template_id: Optional[str] = None
    title: str
    sections: List[ReportSectionRequest] = Field(default_factory=list)
    format: ReportFormat
    include_charts: Optional[bool] = None
    include_summary: Optional[bool] = None


class ReportMetadata(ApiModel):
    total_pages: Optional[int] = None
    sections: int
    data_points: int
    date_range: DateSpan


class GeneratedReport(ApiModel):
    id: str
    user_id: str
    title: str
    template_id: Optional[str] = None
    format: ReportFormat
    file_size: int
    download_url: str
    expires_at: str
    created_at: str
    metadata: ReportMetadata


class ShareExportRequest(ApiModel):
    export_id: str
    recipient_email: Optional[str] = None
    recipient_phone: Optional[str] = None
    recipient_abha: Optional[str] = Field(default=None, alias="recipientABHA")
    expires_in: Optional[int] = None  # hours
    require_password: Optional[bool] = None
    message: Optional[str] = None


class ShareLink(ApiModel):
    id: str
    export_id: str
    url: str
    expires_at: str
    password: Optional[str] = None
    access_count: int = 0
    max_access_count: Optional[int] = None
    created_at: str


class ExportStatistics(ApiModel):
    total_exports: int
    exports_by_format: Dict[str, int] = Field(default_factory=dict)
    exports_by_type: Dict[str, int] = Field(default_factory=dict)
    total_size: int  # bytes
    last_export: Optional[str] = None
    most_used_template: Optional[str] = None


class ExportConsentRequest(ApiModel):
    user_id: str
    purpose: str
    recipient_name: Optional[str] = None
    recipient_id: Optional[str] = None
    data_types: List[RecordType] = Field(default_factory=list)
    date_range: DateSpan
    expires_at: str


class DataExportConsent(ExportConsentRequest):
    id: str
    granted_at: str
    status: Literal["active", "expired", "revoked"]
    revoked_at: Optional[str] = None


# ---------------------------------------------------------------------------
# Service interface
# ---------------------------------------------------------------------------

class DataExportService(ABC):

    # Export jobs
    @abstractmethod
    async def request_export(self, request: ExportRequest) -> ExportRecord:
        """Start an export; it is returned in ``processing`` state."""

    @abstractmethod
    async def get_export_history(self, limit: Optional[int] = None) -> List[ExportRecord]:
        ...

    @abstractmethod
    async def get_export_status(self, export_id: str) -> ExportRecord:
        ...

    @abstractmethod
    async def download_export(self, export_id: str) -> DownloadLink:
        ...

    @abstractmethod
    async def delete_export(self, export_id: str) -> None:
        ...

    @abstractmethod
    async def export_fhir(
        self, record_types: List[RecordType], date_range: Optional[DateSpan] = None
    ) -> FhirBundle:
        ...

    # Reports
    @abstractmethod
    async def get_report_templates(self, category: Optional[str] = None) -> List[ReportTemplate]:
        ...

    @abstractmethod
    async def generate_report(self, request: CustomReportRequest) -> GeneratedReport:
        ...

    # Sharing and statistics
    @abstractmethod
    async def share_export(self, request: ShareExportRequest) -> ShareLink:
        ...

    @abstractmethod
    async def get_export_statistics(self) -> ExportStatistics:
        ...

    # Consent
    @abstractmethod
    async def grant_consent(self, consent: ExportConsentRequest) -> DataExportConsent:
        ...

    @abstractmethod
    async def revoke_consent(self, consent_id: str) -> None:
        ...
