from typing import Any, Dict, List, Optional

from ayusetu.integrations.contracts.data_export import (
    CustomReportRequest,
    DataExportConsent,
    DataExportService,
    DateSpan,
    DownloadLink,
    ExportConsentRequest,
    ExportRecord,
    ExportRequest,
    ExportStatistics,
    FhirBundle,
    GeneratedReport,
    RecordType,
    ReportTemplate,
    ShareExportRequest,
    ShareLink,
)
from ayusetu.integrations.errors import build_model, build_model_list

from .base import RealHttpClientBase


class RealDataExportClient(RealHttpClientBase, DataExportService):
    prefix = "/data-export"

    async def request_export(self, request: ExportRequest) -> ExportRecord:
        msg = "Failed to request export"
        data = await self._call("POST", "/request", msg, json=request.to_wire())
        return build_model(ExportRecord, data, msg)

    async def get_export_history(self, limit: Optional[int] = None) -> List[ExportRecord]:
        msg = "Failed to fetch export history"
        data = await self._call("GET", "/history", msg, params={"limit": limit})
        return build_model_list(ExportRecord, data, msg)

    async def get_export_status(self, export_id: str) -> ExportRecord:
        msg = "Failed to fetch export status"
        data = await self._call("GET", f"/status/{export_id}", msg)
        return build_model(ExportRecord, data, msg)

    async def download_export(self, export_id: str) -> DownloadLink:
        msg = "Failed to download export"
        data = await self._call("GET", f"/download/{export_id}", msg)
        return build_model(DownloadLink, data, msg)

    async def delete_export(self, export_id: str) -> None:
        await self._call("DELETE", f"/{export_id}", "Failed to delete export")

    async def export_fhir(
        self, record_types: List[RecordType], date_range: Optional[DateSpan] = None
    ) -> FhirBundle:
        msg = "Failed to export FHIR bundle"
        body: Dict[str, Any] = {"recordTypes": list(record_types)}
        if date_range is not None:
            body["dateRange"] = date_range.to_wire()
        data = await self._call("POST", "/fhir", msg, json=body)
        return build_model(FhirBundle, data, msg)

    async def get_report_templates(self, category: Optional[str] = None) -> List[ReportTemplate]:
        msg = "Failed to fetch report templates"
        data = await self._call("GET", "/templates", msg, params={"category": category})
        return build_model_list(ReportTemplate, data, msg)

    async def generate_report(self, request: CustomReportRequest) -> GeneratedReport:
        msg = "Failed to generate report"
        data = await self._call("POST", "/reports/generate", msg, json=request.to_wire())
        return build_model(GeneratedReport, data, msg)

    async def share_export(self, request: ShareExportRequest) -> ShareLink:
        msg = "Failed to share export"
        data = await self._call("POST", "/share", msg, json=request.to_wire())
        return build_model(ShareLink, data, msg)

    async def get_export_statistics(self) -> ExportStatistics:
        msg = "Failed to fetch export statistics"
        data = await self._call("GET", "/statistics", msg)
        return build_model(ExportStatistics, data, msg)

    async def grant_consent(self, consent: ExportConsentRequest) -> DataExportConsent:
        msg = "Failed to grant export consent"
        data = await self._call("POST", "/consent", msg, json=consent.to_wire())
        return build_model(DataExportConsent, data, msg)

    async def revoke_consent(self, consent_id: str) -> None:
        await self._call("POST", f"/consent/{consent_id}/revoke", "Failed to revoke export consent")
