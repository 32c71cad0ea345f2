"""
Mock Data Export Client.

Export jobs are kept in memory. A requested export starts out ``processing``
and is completed lazily the first time its status is read after the
processing window (scaled by ``mock_delay_scale``) has elapsed.
"""

import logging
import random
import time
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

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
    ReportMetadata,
    ReportSection,
    ReportTemplate,
    ShareExportRequest,
    ShareLink,
)

from .base import MockClientBase

logger = logging.getLogger(__name__)

MOCK_USER_ID = "user-001"
STORAGE_URL = "https://storage.example.com"
EXPORT_PROCESSING_SECONDS = 3.0
EXPORT_VALIDITY = timedelta(days=7)
REPORT_VALIDITY = timedelta(days=30)
DOWNLOAD_LINK_VALIDITY = timedelta(hours=1)
DEFAULT_SHARE_HOURS = 24
SHARE_PASSWORD = "ABC123"
DEFAULT_REPORT_RANGE = DateSpan(start_date="2025-01-01", end_date="2026-01-15")

_MOCK_TEMPLATES: List[ReportTemplate] = [
    ReportTemplate(
        id="template-diabetes", name="Diabetes Management Report",
        description="Comprehensive diabetes tracking with glucose trends and HbA1c",
        category="diabetes", icon="🩺", color="#e91e63",
        sections=[
            ReportSection(id="sec-glucose", title="Blood Glucose Trends", type="trends",
                          data_points=["fasting_glucose", "pp_glucose", "random_glucose"], chart_type="line",
                          include_by_default=True),
            ReportSection(id="sec-hba1c", title="HbA1c Levels", type="lab_results", data_points=["hba1c"],
                          chart_type="line", include_by_default=True),
            ReportSection(id="sec-medications", title="Current Medications", type="medications",
                          data_points=["diabetes_medications"], include_by_default=True),
        ],
    ),
    ReportTemplate(
        id="template-cardiac", name="Cardiac Health Report",
        description="Heart health monitoring with BP, cholesterol, and ECG results",
        category="cardiac", icon="❤️", color="#f44336",
        sections=[
            ReportSection(id="sec-bp", title="Blood Pressure Trends", type="vitals",
                          data_points=["systolic_bp", "diastolic_bp"], chart_type="line", include_by_default=True),
            ReportSection(id="sec-lipid", title="Lipid Profile", type="lab_results",
                          data_points=["total_cholesterol", "ldl", "hdl", "triglycerides"], chart_type="bar",
                          include_by_default=True),
            ReportSection(id="sec-ecg", title="ECG Results", type="lab_results", data_points=["ecg"],
                          include_by_default=False),
        ],
    ),
    ReportTemplate(
        id="template-annual", name="Annual Health Summary", description="Complete health overview for the year",
        category="annual", icon="📊", color="#2196f3",
        sections=[
            ReportSection(id="sec-vitals-annual", title="Vital Statistics", type="vitals",
                          data_points=["weight", "bmi", "bp", "heart_rate"], chart_type="line",
                          include_by_default=True),
            ReportSection(id="sec-labs-annual", title="Lab Test Summary", type="lab_results",
                          data_points=["all_labs"], chart_type="table", include_by_default=True),
            ReportSection(id="sec-appointments", title="Medical Consultations", type="summary",
                          data_points=["appointments", "diagnoses"], include_by_default=True),
        ],
    ),
]

_LOINC = "http://loinc.org"


def _bp_component(code: str, display: str, value: int) -> dict:
    return {
        "code": {"coding": [{"system": _LOINC, "code": code, "display": display}]},
        "valueQuantity": {"value": value, "unit": "mmHg"},
    }


_MOCK_FHIR_ENTRIES = [
    {
        "resource": {
            "resourceType": "Patient",
            "id": "patient-001",
            "meta": {"lastUpdated": "2026-01-15T00:00:00Z"},
            "identifier": [{"system": "https://healthid.ndhm.gov.in", "value": "91-1234-5678-9012"}],
            "name": [{"text": "Rajesh Kumar", "family": "Kumar", "given": ["Rajesh"]}],
            "gender": "male",
            "birthDate": "1984-05-15",
        },
        "fullUrl": "urn:uuid:patient-001",
    },
    {
        "resource": {
            "resourceType": "Observation",
            "id": "obs-001",
            "meta": {"lastUpdated": "2026-01-10T00:00:00Z"},
            "status": "final",
            "category": [
                {
                    "coding": [
                        {
                            "system": "http://terminology.hl7.org/CodeSystem/observation-category",
                            "code": "vital-signs",
                        }
                    ]
                }
            ],
            "code": {"coding": [{"system": _LOINC, "code": "85354-9", "display": "Blood pressure"}]},
            "subject": {"reference": "Patient/patient-001"},
            "effectiveDateTime": "2026-01-10T09:30:00Z",
            "component": [
                _bp_component("8480-6", "Systolic blood pressure", 120),
                _bp_component("8462-4", "Diastolic blood pressure", 80),
            ],
        },
        "fullUrl": "urn:uuid:obs-001",
    },
]


def _iso(moment: datetime) -> str:
    return moment.isoformat().replace("+00:00", "Z")


class MockDataExportClient(MockClientBase, DataExportService):
    label = "DATA EXPORT MOCK"

    def __init__(self, config=None, rng: Optional[random.Random] = None) -> None:
        super().__init__(config)
        self._rng = rng or random.Random()
        # In-memory stores (reset on restart)
        self._exports: List[ExportRecord] = [
            ExportRecord(id="exp-001", user_id=MOCK_USER_ID, format="pdf",
                         record_types=["medical_records", "lab_results"],
                         date_range=DateSpan(start_date="2025-01-01", end_date="2026-01-15"), status="completed",
                         file_size=2457600, download_url=f"{STORAGE_URL}/exports/exp-001.pdf",
                         expires_at="2026-01-22T00:00:00Z", created_at="2026-01-15T10:30:00Z",
                         completed_at="2026-01-15T10:31:45Z"),
            ExportRecord(id="exp-002", user_id=MOCK_USER_ID, format="fhir", record_types=["all"],
                         date_range=DateSpan(start_date="2024-01-01", end_date="2025-12-31"), status="completed",
                         file_size=5242880, download_url=f"{STORAGE_URL}/exports/exp-002.json",
                         expires_at="2026-01-20T00:00:00Z", created_at="2026-01-13T14:20:00Z",
                         completed_at="2026-01-13T14:23:15Z"),
            ExportRecord(id="exp-003", user_id=MOCK_USER_ID, format="csv", record_types=["lab_results"],
                         date_range=DateSpan(start_date="2025-06-01", end_date="2025-12-31"), status="expired",
                         file_size=102400, expires_at="2026-01-10T00:00:00Z", created_at="2026-01-03T09:15:00Z",
                         completed_at="2026-01-03T09:15:30Z"),
        ]
        # export id -> monotonic time at which processing finishes
        self._ready_at: Dict[str, float] = {}
        self._consents: Dict[str, DataExportConsent] = {}

    def _find_export(self, export_id: str) -> Optional[ExportRecord]:
        return next((e for e in self._exports if e.id == export_id), None)

    def _settle(self, record: ExportRecord) -> None:
        ready_at = self._ready_at.get(record.id)
        if ready_at is None or time.monotonic() < ready_at:
            return
        del self._ready_at[record.id]
        now = datetime.now(timezone.utc)
        record.status = "completed"
        record.completed_at = _iso(now)
        record.file_size = self._rng.randint(1_000_000, 5_999_999)
        record.download_url = f"{STORAGE_URL}/exports/{record.id}.{record.format}"
        record.expires_at = _iso(now + EXPORT_VALIDITY)
        logger.info("[%s] Export %s completed (%s bytes)", self.label, record.id, record.file_size)

    # ------------------------------------------------------------------
    # Export jobs
    # ------------------------------------------------------------------

    async def request_export(self, request: ExportRequest) -> ExportRecord:
        await self._delay(1.5)
        record = ExportRecord(
            id=self._new_id("exp"),
            user_id=MOCK_USER_ID,
            format=request.format,
            record_types=list(request.record_types),
            date_range=request.date_range,
            status="processing",
            created_at=self._iso_now(),
        )
        self._exports.insert(0, record)
        self._ready_at[record.id] = time.monotonic() + EXPORT_PROCESSING_SECONDS * self.config.mock_delay_scale
        logger.info("[%s] Export %s queued (%s)", self.label, record.id, request.format)
        return self._copy(record)

    async def get_export_history(self, limit: Optional[int] = None) -> List[ExportRecord]:
        await self._delay(0.5)
        for record in self._exports:
            self._settle(record)
        records = self._exports[:limit] if limit else self._exports
        return self._copy(records)

    async def get_export_status(self, export_id: str) -> ExportRecord:
        await self._delay(0.3)
        record = self._find_export(export_id)
        if record is None:
            return ExportRecord(
                id=export_id,
                user_id=MOCK_USER_ID,
                format="pdf",
                record_types=["all"],
                date_range=DEFAULT_REPORT_RANGE,
                status="processing",
                created_at=self._iso_now(),
            )
        self._settle(record)
        return self._copy(record)

    async def download_export(self, export_id: str) -> DownloadLink:
        await self._delay(0.5)
        record = self._find_export(export_id)
        if record is not None:
            self._settle(record)
        return DownloadLink(
            url=(record and record.download_url) or f"{STORAGE_URL}/exports/{export_id}.pdf",
            expires_at=(record and record.expires_at) or _iso(datetime.now(timezone.utc) + DOWNLOAD_LINK_VALIDITY),
        )

    async def delete_export(self, export_id: str) -> None:
        await self._delay(0.5)
        self._exports = [e for e in self._exports if e.id != export_id]
        self._ready_at.pop(export_id, None)

    async def export_fhir(
        self, record_types: List[RecordType], date_range: Optional[DateSpan] = None
    ) -> FhirBundle:
        await self._delay(2.0)
        return FhirBundle.model_validate(
            {
                "resourceType": "Bundle",
                "type": "collection",
                "total": 3,
                "timestamp": self._iso_now(),
                "entry": self._copy(_MOCK_FHIR_ENTRIES),
            }
        )

    # ------------------------------------------------------------------
    # Reports
    # ------------------------------------------------------------------

    async def get_report_templates(self, category: Optional[str] = None) -> List[ReportTemplate]:
        await self._delay(0.5)
        if category:
            return self._copy([t for t in _MOCK_TEMPLATES if t.category == category])
        return self._copy(_MOCK_TEMPLATES)

    async def generate_report(self, request: CustomReportRequest) -> GeneratedReport:
        await self._delay(2.5)
        now = datetime.now(timezone.utc)
        report_id = self._new_id("report")
        first_range = request.sections[0].date_range if request.sections else None
        return GeneratedReport(
            id=report_id,
            user_id=MOCK_USER_ID,
            title=request.title,
            template_id=request.template_id,
            format=request.format,
            file_size=self._rng.randint(500_000, 3_499_999),
            download_url=f"{STORAGE_URL}/reports/{report_id}.{request.format}",
            expires_at=_iso(now + REPORT_VALIDITY),
            created_at=_iso(now),
            metadata=ReportMetadata(
                total_pages=self._rng.randint(5, 14) if request.format == "pdf" else None,
                sections=len(request.sections),
                data_points=sum(len(s.data_points) for s in request.sections),
                date_range=first_range or DEFAULT_REPORT_RANGE,
            ),
        )

    # ------------------------------------------------------------------
    # Sharing and statistics
    # ------------------------------------------------------------------

    async def share_export(self, request: ShareExportRequest) -> ShareLink:
        await self._delay(1.0)
        now = datetime.now(timezone.utc)
        hours = request.expires_in or DEFAULT_SHARE_HOURS
        return ShareLink(
            id=self._new_id("share"),
            export_id=request.export_id,
            url=f"https://ayusetu.app/shared/{self._now_ms()}",
            expires_at=_iso(now + timedelta(hours=hours)),
            password=SHARE_PASSWORD if request.require_password else None,
            access_count=0,
            max_access_count=1 if request.recipient_email else None,
            created_at=_iso(now),
        )

    async def get_export_statistics(self) -> ExportStatistics:
        await self._delay(0.5)
        return ExportStatistics(
            total_exports=15,
            exports_by_format={"fhir": 3, "pdf": 8, "csv": 2, "json": 2},
            exports_by_type={
                "medical_records": 5,
                "prescriptions": 3,
                "lab_results": 4,
                "imaging": 1,
                "appointments": 2,
                "immunizations": 1,
                "care_plans": 1,
                "all": 8,
            },
            total_size=45678901,
            last_export=self._exports[0].created_at if self._exports else None,
            most_used_template="template-diabetes",
        )

    # ------------------------------------------------------------------
    # Consent
    # ------------------------------------------------------------------

    async def grant_consent(self, consent: ExportConsentRequest) -> DataExportConsent:
        await self._delay(0.5)
        granted = DataExportConsent(
            **consent.model_dump(),
            id=self._new_id("consent"),
            granted_at=self._iso_now(),
            status="active",
        )
        self._consents[granted.id] = granted
        return self._copy(granted)

    async def revoke_consent(self, consent_id: str) -> None:
        await self._delay(0.5)
        consent = self._consents.get(consent_id)
        if consent is not None:
            consent.status = "revoked"
            consent.revoked_at = self._iso_now()
        logger.info("[%s] Export consent %s revoked", self.label, consent_id)
