"""
Mock Record Ingestion Client.

Uploads land in an in-memory list (newest first) in ``pending`` status and are
"processed" by a timer on the running event loop a few seconds later, the
way the document pipeline would fill in OCR text and a summary.
"""

import asyncio
import logging
import random
from typing import Any, Dict, List, Optional

from ayusetu.integrations.contracts.base import merge_model
from ayusetu.integrations.contracts.ingestion import (
    AutoSyncStatus,
    DuplicateGroup,
    ManualSyncResult,
    RecordFolder,
    RecordIngestionService,
    UploadedRecord,
    UploadFile,
    UploadFileType,
    UploadMetadata,
)
from ayusetu.integrations.errors import ServiceError

from .base import MockClientBase

logger = logging.getLogger(__name__)

DEFAULT_FOLDER_COLOR = "#9E9E9E"
PROCESSING_SECONDS = 3.0
REPROCESSING_SECONDS = 2.0


def infer_file_type(file: UploadFile) -> UploadFileType:
    mime = file.mime_type.lower()
    name = file.name.lower()
    if "pdf" in mime or name.endswith(".pdf"):
        return "pdf"
    if "image" in mime or name.endswith((".jpg", ".jpeg", ".png", ".heic")):
        return "image"
    if "dicom" in mime or name.endswith((".dcm", ".dicom")):
        return "dicom"
    return "other"


def _seed_records() -> List[UploadedRecord]:
    return [
        UploadedRecord(
            id="upload-001",
            file_name="lab_report_CBC_2026.pdf",
            file_type="pdf",
            file_size=245678,
            uploaded_at="2026-01-12T10:30:00Z",
            source="manual_upload",
            processing_status="completed",
            ocr_text="Complete Blood Count (CBC)\nHemoglobin: 14.2 g/dL\nWBC: 7500/µL\nPlatelets: 250,000/µL",
            summary="CBC report showing normal hemoglobin, WBC, and platelet counts.",
            keywords=["CBC", "hemoglobin", "blood test", "normal"],
            tags=["lab", "routine"],
            folder="folder-001",
        )
    ]


def _seed_folders() -> List[RecordFolder]:
    return [
        RecordFolder(id="folder-001", name="Lab Reports", color="#4CAF50", record_count=5,
                     created_at="2026-01-01T00:00:00Z"),
        RecordFolder(id="folder-002", name="Prescriptions", color="#2196F3", record_count=3,
                     created_at="2026-01-01T00:00:00Z"),
    ]


def _seed_providers() -> List[AutoSyncStatus]:
    return [
        AutoSyncStatus(provider_id="hfr-apollo-001", provider_name="Apollo Hospital", provider_type="hospital",
                       is_enabled=True, last_sync_at="2026-01-12T08:00:00Z", record_count=12),
        AutoSyncStatus(provider_id="lab-thyrocare-001", provider_name="Thyrocare Labs", provider_type="lab",
                       is_enabled=True, last_sync_at="2026-01-10T14:00:00Z", record_count=5),
    ]


class MockRecordIngestionClient(MockClientBase, RecordIngestionService):
    label = "INGESTION MOCK"

    def __init__(self, config=None, rng: Optional[random.Random] = None) -> None:
        super().__init__(config)
        self._rng = rng or random.Random()
        # In-memory stores (reset on restart)
        self._records: List[UploadedRecord] = _seed_records()
        self._folders: List[RecordFolder] = _seed_folders()
        self._providers: List[AutoSyncStatus] = _seed_providers()

    def _find_record(self, record_id: str) -> Optional[UploadedRecord]:
        return next((r for r in self._records if r.id == record_id), None)

    def _schedule(self, seconds: float, callback, *args: Any) -> None:
        loop = asyncio.get_running_loop()
        loop.call_later(seconds * self.config.mock_delay_scale, callback, *args)

    # ------------------------------------------------------------------
    # Auto-fetch
    # ------------------------------------------------------------------

    async def get_auto_sync_providers(self, abha_number: Optional[str] = None) -> List[AutoSyncStatus]:
        await self._delay()
        return self._copy(self._providers)

    async def enable_auto_sync(self, provider_id: str, enable: bool) -> bool:
        await self._delay(0.6)
        for provider in self._providers:
            if provider.provider_id == provider_id:
                provider.is_enabled = enable
        logger.info("[%s] Auto-sync %s for %s", self.label, "enabled" if enable else "disabled", provider_id)
        return True

    async def trigger_manual_sync(self, provider_id: str) -> ManualSyncResult:
        await self._delay(2.0)
        count = self._rng.randint(1, 5)
        for provider in self._providers:
            if provider.provider_id == provider_id:
                provider.last_sync_at = self._iso_now()
                provider.record_count += count
        logger.info("[%s] Manual sync for %s fetched %s records", self.label, provider_id, count)
        return ManualSyncResult(records_fetched=count)

    # ------------------------------------------------------------------
    # Manual upload
    # ------------------------------------------------------------------

    async def upload_file(self, file: UploadFile, metadata: Optional[UploadMetadata] = None) -> UploadedRecord:
        await self._delay(1.5)
        metadata = metadata or UploadMetadata()
        record = UploadedRecord(
            id=self._new_id("upload"),
            file_name=file.name,
            file_type=infer_file_type(file),
            file_size=len(file.content) or self._rng.randint(100000, 599999),
            uploaded_at=self._iso_now(),
            source="manual_upload",
            processing_status="pending",
            tags=metadata.tags,
            folder=metadata.folder,
            notes=metadata.notes,
        )
        self._records.insert(0, record)
        self._schedule(PROCESSING_SECONDS, self._finish_processing, record.id)
        logger.info("[%s] Uploaded %s as %s", self.label, file.name, record.id)
        return self._copy(record)

    def _finish_processing(self, record_id: str) -> None:
        record = self._find_record(record_id)
        if record is None:
            return
        record.processing_status = "completed"
        record.ocr_text = "Sample OCR extracted text..."
        record.summary = "AI-generated summary of the document."
        record.keywords = ["health", "report", "test"]

    async def bulk_upload(self, files: List[UploadFile]) -> List[UploadedRecord]:
        await self._delay(2.0)
        results = []
        for file in files:
            results.append(await self.upload_file(file))
        return results

    # ------------------------------------------------------------------
    # Record management
    # ------------------------------------------------------------------

    async def get_uploaded_records(self, abha_number: Optional[str] = None) -> List[UploadedRecord]:
        await self._delay()
        return self._copy(self._records)

    async def update_record_metadata(self, record_id: str, updates: Dict[str, Any]) -> bool:
        await self._delay(0.5)
        for idx, record in enumerate(self._records):
            if record.id == record_id:
                self._records[idx] = merge_model(record, updates, "Failed to update record")
                return True
        raise ServiceError("Record not found")

    async def delete_uploaded_record(self, record_id: str) -> bool:
        await self._delay(0.5)
        self._records = [r for r in self._records if r.id != record_id]
        return True

    # ------------------------------------------------------------------
    # Folders
    # ------------------------------------------------------------------

    async def get_folders(self, abha_number: Optional[str] = None) -> List[RecordFolder]:
        await self._delay()
        return self._copy(self._folders)

    async def create_folder(self, name: str, color: Optional[str] = None) -> RecordFolder:
        await self._delay(0.5)
        folder = RecordFolder(
            id=self._new_id("folder"),
            name=name,
            color=color or DEFAULT_FOLDER_COLOR,
            record_count=0,
            created_at=self._iso_now(),
        )
        self._folders.insert(0, folder)
        return self._copy(folder)

    async def delete_folder(self, folder_id: str) -> bool:
        await self._delay(0.5)
        self._folders = [f for f in self._folders if f.id != folder_id]
        for record in self._records:
            if record.folder == folder_id:
                record.folder = None
        return True

    # ------------------------------------------------------------------
    # Smart processing
    # ------------------------------------------------------------------

    async def search_records(self, query: str, abha_number: Optional[str] = None) -> List[UploadedRecord]:
        await self._delay(0.8)
        needle = query.lower()

        def matches(record: UploadedRecord) -> bool:
            texts = [record.file_name, record.ocr_text or "", record.summary or ""]
            texts += record.keywords or []
            texts += record.tags or []
            return any(needle in text.lower() for text in texts)

        return self._copy([r for r in self._records if matches(r)])

    async def detect_duplicates(self, abha_number: Optional[str] = None) -> List[DuplicateGroup]:
        await self._delay(1.2)
        # TODO: group by content hash once uploads keep their bytes
        return []

    async def reprocess_record(self, record_id: str) -> bool:
        await self._delay(1.5)
        record = self._find_record(record_id)
        if record is None:
            raise ServiceError("Record not found")
        record.processing_status = "processing"
        self._schedule(REPROCESSING_SECONDS, self._finish_reprocessing, record_id)
        return True

    def _finish_reprocessing(self, record_id: str) -> None:
        record = self._find_record(record_id)
        if record is None:
            return
        record.processing_status = "completed"
        record.ocr_text = "Reprocessed OCR text..."
        record.summary = "Updated AI summary..."
