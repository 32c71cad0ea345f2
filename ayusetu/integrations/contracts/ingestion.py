"""
Contracts for record ingestion: ABDM auto-sync providers, manual uploads,
folders and smart search over processed documents.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, Field

from .base import ApiModel

RecordSource = Literal[
    "abdm_hospital",
    "abdm_lab",
    "abdm_pharmacy",
    "abdm_telemedicine",
    "abdm_insurance",
    "manual_upload",
    "camera_scan",
]
UploadFileType = Literal["pdf", "image", "dicom", "other"]
ProcessingStatus = Literal["pending", "processing", "completed", "failed"]
ProviderType = Literal["hospital", "lab", "pharmacy", "telemedicine", "insurance"]


class UploadFile(BaseModel):
    """A file picked on the device, ready to be sent as a multipart part."""

    name: str
    mime_type: str = "application/octet-stream"
    content: bytes = b""

    def as_part(self) -> Tuple[str, bytes, str]:
        return self.name, self.content, self.mime_type


class UploadMetadata(ApiModel):
    tags: Optional[List[str]] = None
    folder: Optional[str] = None
    notes: Optional[str] = None


class UploadedRecord(ApiModel):
    id: str
    file_name: str
    file_type: UploadFileType
    file_size: int
    uploaded_at: str
    source: RecordSource

    processing_status: ProcessingStatus
    ocr_text: Optional[str] = None
    summary: Optional[str] = None
    keywords: Optional[List[str]] = None

    tags: Optional[List[str]] = None
    notes: Optional[str] = None
    folder: Optional[str] = None

    health_record_id: Optional[str] = None


class RecordFolder(ApiModel):
    id: str
    name: str
    color: str
    record_count: int
    created_at: str


class AutoSyncStatus(ApiModel):
    provider_id: str
    provider_name: str
    provider_type: ProviderType
    is_enabled: bool
    last_sync_at: Optional[str] = None
    record_count: int


class ManualSyncResult(ApiModel):
    records_fetched: int


class DuplicateGroup(ApiModel):
    original: str
    duplicates: List[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Service interface
# ---------------------------------------------------------------------------

class RecordIngestionService(ABC):

    # Auto-fetch via the ABDM gateway
    @abstractmethod
    async def get_auto_sync_providers(self, abha_number: Optional[str] = None) -> List[AutoSyncStatus]:
        ...

    @abstractmethod
    async def enable_auto_sync(self, provider_id: str, enable: bool) -> bool:
        ...

    @abstractmethod
    async def trigger_manual_sync(self, provider_id: str) -> ManualSyncResult:
        ...

    # Manual upload
    @abstractmethod
    async def upload_file(self, file: UploadFile, metadata: Optional[UploadMetadata] = None) -> UploadedRecord:
        """Upload one file. New records start in ``pending`` processing status."""

    @abstractmethod
    async def bulk_upload(self, files: List[UploadFile]) -> List[UploadedRecord]:
        """Upload several files; results are returned in input order."""

    # Record management
    @abstractmethod
    async def get_uploaded_records(self, abha_number: Optional[str] = None) -> List[UploadedRecord]:
        ...

    @abstractmethod
    async def update_record_metadata(self, record_id: str, updates: Dict[str, Any]) -> bool:
        ...

    @abstractmethod
    async def delete_uploaded_record(self, record_id: str) -> bool:
        ...

    # Folders
    @abstractmethod
    async def get_folders(self, abha_number: Optional[str] = None) -> List[RecordFolder]:
        ...

    @abstractmethod
    async def create_folder(self, name: str, color: Optional[str] = None) -> RecordFolder:
        ...

    @abstractmethod
    async def delete_folder(self, folder_id: str) -> bool:
        """Delete a folder and unlink every record filed under it."""

    # Smart processing
    @abstractmethod
    async def search_records(self, query: str, abha_number: Optional[str] = None) -> List[UploadedRecord]:
        ...

    @abstractmethod
    async def detect_duplicates(self, abha_number: Optional[str] = None) -> List[DuplicateGroup]:
        ...

    @abstractmethod
    async def reprocess_record(self, record_id: str) -> bool:
        ...
