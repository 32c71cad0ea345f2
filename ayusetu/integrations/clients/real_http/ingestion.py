import json
from typing import Any, Dict, List, Optional

from ayusetu.integrations.contracts.base import wire_updates
from ayusetu.integrations.contracts.ingestion import (
    AutoSyncStatus,
    DuplicateGroup,
    ManualSyncResult,
    RecordFolder,
    RecordIngestionService,
    UploadedRecord,
    UploadFile,
    UploadMetadata,
)
from ayusetu.integrations.errors import build_model, build_model_list

from .base import RealHttpClientBase


class RealRecordIngestionClient(RealHttpClientBase, RecordIngestionService):
    prefix = "/v1/ingestion"

    async def get_auto_sync_providers(self, abha_number: Optional[str] = None) -> List[AutoSyncStatus]:
        msg = "Failed to fetch auto-sync providers"
        data = await self._call("GET", "/auto-sync/providers", msg, params={"abhaNumber": abha_number})
        return build_model_list(AutoSyncStatus, data, msg)

    async def enable_auto_sync(self, provider_id: str, enable: bool) -> bool:
        await self._call(
            "POST",
            "/auto-sync/toggle",
            "Failed to toggle auto-sync",
            json={"providerId": provider_id, "enable": enable},
        )
        return True

    async def trigger_manual_sync(self, provider_id: str) -> ManualSyncResult:
        msg = "Failed to trigger sync"
        data = await self._call("POST", "/auto-sync/trigger", msg, json={"providerId": provider_id})
        return build_model(ManualSyncResult, data, msg)

    async def upload_file(self, file: UploadFile, metadata: Optional[UploadMetadata] = None) -> UploadedRecord:
        msg = "Failed to upload file"
        form: Dict[str, str] = {}
        if metadata is not None:
            if metadata.tags:
                form["tags"] = json.dumps(metadata.tags)
            if metadata.folder:
                form["folder"] = metadata.folder
            if metadata.notes:
                form["notes"] = metadata.notes
        data = await self._call("POST", "/upload", msg, data=form, files={"file": file.as_part()})
        return build_model(UploadedRecord, data, msg)

    async def bulk_upload(self, files: List[UploadFile]) -> List[UploadedRecord]:
        msg = "Failed to upload files"
        parts = [(f"files[{idx}]", file.as_part()) for idx, file in enumerate(files)]
        data = await self._call("POST", "/bulk-upload", msg, files=parts)
        return build_model_list(UploadedRecord, data, msg)

    async def get_uploaded_records(self, abha_number: Optional[str] = None) -> List[UploadedRecord]:
        msg = "Failed to fetch uploaded records"
        data = await self._call("GET", "/uploads", msg, params={"abhaNumber": abha_number})
        return build_model_list(UploadedRecord, data, msg)

    async def update_record_metadata(self, record_id: str, updates: Dict[str, Any]) -> bool:
        await self._call(
            "PATCH",
            f"/uploads/{record_id}",
            "Failed to update record",
            json=wire_updates(UploadedRecord, updates),
        )
        return True

    async def delete_uploaded_record(self, record_id: str) -> bool:
        await self._call("DELETE", f"/uploads/{record_id}", "Failed to delete record")
        return True

    async def get_folders(self, abha_number: Optional[str] = None) -> List[RecordFolder]:
        msg = "Failed to fetch folders"
        data = await self._call("GET", "/folders", msg, params={"abhaNumber": abha_number})
        return build_model_list(RecordFolder, data, msg)

    async def create_folder(self, name: str, color: Optional[str] = None) -> RecordFolder:
        msg = "Failed to create folder"
        body = {"name": name}
        if color:
            body["color"] = color
        data = await self._call("POST", "/folders", msg, json=body)
        return build_model(RecordFolder, data, msg)

    async def delete_folder(self, folder_id: str) -> bool:
        await self._call("DELETE", f"/folders/{folder_id}", "Failed to delete folder")
        return True

    async def search_records(self, query: str, abha_number: Optional[str] = None) -> List[UploadedRecord]:
        msg = "Failed to search records"
        data = await self._call("GET", "/search", msg, params={"query": query, "abhaNumber": abha_number})
        return build_model_list(UploadedRecord, data, msg)

    async def detect_duplicates(self, abha_number: Optional[str] = None) -> List[DuplicateGroup]:
        msg = "Failed to detect duplicates"
        data = await self._call("GET", "/duplicates", msg, params={"abhaNumber": abha_number})
        return build_model_list(DuplicateGroup, data, msg)

    async def reprocess_record(self, record_id: str) -> bool:
        await self._call("POST", f"/uploads/{record_id}/reprocess", "Failed to reprocess record")
        return True
