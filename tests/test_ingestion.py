import asyncio
import json
import random

import pytest

from ayusetu.integrations.clients.mocks import MockRecordIngestionClient
from ayusetu.integrations.clients.mocks.ingestion import DEFAULT_FOLDER_COLOR, infer_file_type
from ayusetu.integrations.contracts.ingestion import UploadFile, UploadMetadata
from ayusetu.integrations.errors import ServiceError


def _pdf(name="report.pdf"):
    return UploadFile(name=name, mime_type="application/pdf", content=b"%PDF-1.4 test")


@pytest.mark.parametrize(
    "name,mime,expected",
    [
        ("scan.PDF", "application/octet-stream", "pdf"),
        ("xray", "image/jpeg", "image"),
        ("chest.dcm", "application/octet-stream", "dicom"),
        ("notes.txt", "text/plain", "other"),
    ],
)
def test_infer_file_type(name, mime, expected):
    assert infer_file_type(UploadFile(name=name, mime_type=mime)) == expected


@pytest.mark.asyncio
async def test_upload_starts_pending_then_completes(config):
    client = MockRecordIngestionClient(config)

    record = await client.upload_file(_pdf(), UploadMetadata(tags=["lab"], folder="folder-001"))

    assert record.processing_status == "pending"
    assert record.file_size == len(b"%PDF-1.4 test")
    assert record.source == "manual_upload"
    records = await client.get_uploaded_records()
    assert records[0].id == record.id

    await asyncio.sleep(0.01)

    processed = (await client.get_uploaded_records())[0]
    assert processed.processing_status == "completed"
    assert processed.ocr_text
    assert processed.summary


@pytest.mark.asyncio
async def test_empty_upload_gets_a_generated_size(config):
    client = MockRecordIngestionClient(config, rng=random.Random(3))

    record = await client.upload_file(UploadFile(name="photo.png", mime_type="image/png"))

    assert 100000 <= record.file_size <= 599999
    assert record.file_type == "image"


@pytest.mark.asyncio
async def test_bulk_upload_matches_sequential_uploads(config):
    files = [_pdf("a.pdf"), UploadFile(name="b.jpg", mime_type="image/jpeg", content=b"jpg")]

    bulk = await MockRecordIngestionClient(config).bulk_upload(files)
    sequential_client = MockRecordIngestionClient(config)
    sequential = [await sequential_client.upload_file(f) for f in files]

    def shape(record):
        return record.file_name, record.file_type, record.file_size, record.processing_status

    assert [shape(r) for r in bulk] == [shape(r) for r in sequential]


@pytest.mark.asyncio
async def test_metadata_update_and_missing_record(config):
    client = MockRecordIngestionClient(config)

    assert await client.update_record_metadata("upload-001", {"notes": "fasting sample"}) is True
    assert (await client.get_uploaded_records())[0].notes == "fasting sample"

    with pytest.raises(ServiceError):
        await client.update_record_metadata("upload-404", {"notes": "x"})

    assert await client.delete_uploaded_record("upload-404") is True


@pytest.mark.asyncio
async def test_folders(config):
    client = MockRecordIngestionClient(config)

    folder = await client.create_folder("Imaging")
    assert folder.color == DEFAULT_FOLDER_COLOR
    assert (await client.get_folders())[0].id == folder.id

    await client.delete_folder("folder-001")
    assert "folder-001" not in {f.id for f in await client.get_folders()}
    assert (await client.get_uploaded_records())[0].folder is None


@pytest.mark.asyncio
async def test_search_matches_ocr_keywords_and_tags(config):
    client = MockRecordIngestionClient(config)

    by_ocr = await client.search_records("hemoglobin")
    by_tag = await client.search_records("ROUTINE")
    nothing = await client.search_records("mri")

    assert [r.id for r in by_ocr] == ["upload-001"]
    assert [r.id for r in by_tag] == ["upload-001"]
    assert nothing == []


@pytest.mark.asyncio
async def test_auto_sync_toggle_and_manual_sync(config):
    client = MockRecordIngestionClient(config, rng=random.Random(1))

    assert await client.enable_auto_sync("lab-thyrocare-001", False) is True
    result = await client.trigger_manual_sync("hfr-apollo-001")

    providers = {p.provider_id: p for p in await client.get_auto_sync_providers()}
    assert providers["lab-thyrocare-001"].is_enabled is False
    assert 1 <= result.records_fetched <= 5
    assert providers["hfr-apollo-001"].record_count == 12 + result.records_fetched


@pytest.mark.asyncio
async def test_reprocess(config):
    client = MockRecordIngestionClient(config)

    assert await client.reprocess_record("upload-001") is True
    assert (await client.get_uploaded_records())[0].processing_status == "processing"
    await asyncio.sleep(0.01)
    assert (await client.get_uploaded_records())[0].summary == "Updated AI summary..."

    with pytest.raises(ServiceError):
        await client.reprocess_record("upload-404")
    assert await client.detect_duplicates() == []


@pytest.mark.asyncio
async def test_live_upload_is_multipart_with_metadata(live_services, router):
    router.add(
        "POST",
        "/v1/ingestion/upload",
        {
            "id": "up-1",
            "fileName": "report.pdf",
            "fileType": "pdf",
            "fileSize": 13,
            "uploadedAt": "2026-01-15T00:00:00Z",
            "source": "manual_upload",
            "processingStatus": "pending",
        },
    )

    record = await live_services.ingestion.upload_file(_pdf(), UploadMetadata(tags=["lab"], notes="n"))

    assert record.id == "up-1"
    request = router.last("POST", "/v1/ingestion/upload")
    body = request.read()
    assert request.headers["content-type"].startswith("multipart/form-data")
    assert b'name="file"; filename="report.pdf"' in body
    assert json.dumps(["lab"]).encode() in body


@pytest.mark.asyncio
async def test_live_bulk_upload_indexes_parts(live_services, router):
    router.add("POST", "/v1/ingestion/bulk-upload", [])

    await live_services.ingestion.bulk_upload([_pdf("a.pdf"), _pdf("b.pdf")])

    body = router.last("POST", "/v1/ingestion/bulk-upload").read()
    assert b'name="files[0]"; filename="a.pdf"' in body
    assert b'name="files[1]"; filename="b.pdf"' in body
