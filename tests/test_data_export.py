import json
import random

import pytest

from ayusetu.integrations.clients.mocks import MockDataExportClient
from ayusetu.integrations.contracts.data_export import (
    CustomReportRequest,
    DateSpan,
    ExportConsentRequest,
    ExportRequest,
    ReportSectionRequest,
    ShareExportRequest,
)
from ayusetu.integrations.errors import ServiceError

YEAR_2025 = DateSpan(start_date="2025-01-01", end_date="2025-12-31")


def export_request(fmt="pdf"):
    return ExportRequest(format=fmt, record_types=["lab_results"], date_range=YEAR_2025)


@pytest.mark.asyncio
async def test_requested_export_settles_on_next_read(config):
    client = MockDataExportClient(config, rng=random.Random(7))

    queued = await client.request_export(export_request("csv"))
    assert queued.status == "processing"
    assert queued.download_url is None

    settled = await client.get_export_status(queued.id)

    assert settled.status == "completed"
    assert settled.download_url.endswith(f"/exports/{queued.id}.csv")
    assert 1_000_000 <= settled.file_size < 6_000_000
    assert settled.completed_at is not None


@pytest.mark.asyncio
async def test_export_keeps_processing_inside_window(config):
    client = MockDataExportClient(config)
    queued = await client.request_export(export_request())
    client._ready_at[queued.id] += 3600

    assert (await client.get_export_status(queued.id)).status == "processing"


@pytest.mark.asyncio
async def test_history_is_newest_first_and_limited(config):
    client = MockDataExportClient(config)

    queued = await client.request_export(export_request())
    history = await client.get_export_history()
    limited = await client.get_export_history(limit=2)

    assert history[0].id == queued.id
    assert len(history) == 4
    assert [r.id for r in limited] == [r.id for r in history[:2]]


@pytest.mark.asyncio
async def test_unknown_export_status_reports_processing(config):
    client = MockDataExportClient(config)

    status = await client.get_export_status("exp-missing")

    assert status.id == "exp-missing"
    assert status.status == "processing"


@pytest.mark.asyncio
async def test_download_uses_stored_link_or_short_lived_fallback(config):
    client = MockDataExportClient(config)

    stored = await client.download_export("exp-001")
    fallback = await client.download_export("exp-missing")

    assert stored.url.endswith("/exports/exp-001.pdf")
    assert stored.expires_at == "2026-01-22T00:00:00Z"
    assert fallback.url.endswith("/exports/exp-missing.pdf")


@pytest.mark.asyncio
async def test_delete_export_removes_it(config):
    client = MockDataExportClient(config)

    await client.delete_export("exp-002")

    assert "exp-002" not in {r.id for r in await client.get_export_history()}


@pytest.mark.asyncio
async def test_fhir_bundle_keeps_resource_fields(config):
    client = MockDataExportClient(config)

    bundle = await client.export_fhir(["all"])

    assert bundle.resource_type == "Bundle"
    assert bundle.total == 3
    resources = [entry.resource for entry in bundle.entry]
    assert [r.resource_type for r in resources] == ["Patient", "Observation"]
    assert resources[1].model_extra["status"] == "final"


@pytest.mark.asyncio
async def test_report_templates_filter_by_category(config):
    client = MockDataExportClient(config)

    assert len(await client.get_report_templates()) == 3
    cardiac = await client.get_report_templates("cardiac")
    assert [t.id for t in cardiac] == ["template-cardiac"]


@pytest.mark.asyncio
async def test_generated_report_metadata(config):
    client = MockDataExportClient(config, rng=random.Random(1))
    spring = DateSpan(start_date="2025-03-01", end_date="2025-05-31")

    report = await client.generate_report(
        CustomReportRequest(
            title="Diabetes review",
            format="pdf",
            sections=[
                ReportSectionRequest(section_id="sec-glucose", data_points=["fasting_glucose", "pp_glucose"],
                                     date_range=spring),
                ReportSectionRequest(section_id="sec-hba1c", data_points=["hba1c"]),
            ],
        )
    )

    assert report.metadata.sections == 2
    assert report.metadata.data_points == 3
    assert report.metadata.date_range == spring
    assert 5 <= report.metadata.total_pages <= 14
    assert report.download_url.endswith(f"/reports/{report.id}.pdf")


@pytest.mark.asyncio
async def test_json_report_has_no_pages_and_default_range(config):
    client = MockDataExportClient(config)

    report = await client.generate_report(CustomReportRequest(title="Raw", format="json"))

    assert report.metadata.total_pages is None
    assert report.metadata.sections == 0
    assert report.metadata.date_range.start_date == "2025-01-01"


@pytest.mark.asyncio
async def test_share_link_defaults(config):
    client = MockDataExportClient(config)

    plain = await client.share_export(ShareExportRequest(export_id="exp-001"))
    guarded = await client.share_export(
        ShareExportRequest(export_id="exp-001", recipient_email="dr@example.com", require_password=True, expires_in=2)
    )

    assert plain.password is None
    assert plain.max_access_count is None
    assert guarded.password == "ABC123"
    assert guarded.max_access_count == 1
    assert guarded.expires_at < plain.expires_at


@pytest.mark.asyncio
async def test_export_consent_grant_and_revoke(config):
    client = MockDataExportClient(config)

    consent = await client.grant_consent(
        ExportConsentRequest(user_id="user-001", purpose="second opinion", data_types=["lab_results"],
                             date_range=YEAR_2025, expires_at="2026-12-31T00:00:00Z")
    )
    await client.revoke_consent(consent.id)

    assert consent.status == "active"
    stored = client._consents[consent.id]
    assert stored.status == "revoked"
    assert stored.revoked_at is not None


@pytest.mark.asyncio
async def test_statistics_report_latest_export(config):
    client = MockDataExportClient(config)

    stats = await client.get_export_statistics()

    assert stats.total_exports == 15
    assert stats.last_export == "2026-01-15T10:30:00Z"


@pytest.mark.asyncio
async def test_live_export_request_and_history_wire(live_services, router):
    router.add("POST", "/data-export/request", {
        "id": "exp-9", "userId": "u", "format": "fhir", "recordTypes": ["all"],
        "dateRange": {"startDate": "2025-01-01", "endDate": "2025-12-31"}, "status": "pending",
        "createdAt": "2026-01-01T00:00:00Z",
    })
    router.add("GET", "/data-export/history", [])

    record = await live_services.data_export.request_export(export_request("fhir"))
    await live_services.data_export.get_export_history(limit=5)

    assert record.status == "pending"
    body = json.loads(router.last("POST", "/data-export/request").content)
    assert body == {
        "format": "fhir",
        "recordTypes": ["lab_results"],
        "dateRange": {"startDate": "2025-01-01", "endDate": "2025-12-31"},
    }
    assert router.last("GET", "/data-export/history").url.params["limit"] == "5"


@pytest.mark.asyncio
async def test_live_share_uses_abha_wire_name(live_services, router):
    router.add("POST", "/data-export/share", {"oops": True})

    with pytest.raises(ServiceError, match="Failed to share export"):
        await live_services.data_export.share_export(ShareExportRequest(export_id="e", recipient_abha="91-1"))

    body = json.loads(router.last("POST", "/data-export/share").content)
    assert body == {"exportId": "e", "recipientABHA": "91-1"}
