import pytest

from ayusetu.integrations.clients.mocks import MockComplianceClient
from ayusetu.integrations.contracts.compliance import AuditLogQuery, AuditReportRequest, DateRange


@pytest.mark.asyncio
async def test_data_access_logs_filter_by_source_and_page(config):
    client = MockComplianceClient(config)

    doctors = await client.get_data_access_logs(AuditLogQuery(user_id="user-001", source="doctor"))
    paged = await client.get_data_access_logs(AuditLogQuery(user_id="user-001", limit=2, offset=1))

    assert [log.id for log in doctors] == ["access-001", "access-003"]
    assert [log.id for log in paged] == ["access-002", "access-003"]


@pytest.mark.asyncio
async def test_consent_and_gateway_log_filters(config):
    client = MockComplianceClient(config)

    revoked = await client.get_consent_audit_logs(AuditLogQuery(user_id="user-001", action="revoked"))
    failed = await client.get_abdm_gateway_logs(AuditLogQuery(user_id="user-001", status="failed"))

    assert [log.consent_id for log in revoked] == ["consent-005"]
    assert failed[0].error_code == "TIMEOUT"


@pytest.mark.asyncio
async def test_user_activity_is_attributed_to_the_caller(config):
    client = MockComplianceClient(config)

    logs = await client.get_user_activity_logs(AuditLogQuery(user_id="user-42", category="consent"))

    assert len(logs) == 1
    assert logs[0].user_id == "user-42"


@pytest.mark.asyncio
async def test_repeated_reads_are_identical(config):
    client = MockComplianceClient(config)
    query = AuditLogQuery(user_id="user-001")

    first = await client.get_data_access_logs(query)
    second = await client.get_data_access_logs(query)
    dashboard_a = await client.get_compliance_dashboard("user-001")
    dashboard_b = await client.get_compliance_dashboard("user-001")

    assert first == second
    assert dashboard_a == dashboard_b
    assert dashboard_a.compliance_score == 92
    assert len(dashboard_a.recent_activity) == 7


@pytest.mark.asyncio
async def test_consent_timeline_limit(config):
    client = MockComplianceClient(config)

    entries = await client.get_consent_timeline("user-001", consent_id="consent-001", limit=2)

    assert [entry.event_type for entry in entries] == ["created", "approved"]


@pytest.mark.asyncio
async def test_generate_and_download_report(config):
    client = MockComplianceClient(config)
    request = AuditReportRequest(
        user_id="user-001",
        date_range=DateRange(from_="2026-01-01T00:00:00Z", to="2026-01-31T00:00:00Z"),
        format="csv",
    )

    report = await client.generate_audit_report(request)
    content = await client.download_audit_report(report.id)

    assert report.format == "csv"
    assert report.summary.total_logs == 125
    assert report.date_range.from_ == "2026-01-01T00:00:00Z"
    assert isinstance(content, bytes) and content


def test_query_params_use_wire_names():
    query = AuditLogQuery(
        user_id="user-001",
        date_range=DateRange(from_="2026-01-01", to="2026-01-31"),
        consent_id="consent-001",
        limit=10,
    )

    assert query.to_params() == {"from": "2026-01-01", "to": "2026-01-31", "consentId": "consent-001", "limit": 10}


def test_report_request_wire_shape():
    request = AuditReportRequest(user_id="u", date_range=DateRange(from_="a", to="b"))

    wire = request.to_wire()

    assert wire["dateRange"] == {"from": "a", "to": "b"}
    assert wire["includeABDMTransactions"] is True


@pytest.mark.asyncio
async def test_live_download_returns_raw_bytes(live_services, router):
    router.add("GET", "/compliance/download-report/report-1", b"%PDF-1.7 report")

    content = await live_services.compliance.download_audit_report("report-1")

    assert content == b"%PDF-1.7 report"


@pytest.mark.asyncio
async def test_live_logs_send_filters_as_query(live_services, router):
    router.add("GET", "/compliance/abdm-logs", [])

    logs = await live_services.compliance.get_abdm_gateway_logs(
        AuditLogQuery(user_id="user-001", request_type="discovery", status="pending")
    )

    assert logs == []
    params = dict(router.last("GET", "/compliance/abdm-logs").url.params)
    assert params == {"requestType": "discovery", "status": "pending"}
