import json
from datetime import date, timedelta

import pytest

from ayusetu.integrations.clients.mocks import MockPhrClient
from ayusetu.integrations.clients.mocks.phr import assess_consent_risk, display_data_type
from ayusetu.integrations.contracts.phr import (
    ConsentArtifact,
    ConsentRequest,
    ConsentTemplateInput,
    GranularDataSelection,
    HealthRecord,
    build_timeline,
)
from ayusetu.integrations.errors import ServiceError


def consent_request(**overrides):
    fields = dict(
        id="cons-req-x",
        requester_id="hpr-1",
        requester_name="Dr. A",
        requester_type="doctor",
        purpose="treatment",
        data_types=["Lab Reports"],
        from_date="2026-01-01",
        to_date="2026-01-31",
        expiry_date="2026-02-01",
        status="pending",
        request_date="2026-01-01",
    )
    fields.update(overrides)
    return ConsentRequest(**fields)


def test_display_data_type():
    assert display_data_type("lab_report") == "Lab Report"
    assert display_data_type("ipd_discharge_summary") == "Ipd Discharge Summary"


def test_low_risk_request():
    warning = assess_consent_risk(consent_request())

    assert warning.level == "low"
    assert warning.message == "This consent request appears safe"


def test_mental_health_data_is_high_risk():
    warning = assess_consent_risk(consent_request(data_types=["Mental Health Notes"], expiry_date="2026-12-31"))

    assert warning.level == "high"
    assert "Includes sensitive mental health records" in warning.reasons
    assert any(reason.startswith("Long access duration") for reason in warning.reasons)


def test_long_duration_and_insurance_are_medium_risk():
    long_request = assess_consent_risk(consent_request(expiry_date="2026-06-01"))
    insurer = assess_consent_risk(consent_request(requester_type="insurance"))

    assert long_request.level == "medium"
    assert long_request.reasons == ["Long access duration (151 days)"]
    assert insurer.level == "medium"
    assert insurer.reasons == ["Sharing with insurance provider"]


def test_timeline_groups_by_date_newest_first():
    records = [
        HealthRecord(id="a", type="lab_report", title="CBC", date="2026-01-10", hospital_name="H1", category="c"),
        HealthRecord(id="b", type="imaging", title="X-Ray", date="2026-01-10", hospital_name="H2",
                     provider_name="Provider 2", category="c"),
        HealthRecord(id="c", type="opd_prescription", title="Rx", date="2026-01-08", hospital_name="H3",
                     category="c"),
    ]

    timeline = build_timeline(records)

    assert [entry.date for entry in timeline] == ["2026-01-10", "2026-01-08"]
    titles = [event.title for event in timeline[0].events]
    assert titles == sorted(titles)
    imaging = next(e for e in timeline[0].events if e.record_id == "b")
    assert imaging.location == "Provider 2"
    assert imaging.id == "evt-b"


@pytest.mark.asyncio
async def test_mock_timeline_covers_every_record(config):
    client = MockPhrClient(config)

    records = await client.get_health_records()
    timeline = await client.get_health_timeline()

    assert sum(len(entry.events) for entry in timeline) == len(records)
    assert timeline[0].date == max(r.date for r in records)


@pytest.mark.asyncio
async def test_approve_moves_request_into_active_consents(config):
    client = MockPhrClient(config)

    await client.approve_consent("cons-req-001")

    requests = await client.get_consent_requests()
    assert requests[0].status == "approved"
    active = await client.get_active_consents()
    assert active[0].consent_id == "cons-req-001"
    assert active[0].data_types == ["OPD Prescriptions", "Lab Reports"]
    assert active[0].access_count == 0


@pytest.mark.asyncio
async def test_approving_unknown_request_changes_nothing(config):
    client = MockPhrClient(config)
    before = await client.get_active_consents()

    await client.approve_consent("missing")

    assert await client.get_active_consents() == before


@pytest.mark.asyncio
async def test_deny_marks_request_denied(config):
    client = MockPhrClient(config)

    await client.deny_consent("cons-req-001", reason="not needed")

    assert (await client.get_consent_requests())[0].status == "denied"


@pytest.mark.asyncio
async def test_revoke_by_consent_id(config):
    client = MockPhrClient(config)

    await client.revoke_consent("cons-req-000")

    assert await client.get_active_consents() == []


@pytest.mark.asyncio
async def test_granular_approval_records_audit_entry(config):
    client = MockPhrClient(config)

    await client.approve_consent_with_granular_selection(
        "cons-req-001", GranularDataSelection(record_ids=["rec-001"], data_types=["lab_report"])
    )

    artifact = (await client.get_active_consents())[0]
    assert artifact.data_types == ["Lab Report"]
    trail = await client.get_consent_audit_trail(artifact.id)
    assert len(trail) == 1
    assert trail[0].details == "Approved with granular selection: 1 records, 1 data types"


@pytest.mark.asyncio
async def test_audit_trail_filters_by_consent(config):
    client = MockPhrClient(config)

    assert len(await client.get_consent_audit_trail()) == 5
    assert len(await client.get_consent_audit_trail("cons-art-001")) == 5
    assert await client.get_consent_audit_trail("other") == []


@pytest.mark.asyncio
async def test_templates_create_and_delete(config):
    client = MockPhrClient(config)

    created = await client.create_consent_template(
        ConsentTemplateInput(name="Research", description="Anonymised", purpose="research", default_duration=14)
    )

    assert created.usage_count == 0
    assert created.id in {t.id for t in await client.get_consent_templates()}
    await client.delete_consent_template(created.id)
    assert created.id not in {t.id for t in await client.get_consent_templates()}


@pytest.mark.asyncio
async def test_link_family_member(config):
    client = MockPhrClient(config)

    await client.link_family_member("11-2222-3333-4444", "parent")

    members = await client.get_family_members()
    assert members[-1].abha_number == "11-2222-3333-4444"
    assert members[-1].relationship == "parent"


@pytest.mark.asyncio
async def test_emergency_access_update_is_audited(config):
    client = MockPhrClient(config)

    updated = await client.update_emergency_access_config({"expiryHours": 12, "access_level": "full"})

    assert updated.expiry_hours == 12
    assert updated.access_level == "full"
    assert (await client.get_emergency_access_config()).expiry_hours == 12
    trail = await client.get_consent_audit_trail("emergency")
    assert [e.action for e in trail] == ["modified"]


@pytest.mark.asyncio
async def test_emergency_access_update_rejects_bad_values(config):
    client = MockPhrClient(config)

    with pytest.raises(ServiceError, match="Failed to update emergency access config"):
        await client.update_emergency_access_config({"expiryHours": "soon"})


@pytest.mark.asyncio
async def test_trigger_emergency_access_logs_system_entry(config):
    client = MockPhrClient(config)

    await client.trigger_emergency_access("ec-001", "Unconscious patient")

    entry = (await client.get_consent_audit_trail("emergency"))[-1]
    assert entry.action == "accessed"
    assert entry.actor_type == "system"
    assert entry.details.endswith("Reason: Unconscious patient")


@pytest.mark.asyncio
async def test_expiring_consents_window(config):
    client = MockPhrClient(config)
    soon = (date.today() + timedelta(days=3)).isoformat()
    client._artifacts.append(
        ConsentArtifact(id="soon", consent_id="c-soon", status="active", granted_date="2026-01-01",
                        expiry_date=soon, purpose="treatment", requester_name="Clinic")
    )

    assert "soon" in {a.id for a in await client.get_expiring_consents()}
    assert "soon" not in {a.id for a in await client.get_expiring_consents(days=2)}


@pytest.mark.asyncio
async def test_live_consent_actions_hit_consent_paths(live_services, router):
    router.add("POST", "/v1/phr/consent/cons-1/deny", {})
    router.add("POST", "/v1/phr/consent/cons-1/approve-granular", {})

    await live_services.phr.deny_consent("cons-1", reason="no")
    await live_services.phr.approve_consent_with_granular_selection(
        "cons-1", GranularDataSelection(record_ids=["r1"], data_types=["lab_report"])
    )

    assert json.loads(router.last("POST", "/v1/phr/consent/cons-1/deny").content) == {"reason": "no"}
    body = json.loads(router.last("POST", "/v1/phr/consent/cons-1/approve-granular").content)
    assert body == {"selection": {"recordIds": ["r1"], "dataTypes": ["lab_report"]}}


@pytest.mark.asyncio
async def test_live_timeline_built_from_records(live_services, router):
    router.add("GET", "/v1/phr/records", [
        {"id": "r1", "type": "lab_report", "title": "CBC", "date": "2026-01-10", "hospitalName": "H",
         "category": "Pathology"},
    ])

    timeline = await live_services.phr.get_health_timeline()

    assert timeline[0].date == "2026-01-10"
    assert timeline[0].events[0].record_id == "r1"


@pytest.mark.asyncio
async def test_live_emergency_update_sends_wire_names(live_services, router):
    router.add("PUT", "/v1/phr/emergency-access", {"id": "e", "enabled": False})

    updated = await live_services.phr.update_emergency_access_config({"enabled": False, "requires_otp": False})

    assert updated.enabled is False
    body = json.loads(router.last("PUT", "/v1/phr/emergency-access").content)
    assert body == {"enabled": False, "requiresOTP": False}
