import json

import pytest

from ayusetu.integrations.clients.mocks import MockEmergencyClient
from ayusetu.integrations.contracts.emergency import (
    CreateEmergencyCardRequest,
    EmergencyContactInput,
    GeoPoint,
    NearbyFacilitiesRequest,
    TriggerSosRequest,
)
from ayusetu.integrations.errors import ServiceError


@pytest.mark.asyncio
async def test_sos_defaults_to_connaught_place(config):
    client = MockEmergencyClient(config)

    sos = await client.trigger_sos(TriggerSosRequest(type="medical"))

    assert sos.location.latitude == 28.6139
    assert sos.location.longitude == 77.209
    assert sos.severity == "high"
    assert sos.status == "dispatched"
    assert sos.to_wire()["ambulanceETA"] == "8 minutes"


@pytest.mark.asyncio
async def test_fall_detection_sos_is_critical(config):
    client = MockEmergencyClient(config)
    here = GeoPoint(latitude=12.97, longitude=77.59)

    sos = await client.trigger_sos(TriggerSosRequest(type="fall-detection", location=here, user_note="fell"))

    assert sos.severity == "critical"
    assert sos.location == here
    assert sos.user_note == "fell"


@pytest.mark.asyncio
async def test_card_update_bumps_version_and_persists(config):
    client = MockEmergencyClient(config)

    updated = await client.update_emergency_card({"blood_group": "AB-", "organDonor": False})

    assert updated.version == 2
    assert updated.blood_group == "AB-"
    assert updated.organ_donor is False
    stored = await client.get_emergency_card()
    assert stored.version == 2
    assert stored.blood_group == "AB-"


@pytest.mark.asyncio
async def test_card_update_renumbers_contacts(config):
    client = MockEmergencyClient(config)

    updated = await client.update_emergency_card(
        {"emergency_contacts": [{"name": "Meera", "relationship": "Sister", "phone": "+91 90000 00001"}]}
    )

    assert [c.id for c in updated.emergency_contacts] == ["contact-1"]
    assert updated.emergency_contacts[0].notify_on_emergency is True


@pytest.mark.asyncio
async def test_create_card_numbers_contacts(config):
    client = MockEmergencyClient(config)

    card = await client.create_emergency_card(
        CreateEmergencyCardRequest(
            blood_group="B+",
            allergies=["Dust"],
            emergency_contacts=[
                EmergencyContactInput(name="A", relationship="Friend", phone="1"),
                EmergencyContactInput(name="B", relationship="Friend", phone="2"),
            ],
        )
    )

    assert card.id == "ec-new"
    assert card.version == 1
    assert [c.id for c in card.emergency_contacts] == ["contact-1", "contact-2"]


@pytest.mark.asyncio
async def test_contact_lifecycle(config):
    client = MockEmergencyClient(config)

    added = await client.add_emergency_contact(
        EmergencyContactInput(name="Dr. Iyer", relationship="Doctor", phone="+91 90000 00002")
    )
    assert added.id.startswith("contact-")

    changed = await client.update_emergency_contact("contact-002", {"is_primary": True})
    assert changed.is_primary is True

    await client.delete_emergency_contact("contact-001")
    card = await client.get_emergency_card()
    assert [c.id for c in card.emergency_contacts] == ["contact-002", added.id]

    with pytest.raises(ServiceError):
        await client.update_emergency_contact("contact-404", {"phone": "0"})


@pytest.mark.asyncio
async def test_back_to_back_contacts_get_distinct_ids(config):
    client = MockEmergencyClient(config)

    first = await client.add_emergency_contact(EmergencyContactInput(name="A", relationship="Friend", phone="1"))
    second = await client.add_emergency_contact(EmergencyContactInput(name="B", relationship="Friend", phone="2"))
    assert first.id != second.id

    await client.update_emergency_contact(second.id, {"phone": "22"})
    await client.delete_emergency_contact(first.id)

    contacts = (await client.get_emergency_card()).emergency_contacts
    assert [(c.id, c.phone) for c in contacts if c.name in {"A", "B"}] == [(second.id, "22")]


@pytest.mark.asyncio
async def test_generated_event_ids_are_unique(config):
    client = MockEmergencyClient(config)

    sos_ids = {(await client.trigger_sos(TriggerSosRequest(type="medical"))).id for _ in range(3)}
    check_in_ids = {(await client.create_safety_check_in("ok", "safe")).id for _ in range(3)}
    fall_ids = {(await client.report_fall_detection("high", 2.0)).id for _ in range(3)}

    assert len(sos_ids) == len(check_in_ids) == len(fall_ids) == 3


@pytest.mark.asyncio
async def test_badly_typed_card_update_raises_service_error(config):
    client = MockEmergencyClient(config)

    with pytest.raises(ServiceError, match="Failed to update emergency card"):
        await client.update_emergency_card({"version": "x"})

    assert (await client.get_emergency_card()).version == 1


@pytest.mark.asyncio
async def test_regenerated_qr_code_is_stored(config):
    client = MockEmergencyClient(config)

    qr_code = await client.regenerate_qr_code()

    assert qr_code.endswith("NEW")
    assert (await client.get_emergency_card()).qr_code == qr_code


@pytest.mark.asyncio
async def test_check_in_and_fall_detection(config):
    client = MockEmergencyClient(config)

    check_in = await client.create_safety_check_in("All good", "safe", GeoPoint(latitude=1.0, longitude=2.0))
    assert check_in.location.address == "Current Location"
    assert len(await client.get_safety_check_in_history()) == 2

    fall = await client.report_fall_detection("high", 3.4)
    assert fall.countdown_duration == 30
    assert fall.to_wire()["autoSOSTriggered"] is False


@pytest.mark.asyncio
async def test_settings_update_is_not_stored(config):
    client = MockEmergencyClient(config)

    updated = await client.update_quick_access_settings({"require_otp_for_access": True})

    assert updated.require_otp_for_access is True
    assert (await client.get_quick_access_settings()).require_otp_for_access is False


@pytest.mark.asyncio
async def test_reads_are_idempotent(config):
    client = MockEmergencyClient(config)

    assert await client.get_sos_history() == await client.get_sos_history()
    assert await client.get_emergency_access_logs() == await client.get_emergency_access_logs()
    facilities = await client.get_nearby_facilities(
        NearbyFacilitiesRequest(location=GeoPoint(latitude=28.6, longitude=77.2))
    )
    assert [f.id for f in facilities] == ["hospital-001", "hospital-002", "clinic-001"]


@pytest.mark.asyncio
async def test_live_card_missing_returns_none(live_services, router):
    router.add("GET", "/emergency/card", None)

    assert await live_services.emergency.get_emergency_card() is None


@pytest.mark.asyncio
async def test_live_card_update_sends_wire_names(live_services, router):
    router.add("PUT", "/emergency/card", None, status=404)

    with pytest.raises(ServiceError) as exc_info:
        await live_services.emergency.update_emergency_card({"blood_group": "A+"})

    assert exc_info.value.status_code == 404
    body = json.loads(router.last("PUT", "/emergency/card").content)
    assert body == {"bloodGroup": "A+"}


@pytest.mark.asyncio
async def test_live_nearby_facilities_posts_request(live_services, router):
    router.add("POST", "/emergency/nearby-facilities", [])

    await live_services.emergency.get_nearby_facilities(
        NearbyFacilitiesRequest(location=GeoPoint(latitude=28.6, longitude=77.2), has_emergency=True)
    )

    body = json.loads(router.last("POST", "/emergency/nearby-facilities").content)
    assert body == {"location": {"latitude": 28.6, "longitude": 77.2}, "radius": 5.0, "hasEmergency": True}
