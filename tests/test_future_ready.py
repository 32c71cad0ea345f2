import json

import pytest

from ayusetu.integrations.clients.mocks import MockFutureReadyClient
from ayusetu.integrations.clients.mocks.future_ready import (
    BP_ANSWER,
    GENERIC_ANSWER,
    MEETING_ROOM_URL,
    SYNCED_DATA_POINTS,
)
from ayusetu.integrations.contracts.future_ready import AI_HEALTH_DISCLAIMER, AiQuery, ConsultationRequest
from ayusetu.integrations.errors import ServiceError


def consultation_request(doctor_id="doc-002"):
    return ConsultationRequest(doctor_id=doctor_id, patient_id="user-123", type="video",
                               scheduled_date="2026-01-16", scheduled_time="11:00 AM", symptoms="Chest tightness")


@pytest.mark.asyncio
async def test_ask_ai_matches_blood_pressure_questions(config):
    client = MockFutureReadyClient(config)

    bp = await client.ask_ai(AiQuery(question="How is my Blood Pressure?"))
    other = await client.ask_ai(AiQuery(question="Should I sleep more?"))

    assert bp.answer.endswith(BP_ANSWER)
    assert other.answer.endswith(GENERIC_ANSWER)
    assert bp.query == "How is my Blood Pressure?"
    assert bp.confidence == 0.85
    assert bp.disclaimer == AI_HEALTH_DISCLAIMER


@pytest.mark.asyncio
async def test_doctors_filter_by_specialization(config):
    client = MockFutureReadyClient(config)

    cardio = await client.get_doctors("cardio")

    assert [d.id for d in cardio] == ["doc-002"]
    assert len(await client.get_doctors()) == 3


@pytest.mark.asyncio
async def test_booking_uses_doctor_fee_and_meeting_room(config):
    client = MockFutureReadyClient(config)

    booked = await client.book_consultation(consultation_request())
    unknown = await client.book_consultation(consultation_request("doc-missing"))

    assert booked.status == "scheduled"
    assert booked.fee == 800
    assert booked.meeting_link.startswith(f"{MEETING_ROOM_URL}/room-")
    assert unknown.fee == 500


@pytest.mark.asyncio
async def test_history_counts_follow_bookings(config):
    client = MockFutureReadyClient(config)
    await client.book_consultation(consultation_request())

    history = await client.get_consultation_history("user-123")

    assert history.total_consultations == 2
    assert history.upcoming_count == 1
    assert history.completed_count == 1


@pytest.mark.asyncio
async def test_cancel_consultation(config):
    client = MockFutureReadyClient(config)
    booked = await client.book_consultation(consultation_request())

    await client.cancel_consultation(booked.id, "Feeling better")

    history = await client.get_consultation_history("user-123")
    cancelled = next(c for c in history.consultations if c.id == booked.id)
    assert cancelled.status == "cancelled"
    assert cancelled.notes == "Feeling better"
    assert history.upcoming_count == 0


@pytest.mark.asyncio
async def test_cancel_unknown_consultation_fails(config):
    client = MockFutureReadyClient(config)

    with pytest.raises(ServiceError, match="Consultation not found"):
        await client.cancel_consultation("consult-missing", "n/a")


@pytest.mark.asyncio
async def test_connect_and_sync_wearable(config):
    client = MockFutureReadyClient(config)

    device = await client.connect_wearable_device("user-123", "smart_scale")
    result = await client.sync_wearable_data("device-001")

    devices = await client.get_wearable_devices("user-123")
    assert [d.id for d in devices] == ["device-001", "device-002", device.id]
    assert device.name == "New smart_scale"
    assert result.success is True
    assert result.data_points_synced == SYNCED_DATA_POINTS
    assert devices[0].last_synced_at != "2026-01-15T07:30:00Z"


@pytest.mark.asyncio
async def test_devices_are_kept_per_user(config):
    client = MockFutureReadyClient(config)
    await client.connect_wearable_device("user-a", "smartwatch")

    assert len(await client.get_wearable_devices("user-a")) == 3
    assert len(await client.get_wearable_devices("user-b")) == 2


@pytest.mark.asyncio
async def test_live_activity_and_cancel_wire(live_services, router):
    router.add("GET", "/wearables/activity/u-1", {"oops": True})
    router.add("POST", "/telemedicine/cancel/c-1", {})

    with pytest.raises(ServiceError, match="Failed to fetch activity summary"):
        await live_services.future_ready.get_activity_summary("u-1", "2026-01-15")
    await live_services.future_ready.cancel_consultation("c-1", "Clash")

    assert router.last("GET", "/wearables/activity/u-1").url.params["date"] == "2026-01-15"
    assert json.loads(router.last("POST", "/telemedicine/cancel/c-1").content) == {"reason": "Clash"}


@pytest.mark.asyncio
async def test_live_connect_sends_device_type(live_services, router):
    router.add("POST", "/wearables/connect", {
        "id": "d-1", "name": "Scale", "type": "smart_scale", "manufacturer": "M", "model": "X",
        "isConnected": True, "supportedDataTypes": ["weight"],
    })

    device = await live_services.future_ready.connect_wearable_device("u-1", "smart_scale")

    assert device.is_connected is True
    body = json.loads(router.last("POST", "/wearables/connect").content)
    assert body == {"userId": "u-1", "deviceType": "smart_scale"}
