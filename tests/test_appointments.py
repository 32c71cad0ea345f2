import json
import random

import pytest

from ayusetu.integrations.clients.mocks import MockAppointmentsClient
from ayusetu.integrations.contracts.appointments import AppointmentBookingRequest
from ayusetu.integrations.errors import ServiceError


@pytest.mark.asyncio
async def test_doctor_search_filters_by_specialization(config):
    client = MockAppointmentsClient(config)

    cardiologists = await client.search_doctors(specialization="cardio")

    assert [d.id for d in cardiologists] == ["doc-001"]
    with pytest.raises(ServiceError):
        await client.get_doctor_by_id("doc-999")


@pytest.mark.asyncio
async def test_availability_skips_lunch_hour(config):
    client = MockAppointmentsClient(config, rng=random.Random(7))

    slots = await client.get_doctor_availability("doc-001", "2026-02-01")

    assert len(slots) == 8
    assert "slot-doc-001-13" not in {slot.id for slot in slots}
    assert slots[0].start_time.startswith("2026-02-01T09:00")


@pytest.mark.asyncio
async def test_book_doctor_appointment_uses_doctor_fee(config):
    client = MockAppointmentsClient(config)

    response = await client.book_appointment(
        AppointmentBookingRequest(
            type="doctor", doctor_id="doc-001", slot_id="slot-doc-001-10", consultation_type="teleconsultation"
        )
    )

    assert response.success is True
    assert response.payment_amount == 800
    booked = [a for a in await client.get_my_appointments() if a.id == response.appointment_id]
    assert booked[0].doctor_name == "Dr. Rajesh Kumar"
    assert booked[0].scheduled_time == "10:00 AM"
    assert booked[0].status == "scheduled"


@pytest.mark.asyncio
async def test_book_lab_appointment_sums_selected_tests(config):
    client = MockAppointmentsClient(config)

    response = await client.book_appointment(
        AppointmentBookingRequest(
            type="lab",
            lab_id="lab-002",
            test_ids=["test-003", "test-004"],
            slot_id="2026-02-03T08:00:00Z",
            consultation_type="in-person",
            home_collection=True,
        )
    )

    assert response.payment_amount == 1000
    booked = [a for a in await client.get_my_appointments() if a.id == response.appointment_id][0]
    assert booked.lab_name == "Dr. Lal PathLabs"
    assert booked.scheduled_date == "2026-02-03"
    assert booked.test_names == ["HbA1c (Diabetes)", "Thyroid Profile (T3, T4, TSH)"]


@pytest.mark.asyncio
async def test_cancel_appointment_updates_status_filter(config):
    client = MockAppointmentsClient(config)

    assert await client.cancel_appointment("appt-001", "Feeling better") is True

    cancelled = await client.get_my_appointments(status="cancelled")
    assert [a.id for a in cancelled] == ["appt-001"]
    assert cancelled[0].cancellation_reason == "Feeling better"


@pytest.mark.asyncio
async def test_snooze_and_activity_updates_persist(config):
    client = MockAppointmentsClient(config)

    await client.snooze_reminder("rem-001", 30)
    reminders = await client.get_reminders()
    assert reminders[0].snoozed_until is not None

    await client.update_activity_status("plan-001", "act-002", "completed")
    plan = await client.get_care_plan_by_id("plan-001")
    activity = next(a for a in plan.activities if a.id == "act-002")
    assert activity.status == "completed"
    assert activity.completed_date is not None


@pytest.mark.asyncio
async def test_reads_do_not_expose_internal_state(config):
    client = MockAppointmentsClient(config)

    first = await client.get_my_appointments()
    first[0].status = "completed"

    again = await client.get_my_appointments()
    assert again[0].status == "scheduled"


@pytest.mark.asyncio
async def test_live_booking_posts_wire_body(live_services, router):
    router.add(
        "POST",
        "/v1/appointments/book",
        {"success": True, "appointmentId": "appt-77", "message": "ok", "paymentRequired": False},
    )

    response = await live_services.appointments.book_appointment(
        AppointmentBookingRequest(
            type="doctor", doctor_id="doc-002", slot_id="s-1", consultation_type="teleconsultation"
        )
    )

    assert response.appointment_id == "appt-77"
    body = json.loads(router.last("POST", "/v1/appointments/book").content)
    assert body == {
        "type": "doctor",
        "doctorId": "doc-002",
        "slotId": "s-1",
        "consultationType": "teleconsultation",
    }
