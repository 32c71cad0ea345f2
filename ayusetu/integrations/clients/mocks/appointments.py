"""
Mock Appointments Client.

Purpose:
- Fake doctor/lab/hospital directory, bookings, reminders and care plans
- Does NOT make any network calls
- Bookings, cancellations, snoozes and activity updates mutate in-memory
  stores that reset on restart
"""

import logging
import random
import re
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from ayusetu.integrations.contracts.appointments import (
    ActivityStatus,
    Appointment,
    AppointmentBookingRequest,
    AppointmentBookingResponse,
    AppointmentsService,
    CarePlan,
    CarePlanActivity,
    CarePlanGoal,
    Doctor,
    FollowUpReminder,
    Hospital,
    Lab,
    LabTest,
    Reminder,
    TeleconsultJoinResponse,
    TeleconsultSession,
    TimeSlot,
)
from ayusetu.integrations.errors import ServiceError

from .base import MockClientBase

logger = logging.getLogger(__name__)

MOCK_PATIENT_ID = "patient-001"
MOCK_PATIENT_NAME = "John Doe"
MOCK_MEETING_LINK = "https://meet.google.com/abc-defg-hij"

_SLOT_ID_PATTERN = re.compile(r"^slot-.+-(\d{1,2})$")

_MOCK_DOCTORS: List[Doctor] = [
    Doctor(id="doc-001", name="Dr. Rajesh Kumar", specialization="Cardiology",
           qualification="MBBS, MD (Cardiology)", experience=15, hospital_id="hosp-001",
           hospital_name="Apollo Hospital", consultation_fee=800, rating=4.7,
           languages=["English", "Hindi", "Tamil"]),
    Doctor(id="doc-002", name="Dr. Priya Sharma", specialization="Endocrinology",
           qualification="MBBS, MD (Endocrinology)", experience=12, hospital_id="hosp-001",
           hospital_name="Apollo Hospital", consultation_fee=700, rating=4.8,
           languages=["English", "Hindi"]),
    Doctor(id="doc-003", name="Dr. Amit Patel", specialization="General Medicine",
           qualification="MBBS, MD", experience=8, hospital_id="hosp-002",
           hospital_name="Max Healthcare", consultation_fee=500, rating=4.5,
           languages=["English", "Hindi", "Gujarati"]),
]

_MOCK_HOSPITALS: List[Hospital] = [
    Hospital(id="hosp-001", name="Apollo Hospital", address="Greams Road, Chennai", city="Chennai",
             state="Tamil Nadu", pincode="600006", phone="+91-44-28296000", type="private",
             departments=["Cardiology", "Endocrinology", "Orthopedics", "Neurology"], rating=4.6),
    Hospital(id="hosp-002", name="Max Healthcare", address="Saket, New Delhi", city="New Delhi",
             state="Delhi", pincode="110017", phone="+91-11-26515050", type="private",
             departments=["General Medicine", "Surgery", "Pediatrics", "Oncology"], rating=4.5),
]

_MOCK_LAB_TESTS: List[LabTest] = [
    LabTest(id="test-001", name="Complete Blood Count (CBC)",
            description="Measures different components of blood including RBC, WBC, platelets",
            price=300, report_time="24 hours", category="blood",
            preparation_instructions="No fasting required"),
    LabTest(id="test-002", name="Lipid Profile", description="Cholesterol and triglycerides test",
            price=500, report_time="24 hours", category="blood",
            preparation_instructions="12 hours fasting required"),
    LabTest(id="test-003", name="HbA1c (Diabetes)",
            description="Average blood sugar levels over past 3 months", price=400,
            report_time="24 hours", category="blood", preparation_instructions="No fasting required"),
    LabTest(id="test-004", name="Thyroid Profile (T3, T4, TSH)",
            description="Complete thyroid function test", price=600, report_time="48 hours",
            category="blood", preparation_instructions="Morning sample preferred"),
]

_MOCK_LABS: List[Lab] = [
    Lab(id="lab-001", name="Thyrocare Labs", address="Multiple locations across India", city="Mumbai",
        state="Maharashtra", phone="+91-22-67979797", rating=4.3, home_collection_available=True,
        tests=_MOCK_LAB_TESTS),
    Lab(id="lab-002", name="Dr. Lal PathLabs", address="Nehru Place, New Delhi", city="New Delhi",
        state="Delhi", phone="+91-11-30412345", rating=4.4, home_collection_available=True,
        tests=_MOCK_LAB_TESTS),
]


def _seed_appointments() -> List[Appointment]:
    return [
        Appointment(id="appt-001", type="doctor", status="scheduled", patient_id=MOCK_PATIENT_ID,
                    patient_name=MOCK_PATIENT_NAME, doctor_id="doc-001", doctor_name="Dr. Rajesh Kumar",
                    specialization="Cardiology", scheduled_date="2026-01-20", scheduled_time="10:00 AM",
                    duration=30, consultation_type="in-person", location="Apollo Hospital, Chennai",
                    token_number="A-12", fee=800, payment_status="paid",
                    created_at="2026-01-14T09:00:00Z", notes="Follow-up for BP check"),
        Appointment(id="appt-002", type="lab", status="confirmed", patient_id=MOCK_PATIENT_ID,
                    patient_name=MOCK_PATIENT_NAME, lab_id="lab-001", lab_name="Thyrocare Labs",
                    test_ids=["test-001", "test-002"], test_names=["CBC", "Lipid Profile"],
                    home_collection=True, scheduled_date="2026-01-18", scheduled_time="08:00 AM",
                    duration=15, consultation_type="in-person", location="Home Collection", fee=800,
                    payment_status="paid", created_at="2026-01-13T14:30:00Z"),
    ]


def _seed_reminders() -> List[Reminder]:
    return [
        Reminder(id="rem-001", type="appointment", title="Dr. Rajesh Kumar - Cardiology",
                 description="Scheduled appointment at Apollo Hospital", scheduled_for="2026-01-20T10:00:00Z",
                 completed=False, related_id="appt-001", priority="high"),
        Reminder(id="rem-002", type="lab-test", title="Lab Test - Home Collection",
                 description="CBC and Lipid Profile tests", scheduled_for="2026-01-18T08:00:00Z",
                 completed=False, related_id="appt-002", priority="medium"),
    ]


def _seed_care_plans() -> List[CarePlan]:
    return [
        CarePlan(
            id="plan-001",
            title="Diabetes Management Plan",
            description="Comprehensive care plan for managing Type 2 Diabetes",
            condition="Type 2 Diabetes",
            status="active",
            start_date="2025-12-01",
            created_by="Dr. Priya Sharma",
            created_at="2025-12-01T00:00:00Z",
            progress_percentage=65,
            last_updated="2026-01-14T00:00:00Z",
            goals=[
                CarePlanGoal(id="goal-001", description="Reduce HbA1c to below 7%", target_value=7.0,
                             current_value=7.2, unit="%", target_date="2026-03-01", achieved=False),
                CarePlanGoal(id="goal-002", description="Lose 5 kg body weight", target_value=5,
                             current_value=3.2, unit="kg", target_date="2026-02-28", achieved=False),
            ],
            activities=[
                CarePlanActivity(id="act-001", type="medication", title="Take Metformin",
                                 description="500mg twice daily with meals", frequency="Daily",
                                 status="in-progress"),
                CarePlanActivity(id="act-002", type="exercise", title="Brisk Walking",
                                 description="30 minutes of brisk walking", frequency="Daily",
                                 duration="30 minutes", status="in-progress"),
                CarePlanActivity(id="act-003", type="monitoring", title="Blood Sugar Monitoring",
                                 description="Check fasting and post-meal blood sugar",
                                 frequency="Twice a week", status="in-progress"),
            ],
        )
    ]


def _slot_start(slot_id: str) -> datetime:
    """Best-effort start time for a slot id (ISO timestamp or ``slot-<doctor>-<hour>``)."""
    try:
        return datetime.fromisoformat(slot_id.replace("Z", "+00:00"))
    except ValueError:
        pass
    match = _SLOT_ID_PATTERN.match(slot_id)
    now = datetime.now()
    if match:
        return now.replace(hour=int(match.group(1)) % 24, minute=0, second=0, microsecond=0)
    return now


class MockAppointmentsClient(MockClientBase, AppointmentsService):
    label = "APPOINTMENTS MOCK"

    def __init__(self, config=None, rng: Optional[random.Random] = None) -> None:
        super().__init__(config)
        self._rng = rng or random.Random()
        # In-memory stores (reset on restart)
        self._appointments = _seed_appointments()
        self._reminders = _seed_reminders()
        self._follow_ups = [
            FollowUpReminder(id="follow-001", doctor_id="doc-002", doctor_name="Dr. Priya Sharma",
                             last_visit_date="2025-10-15", next_visit_due="2026-01-15",
                             reason="3-month diabetes checkup", status="overdue"),
        ]
        self._teleconsult_sessions: List[TeleconsultSession] = []
        self._care_plans = _seed_care_plans()

    # ------------------------------------------------------------------
    # Directory
    # ------------------------------------------------------------------

    async def search_doctors(
        self,
        specialization: Optional[str] = None,
        location: Optional[str] = None,
        name: Optional[str] = None,
    ) -> List[Doctor]:
        await self._delay()
        doctors = _MOCK_DOCTORS
        if specialization:
            doctors = [d for d in doctors if specialization.lower() in d.specialization.lower()]
        if name:
            doctors = [d for d in doctors if name.lower() in d.name.lower()]
        return self._copy(doctors)

    async def get_doctor_by_id(self, doctor_id: str) -> Doctor:
        await self._delay()
        doctor = next((d for d in _MOCK_DOCTORS if d.id == doctor_id), None)
        if doctor is None:
            raise ServiceError("Doctor not found")
        return self._copy(doctor)

    async def get_doctor_availability(self, doctor_id: str, date: str) -> List[TimeSlot]:
        await self._delay()
        base = datetime.fromisoformat(date[:10])
        slots = []
        for hour in range(9, 18):
            if hour == 13:  # lunch
                continue
            start = base.replace(hour=hour, minute=0)
            slots.append(
                TimeSlot(
                    id=f"slot-{doctor_id}-{hour}",
                    start_time=start.isoformat(),
                    end_time=(start + timedelta(minutes=30)).isoformat(),
                    is_available=self._rng.random() > 0.3,
                    consultation_type="both",
                )
            )
        return slots

    async def search_hospitals(self, city: Optional[str] = None) -> List[Hospital]:
        await self._delay()
        hospitals = _MOCK_HOSPITALS
        if city:
            hospitals = [h for h in hospitals if city.lower() in h.city.lower()]
        return self._copy(hospitals)

    async def search_labs(self, city: Optional[str] = None) -> List[Lab]:
        await self._delay()
        labs = _MOCK_LABS
        if city:
            labs = [lab for lab in labs if city.lower() in lab.city.lower()]
        return self._copy(labs)

    async def get_lab_tests(self, lab_id: str) -> List[LabTest]:
        await self._delay()
        return self._copy(_MOCK_LAB_TESTS)

    # ------------------------------------------------------------------
    # Booking
    # ------------------------------------------------------------------

    async def book_appointment(self, request: AppointmentBookingRequest) -> AppointmentBookingResponse:
        await self._delay(1.2)
        start = _slot_start(request.slot_id)
        appointment = Appointment(
            id=self._new_id("appt"),
            type=request.type,
            status="scheduled",
            patient_id=MOCK_PATIENT_ID,
            patient_name=MOCK_PATIENT_NAME,
            scheduled_date=start.date().isoformat(),
            scheduled_time=start.strftime("%I:%M %p"),
            duration=30,
            consultation_type=request.consultation_type,
            fee=0,
            payment_status="pending",
            created_at=self._iso_now(),
            notes=request.patient_notes,
        )

        if request.type == "doctor" and request.doctor_id:
            doctor = next((d for d in _MOCK_DOCTORS if d.id == request.doctor_id), None)
            appointment.doctor_id = request.doctor_id
            if doctor is not None:
                appointment.doctor_name = doctor.name
                appointment.specialization = doctor.specialization
                appointment.fee = doctor.consultation_fee
                appointment.location = doctor.hospital_name
        elif request.type == "lab" and request.lab_id:
            lab = next((lab for lab in _MOCK_LABS if lab.id == request.lab_id), None)
            selected = set(request.test_ids or [])
            tests = [t for t in _MOCK_LAB_TESTS if t.id in selected]
            appointment.lab_id = request.lab_id
            appointment.lab_name = lab.name if lab else None
            appointment.test_ids = request.test_ids
            appointment.test_names = [t.name for t in tests]
            appointment.home_collection = request.home_collection
            appointment.fee = sum(t.price for t in tests)

        self._appointments.append(appointment)
        logger.info("[%s] Booked %s appointment id=%s fee=%s",
                    self.label, appointment.type, appointment.id, appointment.fee)

        return AppointmentBookingResponse(
            success=True,
            appointment_id=appointment.id,
            message="Appointment booked successfully",
            payment_required=True,
            payment_amount=appointment.fee,
        )

    async def get_my_appointments(self, status: Optional[str] = None) -> List[Appointment]:
        await self._delay()
        appointments = self._appointments
        if status:
            appointments = [a for a in appointments if a.status == status]
        return self._copy(appointments)

    async def cancel_appointment(self, appointment_id: str, reason: str) -> bool:
        await self._delay(0.6)
        appointment = next((a for a in self._appointments if a.id == appointment_id), None)
        if appointment is not None:
            appointment.status = "cancelled"
            appointment.cancellation_reason = reason
            logger.info("[%s] Appointment %s cancelled. Reason: %s", self.label, appointment_id, reason)
        return True

    # ------------------------------------------------------------------
    # Reminders
    # ------------------------------------------------------------------

    async def get_reminders(self) -> List[Reminder]:
        await self._delay()
        return self._copy(self._reminders)

    async def get_follow_up_reminders(self) -> List[FollowUpReminder]:
        await self._delay()
        return self._copy(self._follow_ups)

    async def snooze_reminder(self, reminder_id: str, duration_minutes: int) -> bool:
        await self._delay(0.3)
        reminder = next((r for r in self._reminders if r.id == reminder_id), None)
        if reminder is not None:
            until = datetime.now(timezone.utc) + timedelta(minutes=duration_minutes)
            reminder.snoozed_until = until.isoformat().replace("+00:00", "Z")
        return True

    # ------------------------------------------------------------------
    # Teleconsultation
    # ------------------------------------------------------------------

    async def get_teleconsult_sessions(self) -> List[TeleconsultSession]:
        await self._delay()
        return self._copy(self._teleconsult_sessions)

    async def join_teleconsult(self, session_id: str) -> TeleconsultJoinResponse:
        await self._delay(0.5)
        return TeleconsultJoinResponse(meeting_link=MOCK_MEETING_LINK)

    # ------------------------------------------------------------------
    # Care plans
    # ------------------------------------------------------------------

    async def get_care_plans(self) -> List[CarePlan]:
        await self._delay()
        return self._copy(self._care_plans)

    async def get_care_plan_by_id(self, plan_id: str) -> CarePlan:
        await self._delay()
        plan = next((p for p in self._care_plans if p.id == plan_id), None)
        if plan is None:
            raise ServiceError("Care plan not found")
        return self._copy(plan)

    async def update_activity_status(self, plan_id: str, activity_id: str, status: ActivityStatus) -> bool:
        await self._delay(0.4)
        plan = next((p for p in self._care_plans if p.id == plan_id), None)
        if plan is not None:
            activity = next((a for a in plan.activities if a.id == activity_id), None)
            if activity is not None:
                activity.status = status
                if status == "completed":
                    activity.completed_date = self._iso_now()
        return True
