"""
Contracts for appointments and the care journey: doctor/lab/hospital booking,
reminders, teleconsultation and care plans.

Timestamps are kept as the ISO strings the backend sends.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Literal, Optional

from pydantic import Field

from .base import ApiModel

AppointmentType = Literal["doctor", "lab", "hospital_opd"]
AppointmentStatus = Literal["scheduled", "confirmed", "completed", "cancelled", "no-show"]
ConsultationType = Literal["in-person", "teleconsultation"]
ActivityStatus = Literal["pending", "in-progress", "completed", "skipped"]


# ---------------------------------------------------------------------------
# Providers
# ---------------------------------------------------------------------------

class TimeSlot(ApiModel):
    id: str
    start_time: str
    end_time: str
    is_available: bool
    consultation_type: Literal["in-person", "teleconsultation", "both"]


class Doctor(ApiModel):
    id: str
    name: str
    specialization: str
    qualification: str
    experience: int  # years
    hospital_id: str
    hospital_name: str
    consultation_fee: float
    rating: float
    photo_url: Optional[str] = None
    languages: List[str] = Field(default_factory=list)
    available_slots: Optional[List[TimeSlot]] = None


class Hospital(ApiModel):
    id: str
    name: str
    address: str
    city: str
    state: str
    pincode: str
    phone: str
    type: Literal["government", "private", "trust"]
    departments: List[str] = Field(default_factory=list)
    rating: float
    distance: Optional[float] = None  # km


class LabTest(ApiModel):
    id: str
    name: str
    description: str
    price: float
    report_time: str
    preparation_instructions: Optional[str] = None
    category: Literal["blood", "urine", "imaging", "pathology", "other"]


class Lab(ApiModel):
    id: str
    name: str
    address: str
    city: str
    state: str
    phone: str
    tests: List[LabTest] = Field(default_factory=list)
    rating: float
    home_collection_available: bool


# ---------------------------------------------------------------------------
# Appointments
# ---------------------------------------------------------------------------

class Appointment(ApiModel):
    id: str
    type: AppointmentType
    status: AppointmentStatus
    patient_id: str
    patient_name: str

    doctor_id: Optional[str] = None
    doctor_name: Optional[str] = None
    specialization: Optional[str] = None

    lab_id: Optional[str] = None
    lab_name: Optional[str] = None
    test_ids: Optional[List[str]] = None
    test_names: Optional[List[str]] = None
    home_collection: Optional[bool] = None

    hospital_id: Optional[str] = None
    hospital_name: Optional[str] = None
    department: Optional[str] = None

    scheduled_date: str
    scheduled_time: str
    duration: int  # minutes
    consultation_type: ConsultationType
    location: Optional[str] = None
    token_number: Optional[str] = None

    fee: float
    payment_status: Literal["pending", "paid", "refunded"]

    created_at: str
    notes: Optional[str] = None
    cancellation_reason: Optional[str] = None


class AppointmentBookingRequest(ApiModel):
    type: AppointmentType
    doctor_id: Optional[str] = None
    lab_id: Optional[str] = None
    hospital_id: Optional[str] = None
    test_ids: Optional[List[str]] = None
    slot_id: str
    consultation_type: ConsultationType
    patient_notes: Optional[str] = None
    home_collection: Optional[bool] = None


class AppointmentBookingResponse(ApiModel):
    success: bool
    appointment_id: Optional[str] = None
    message: str
    payment_required: bool
    payment_amount: Optional[float] = None
    payment_link: Optional[str] = None


# ---------------------------------------------------------------------------
# Reminders
# ---------------------------------------------------------------------------

class Reminder(ApiModel):
    id: str
    type: Literal["appointment", "medication", "follow-up", "lab-test", "vaccination"]
    title: str
    description: str
    scheduled_for: str
    completed: bool
    snoozed_until: Optional[str] = None
    related_id: Optional[str] = None
    priority: Literal["low", "medium", "high", "urgent"]


class FollowUpReminder(ApiModel):
    id: str
    doctor_id: str
    doctor_name: str
    last_visit_date: str
    next_visit_due: str
    reason: str
    status: Literal["pending", "scheduled", "completed", "overdue"]


# ---------------------------------------------------------------------------
# Teleconsultation
# ---------------------------------------------------------------------------

class TeleconsultSession(ApiModel):
    id: str
    appointment_id: str
    doctor_id: str
    doctor_name: str
    patient_id: str
    patient_name: str
    scheduled_at: str
    started_at: Optional[str] = None
    ended_at: Optional[str] = None
    duration: Optional[int] = None
    status: Literal["scheduled", "in-progress", "completed", "cancelled"]
    meeting_link: Optional[str] = None
    meeting_id: Optional[str] = None
    platform: Literal["zoom", "google-meet", "custom", "whatsapp"]
    recording_url: Optional[str] = None
    prescription_id: Optional[str] = None
    notes: Optional[str] = None


class TeleconsultJoinResponse(ApiModel):
    meeting_link: str


# ---------------------------------------------------------------------------
# Care plans
# ---------------------------------------------------------------------------

class CarePlanGoal(ApiModel):
    id: str
    description: str
    target_value: Optional[float] = None
    current_value: Optional[float] = None
    unit: Optional[str] = None
    target_date: Optional[str] = None
    achieved: bool
    achieved_date: Optional[str] = None


class CarePlanActivity(ApiModel):
    id: str
    type: Literal["medication", "exercise", "diet", "monitoring", "appointment", "test"]
    title: str
    description: str
    frequency: str
    duration: Optional[str] = None
    status: ActivityStatus
    due_date: Optional[str] = None
    completed_date: Optional[str] = None
    notes: Optional[str] = None


class CarePlan(ApiModel):
    id: str
    title: str
    description: str
    condition: str
    status: Literal["active", "completed", "on-hold", "discontinued"]
    start_date: str
    end_date: Optional[str] = None
    created_by: str
    created_at: str
    goals: List[CarePlanGoal] = Field(default_factory=list)
    activities: List[CarePlanActivity] = Field(default_factory=list)
    progress_percentage: float
    last_updated: str


# ---------------------------------------------------------------------------
# Service interface
# ---------------------------------------------------------------------------

class AppointmentsService(ABC):

    @abstractmethod
    async def search_doctors(
        self,
        specialization: Optional[str] = None,
        location: Optional[str] = None,
        name: Optional[str] = None,
    ) -> List[Doctor]:
        ...

    @abstractmethod
    async def get_doctor_by_id(self, doctor_id: str) -> Doctor:
        ...

    @abstractmethod
    async def get_doctor_availability(self, doctor_id: str, date: str) -> List[TimeSlot]:
        """Bookable slots for a doctor on ``date`` (YYYY-MM-DD)."""

    @abstractmethod
    async def search_hospitals(self, city: Optional[str] = None) -> List[Hospital]:
        ...

    @abstractmethod
    async def search_labs(self, city: Optional[str] = None) -> List[Lab]:
        ...

    @abstractmethod
    async def get_lab_tests(self, lab_id: str) -> List[LabTest]:
        ...

    @abstractmethod
    async def book_appointment(self, request: AppointmentBookingRequest) -> AppointmentBookingResponse:
        ...

    @abstractmethod
    async def get_my_appointments(self, status: Optional[str] = None) -> List[Appointment]:
        ...

    @abstractmethod
    async def cancel_appointment(self, appointment_id: str, reason: str) -> bool:
        ...

    @abstractmethod
    async def get_reminders(self) -> List[Reminder]:
        ...

    @abstractmethod
    async def get_follow_up_reminders(self) -> List[FollowUpReminder]:
        ...

    @abstractmethod
    async def snooze_reminder(self, reminder_id: str, duration_minutes: int) -> bool:
        ...

    @abstractmethod
    async def get_teleconsult_sessions(self) -> List[TeleconsultSession]:
        ...

    @abstractmethod
    async def join_teleconsult(self, session_id: str) -> TeleconsultJoinResponse:
        ...

    @abstractmethod
    async def get_care_plans(self) -> List[CarePlan]:
        ...

    @abstractmethod
    async def get_care_plan_by_id(self, plan_id: str) -> CarePlan:
        ...

    @abstractmethod
    async def update_activity_status(self, plan_id: str, activity_id: str, status: ActivityStatus) -> bool:
        ...
