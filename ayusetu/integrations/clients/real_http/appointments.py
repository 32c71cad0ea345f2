from typing import List, Optional

from ayusetu.integrations.contracts.appointments import (
    ActivityStatus,
    Appointment,
    AppointmentBookingRequest,
    AppointmentBookingResponse,
    AppointmentsService,
    CarePlan,
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
from ayusetu.integrations.errors import build_model, build_model_list

from .base import RealHttpClientBase


class RealAppointmentsClient(RealHttpClientBase, AppointmentsService):
    prefix = "/v1/appointments"

    async def search_doctors(
        self,
        specialization: Optional[str] = None,
        location: Optional[str] = None,
        name: Optional[str] = None,
    ) -> List[Doctor]:
        msg = "Failed to search doctors"
        params = {"specialization": specialization, "location": location, "name": name}
        data = await self._call("GET", "/doctors/search", msg, params=params)
        return build_model_list(Doctor, data, msg)

    async def get_doctor_by_id(self, doctor_id: str) -> Doctor:
        msg = "Failed to fetch doctor"
        data = await self._call("GET", f"/doctors/{doctor_id}", msg)
        return build_model(Doctor, data, msg)

    async def get_doctor_availability(self, doctor_id: str, date: str) -> List[TimeSlot]:
        msg = "Failed to fetch doctor availability"
        data = await self._call("GET", f"/doctors/{doctor_id}/availability", msg, params={"date": date})
        return build_model_list(TimeSlot, data, msg)

    async def search_hospitals(self, city: Optional[str] = None) -> List[Hospital]:
        msg = "Failed to search hospitals"
        data = await self._call("GET", "/hospitals/search", msg, params={"city": city})
        return build_model_list(Hospital, data, msg)

    async def search_labs(self, city: Optional[str] = None) -> List[Lab]:
        msg = "Failed to search labs"
        data = await self._call("GET", "/labs/search", msg, params={"city": city})
        return build_model_list(Lab, data, msg)

    async def get_lab_tests(self, lab_id: str) -> List[LabTest]:
        msg = "Failed to fetch lab tests"
        data = await self._call("GET", f"/labs/{lab_id}/tests", msg)
        return build_model_list(LabTest, data, msg)

    async def book_appointment(self, request: AppointmentBookingRequest) -> AppointmentBookingResponse:
        msg = "Failed to book appointment"
        data = await self._call("POST", "/book", msg, json=request.to_wire())
        return build_model(AppointmentBookingResponse, data, msg)

    async def get_my_appointments(self, status: Optional[str] = None) -> List[Appointment]:
        msg = "Failed to fetch appointments"
        data = await self._call("GET", "/my-appointments", msg, params={"status": status})
        return build_model_list(Appointment, data, msg)

    async def cancel_appointment(self, appointment_id: str, reason: str) -> bool:
        await self._call(
            "POST", f"/{appointment_id}/cancel", "Failed to cancel appointment", json={"reason": reason}
        )
        return True

    async def get_reminders(self) -> List[Reminder]:
        msg = "Failed to fetch reminders"
        data = await self._call("GET", "/reminders", msg)
        return build_model_list(Reminder, data, msg)

    async def get_follow_up_reminders(self) -> List[FollowUpReminder]:
        msg = "Failed to fetch follow-up reminders"
        data = await self._call("GET", "/follow-ups", msg)
        return build_model_list(FollowUpReminder, data, msg)

    async def snooze_reminder(self, reminder_id: str, duration_minutes: int) -> bool:
        await self._call(
            "POST",
            f"/reminders/{reminder_id}/snooze",
            "Failed to snooze reminder",
            json={"duration": duration_minutes},
        )
        return True

    async def get_teleconsult_sessions(self) -> List[TeleconsultSession]:
        msg = "Failed to fetch teleconsult sessions"
        data = await self._call("GET", "/teleconsult/sessions", msg)
        return build_model_list(TeleconsultSession, data, msg)

    async def join_teleconsult(self, session_id: str) -> TeleconsultJoinResponse:
        msg = "Failed to join teleconsultation"
        data = await self._call("POST", f"/teleconsult/{session_id}/join", msg)
        return build_model(TeleconsultJoinResponse, data, msg)

    async def get_care_plans(self) -> List[CarePlan]:
        msg = "Failed to fetch care plans"
        data = await self._call("GET", "/care-plans", msg)
        return build_model_list(CarePlan, data, msg)

    async def get_care_plan_by_id(self, plan_id: str) -> CarePlan:
        msg = "Failed to fetch care plan"
        data = await self._call("GET", f"/care-plans/{plan_id}", msg)
        return build_model(CarePlan, data, msg)

    async def update_activity_status(self, plan_id: str, activity_id: str, status: ActivityStatus) -> bool:
        await self._call(
            "PUT",
            f"/care-plans/{plan_id}/activities/{activity_id}",
            "Failed to update activity status",
            json={"status": status},
        )
        return True
