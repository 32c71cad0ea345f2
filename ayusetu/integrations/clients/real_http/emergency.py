from typing import Any, Dict, List, Literal, Optional

from ayusetu.integrations.contracts.base import wire_updates
from ayusetu.integrations.contracts.emergency import (
    CreateEmergencyCardRequest,
    EmergencyAccessLog,
    EmergencyCard,
    EmergencyContact,
    EmergencyContactInput,
    EmergencyService,
    FallDetectionEvent,
    GeoPoint,
    Mood,
    NearbyFacilitiesRequest,
    NearbyFacility,
    QuickAccessSettings,
    SafetyCheckIn,
    Sensitivity,
    SosRequest,
    TriggerSosRequest,
)
from ayusetu.integrations.errors import ServiceError, build_model, build_model_list

from .base import RealHttpClientBase


class RealEmergencyClient(RealHttpClientBase, EmergencyService):
    prefix = "/emergency"

    async def get_emergency_card(self) -> Optional[EmergencyCard]:
        msg = "Failed to fetch emergency card"
        data = await self._call("GET", "/card", msg)
        if data is None:
            return None
        return build_model(EmergencyCard, data, msg)

    async def create_emergency_card(self, request: CreateEmergencyCardRequest) -> EmergencyCard:
        msg = "Failed to create emergency card"
        data = await self._call("POST", "/card", msg, json=request.to_wire())
        return build_model(EmergencyCard, data, msg)

    async def update_emergency_card(self, updates: Dict[str, Any]) -> EmergencyCard:
        msg = "Failed to update emergency card"
        data = await self._call("PUT", "/card", msg, json=wire_updates(CreateEmergencyCardRequest, updates))
        return build_model(EmergencyCard, data, msg)

    async def regenerate_qr_code(self) -> str:
        msg = "Failed to regenerate QR code"
        data = await self._call("POST", "/card/regenerate-qr", msg)
        qr_code = data.get("qrCode") if isinstance(data, dict) else None
        if not qr_code:
            raise ServiceError(msg, payload=data)
        return qr_code

    async def add_emergency_contact(self, contact: EmergencyContactInput) -> EmergencyContact:
        msg = "Failed to add emergency contact"
        data = await self._call("POST", "/contacts", msg, json=contact.to_wire())
        return build_model(EmergencyContact, data, msg)

    async def update_emergency_contact(self, contact_id: str, updates: Dict[str, Any]) -> EmergencyContact:
        msg = "Failed to update emergency contact"
        body = wire_updates(EmergencyContactInput, updates)
        data = await self._call("PUT", f"/contacts/{contact_id}", msg, json=body)
        return build_model(EmergencyContact, data, msg)

    async def delete_emergency_contact(self, contact_id: str) -> None:
        await self._call("DELETE", f"/contacts/{contact_id}", "Failed to delete emergency contact")

    async def trigger_sos(self, request: TriggerSosRequest) -> SosRequest:
        msg = "Failed to trigger SOS"
        data = await self._call("POST", "/sos", msg, json=request.to_wire())
        return build_model(SosRequest, data, msg)

    async def cancel_sos(self, sos_id: str) -> None:
        await self._call("POST", f"/sos/{sos_id}/cancel", "Failed to cancel SOS")

    async def get_sos_history(self) -> List[SosRequest]:
        msg = "Failed to fetch SOS history"
        data = await self._call("GET", "/sos/history", msg)
        return build_model_list(SosRequest, data, msg)

    async def get_nearby_facilities(self, request: NearbyFacilitiesRequest) -> List[NearbyFacility]:
        msg = "Failed to fetch nearby facilities"
        data = await self._call("POST", "/nearby-facilities", msg, json=request.to_wire())
        return build_model_list(NearbyFacility, data, msg)

    async def create_safety_check_in(
        self, message: str, mood: Mood, location: Optional[GeoPoint] = None
    ) -> SafetyCheckIn:
        msg = "Failed to create safety check-in"
        body: Dict[str, Any] = {"message": message, "mood": mood}
        if location is not None:
            body["location"] = location.to_wire()
        data = await self._call("POST", "/safety-checkin", msg, json=body)
        return build_model(SafetyCheckIn, data, msg)

    async def get_safety_check_in_history(self) -> List[SafetyCheckIn]:
        msg = "Failed to fetch safety check-in history"
        data = await self._call("GET", "/safety-checkin/history", msg)
        return build_model_list(SafetyCheckIn, data, msg)

    async def report_fall_detection(
        self, severity: Sensitivity, impact: float, location: Optional[GeoPoint] = None
    ) -> FallDetectionEvent:
        msg = "Failed to report fall detection"
        body: Dict[str, Any] = {"severity": severity, "impact": impact}
        if location is not None:
            body["location"] = location.to_wire()
        data = await self._call("POST", "/fall-detection", msg, json=body)
        return build_model(FallDetectionEvent, data, msg)

    async def respond_to_fall_detection(self, fall_id: str, response: Literal["im-ok", "need-help"]) -> None:
        await self._call(
            "POST",
            f"/fall-detection/{fall_id}/respond",
            "Failed to respond to fall detection",
            json={"response": response},
        )

    async def get_emergency_access_logs(self) -> List[EmergencyAccessLog]:
        msg = "Failed to fetch emergency access logs"
        data = await self._call("GET", "/access-logs", msg)
        return build_model_list(EmergencyAccessLog, data, msg)

    async def get_quick_access_settings(self) -> QuickAccessSettings:
        msg = "Failed to fetch quick access settings"
        data = await self._call("GET", "/settings", msg)
        return build_model(QuickAccessSettings, data, msg)

    async def update_quick_access_settings(self, updates: Dict[str, Any]) -> QuickAccessSettings:
        msg = "Failed to update quick access settings"
        data = await self._call("PUT", "/settings", msg, json=wire_updates(QuickAccessSettings, updates))
        return build_model(QuickAccessSettings, data, msg)
