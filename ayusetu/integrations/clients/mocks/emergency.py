"""
Mock Emergency Client.

Keeps a single emergency card (with its contacts) in memory. Card and contact
changes persist for the lifetime of the client; SOS, check-ins and fall
events are fabricated per call.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Literal, Optional

from ayusetu.integrations.contracts.base import merge_model
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
from ayusetu.integrations.errors import ServiceError, build_model

from .base import MockClientBase

logger = logging.getLogger(__name__)

MOCK_USER_ID = "user-001"
MOCK_QR_CODE = "data:image/png;base64,iVBORw0KGgoAAAANSUhEUg..."
CARD_VALIDITY = timedelta(days=180)

# Connaught Place, New Delhi
DEFAULT_SOS_LOCATION = GeoPoint(latitude=28.6139, longitude=77.209, address="Connaught Place, New Delhi")

_MOCK_FACILITIES: List[NearbyFacility] = [
    NearbyFacility(id="hospital-001", name="Apollo Hospital", type="hospital", address="Sarita Vihar, New Delhi",
                   phone="+91 11 2692 5858", distance=2.5, estimated_time=10, availability="open-24x7",
                   has_emergency=True, has_icu=True, has_blood_bank=True, accepts_insurance=True, rating=4.5,
                   location=GeoPoint(latitude=28.5355, longitude=77.2910)),
    NearbyFacility(id="hospital-002", name="Fortis Hospital", type="hospital", address="Okhla, New Delhi",
                   phone="+91 11 4277 6222", distance=3.2, estimated_time=12, availability="open-24x7",
                   has_emergency=True, has_icu=True, has_blood_bank=True, accepts_insurance=True, rating=4.3,
                   location=GeoPoint(latitude=28.5270, longitude=77.2734)),
    NearbyFacility(id="clinic-001", name="City Health Clinic", type="clinic", address="Nehru Place, New Delhi",
                   phone="+91 11 2622 1234", distance=1.8, estimated_time=8, availability="open-now",
                   has_emergency=False, has_icu=False, has_blood_bank=False, accepts_insurance=False,
                   rating=4.0, location=GeoPoint(latitude=28.5494, longitude=77.2500)),
]


def _iso(moment: datetime) -> str:
    return moment.isoformat().replace("+00:00", "Z")


def _number_contacts(contacts: List[Any]) -> List[EmergencyContact]:
    numbered = []
    for idx, contact in enumerate(contacts):
        data = contact.model_dump() if hasattr(contact, "model_dump") else dict(contact)
        data.pop("id", None)
        numbered.append(EmergencyContact.model_validate({**data, "id": f"contact-{idx + 1}"}))
    return numbered


class MockEmergencyClient(MockClientBase, EmergencyService):
    label = "EMERGENCY MOCK"

    def __init__(self, config=None) -> None:
        super().__init__(config)
        now = datetime.now(timezone.utc)
        self._anchor = now
        # In-memory stores (reset on restart)
        self._card: Optional[EmergencyCard] = EmergencyCard(
            id="ec-001",
            user_id=MOCK_USER_ID,
            abha_number="91-1234-5678-9012",
            abha_address="john.doe@abdm",
            full_name="John Doe",
            date_of_birth="1988-05-15",
            age=35,
            gender="M",
            blood_group="O+",
            photo="https://example.com/photo.jpg",
            allergies=["Penicillin", "Peanuts", "Shellfish"],
            chronic_conditions=["Type 2 Diabetes", "Hypertension"],
            current_medications=["Metformin 500mg (2x daily)", "Amlodipine 5mg (1x daily)"],
            implants=["Dental crown"],
            organ_donor=True,
            emergency_contacts=[
                EmergencyContact(id="contact-001", name="Jane Doe", relationship="Spouse",
                                 phone="+91 98765 43210", email="jane.doe@example.com", is_primary=True,
                                 notify_on_emergency=True, can_access_records=True),
                EmergencyContact(id="contact-002", name="Robert Doe", relationship="Father",
                                 phone="+91 98765 43211", email="robert.doe@example.com", is_primary=False,
                                 notify_on_emergency=True, can_access_records=False),
            ],
            qr_code=MOCK_QR_CODE,
            short_code="ABC123",
            last_updated=_iso(now),
            version=1,
            expires_at=_iso(now + CARD_VALIDITY),
            is_active=True,
        )
        self._settings = QuickAccessSettings(user_id=MOCK_USER_ID)

    # ------------------------------------------------------------------
    # Emergency card
    # ------------------------------------------------------------------

    async def get_emergency_card(self) -> Optional[EmergencyCard]:
        return self._copy(self._card)

    async def create_emergency_card(self, request: CreateEmergencyCardRequest) -> EmergencyCard:
        await self._delay(0.5)
        now = datetime.now(timezone.utc)
        self._card = EmergencyCard(
            id="ec-new",
            user_id=MOCK_USER_ID,
            abha_number="91-1234-5678-9012",
            abha_address="john.doe@abdm",
            full_name="John Doe",
            date_of_birth="1988-05-15",
            age=35,
            gender="M",
            blood_group=request.blood_group,
            allergies=list(request.allergies),
            chronic_conditions=list(request.chronic_conditions),
            current_medications=list(request.current_medications),
            implants=request.implants,
            organ_donor=request.organ_donor,
            emergency_contacts=_number_contacts(request.emergency_contacts),
            qr_code=MOCK_QR_CODE,
            short_code="ABC123",
            last_updated=_iso(now),
            version=1,
            expires_at=_iso(now + CARD_VALIDITY),
            is_active=True,
        )
        logger.info("[%s] Emergency card created blood_group=%s", self.label, request.blood_group)
        return self._copy(self._card)

    async def update_emergency_card(self, updates: Dict[str, Any]) -> EmergencyCard:
        await self._delay(0.5)
        card = self._require_card()
        changes = dict(updates)
        contacts = changes.pop("emergency_contacts", changes.pop("emergencyContacts", None))
        updated = merge_model(card, changes, "Failed to update emergency card")
        if contacts is not None:
            updated.emergency_contacts = _number_contacts(
                [build_model(EmergencyContactInput, c, "Failed to update emergency card") if isinstance(c, dict) else c
                 for c in contacts]
            )
        updated.last_updated = self._iso_now()
        updated.version = card.version + 1
        self._card = updated
        logger.info("[%s] Emergency card updated to version %s", self.label, updated.version)
        return self._copy(updated)

    async def regenerate_qr_code(self) -> str:
        await self._delay(0.5)
        qr_code = f"{MOCK_QR_CODE}NEW"
        if self._card is not None:
            self._card.qr_code = qr_code
        return qr_code

    def _require_card(self) -> EmergencyCard:
        if self._card is None:
            raise ServiceError("Emergency card not found")
        return self._card

    # ------------------------------------------------------------------
    # Contacts
    # ------------------------------------------------------------------

    async def add_emergency_contact(self, contact: EmergencyContactInput) -> EmergencyContact:
        await self._delay(0.5)
        created = EmergencyContact(id=self._new_id("contact"), **contact.model_dump())
        if self._card is not None:
            self._card.emergency_contacts.append(created)
        logger.info("[%s] Emergency contact added id=%s", self.label, created.id)
        return self._copy(created)

    async def update_emergency_contact(self, contact_id: str, updates: Dict[str, Any]) -> EmergencyContact:
        await self._delay(0.5)
        card = self._require_card()
        for idx, existing in enumerate(card.emergency_contacts):
            if existing.id == contact_id:
                updated = merge_model(existing, updates, "Failed to update emergency contact")
                card.emergency_contacts[idx] = updated
                return self._copy(updated)
        raise ServiceError("Emergency contact not found")

    async def delete_emergency_contact(self, contact_id: str) -> None:
        await self._delay(0.5)
        if self._card is not None:
            self._card.emergency_contacts = [c for c in self._card.emergency_contacts if c.id != contact_id]

    # ------------------------------------------------------------------
    # SOS
    # ------------------------------------------------------------------

    async def trigger_sos(self, request: TriggerSosRequest) -> SosRequest:
        await self._delay(1.0)
        sos = SosRequest(
            id=self._new_id("sos"),
            user_id=MOCK_USER_ID,
            timestamp=self._iso_now(),
            location=request.location or DEFAULT_SOS_LOCATION,
            type=request.type,
            severity="critical" if request.type == "fall-detection" else "high",
            heart_rate=110,
            blood_pressure="140/90",
            oxygen_level=94,
            device_battery=45,
            status="dispatched",
            ambulance_eta="8 minutes",
            ambulance_id="amb-101",
            contacts_notified=["contact-001", "contact-002"],
            facilities_notified=["hospital-001", "hospital-002"],
            user_note=request.user_note,
        )
        logger.warning("[%s] SOS triggered id=%s type=%s", self.label, sos.id, sos.type)
        return sos

    async def cancel_sos(self, sos_id: str) -> None:
        await self._delay(0.5)
        logger.info("[%s] SOS %s cancelled", self.label, sos_id)

    async def get_sos_history(self) -> List[SosRequest]:
        return [
            SosRequest(
                id="sos-001",
                user_id=MOCK_USER_ID,
                timestamp=_iso(self._anchor - timedelta(days=7)),
                location=DEFAULT_SOS_LOCATION,
                type="medical",
                severity="critical",
                heart_rate=115,
                status="resolved",
                ambulance_eta="7 minutes",
                contacts_notified=["contact-001"],
                facilities_notified=["hospital-001"],
            )
        ]

    # ------------------------------------------------------------------
    # Facilities / check-ins / falls
    # ------------------------------------------------------------------

    async def get_nearby_facilities(self, request: NearbyFacilitiesRequest) -> List[NearbyFacility]:
        await self._delay(0.5)
        return self._copy(_MOCK_FACILITIES)

    async def create_safety_check_in(
        self, message: str, mood: Mood, location: Optional[GeoPoint] = None
    ) -> SafetyCheckIn:
        await self._delay(0.5)
        if location is not None:
            location = GeoPoint(latitude=location.latitude, longitude=location.longitude,
                                address="Current Location")
        return SafetyCheckIn(
            id=self._new_id("checkin"),
            user_id=MOCK_USER_ID,
            timestamp=self._iso_now(),
            location=location,
            message=message,
            mood=mood,
            shared_with=["contact-001", "contact-002"],
        )

    async def get_safety_check_in_history(self) -> List[SafetyCheckIn]:
        return [
            SafetyCheckIn(id="checkin-001", user_id=MOCK_USER_ID,
                          timestamp=_iso(self._anchor - timedelta(days=1)),
                          message="I'm safe and feeling good!", mood="safe", shared_with=["contact-001"]),
            SafetyCheckIn(id="checkin-002", user_id=MOCK_USER_ID,
                          timestamp=_iso(self._anchor - timedelta(days=2)),
                          message="Feeling a bit unwell", mood="worried",
                          shared_with=["contact-001", "contact-002"]),
        ]

    async def report_fall_detection(
        self, severity: Sensitivity, impact: float, location: Optional[GeoPoint] = None
    ) -> FallDetectionEvent:
        await self._delay(0.5)
        return FallDetectionEvent(
            id=self._new_id("fall"),
            user_id=MOCK_USER_ID,
            timestamp=self._iso_now(),
            location=location,
            severity=severity,
            impact=impact,
            resolved=False,
            false_alarm=False,
            countdown_started=True,
            countdown_duration=self._settings.fall_countdown_duration,
            auto_sos_triggered=False,
        )

    async def respond_to_fall_detection(self, fall_id: str, response: Literal["im-ok", "need-help"]) -> None:
        await self._delay(0.5)
        logger.info("[%s] Fall %s response: %s", self.label, fall_id, response)

    # ------------------------------------------------------------------
    # Audit / settings
    # ------------------------------------------------------------------

    async def get_emergency_access_logs(self) -> List[EmergencyAccessLog]:
        return [
            EmergencyAccessLog(
                id="log-001",
                user_id=MOCK_USER_ID,
                accessed_by="Dr. Sarah Johnson",
                accessed_by_role="doctor",
                timestamp=_iso(self._anchor - timedelta(days=3)),
                reason="Emergency treatment - road accident",
                location="Apollo Hospital Emergency",
                data_accessed=["Medical History", "Allergies", "Current Medications", "Blood Group"],
                emergency_card_viewed=True,
                sos_request_id="sos-001",
                verified=True,
            )
        ]

    async def get_quick_access_settings(self) -> QuickAccessSettings:
        return self._copy(self._settings)

    async def update_quick_access_settings(self, updates: Dict[str, Any]) -> QuickAccessSettings:
        await self._delay(0.5)
        return merge_model(self._settings, updates, "Failed to update quick access settings")
