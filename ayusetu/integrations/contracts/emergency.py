"""
Contracts for emergency and safety features: the emergency medical card,
emergency contacts, SOS, nearby facilities, safety check-ins and fall
detection.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field

from .base import ApiModel

SosType = Literal["medical", "accident", "panic", "fall-detection"]
FacilityType = Literal["hospital", "clinic", "pharmacy", "ambulance"]
Mood = Literal["safe", "worried", "distressed", "emergency"]
Sensitivity = Literal["high", "medium", "low"]
SosShortcut = Literal["triple-tap", "power-button", "shake", "volume-buttons"]


class GeoPoint(ApiModel):
    latitude: float
    longitude: float
    address: Optional[str] = None


class EmergencyContactInput(ApiModel):
    name: str
    relationship: str
    phone: str
    email: Optional[str] = None
    is_primary: bool = False
    notify_on_emergency: bool = True
    can_access_records: bool = False


class EmergencyContact(EmergencyContactInput):
    id: str


class EmergencyCard(ApiModel):
    id: str
    user_id: str
    abha_number: str
    abha_address: str

    full_name: str
    date_of_birth: str
    age: int
    gender: Literal["M", "F", "O"]
    blood_group: str
    photo: Optional[str] = None

    allergies: List[str] = Field(default_factory=list)
    chronic_conditions: List[str] = Field(default_factory=list)
    current_medications: List[str] = Field(default_factory=list)
    implants: Optional[List[str]] = None
    organ_donor: bool = False

    emergency_contacts: List[EmergencyContact] = Field(default_factory=list)

    qr_code: str
    short_code: str

    last_updated: str
    version: int
    expires_at: str
    is_active: bool


class CreateEmergencyCardRequest(ApiModel):
    blood_group: str
    allergies: List[str] = Field(default_factory=list)
    chronic_conditions: List[str] = Field(default_factory=list)
    current_medications: List[str] = Field(default_factory=list)
    implants: Optional[List[str]] = None
    organ_donor: bool = False
    emergency_contacts: List[EmergencyContactInput] = Field(default_factory=list)


class SosRequest(ApiModel):
    id: str
    user_id: str
    timestamp: str
    location: GeoPoint
    type: SosType
    severity: Literal["critical", "high", "medium"]

    heart_rate: Optional[int] = None
    blood_pressure: Optional[str] = None
    oxygen_level: Optional[int] = None
    device_battery: Optional[int] = None

    status: Literal["triggered", "dispatched", "arrived", "resolved", "cancelled"]
    ambulance_eta: Optional[str] = Field(default=None, alias="ambulanceETA")
    ambulance_id: Optional[str] = None
    responder_id: Optional[str] = None

    contacts_notified: List[str] = Field(default_factory=list)
    facilities_notified: List[str] = Field(default_factory=list)

    user_note: Optional[str] = None
    responder_notes: Optional[str] = None


class TriggerSosRequest(ApiModel):
    type: SosType
    location: Optional[GeoPoint] = None
    user_note: Optional[str] = None


class NearbyFacility(ApiModel):
    id: str
    name: str
    type: FacilityType
    address: str
    phone: str
    distance: float  # km
    estimated_time: int  # minutes
    availability: Literal["open-24x7", "open-now", "closed"]
    has_emergency: bool
    has_icu: bool = Field(alias="hasICU")
    has_blood_bank: bool
    accepts_insurance: bool
    rating: Optional[float] = None
    location: GeoPoint


class NearbyFacilitiesRequest(ApiModel):
    location: GeoPoint
    radius: float = 5.0  # km
    type: Optional[FacilityType] = None
    has_emergency: Optional[bool] = None


class SafetyCheckIn(ApiModel):
    id: str
    user_id: str
    timestamp: str
    location: Optional[GeoPoint] = None
    message: str
    mood: Optional[Mood] = None
    shared_with: List[str] = Field(default_factory=list)


class FallDetectionEvent(ApiModel):
    id: str
    user_id: str
    timestamp: str
    location: Optional[GeoPoint] = None
    severity: Sensitivity
    impact: float  # G-force
    resolved: bool
    false_alarm: bool
    countdown_started: bool
    countdown_duration: int  # seconds
    auto_sos_triggered: bool = Field(alias="autoSOSTriggered")
    user_response: Optional[Literal["im-ok", "need-help", "no-response"]] = None
    response_time: Optional[int] = None


class EmergencyAccessLog(ApiModel):
    id: str
    user_id: str
    accessed_by: str
    accessed_by_role: Literal["doctor", "paramedic", "nurse", "hospital-staff"]
    timestamp: str
    reason: str
    location: Optional[str] = None
    data_accessed: List[str] = Field(default_factory=list)
    emergency_card_viewed: bool
    sos_request_id: Optional[str] = None
    ip_address: Optional[str] = None
    device_info: Optional[str] = None
    verified: bool


class QuickAccessSettings(ApiModel):
    user_id: str

    allow_emergency_card_access: bool = True
    require_otp_for_access: bool = Field(default=False, alias="requireOTPForAccess")
    auto_expire_card: bool = True
    expiry_duration: int = 6  # months

    sos_enabled: bool = True
    sos_shortcut: SosShortcut = "triple-tap"
    auto_call_emergency: bool = True
    auto_notify_contacts: bool = True
    auto_share_location: bool = True

    fall_detection_enabled: bool = True
    fall_detection_sensitivity: Sensitivity = "medium"
    fall_countdown_duration: int = 30

    safety_check_in_enabled: bool = False
    check_in_frequency: Optional[Literal["daily", "twice-daily", "weekly"]] = None
    check_in_reminder: bool = False
    missed_check_in_action: Literal["notify-contacts", "do-nothing"] = "notify-contacts"


# ---------------------------------------------------------------------------
# Service interface
# ---------------------------------------------------------------------------

class EmergencyService(ABC):

    # Emergency card
    @abstractmethod
    async def get_emergency_card(self) -> Optional[EmergencyCard]:
        """The user's emergency card, or None if none has been created."""

    @abstractmethod
    async def create_emergency_card(self, request: CreateEmergencyCardRequest) -> EmergencyCard:
        ...

    @abstractmethod
    async def update_emergency_card(self, updates: Dict[str, Any]) -> EmergencyCard:
        """Partial update; bumps ``version``."""

    @abstractmethod
    async def regenerate_qr_code(self) -> str:
        ...

    # Contacts
    @abstractmethod
    async def add_emergency_contact(self, contact: EmergencyContactInput) -> EmergencyContact:
        ...

    @abstractmethod
    async def update_emergency_contact(self, contact_id: str, updates: Dict[str, Any]) -> EmergencyContact:
        ...

    @abstractmethod
    async def delete_emergency_contact(self, contact_id: str) -> None:
        ...

    # SOS
    @abstractmethod
    async def trigger_sos(self, request: TriggerSosRequest) -> SosRequest:
        ...

    @abstractmethod
    async def cancel_sos(self, sos_id: str) -> None:
        ...

    @abstractmethod
    async def get_sos_history(self) -> List[SosRequest]:
        ...

    # Facilities
    @abstractmethod
    async def get_nearby_facilities(self, request: NearbyFacilitiesRequest) -> List[NearbyFacility]:
        ...

    # Safety check-in
    @abstractmethod
    async def create_safety_check_in(
        self, message: str, mood: Mood, location: Optional[GeoPoint] = None
    ) -> SafetyCheckIn:
        ...

    @abstractmethod
    async def get_safety_check_in_history(self) -> List[SafetyCheckIn]:
        ...

    # Fall detection
    @abstractmethod
    async def report_fall_detection(
        self, severity: Sensitivity, impact: float, location: Optional[GeoPoint] = None
    ) -> FallDetectionEvent:
        ...

    @abstractmethod
    async def respond_to_fall_detection(self, fall_id: str, response: Literal["im-ok", "need-help"]) -> None:
        ...

    # Audit and settings
    @abstractmethod
    async def get_emergency_access_logs(self) -> List[EmergencyAccessLog]:
        ...

    @abstractmethod
    async def get_quick_access_settings(self) -> QuickAccessSettings:
        ...

    @abstractmethod
    async def update_quick_access_settings(self, updates: Dict[str, Any]) -> QuickAccessSettings:
        ...
