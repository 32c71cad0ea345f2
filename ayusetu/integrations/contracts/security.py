"""
Contracts for security and privacy controls: app PIN, biometrics, trusted
devices, login sessions, security events and per-section locks.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field

from .base import ApiModel

BiometricType = Literal["fingerprint", "face-id", "iris"]
DeviceType = Literal["mobile", "tablet", "desktop"]
Platform = Literal["iOS", "Android", "Web"]


class TrustedDevice(ApiModel):
    id: str
    device_name: str
    device_type: DeviceType
    platform: Platform
    device_id: str
    first_seen: str
    last_seen: str
    ip_address: Optional[str] = None
    location: Optional[str] = None
    is_current: bool
    is_verified: bool


class DataVisibilitySettings(ApiModel):
    show_medical_records: bool = True
    show_lab_reports: bool = True
    show_prescriptions: bool = True
    show_vaccinations: bool = True
    show_allergies: bool = True
    show_chronic_conditions: bool = True
    show_medications: bool = True
    show_insurance_info: bool = True
    show_emergency_card: bool = True

    mask_sensitive_diagnoses: bool = False
    mask_mental_health_records: bool = False
    mask_reproductive_health_records: bool = False


class SectionLockSettings(ApiModel):
    lock_health_records: bool = False
    lock_lab_reports: bool = False
    lock_prescriptions: bool = False
    lock_insurance: bool = False
    lock_consent_management: bool = False
    lock_emergency_card: bool = False
    lock_settings: bool = False


class SecuritySettings(ApiModel):
    user_id: str

    pin_enabled: bool = False
    pin_hash: Optional[str] = None
    biometric_enabled: bool = False
    biometric_type: Optional[BiometricType] = None

    device_binding_enabled: bool = False
    trusted_devices: List[TrustedDevice] = Field(default_factory=list)
    max_trusted_devices: int = 5
    require_approval_for_new_device: bool = True

    session_timeout: int = 15  # minutes of inactivity
    auto_lock_enabled: bool = True
    auto_lock_duration: int = 5  # minutes
    logout_on_screen_lock: bool = False

    screenshot_prevention: bool = False
    screen_recording_prevention: bool = False
    hide_notification_content: bool = False

    data_visibility: DataVisibilitySettings = Field(default_factory=DataVisibilitySettings)
    section_locks: SectionLockSettings = Field(default_factory=SectionLockSettings)

    login_alerts: bool = True
    new_device_alerts: bool = True
    suspicious_activity_alerts: bool = True

    require_re_auth_for_sensitive_actions: bool = True
    two_factor_enabled: bool = False


class LoginSession(ApiModel):
    id: str
    user_id: str
    device_id: str
    device_name: str
    platform: str
    ip_address: str
    location: Optional[str] = None
    login_time: str
    last_activity: str
    is_active: bool
    expires_at: str


class SecurityEvent(ApiModel):
    id: str
    user_id: str
    event_type: Literal[
        "login", "logout", "failed-login", "new-device", "device-removed", "settings-changed", "suspicious-activity"
    ]
    timestamp: str
    device_id: Optional[str] = None
    device_name: Optional[str] = None
    ip_address: Optional[str] = None
    location: Optional[str] = None
    details: str
    severity: Literal["info", "warning", "critical"]
    acknowledged: bool


class BiometricAuthResult(ApiModel):
    success: bool
    error: Optional[str] = None
    biometric_type: Optional[BiometricType] = None


class PinValidationResult(ApiModel):
    valid: bool
    attempts_remaining: Optional[int] = None
    locked_until: Optional[str] = None


class DeviceApprovalRequest(ApiModel):
    id: str
    requested_by: str  # device id
    device_name: str
    device_type: str
    platform: str
    ip_address: str
    location: Optional[str] = None
    requested_at: str
    status: Literal["pending", "approved", "rejected"]


class AddTrustedDeviceRequest(ApiModel):
    device_name: str
    device_type: DeviceType
    platform: Platform
    device_id: str


class PrivacyShieldScore(ApiModel):
    score: int = Field(ge=0, le=100)
    level: Literal["low", "medium", "high", "maximum"]
    recommendations: List[str] = Field(default_factory=list)
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    last_calculated: str


# ---------------------------------------------------------------------------
# Service interface
# ---------------------------------------------------------------------------

class SecurityService(ABC):

    # Settings
    @abstractmethod
    async def get_security_settings(self) -> SecuritySettings:
        ...

    @abstractmethod
    async def update_security_settings(self, updates: Dict[str, Any]) -> SecuritySettings:
        ...

    # PIN
    @abstractmethod
    async def set_pin(self, pin: str, confirm_pin: str) -> None:
        """Raises ServiceError when the PINs differ or are not 4-6 digits."""

    @abstractmethod
    async def validate_pin(self, pin: str) -> PinValidationResult:
        ...

    @abstractmethod
    async def change_pin(self, old_pin: str, new_pin: str, confirm_new_pin: str) -> None:
        ...

    @abstractmethod
    async def remove_pin(self) -> None:
        ...

    # Biometrics
    @abstractmethod
    async def enable_biometric(self, biometric_type: BiometricType) -> None:
        ...

    @abstractmethod
    async def disable_biometric(self) -> None:
        ...

    @abstractmethod
    async def authenticate_with_biometric(self) -> BiometricAuthResult:
        ...

    # Devices
    @abstractmethod
    async def get_trusted_devices(self) -> List[TrustedDevice]:
        ...

    @abstractmethod
    async def add_trusted_device(self, request: AddTrustedDeviceRequest) -> TrustedDevice:
        ...

    @abstractmethod
    async def remove_trusted_device(self, device_id: str) -> None:
        ...

    @abstractmethod
    async def get_pending_device_approvals(self) -> List[DeviceApprovalRequest]:
        ...

    @abstractmethod
    async def approve_device(self, approval_id: str) -> None:
        ...

    @abstractmethod
    async def reject_device(self, approval_id: str) -> None:
        ...

    # Sessions
    @abstractmethod
    async def get_active_sessions(self) -> List[LoginSession]:
        ...

    @abstractmethod
    async def terminate_session(self, session_id: str) -> None:
        ...

    @abstractmethod
    async def terminate_all_other_sessions(self) -> None:
        ...

    # Events
    @abstractmethod
    async def get_security_events(self) -> List[SecurityEvent]:
        ...

    @abstractmethod
    async def acknowledge_security_event(self, event_id: str) -> None:
        ...

    # Privacy
    @abstractmethod
    async def update_data_visibility(self, updates: Dict[str, Any]) -> None:
        ...

    @abstractmethod
    async def update_section_locks(self, updates: Dict[str, Any]) -> None:
        ...

    @abstractmethod
    async def get_privacy_shield_score(self) -> PrivacyShieldScore:
        ...
