"""
Mock Security Client.

Developer PIN is ``1234``. Trusted devices, sessions and security events are
kept per instance; settings updates are returned merged but not stored.
"""

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List

from ayusetu.integrations.contracts.base import merge_model
from ayusetu.integrations.contracts.security import (
    AddTrustedDeviceRequest,
    BiometricAuthResult,
    BiometricType,
    DataVisibilitySettings,
    DeviceApprovalRequest,
    LoginSession,
    PinValidationResult,
    PrivacyShieldScore,
    SectionLockSettings,
    SecurityEvent,
    SecurityService,
    SecuritySettings,
    TrustedDevice,
)
from ayusetu.integrations.errors import ServiceError

from .base import MockClientBase

logger = logging.getLogger(__name__)

MOCK_USER_ID = "user-001"
DEV_PIN = "1234"
MAX_PIN_ATTEMPTS = 3


def _iso(moment: datetime) -> str:
    return moment.isoformat().replace("+00:00", "Z")


def is_valid_pin(pin: str) -> bool:
    return re.fullmatch(r"[0-9]{4,6}", pin) is not None


class MockSecurityClient(MockClientBase, SecurityService):
    label = "SECURITY MOCK"

    def __init__(self, config=None) -> None:
        super().__init__(config)
        now = datetime.now(timezone.utc)
        self._anchor = now
        # In-memory stores (reset on restart)
        self._devices: List[TrustedDevice] = [
            TrustedDevice(
                id="device-001", device_name="Personal iPhone", device_type="mobile", platform="iOS",
                device_id="ios-device-123", first_seen=_iso(now - timedelta(days=30)), last_seen=_iso(now),
                ip_address="192.168.1.10", location="New Delhi, India", is_current=True, is_verified=True,
            ),
            TrustedDevice(
                id="device-002", device_name="Work MacBook", device_type="desktop", platform="Web",
                device_id="web-device-456", first_seen=_iso(now - timedelta(days=60)),
                last_seen=_iso(now - timedelta(days=2)), ip_address="192.168.1.20",
                location="New Delhi, India", is_current=False, is_verified=True,
            ),
        ]
        self._sessions: List[LoginSession] = [
            LoginSession(
                id="session-001", user_id=MOCK_USER_ID, device_id="ios-device-123",
                device_name="Personal iPhone", platform="iOS", ip_address="192.168.1.10",
                location="New Delhi, India", login_time=_iso(now - timedelta(hours=2)), last_activity=_iso(now),
                is_active=True, expires_at=_iso(now + timedelta(hours=24)),
            ),
            LoginSession(
                id="session-002", user_id=MOCK_USER_ID, device_id="web-device-456",
                device_name="Work MacBook", platform="Web", ip_address="192.168.1.20",
                location="New Delhi, India", login_time=_iso(now - timedelta(hours=24)),
                last_activity=_iso(now - timedelta(hours=1)), is_active=True,
                expires_at=_iso(now + timedelta(hours=23)),
            ),
        ]
        self._events: List[SecurityEvent] = [
            SecurityEvent(
                id="event-001", user_id=MOCK_USER_ID, event_type="login",
                timestamp=_iso(now - timedelta(hours=2)), device_id="ios-device-123",
                device_name="Personal iPhone", ip_address="192.168.1.10", location="New Delhi, India",
                details="Successful login with biometric", severity="info", acknowledged=True,
            ),
            SecurityEvent(
                id="event-002", user_id=MOCK_USER_ID, event_type="failed-login",
                timestamp=_iso(now - timedelta(hours=5)), device_id="unknown-device",
                ip_address="103.45.67.89", location="Unknown",
                details="Failed login attempt - incorrect PIN", severity="warning", acknowledged=False,
            ),
            SecurityEvent(
                id="event-003", user_id=MOCK_USER_ID, event_type="new-device",
                timestamp=_iso(now - timedelta(hours=24)), device_id="web-device-456",
                device_name="Work MacBook", ip_address="192.168.1.20", location="New Delhi, India",
                details="New device added to trusted devices", severity="info", acknowledged=True,
            ),
        ]

    def _settings(self) -> SecuritySettings:
        return SecuritySettings(
            user_id=MOCK_USER_ID,
            pin_enabled=True,
            pin_hash="hashed_pin_value",
            biometric_enabled=True,
            biometric_type="fingerprint",
            device_binding_enabled=True,
            trusted_devices=self._copy(self._devices),
            max_trusted_devices=5,
            require_approval_for_new_device=True,
            session_timeout=15,
            auto_lock_enabled=True,
            auto_lock_duration=5,
            logout_on_screen_lock=False,
            screenshot_prevention=True,
            screen_recording_prevention=True,
            hide_notification_content=True,
            data_visibility=DataVisibilitySettings(
                mask_sensitive_diagnoses=True,
                mask_mental_health_records=True,
                mask_reproductive_health_records=True,
            ),
            section_locks=SectionLockSettings(
                lock_health_records=True,
                lock_lab_reports=True,
                lock_insurance=True,
                lock_consent_management=True,
                lock_settings=True,
            ),
            two_factor_enabled=False,
        )

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    async def get_security_settings(self) -> SecuritySettings:
        return self._settings()

    async def update_security_settings(self, updates: Dict[str, Any]) -> SecuritySettings:
        await self._delay(0.5)
        return merge_model(self._settings(), updates, "Failed to update security settings")

    # ------------------------------------------------------------------
    # PIN
    # ------------------------------------------------------------------

    async def set_pin(self, pin: str, confirm_pin: str) -> None:
        await self._delay(0.5)
        if pin != confirm_pin:
            raise ServiceError("PINs do not match")
        if not is_valid_pin(pin):
            raise ServiceError("PIN must be 4-6 digits")
        logger.info("[%s] PIN set", self.label)

    async def validate_pin(self, pin: str) -> PinValidationResult:
        await self._delay(0.3)
        if pin == DEV_PIN:
            return PinValidationResult(valid=True)
        return PinValidationResult(valid=False, attempts_remaining=MAX_PIN_ATTEMPTS)

    async def change_pin(self, old_pin: str, new_pin: str, confirm_new_pin: str) -> None:
        await self._delay(0.5)
        if new_pin != confirm_new_pin:
            raise ServiceError("New PINs do not match")
        if old_pin != DEV_PIN:
            raise ServiceError("Current PIN is incorrect")
        if not is_valid_pin(new_pin):
            raise ServiceError("PIN must be 4-6 digits")

    async def remove_pin(self) -> None:
        await self._delay(0.5)

    # ------------------------------------------------------------------
    # Biometrics
    # ------------------------------------------------------------------

    async def enable_biometric(self, biometric_type: BiometricType) -> None:
        await self._delay(0.5)
        logger.info("[%s] Biometric enabled: %s", self.label, biometric_type)

    async def disable_biometric(self) -> None:
        await self._delay(0.5)

    async def authenticate_with_biometric(self) -> BiometricAuthResult:
        await self._delay(1.0)
        return BiometricAuthResult(success=True, biometric_type="fingerprint")

    # ------------------------------------------------------------------
    # Devices
    # ------------------------------------------------------------------

    async def get_trusted_devices(self) -> List[TrustedDevice]:
        return self._copy(self._devices)

    async def add_trusted_device(self, request: AddTrustedDeviceRequest) -> TrustedDevice:
        await self._delay(0.5)
        now = self._iso_now()
        device = TrustedDevice(
            id=self._new_id("device"),
            device_name=request.device_name,
            device_type=request.device_type,
            platform=request.platform,
            device_id=request.device_id,
            first_seen=now,
            last_seen=now,
            ip_address="192.168.1.30",
            location="New Delhi, India",
            is_current=False,
            is_verified=True,
        )
        self._devices.append(device)
        return self._copy(device)

    async def remove_trusted_device(self, device_id: str) -> None:
        await self._delay(0.5)
        self._devices = [d for d in self._devices if d.device_id != device_id and d.id != device_id]

    async def get_pending_device_approvals(self) -> List[DeviceApprovalRequest]:
        return [
            DeviceApprovalRequest(
                id="approval-001",
                requested_by="new-device-789",
                device_name="iPad Pro",
                device_type="tablet",
                platform="iOS",
                ip_address="192.168.1.40",
                location="Mumbai, India",
                requested_at=_iso(self._anchor - timedelta(hours=2)),
                status="pending",
            )
        ]

    async def approve_device(self, approval_id: str) -> None:
        await self._delay(0.5)
        logger.info("[%s] Device approval %s approved", self.label, approval_id)

    async def reject_device(self, approval_id: str) -> None:
        await self._delay(0.5)
        logger.info("[%s] Device approval %s rejected", self.label, approval_id)

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    async def get_active_sessions(self) -> List[LoginSession]:
        return self._copy([s for s in self._sessions if s.is_active])

    async def terminate_session(self, session_id: str) -> None:
        await self._delay(0.5)
        for session in self._sessions:
            if session.id == session_id:
                session.is_active = False

    async def terminate_all_other_sessions(self) -> None:
        await self._delay(0.5)
        # The first session belongs to the current device
        for session in self._sessions[1:]:
            session.is_active = False

    # ------------------------------------------------------------------
    # Events / privacy
    # ------------------------------------------------------------------

    async def get_security_events(self) -> List[SecurityEvent]:
        return self._copy(self._events)

    async def acknowledge_security_event(self, event_id: str) -> None:
        await self._delay(0.3)
        for event in self._events:
            if event.id == event_id:
                event.acknowledged = True

    async def update_data_visibility(self, updates: Dict[str, Any]) -> None:
        await self._delay(0.5)

    async def update_section_locks(self, updates: Dict[str, Any]) -> None:
        await self._delay(0.5)

    async def get_privacy_shield_score(self) -> PrivacyShieldScore:
        return PrivacyShieldScore(
            score=85,
            level="high",
            recommendations=[
                "Enable two-factor authentication for enhanced security",
                "Consider enabling screenshot prevention for all sections",
            ],
            strengths=[
                "PIN and biometric authentication enabled",
                "Device binding active with trusted devices",
                "Sensitive data masking enabled",
                "Login alerts configured",
            ],
            weaknesses=[
                "Two-factor authentication not enabled",
                "Some sections not locked",
            ],
            last_calculated=_iso(self._anchor),
        )
