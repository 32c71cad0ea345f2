from typing import Any, Dict, List

from ayusetu.integrations.contracts.base import wire_updates
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
from ayusetu.integrations.errors import build_model, build_model_list

from .base import RealHttpClientBase


class RealSecurityClient(RealHttpClientBase, SecurityService):
    prefix = "/security"

    async def get_security_settings(self) -> SecuritySettings:
        msg = "Failed to fetch security settings"
        data = await self._call("GET", "/settings", msg)
        return build_model(SecuritySettings, data, msg)

    async def update_security_settings(self, updates: Dict[str, Any]) -> SecuritySettings:
        msg = "Failed to update security settings"
        data = await self._call("PUT", "/settings", msg, json=wire_updates(SecuritySettings, updates))
        return build_model(SecuritySettings, data, msg)

    async def set_pin(self, pin: str, confirm_pin: str) -> None:
        await self._call("POST", "/pin", "Failed to set PIN", json={"pin": pin, "confirmPin": confirm_pin})

    async def validate_pin(self, pin: str) -> PinValidationResult:
        msg = "Failed to validate PIN"
        data = await self._call("POST", "/pin/validate", msg, json={"pin": pin})
        return build_model(PinValidationResult, data, msg)

    async def change_pin(self, old_pin: str, new_pin: str, confirm_new_pin: str) -> None:
        await self._call(
            "POST",
            "/pin/change",
            "Failed to change PIN",
            json={"oldPin": old_pin, "newPin": new_pin, "confirmNewPin": confirm_new_pin},
        )

    async def remove_pin(self) -> None:
        await self._call("DELETE", "/pin", "Failed to remove PIN")

    async def enable_biometric(self, biometric_type: BiometricType) -> None:
        await self._call(
            "POST", "/biometric/enable", "Failed to enable biometric", json={"biometricType": biometric_type}
        )

    async def disable_biometric(self) -> None:
        await self._call("POST", "/biometric/disable", "Failed to disable biometric")

    async def authenticate_with_biometric(self) -> BiometricAuthResult:
        msg = "Failed to authenticate with biometric"
        data = await self._call("POST", "/biometric/authenticate", msg)
        return build_model(BiometricAuthResult, data, msg)

    async def get_trusted_devices(self) -> List[TrustedDevice]:
        msg = "Failed to fetch trusted devices"
        data = await self._call("GET", "/devices", msg)
        return build_model_list(TrustedDevice, data, msg)

    async def add_trusted_device(self, request: AddTrustedDeviceRequest) -> TrustedDevice:
        msg = "Failed to add trusted device"
        data = await self._call("POST", "/devices", msg, json=request.to_wire())
        return build_model(TrustedDevice, data, msg)

    async def remove_trusted_device(self, device_id: str) -> None:
        await self._call("DELETE", f"/devices/{device_id}", "Failed to remove trusted device")

    async def get_pending_device_approvals(self) -> List[DeviceApprovalRequest]:
        msg = "Failed to fetch device approvals"
        data = await self._call("GET", "/device-approvals", msg)
        return build_model_list(DeviceApprovalRequest, data, msg)

    async def approve_device(self, approval_id: str) -> None:
        await self._call("POST", f"/device-approvals/{approval_id}/approve", "Failed to approve device")

    async def reject_device(self, approval_id: str) -> None:
        await self._call("POST", f"/device-approvals/{approval_id}/reject", "Failed to reject device")

    async def get_active_sessions(self) -> List[LoginSession]:
        msg = "Failed to fetch active sessions"
        data = await self._call("GET", "/sessions", msg)
        return build_model_list(LoginSession, data, msg)

    async def terminate_session(self, session_id: str) -> None:
        await self._call("DELETE", f"/sessions/{session_id}", "Failed to terminate session")

    async def terminate_all_other_sessions(self) -> None:
        await self._call("POST", "/sessions/terminate-others", "Failed to terminate other sessions")

    async def get_security_events(self) -> List[SecurityEvent]:
        msg = "Failed to fetch security events"
        data = await self._call("GET", "/security-events", msg)
        return build_model_list(SecurityEvent, data, msg)

    async def acknowledge_security_event(self, event_id: str) -> None:
        await self._call(
            "POST", f"/security-events/{event_id}/acknowledge", "Failed to acknowledge security event"
        )

    async def update_data_visibility(self, updates: Dict[str, Any]) -> None:
        await self._call(
            "PUT",
            "/data-visibility",
            "Failed to update data visibility",
            json=wire_updates(DataVisibilitySettings, updates),
        )

    async def update_section_locks(self, updates: Dict[str, Any]) -> None:
        await self._call(
            "PUT",
            "/section-locks",
            "Failed to update section locks",
            json=wire_updates(SectionLockSettings, updates),
        )

    async def get_privacy_shield_score(self) -> PrivacyShieldScore:
        msg = "Failed to fetch privacy shield score"
        data = await self._call("GET", "/privacy-shield-score", msg)
        return build_model(PrivacyShieldScore, data, msg)
