import json

import pytest

from ayusetu.integrations.clients.mocks import MockSecurityClient
from ayusetu.integrations.clients.mocks.security import DEV_PIN, MAX_PIN_ATTEMPTS, is_valid_pin
from ayusetu.integrations.contracts.security import AddTrustedDeviceRequest
from ayusetu.integrations.errors import ServiceError


@pytest.mark.parametrize(
    "pin,expected",
    [
        ("1234", True),
        ("123456", True),
        ("123", False),
        ("12a4", False),
        ("1234567", False),
        ("²³⁴⁵", False),
        ("١٢٣٤", False),
    ],
)
def test_pin_format(pin, expected):
    assert is_valid_pin(pin) is expected


@pytest.mark.asyncio
async def test_set_pin_checks_match_before_format(config):
    client = MockSecurityClient(config)

    with pytest.raises(ServiceError, match="PINs do not match"):
        await client.set_pin("12", "34")
    with pytest.raises(ServiceError, match="PIN must be 4-6 digits"):
        await client.set_pin("12", "12")
    await client.set_pin("4321", "4321")


@pytest.mark.asyncio
async def test_validate_pin(config):
    client = MockSecurityClient(config)

    ok = await client.validate_pin(DEV_PIN)
    bad = await client.validate_pin("0000")

    assert ok.valid is True
    assert bad.valid is False
    assert bad.attempts_remaining == MAX_PIN_ATTEMPTS


@pytest.mark.asyncio
async def test_change_pin_error_order(config):
    client = MockSecurityClient(config)

    with pytest.raises(ServiceError, match="New PINs do not match"):
        await client.change_pin("0000", "5678", "8765")
    with pytest.raises(ServiceError, match="Current PIN is incorrect"):
        await client.change_pin("0000", "5678", "5678")
    with pytest.raises(ServiceError, match="PIN must be 4-6 digits"):
        await client.change_pin(DEV_PIN, "56", "56")
    await client.change_pin(DEV_PIN, "5678", "5678")


@pytest.mark.asyncio
async def test_trusted_devices_add_and_remove(config):
    client = MockSecurityClient(config)

    device = await client.add_trusted_device(
        AddTrustedDeviceRequest(device_name="Pixel 8", device_type="mobile", platform="Android", device_id="and-1")
    )
    assert device.is_verified is True
    assert len(await client.get_trusted_devices()) == 3

    await client.remove_trusted_device("web-device-456")
    ids = [d.device_id for d in await client.get_trusted_devices()]
    assert ids == ["ios-device-123", "and-1"]
    assert [d.device_id for d in (await client.get_security_settings()).trusted_devices] == ids


@pytest.mark.asyncio
async def test_sessions(config):
    client = MockSecurityClient(config)

    await client.terminate_all_other_sessions()

    assert [s.id for s in await client.get_active_sessions()] == ["session-001"]

    await client.terminate_session("session-001")
    assert await client.get_active_sessions() == []


@pytest.mark.asyncio
async def test_acknowledge_security_event(config):
    client = MockSecurityClient(config)

    await client.acknowledge_security_event("event-002")

    assert all(event.acknowledged for event in await client.get_security_events())


@pytest.mark.asyncio
async def test_settings_update_is_not_stored(config):
    client = MockSecurityClient(config)

    updated = await client.update_security_settings({"session_timeout": 30, "twoFactorEnabled": True})

    assert updated.session_timeout == 30
    assert updated.two_factor_enabled is True
    assert (await client.get_security_settings()).session_timeout == 15


@pytest.mark.asyncio
async def test_badly_typed_settings_update_raises_service_error(config):
    client = MockSecurityClient(config)

    with pytest.raises(ServiceError, match="Failed to update security settings"):
        await client.update_security_settings({"sessionTimeout": "soon"})


@pytest.mark.asyncio
async def test_biometric_and_privacy_score(config):
    client = MockSecurityClient(config)

    await client.enable_biometric("face-id")
    result = await client.authenticate_with_biometric()
    score = await client.get_privacy_shield_score()

    assert result.success is True
    assert score.score == 85
    assert score.level == "high"
    assert await client.get_privacy_shield_score() == score


@pytest.mark.asyncio
async def test_live_change_pin_body(live_services, router):
    router.add("POST", "/security/pin/change", None)

    await live_services.security.change_pin("1234", "5678", "5678")

    body = json.loads(router.last("POST", "/security/pin/change").content)
    assert body == {"oldPin": "1234", "newPin": "5678", "confirmNewPin": "5678"}


@pytest.mark.asyncio
async def test_live_pin_rejection_surfaces_service_error(live_services, router):
    router.add("POST", "/security/pin", {"message": "PINs do not match"}, status=400)

    with pytest.raises(ServiceError) as exc_info:
        await live_services.security.set_pin("1234", "4321")

    assert str(exc_info.value) == "Failed to set PIN"
    assert exc_info.value.payload == {"message": "PINs do not match"}
