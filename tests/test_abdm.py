import json

import pytest

from ayusetu.integrations.clients.mocks import MockAbdmClient
from ayusetu.integrations.clients.mocks.abdm import DEV_SESSION_TOKEN
from ayusetu.integrations.contracts.abdm import Gender
from ayusetu.integrations.errors import ServiceError


@pytest.mark.asyncio
async def test_mock_aadhaar_registration_chain(config):
    client = MockAbdmClient(config)

    generated = await client.generate_aadhaar_otp("123456789012")
    assert generated.txn_id.startswith("dev-txn-aadhaar-")

    verified = await client.verify_aadhaar_otp("123456", generated.txn_id)
    assert verified.txn_id.startswith("dev-verified-txn-")
    assert verified.mobile_number == "9876543210"

    account = await client.create_abha_with_aadhaar(verified.txn_id)
    assert account.health_id_number == config.dev_abha_number
    assert account.token


@pytest.mark.asyncio
async def test_mock_mobile_registration_chain(config):
    client = MockAbdmClient(config)

    generated = await client.generate_mobile_otp("9123456789")
    assert generated.txn_id.startswith("dev-txn-mobile-")

    verified = await client.verify_mobile_otp("123456", generated.txn_id)
    assert verified.txn_id.startswith("dev-verified-mobile-txn-")

    account = await client.create_abha_with_mobile(
        verified.txn_id, "Asha", "Verma", Gender.FEMALE, "1992", "9123456789"
    )
    assert account.health_id == "asha@abdm"
    assert account.name == "Asha Verma"
    assert account.mobile_number == "9123456789"
    assert account.gender == Gender.FEMALE


@pytest.mark.asyncio
async def test_mock_email_registration_chain(config):
    client = MockAbdmClient(config)

    generated = await client.generate_email_otp("asha@example.com")
    assert generated.txn_id.startswith("dev-txn-email-")

    verified = await client.verify_email_otp("123456", generated.txn_id)
    assert verified.txn_id.startswith("dev-verified-email-txn-")

    account = await client.create_abha_with_email(
        verified.txn_id, "Asha", "Verma", Gender.FEMALE, "1992", "asha@example.com"
    )
    assert account.email == "asha@example.com"


@pytest.mark.asyncio
async def test_mock_login_profile_and_addresses(config):
    client = MockAbdmClient(config)

    assert await client.get_session_token() == DEV_SESSION_TOKEN

    txn = await client.login_with_abha(config.dev_abha_number)
    assert txn.txn_id.startswith("dev-txn-login-")
    account = await client.verify_login_otp("123456", txn.txn_id)
    assert account.health_id == config.dev_abha_address

    profile = await client.get_profile(account.token)
    assert profile.mobile_number == config.dev_mobile
    assert await client.update_profile(account.token, {"email": "new@example.com"}) is True

    assert await client.check_address_availability("username@abdm") is False
    assert await client.check_address_availability("someone-new@abdm") is True
    address = await client.create_abha_address(account.token, "someone-new@abdm")
    assert address.health_id == "someone-new@abdm"
    assert await client.set_preferred_address(account.token, "someone-new@abdm") is True


def _add_session_route(router):
    router.add("POST", "/v1/auth/init", {"accessToken": "gateway-token", "expiresIn": 1800})


@pytest.mark.asyncio
async def test_live_aadhaar_otp_sends_bearer_token(live_services, router):
    _add_session_route(router)
    router.add("POST", "/v2/registration/aadhaar/generateOtp", {"txnId": "txn-live-1"})

    result = await live_services.abdm.generate_aadhaar_otp("123456789012")

    assert result.txn_id == "txn-live-1"
    session = router.last("POST", "/v1/auth/init")
    assert json.loads(session.content) == {"clientId": "test-client", "clientSecret": "test-secret"}
    request = router.last("POST", "/v2/registration/aadhaar/generateOtp")
    assert request.headers["authorization"] == "Bearer gateway-token"
    assert json.loads(request.content) == {"aadhaar": "123456789012"}


@pytest.mark.asyncio
async def test_live_fetches_a_fresh_token_for_every_call(live_services, router):
    _add_session_route(router)
    router.add("POST", "/v2/registration/mobile/generateOtp", {"txnId": "t1"})
    router.add("POST", "/v2/registration/mobile/verifyOtp", {"txnId": "t2"})

    first = await live_services.abdm.generate_mobile_otp("9123456789")
    await live_services.abdm.verify_mobile_otp("123456", first.txn_id)

    token_calls = [r for r in router.requests if r.url.path.endswith("/v1/auth/init")]
    assert len(token_calls) == 2
    verify = router.last("POST", "/v2/registration/mobile/verifyOtp")
    assert json.loads(verify.content) == {"otp": "123456", "txnId": "t1"}


@pytest.mark.asyncio
async def test_live_unknown_txn_surfaces_service_error(live_services, router):
    _add_session_route(router)
    router.add(
        "POST",
        "/v2/registration/aadhaar/verifyOTP",
        {"code": "HIS-1041", "message": "Invalid transaction id"},
        status=400,
    )

    with pytest.raises(ServiceError) as exc_info:
        await live_services.abdm.verify_aadhaar_otp("123456", "bogus-txn")

    assert str(exc_info.value) == "Failed to verify Aadhaar OTP"
    assert exc_info.value.status_code == 400
    assert exc_info.value.payload["code"] == "HIS-1041"


@pytest.mark.asyncio
async def test_live_session_token_requires_access_token(live_services, router):
    router.add("POST", "/v1/auth/init", {"expiresIn": 1800})

    with pytest.raises(ServiceError):
        await live_services.abdm.get_session_token()


@pytest.mark.asyncio
async def test_live_profile_uses_x_token(live_services, router):
    router.add(
        "GET",
        "/v1/account/profile",
        {"healthIdNumber": "12-3456-7890-1234", "healthId": "asha@abdm", "name": "Asha Verma"},
    )

    profile = await live_services.abdm.get_profile("user-jwt")

    assert profile.health_id == "asha@abdm"
    request = router.last("GET", "/v1/account/profile")
    assert request.headers["x-token"] == "user-jwt"
    assert "authorization" not in request.headers


@pytest.mark.asyncio
async def test_live_address_availability_inverts_exists(live_services, router):
    _add_session_route(router)
    router.add("POST", "/v1/search/existsByHealthId", {"exists": True})

    assert await live_services.abdm.check_address_availability("taken@abdm") is False
