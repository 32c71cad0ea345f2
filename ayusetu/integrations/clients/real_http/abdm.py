"""
Real ABDM gateway client.

Every registration and login call first fetches a session token from
/v1/auth/init and sends it as a bearer token. Tokens are not cached or
refreshed. Account-scoped calls (profile, PHR address) authenticate with the
user's X-Token instead.
"""

import logging
from typing import Any, Dict, Optional

from ayusetu.config import AyuSetuConfig
from ayusetu.integrations.contracts.abdm import (
    AbdmService,
    AbhaAccount,
    AbhaAddress,
    AbhaProfile,
    Gender,
    OtpVerification,
    TxnResponse,
)
from ayusetu.integrations.errors import ServiceError, build_model
from ayusetu.integrations.http_client import ApiClient

from .base import RealHttpClientBase

logger = logging.getLogger(__name__)


class RealAbdmClient(RealHttpClientBase, AbdmService):

    def __init__(self, api: ApiClient, config: Optional[AyuSetuConfig] = None) -> None:
        super().__init__(api)
        self.config = config or AyuSetuConfig()
        if not self.config.client_id or not self.config.client_secret:
            logger.warning("ABDM client credentials are not set; session token requests will fail")

    async def _authorized_post(self, path: str, body: Dict[str, Any], error_message: str) -> Any:
        token = await self.get_session_token()
        return await self._call(
            "POST", path, error_message, json=body, headers={"Authorization": f"Bearer {token}"}
        )

    @staticmethod
    def _gender(gender: Gender) -> str:
        return gender.value if isinstance(gender, Gender) else str(gender)

    async def get_session_token(self) -> str:
        msg = "Failed to get session token"
        data = await self._call(
            "POST",
            "/v1/auth/init",
            msg,
            json={"clientId": self.config.client_id, "clientSecret": self.config.client_secret},
        )
        token = data.get("accessToken") if isinstance(data, dict) else None
        if not token:
            raise ServiceError(msg, payload=data)
        return token

    async def generate_aadhaar_otp(self, aadhaar: str) -> TxnResponse:
        msg = "Failed to generate Aadhaar OTP"
        data = await self._authorized_post("/v2/registration/aadhaar/generateOtp", {"aadhaar": aadhaar}, msg)
        return build_model(TxnResponse, data, msg)

    async def verify_aadhaar_otp(self, otp: str, txn_id: str) -> OtpVerification:
        msg = "Failed to verify Aadhaar OTP"
        data = await self._authorized_post(
            "/v2/registration/aadhaar/verifyOTP", {"otp": otp, "txnId": txn_id}, msg
        )
        return build_model(OtpVerification, data, msg)

    async def create_abha_with_aadhaar(self, txn_id: str, health_id: Optional[str] = None) -> AbhaAccount:
        msg = "Failed to create ABHA with Aadhaar"
        body = {"txnId": txn_id}
        if health_id:
            body["healthId"] = health_id
        data = await self._authorized_post("/v2/registration/aadhaar/createHealthId", body, msg)
        return build_model(AbhaAccount, data, msg)

    async def generate_mobile_otp(self, mobile: str) -> TxnResponse:
        msg = "Failed to generate mobile OTP"
        data = await self._authorized_post("/v2/registration/mobile/generateOtp", {"mobile": mobile}, msg)
        return build_model(TxnResponse, data, msg)

    async def verify_mobile_otp(self, otp: str, txn_id: str) -> OtpVerification:
        msg = "Failed to verify mobile OTP"
        data = await self._authorized_post(
            "/v2/registration/mobile/verifyOtp", {"otp": otp, "txnId": txn_id}, msg
        )
        return build_model(OtpVerification, data, msg)

    async def create_abha_with_mobile(
        self,
        txn_id: str,
        first_name: str,
        last_name: str,
        gender: Gender,
        year_of_birth: str,
        mobile: str,
    ) -> AbhaAccount:
        msg = "Failed to create ABHA with mobile"
        body = {
            "txnId": txn_id,
            "firstName": first_name,
            "lastName": last_name,
            "gender": self._gender(gender),
            "yearOfBirth": year_of_birth,
            "mobile": mobile,
        }
        data = await self._authorized_post("/v2/registration/mobile/createHealthId", body, msg)
        return build_model(AbhaAccount, data, msg)

    async def generate_email_otp(self, email: str) -> TxnResponse:
        msg = "Failed to generate email OTP"
        data = await self._authorized_post("/v2/registration/email/generateOtp", {"email": email}, msg)
        return build_model(TxnResponse, data, msg)

    async def verify_email_otp(self, otp: str, txn_id: str) -> OtpVerification:
        msg = "Failed to verify email OTP"
        data = await self._authorized_post(
            "/v2/registration/email/verifyOtp", {"otp": otp, "txnId": txn_id}, msg
        )
        return build_model(OtpVerification, data, msg)

    async def create_abha_with_email(
        self,
        txn_id: str,
        first_name: str,
        last_name: str,
        gender: Gender,
        year_of_birth: str,
        email: str,
    ) -> AbhaAccount:
        msg = "Failed to create ABHA with email"
        body = {
            "txnId": txn_id,
            "firstName": first_name,
            "lastName": last_name,
            "gender": self._gender(gender),
            "yearOfBirth": year_of_birth,
            "email": email,
        }
        data = await self._authorized_post("/v2/registration/email/createHealthId", body, msg)
        return build_model(AbhaAccount, data, msg)

    async def login_with_abha(self, abha_number: str) -> TxnResponse:
        msg = "Failed to initiate ABHA login"
        data = await self._authorized_post("/v2/auth/init", {"healthIdNumber": abha_number}, msg)
        return build_model(TxnResponse, data, msg)

    async def verify_login_otp(self, otp: str, txn_id: str) -> AbhaAccount:
        msg = "Failed to verify login OTP"
        data = await self._authorized_post("/v2/auth/confirmOtp", {"otp": otp, "txnId": txn_id}, msg)
        return build_model(AbhaAccount, data, msg)

    async def get_profile(self, x_token: str) -> AbhaProfile:
        msg = "Failed to fetch profile"
        data = await self._call("GET", "/v1/account/profile", msg, headers={"X-Token": x_token})
        return build_model(AbhaProfile, data, msg)

    async def update_profile(self, x_token: str, updates: Dict[str, Any]) -> bool:
        await self._call(
            "PATCH", "/v1/account/profile", "Failed to update profile", json=updates, headers={"X-Token": x_token}
        )
        return True

    async def check_address_availability(self, health_id: str) -> bool:
        msg = "Failed to check ABHA address availability"
        data = await self._authorized_post("/v1/search/existsByHealthId", {"healthId": health_id}, msg)
        if not isinstance(data, dict) or "exists" not in data:
            raise ServiceError(msg, payload=data)
        return not data["exists"]

    async def create_abha_address(self, x_token: str, health_id: str) -> AbhaAddress:
        msg = "Failed to create ABHA address"
        data = await self._call(
            "POST", "/v1/account/phr-address", msg, json={"healthId": health_id}, headers={"X-Token": x_token}
        )
        return build_model(AbhaAddress, data, msg)

    async def set_preferred_address(self, x_token: str, health_id: str) -> bool:
        await self._call(
            "POST",
            "/v1/account/phr-address/preferred",
            "Failed to set preferred ABHA address",
            json={"healthId": health_id},
            headers={"X-Token": x_token},
        )
        return True
