"""
Mock ABDM Client.

Purpose:
- Fakes the ABDM gateway for development (ABHA creation, login, profile)
- Does NOT make any network calls
- Every OTP step succeeds and accepts any txn_id

Identifiers come from the developer fixtures on AyuSetuConfig
(dev_abha_number, dev_abha_address, dev_mobile).
"""

import logging
from typing import Any, Dict, Optional

from ayusetu.integrations.contracts.abdm import (
    AbdmService,
    AbhaAccount,
    AbhaAddress,
    AbhaProfile,
    Gender,
    OtpVerification,
    TxnResponse,
)

from .base import MockClientBase

logger = logging.getLogger(__name__)

DEV_SESSION_TOKEN = "dev-mock-token-12345"
DEV_JWT_TOKEN = "dev-jwt-token-12345"
DEV_NAME = "Developer User"
DEV_YEAR_OF_BIRTH = "1990"

# Addresses the mock treats as already claimed
_TAKEN_ADDRESSES = {"username@abdm"}

# Gateway latency emulation, in seconds
_OTP_DELAY = 0.5
_DEFAULT_DELAY = 1.0


class MockAbdmClient(MockClientBase, AbdmService):
    label = "ABDM MOCK"

    def _txn(self, prefix: str) -> str:
        return f"{prefix}{self._now_ms()}"

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    async def get_session_token(self) -> str:
        await self._delay(0.5)
        return DEV_SESSION_TOKEN

    # ------------------------------------------------------------------
    # Aadhaar
    # ------------------------------------------------------------------

    async def generate_aadhaar_otp(self, aadhaar: str) -> TxnResponse:
        await self._delay(_OTP_DELAY)
        logger.info("[%s] Generated Aadhaar OTP for %s", self.label, aadhaar)
        return TxnResponse(txn_id=self._txn("dev-txn-aadhaar-"))

    async def verify_aadhaar_otp(self, otp: str, txn_id: str) -> OtpVerification:
        await self._delay(_DEFAULT_DELAY)
        logger.info("[%s] Verified Aadhaar OTP txn=%s", self.label, txn_id)
        return OtpVerification(
            txn_id=self._txn("dev-verified-txn-"),
            mobile_number=self.config.dev_mobile,
            name=DEV_NAME,
            year_of_birth=DEV_YEAR_OF_BIRTH,
            gender=Gender.MALE,
        )

    async def create_abha_with_aadhaar(self, txn_id: str, health_id: Optional[str] = None) -> AbhaAccount:
        await self._delay(_DEFAULT_DELAY)
        logger.info("[%s] Created ABHA with Aadhaar txn=%s", self.label, txn_id)
        return AbhaAccount(
            health_id_number=self.config.dev_abha_number,
            health_id=health_id or self.config.dev_abha_address,
            name=DEV_NAME,
            token=DEV_JWT_TOKEN,
            mobile_number=self.config.dev_mobile,
            year_of_birth=DEV_YEAR_OF_BIRTH,
            gender=Gender.MALE,
        )

    # ------------------------------------------------------------------
    # Mobile
    # ------------------------------------------------------------------

    async def generate_mobile_otp(self, mobile: str) -> TxnResponse:
        await self._delay(_OTP_DELAY)
        logger.info("[%s] Generated mobile OTP for %s", self.label, mobile)
        return TxnResponse(txn_id=self._txn("dev-txn-mobile-"))

    async def verify_mobile_otp(self, otp: str, txn_id: str) -> OtpVerification:
        await self._delay(_DEFAULT_DELAY)
        return OtpVerification(
            txn_id=self._txn("dev-verified-mobile-txn-"),
            mobile_number=self.config.dev_mobile,
        )

    async def create_abha_with_mobile(
        self,
        txn_id: str,
        first_name: str,
        last_name: str,
        gender: Gender,
        year_of_birth: str,
        mobile: str,
    ) -> AbhaAccount:
        await self._delay(_DEFAULT_DELAY)
        logger.info("[%s] Created ABHA with mobile txn=%s", self.label, txn_id)
        return AbhaAccount(
            health_id_number=self.config.dev_abha_number,
            health_id=f"{first_name.lower()}@abdm",
            name=f"{first_name} {last_name}",
            token=DEV_JWT_TOKEN,
            mobile_number=mobile,
            year_of_birth=year_of_birth,
            gender=gender,
        )

    # ------------------------------------------------------------------
    # Email
    # ------------------------------------------------------------------

    async def generate_email_otp(self, email: str) -> TxnResponse:
        await self._delay(_OTP_DELAY)
        logger.info("[%s] Generated email OTP for %s", self.label, email)
        return TxnResponse(txn_id=self._txn("dev-txn-email-"))

    async def verify_email_otp(self, otp: str, txn_id: str) -> OtpVerification:
        await self._delay(_DEFAULT_DELAY)
        return OtpVerification(txn_id=self._txn("dev-verified-email-txn-"), email="user@example.com")

    async def create_abha_with_email(
        self,
        txn_id: str,
        first_name: str,
        last_name: str,
        gender: Gender,
        year_of_birth: str,
        email: str,
    ) -> AbhaAccount:
        await self._delay(_DEFAULT_DELAY)
        logger.info("[%s] Created ABHA with email txn=%s", self.label, txn_id)
        return AbhaAccount(
            health_id_number=self.config.dev_abha_number,
            health_id=f"{first_name.lower()}@abdm",
            name=f"{first_name} {last_name}",
            token=DEV_JWT_TOKEN,
            email=email,
            year_of_birth=year_of_birth,
            gender=gender,
        )

    # ------------------------------------------------------------------
    # Login
    # ------------------------------------------------------------------

    async def login_with_abha(self, abha_number: str) -> TxnResponse:
        await self._delay(_OTP_DELAY)
        logger.info("[%s] Login initiated for ABHA %s", self.label, abha_number)
        return TxnResponse(txn_id=self._txn("dev-txn-login-"))

    async def verify_login_otp(self, otp: str, txn_id: str) -> AbhaAccount:
        await self._delay(_DEFAULT_DELAY)
        return AbhaAccount(
            health_id_number=self.config.dev_abha_number,
            health_id=self.config.dev_abha_address,
            name=DEV_NAME,
            token=DEV_JWT_TOKEN,
            mobile_number=self.config.dev_mobile,
            year_of_birth=DEV_YEAR_OF_BIRTH,
            gender=Gender.MALE,
        )

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    async def get_profile(self, x_token: str) -> AbhaProfile:
        await self._delay(_DEFAULT_DELAY)
        return AbhaProfile(
            health_id_number=self.config.dev_abha_number,
            health_id=self.config.dev_abha_address,
            name=DEV_NAME,
            first_name="Developer",
            last_name="User",
            gender=Gender.MALE,
            year_of_birth=DEV_YEAR_OF_BIRTH,
            mobile_number=self.config.dev_mobile,
            email="dev@example.com",
        )

    async def update_profile(self, x_token: str, updates: Dict[str, Any]) -> bool:
        await self._delay(_DEFAULT_DELAY)
        logger.info("[%s] Profile updated fields=%s", self.label, list(updates.keys()))
        return True

    # ------------------------------------------------------------------
    # ABHA address
    # ------------------------------------------------------------------

    async def check_address_availability(self, health_id: str) -> bool:
        await self._delay(0.5)
        return health_id not in _TAKEN_ADDRESSES

    async def create_abha_address(self, x_token: str, health_id: str) -> AbhaAddress:
        await self._delay(_DEFAULT_DELAY)
        logger.info("[%s] Created ABHA address %s", self.label, health_id)
        return AbhaAddress(health_id=health_id, preferred=False)

    async def set_preferred_address(self, x_token: str, health_id: str) -> bool:
        await self._delay(_DEFAULT_DELAY)
        logger.info("[%s] Preferred ABHA address set to %s", self.label, health_id)
        return True
