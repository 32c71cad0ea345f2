"""
Contracts for ABHA (Ayushman Bharat Health Account) registration, login and
profile management against the ABDM gateway.

Registration is a strict three-step OTP flow per flavour (Aadhaar, mobile,
email): generate OTP -> verify OTP -> create ABHA. The ``txn_id`` returned by
one step is passed unchanged into the next; clients never inspect it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Optional

from .base import ApiModel


class Gender(str, Enum):
    MALE = "M"
    FEMALE = "F"
    OTHER = "O"


class TxnResponse(ApiModel):
    txn_id: str


class OtpVerification(ApiModel):
    txn_id: str
    mobile_number: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None
    year_of_birth: Optional[str] = None
    gender: Optional[Gender] = None


class AbhaAccount(ApiModel):
    """Returned on ABHA creation and on login confirmation."""

    health_id_number: str
    health_id: str
    name: str
    token: Optional[str] = None
    mobile_number: Optional[str] = None
    email: Optional[str] = None
    year_of_birth: Optional[str] = None
    gender: Optional[Gender] = None


class AbhaProfile(ApiModel):
    health_id_number: str
    health_id: str
    name: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    gender: Optional[Gender] = None
    year_of_birth: Optional[str] = None
    mobile_number: Optional[str] = None
    email: Optional[str] = None


class AbhaAddress(ApiModel):
    health_id: str
    preferred: bool = False


class AbdmService(ABC):

    # Session
    @abstractmethod
    async def get_session_token(self) -> str:
        """Obtain a gateway bearer token from the client credentials."""

    # Aadhaar-based creation
    @abstractmethod
    async def generate_aadhaar_otp(self, aadhaar: str) -> TxnResponse:
        ...

    @abstractmethod
    async def verify_aadhaar_otp(self, otp: str, txn_id: str) -> OtpVerification:
        ...

    @abstractmethod
    async def create_abha_with_aadhaar(self, txn_id: str, health_id: Optional[str] = None) -> AbhaAccount:
        ...

    # Mobile-based creation
    @abstractmethod
    async def generate_mobile_otp(self, mobile: str) -> TxnResponse:
        ...

    @abstractmethod
    async def verify_mobile_otp(self, otp: str, txn_id: str) -> OtpVerification:
        ...

    @abstractmethod
    async def create_abha_with_mobile(
        self,
        txn_id: str,
        first_name: str,
        last_name: str,
        gender: Gender,
        year_of_birth: str,
        mobile: str,
    ) -> AbhaAccount:
        ...

    # Email-based creation
    @abstractmethod
    async def generate_email_otp(self, email: str) -> TxnResponse:
        ...

    @abstractmethod
    async def verify_email_otp(self, otp: str, txn_id: str) -> OtpVerification:
        ...

    @abstractmethod
    async def create_abha_with_email(
        self,
        txn_id: str,
        first_name: str,
        last_name: str,
        gender: Gender,
        year_of_birth: str,
        email: str,
    ) -> AbhaAccount:
        ...

    # Login
    @abstractmethod
    async def login_with_abha(self, abha_number: str) -> TxnResponse:
        """Start an OTP login for an existing ABHA number."""

    @abstractmethod
    async def verify_login_otp(self, otp: str, txn_id: str) -> AbhaAccount:
        ...

    # Profile
    @abstractmethod
    async def get_profile(self, x_token: str) -> AbhaProfile:
        ...

    @abstractmethod
    async def update_profile(self, x_token: str, updates: Dict[str, Any]) -> bool:
        ...

    # ABHA address (PHR address)
    @abstractmethod
    async def check_address_availability(self, health_id: str) -> bool:
        """True when the ABHA address is free to claim."""

    @abstractmethod
    async def create_abha_address(self, x_token: str, health_id: str) -> AbhaAddress:
        ...

    @abstractmethod
    async def set_preferred_address(self, x_token: str, health_id: str) -> bool:
        ...
