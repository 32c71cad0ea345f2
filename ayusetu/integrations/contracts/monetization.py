"""
Contracts for monetization: subscription plans, cloud storage and backups,
partner services and spending analytics.

Pricing is always shown up front. No health data is sold or used for ads;
partner bookings carry only what the partner needs to fulfil them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field

from .base import ApiModel

SubscriptionTier = Literal["free", "basic", "premium", "family"]
SubscriptionStatus = Literal["active", "expired", "cancelled", "trial"]
PaymentMethod = Literal["upi", "card", "netbanking", "wallet"]
PaymentStatus = Literal["pending", "processing", "completed", "failed", "refunded"]
StorageTier = Literal["free", "standard", "premium", "unlimited"]
BackupFrequency = Literal["manual", "daily", "weekly", "realtime"]
PartnerServiceType = Literal[
    "lab_testing",
    "pharmacy",
    "ambulance",
    "home_healthcare",
    "diagnostics",
    "wellness",
    "telemedicine",
]
BookingStatus = Literal["pending", "confirmed", "completed", "cancelled"]
BillingPeriod = Literal["monthly", "yearly"]

# Plans and storage tiers use -1 for "no limit"
UNLIMITED = -1


# Subscriptions

class PremiumFeature(ApiModel):
    id: str
    name: str
    description: str
    icon: str
    tier: SubscriptionTier
    is_available: bool
    category: Literal["storage", "analytics", "support", "family", "export", "security"]


class SubscriptionPlan(ApiModel):
    id: str
    tier: SubscriptionTier
    name: str
    description: str
    price: float
    currency: str
    billing_period: BillingPeriod
    features: List[str] = Field(default_factory=list)
    savings: Optional[float] = None
    is_popular: Optional[bool] = None
    max_family_members: Optional[int] = None
    storage_limit: int  # GB
    export_limit: int  # per month
    support_level: Literal["community", "email", "priority", "24x7"]


class UserSubscription(ApiModel):
    id: str
    user_id: str
    plan_id: str
    tier: SubscriptionTier
    status: SubscriptionStatus
    start_date: str
    end_date: str
    auto_renew: bool
    payment_method: Optional[PaymentMethod] = None
    next_billing_date: Optional[str] = None
    trial_ends_at: Optional[str] = None


# Cloud storage

class CloudStorage(ApiModel):
    user_id: str
    tier: StorageTier
    total_storage: int  # bytes
    used_storage: int
    available_storage: int
    file_count: int
    last_backup_date: Optional[str] = None
    next_backup_date: Optional[str] = None


class StorageBreakdown(ApiModel):
    category: Literal["medical_records", "prescriptions", "lab_results", "imaging", "documents", "other"]
    size: int  # bytes
    file_count: int
    percentage: float


class BackupSettings(ApiModel):
    enabled: bool
    frequency: BackupFrequency
    auto_backup: bool
    include_attachments: bool
    backup_time: Optional[str] = None  # HH:mm
    wifi_only: bool
    encrypt_backups: bool


class BackupHistory(ApiModel):
    id: str
    user_id: str
    backup_date: str
    size: int  # bytes
    file_count: int
    status: Literal["completed", "failed", "partial"]
    duration: int  # seconds
    error_message: Optional[str] = None


class StoragePlan(ApiModel):
    id: str
    tier: StorageTier
    name: str
    storage: int  # GB
    price: float
    currency: str
    billing_period: BillingPeriod
    features: List[str] = Field(default_factory=list)


# Partners

class OperatingHours(ApiModel):
    open: str
    close: str


class PartnerService(ApiModel):
    id: str
    name: str
    type: PartnerServiceType
    description: str
    logo: str
    rating: float
    review_count: int
    status: Literal["active", "inactive", "maintenance"]
    is_abdm_verified: bool = Field(alias="isABDMVerified")
    is_popular: Optional[bool] = None
    locations: Optional[List[str]] = None
    operating_hours: Optional[OperatingHours] = None
    contact_number: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None


class LabTest(ApiModel):
    id: str
    partner_id: str
    name: str
    description: str
    category: str
    price: float
    discounted_price: Optional[float] = None
    preparation_required: bool
    sample_type: Literal["blood", "urine", "stool", "saliva", "other"]
    report_delivery: str
    is_popular: Optional[bool] = None
    is_fasting: Optional[bool] = None


class PartnerOffer(ApiModel):
    id: str
    partner_id: str
    title: str
    description: str
    discount_percentage: Optional[float] = None
    discount_amount: Optional[float] = None
    valid_from: str
    valid_until: str
    terms_and_conditions: List[str] = Field(default_factory=list)
    min_order_amount: Optional[float] = None
    max_discount: Optional[float] = None
    code: Optional[str] = None


class BookingItem(ApiModel):
    id: str
    name: str
    quantity: int
    price: float


class BookingAddress(ApiModel):
    line1: str
    line2: Optional[str] = None
    city: str
    state: str
    pincode: str


class BookingDetails(ApiModel):
    items: Optional[List[BookingItem]] = None
    total_amount: float
    address: Optional[BookingAddress] = None
    notes: Optional[str] = None


class ServiceBookingRequest(ApiModel):
    user_id: str
    partner_id: str
    service_type: PartnerServiceType
    status: BookingStatus = "pending"
    scheduled_date: str
    scheduled_time: Optional[str] = None
    details: BookingDetails
    payment_status: PaymentStatus = "pending"
    cancellation_reason: Optional[str] = None


class ServiceBooking(ServiceBookingRequest):
    id: str
    booking_date: str
    confirmation_id: Optional[str] = None


class UserSpendingAnalytics(ApiModel):
    user_id: str
    total_spent: float
    subscription_spent: float
    storage_spent: float
    services_spent: float
    last_payment_date: Optional[str] = None
    lifetime_value: float
    savings_from_offers: float


# ---------------------------------------------------------------------------
# Service interface
# ---------------------------------------------------------------------------

class MonetizationService(ABC):

    # Subscriptions
    @abstractmethod
    async def get_subscription_plans(self) -> List[SubscriptionPlan]:
        ...

    @abstractmethod
    async def get_current_subscription(self, user_id: str) -> UserSubscription:
        ...

    @abstractmethod
    async def upgrade_plan(self, user_id: str, plan_id: str) -> UserSubscription:
        ...

    @abstractmethod
    async def get_premium_features(self) -> List[PremiumFeature]:
        ...

    # Cloud storage
    @abstractmethod
    async def get_cloud_storage(self, user_id: str) -> CloudStorage:
        ...

    @abstractmethod
    async def get_storage_breakdown(self, user_id: str) -> List[StorageBreakdown]:
        ...

    @abstractmethod
    async def get_backup_settings(self, user_id: str) -> BackupSettings:
        ...

    @abstractmethod
    async def update_backup_settings(self, user_id: str, updates: Dict[str, Any]) -> BackupSettings:
        """Partial update; keys may be field names or wire names."""

    @abstractmethod
    async def get_backup_history(self, user_id: str) -> List[BackupHistory]:
        ...

    @abstractmethod
    async def trigger_manual_backup(self, user_id: str) -> BackupHistory:
        ...

    @abstractmethod
    async def get_storage_plans(self) -> List[StoragePlan]:
        ...

    # Partners
    @abstractmethod
    async def get_partner_services(self, service_type: Optional[PartnerServiceType] = None) -> List[PartnerService]:
        ...

    @abstractmethod
    async def get_lab_tests(self, partner_id: Optional[str] = None) -> List[LabTest]:
        ...

    @abstractmethod
    async def get_partner_offers(self, partner_id: Optional[str] = None) -> List[PartnerOffer]:
        ...

    @abstractmethod
    async def book_service(self, booking: ServiceBookingRequest) -> ServiceBooking:
        ...

    # Spending
    @abstractmethod
    async def get_user_spending(self, user_id: str) -> UserSpendingAnalytics:
        ...
