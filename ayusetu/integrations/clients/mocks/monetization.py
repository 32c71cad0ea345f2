"""
Mock Monetization Client.

Plans, features, storage tiers, partners, lab tests and offers are fixed
fixtures. Subscriptions, backup settings and backup history are kept per
user and persist until restart.
"""

import logging
import random
import string
from typing import Any, Dict, List, Optional

from ayusetu.integrations.contracts.base import merge_model
from ayusetu.integrations.contracts.monetization import (
    UNLIMITED,
    BackupHistory,
    BackupSettings,
    CloudStorage,
    LabTest,
    MonetizationService,
    OperatingHours,
    PartnerOffer,
    PartnerService,
    PartnerServiceType,
    PremiumFeature,
    ServiceBooking,
    ServiceBookingRequest,
    StorageBreakdown,
    StoragePlan,
    SubscriptionPlan,
    UserSpendingAnalytics,
    UserSubscription,
)
from ayusetu.integrations.errors import ServiceError

from .base import MockClientBase

logger = logging.getLogger(__name__)

MOCK_USER_ID = "user-123"
GB = 1024 ** 3
MANUAL_BACKUP_SECONDS = 95
CONFIRMATION_ALPHABET = string.ascii_uppercase + string.digits

_MOCK_PLANS: List[SubscriptionPlan] = [
    SubscriptionPlan(id="plan-free", tier="free", name="Free", description="Basic health record management", price=0,
                     currency="INR", billing_period="monthly",
                     features=["5 GB cloud storage", "Basic health records", "Manual data export",
                               "Community support", "ABDM integration"],
                     storage_limit=5, export_limit=5, support_level="community"),
    SubscriptionPlan(id="plan-basic", tier="basic", name="Basic", description="Enhanced features for individuals",
                     price=99, currency="INR", billing_period="monthly",
                     features=["50 GB cloud storage", "Automatic backups", "Unlimited exports", "Email support",
                               "Health analytics", "Medication reminders"],
                     storage_limit=50, export_limit=UNLIMITED, support_level="email"),
    SubscriptionPlan(id="plan-premium", tier="premium", name="Premium", description="Advanced features for power users",
                     price=199, currency="INR", billing_period="monthly",
                     features=["200 GB cloud storage", "Real-time sync", "AI health insights", "Priority support",
                               "Advanced analytics", "Telemedicine integration", "Custom reports"],
                     is_popular=True, storage_limit=200, export_limit=UNLIMITED, support_level="priority"),
    SubscriptionPlan(id="plan-family", tier="family", name="Family", description="Complete solution for families",
                     price=399, currency="INR", billing_period="monthly",
                     features=["500 GB shared storage", "Up to 6 family members", "All Premium features",
                               "24x7 support", "Family health dashboard", "Vaccination tracking", "Emergency access"],
                     max_family_members=6, storage_limit=500, export_limit=UNLIMITED, support_level="24x7"),
]

_MOCK_FEATURES: List[PremiumFeature] = [
    PremiumFeature(id="feature-storage", name="Enhanced Storage",
                   description="Store up to 500GB of health records securely", icon="💾", tier="basic",
                   is_available=True, category="storage"),
    PremiumFeature(id="feature-analytics", name="AI Health Insights",
                   description="Get personalized health insights powered by AI", icon="🤖", tier="premium",
                   is_available=True, category="analytics"),
    PremiumFeature(id="feature-support", name="Priority Support", description="24x7 priority customer support",
                   icon="🎧", tier="premium", is_available=True, category="support"),
    PremiumFeature(id="feature-family", name="Family Health Management",
                   description="Manage health records for up to 6 family members", icon="👪", tier="family",
                   is_available=True, category="family"),
    PremiumFeature(id="feature-export", name="Unlimited Exports",
                   description="Export health data in any format, anytime",
                   icon="📤", tier="basic", is_available=True, category="export"),
    PremiumFeature(id="feature-encryption", name="Advanced Encryption",
                   description="Military-grade encryption for all your data", icon="🔐", tier="premium",
                   is_available=True, category="security"),
]

_MOCK_BREAKDOWN: List[StorageBreakdown] = [
    StorageBreakdown(category="medical_records", size=1073741824, file_count=45, percentage=50),
    StorageBreakdown(category="prescriptions", size=536870912, file_count=67, percentage=25),
    StorageBreakdown(category="lab_results", size=322122547, file_count=28, percentage=15),
    StorageBreakdown(category="imaging", size=161061274, file_count=8, percentage=7.5),
    StorageBreakdown(category="documents", size=53687091, file_count=8, percentage=2.5),
]

_MOCK_STORAGE_PLANS: List[StoragePlan] = [
    StoragePlan(id="storage-free", tier="free", name="Free Storage", storage=5, price=0, currency="INR",
                billing_period="monthly", features=["Manual backups", "Basic encryption", "30-day retention"]),
    StoragePlan(id="storage-standard", tier="standard", name="Standard Storage", storage=50, price=49, currency="INR",
                billing_period="monthly",
                features=["Auto backups", "Advanced encryption", "90-day retention", "Version history"]),
    StoragePlan(id="storage-premium", tier="premium", name="Premium Storage", storage=200, price=149, currency="INR",
                billing_period="monthly",
                features=["Real-time sync", "Military-grade encryption", "Unlimited retention", "Multi-device sync"]),
    StoragePlan(id="storage-unlimited", tier="unlimited", name="Unlimited Storage", storage=UNLIMITED, price=299,
                currency="INR", billing_period="monthly",
                features=["Unlimited storage", "Instant sync", "Lifetime retention", "Priority bandwidth"]),
]

_MOCK_PARTNERS: List[PartnerService] = [
    PartnerService(id="partner-lab-001", name="Dr. Lal PathLabs", type="lab_testing",
                   description="India's leading diagnostic chain with 200+ tests", logo="🧪", rating=4.5,
                   review_count=12450, status="active", is_abdm_verified=True, is_popular=True,
                   locations=["Delhi", "Mumbai", "Bangalore", "Hyderabad"],
                   operating_hours=OperatingHours(open="07:00", close="21:00"), contact_number="+91-1800-123-4567",
                   website="www.lalpathlabs.com"),
    PartnerService(id="partner-pharma-001", name="Apollo Pharmacy", type="pharmacy",
                   description="Trusted pharmacy with 5000+ medicines and health products", logo="💊", rating=4.7,
                   review_count=45230, status="active", is_abdm_verified=True, is_popular=True,
                   locations=["Pan India"], operating_hours=OperatingHours(open="00:00", close="23:59"),
                   contact_number="+91-1860-500-0101", website="www.apollopharmacy.in"),
    PartnerService(id="partner-ambulance-001", name="Ziqitza Healthcare", type="ambulance",
                   description="24x7 emergency ambulance services across India", logo="🚑", rating=4.8,
                   review_count=8920, status="active", is_abdm_verified=True, locations=["Pan India"],
                   operating_hours=OperatingHours(open="00:00", close="23:59"), contact_number="108",
                   website="www.zhl.org.in"),
    PartnerService(id="partner-homecare-001", name="Portea Medical", type="home_healthcare",
                   description="Home healthcare services including nursing, physiotherapy, diagnostics", logo="🏥",
                   rating=4.6, review_count=6540, status="active", is_abdm_verified=True,
                   locations=["Delhi", "Mumbai", "Bangalore", "Chennai", "Pune"],
                   operating_hours=OperatingHours(open="08:00", close="20:00"), contact_number="+91-1800-121-2323",
                   website="www.portea.com"),
]

_MOCK_LAB_TESTS: List[LabTest] = [
    LabTest(id="test-001", partner_id="partner-lab-001", name="Complete Blood Count (CBC)",
            description="Comprehensive blood analysis for overall health assessment", category="Blood Tests",
            price=500, discounted_price=350, preparation_required=False, sample_type="blood",
            report_delivery="6 hours", is_popular=True, is_fasting=False),
    LabTest(id="test-002", partner_id="partner-lab-001", name="Lipid Profile",
            description="Cholesterol and triglycerides test for heart health", category="Cardiac Tests", price=800,
            discounted_price=600, preparation_required=True, sample_type="blood", report_delivery="12 hours",
            is_popular=True, is_fasting=True),
    LabTest(id="test-003", partner_id="partner-lab-001", name="HbA1c (Diabetes)",
            description="Average blood sugar levels over past 3 months", category="Diabetes Tests", price=600,
            discounted_price=450, preparation_required=False, sample_type="blood", report_delivery="24 hours",
            is_fasting=False),
]

_MOCK_OFFERS: List[PartnerOffer] = [
    PartnerOffer(id="offer-001", partner_id="partner-lab-001", title="30% Off on Full Body Checkup",
                 description="Comprehensive health package with 60+ tests", discount_percentage=30,
                 valid_from="2026-01-01T00:00:00Z", valid_until="2026-01-31T23:59:59Z",
                 terms_and_conditions=["Valid for first-time users only", "Cannot be combined with other offers",
                                       "Home sample collection available"],
                 min_order_amount=2000, max_discount=1000, code="HEALTH30"),
    PartnerOffer(id="offer-002", partner_id="partner-pharma-001", title="Flat ₹200 Off on Medicines",
                 description="Get flat discount on orders above ₹999", discount_amount=200,
                 valid_from="2026-01-10T00:00:00Z", valid_until="2026-01-25T23:59:59Z",
                 terms_and_conditions=["Valid on prescription medicines", "Free delivery on all orders",
                                       "Valid once per user"],
                 min_order_amount=999, code="MEDS200"),
]

_DEFAULT_BACKUP_SETTINGS = BackupSettings(
    enabled=True,
    frequency="weekly",
    auto_backup=True,
    include_attachments=True,
    backup_time="02:00",
    wifi_only=True,
    encrypt_backups=True,
)


class MockMonetizationClient(MockClientBase, MonetizationService):
    label = "MONETIZATION MOCK"

    def __init__(self, config=None, rng: Optional[random.Random] = None) -> None:
        super().__init__(config)
        self._rng = rng or random.Random()
        # In-memory stores (reset on restart)
        self._subscriptions: Dict[str, UserSubscription] = {
            MOCK_USER_ID: UserSubscription(id="sub-001", user_id=MOCK_USER_ID, plan_id="plan-free", tier="free",
                                           status="active", start_date="2026-01-01T00:00:00Z",
                                           end_date="2027-01-01T00:00:00Z", auto_renew=False),
        }
        self._storage: Dict[str, CloudStorage] = {}
        self._backup_settings: Dict[str, BackupSettings] = {}
        self._backups: Dict[str, List[BackupHistory]] = {
            MOCK_USER_ID: [
                BackupHistory(id="backup-001", user_id=MOCK_USER_ID, backup_date="2026-01-14T02:00:00Z",
                              size=2147483648, file_count=156, status="completed", duration=120),
                BackupHistory(id="backup-002", user_id=MOCK_USER_ID, backup_date="2026-01-07T02:00:00Z",
                              size=2095104000, file_count=152, status="completed", duration=115),
                BackupHistory(id="backup-003", user_id=MOCK_USER_ID, backup_date="2025-12-31T02:00:00Z",
                              size=2042724352, file_count=148, status="completed", duration=110),
            ],
        }

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def _subscription_for(self, user_id: str) -> UserSubscription:
        if user_id not in self._subscriptions:
            self._subscriptions[user_id] = UserSubscription(
                id=self._new_id("sub"),
                user_id=user_id,
                plan_id="plan-free",
                tier="free",
                status="active",
                start_date=self._iso_now(),
                end_date="2027-01-01T00:00:00Z",
                auto_renew=False,
            )
        return self._subscriptions[user_id]

    async def get_subscription_plans(self) -> List[SubscriptionPlan]:
        await self._delay(0.5)
        return self._copy(_MOCK_PLANS)

    async def get_current_subscription(self, user_id: str) -> UserSubscription:
        await self._delay(0.3)
        return self._copy(self._subscription_for(user_id))

    async def upgrade_plan(self, user_id: str, plan_id: str) -> UserSubscription:
        await self._delay(1.0)
        plan = next((p for p in _MOCK_PLANS if p.id == plan_id), None)
        if plan is None:
            raise ServiceError("Plan not found")
        subscription = self._subscription_for(user_id)
        subscription.plan_id = plan.id
        subscription.tier = plan.tier
        subscription.status = "active"
        logger.info("[%s] %s moved to %s", self.label, user_id, plan.id)
        return self._copy(subscription)

    async def get_premium_features(self) -> List[PremiumFeature]:
        await self._delay(0.3)
        return self._copy(_MOCK_FEATURES)

    # ------------------------------------------------------------------
    # Cloud storage
    # ------------------------------------------------------------------

    def _storage_for(self, user_id: str) -> CloudStorage:
        if user_id not in self._storage:
            self._storage[user_id] = CloudStorage(
                user_id=user_id,
                tier="free",
                total_storage=5 * GB,
                used_storage=2 * GB,
                available_storage=3 * GB,
                file_count=156,
                last_backup_date="2026-01-14T10:30:00Z",
                next_backup_date="2026-01-21T10:30:00Z",
            )
        return self._storage[user_id]

    async def get_cloud_storage(self, user_id: str) -> CloudStorage:
        await self._delay(0.4)
        return self._copy(self._storage_for(user_id))

    async def get_storage_breakdown(self, user_id: str) -> List[StorageBreakdown]:
        await self._delay(0.3)
        return self._copy(_MOCK_BREAKDOWN)

    async def get_backup_settings(self, user_id: str) -> BackupSettings:
        await self._delay(0.2)
        return self._copy(self._backup_settings.get(user_id, _DEFAULT_BACKUP_SETTINGS))

    async def update_backup_settings(self, user_id: str, updates: Dict[str, Any]) -> BackupSettings:
        await self._delay(0.5)
        current = self._backup_settings.get(user_id, _DEFAULT_BACKUP_SETTINGS)
        self._backup_settings[user_id] = merge_model(current, updates, "Invalid backup settings")
        return self._copy(self._backup_settings[user_id])

    async def get_backup_history(self, user_id: str) -> List[BackupHistory]:
        await self._delay(0.3)
        return self._copy(self._backups.get(user_id, []))

    async def trigger_manual_backup(self, user_id: str) -> BackupHistory:
        await self._delay(2.0)
        storage = self._storage_for(user_id)
        backup = BackupHistory(
            id=self._new_id("backup"),
            user_id=user_id,
            backup_date=self._iso_now(),
            size=storage.used_storage,
            file_count=storage.file_count,
            status="completed",
            duration=MANUAL_BACKUP_SECONDS,
        )
        self._backups.setdefault(user_id, []).insert(0, backup)
        storage.last_backup_date = backup.backup_date
        logger.info("[%s] Manual backup %s for %s", self.label, backup.id, user_id)
        return self._copy(backup)

    async def get_storage_plans(self) -> List[StoragePlan]:
        await self._delay(0.3)
        return self._copy(_MOCK_STORAGE_PLANS)

    # ------------------------------------------------------------------
    # Partners
    # ------------------------------------------------------------------

    async def get_partner_services(self, service_type: Optional[PartnerServiceType] = None) -> List[PartnerService]:
        await self._delay(0.4)
        if service_type:
            return self._copy([p for p in _MOCK_PARTNERS if p.type == service_type])
        return self._copy(_MOCK_PARTNERS)

    async def get_lab_tests(self, partner_id: Optional[str] = None) -> List[LabTest]:
        await self._delay(0.3)
        if partner_id:
            return self._copy([t for t in _MOCK_LAB_TESTS if t.partner_id == partner_id])
        return self._copy(_MOCK_LAB_TESTS)

    async def get_partner_offers(self, partner_id: Optional[str] = None) -> List[PartnerOffer]:
        await self._delay(0.3)
        if partner_id:
            return self._copy([o for o in _MOCK_OFFERS if o.partner_id == partner_id])
        return self._copy(_MOCK_OFFERS)

    async def book_service(self, booking: ServiceBookingRequest) -> ServiceBooking:
        await self._delay(1.0)
        confirmation = "CONF" + "".join(self._rng.choice(CONFIRMATION_ALPHABET) for _ in range(8))
        return ServiceBooking(
            id=self._new_id("booking"),
            booking_date=self._iso_now(),
            confirmation_id=confirmation,
            **booking.model_dump(),
        )

    # ------------------------------------------------------------------
    # Spending
    # ------------------------------------------------------------------

    async def get_user_spending(self, user_id: str) -> UserSpendingAnalytics:
        await self._delay(0.3)
        return UserSpendingAnalytics(
            user_id=user_id,
            total_spent=2547,
            subscription_spent=0,
            storage_spent=0,
            services_spent=2547,
            last_payment_date="2026-01-10T14:30:00Z",
            lifetime_value=2547,
            savings_from_offers=823,
        )
