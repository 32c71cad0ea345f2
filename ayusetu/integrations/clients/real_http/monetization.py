from typing import Any, Dict, List, Optional

from ayusetu.integrations.contracts.base import wire_updates
from ayusetu.integrations.contracts.monetization import (
    BackupHistory,
    BackupSettings,
    CloudStorage,
    LabTest,
    MonetizationService,
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
from ayusetu.integrations.errors import build_model, build_model_list

from .base import RealHttpClientBase


class RealMonetizationClient(RealHttpClientBase, MonetizationService):
    """Covers three backend areas; paths carry their own ``/monetization``, ``/storage`` or ``/partners`` root."""

    async def get_subscription_plans(self) -> List[SubscriptionPlan]:
        msg = "Failed to fetch subscription plans"
        data = await self._call("GET", "/monetization/plans", msg)
        return build_model_list(SubscriptionPlan, data, msg)

    async def get_current_subscription(self, user_id: str) -> UserSubscription:
        msg = "Failed to fetch subscription"
        data = await self._call("GET", f"/monetization/subscription/{user_id}", msg)
        return build_model(UserSubscription, data, msg)

    async def upgrade_plan(self, user_id: str, plan_id: str) -> UserSubscription:
        msg = "Failed to upgrade plan"
        body = {"userId": user_id, "planId": plan_id}
        data = await self._call("POST", "/monetization/upgrade", msg, json=body)
        return build_model(UserSubscription, data, msg)

    async def get_premium_features(self) -> List[PremiumFeature]:
        msg = "Failed to fetch premium features"
        data = await self._call("GET", "/monetization/features", msg)
        return build_model_list(PremiumFeature, data, msg)

    async def get_cloud_storage(self, user_id: str) -> CloudStorage:
        msg = "Failed to fetch cloud storage"
        data = await self._call("GET", f"/storage/{user_id}", msg)
        return build_model(CloudStorage, data, msg)

    async def get_storage_breakdown(self, user_id: str) -> List[StorageBreakdown]:
        msg = "Failed to fetch storage breakdown"
        data = await self._call("GET", f"/storage/{user_id}/breakdown", msg)
        return build_model_list(StorageBreakdown, data, msg)

    async def get_backup_settings(self, user_id: str) -> BackupSettings:
        msg = "Failed to fetch backup settings"
        data = await self._call("GET", f"/storage/{user_id}/backup-settings", msg)
        return build_model(BackupSettings, data, msg)

    async def update_backup_settings(self, user_id: str, updates: Dict[str, Any]) -> BackupSettings:
        msg = "Failed to update backup settings"
        body = wire_updates(BackupSettings, updates)
        data = await self._call("PUT", f"/storage/{user_id}/backup-settings", msg, json=body)
        return build_model(BackupSettings, data, msg)

    async def get_backup_history(self, user_id: str) -> List[BackupHistory]:
        msg = "Failed to fetch backup history"
        data = await self._call("GET", f"/storage/{user_id}/backup-history", msg)
        return build_model_list(BackupHistory, data, msg)

    async def trigger_manual_backup(self, user_id: str) -> BackupHistory:
        msg = "Failed to trigger backup"
        data = await self._call("POST", f"/storage/{user_id}/backup", msg)
        return build_model(BackupHistory, data, msg)

    async def get_storage_plans(self) -> List[StoragePlan]:
        msg = "Failed to fetch storage plans"
        data = await self._call("GET", "/storage/plans", msg)
        return build_model_list(StoragePlan, data, msg)

    async def get_partner_services(self, service_type: Optional[PartnerServiceType] = None) -> List[PartnerService]:
        msg = "Failed to fetch partner services"
        data = await self._call("GET", "/partners/services", msg, params={"type": service_type})
        return build_model_list(PartnerService, data, msg)

    async def get_lab_tests(self, partner_id: Optional[str] = None) -> List[LabTest]:
        msg = "Failed to fetch lab tests"
        data = await self._call("GET", "/partners/lab-tests", msg, params={"partnerId": partner_id})
        return build_model_list(LabTest, data, msg)

    async def get_partner_offers(self, partner_id: Optional[str] = None) -> List[PartnerOffer]:
        msg = "Failed to fetch partner offers"
        data = await self._call("GET", "/partners/offers", msg, params={"partnerId": partner_id})
        return build_model_list(PartnerOffer, data, msg)

    async def book_service(self, booking: ServiceBookingRequest) -> ServiceBooking:
        msg = "Failed to book service"
        data = await self._call("POST", "/partners/book", msg, json=booking.to_wire())
        return build_model(ServiceBooking, data, msg)

    async def get_user_spending(self, user_id: str) -> UserSpendingAnalytics:
        msg = "Failed to fetch spending analytics"
        data = await self._call("GET", f"/monetization/spending/{user_id}", msg)
        return build_model(UserSpendingAnalytics, data, msg)
