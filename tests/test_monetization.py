import json
import random
import re

import pytest

from ayusetu.integrations.clients.mocks import MockMonetizationClient
from ayusetu.integrations.clients.mocks.monetization import MANUAL_BACKUP_SECONDS
from ayusetu.integrations.contracts.monetization import UNLIMITED, BookingDetails, ServiceBookingRequest
from ayusetu.integrations.errors import ServiceError


def lab_booking():
    return ServiceBookingRequest(user_id="user-123", partner_id="partner-lab-001", service_type="lab_testing",
                                 scheduled_date="2026-01-20", details=BookingDetails(total_amount=499))


@pytest.mark.asyncio
async def test_upgrade_persists_for_user(config):
    client = MockMonetizationClient(config)

    upgraded = await client.upgrade_plan("user-123", "plan-premium")

    assert upgraded.id == "sub-001"
    assert upgraded.tier == "premium"
    current = await client.get_current_subscription("user-123")
    assert current.plan_id == "plan-premium"


@pytest.mark.asyncio
async def test_unknown_user_starts_on_free_plan(config):
    client = MockMonetizationClient(config)

    first = await client.get_current_subscription("user-new")
    again = await client.get_current_subscription("user-new")

    assert first.tier == "free"
    assert first.id == again.id


@pytest.mark.asyncio
async def test_upgrade_to_unknown_plan_fails(config):
    client = MockMonetizationClient(config)

    with pytest.raises(ServiceError, match="Plan not found"):
        await client.upgrade_plan("user-123", "plan-gold")

    assert (await client.get_current_subscription("user-123")).tier == "free"


@pytest.mark.asyncio
async def test_backup_settings_merge_per_user(config):
    client = MockMonetizationClient(config)

    updated = await client.update_backup_settings("user-123", {"frequency": "daily", "wifiOnly": False})

    assert updated.frequency == "daily"
    assert updated.wifi_only is False
    assert updated.backup_time == "02:00"
    assert (await client.get_backup_settings("user-123")).frequency == "daily"
    assert (await client.get_backup_settings("user-other")).frequency == "weekly"


@pytest.mark.asyncio
async def test_backup_settings_reject_bad_values(config):
    client = MockMonetizationClient(config)

    with pytest.raises(ServiceError, match="Invalid backup settings"):
        await client.update_backup_settings("user-123", {"frequency": "hourly"})


@pytest.mark.asyncio
async def test_manual_backup_is_newest_in_history(config):
    client = MockMonetizationClient(config)

    backup = await client.trigger_manual_backup("user-123")

    history = await client.get_backup_history("user-123")
    assert [b.id for b in history][:2] == [backup.id, "backup-001"]
    assert backup.duration == MANUAL_BACKUP_SECONDS
    storage = await client.get_cloud_storage("user-123")
    assert backup.size == storage.used_storage
    assert storage.last_backup_date == backup.backup_date


@pytest.mark.asyncio
async def test_unlimited_storage_plan(config):
    client = MockMonetizationClient(config)

    plans = {p.id: p for p in await client.get_storage_plans()}

    assert plans["storage-unlimited"].storage == UNLIMITED


@pytest.mark.asyncio
async def test_partner_filters(config):
    client = MockMonetizationClient(config)

    labs = await client.get_partner_services("lab_testing")
    tests = await client.get_lab_tests("partner-lab-001")
    pharmacy_offers = await client.get_partner_offers("partner-pharma-001")

    assert [p.id for p in labs] == ["partner-lab-001"]
    assert len(await client.get_partner_services()) == 4
    assert [t.id for t in tests] == ["test-001", "test-002", "test-003"]
    assert await client.get_lab_tests("partner-pharma-001") == []
    assert [o.id for o in pharmacy_offers] == ["offer-002"]


@pytest.mark.asyncio
async def test_booking_gets_confirmation_id(config):
    client = MockMonetizationClient(config, rng=random.Random(3))

    booking = await client.book_service(lab_booking())

    assert re.fullmatch(r"CONF[A-Z0-9]{8}", booking.confirmation_id)
    assert booking.status == "pending"
    assert booking.details.total_amount == 499


@pytest.mark.asyncio
async def test_live_upgrade_body(live_services, router):
    router.add("POST", "/monetization/upgrade", {"oops": True})

    with pytest.raises(ServiceError, match="Failed to upgrade plan"):
        await live_services.monetization.upgrade_plan("u-1", "plan-basic")

    assert json.loads(router.last("POST", "/monetization/upgrade").content) == {"userId": "u-1", "planId": "plan-basic"}


@pytest.mark.asyncio
async def test_live_backup_settings_use_wire_names(live_services, router):
    router.add("PUT", "/storage/u-1/backup-settings", {
        "enabled": True, "frequency": "daily", "autoBackup": True, "includeAttachments": False,
        "wifiOnly": False, "encryptBackups": True,
    })

    settings = await live_services.monetization.update_backup_settings("u-1", {"wifi_only": False})

    assert settings.include_attachments is False
    assert json.loads(router.last("PUT", "/storage/u-1/backup-settings").content) == {"wifiOnly": False}


@pytest.mark.asyncio
async def test_live_partner_filters_go_in_query(live_services, router):
    router.add("GET", "/partners/lab-tests", [])
    router.add("GET", "/partners/services", [])

    await live_services.monetization.get_lab_tests("partner-lab-001")
    await live_services.monetization.get_partner_services()

    assert router.last("GET", "/partners/lab-tests").url.params["partnerId"] == "partner-lab-001"
    assert "type" not in router.last("GET", "/partners/services").url.params
