import json

import pytest

from ayusetu.integrations.clients.mocks import MockNotificationsClient
from ayusetu.integrations.contracts.notifications import (
    CategoryOverride,
    NotificationPreferencesUpdate,
    PushNotificationRequest,
    SendMessageRequest,
)


@pytest.mark.asyncio
async def test_badge_counts_unread_and_urgent(config):
    client = MockNotificationsClient(config)

    badge = await client.get_notification_badge()

    assert badge.total == 4
    assert badge.unread == 2
    assert badge.urgent == 1
    assert badge.by_category == {"appointment": 1, "medication": 1}


@pytest.mark.asyncio
async def test_mark_as_read_updates_badge(config):
    client = MockNotificationsClient(config)

    result = await client.mark_as_read("notif-001")

    assert result.success is True
    badge = await client.get_notification_badge()
    assert badge.unread == 1
    assert badge.urgent == 0
    unread = await client.get_notifications(status="unread")
    assert [n.id for n in unread] == ["notif-002"]


@pytest.mark.asyncio
async def test_archive_and_limit(config):
    client = MockNotificationsClient(config)

    await client.archive_notification("notif-003")

    archived = await client.get_notifications(status="archived")
    assert [n.id for n in archived] == ["notif-003"]
    assert archived[0].archived_at is not None
    assert len(await client.get_notifications(limit=2)) == 2


@pytest.mark.asyncio
async def test_preferences_update_merges_sections_without_storing(config):
    client = MockNotificationsClient(config)

    updated = await client.update_notification_settings(
        NotificationPreferencesUpdate(
            channels={"sms": False},
            category=CategoryOverride(category="marketing", settings={"enabled": True}),
            frequency={"digestEnabled": True, "digestTime": "08:00"},
            sound_enabled=False,
        )
    )

    assert updated.channels.sms is False
    assert updated.channels.push is True
    assert updated.categories["marketing"].enabled is True
    assert updated.frequency.digest_time == "08:00"
    assert updated.frequency.max_daily_notifications == 50
    assert updated.sound_enabled is False

    stored = await client.get_notification_settings()
    assert stored.channels.sms is True
    assert stored.categories["marketing"].enabled is False


@pytest.mark.asyncio
async def test_messaging(config):
    client = MockNotificationsClient(config)

    conversations = await client.get_conversations()
    messages = await client.get_messages("conv-001")
    sent = await client.send_message(
        SendMessageRequest(
            conversation_id="conv-001", recipient_id="doc-001", recipient_type="doctor", content="Thank you"
        )
    )

    assert [c.id for c in conversations] == ["conv-001", "conv-002"]
    assert [m.id for m in messages] == ["msg-001", "msg-002"]
    assert sent.status == "sent"
    assert sent.conversation_id == "conv-001"


@pytest.mark.asyncio
async def test_statistics_and_push(config):
    client = MockNotificationsClient(config)

    stats = await client.get_notification_statistics()
    push = await client.send_push_notification(
        PushNotificationRequest(user_id="user-001", title="Reminder", message="Take meds", category="medication")
    )

    assert stats.total_sent == 156
    assert push.success is True
    assert push.notification_id.startswith("notif-")


@pytest.mark.asyncio
async def test_live_preferences_update_sends_wire_body(live_services, router):
    router.add("PUT", "/notifications/settings", {"userId": "user-001", "updatedAt": "2026-01-15T00:00:00Z"})

    settings = await live_services.notifications.update_notification_settings(
        NotificationPreferencesUpdate(sound_enabled=False)
    )

    assert settings.user_id == "user-001"
    assert json.loads(router.last("PUT", "/notifications/settings").content) == {"soundEnabled": False}


@pytest.mark.asyncio
async def test_live_notifications_list_params(live_services, router):
    router.add("GET", "/notifications", [])

    await live_services.notifications.get_notifications(status="unread", limit=5)

    assert dict(router.last("GET", "/notifications").url.params) == {"status": "unread", "limit": "5"}
