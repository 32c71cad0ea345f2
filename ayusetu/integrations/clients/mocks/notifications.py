"""
Mock Notifications Client.

Notifications and messages live in per-instance lists. Reading or archiving
a notification changes its status for later calls; settings updates are
returned merged but not stored.
"""

import logging
from collections import Counter
from typing import List, Optional

from ayusetu.integrations.contracts.base import SuccessResponse, merge_model
from ayusetu.integrations.contracts.notifications import (
    URGENT_PRIORITIES,
    CategoryPreference,
    ChannelToggles,
    Conversation,
    ConversationParticipant,
    FrequencySettings,
    Message,
    MessageStatistics,
    Notification,
    NotificationAction,
    NotificationBadge,
    NotificationPreferencesUpdate,
    NotificationSettings,
    NotificationsService,
    NotificationStatistics,
    NotificationStatus,
    PushNotificationRequest,
    PushNotificationResult,
    QuietHours,
    SendMessageRequest,
)

from .base import MockClientBase

logger = logging.getLogger(__name__)

MOCK_USER_ID = "user-001"
MOCK_USER_NAME = "Rajesh Kumar"


def _seed_settings(updated_at: str) -> NotificationSettings:
    night = {"start_time": "22:00", "end_time": "07:00"}
    return NotificationSettings(
        user_id=MOCK_USER_ID,
        channels=ChannelToggles(),
        categories={
            "health_record": CategoryPreference(channels=["push", "in_app", "email"],
                                                quiet_hours=QuietHours(enabled=True, **night)),
            "appointment": CategoryPreference(channels=["push", "sms", "email", "in_app"],
                                              quiet_hours=QuietHours(enabled=False, **night)),
            "medication": CategoryPreference(channels=["push", "in_app"]),
            "consent_request": CategoryPreference(channels=["push", "email", "in_app"]),
            "emergency": CategoryPreference(channels=["push", "sms", "in_app"]),
            "insurance": CategoryPreference(channels=["push", "in_app"]),
            "system": CategoryPreference(channels=["in_app"]),
            "marketing": CategoryPreference(enabled=False, channels=[]),
        },
        frequency=FrequencySettings(digest_enabled=False, max_daily_notifications=50),
        updated_at=updated_at,
    )


def _seed_notifications() -> List[Notification]:
    return [
        Notification(
            id="notif-001", user_id=MOCK_USER_ID, category="appointment", priority="high",
            title="Appointment Reminder",
            message="You have an appointment with Dr. Sarah Johnson tomorrow at 10:00 AM",
            channels=["push", "in_app"], status="unread", sent_at="2026-01-15T09:00:00Z",
            expires_at="2026-01-17T00:00:00Z",
            action_buttons=[
                NotificationAction(id="view", label="View Details", action="navigate://Appointments",
                                   type="primary"),
                NotificationAction(id="reschedule", label="Reschedule", action="navigate://BookAppointment",
                                   type="secondary"),
            ],
        ),
        Notification(
            id="notif-002", user_id=MOCK_USER_ID, category="medication", priority="medium",
            title="Medication Reminder", message="Time to take Metformin 500mg",
            channels=["push", "in_app"], status="unread", sent_at="2026-01-15T08:30:00Z",
            action_buttons=[
                NotificationAction(id="taken", label="Mark as Taken", action="medication://mark-taken",
                                   type="primary"),
            ],
        ),
        Notification(
            id="notif-003", user_id=MOCK_USER_ID, category="consent_request", priority="high",
            title="Consent Request", message="Apollo Hospital requests access to your health records",
            channels=["push", "email", "in_app"], status="read", sent_at="2026-01-14T15:20:00Z",
            read_at="2026-01-14T16:00:00Z",
            action_buttons=[
                NotificationAction(id="approve", label="Approve", action="consent://approve/req-123",
                                   type="primary"),
                NotificationAction(id="deny", label="Deny", action="consent://deny/req-123", type="secondary"),
            ],
        ),
        Notification(
            id="notif-004", user_id=MOCK_USER_ID, category="health_record", priority="medium",
            title="Lab Results Available",
            message="Your blood test results from Quest Diagnostics are now available",
            channels=["push", "email", "in_app"], status="read", sent_at="2026-01-13T11:00:00Z",
            read_at="2026-01-13T12:30:00Z",
            action_buttons=[
                NotificationAction(id="view", label="View Results", action="navigate://HealthRecords",
                                   type="primary"),
            ],
        ),
    ]


_PATIENT = ConversationParticipant(user_id=MOCK_USER_ID, user_type="patient", name=MOCK_USER_NAME)

_CONVERSATIONS: List[Conversation] = [
    Conversation(
        id="conv-001",
        participants=[
            _PATIENT,
            ConversationParticipant(user_id="doctor-123", user_type="doctor", name="Dr. Sarah Johnson",
                                    role="Cardiologist", hospital="Apollo Hospital"),
        ],
        subject="Post-consultation follow-up",
        category="appointment",
        last_message=Message(
            id="msg-003", conversation_id="conv-001", sender_id="doctor-123", sender_type="doctor",
            sender_name="Dr. Sarah Johnson", recipient_id=MOCK_USER_ID, recipient_type="patient",
            content="Please take the prescribed medication twice daily and schedule a follow-up in 2 weeks.",
            is_encrypted=True, status="read", sent_at="2026-01-14T16:45:00Z",
            delivered_at="2026-01-14T16:45:30Z", read_at="2026-01-14T17:00:00Z",
        ),
        unread_count=0,
        is_archived=False,
        is_pinned=True,
        created_at="2026-01-10T10:00:00Z",
        updated_at="2026-01-14T16:45:00Z",
    ),
    Conversation(
        id="conv-002",
        participants=[
            _PATIENT,
            ConversationParticipant(user_id="hpr-456", user_type="hpr", name="Fortis Hospital",
                                    hospital="Fortis Healthcare"),
        ],
        subject="Appointment scheduling query",
        category="appointment",
        last_message=Message(
            id="msg-005", conversation_id="conv-002", sender_id="hpr-456", sender_type="hpr",
            sender_name="Fortis Hospital", recipient_id=MOCK_USER_ID, recipient_type="patient",
            content="We have availability on Monday, January 20th at 3:00 PM. Would that work for you?",
            is_encrypted=True, status="delivered", sent_at="2026-01-15T10:30:00Z",
            delivered_at="2026-01-15T10:30:15Z",
        ),
        unread_count=1,
        is_archived=False,
        is_pinned=False,
        created_at="2026-01-15T09:00:00Z",
        updated_at="2026-01-15T10:30:00Z",
    ),
]

_MESSAGES: List[Message] = [
    Message(
        id="msg-001", conversation_id="conv-001", sender_id=MOCK_USER_ID, sender_type="patient",
        sender_name=MOCK_USER_NAME, recipient_id="doctor-123", recipient_type="doctor",
        content="Hello Doctor, I wanted to follow up on my blood pressure readings.",
        is_encrypted=True, status="read", sent_at="2026-01-14T14:00:00Z",
        delivered_at="2026-01-14T14:00:15Z", read_at="2026-01-14T15:30:00Z",
    ),
    Message(
        id="msg-002", conversation_id="conv-001", sender_id="doctor-123", sender_type="doctor",
        sender_name="Dr. Sarah Johnson", recipient_id=MOCK_USER_ID, recipient_type="patient",
        content="Thank you for sharing. Your recent readings look good. Continue with the current medication.",
        is_encrypted=True, status="read", sent_at="2026-01-14T16:30:00Z",
        delivered_at="2026-01-14T16:30:20Z", read_at="2026-01-14T16:40:00Z",
    ),
]


class MockNotificationsClient(MockClientBase, NotificationsService):
    label = "NOTIFICATIONS MOCK"

    def __init__(self, config=None) -> None:
        super().__init__(config)
        # In-memory stores (reset on restart)
        self._settings = _seed_settings(self._iso_now())
        self._notifications: List[Notification] = _seed_notifications()

    def _find(self, notification_id: str) -> Optional[Notification]:
        return next((n for n in self._notifications if n.id == notification_id), None)

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    async def get_notification_settings(self) -> NotificationSettings:
        await self._delay(0.5)
        return self._copy(self._settings)

    async def update_notification_settings(self, request: NotificationPreferencesUpdate) -> NotificationSettings:
        await self._delay(0.5)
        updated = self._copy(self._settings)
        if request.channels:
            updated.channels = merge_model(updated.channels, request.channels)
        if request.frequency:
            updated.frequency = merge_model(updated.frequency, request.frequency)
        if request.category:
            current = updated.categories.get(request.category.category, CategoryPreference())
            updated.categories[request.category.category] = merge_model(current, request.category.settings)
        if request.sound_enabled is not None:
            updated.sound_enabled = request.sound_enabled
        if request.vibration_enabled is not None:
            updated.vibration_enabled = request.vibration_enabled
        updated.updated_at = self._iso_now()
        return updated

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    async def get_notifications(
        self, status: Optional[NotificationStatus] = None, limit: Optional[int] = None
    ) -> List[Notification]:
        await self._delay(0.5)
        items = self._notifications
        if status:
            items = [n for n in items if n.status == status]
        if limit:
            items = items[:limit]
        return self._copy(items)

    async def mark_as_read(self, notification_id: str) -> SuccessResponse:
        await self._delay(0.3)
        notification = self._find(notification_id)
        if notification is not None:
            notification.status = "read"
            notification.read_at = self._iso_now()
        return SuccessResponse(success=True)

    async def archive_notification(self, notification_id: str) -> SuccessResponse:
        await self._delay(0.3)
        notification = self._find(notification_id)
        if notification is not None:
            notification.status = "archived"
            notification.archived_at = self._iso_now()
        return SuccessResponse(success=True)

    async def get_notification_badge(self) -> NotificationBadge:
        await self._delay(0.2)
        unread = [n for n in self._notifications if n.status == "unread"]
        return NotificationBadge(
            total=len(self._notifications),
            unread=len(unread),
            urgent=sum(1 for n in unread if n.priority in URGENT_PRIORITIES),
            by_category=dict(Counter(n.category for n in unread)),
        )

    # ------------------------------------------------------------------
    # Messaging
    # ------------------------------------------------------------------

    async def get_conversations(self) -> List[Conversation]:
        await self._delay(0.5)
        return self._copy(_CONVERSATIONS)

    async def get_messages(self, conversation_id: str, limit: Optional[int] = None) -> List[Message]:
        await self._delay(0.5)
        items = [m for m in _MESSAGES if m.conversation_id == conversation_id]
        if limit:
            items = items[:limit]
        return self._copy(items)

    async def send_message(self, request: SendMessageRequest) -> Message:
        await self._delay(0.8)
        message = Message(
            id=self._new_id("msg"),
            conversation_id=request.conversation_id or self._new_id("conv"),
            sender_id=MOCK_USER_ID,
            sender_type="patient",
            sender_name=MOCK_USER_NAME,
            recipient_id=request.recipient_id,
            recipient_type=request.recipient_type,
            content=request.content,
            is_encrypted=True,
            status="sent",
            sent_at=self._iso_now(),
            reply_to_id=request.reply_to_id,
        )
        logger.info("[%s] Message %s sent to %s", self.label, message.id, request.recipient_id)
        return message

    # ------------------------------------------------------------------
    # Statistics / push
    # ------------------------------------------------------------------

    async def get_notification_statistics(self) -> NotificationStatistics:
        await self._delay(0.5)
        return NotificationStatistics(
            total_sent=156,
            total_read=142,
            total_archived=98,
            by_category={
                "health_record": 35,
                "appointment": 42,
                "medication": 28,
                "consent_request": 15,
                "emergency": 3,
                "insurance": 18,
                "system": 12,
                "marketing": 3,
            },
            by_channel={"push": 120, "sms": 45, "email": 78, "in_app": 156},
            read_rate=91.0,
            average_read_time=15,
        )

    async def get_message_statistics(self) -> MessageStatistics:
        await self._delay(0.5)
        return MessageStatistics(
            total_conversations=8,
            active_conversations=3,
            unread_messages=2,
            total_messages=47,
            response_rate=85.0,
            average_response_time=120,
        )

    async def send_push_notification(self, request: PushNotificationRequest) -> PushNotificationResult:
        await self._delay(0.5)
        notification_id = self._new_id("notif")
        logger.info("[%s] Push '%s' queued for %s as %s", self.label, request.title, request.user_id,
                    notification_id)
        return PushNotificationResult(success=True, notification_id=notification_id)
