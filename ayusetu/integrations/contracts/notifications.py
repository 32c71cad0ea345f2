"""
Contracts for notifications and secure messaging between patients, doctors
and health facilities.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field

from .base import ApiModel, SuccessResponse

NotificationCategory = Literal[
    "health_record",
    "appointment",
    "medication",
    "consent_request",
    "emergency",
    "insurance",
    "system",
    "marketing",
]
NotificationPriority = Literal["low", "medium", "high", "urgent"]
NotificationChannel = Literal["push", "sms", "email", "in_app"]
NotificationStatus = Literal["unread", "read", "archived"]
ConversationCategory = Literal["appointment", "prescription", "general", "emergency"]
ParticipantType = Literal["patient", "doctor", "hpr"]

URGENT_PRIORITIES = ("high", "urgent")


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

class ChannelToggles(ApiModel):
    push: bool = True
    sms: bool = True
    email: bool = True
    in_app: bool = True


class QuietHours(ApiModel):
    enabled: bool
    start_time: str  # HH:mm
    end_time: str


class CategoryPreference(ApiModel):
    enabled: bool = True
    channels: List[NotificationChannel] = Field(default_factory=list)
    quiet_hours: Optional[QuietHours] = None


class FrequencySettings(ApiModel):
    digest_enabled: bool = False
    digest_time: Optional[str] = None
    max_daily_notifications: Optional[int] = None


class NotificationSettings(ApiModel):
    user_id: str
    channels: ChannelToggles = Field(default_factory=ChannelToggles)
    categories: Dict[NotificationCategory, CategoryPreference] = Field(default_factory=dict)
    frequency: FrequencySettings = Field(default_factory=FrequencySettings)
    language: str = "en"
    sound_enabled: bool = True
    vibration_enabled: bool = True
    updated_at: str


class CategoryOverride(ApiModel):
    category: NotificationCategory
    settings: Dict[str, Any] = Field(default_factory=dict)


class NotificationPreferencesUpdate(ApiModel):
    """Partial update. Only the sections that are set are merged."""

    channels: Optional[Dict[str, bool]] = None
    category: Optional[CategoryOverride] = None
    frequency: Optional[Dict[str, Any]] = None
    sound_enabled: Optional[bool] = None
    vibration_enabled: Optional[bool] = None


# ---------------------------------------------------------------------------
# Notifications
# ---------------------------------------------------------------------------

class NotificationAction(ApiModel):
    id: str
    label: str
    action: str  # deep link or action identifier
    type: Literal["primary", "secondary", "dismiss"]


class Notification(ApiModel):
    id: str
    user_id: str
    category: NotificationCategory
    priority: NotificationPriority
    title: str
    message: str
    data: Optional[Dict[str, Any]] = None
    channels: List[NotificationChannel] = Field(default_factory=list)
    status: NotificationStatus
    sent_at: str
    read_at: Optional[str] = None
    archived_at: Optional[str] = None
    expires_at: Optional[str] = None
    action_buttons: Optional[List[NotificationAction]] = None


class NotificationBadge(ApiModel):
    total: int
    unread: int
    urgent: int
    by_category: Dict[str, int] = Field(default_factory=dict)


class PushNotificationRequest(ApiModel):
    user_id: str
    title: str
    message: str
    category: NotificationCategory
    priority: Optional[NotificationPriority] = None
    data: Optional[Dict[str, Any]] = None
    action_buttons: Optional[List[NotificationAction]] = None
    scheduled_for: Optional[str] = None


class PushNotificationResult(ApiModel):
    success: bool
    notification_id: str


# ---------------------------------------------------------------------------
# Messaging
# ---------------------------------------------------------------------------

class MessageAttachment(ApiModel):
    id: str
    type: Literal["image", "document", "prescription", "lab_report"]
    file_name: str
    file_size: int
    url: str
    thumbnail_url: Optional[str] = None


class AttachmentUpload(ApiModel):
    type: Literal["image", "document", "prescription", "lab_report"]
    file_name: str
    file_size: int
    thumbnail_url: Optional[str] = None


class Message(ApiModel):
    id: str
    conversation_id: str
    sender_id: str
    sender_type: Literal["patient", "doctor", "hpr", "system"]
    sender_name: str
    recipient_id: str
    recipient_type: ParticipantType
    content: str
    attachments: Optional[List[MessageAttachment]] = None
    is_encrypted: bool
    status: Literal["sending", "sent", "delivered", "read", "failed"]
    sent_at: str
    delivered_at: Optional[str] = None
    read_at: Optional[str] = None
    reply_to_id: Optional[str] = None


class ConversationParticipant(ApiModel):
    user_id: str
    user_type: ParticipantType
    name: str
    avatar: Optional[str] = None
    role: Optional[str] = None
    hospital: Optional[str] = None


class Conversation(ApiModel):
    id: str
    participants: List[ConversationParticipant] = Field(default_factory=list)
    subject: Optional[str] = None
    category: ConversationCategory
    last_message: Optional[Message] = None
    unread_count: int
    is_archived: bool
    is_pinned: bool
    created_at: str
    updated_at: str


class SendMessageRequest(ApiModel):
    conversation_id: Optional[str] = None
    recipient_id: str
    recipient_type: ParticipantType
    content: str
    attachments: Optional[List[AttachmentUpload]] = None
    reply_to_id: Optional[str] = None
    subject: Optional[str] = None
    category: Optional[ConversationCategory] = None


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------

class NotificationStatistics(ApiModel):
    total_sent: int
    total_read: int
    total_archived: int
    by_category: Dict[str, int] = Field(default_factory=dict)
    by_channel: Dict[str, int] = Field(default_factory=dict)
    read_rate: float  # percentage
    average_read_time: float  # minutes


class MessageStatistics(ApiModel):
    total_conversations: int
    active_conversations: int
    unread_messages: int
    total_messages: int
    response_rate: float  # percentage
    average_response_time: float  # minutes


# ---------------------------------------------------------------------------
# Service interface
# ---------------------------------------------------------------------------

class NotificationsService(ABC):

    @abstractmethod
    async def get_notification_settings(self) -> NotificationSettings:
        ...

    @abstractmethod
    async def update_notification_settings(self, request: NotificationPreferencesUpdate) -> NotificationSettings:
        """Merge channel toggles, frequency and one per-category override into the current settings."""

    @abstractmethod
    async def get_notifications(
        self, status: Optional[NotificationStatus] = None, limit: Optional[int] = None
    ) -> List[Notification]:
        ...

    @abstractmethod
    async def mark_as_read(self, notification_id: str) -> SuccessResponse:
        ...

    @abstractmethod
    async def archive_notification(self, notification_id: str) -> SuccessResponse:
        ...

    @abstractmethod
    async def get_notification_badge(self) -> NotificationBadge:
        """Counts of unread notifications; ``urgent`` covers high and urgent priority."""

    @abstractmethod
    async def get_conversations(self) -> List[Conversation]:
        ...

    @abstractmethod
    async def get_messages(self, conversation_id: str, limit: Optional[int] = None) -> List[Message]:
        ...

    @abstractmethod
    async def send_message(self, request: SendMessageRequest) -> Message:
        ...

    @abstractmethod
    async def get_notification_statistics(self) -> NotificationStatistics:
        ...

    @abstractmethod
    async def get_message_statistics(self) -> MessageStatistics:
        ...

    @abstractmethod
    async def send_push_notification(self, request: PushNotificationRequest) -> PushNotificationResult:
        ...
