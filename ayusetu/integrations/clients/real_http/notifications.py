from typing import List, Optional

from ayusetu.integrations.contracts.base import SuccessResponse
from ayusetu.integrations.contracts.notifications import (
    Conversation,
    Message,
    MessageStatistics,
    Notification,
    NotificationBadge,
    NotificationPreferencesUpdate,
    NotificationSettings,
    NotificationsService,
    NotificationStatistics,
    NotificationStatus,
    PushNotificationRequest,
    PushNotificationResult,
    SendMessageRequest,
)
from ayusetu.integrations.errors import build_model, build_model_list

from .base import RealHttpClientBase


class RealNotificationsClient(RealHttpClientBase, NotificationsService):
    prefix = "/notifications"

    async def get_notification_settings(self) -> NotificationSettings:
        msg = "Failed to fetch notification settings"
        data = await self._call("GET", "/settings", msg)
        return build_model(NotificationSettings, data, msg)

    async def update_notification_settings(self, request: NotificationPreferencesUpdate) -> NotificationSettings:
        msg = "Failed to update notification settings"
        data = await self._call("PUT", "/settings", msg, json=request.to_wire())
        return build_model(NotificationSettings, data, msg)

    async def get_notifications(
        self, status: Optional[NotificationStatus] = None, limit: Optional[int] = None
    ) -> List[Notification]:
        msg = "Failed to fetch notifications"
        data = await self._call("GET", "", msg, params={"status": status, "limit": limit})
        return build_model_list(Notification, data, msg)

    async def mark_as_read(self, notification_id: str) -> SuccessResponse:
        msg = "Failed to mark notification as read"
        data = await self._call("POST", f"/{notification_id}/read", msg)
        return build_model(SuccessResponse, data, msg)

    async def archive_notification(self, notification_id: str) -> SuccessResponse:
        msg = "Failed to archive notification"
        data = await self._call("POST", f"/{notification_id}/archive", msg)
        return build_model(SuccessResponse, data, msg)

    async def get_notification_badge(self) -> NotificationBadge:
        msg = "Failed to fetch notification badge"
        data = await self._call("GET", "/badge", msg)
        return build_model(NotificationBadge, data, msg)

    async def get_conversations(self) -> List[Conversation]:
        msg = "Failed to fetch conversations"
        data = await self._call("GET", "/conversations", msg)
        return build_model_list(Conversation, data, msg)

    async def get_messages(self, conversation_id: str, limit: Optional[int] = None) -> List[Message]:
        msg = "Failed to fetch messages"
        data = await self._call("GET", f"/conversations/{conversation_id}/messages", msg, params={"limit": limit})
        return build_model_list(Message, data, msg)

    async def send_message(self, request: SendMessageRequest) -> Message:
        msg = "Failed to send message"
        data = await self._call("POST", "/messages", msg, json=request.to_wire())
        return build_model(Message, data, msg)

    async def get_notification_statistics(self) -> NotificationStatistics:
        msg = "Failed to fetch notification statistics"
        data = await self._call("GET", "/statistics", msg)
        return build_model(NotificationStatistics, data, msg)

    async def get_message_statistics(self) -> MessageStatistics:
        msg = "Failed to fetch message statistics"
        data = await self._call("GET", "/messages/statistics", msg)
        return build_model(MessageStatistics, data, msg)

    async def send_push_notification(self, request: PushNotificationRequest) -> PushNotificationResult:
        msg = "Failed to send push notification"
        data = await self._call("POST", "/push", msg, json=request.to_wire())
        return build_model(PushNotificationResult, data, msg)
