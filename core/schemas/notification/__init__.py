"""Notification schemas."""

from core.schemas.notification.notification import Notification
from core.schemas.notification.notification_sync_state import NotificationSyncState
from core.schemas.notification.unread_count_response import UnreadCountResponse

__all__ = [
    "Notification",
    "NotificationSyncState",
    "UnreadCountResponse",
]
