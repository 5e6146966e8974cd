"""Schemas for the core app."""

from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.notification import (
    Notification,
    NotificationSyncState,
    UnreadCountResponse,
)

__all__ = [
    "BaseSchemaModel",
    "Notification",
    "NotificationSyncState",
    "UnreadCountResponse",
]
