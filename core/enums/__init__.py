"""Enumerations for the core app."""

from core.enums.notification import (
    NewItemDetection,
    NotificationKind,
    PollingState,
    ReadFilter,
)
from core.enums.user_role import UserRole

__all__ = [
    "NewItemDetection",
    "NotificationKind",
    "PollingState",
    "ReadFilter",
    "UserRole",
]
