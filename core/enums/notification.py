"""Notification-related enumerations.

This module contains enums for notification kinds, read-state filters,
new-notification detection modes, and the polling lifecycle states used
by the notification sync engine.
"""

from enum import Enum


class NotificationKind(str, Enum):
    """Notification types emitted by the EventSphere backend.

    The backend may introduce types this client does not know about; those
    are represented as OTHER rather than rejected.
    """

    NEW_REPORT = "NEW_REPORT"
    STATUS_UPDATE = "STATUS_UPDATE"
    NEW_RESPONSE = "NEW_RESPONSE"
    STAFF_RESPONSE = "STAFF_RESPONSE"
    ADMIN_RESPONSE = "ADMIN_RESPONSE"
    OTHER = "OTHER"

    @classmethod
    def from_value(cls, value: str | None) -> "NotificationKind":
        """Map a raw type string to a kind, falling back to OTHER."""
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


class ReadFilter(str, Enum):
    """Read-state filter for notification listings."""

    ALL = "all"
    UNREAD = "unread"
    READ = "read"


class NewItemDetection(str, Enum):
    """Strategy for deciding which polled notifications are new.

    IDENTITY compares notification ids against the previous list.
    LENGTH treats the growth in list size as new items taken from the head
    of the list, which assumes the server only ever prepends.
    """

    IDENTITY = "identity"
    LENGTH = "length"


class PollingState(str, Enum):
    """Lifecycle of the polling timer."""

    IDLE = "IDLE"
    POLLING = "POLLING"
