"""Django signals for local notification events."""

from core.signals.notification_signals import (
    log_notification_received,
    notification_received,
    page_visibility_changed,
    window_focused,
)

__all__ = [
    "log_notification_received",
    "notification_received",
    "page_visibility_changed",
    "window_focused",
]
