"""Django signals for local notification events.

notification_received is emitted by the sync engine for every newly
observed notification. page_visibility_changed and window_focused are
emitted by whatever adapter owns the page lifecycle and consumed by a
polling engine.
"""

from django.dispatch import Signal, receiver

import structlog

logger = structlog.get_logger(__name__)

# Arguments: notification
notification_received = Signal()

# Arguments: hidden
page_visibility_changed = Signal()

window_focused = Signal()


@receiver(notification_received, dispatch_uid="core.log_notification_received")
def log_notification_received(sender, notification, **_kwargs) -> None:
    """Record every new notification observed by a sync engine.

    Args:
        sender: Engine class that observed the notification
        notification: The new Notification
        **_kwargs: Additional signal arguments
    """
    logger.info(
        "notification_received",
        notification_id=notification.id,
        notification_type=notification.type,
        title=notification.title,
    )
