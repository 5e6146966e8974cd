"""Presentation helpers for notification listings.

Pure functions used by notification list and bell views: filtering,
icons, relative timestamps, and click-through targets.
"""

from collections.abc import Iterable
from datetime import UTC, datetime

from django.utils import timezone

from core.enums import NotificationKind, ReadFilter, UserRole
from core.schemas.notification import Notification

NOTIFICATION_ICONS: dict[NotificationKind, str] = {
    NotificationKind.NEW_REPORT: "📝",
    NotificationKind.STATUS_UPDATE: "🔄",
    NotificationKind.NEW_RESPONSE: "💬",
}
DEFAULT_ICON = "🔔"

# Notification kinds that point at a report
REPORT_KINDS = frozenset(
    {
        NotificationKind.NEW_REPORT,
        NotificationKind.STATUS_UPDATE,
        NotificationKind.NEW_RESPONSE,
    }
)

REPORT_PATHS: dict[UserRole, str] = {
    UserRole.ADMIN: "/admin/reports/{entity_id}",
    UserRole.ATTENDEE: "/reports/{entity_id}",
}


def filter_notifications(
    notifications: Iterable[Notification],
    status: ReadFilter | str = ReadFilter.ALL,
    kind: NotificationKind | str | None = None,
    search: str = "",
) -> list[Notification]:
    """Filter notifications by read state, type and search text.

    Args:
        notifications: Notifications in display order
        status: "all", "unread" or "read"
        kind: Only keep this notification kind, None keeps every kind. OTHER
            also matches types this client does not know
        search: Case-insensitive substring of title or message

    Returns:
        Matching notifications, order preserved
    """
    status = ReadFilter(status)
    wanted_kind = NotificationKind(kind) if kind else None
    needle = search.strip().lower()

    filtered = []
    for notification in notifications:
        if status is ReadFilter.UNREAD and notification.read:
            continue
        if status is ReadFilter.READ and not notification.read:
            continue
        if wanted_kind is not None and notification.kind is not wanted_kind:
            continue
        if needle and not (
            needle in notification.title.lower()
            or needle in notification.message.lower()
        ):
            continue
        filtered.append(notification)
    return filtered


def notification_icon(notification_type: str | None) -> str:
    return NOTIFICATION_ICONS.get(
        NotificationKind.from_value(notification_type), DEFAULT_ICON
    )


def format_relative_time(
    created_at: datetime | None, now: datetime | None = None
) -> str:
    """Describe how long ago a notification was created.

    Args:
        created_at: Creation time, naive values are read as UTC
        now: Reference time, defaults to the current time

    Returns:
        "Just now", "5m ago", "3h ago", "2d ago", or a date such as
        "14 Mar 2026" once a week has passed
    """
    if created_at is None:
        return "N/A"

    now = now or timezone.now()
    if timezone.is_naive(created_at):
        created_at = timezone.make_aware(created_at, UTC)
    if timezone.is_naive(now):
        now = timezone.make_aware(now, UTC)

    minutes = int((now - created_at).total_seconds() // 60)
    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes}m ago"

    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"

    days = hours // 24
    if days < 7:
        return f"{days}d ago"

    return f"{created_at.day} {created_at:%b %Y}"


def resolve_target_path(
    notification: Notification, role: UserRole | str | None
) -> str | None:
    """Work out where clicking a notification should navigate.

    Only report notifications with a related entity have a target, and only
    for roles that have a report page.

    Returns:
        Path of the target page, or None
    """
    if notification.kind not in REPORT_KINDS:
        return None
    if notification.related_entity_id in (None, ""):
        return None
    if not role:
        return None

    try:
        template = REPORT_PATHS.get(UserRole(role))
    except ValueError:
        return None
    if template is None:
        return None
    return template.format(entity_id=notification.related_entity_id)
