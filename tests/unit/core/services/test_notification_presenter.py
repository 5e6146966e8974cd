"""Tests for notification presentation helpers."""

from datetime import UTC, datetime, timedelta

import pytest

from core.enums import NotificationKind, ReadFilter, UserRole
from core.services.notification_presenter import (
    DEFAULT_ICON,
    filter_notifications,
    format_relative_time,
    notification_icon,
    resolve_target_path,
)
from tests.base import make_notification

NOW = datetime(2026, 10, 17, 12, 0, tzinfo=UTC)


@pytest.fixture
def notifications():
    return [
        make_notification(
            3, type="STATUS_UPDATE", title="Report updated", message="In progress"
        ),
        make_notification(
            2, type="NEW_RESPONSE", title="New reply", message="Organizer answered"
        ),
        make_notification(
            1, read=True, type="NEW_REPORT", title="Report filed", message="Thanks"
        ),
    ]


class TestFilterNotifications:
    """Test suite for filter_notifications."""

    def test_all_keeps_everything_in_order(self, notifications):
        result = filter_notifications(notifications)

        assert [n.id for n in result] == [3, 2, 1]

    def test_unread_and_read_filters(self, notifications):
        unread = filter_notifications(notifications, status=ReadFilter.UNREAD)
        read = filter_notifications(notifications, status="read")

        assert [n.id for n in unread] == [3, 2]
        assert [n.id for n in read] == [1]

    def test_kind_filter_accepts_enum_or_string(self, notifications):
        by_enum = filter_notifications(notifications, kind=NotificationKind.NEW_REPORT)
        by_string = filter_notifications(notifications, kind="NEW_RESPONSE")

        assert [n.id for n in by_enum] == [1]
        assert [n.id for n in by_string] == [2]

    def test_search_is_case_insensitive_over_title_and_message(self, notifications):
        assert [n.id for n in filter_notifications(notifications, search="REPORT")] == [
            3,
            1,
        ]
        assert [
            n.id for n in filter_notifications(notifications, search="organizer")
        ] == [2]

    def test_filters_combine(self, notifications):
        result = filter_notifications(
            notifications, status="unread", kind="STATUS_UPDATE", search="progress"
        )

        assert [n.id for n in result] == [3]

    def test_other_kind_matches_unknown_types(self, notifications):
        unknown = make_notification(4, type="EVENT_CANCELLED")
        other = make_notification(5, type="OTHER")

        result = filter_notifications(
            [*notifications, unknown, other], kind=NotificationKind.OTHER
        )

        assert [n.id for n in result] == [4, 5]

    def test_unknown_kind_filter_raises(self, notifications):
        with pytest.raises(ValueError):
            filter_notifications(notifications, kind="EVENT_CANCELLED")

    def test_unknown_status_raises(self, notifications):
        with pytest.raises(ValueError):
            filter_notifications(notifications, status="archived")


class TestNotificationIcon:
    """Test suite for notification_icon."""

    @pytest.mark.parametrize(
        ("notification_type", "icon"),
        [
            ("NEW_REPORT", "📝"),
            ("STATUS_UPDATE", "🔄"),
            ("NEW_RESPONSE", "💬"),
        ],
    )
    def test_known_types(self, notification_type, icon):
        assert notification_icon(notification_type) == icon

    def test_other_types_use_bell(self):
        assert notification_icon("ADMIN_RESPONSE") == DEFAULT_ICON
        assert notification_icon("SOMETHING_NEW") == DEFAULT_ICON
        assert notification_icon(None) == DEFAULT_ICON


class TestFormatRelativeTime:
    """Test suite for format_relative_time."""

    @pytest.mark.parametrize(
        ("age", "expected"),
        [
            (timedelta(seconds=30), "Just now"),
            (timedelta(minutes=5), "5m ago"),
            (timedelta(minutes=59, seconds=59), "59m ago"),
            (timedelta(hours=3), "3h ago"),
            (timedelta(days=2), "2d ago"),
        ],
    )
    def test_recent(self, age, expected):
        assert format_relative_time(NOW - age, now=NOW) == expected

    def test_older_than_a_week_shows_date(self):
        assert format_relative_time(datetime(2026, 3, 14, tzinfo=UTC), now=NOW) == (
            "14 Mar 2026"
        )

    def test_naive_values_are_utc(self):
        created = datetime(2026, 10, 17, 11, 0)

        assert format_relative_time(created, now=NOW) == "1h ago"

    def test_missing_timestamp(self):
        assert format_relative_time(None, now=NOW) == "N/A"


class TestResolveTargetPath:
    """Test suite for resolve_target_path."""

    def test_admin_goes_to_admin_report_page(self):
        notification = make_notification(1, type="NEW_REPORT", relatedEntityId=42)

        assert resolve_target_path(notification, UserRole.ADMIN) == (
            "/admin/reports/42"
        )

    def test_attendee_goes_to_own_report_page(self):
        notification = make_notification(1, type="NEW_RESPONSE", relatedEntityId=42)

        assert resolve_target_path(notification, "ATTENDEE") == "/reports/42"

    def test_organizer_has_no_target(self):
        notification = make_notification(1, type="STATUS_UPDATE", relatedEntityId=42)

        assert resolve_target_path(notification, UserRole.ORGANIZER) is None

    def test_other_kinds_have_no_target(self):
        notification = make_notification(1, type="ADMIN_RESPONSE", relatedEntityId=42)

        assert resolve_target_path(notification, UserRole.ADMIN) is None

    def test_missing_entity_or_role_has_no_target(self):
        notification = make_notification(1, type="NEW_REPORT")

        assert resolve_target_path(notification, UserRole.ADMIN) is None
        assert (
            resolve_target_path(
                make_notification(2, type="NEW_REPORT", relatedEntityId=7), None
            )
            is None
        )
        assert (
            resolve_target_path(
                make_notification(3, type="NEW_REPORT", relatedEntityId=7), "GUEST"
            )
            is None
        )
