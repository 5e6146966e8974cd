"""User role enumeration for EventSphere accounts."""

from enum import Enum


class UserRole(str, Enum):
    """Account roles issued by the EventSphere auth service."""

    ADMIN = "ADMIN"
    ORGANIZER = "ORGANIZER"
    ATTENDEE = "ATTENDEE"
