"""Pytest configuration and shared fixtures."""

import os

import django

import pytest

# Configure Django settings for tests
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "eventsphere.settings_test")
django.setup()


@pytest.fixture
def anyio_backend():
    """Run anyio-marked tests on asyncio, the loop the sync engine targets."""
    return "asyncio"


@pytest.fixture
def notification_payloads():
    """Three notifications as the API serves them, newest first, two unread."""
    return [
        {
            "id": 3,
            "type": "STATUS_UPDATE",
            "title": "Report updated",
            "message": "Your report is now IN_PROGRESS",
            "read": False,
            "relatedEntityId": 42,
            "senderRole": "ADMIN",
            "createdAt": "2026-10-17T09:30:00Z",
        },
        {
            "id": 2,
            "type": "NEW_RESPONSE",
            "title": "New response",
            "message": "An organizer replied to your report",
            "read": False,
            "relatedEntityId": 42,
            "senderRole": "ORGANIZER",
            "createdAt": "2026-10-17T08:00:00Z",
        },
        {
            "id": 1,
            "type": "NEW_REPORT",
            "title": "Report submitted",
            "message": "We received your report",
            "read": True,
            "relatedEntityId": 42,
            "senderRole": "ATTENDEE",
            "createdAt": "2026-10-16T12:00:00Z",
        },
    ]
