"""Downstream service clients package."""

from core.services.downstream.async_notification_api import AsyncNotificationApi
from core.services.downstream.base_downstream_client import BaseDownstreamClient
from core.services.downstream.notification_api_client import NotificationApiClient

__all__ = [
    "AsyncNotificationApi",
    "BaseDownstreamClient",
    "NotificationApiClient",
]
