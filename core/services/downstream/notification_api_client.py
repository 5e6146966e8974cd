"""Client for the EventSphere notification API."""

from typing import Any

from django.conf import settings

import structlog
from pydantic import ValidationError

from core.schemas.notification import Notification, UnreadCountResponse
from core.services.credentials import CredentialProvider
from core.services.downstream.base_downstream_client import BaseDownstreamClient

logger = structlog.get_logger(__name__)


class NotificationApiClient(BaseDownstreamClient):
    """Blocking client for the notification endpoints of the EventSphere API.

    Every call carries the session bearer token. Non-2xx responses raise
    DownstreamServiceError (or DownstreamServiceUnavailableError for 5xx);
    transport failures propagate as requests exceptions.
    """

    def __init__(
        self,
        credentials: CredentialProvider,
        base_url: str | None = None,
        timeout: int | None = None,
    ):
        """Initialize notification API client.

        Args:
            credentials: Source of the session bearer token
            base_url: API root, defaults to settings.NOTIFICATION_API_BASE_URL
            timeout: Request timeout in seconds, defaults to
                settings.NOTIFICATION_API_TIMEOUT
        """
        super().__init__(
            service_name="notification-api",
            base_url=base_url or settings.NOTIFICATION_API_BASE_URL,
            credentials=credentials,
            timeout=timeout or settings.NOTIFICATION_API_TIMEOUT,
        )

    @property
    def notifications_url(self) -> str:
        return f"{self.base_url}/notifications"

    def _parse_list(self, data: Any) -> list[Notification]:
        """Validate a list payload; anything that is not a list reads as empty."""
        if not isinstance(data, list):
            logger.warning(
                "Notification list payload is not a list",
                payload_type=type(data).__name__,
            )
            return []

        try:
            return [Notification.model_validate(item) for item in data]
        except ValidationError as e:
            logger.error(
                "Failed to validate notification list",
                validation_errors=e.errors(),
            )
            raise

    def list_notifications(self) -> list[Notification]:
        """Fetch every notification for the session user, newest first.

        Returns:
            Notifications in server order
        """
        response = self._make_request("GET", self.notifications_url)
        notifications = self._parse_list(self._decode_body(response))
        logger.debug("Fetched notifications", count=len(notifications))
        return notifications

    def list_unread_notifications(self) -> list[Notification]:
        """Fetch only unread notifications.

        Returns:
            Unread notifications in server order
        """
        response = self._make_request("GET", f"{self.notifications_url}/unread")
        return self._parse_list(self._decode_body(response))

    def get_unread_count(self) -> int:
        """Fetch the server-side unread counter.

        Returns:
            Unread notification count, 0 if the server omits it
        """
        response = self._make_request("GET", f"{self.notifications_url}/count")
        data = self._decode_body(response)
        if not isinstance(data, dict):
            return 0

        try:
            return UnreadCountResponse.model_validate(data).unread_count
        except ValidationError as e:
            logger.error(
                "Failed to validate unread count response",
                validation_errors=e.errors(),
            )
            raise

    def mark_as_read(self, notification_id: int | str) -> Notification | None:
        """Mark one notification as read.

        Args:
            notification_id: Notification identifier

        Returns:
            The updated notification when the server echoes it, else None
        """
        url = f"{self.notifications_url}/{notification_id}/read"
        response = self._make_request("PATCH", url)
        data = self._decode_body(response)

        logger.info("Marked notification as read", notification_id=notification_id)

        if isinstance(data, dict):
            return Notification.model_validate(data)
        return None

    def mark_all_as_read(self) -> None:
        """Mark every notification of the session user as read."""
        self._make_request("PATCH", f"{self.notifications_url}/read-all")
        logger.info("Marked all notifications as read")

    def delete_notification(self, notification_id: int | str) -> None:
        """Delete one notification.

        Args:
            notification_id: Notification identifier
        """
        self._make_request("DELETE", f"{self.notifications_url}/{notification_id}")
        logger.info("Deleted notification", notification_id=notification_id)
