"""Alerting ports for system-level notification pop-ups.

The sync engine only talks to an AlertingPort. Platform adapters decide
whether alerts are allowed and how they are shown.
"""

from django.conf import settings

import structlog

logger = structlog.get_logger(__name__)


class AlertingPort:
    """Interface for the platform alert surface."""

    def request_permission(self) -> bool:
        """Ask the platform for permission to show alerts.

        Returns:
            True if alerts may be emitted
        """
        raise NotImplementedError

    def emit(self, title: str, body: str) -> None:
        """Show one alert. Fire-and-forget."""
        raise NotImplementedError


class ConsoleAlertPort(AlertingPort):
    """Writes alerts to the structured log.

    Used by the headless runner, where the log is the only surface a person
    is watching.
    """

    def __init__(self, enabled: bool | None = None):
        """Initialize console alert port.

        Args:
            enabled: Whether permission is granted, defaults to
                settings.NOTIFICATION_ALERTS_ENABLED
        """
        self.enabled = (
            settings.NOTIFICATION_ALERTS_ENABLED if enabled is None else enabled
        )

    def request_permission(self) -> bool:
        logger.info("Alert permission requested", granted=self.enabled)
        return self.enabled

    def emit(self, title: str, body: str) -> None:
        logger.info("New notification", title=title, body=body)


class NullAlertPort(AlertingPort):
    """Alert surface that never grants permission."""

    def request_permission(self) -> bool:
        return False

    def emit(self, title: str, body: str) -> None:
        return None
