"""Django application configuration for core."""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Configuration class for the notification sync application."""

    name = "core"
    verbose_name = "EventSphere notification sync"

    def ready(self) -> None:
        """Register signal receivers once the app registry is ready."""
        import core.signals  # noqa: PLC0415

        del core.signals
