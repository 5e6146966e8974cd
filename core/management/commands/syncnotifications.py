"""Headless notification sync session.

Runs the notification sync engine against the configured EventSphere API
for one session token, logging new notifications as alerts. Useful for
checking a backend deployment without a browser.
"""

import asyncio
import os

from django.core.management.base import BaseCommand, CommandError

from core.logging import setup_logging
from core.schemas.notification import NotificationSyncState
from core.services import (
    AlertingPort,
    CachedSessionCredentialProvider,
    ConsoleAlertPort,
    CredentialProvider,
    NotificationSyncEngine,
    NullAlertPort,
    StaticCredentialProvider,
)
from core.services.downstream import AsyncNotificationApi, NotificationApiClient


class Command(BaseCommand):
    """Poll the notification API for one session until stopped."""

    help = "Run a headless notification sync session against the EventSphere API"

    def add_arguments(self, parser):
        parser.add_argument(
            "--token",
            default=os.getenv("EVENTSPHERE_TOKEN"),
            help="Session bearer token (default: $EVENTSPHERE_TOKEN)",
        )
        parser.add_argument(
            "--session-key",
            help="Read the bearer token stored in the cache for this session",
        )
        parser.add_argument(
            "--duration",
            type=float,
            default=0,
            help="Seconds to run; 0 runs until interrupted",
        )
        parser.add_argument(
            "--no-alerts",
            action="store_true",
            help="Do not emit alerts for new notifications",
        )

    def handle(self, *_args, **options):
        setup_logging()

        credentials = self._build_credentials(options)
        if not credentials.get_token():
            raise CommandError(
                "No session token: pass --token, set EVENTSPHERE_TOKEN, "
                "or use --session-key with a stored token"
            )

        alerts = NullAlertPort() if options["no_alerts"] else ConsoleAlertPort()

        try:
            state = asyncio.run(self._run(credentials, alerts, options["duration"]))
        except KeyboardInterrupt:
            self.stdout.write(self.style.WARNING("Notification sync interrupted"))
            return

        message = (
            f"Notification sync finished: {state.unread_count} unread "
            f"of {len(state.notifications)}"
        )
        if state.error:
            self.stdout.write(
                self.style.WARNING(f"{message} (last error: {state.error})")
            )
        else:
            self.stdout.write(self.style.SUCCESS(message))

    @staticmethod
    def _build_credentials(options) -> CredentialProvider:
        if options.get("session_key"):
            return CachedSessionCredentialProvider(options["session_key"])
        return StaticCredentialProvider(options.get("token"))

    @staticmethod
    async def _run(
        credentials: CredentialProvider, alerts: AlertingPort, duration: float
    ) -> NotificationSyncState:
        client = NotificationApiClient(credentials=credentials)
        engine = NotificationSyncEngine(
            api=AsyncNotificationApi(client),
            credentials=credentials,
            alerts=alerts,
        )
        engine.request_permission()
        engine.start()
        try:
            await engine.fetch_all()
            if duration > 0:
                await asyncio.sleep(duration)
            else:
                await asyncio.Event().wait()
            return engine.snapshot()
        finally:
            engine.teardown()
