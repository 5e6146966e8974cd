"""Services for the core app."""

from core.services.alerting import AlertingPort, ConsoleAlertPort, NullAlertPort
from core.services.credentials import (
    CachedSessionCredentialProvider,
    CredentialProvider,
    StaticCredentialProvider,
)
from core.services.notification_sync_engine import NotificationSyncEngine
from core.services.polling_policy import PollingPolicy

__all__ = [
    "AlertingPort",
    "CachedSessionCredentialProvider",
    "ConsoleAlertPort",
    "CredentialProvider",
    "NotificationSyncEngine",
    "NullAlertPort",
    "PollingPolicy",
    "StaticCredentialProvider",
]
