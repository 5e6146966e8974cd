"""Django settings for the EventSphere notification sync service.

The service has no database of its own and serves no HTTP routes. Django
provides configuration, the cache used to hold session tokens, signal
dispatch for local notification events, and management commands.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "django-insecure-eventsphere-dev-key")

DEBUG = os.getenv("DEBUG", "false").lower() == "true"

ALLOWED_HOSTS: list[str] = []

INSTALLED_APPS = [
    "core",
]

# No database: notification state lives in the remote API
DATABASES: dict = {}

# Shared between processes: login writes session tokens, the sync runner reads them
CACHES = {
    "default": {
        "BACKEND": os.getenv(
            "SESSION_CACHE_BACKEND",
            "django.core.cache.backends.filebased.FileBasedCache",
        ),
        "LOCATION": os.getenv(
            "SESSION_CACHE_LOCATION", str(BASE_DIR / ".cache" / "sessions")
        ),
    }
}

USE_TZ = True
TIME_ZONE = "UTC"

# Notification API
NOTIFICATION_API_BASE_URL = os.getenv(
    "NOTIFICATION_API_BASE_URL", "http://localhost:8080/api"
)
NOTIFICATION_API_TIMEOUT = int(os.getenv("NOTIFICATION_API_TIMEOUT", "10"))

# Adaptive polling
NOTIFICATION_POLL_FLOOR_MS = int(os.getenv("NOTIFICATION_POLL_FLOOR_MS", "5000"))
NOTIFICATION_POLL_CEILING_MS = int(os.getenv("NOTIFICATION_POLL_CEILING_MS", "30000"))
NOTIFICATION_POLL_BACKOFF_FACTOR = float(
    os.getenv("NOTIFICATION_POLL_BACKOFF_FACTOR", "1.2")
)
NOTIFICATION_POLL_RECOVERY_FACTOR = float(
    os.getenv("NOTIFICATION_POLL_RECOVERY_FACTOR", "0.8")
)

# New notification handling
NOTIFICATION_ALERT_STAGGER_MS = int(os.getenv("NOTIFICATION_ALERT_STAGGER_MS", "1000"))
NOTIFICATION_NEW_ITEM_DETECTION = os.getenv(
    "NOTIFICATION_NEW_ITEM_DETECTION", "identity"
)
NOTIFICATION_ALERTS_ENABLED = (
    os.getenv("NOTIFICATION_ALERTS_ENABLED", "true").lower() == "true"
)

# Session token storage
SESSION_TOKEN_CACHE_PREFIX = os.getenv(
    "SESSION_TOKEN_CACHE_PREFIX", "eventsphere:session-token"
)

# Logging is configured by core.logging.setup_logging() at process start
LOGGING_CONFIG = None

TEST_MODE = False
