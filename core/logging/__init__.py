"""Logging utilities for the notification sync service."""

from core.logging.config import setup_logging
from core.logging.context import (
    clear_sync_session_id,
    get_sync_session_id,
    set_sync_session_id,
)

__all__ = [
    "clear_sync_session_id",
    "get_sync_session_id",
    "set_sync_session_id",
    "setup_logging",
]
