"""Exception types for the notification sync service."""

from core.exceptions.downstream_exceptions import (
    DownstreamServiceError,
    DownstreamServiceUnavailableError,
    MissingCredentialsError,
)

__all__ = [
    "DownstreamServiceError",
    "DownstreamServiceUnavailableError",
    "MissingCredentialsError",
]
