"""Credential providers for bearer-authenticated notification API calls.

The sync engine and HTTP client never read tokens from global state; they
receive a provider and ask it for the current token on every request.
"""

from django.conf import settings
from django.core.cache import cache

import structlog

logger = structlog.get_logger(__name__)


class CredentialProvider:
    """Source of the bearer token for the current session."""

    def get_token(self) -> str | None:
        """Return the current bearer token, or None when signed out."""
        raise NotImplementedError


class StaticCredentialProvider(CredentialProvider):
    """Provider holding a fixed token (scripts, command line, tests)."""

    def __init__(self, token: str | None):
        self._token = token or None

    def get_token(self) -> str | None:
        return self._token


class CachedSessionCredentialProvider(CredentialProvider):
    """Session token kept in the Django cache.

    Plays the role browser session storage plays for a web client: the token
    is written at login, read before each request, and removed at logout.
    """

    def __init__(self, session_key: str):
        """Initialize provider for one session.

        Args:
            session_key: Identifier of the session owning the token
        """
        self.session_key = session_key

    @property
    def cache_key(self) -> str:
        return f"{settings.SESSION_TOKEN_CACHE_PREFIX}:{self.session_key}"

    def store_token(self, token: str, timeout: int | None = None) -> None:
        """Save the session token.

        Args:
            token: Bearer token issued by the auth service
            timeout: Cache lifetime in seconds, None keeps it until cleared
        """
        cache.set(self.cache_key, token, timeout=timeout)
        logger.debug("Stored session token", session_key=self.session_key)

    def get_token(self) -> str | None:
        try:
            return cache.get(self.cache_key)
        except Exception as e:
            logger.warning(
                "Failed to read session token",
                session_key=self.session_key,
                error=str(e),
            )
            return None

    def clear(self) -> None:
        """Remove the session token (logout)."""
        cache.delete(self.cache_key)
        logger.debug("Cleared session token", session_key=self.session_key)
