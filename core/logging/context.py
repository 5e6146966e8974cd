"""Context-local storage for sync session tracking.

contextvars are used rather than thread-locals so the session id follows
asyncio tasks and the worker threads anyio spawns for HTTP calls.
"""

from contextvars import ContextVar

_sync_session_id: ContextVar[str | None] = ContextVar("sync_session_id", default=None)


def set_sync_session_id(session_id: str) -> None:
    """Bind the sync session id to the current context.

    Args:
        session_id: Identifier of the running engine session.
    """
    _sync_session_id.set(session_id)


def get_sync_session_id() -> str | None:
    """Return the sync session id of the current context, or None."""
    return _sync_session_id.get()


def clear_sync_session_id() -> None:
    """Unbind the sync session id from the current context."""
    _sync_session_id.set(None)
