"""Client-side notification sync engine.

NotificationSyncEngine owns the notification list and unread count for one
signed-in session. It polls the notification API on an adaptive interval,
applies read/delete mutations optimistically and reconciles them with the
server, and announces newly observed notifications through the
notification_received signal and an alerting port.

All state changes happen on the asyncio event loop that called start().
Network calls are awaited, never serialized: overlapping polls are allowed
and the last one to complete wins, since every poll replaces the whole list.
A poll that completes after a local mutation can briefly show the server's
pre-mutation state until the next poll catches up.
"""

import asyncio
import uuid
from collections.abc import Coroutine, Iterable
from contextlib import contextmanager
from typing import Any, Protocol

from django.conf import settings
from django.utils import timezone

import requests
import structlog
from pydantic import ValidationError

from core.enums import NewItemDetection, PollingState
from core.exceptions import DownstreamServiceError, MissingCredentialsError
from core.logging import set_sync_session_id
from core.schemas.notification import Notification, NotificationSyncState
from core.services.alerting import AlertingPort, NullAlertPort
from core.services.credentials import CredentialProvider
from core.services.polling_policy import PollingPolicy
from core.signals import notification_received, page_visibility_changed, window_focused

logger = structlog.get_logger(__name__)

# Failures the engine absorbs into its error state
SYNC_ERRORS = (DownstreamServiceError, requests.RequestException, ValidationError)


class NotificationApi(Protocol):
    """Coroutine interface the engine needs from the notification API."""

    async def list_notifications(self) -> list[Notification]: ...

    async def list_unread_notifications(self) -> list[Notification]: ...

    async def get_unread_count(self) -> int: ...

    async def mark_as_read(self, notification_id: int | str) -> Any: ...

    async def mark_all_as_read(self) -> None: ...

    async def delete_notification(self, notification_id: int | str) -> None: ...


def count_unread(notifications: Iterable[Notification]) -> int:
    return sum(1 for notification in notifications if not notification.read)


def same_id(left: int | str, right: int | str) -> bool:
    # The API may send numeric ids while callers pass them back as strings
    return str(left) == str(right)


class NotificationSyncEngine:
    """Polling and optimistic-update engine for one session's notifications."""

    def __init__(
        self,
        api: NotificationApi,
        credentials: CredentialProvider,
        alerts: AlertingPort | None = None,
        policy: PollingPolicy | None = None,
        detection: NewItemDetection | str | None = None,
        alert_stagger_ms: int | None = None,
        session_id: str | None = None,
    ):
        """Initialize the engine in the IDLE state with an empty list.

        Args:
            api: Coroutine facade over the notification API
            credentials: Session token source; no token keeps the engine idle
            alerts: Platform alert surface, defaults to one that never alerts
            policy: Polling interval rules, defaults to settings
            detection: New-notification detection mode, defaults to settings
            alert_stagger_ms: Spacing between emissions for a burst of new
                notifications, defaults to settings
            session_id: Identifier bound to log records of this session
        """
        self.api = api
        self.credentials = credentials
        self.alerts = alerts or NullAlertPort()
        self.policy = policy or PollingPolicy.from_settings()
        self.detection = NewItemDetection(
            detection or settings.NOTIFICATION_NEW_ITEM_DETECTION
        )
        self.alert_stagger_ms = (
            settings.NOTIFICATION_ALERT_STAGGER_MS
            if alert_stagger_ms is None
            else alert_stagger_ms
        )
        self.session_id = session_id or uuid.uuid4().hex[:12]

        self.notifications: list[Notification] = []
        self.unread_count = 0
        self.error: str | None = None
        self.poll_interval_ms = self.policy.floor_ms
        self.last_poll_time = None
        self.state = PollingState.IDLE
        self.page_hidden = False
        self.alerts_permitted = False

        # Bumped on teardown so late results of a finished session are dropped
        self._generation = 0
        self._in_flight = 0
        self._loaded = False
        self._server_ids: set[str] = set()
        self._server_count = 0
        self._loop: asyncio.AbstractEventLoop | None = None
        self._timer: asyncio.TimerHandle | None = None
        self._emissions: set[asyncio.TimerHandle] = set()
        self._tasks: set[asyncio.Task] = set()

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    @property
    def timer_active(self) -> bool:
        return self._timer is not None and not self._timer.cancelled()

    def snapshot(self) -> NotificationSyncState:
        """Return an immutable view of the current state for UI consumers."""
        return NotificationSyncState(
            notifications=list(self.notifications),
            unread_count=self.unread_count,
            loading=self.loading,
            error=self.error,
            poll_interval_ms=self.poll_interval_ms,
            last_poll_time=self.last_poll_time,
            state=self.state,
        )

    # Lifecycle

    def start(self) -> bool:
        """Begin polling if the session holds a token.

        Must be called from a running event loop. Issues one unread-count
        fetch immediately, then polls at the floor interval.

        Returns:
            True if the engine is polling, False if it stays IDLE
        """
        if self.state is PollingState.POLLING:
            return True

        if not self.credentials.get_token():
            logger.info("No session token, notification polling stays idle")
            return False

        set_sync_session_id(self.session_id)
        self._loop = asyncio.get_running_loop()
        self.state = PollingState.POLLING
        self.page_hidden = False
        self.poll_interval_ms = self.policy.floor_ms

        page_visibility_changed.connect(self._on_visibility_signal)
        window_focused.connect(self._on_focus_signal)

        self._spawn(self.fetch_unread_count())
        self._schedule_next_tick()

        logger.info("Notification polling started", interval_ms=self.poll_interval_ms)
        return True

    def teardown(self) -> None:
        """Stop polling and drop all session state.

        Safe to call repeatedly and from IDLE. In-flight requests are left to
        finish; their results are discarded.
        """
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

        for handle in self._emissions:
            handle.cancel()
        self._emissions.clear()

        page_visibility_changed.disconnect(self._on_visibility_signal)
        window_focused.disconnect(self._on_focus_signal)

        if self.state is PollingState.POLLING:
            logger.info("Notification polling stopped")

        self.state = PollingState.IDLE
        self._loop = None
        self._generation += 1
        self._in_flight = 0
        self._loaded = False
        self._server_ids = set()
        self._server_count = 0
        self.notifications = []
        self.unread_count = 0
        self.error = None
        self.last_poll_time = None
        self.page_hidden = False
        self.poll_interval_ms = self.policy.floor_ms

    def _schedule_next_tick(self) -> None:
        # Re-armed on every tick so interval changes apply to the next wait
        self._timer = asyncio.get_running_loop().call_later(
            self.poll_interval_ms / 1000, self._on_tick
        )

    def _on_tick(self) -> None:
        self._timer = None
        if self.state is not PollingState.POLLING:
            return
        if not self.credentials.get_token():
            self._end_session()
            return
        self._spawn(self.poll_for_updates())
        self._schedule_next_tick()

    def _spawn(self, coro: Coroutine) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _end_session(self) -> None:
        logger.info("Session token gone, ending notification polling")
        self.teardown()

    @contextmanager
    def _request(self):
        generation = self._generation
        self._in_flight += 1
        try:
            yield
        finally:
            if generation == self._generation:
                self._in_flight -= 1

    # Page activity

    def handle_visibility_change(self, hidden: bool) -> None:
        """React to the page being hidden or shown.

        Hidden pages poll at the ceiling. A page that becomes visible drops to
        the floor and polls immediately.
        """
        if self.state is not PollingState.POLLING:
            return

        self.page_hidden = hidden
        if hidden:
            self.poll_interval_ms = self.policy.on_hidden()
            logger.debug(
                "Page hidden, slowing polling", interval_ms=self.poll_interval_ms
            )
        else:
            self._refresh_now("visible")

    def handle_focus(self) -> None:
        """React to the window gaining focus: floor interval, immediate poll."""
        if self.state is not PollingState.POLLING:
            return
        self.page_hidden = False
        self._refresh_now("focus")

    def _refresh_now(self, reason: str) -> None:
        self.poll_interval_ms = self.policy.on_visible()
        logger.debug(
            "Page re-engaged, polling now",
            reason=reason,
            interval_ms=self.poll_interval_ms,
        )
        self._spawn(self.poll_for_updates())

    def _on_visibility_signal(self, sender, hidden: bool, **_kwargs) -> None:
        self._call_on_loop(self.handle_visibility_change, hidden)

    def _on_focus_signal(self, sender, **_kwargs) -> None:
        self._call_on_loop(self.handle_focus)

    def _call_on_loop(self, callback, *args) -> None:
        # Signals may be sent from a thread other than the engine's loop
        loop = self._loop
        if loop is None:
            return
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is loop:
            callback(*args)
        else:
            loop.call_soon_threadsafe(callback, *args)

    # Fetching

    def _record_fetch_failure(self, operation: str, error: Exception) -> None:
        self.error = str(error) or type(error).__name__
        logger.warning(
            "Notification fetch failed",
            operation=operation,
            error=self.error,
            first_load=not self._loaded,
        )
        # Only a failed first load blanks the view; later failures keep it
        if not self._loaded:
            self.notifications = []
            self.unread_count = 0

    def _replace_from_server(self, notifications: list[Notification]) -> None:
        self.notifications = list(notifications)
        self.unread_count = count_unread(notifications)
        self._server_ids = {str(n.id) for n in notifications}
        self._server_count = len(notifications)
        self._loaded = True

    async def fetch_all(self) -> list[Notification] | None:
        """Replace the list with the server's full notification list.

        Returns:
            The fetched notifications, or None if the fetch failed
        """
        generation = self._generation
        with self._request():
            try:
                notifications = await self.api.list_notifications()
            except SYNC_ERRORS as e:
                if generation == self._generation:
                    self._record_fetch_failure("fetch_all", e)
                return None

        if generation != self._generation:
            return None

        self.error = None
        self._replace_from_server(notifications)
        return notifications

    async def fetch_unread_count(self) -> int | None:
        """Refresh only the unread count from ``GET /notifications/count``.

        Returns:
            The server count, or None if the fetch failed
        """
        generation = self._generation
        with self._request():
            try:
                count = await self.api.get_unread_count()
            except SYNC_ERRORS as e:
                if generation == self._generation:
                    self.error = str(e) or type(e).__name__
                    logger.warning("Unread count fetch failed", error=self.error)
                return None

        if generation != self._generation:
            return None

        self.error = None
        self.unread_count = count
        return count

    async def fetch_unread_notifications(self) -> list[Notification] | None:
        """Refresh the unread count from the length of the unread list.

        The held notification list is left untouched.

        Returns:
            The unread notifications, or None if the fetch failed
        """
        generation = self._generation
        with self._request():
            try:
                unread = await self.api.list_unread_notifications()
            except SYNC_ERRORS as e:
                if generation == self._generation:
                    self.error = str(e) or type(e).__name__
                    logger.warning("Unread list fetch failed", error=self.error)
                return None

        if generation != self._generation:
            return None

        self.error = None
        self.unread_count = len(unread)
        return unread

    # Polling

    def _detect_new_items(self, fresh: list[Notification]) -> list[Notification]:
        if not self._loaded:
            # First load only sets the baseline
            return []

        if self.detection is NewItemDetection.LENGTH:
            added = len(fresh) - self._server_count
            return fresh[:added] if added > 0 else []

        return [n for n in fresh if str(n.id) not in self._server_ids]

    async def poll_for_updates(self) -> list[Notification]:
        """Fetch the full list, adapt the interval and announce new items.

        Returns:
            Notifications judged new by this poll
        """
        generation = self._generation
        with self._request():
            try:
                fresh = await self.api.list_notifications()
            except MissingCredentialsError:
                if generation == self._generation:
                    self._end_session()
                return []
            except SYNC_ERRORS as e:
                if generation == self._generation:
                    self._record_fetch_failure("poll", e)
                    self.poll_interval_ms = self.policy.on_error(self.poll_interval_ms)
                return []

        if generation != self._generation:
            return []

        new_items = self._detect_new_items(fresh)
        self.error = None
        self._replace_from_server(fresh)
        self.last_poll_time = timezone.now()

        if new_items:
            logger.info("New notifications received", count=len(new_items))
            self._announce(new_items)
        else:
            self.poll_interval_ms = self.policy.on_success(self.poll_interval_ms)

        logger.debug(
            "Poll completed",
            total=len(fresh),
            unread=self.unread_count,
            interval_ms=self.poll_interval_ms,
        )
        return new_items

    def _announce(self, new_items: list[Notification]) -> None:
        for index, notification in enumerate(new_items):
            delay = index * self.alert_stagger_ms / 1000
            if delay <= 0:
                self._emit(notification)
            else:
                self._schedule_emission(notification, delay)

    def _schedule_emission(self, notification: Notification, delay: float) -> None:
        handle: asyncio.TimerHandle | None = None

        def fire() -> None:
            self._emissions.discard(handle)
            self._emit(notification)

        handle = asyncio.get_running_loop().call_later(delay, fire)
        self._emissions.add(handle)

    def _emit(self, notification: Notification) -> None:
        responses = notification_received.send_robust(
            sender=self.__class__, notification=notification
        )
        for receiver, result in responses:
            if isinstance(result, Exception):
                logger.warning(
                    "notification_received receiver failed",
                    receiver=getattr(receiver, "__qualname__", repr(receiver)),
                    error=str(result),
                )

        if not self.alerts_permitted:
            return

        try:
            self.alerts.emit(notification.title, notification.message)
        except Exception as e:
            logger.warning("Alert emission failed, disabling alerts", error=str(e))
            self.alerts_permitted = False

    def request_permission(self) -> bool:
        """Ask the alerting port for permission to show alerts.

        Denial or failure only disables alerts.

        Returns:
            True if alerts are enabled
        """
        try:
            granted = bool(self.alerts.request_permission())
        except Exception as e:
            logger.warning("Alert permission request failed", error=str(e))
            granted = False

        self.alerts_permitted = granted
        return granted

    # Mutations

    def _find(self, notification_id: int | str) -> Notification | None:
        for notification in self.notifications:
            if same_id(notification.id, notification_id):
                return notification
        return None

    def _set_read(self, notification_id: int | str, read: bool) -> None:
        self.notifications = [
            n.model_copy(update={"read": read}) if same_id(n.id, notification_id) else n
            for n in self.notifications
        ]

    async def mark_as_read(self, notification_id: int | str) -> Any:
        """Mark one notification read, optimistically.

        The local flag and count change before the request is sent and are
        restored if it fails.

        Returns:
            Whatever the API returned for the update

        Raises:
            DownstreamServiceError, requests.RequestException, ValidationError:
                after the local change has been rolled back
        """
        generation = self._generation
        target = self._find(notification_id)
        was_unread = target is not None and not target.read
        decremented = 0
        if was_unread:
            self._set_read(notification_id, True)
            if self.unread_count > 0:
                self.unread_count -= 1
                decremented = 1

        self.error = None
        with self._request():
            try:
                return await self.api.mark_as_read(notification_id)
            except SYNC_ERRORS as e:
                if generation == self._generation:
                    current = self._find(notification_id)
                    # A poll may already have restored the server's state
                    if was_unread and current is not None and current.read:
                        self._set_read(notification_id, False)
                        self.unread_count += decremented
                    self.error = str(e) or type(e).__name__
                    logger.warning(
                        "Mark as read failed, rolled back",
                        notification_id=notification_id,
                        error=self.error,
                    )
                raise

    async def mark_all_as_read(self) -> bool:
        """Mark every notification read, optimistically.

        On failure the list is re-fetched from the server instead of being
        restored item by item.

        Returns:
            True once the server accepted the update

        Raises:
            DownstreamServiceError, requests.RequestException, ValidationError:
                after the resync
        """
        generation = self._generation
        previous_unread = self.unread_count
        self.notifications = [
            n if n.read else n.model_copy(update={"read": True})
            for n in self.notifications
        ]
        self.unread_count = 0

        self.error = None
        with self._request():
            try:
                await self.api.mark_all_as_read()
            except SYNC_ERRORS as e:
                if generation == self._generation:
                    logger.warning(
                        "Mark all as read failed, resyncing",
                        previous_unread_count=previous_unread,
                        error=str(e),
                    )
                    await self.fetch_all()
                    if generation == self._generation:
                        self.error = str(e) or type(e).__name__
                raise

        return True

    async def delete_notification(self, notification_id: int | str) -> bool:
        """Remove one notification, optimistically.

        The unread count drops only if the removed notification was unread.
        On failure the list is re-fetched from the server.

        Returns:
            True once the server accepted the delete

        Raises:
            DownstreamServiceError, requests.RequestException, ValidationError:
                after the resync
        """
        generation = self._generation
        target = self._find(notification_id)
        was_unread = target is not None and not target.read

        self.notifications = [
            n for n in self.notifications if not same_id(n.id, notification_id)
        ]
        if was_unread and self.unread_count > 0:
            self.unread_count -= 1

        self.error = None
        with self._request():
            try:
                await self.api.delete_notification(notification_id)
            except SYNC_ERRORS as e:
                if generation == self._generation:
                    logger.warning(
                        "Delete failed, resyncing",
                        notification_id=notification_id,
                        error=str(e),
                    )
                    await self.fetch_all()
                    if generation == self._generation:
                        self.error = str(e) or type(e).__name__
                raise

        return True
