"""Coroutine facade over the blocking notification API client."""

from functools import partial

import anyio

from core.schemas.notification import Notification
from core.services.downstream.notification_api_client import NotificationApiClient


class AsyncNotificationApi:
    """Runs NotificationApiClient calls in worker threads.

    The sync engine awaits these coroutines so a slow request never blocks
    the event loop or the polling timer.
    """

    def __init__(self, client: NotificationApiClient):
        self.client = client

    async def list_notifications(self) -> list[Notification]:
        return await anyio.to_thread.run_sync(self.client.list_notifications)

    async def list_unread_notifications(self) -> list[Notification]:
        return await anyio.to_thread.run_sync(self.client.list_unread_notifications)

    async def get_unread_count(self) -> int:
        return await anyio.to_thread.run_sync(self.client.get_unread_count)

    async def mark_as_read(self, notification_id: int | str) -> Notification | None:
        return await anyio.to_thread.run_sync(
            partial(self.client.mark_as_read, notification_id)
        )

    async def mark_all_as_read(self) -> None:
        await anyio.to_thread.run_sync(self.client.mark_all_as_read)

    async def delete_notification(self, notification_id: int | str) -> None:
        await anyio.to_thread.run_sync(
            partial(self.client.delete_notification, notification_id)
        )
