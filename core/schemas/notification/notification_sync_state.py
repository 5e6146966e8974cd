"""Schema for a point-in-time view of the notification sync engine."""

from datetime import datetime

from pydantic import ConfigDict, Field

from core.enums import PollingState
from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.notification.notification import Notification


class NotificationSyncState(BaseSchemaModel):
    """Immutable snapshot handed to UI consumers."""

    model_config = ConfigDict(frozen=True)

    notifications: list[Notification] = Field(default_factory=list)
    unread_count: int = Field(default=0, ge=0)
    loading: bool = False
    error: str | None = None
    poll_interval_ms: int = Field(..., gt=0)
    last_poll_time: datetime | None = None
    state: PollingState = PollingState.IDLE
