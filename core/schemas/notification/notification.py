"""Schema for a notification as served by the EventSphere API."""

from datetime import datetime

from pydantic import Field

from core.enums import NotificationKind
from core.schemas.base_schema_model import BaseSchemaModel


class Notification(BaseSchemaModel):
    """A single notification from ``GET /notifications``.

    ``id`` is opaque and stable across polls. ``type`` is kept as the raw
    string sent by the server; use ``kind`` for the known enumeration.
    """

    id: int | str = Field(..., description="Opaque notification identifier")
    type: str = Field(
        default=NotificationKind.OTHER.value, description="Notification type"
    )
    title: str = Field(default="", description="Display title")
    message: str = Field(default="", description="Display message")
    read: bool = Field(default=False, description="Whether the notification is read")
    related_entity_id: int | str | None = Field(
        default=None, description="Entity used for click-through navigation"
    )
    sender_role: str | None = Field(default=None, description="Role of the sender")
    created_at: datetime | None = Field(default=None, description="Creation time")

    @property
    def kind(self) -> NotificationKind:
        return NotificationKind.from_value(self.type)
