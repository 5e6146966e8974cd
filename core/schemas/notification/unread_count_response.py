"""Schema for the unread notification count response."""

from typing import Any

from pydantic import Field, field_validator

from core.schemas.base_schema_model import BaseSchemaModel


class UnreadCountResponse(BaseSchemaModel):
    """Body of ``GET /notifications/count``.

    A missing or non-numeric ``unreadCount`` field is read as zero.
    """

    unread_count: int = Field(default=0, ge=0, description="Unread notifications")

    @field_validator("unread_count", mode="before")
    @classmethod
    def non_numeric_count_is_zero(cls, value: Any) -> Any:
        if isinstance(value, bool) or not isinstance(value, int | float):
            return 0
        return value
