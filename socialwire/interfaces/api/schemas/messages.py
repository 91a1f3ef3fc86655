"""Schemas for direct message history."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_serializer

from socialwire.utils import isoformat_or_none


class DirectMessageRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    sender_id: int
    recipient_id: int
    content: str
    created_at: datetime
    read: bool

    # Same rendering as the ``createdAt`` pushed over the websocket.
    @field_serializer("created_at")
    def _serialize_created_at(self, value: datetime) -> str | None:
        return isoformat_or_none(value)


class UnreadCountsRead(BaseModel):
    """Unread message counts keyed by sender id."""

    counts: dict[int, int]
