"""Domain entity representing a direct message between two users."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class DirectMessage:
    """A persisted message. Only ``read`` changes after creation."""

    id: int | None
    sender_id: int
    recipient_id: int
    content: str
    created_at: datetime | None = None
    read: bool = False


__all__ = ["DirectMessage"]
