"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class NotificationKind(str, Enum):
    """Events that produce a notification for their target user."""

    MENTION = "mention"
    LIKE = "like"
    COMMENT = "comment"
    COMMENT_REPLY = "comment_reply"
    COMMENT_LIKE = "comment_like"
    SHARE = "share"
    FOLLOW = "follow"
    FRIEND_REQUEST = "friend_request"
    FRIEND_ACCEPT = "friend_accept"
    DIRECT_MESSAGE = "dm"

    @classmethod
    def parse(cls, value: "NotificationKind | str") -> "NotificationKind":
        """Return the member for ``value`` or raise ``ValueError``."""

        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError as exc:
            raise ValueError(f"Unknown notification kind: {value!r}") from exc


@dataclass
class Notification:
    """Information message delivered to a specific user.

    ``reference`` carries the identifiers of whatever triggered the
    notification (``from``, ``post``, ``comment``...). Which keys are present
    depends on the kind; a friend request only names the sender.
    """

    id: int | None
    user_id: int
    kind: NotificationKind
    reference: dict[str, Any] = field(default_factory=dict)
    read: bool = False
    created_at: datetime | None = None


__all__ = ["Notification", "NotificationKind"]
