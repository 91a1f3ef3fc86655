"""Domain entity representing a pending friend request."""

from dataclasses import dataclass
from datetime import datetime

from .user import UserSummary


@dataclass
class FriendRequest:
    """A request from ``from_user_id`` waiting for ``to_user_id`` to answer."""

    id: int | None
    from_user_id: int
    to_user_id: int
    created_at: datetime | None = None
    sender: UserSummary | None = None


__all__ = ["FriendRequest"]
