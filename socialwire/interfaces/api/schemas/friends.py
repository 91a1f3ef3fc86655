"""Schemas for friend requests and friend presence."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from .user import UserSummaryRead


class FriendRequestRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    from_user_id: int
    created_at: datetime | None = None
    sender: UserSummaryRead | None = None


class FriendPresenceRead(UserSummaryRead):
    last_seen: datetime | None = None
    is_online: bool
