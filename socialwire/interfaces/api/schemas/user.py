"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr


class UserSummaryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    avatar_url: str | None = None


class UserRead(UserSummaryRead):
    email: EmailStr
    is_active: bool
    last_seen: datetime | None = None
    created_at: datetime | None = None


class UserProfileRead(UserSummaryRead):
    last_seen: datetime | None = None
    is_online: bool


class MessageResponse(BaseModel):
    message: str
