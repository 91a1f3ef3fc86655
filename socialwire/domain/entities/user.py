"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int | None
    first_name: str
    last_name: str
    email: str
    password: str
    avatar_url: str | None
    is_active: bool
    last_seen: datetime | None
    created_at: datetime | None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def summary(self) -> "UserSummary":
        """Return the public projection shared with other users."""

        return UserSummary(
            id=self.id,
            first_name=self.first_name,
            last_name=self.last_name,
            avatar_url=self.avatar_url,
            last_seen=self.last_seen,
        )


@dataclass(frozen=True)
class UserSummary:
    """Public subset of a user's profile."""

    id: int
    first_name: str
    last_name: str
    avatar_url: str | None
    last_seen: datetime | None = None


__all__ = ["User", "UserSummary"]
