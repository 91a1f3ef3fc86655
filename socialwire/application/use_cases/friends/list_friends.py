"""Read-only queries over the friend relation."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from sqlalchemy.orm import Session

from socialwire.domain.entities import FriendRequest, User, UserSummary
from socialwire.infrastructure.repositories import FriendshipRepository


@dataclass(frozen=True)
class FriendPresence:
    """A friend together with their current presence."""

    friend: UserSummary
    is_online: bool


def list_friends(session: Session, user_id: int) -> Sequence[User]:
    return FriendshipRepository(session).list_friends(user_id)


def list_friend_requests(session: Session, user_id: int) -> Sequence[FriendRequest]:
    return FriendshipRepository(session).list_requests_for(user_id)


def list_friend_presence(
    session: Session, user_id: int, *, is_online: Callable[[int], bool]
) -> list[FriendPresence]:
    """Return every friend of ``user_id`` with the live presence reported by ``is_online``."""

    return [
        FriendPresence(friend=friend.summary(), is_online=is_online(friend.id))
        for friend in list_friends(session, user_id)
    ]
