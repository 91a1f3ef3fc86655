"""Use case for ending a friendship."""

from sqlalchemy.orm import Session

from socialwire.infrastructure.repositories import FriendshipRepository


def remove_friend(session: Session, *, user_id: int, friend_id: int) -> None:
    """Remove both directions of the friendship. Unknown pairs are ignored."""

    FriendshipRepository(session).remove_friendship(user_id, friend_id)
