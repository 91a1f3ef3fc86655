"""Use case for discarding a pending friend request."""

from sqlalchemy.orm import Session

from socialwire.application.errors import NotFoundError
from socialwire.infrastructure.repositories import FriendshipRepository


def reject_friend_request(session: Session, *, user_id: int, requester_id: int) -> None:
    deleted = FriendshipRepository(session).delete_request(
        from_user_id=requester_id, to_user_id=user_id
    )
    if not deleted:
        raise NotFoundError("Solicitud de amistad no encontrada")
