"""Use case for accepting a pending friend request."""

from sqlalchemy.orm import Session

from socialwire.application.errors import NotFoundError
from socialwire.infrastructure.repositories import FriendshipRepository


def accept_friend_request(session: Session, *, user_id: int, requester_id: int) -> None:
    """Make ``user_id`` and ``requester_id`` friends if a request is pending."""

    accepted = FriendshipRepository(session).accept_request(
        from_user_id=requester_id, to_user_id=user_id
    )
    if not accepted:
        raise NotFoundError("Solicitud de amistad no encontrada")
