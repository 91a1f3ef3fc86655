"""Use case for asking another user to become friends."""

from sqlalchemy.orm import Session

from socialwire.application.errors import ConflictError, NotFoundError
from socialwire.domain.entities import FriendRequest, User
from socialwire.infrastructure.repositories import FriendshipRepository, UserRepository


def send_friend_request(
    session: Session, *, sender_id: int, target_id: int
) -> tuple[FriendRequest, User]:
    """Create a pending request and return it together with its target."""

    if sender_id == target_id:
        raise ValueError("No puedes enviarte una solicitud de amistad a ti mismo")

    target = UserRepository(session).get(target_id)
    if target is None or not target.is_active:
        raise NotFoundError("Usuario no encontrado")

    friendships = FriendshipRepository(session)
    if friendships.are_friends(sender_id, target_id):
        raise ConflictError("Ya son amigos")
    if friendships.get_request(from_user_id=sender_id, to_user_id=target_id):
        raise ConflictError("La solicitud ya fue enviada")

    request = friendships.create_request(from_user_id=sender_id, to_user_id=target_id)
    return request, target
