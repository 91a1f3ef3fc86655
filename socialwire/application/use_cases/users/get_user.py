"""Use case for retrieving a user."""

from sqlalchemy.orm import Session

from socialwire.domain.entities import User
from socialwire.infrastructure.repositories import UserRepository


def get_user(session: Session, user_id: int) -> User:
    """Return the active user identified by ``user_id``."""

    user = UserRepository(session).get(user_id)
    if user is None or not user.is_active:
        raise ValueError("Usuario no encontrado")
    return user
