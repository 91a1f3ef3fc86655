"""Use case for creating accounts through the signup flow."""

from sqlalchemy.orm import Session

from socialwire.domain.entities import User
from socialwire.infrastructure.repositories import UserRepository
from socialwire.infrastructure.security import get_password_hash
from socialwire.utils import now_in_app_timezone


def register_user(
    session: Session,
    *,
    first_name: str,
    last_name: str,
    email: str,
    password: str,
    avatar_url: str | None = None,
) -> User:
    """Create a new user ensuring unique email addresses."""

    repository = UserRepository(session)
    if repository.get_by_email(email):
        raise ValueError("El correo electrónico ya está registrado")

    first_name = first_name.strip()
    if not first_name:
        raise ValueError("El nombre es obligatorio")

    user = User(
        id=None,
        first_name=first_name,
        last_name=last_name.strip(),
        email=email,
        password=get_password_hash(password),
        avatar_url=avatar_url,
        is_active=True,
        last_seen=None,
        created_at=now_in_app_timezone(),
    )
    return repository.create(user)
