"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from socialwire.domain.entities import User
from socialwire.infrastructure.models import UserModel
from socialwire.utils import ensure_app_naive_datetime, ensure_app_timezone


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .filter(UserModel.email == email.strip().lower())
            .first()
        )
        return self._to_entity(model) if model else None

    def get_map_by_ids(self, user_ids: Sequence[int]) -> dict[int, User]:
        if not user_ids:
            return {}

        unique_ids = {int(user_id) for user_id in user_ids}
        query = self.session.query(UserModel).filter(UserModel.id.in_(unique_ids))
        return {model.id: self._to_entity(model) for model in query.all()}

    def create(self, user: User) -> User:
        model = UserModel(
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email.strip().lower(),
            password=user.password,
            avatar_url=user.avatar_url,
            is_active=user.is_active,
        )
        if user.created_at is not None:
            model.created_at = ensure_app_naive_datetime(user.created_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def touch_last_seen(self, user_id: int, seen_at: datetime) -> None:
        """Store ``seen_at`` as the last moment ``user_id`` was connected."""

        self.session.query(UserModel).filter(UserModel.id == user_id).update(
            {UserModel.last_seen: ensure_app_naive_datetime(seen_at)},
            synchronize_session=False,
        )
        self.session.commit()

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            first_name=model.first_name,
            last_name=model.last_name or "",
            email=model.email,
            password=model.password,
            avatar_url=model.avatar_url,
            is_active=model.is_active,
            last_seen=ensure_app_timezone(model.last_seen),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["UserRepository"]
