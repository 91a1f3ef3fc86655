"""Persistence helpers for friendships and friend requests."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from socialwire.domain.entities import FriendRequest, User
from socialwire.infrastructure.models import FriendRequestModel, FriendshipModel
from socialwire.utils import ensure_app_timezone

from .user_repository import UserRepository


class FriendshipRepository:
    """Store the symmetric friend relation and the pending requests feeding it."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_friend_ids(self, user_id: int) -> list[int]:
        query = self.session.query(FriendshipModel.friend_id).filter(
            FriendshipModel.user_id == user_id
        )
        return [friend_id for (friend_id,) in query.all()]

    def list_friends(self, user_id: int) -> Sequence[User]:
        query = (
            self.session.query(FriendshipModel)
            .filter(FriendshipModel.user_id == user_id)
            .order_by(FriendshipModel.created_at.asc(), FriendshipModel.id.asc())
        )
        return [UserRepository._to_entity(model.friend) for model in query.all()]

    def are_friends(self, user_id: int, other_id: int) -> bool:
        return (
            self.session.query(FriendshipModel.id)
            .filter(FriendshipModel.user_id == user_id)
            .filter(FriendshipModel.friend_id == other_id)
            .first()
            is not None
        )

    def add_friendship(self, user_id: int, other_id: int) -> None:
        """Create both directions of the friendship in a single commit."""

        for owner, friend in ((user_id, other_id), (other_id, user_id)):
            if not self.are_friends(owner, friend):
                self.session.add(FriendshipModel(user_id=owner, friend_id=friend))
        self.session.commit()

    def remove_friendship(self, user_id: int, other_id: int) -> int:
        deleted = (
            self.session.query(FriendshipModel)
            .filter(
                ((FriendshipModel.user_id == user_id) & (FriendshipModel.friend_id == other_id))
                | ((FriendshipModel.user_id == other_id) & (FriendshipModel.friend_id == user_id))
            )
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return deleted

    def get_request(self, *, from_user_id: int, to_user_id: int) -> FriendRequest | None:
        model = self._get_request_model(from_user_id=from_user_id, to_user_id=to_user_id)
        return self._request_to_entity(model) if model else None

    def list_requests_for(self, user_id: int) -> Sequence[FriendRequest]:
        query = (
            self.session.query(FriendRequestModel)
            .filter(FriendRequestModel.to_user_id == user_id)
            .order_by(FriendRequestModel.created_at.desc(), FriendRequestModel.id.desc())
        )
        return [self._request_to_entity(model) for model in query.all()]

    def create_request(self, *, from_user_id: int, to_user_id: int) -> FriendRequest:
        model = FriendRequestModel(from_user_id=from_user_id, to_user_id=to_user_id)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._request_to_entity(model)

    def delete_request(self, *, from_user_id: int, to_user_id: int, commit: bool = True) -> bool:
        model = self._get_request_model(from_user_id=from_user_id, to_user_id=to_user_id)
        if model is None:
            return False
        self.session.delete(model)
        if commit:
            self.session.commit()
        return True

    def accept_request(self, *, from_user_id: int, to_user_id: int) -> bool:
        """Turn a pending request into a friendship. Returns ``False`` if none exists."""

        if not self.delete_request(
            from_user_id=from_user_id, to_user_id=to_user_id, commit=False
        ):
            return False
        # A crossed request in the opposite direction is settled by the same acceptance.
        self.delete_request(from_user_id=to_user_id, to_user_id=from_user_id, commit=False)
        self.add_friendship(to_user_id, from_user_id)
        return True

    def _get_request_model(
        self, *, from_user_id: int, to_user_id: int
    ) -> FriendRequestModel | None:
        return (
            self.session.query(FriendRequestModel)
            .filter(FriendRequestModel.from_user_id == from_user_id)
            .filter(FriendRequestModel.to_user_id == to_user_id)
            .first()
        )

    @staticmethod
    def _request_to_entity(model: FriendRequestModel) -> FriendRequest:
        sender = UserRepository._to_entity(model.sender).summary() if model.sender else None
        return FriendRequest(
            id=model.id,
            from_user_id=model.from_user_id,
            to_user_id=model.to_user_id,
            created_at=ensure_app_timezone(model.created_at),
            sender=sender,
        )


__all__ = ["FriendshipRepository"]
