"""Persistence helpers for direct messages."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import and_, func, or_
from sqlalchemy.orm import Session

from socialwire.domain.entities import DirectMessage
from socialwire.infrastructure.models import DirectMessageModel
from socialwire.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class DirectMessageRepository:
    """Provide storage and read-history queries for :class:`DirectMessage` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, message: DirectMessage) -> DirectMessage:
        model = DirectMessageModel(
            sender_id=message.sender_id,
            recipient_id=message.recipient_id,
            content=message.content,
            created_at=ensure_app_naive_datetime(message.created_at or now_in_app_timezone()),
            read=message.read,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_conversation(
        self, user_id: int, other_id: int, *, limit: int | None = 50
    ) -> Sequence[DirectMessage]:
        """Return the latest messages exchanged by both users, oldest first."""

        query = (
            self.session.query(DirectMessageModel)
            .filter(
                or_(
                    and_(
                        DirectMessageModel.sender_id == user_id,
                        DirectMessageModel.recipient_id == other_id,
                    ),
                    and_(
                        DirectMessageModel.sender_id == other_id,
                        DirectMessageModel.recipient_id == user_id,
                    ),
                )
            )
            .order_by(DirectMessageModel.created_at.desc(), DirectMessageModel.id.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        models = query.all()
        models.reverse()
        return [self._to_entity(model) for model in models]

    def unread_counts_by_sender(self, recipient_id: int) -> dict[int, int]:
        query = (
            self.session.query(DirectMessageModel.sender_id, func.count(DirectMessageModel.id))
            .filter(DirectMessageModel.recipient_id == recipient_id)
            .filter(DirectMessageModel.read.is_(False))
            .group_by(DirectMessageModel.sender_id)
        )
        return {sender_id: count for sender_id, count in query.all()}

    def mark_conversation_read(self, *, recipient_id: int, sender_id: int) -> int:
        """Flag every unread message from ``sender_id`` to ``recipient_id`` as read."""

        updated = (
            self.session.query(DirectMessageModel)
            .filter(DirectMessageModel.recipient_id == recipient_id)
            .filter(DirectMessageModel.sender_id == sender_id)
            .filter(DirectMessageModel.read.is_(False))
            .update({DirectMessageModel.read: True}, synchronize_session=False)
        )
        self.session.commit()
        return updated

    @staticmethod
    def _to_entity(model: DirectMessageModel) -> DirectMessage:
        return DirectMessage(
            id=model.id,
            sender_id=model.sender_id,
            recipient_id=model.recipient_id,
            content=model.content,
            created_at=ensure_app_timezone(model.created_at),
            read=bool(model.read),
        )


__all__ = ["DirectMessageRepository"]
