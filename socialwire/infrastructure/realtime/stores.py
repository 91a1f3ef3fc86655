"""Database-backed collaborators for the realtime core.

Repositories are synchronous, so every call runs in a worker thread with
its own session and the event loop keeps serving other connections.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, TypeVar

import anyio
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from socialwire.application.errors import PersistenceError
from socialwire.domain.entities import DirectMessage, Notification, NotificationKind
from socialwire.infrastructure.repositories import (
    DirectMessageRepository,
    FriendshipRepository,
    NotificationRepository,
    UserRepository,
)
from socialwire.utils import now_in_app_timezone

SessionFactory = Callable[[], Session]
T = TypeVar("T")


class _SqlStore:
    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    async def _run(self, operation: Callable[[Session], T], description: str) -> T:
        return await anyio.to_thread.run_sync(self._run_sync, operation, description)

    def _run_sync(self, operation: Callable[[Session], T], description: str) -> T:
        with self._session_factory() as session:
            try:
                return operation(session)
            except SQLAlchemyError as exc:
                session.rollback()
                raise PersistenceError(f"Could not {description}") from exc


class SqlMessageStore(_SqlStore):
    """Insert direct messages with a server-assigned timestamp."""

    async def insert(self, sender_id: int, recipient_id: int, content: str) -> DirectMessage:
        message = DirectMessage(
            id=None,
            sender_id=sender_id,
            recipient_id=recipient_id,
            content=content,
            created_at=now_in_app_timezone(),
        )
        return await self._run(
            lambda session: DirectMessageRepository(session).create(message),
            "store direct message",
        )


class SqlNotificationStore(_SqlStore):
    async def insert(
        self, target_id: int, kind: NotificationKind, reference: dict[str, Any]
    ) -> Notification:
        notification = Notification(
            id=None,
            user_id=target_id,
            kind=kind,
            reference=reference,
            created_at=now_in_app_timezone(),
        )
        return await self._run(
            lambda session: NotificationRepository(session).create(notification),
            "store notification",
        )


class SqlUserDirectory(_SqlStore):
    """Friend lookups and ``last_seen`` tracking used by the presence broadcaster."""

    async def friend_ids(self, user_id: int) -> list[int]:
        return await self._run(
            lambda session: FriendshipRepository(session).list_friend_ids(user_id),
            "load friends",
        )

    async def touch_last_seen(self, user_id: int, seen_at: datetime) -> None:
        await self._run(
            lambda session: UserRepository(session).touch_last_seen(user_id, seen_at),
            "record last_seen",
        )


__all__ = ["SqlMessageStore", "SqlNotificationStore", "SqlUserDirectory"]
