"""Notification inbox queries for the REST API."""

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from socialwire.domain.entities import Notification
from socialwire.infrastructure.repositories import NotificationRepository


def list_notifications(
    session: Session, *, user_id: int, limit: int, unread_only: bool = False
) -> Sequence[Notification]:
    repository = NotificationRepository(session)
    if unread_only:
        return repository.list_unread_for_user(user_id, limit=limit)
    return repository.list_for_user(user_id, limit=limit)


def mark_notifications_read(
    session: Session, *, user_id: int, notification_ids: Iterable[int]
) -> int:
    return NotificationRepository(session).mark_as_read(notification_ids, user_id=user_id)
