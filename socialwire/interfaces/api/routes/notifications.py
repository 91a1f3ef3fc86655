"""Endpoints for the notification inbox."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from socialwire.application.use_cases.notifications import (
    list_notifications as list_notifications_uc,
    mark_notifications_read,
)
from socialwire.config import get_settings
from socialwire.domain.entities import Notification, User
from socialwire.infrastructure.database import get_db
from socialwire.interfaces.api.dependencies import get_current_active_user
from socialwire.interfaces.api.schemas import NotificationMarkReadRequest, NotificationRead

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead(
        id=notification.id or 0,
        kind=notification.kind,
        reference=notification.reference or {},
        read=notification.read,
        created_at=notification.created_at,
    )


@router.get("/", response_model=list[NotificationRead])
def list_notifications(
    unread_only: bool = Query(False, description="Return only unread notifications"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[NotificationRead]:
    """Return the most recent notifications for the authenticated user."""

    notifications = list_notifications_uc(
        db,
        user_id=current_user.id,
        limit=get_settings().notification_list_limit,
        unread_only=unread_only,
    )
    return [_notification_to_schema(notification) for notification in notifications]


@router.post("/read", response_model=dict[str, int])
def mark_read(
    payload: NotificationMarkReadRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> dict[str, int]:
    """Mark the given notifications of the authenticated user as read."""

    updated = mark_notifications_read(
        db, user_id=current_user.id, notification_ids=payload.unique_ids()
    )
    return {"updated": updated}
