"""Wire representation of the events pushed to realtime clients."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from socialwire.domain.entities import DirectMessage, Notification
from socialwire.utils import isoformat_or_none

PRESENCE_EVENT = "presence"
PRESENCE_SNAPSHOT_EVENT = "presence:snapshot"
DIRECT_MESSAGE_EVENT = "dm"
DIRECT_MESSAGE_ERROR_EVENT = "dm:error"
NOTIFICATION_EVENT = "notification"
ERROR_EVENT = "error"
PONG_EVENT = "pong"


def serialize_direct_message(message: DirectMessage) -> dict[str, Any]:
    return {
        "id": message.id,
        "from": message.sender_id,
        "to": message.recipient_id,
        "content": message.content,
        "createdAt": isoformat_or_none(message.created_at),
        "read": message.read,
    }


def serialize_notification(notification: Notification) -> dict[str, Any]:
    return {
        "id": notification.id,
        "kind": notification.kind.value,
        "reference": dict(notification.reference or {}),
        "createdAt": isoformat_or_none(notification.created_at),
        "read": notification.read,
    }


def presence_payload(
    user_id: int, is_online: bool, *, last_seen: datetime | None = None
) -> dict[str, Any]:
    payload: dict[str, Any] = {"userId": user_id, "isOnline": is_online}
    if not is_online and last_seen is not None:
        payload["lastSeen"] = isoformat_or_none(last_seen)
    return payload


__all__ = [
    "DIRECT_MESSAGE_ERROR_EVENT",
    "DIRECT_MESSAGE_EVENT",
    "ERROR_EVENT",
    "NOTIFICATION_EVENT",
    "PONG_EVENT",
    "PRESENCE_EVENT",
    "PRESENCE_SNAPSHOT_EVENT",
    "presence_payload",
    "serialize_direct_message",
    "serialize_notification",
]
