"""Persist notifications and push them to the target's live connections."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Protocol

from socialwire.application.errors import PersistenceError
from socialwire.domain.entities import Notification, NotificationKind

from .channels import ChannelRouter
from .payloads import NOTIFICATION_EVENT, serialize_notification

logger = logging.getLogger(__name__)


class NotificationStore(Protocol):
    async def insert(
        self, target_id: int, kind: NotificationKind, reference: dict[str, Any]
    ) -> Notification: ...


class NotificationFanout:
    """Best-effort notification delivery for REST collaborators.

    Callers invoke :meth:`notify` after committing their own write and are
    responsible for not notifying users about their own actions.
    """

    def __init__(self, router: ChannelRouter, store: NotificationStore) -> None:
        self._router = router
        self._store = store

    async def notify(
        self,
        target_id: int,
        kind: NotificationKind | str,
        reference: Mapping[str, Any] | None = None,
    ) -> Notification | None:
        """Store a notification for ``target_id`` and push it if they are connected.

        Unknown kinds raise ``ValueError``. A failed insert is logged and
        ``None`` is returned; nothing is pushed in that case.
        """

        kind = NotificationKind.parse(kind)
        if not isinstance(target_id, int) or isinstance(target_id, bool) or target_id <= 0:
            raise ValueError(f"Invalid notification target: {target_id!r}")

        try:
            notification = await self._store.insert(target_id, kind, dict(reference or {}))
        except PersistenceError:
            logger.exception(
                "Dropping %s notification for user %s: it could not be stored",
                kind.value,
                target_id,
            )
            return None

        delivered = await self._router.publish(
            target_id, NOTIFICATION_EVENT, serialize_notification(notification)
        )
        logger.debug(
            "Notification %s (%s) pushed to %s connection(s) of user %s",
            notification.id,
            kind.value,
            delivered,
            target_id,
        )
        return notification


__all__ = ["NotificationFanout", "NotificationStore"]
