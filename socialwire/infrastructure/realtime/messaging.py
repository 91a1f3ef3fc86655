"""Direct message delivery between connected users."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from socialwire.application.errors import DirectMessageValidationError, PersistenceError
from socialwire.domain.entities import DirectMessage

from .channels import ChannelRouter
from .payloads import (
    DIRECT_MESSAGE_ERROR_EVENT,
    DIRECT_MESSAGE_EVENT,
    serialize_direct_message,
)
from .registry import Connection

logger = logging.getLogger(__name__)


class MessageStore(Protocol):
    async def insert(self, sender_id: int, recipient_id: int, content: str) -> DirectMessage: ...


def parse_recipient(value: Any) -> int:
    """Return ``value`` as a positive user id or raise a validation error."""

    if isinstance(value, bool):
        value = None
    try:
        recipient_id = int(value)
    except (TypeError, ValueError, OverflowError):
        recipient_id = 0
    if recipient_id <= 0 or (isinstance(value, float) and not value.is_integer()):
        raise DirectMessageValidationError(
            "invalid_recipient", "Recipient must be a user identifier"
        )
    return recipient_id


def normalize_content(value: Any, *, max_length: int) -> str:
    if not isinstance(value, str) or not value.strip():
        raise DirectMessageValidationError("empty_content", "Message content is empty")
    content = value.strip()
    if len(content) > max_length:
        raise DirectMessageValidationError(
            "content_too_long", f"Message content exceeds {max_length} characters"
        )
    return content


class DirectMessagePipeline:
    """Validate, persist and fan out direct messages.

    The sender is always the user bound to the connection. Recipient
    existence is enforced by the database's foreign key; a rejected insert
    is reported like any other persistence failure.
    """

    def __init__(
        self,
        router: ChannelRouter,
        store: MessageStore,
        *,
        max_length: int = 2000,
    ) -> None:
        self._router = router
        self._store = store
        self._max_length = max_length

    def validate(self, payload: Any) -> tuple[int, str]:
        """Return ``(recipient_id, content)`` for a send request."""

        if not isinstance(payload, dict):
            raise DirectMessageValidationError("invalid_payload", "Message payload must be an object")
        recipient_id = parse_recipient(payload.get("to"))
        content = normalize_content(payload.get("content"), max_length=self._max_length)
        return recipient_id, content

    async def send(self, connection: Connection, payload: Any) -> DirectMessage | None:
        """Handle one send request from ``connection``.

        Returns the stored message, or ``None`` when the request was rejected
        and a ``dm:error`` event was sent back to the originating connection.
        """

        ref = payload.get("ref") if isinstance(payload, dict) else None
        try:
            recipient_id, content = self.validate(payload)
        except DirectMessageValidationError as exc:
            await self._reject(connection, ref, exc.code, exc.detail)
            return None

        sender_id = connection.user_id
        try:
            message = await self._store.insert(sender_id, recipient_id, content)
        except PersistenceError:
            logger.exception(
                "Could not store direct message from user %s to user %s",
                sender_id,
                recipient_id,
            )
            await self._reject(
                connection, ref, "persistence_failed", "Message could not be delivered"
            )
            return None

        data = serialize_direct_message(message)
        await self._router.publish(recipient_id, DIRECT_MESSAGE_EVENT, data)
        if recipient_id != sender_id:
            echo = dict(data)
            if ref is not None:
                echo["ref"] = ref
            await self._router.publish(sender_id, DIRECT_MESSAGE_EVENT, echo)
        return message

    async def _reject(self, connection: Connection, ref: Any, code: str, detail: str) -> None:
        await self._router.send(
            connection,
            DIRECT_MESSAGE_ERROR_EVENT,
            {"ref": ref, "code": code, "detail": detail},
        )


__all__ = ["DirectMessagePipeline", "MessageStore", "normalize_content", "parse_recipient"]
