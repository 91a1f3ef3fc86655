"""Read history and read flags of direct messages.

Sending happens over the realtime channel; these helpers back the REST
endpoints clients use to catch up after reconnecting.
"""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from socialwire.domain.entities import DirectMessage
from socialwire.infrastructure.repositories import DirectMessageRepository


def list_conversation(
    session: Session, *, user_id: int, other_id: int, limit: int
) -> Sequence[DirectMessage]:
    return DirectMessageRepository(session).list_conversation(user_id, other_id, limit=limit)


def unread_counts(session: Session, *, user_id: int) -> dict[int, int]:
    return DirectMessageRepository(session).unread_counts_by_sender(user_id)


def mark_conversation_read(session: Session, *, user_id: int, other_id: int) -> int:
    return DirectMessageRepository(session).mark_conversation_read(
        recipient_id=user_id, sender_id=other_id
    )
