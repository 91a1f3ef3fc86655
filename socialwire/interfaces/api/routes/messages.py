"""Direct message history endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from socialwire.application.use_cases.messages import (
    list_conversation,
    mark_conversation_read,
    unread_counts,
)
from socialwire.config import get_settings
from socialwire.domain.entities import User
from socialwire.infrastructure.database import get_db
from socialwire.interfaces.api.dependencies import get_current_active_user
from socialwire.interfaces.api.schemas import DirectMessageRead, UnreadCountsRead

router = APIRouter(prefix="/messages", tags=["messages"])


@router.get("/unread-counts", response_model=UnreadCountsRead)
def read_unread_counts(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> UnreadCountsRead:
    """Cuenta los mensajes no leídos dirigidos al usuario, agrupados por remitente."""

    return UnreadCountsRead(counts=unread_counts(db, user_id=current_user.id))


@router.get("/{other_user_id}", response_model=list[DirectMessageRead])
def read_conversation(
    other_user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[DirectMessageRead]:
    """Devuelve los últimos mensajes con ``other_user_id`` en orden cronológico."""

    messages = list_conversation(
        db,
        user_id=current_user.id,
        other_id=other_user_id,
        limit=get_settings().message_history_limit,
    )
    return [DirectMessageRead.model_validate(message) for message in messages]


@router.post("/{other_user_id}/read", response_model=dict[str, int])
def mark_read(
    other_user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> dict[str, int]:
    updated = mark_conversation_read(db, user_id=current_user.id, other_id=other_user_id)
    return {"updated": updated}
