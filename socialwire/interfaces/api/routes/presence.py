"""Presence snapshot of the authenticated user's friends."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from socialwire.application.use_cases.friends import list_friend_presence
from socialwire.domain.entities import User
from socialwire.infrastructure.database import get_db
from socialwire.infrastructure.realtime import RealtimeHub
from socialwire.interfaces.api.dependencies import get_current_active_user, get_realtime_hub
from socialwire.interfaces.api.schemas import FriendPresenceRead

router = APIRouter(prefix="/presence", tags=["presence"])


@router.get("/", response_model=list[FriendPresenceRead])
def read_friend_presence(
    db: Session = Depends(get_db),
    hub: RealtimeHub = Depends(get_realtime_hub),
    current_user: User = Depends(get_current_active_user),
) -> list[FriendPresenceRead]:
    """Devuelve la presencia y la última conexión de cada amigo."""

    entries = list_friend_presence(db, current_user.id, is_online=hub.is_online)
    return [
        FriendPresenceRead(
            id=entry.friend.id,
            first_name=entry.friend.first_name,
            last_name=entry.friend.last_name,
            avatar_url=entry.friend.avatar_url,
            last_seen=entry.friend.last_seen,
            is_online=entry.is_online,
        )
        for entry in entries
    ]
