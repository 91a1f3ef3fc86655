"""Rutas de consulta de perfiles."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from socialwire.application.use_cases.users import get_user as get_user_uc
from socialwire.domain.entities import User
from socialwire.infrastructure.database import get_db
from socialwire.infrastructure.realtime import RealtimeHub
from socialwire.interfaces.api.dependencies import get_current_active_user, get_realtime_hub
from socialwire.interfaces.api.schemas import UserProfileRead, UserRead

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_active_user)) -> UserRead:
    """Devuelve la información del usuario autenticado."""

    return UserRead.model_validate(current_user)


@router.get("/{user_id}", response_model=UserProfileRead)
def read_user(
    user_id: int,
    db: Session = Depends(get_db),
    hub: RealtimeHub = Depends(get_realtime_hub),
    _: User = Depends(get_current_active_user),
) -> UserProfileRead:
    """Obtiene el perfil público de ``user_id`` junto con su presencia."""

    try:
        user = get_user_uc(db, user_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    return UserProfileRead(
        id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        avatar_url=user.avatar_url,
        last_seen=user.last_seen,
        is_online=hub.is_online(user.id),
    )
