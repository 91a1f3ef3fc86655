"""Friend requests and the friend list.

Accepted and incoming requests notify the other user through the realtime
hub once the change is committed; an acceptance also exchanges presence
when both users are connected. Users who are offline when a request
arrives also get an email.
"""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from sqlalchemy.orm import Session

from socialwire.application.errors import ConflictError, NotFoundError
from socialwire.application.use_cases.friends import (
    accept_friend_request as accept_friend_request_uc,
    list_friend_requests as list_friend_requests_uc,
    list_friends as list_friends_uc,
    reject_friend_request as reject_friend_request_uc,
    remove_friend as remove_friend_uc,
    send_friend_request as send_friend_request_uc,
)
from socialwire.domain.entities import NotificationKind, User
from socialwire.infrastructure.database import get_db
from socialwire.infrastructure.email import send_friend_request_email
from socialwire.infrastructure.realtime import RealtimeHub
from socialwire.interfaces.api.dependencies import get_current_active_user, get_realtime_hub
from socialwire.interfaces.api.schemas import (
    FriendRequestRead,
    MessageResponse,
    UserSummaryRead,
)

router = APIRouter(prefix="/friends", tags=["friends"])
logger = logging.getLogger(__name__)


def _email_offline_target(target: User, sender: User) -> None:
    if not send_friend_request_email(target.email, sender.full_name):
        logger.warning("No se pudo enviar el correo de solicitud de amistad al usuario %s", target.id)


@router.get("/", response_model=list[UserSummaryRead])
def list_friends(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[UserSummaryRead]:
    return [UserSummaryRead.model_validate(friend) for friend in list_friends_uc(db, current_user.id)]


@router.get("/requests", response_model=list[FriendRequestRead])
def list_friend_requests(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[FriendRequestRead]:
    """Lista las solicitudes de amistad pendientes del usuario autenticado."""

    return [
        FriendRequestRead.model_validate(request)
        for request in list_friend_requests_uc(db, current_user.id)
    ]


@router.post("/request/{user_id}", response_model=MessageResponse)
def send_friend_request(
    user_id: int,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    hub: RealtimeHub = Depends(get_realtime_hub),
    current_user: User = Depends(get_current_active_user),
) -> MessageResponse:
    """Envía una solicitud de amistad a ``user_id``."""

    try:
        _, target = send_friend_request_uc(db, sender_id=current_user.id, target_id=user_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    background_tasks.add_task(
        hub.notify,
        target.id,
        NotificationKind.FRIEND_REQUEST,
        {"from": current_user.id},
    )
    if not hub.is_online(target.id):
        background_tasks.add_task(_email_offline_target, target, current_user)

    return MessageResponse(message="Solicitud de amistad enviada")


@router.post("/accept/{user_id}", response_model=MessageResponse)
def accept_friend_request(
    user_id: int,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    hub: RealtimeHub = Depends(get_realtime_hub),
    current_user: User = Depends(get_current_active_user),
) -> MessageResponse:
    """Acepta la solicitud enviada por ``user_id``."""

    try:
        accept_friend_request_uc(db, user_id=current_user.id, requester_id=user_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    background_tasks.add_task(
        hub.notify,
        user_id,
        NotificationKind.FRIEND_ACCEPT,
        {"from": current_user.id},
    )
    background_tasks.add_task(hub.introduce_friends, current_user.id, user_id)
    return MessageResponse(message="Solicitud de amistad aceptada")


@router.post("/reject/{user_id}", response_model=MessageResponse)
def reject_friend_request(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> MessageResponse:
    try:
        reject_friend_request_uc(db, user_id=current_user.id, requester_id=user_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return MessageResponse(message="Solicitud de amistad rechazada")


@router.delete("/{user_id}", response_model=MessageResponse)
def remove_friend(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> MessageResponse:
    remove_friend_uc(db, user_id=current_user.id, friend_id=user_id)
    return MessageResponse(message="Amistad eliminada")
