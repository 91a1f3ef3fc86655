"""Websocket endpoint carrying presence, direct messages and notifications."""

from __future__ import annotations

import logging

import anyio
from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from socialwire.infrastructure.realtime import RealtimeHub

router = APIRouter(tags=["realtime"])
logger = logging.getLogger(__name__)

_AUTH_COOKIE = "authToken"


def _extract_token(websocket: WebSocket) -> str | None:
    """Read the bearer token from the query string, header or auth cookie."""

    token = websocket.query_params.get("token")
    if token:
        return token

    authorization = websocket.headers.get("authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()

    return websocket.cookies.get(_AUTH_COOKIE)


@router.websocket("/ws")
async def realtime_websocket(websocket: WebSocket) -> None:
    """Authenticate the client, then relay its events until it disconnects."""

    hub: RealtimeHub = websocket.app.state.realtime
    session = hub.open_session(websocket)

    if not session.authenticate(_extract_token(websocket)):
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    try:
        await session.open()
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except (ValueError, KeyError):
                await session.reject("invalid_message", "Events must be JSON objects")
                continue
            await session.handle(message)
    except WebSocketDisconnect:
        logger.debug("Realtime client of user %s disconnected", session.user_id)
    finally:
        # Unregistering and the offline announcement must finish even when the task is cancelled.
        with anyio.CancelScope(shield=True):
            await session.close()
