from fastapi import FastAPI

from .auth import router as auth_router
from .friends import router as friends_router
from .health import router as health_router
from .messages import router as messages_router
from .notifications import router as notifications_router
from .presence import router as presence_router
from .realtime import router as realtime_router
from .users import router as users_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(friends_router)
    app.include_router(messages_router)
    app.include_router(notifications_router)
    app.include_router(presence_router)
    app.include_router(realtime_router)
