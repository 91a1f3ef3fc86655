"""Application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from socialwire.config import get_settings
from socialwire.infrastructure.database import SessionLocal, engine, initialize_database
from socialwire.infrastructure.realtime import RealtimeHub
from socialwire.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the tables on startup and release pooled connections on shutdown."""

    initialize_database()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Build the FastAPI application together with its realtime hub."""

    settings = get_settings()
    logging.getLogger("socialwire").setLevel(settings.log_level.upper())

    app = FastAPI(title="SocialWire", lifespan=lifespan)
    app.state.realtime = RealtimeHub.from_settings(settings, SessionLocal)

    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=settings.cors_origin_regex,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app
