"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from insights_api.config import get_settings
from insights_api.infrastructure.database import engine, initialize_database
from insights_api.interfaces.api.routes import register_routes

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(level: str | None = None) -> None:
    """Apply the configured log level to the root logger."""

    resolved = level or get_settings().log_level
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    logging.getLogger().setLevel(resolved)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the tables on startup and release the engine on shutdown."""

    initialize_database()
    logger.info("Activity and insights API started")
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Activity & Insights API", lifespan=lifespan)

    if settings.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_routes(app)
    return app


app = create_app()
