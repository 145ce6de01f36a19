from fastapi import FastAPI

from .activity import router as activity_router
from .insights import router as insights_router
from .pack_runs import router as pack_runs_router
from .webhooks import router as webhooks_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(activity_router)
    app.include_router(insights_router)
    app.include_router(pack_runs_router)
    app.include_router(webhooks_router)
