"""Entry point for ``uvicorn main:app``."""

from insights_api.main import app, create_app

__all__ = ["app", "create_app"]
