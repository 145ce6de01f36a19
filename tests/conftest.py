"""Shared fixtures: a throwaway SQLite database and an authenticated client."""

from __future__ import annotations

import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

import pytest

TEST_DB_PATH = Path(tempfile.gettempdir()) / "insights_api_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["APP_TIMEZONE"] = "UTC"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"

from insights_api.config import get_settings  # noqa: E402

get_settings.cache_clear()

from insights_api.domain.entities import EVENT_TAXONOMY_VERSION, ActivityEventType  # noqa: E402
from insights_api.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from insights_api.infrastructure.models import ActivityLogModel  # noqa: E402
from insights_api.infrastructure.security import create_access_token  # noqa: E402

ORG_ID = "org-1"
OTHER_ORG_ID = "org-2"
USER_ID = "user-1"


@pytest.fixture(autouse=True)
def reset_database():
    """Ensure the test database starts from a clean state for each test."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session():
    with SessionLocal() as db:
        yield db


@pytest.fixture()
def client():
    from fastapi.testclient import TestClient

    from insights_api.main import create_app

    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def auth_headers() -> dict[str, str]:
    token = create_access_token(org_id=ORG_ID, user_id=USER_ID)
    return {"Authorization": f"Bearer {token}"}


def utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def insert_event(
    db,
    *,
    event_type: ActivityEventType | str,
    created_at: datetime,
    org_id: str = ORG_ID,
    **columns,
) -> int:
    """Insert a raw activity row with a fixed timestamp and return its id."""

    value = event_type.value if isinstance(event_type, ActivityEventType) else event_type
    columns.setdefault("taxonomy_version", EVENT_TAXONOMY_VERSION)
    model = ActivityLogModel(
        org_id=org_id,
        type=value,
        created_at=created_at.astimezone(timezone.utc).replace(tzinfo=None),
        **columns,
    )
    db.add(model)
    db.commit()
    db.refresh(model)
    return model.id
