"""Schemas for activity log endpoints."""

from datetime import datetime
from typing import Any

from pydantic import Field

from .base import CamelModel


class ActivityReferencesPayload(CamelModel):
    document_id: str | None = None
    version_id: str | None = None
    unified_item_id: str | None = None
    envelope_id: str | None = None
    share_link_id: str | None = None


class RecordActivityRequest(CamelModel):
    """Payload accepted when a client reports a business event."""

    type: str = Field(..., description="Event type from the activity taxonomy")
    user_id: str | None = None
    references: ActivityReferencesPayload | None = None
    context: dict[str, Any] | None = None
    source: str | None = None
    trigger_route: str | None = None
    duration_ms: float | None = None


class RecordActivityResponse(CamelModel):
    ok: bool = True
    recorded: bool


class ActivityEventRead(CamelModel):
    id: int
    org_id: str
    user_id: str | None = None
    type: str
    label: str
    taxonomy_version: int | None = None
    document_id: str | None = None
    version_id: str | None = None
    unified_item_id: str | None = None
    envelope_id: str | None = None
    share_link_id: str | None = None
    provider: str | None = None
    context: dict[str, Any] | None = None
    created_at: datetime


class ActivityPageRead(CamelModel):
    data: list[ActivityEventRead]
    next_cursor: datetime | None = Field(
        None, description="Pass back as 'cursor' to fetch the next page"
    )
    next_cursor_id: int | None = Field(
        None, description="Pass back as 'cursorId' together with 'cursor'"
    )


class EventTypeRead(CamelModel):
    type: str
    label: str
    groups: list[str]


class EventTypeCatalogRead(CamelModel):
    taxonomy_version: int
    event_types: list[EventTypeRead]
