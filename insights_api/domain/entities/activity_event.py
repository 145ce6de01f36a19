"""Domain entity describing one immutable activity log row."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .event_types import ActivityEventType


@dataclass(frozen=True)
class ActivityReferences:
    """Optional identifiers of the resources an event refers to."""

    document_id: str | None = None
    version_id: str | None = None
    unified_item_id: str | None = None
    envelope_id: str | None = None
    share_link_id: str | None = None


@dataclass(frozen=True)
class ActivityEvent:
    """A business event recorded exactly once in the activity log."""

    id: int | None
    org_id: str
    type: ActivityEventType
    created_at: datetime | None
    user_id: str | None = None
    references: ActivityReferences = field(default_factory=ActivityReferences)
    provider: str | None = None
    context: dict[str, Any] | None = None
    taxonomy_version: int | None = None

    @property
    def label(self) -> str:
        return self.type.label


__all__ = ["ActivityEvent", "ActivityReferences"]
