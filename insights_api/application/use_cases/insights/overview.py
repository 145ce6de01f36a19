"""Activity overview for the insights page: short-window counts and daily buckets."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

from sqlalchemy.orm import Session

from insights_api.domain.entities import (
    GROUP_RULES,
    ActivityEvent,
    ActivityEventType,
    EventGroup,
    MatchRule,
)
from insights_api.domain.errors import DataAccessError
from insights_api.infrastructure.repositories import ActivityLogRepository

from .metrics import resolve_window

logger = logging.getLogger(__name__)

DEFAULT_OVERVIEW_DAYS = 7
UNKNOWN_PROVIDER = "unknown"

_DOCUMENT_RULES = (MatchRule.prefix("doc_"),)
_ACTIVE_DOCUMENT_RULES = (
    MatchRule.prefix("doc_"),
    MatchRule.prefix("share_"),
    MatchRule.prefix("signature_"),
)
_CONNECTOR_SYNC_COMPLETED = MatchRule.exact(ActivityEventType.CONNECTOR_SYNC_COMPLETED.value)
_SIGNATURE_COMPLETED = MatchRule.exact(ActivityEventType.SIGNATURE_COMPLETED.value)


@dataclass
class DailyActivity:
    day: date
    documents: int = 0
    assistant_queries: int = 0
    connector_syncs: int = 0
    signatures: int = 0


@dataclass
class ActivityOverview:
    window_days: int
    documents_created: int = 0
    assistant_queries: int = 0
    connector_syncs: int = 0
    connector_syncs_by_provider: dict[str, int] = field(default_factory=dict)
    signatures_completed: int = 0
    active_documents: int = 0
    daily: list[DailyActivity] = field(default_factory=list)


def _matches_any(event: ActivityEvent, rules) -> bool:
    return any(rule.matches(event.type) for rule in rules)


def _provider_of(event: ActivityEvent) -> str:
    if event.provider:
        return event.provider
    context = event.context or {}
    for key in ("provider", "connector_provider"):
        value = context.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return UNKNOWN_PROVIDER


def _empty_days(end: datetime, days: int) -> dict[date, DailyActivity]:
    last_day = end.date()
    return {
        last_day - timedelta(days=offset): DailyActivity(day=last_day - timedelta(days=offset))
        for offset in range(days - 1, -1, -1)
    }


def summarize_events(events: list[ActivityEvent], *, end: datetime, days: int) -> ActivityOverview:
    """Fold the window's events into an :class:`ActivityOverview`."""

    created_documents: set[str] = set()
    active_documents: set[str] = set()
    providers: Counter[str] = Counter()
    daily = _empty_days(end, days)
    overview = ActivityOverview(window_days=days)

    for event in events:
        document_id = event.references.document_id
        if _matches_any(event, _DOCUMENT_RULES) and document_id:
            created_documents.add(document_id)
        if _matches_any(event, _ACTIVE_DOCUMENT_RULES) and document_id:
            active_documents.add(document_id)
        if _matches_any(event, GROUP_RULES[EventGroup.ASSISTANT]):
            overview.assistant_queries += 1
        if _CONNECTOR_SYNC_COMPLETED.matches(event.type):
            overview.connector_syncs += 1
            providers[_provider_of(event)] += 1
        if _SIGNATURE_COMPLETED.matches(event.type):
            overview.signatures_completed += 1

        bucket = daily.get(event.created_at.date()) if event.created_at else None
        if bucket is None:
            continue
        if _matches_any(event, GROUP_RULES[EventGroup.DOCUMENTS]):
            bucket.documents += 1
        elif _matches_any(event, GROUP_RULES[EventGroup.ASSISTANT]):
            bucket.assistant_queries += 1
        elif _matches_any(event, GROUP_RULES[EventGroup.CONNECTORS]):
            bucket.connector_syncs += 1
        elif _matches_any(event, GROUP_RULES[EventGroup.SIGNATURES]):
            bucket.signatures += 1

    overview.documents_created = len(created_documents)
    overview.active_documents = len(active_documents)
    overview.connector_syncs_by_provider = dict(sorted(providers.items()))
    overview.daily = list(daily.values())
    return overview


def get_activity_overview(
    session: Session,
    org_id: str,
    *,
    days: int = DEFAULT_OVERVIEW_DAYS,
    now: datetime | None = None,
) -> ActivityOverview:
    """Return the activity overview of the last ``days``; zeroed when the store fails."""

    window = resolve_window(days, now)
    try:
        events = ActivityLogRepository(session).list_window(
            org_id=org_id, start=window.start, end=window.end
        )
    except DataAccessError:
        logger.error("Failed to load activity overview for org %s", org_id, exc_info=True)
        events = []
    return summarize_events(events, end=window.end, days=days)


__all__ = [
    "ActivityOverview",
    "DailyActivity",
    "get_activity_overview",
    "summarize_events",
]
