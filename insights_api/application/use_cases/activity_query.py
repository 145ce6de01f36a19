"""Filtered, cursor-paginated reads over the activity log."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable

from sqlalchemy.orm import Session

from insights_api.domain.entities import ActivityEvent, EventGroup, rules_for_groups
from insights_api.domain.errors import AuthorizationError, ValidationError
from insights_api.infrastructure.repositories import ActivityLogRepository
from insights_api.utils import ensure_app_timezone, parse_iso_datetime

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 50
MAX_LIMIT = 100


@dataclass(frozen=True)
class ActivityQuery:
    """Filters accepted by :func:`query_activity_events`.

    ``start`` and ``end`` are inclusive. ``cursor`` is the creation timestamp
    of the last row already seen and is applied as an exclusive upper bound;
    ``cursor_id`` optionally breaks ties between rows sharing that timestamp.
    """

    start: datetime | None = None
    end: datetime | None = None
    groups: frozenset[EventGroup] = field(default_factory=frozenset)
    provider: str | None = None
    search: str | None = None
    cursor: datetime | None = None
    cursor_id: int | None = None
    limit: Any = None


@dataclass(frozen=True)
class ActivityPage:
    rows: list[ActivityEvent]
    next_cursor: datetime | None
    next_cursor_id: int | None = None


def clamp_limit(value: Any) -> int:
    """Return the effective page size for ``value``.

    Missing, non-numeric and non-positive values fall back to the default;
    anything else is clamped into ``[1, MAX_LIMIT]``.
    """

    if value is None or isinstance(value, bool):
        return DEFAULT_LIMIT
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_LIMIT
    if number <= 0:
        return DEFAULT_LIMIT
    return min(max(number, 1), MAX_LIMIT)


def parse_limit(raw: str | None) -> int:
    if raw is None or not raw.strip():
        return DEFAULT_LIMIT
    return clamp_limit(raw.strip())


def parse_groups(values: Iterable[str] | None) -> frozenset[EventGroup]:
    """Parse repeated and/or comma-separated group names.

    Unknown names are ignored, so an unrecognized filter widens the result
    instead of failing the request.
    """

    groups: set[EventGroup] = set()
    for value in values or ():
        for name in value.split(","):
            normalized = name.strip().lower()
            if not normalized:
                continue
            try:
                groups.add(EventGroup(normalized))
            except ValueError:
                logger.debug("Ignoring unknown activity group %r", normalized)
    return frozenset(groups)


def parse_timestamp(raw: str | None, field_name: str) -> datetime | None:
    """Parse an ISO-8601 query parameter or raise :class:`ValidationError`."""

    if raw is None or not raw.strip():
        return None
    try:
        return ensure_app_timezone(parse_iso_datetime(raw))
    except ValueError as exc:
        raise ValidationError(f"'{field_name}' must be an ISO-8601 timestamp") from exc


def parse_cursor_id(raw: str | None) -> int | None:
    if raw is None or not raw.strip():
        return None
    try:
        value = int(raw.strip())
    except ValueError as exc:
        raise ValidationError("'cursorId' must be an integer") from exc
    if value <= 0:
        raise ValidationError("'cursorId' must be a positive integer")
    return value


def query_activity_events(session: Session, org_id: str, query: ActivityQuery) -> ActivityPage:
    """Return one page of the organization's activity, newest first.

    ``next_cursor`` is the creation timestamp of the last row when the page is
    full, and ``None`` once there are no further pages.
    """

    if not isinstance(org_id, str) or not org_id.strip():
        raise AuthorizationError("Activity queries require an organization scope")
    start = ensure_app_timezone(query.start)
    end = ensure_app_timezone(query.end)
    if start is not None and end is not None and start > end:
        raise ValidationError("'from' must not be later than 'to'")
    if query.cursor_id is not None and query.cursor is None:
        raise ValidationError("'cursorId' requires 'cursor'")

    limit = clamp_limit(query.limit)
    search = query.search.strip() if query.search else None
    provider = query.provider.strip() if query.provider and query.provider.strip() else None

    rows = ActivityLogRepository(session).list_page(
        org_id=org_id.strip(),
        limit=limit,
        start=start,
        end=end,
        rules=rules_for_groups(query.groups),
        provider=provider,
        search=search or None,
        cursor=ensure_app_timezone(query.cursor),
        cursor_id=query.cursor_id,
    )

    if len(rows) == limit:
        last = rows[-1]
        return ActivityPage(rows=rows, next_cursor=last.created_at, next_cursor_id=last.id)
    return ActivityPage(rows=rows, next_cursor=None, next_cursor_id=None)


__all__ = [
    "DEFAULT_LIMIT",
    "MAX_LIMIT",
    "ActivityPage",
    "ActivityQuery",
    "clamp_limit",
    "parse_cursor_id",
    "parse_groups",
    "parse_limit",
    "parse_timestamp",
    "query_activity_events",
]
