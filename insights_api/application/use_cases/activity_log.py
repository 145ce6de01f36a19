"""Use cases for appending business events to the activity log."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from sqlalchemy.orm import Session

from insights_api.domain.entities import (
    EVENT_TAXONOMY_VERSION,
    ActivityEvent,
    ActivityEventType,
    ActivityReferences,
)
from insights_api.domain.errors import InsightsError, ValidationError
from insights_api.infrastructure.repositories import ActivityLogRepository
from insights_api.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


def _resolve_event_type(value: ActivityEventType | str) -> ActivityEventType:
    try:
        return ActivityEventType.parse(value)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc


def _build_context(
    context: Mapping[str, Any] | None,
    *,
    source: str | None,
    trigger_route: str | None,
    duration_ms: int | float | None,
) -> dict[str, Any] | None:
    enriched: dict[str, Any] = dict(context or {})
    if trigger_route:
        enriched["trigger_route"] = trigger_route
    if duration_ms is not None:
        enriched["duration_ms"] = duration_ms
    if source:
        enriched["source"] = source
    return enriched or None


def _extract_provider(context: Mapping[str, Any] | None) -> str | None:
    if not context:
        return None
    provider = context.get("provider")
    if isinstance(provider, str) and provider.strip():
        return provider.strip()
    return None


def record_activity_event(
    session: Session,
    *,
    org_id: str,
    event_type: ActivityEventType | str,
    references: ActivityReferences | None = None,
    context: Mapping[str, Any] | None = None,
    user_id: str | None = None,
    source: str | None = None,
    trigger_route: str | None = None,
    duration_ms: int | float | None = None,
) -> ActivityEvent:
    """Validate and append one event to the activity log.

    Raises :class:`ValidationError` for an unknown ``event_type`` or a missing
    organization before anything is written, and :class:`DataAccessError` when
    the insert fails.
    """

    if not isinstance(org_id, str) or not org_id.strip():
        raise ValidationError("An organization id is required to record activity")
    resolved_type = _resolve_event_type(event_type)
    if duration_ms is not None and (
        isinstance(duration_ms, bool)
        or not isinstance(duration_ms, (int, float))
        or duration_ms < 0
    ):
        raise ValidationError("duration_ms must be a non-negative number")
    if context is not None and not isinstance(context, Mapping):
        raise ValidationError("context must be a mapping")

    stored_context = _build_context(
        context, source=source, trigger_route=trigger_route, duration_ms=duration_ms
    )
    event = ActivityEvent(
        id=None,
        org_id=org_id.strip(),
        user_id=user_id or None,
        type=resolved_type,
        created_at=now_in_app_timezone(),
        references=references or ActivityReferences(),
        provider=_extract_provider(stored_context),
        context=stored_context,
        taxonomy_version=EVENT_TAXONOMY_VERSION,
    )

    created = ActivityLogRepository(session).add(event)
    logger.debug(
        "Recorded activity event %s (%s) for org %s", created.id, created.type.value, created.org_id
    )
    return created


def record_activity_event_safely(session: Session, **kwargs: Any) -> ActivityEvent | None:
    """Best-effort variant of :func:`record_activity_event` for business flows.

    Recording never makes the triggering operation fail: any validation or
    storage error is logged and ``None`` is returned. Failed writes are not
    retried.
    """

    try:
        return record_activity_event(session, **kwargs)
    except InsightsError:
        logger.exception(
            "Failed to record activity event %s for org %s",
            kwargs.get("event_type"),
            kwargs.get("org_id"),
        )
        return None
    except Exception:
        logger.exception(
            "Unexpected error recording activity event %s for org %s",
            kwargs.get("event_type"),
            kwargs.get("org_id"),
        )
        return None


__all__ = ["record_activity_event", "record_activity_event_safely"]
