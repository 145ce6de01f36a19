"""Endpoints for recording and browsing the activity log."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from insights_api.application.use_cases.activity_log import record_activity_event
from insights_api.application.use_cases.activity_query import (
    ActivityQuery,
    parse_cursor_id,
    parse_groups,
    parse_limit,
    parse_timestamp,
    query_activity_events,
)
from insights_api.domain.entities import (
    EVENT_TAXONOMY_VERSION,
    ActivityEvent,
    ActivityEventType,
    ActivityReferences,
    RequestContext,
    groups_for_event_type,
)
from insights_api.domain.errors import AuthorizationError, DataAccessError, ValidationError
from insights_api.interfaces.api.dependencies import get_db, get_request_context
from insights_api.interfaces.api.schemas import (
    ActivityEventRead,
    ActivityPageRead,
    EventTypeCatalogRead,
    EventTypeRead,
    RecordActivityRequest,
    RecordActivityResponse,
)

router = APIRouter(prefix="/activity", tags=["activity"])
logger = logging.getLogger(__name__)

GENERIC_READ_ERROR = "Failed to load activity"


def _event_to_schema(event: ActivityEvent) -> ActivityEventRead:
    return ActivityEventRead(
        id=event.id,
        org_id=event.org_id,
        user_id=event.user_id,
        type=event.type.value,
        label=event.label,
        taxonomy_version=event.taxonomy_version,
        document_id=event.references.document_id,
        version_id=event.references.version_id,
        unified_item_id=event.references.unified_item_id,
        envelope_id=event.references.envelope_id,
        share_link_id=event.references.share_link_id,
        provider=event.provider,
        context=event.context,
        created_at=event.created_at,
    )


@router.post(
    "/events",
    response_model=RecordActivityResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
def create_activity_event(
    payload: RecordActivityRequest,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
) -> RecordActivityResponse:
    """Append one event for the caller's organization.

    The acting user comes from the token; a body ``userId`` is only accepted
    when the token carries no user or names the same one. Unknown event types
    are rejected. A storage failure does not fail the request; it is reported
    through ``recorded``.
    """

    if context.user_id and payload.user_id and payload.user_id != context.user_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="userId does not match the authenticated user",
        )
    references = (
        ActivityReferences(**payload.references.model_dump())
        if payload.references is not None
        else None
    )
    try:
        record_activity_event(
            db,
            org_id=context.org_id,
            user_id=context.user_id or payload.user_id,
            event_type=payload.type,
            references=references,
            context=payload.context,
            source=payload.source,
            trigger_route=payload.trigger_route,
            duration_ms=payload.duration_ms,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except DataAccessError:
        logger.exception("Failed to record %s event for org %s", payload.type, context.org_id)
        return RecordActivityResponse(recorded=False)
    return RecordActivityResponse(recorded=True)


@router.get("", response_model=ActivityPageRead)
def list_activity(
    from_: str | None = Query(None, alias="from", description="Inclusive lower bound (ISO-8601)"),
    to: str | None = Query(None, description="Inclusive upper bound (ISO-8601)"),
    groups: list[str] | None = Query(None, description="Event groups, repeated or comma-separated"),
    provider: str | None = Query(None),
    search: str | None = Query(None, description="Case-insensitive match on the event type"),
    cursor: str | None = Query(None, description="nextCursor of the previous page"),
    cursor_id: str | None = Query(None, alias="cursorId"),
    limit: str | None = Query(None, description="Page size, 1 to 100 (default 50)"),
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
) -> ActivityPageRead:
    """Return one page of the organization's activity, newest first."""

    try:
        query = ActivityQuery(
            start=parse_timestamp(from_, "from"),
            end=parse_timestamp(to, "to"),
            groups=parse_groups(groups),
            provider=provider,
            search=search,
            cursor=parse_timestamp(cursor, "cursor"),
            cursor_id=parse_cursor_id(cursor_id),
            limit=parse_limit(limit),
        )
        page = query_activity_events(db, context.org_id, query)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except AuthorizationError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc
    except DataAccessError as exc:
        logger.exception("Failed to query activity for org %s", context.org_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=GENERIC_READ_ERROR,
        ) from exc

    return ActivityPageRead(
        data=[_event_to_schema(event) for event in page.rows],
        next_cursor=page.next_cursor,
        next_cursor_id=page.next_cursor_id,
    )


@router.get("/event-types", response_model=EventTypeCatalogRead)
def list_event_types(
    _: RequestContext = Depends(get_request_context),
) -> EventTypeCatalogRead:
    """Describe every event type and the groups it is filtered under."""

    return EventTypeCatalogRead(
        taxonomy_version=EVENT_TAXONOMY_VERSION,
        event_types=[
            EventTypeRead(
                type=event_type.value,
                label=event_type.label,
                groups=[group.value for group in groups_for_event_type(event_type)],
            )
            for event_type in ActivityEventType
        ],
    )


__all__ = ["router"]
