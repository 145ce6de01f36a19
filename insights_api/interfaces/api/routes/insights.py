"""Endpoints exposing insight cards and the activity overview."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session, sessionmaker

from insights_api.application.use_cases.insights import (
    ActivityOverview,
    InsightsCard,
    build_insights_cards,
    get_activity_overview,
)
from insights_api.domain.entities import RequestContext
from insights_api.interfaces.api.dependencies import (
    get_db,
    get_request_context,
    get_session_factory,
)
from insights_api.interfaces.api.schemas import (
    ActivityOverviewRead,
    DailyActivityRead,
    InsightsCardCTARead,
    InsightsCardRead,
    InsightsCardsResponse,
)

router = APIRouter(prefix="/insights", tags=["insights"])
logger = logging.getLogger(__name__)


def _card_to_schema(card: InsightsCard) -> InsightsCardRead:
    return InsightsCardRead(
        id=card.id,
        kind=card.kind.value,
        title=card.title,
        value=card.value,
        period=card.period,
        delta=card.delta,
        source=card.source,
        cta=(
            InsightsCardCTARead(label=card.cta.label, href=card.cta.href)
            if card.cta is not None
            else None
        ),
    )


def _overview_to_schema(overview: ActivityOverview) -> ActivityOverviewRead:
    return ActivityOverviewRead(
        window_days=overview.window_days,
        documents_created=overview.documents_created,
        assistant_queries=overview.assistant_queries,
        connector_syncs=overview.connector_syncs,
        connector_syncs_by_provider=overview.connector_syncs_by_provider,
        signatures_completed=overview.signatures_completed,
        active_documents=overview.active_documents,
        daily=[
            DailyActivityRead(
                day=bucket.day,
                documents=bucket.documents,
                assistant_queries=bucket.assistant_queries,
                connector_syncs=bucket.connector_syncs,
                signatures=bucket.signatures,
            )
            for bucket in overview.daily
        ],
    )


@router.get("/cards", response_model=InsightsCardsResponse)
async def read_insights_cards(
    range_: str | None = Query(None, alias="range", description="7d, 30d or 90d"),
    session_factory: sessionmaker = Depends(get_session_factory),
    context: RequestContext = Depends(get_request_context),
) -> InsightsCardsResponse:
    """Return the insight cards for the requested range (``30d`` by default)."""

    try:
        report = await build_insights_cards(session_factory, context.org_id, range_)
    except Exception as exc:
        logger.exception("Failed to build insight cards for org %s", context.org_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load insights",
        ) from exc
    return InsightsCardsResponse(
        range=report.range.value,
        cards=[_card_to_schema(card) for card in report.cards],
    )


@router.get("/overview", response_model=ActivityOverviewRead)
def read_activity_overview(
    days: int = Query(7, ge=1, le=90, description="Window length in days"),
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
) -> ActivityOverviewRead:
    """Summarize the organization's recent activity with one bucket per day."""

    overview = get_activity_overview(db, context.org_id, days=days)
    return _overview_to_schema(overview)


__all__ = ["router"]
