"""Decks insights counted from the activity log plus the latest deck documents."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy.orm import Session

from insights_api.domain.entities import DOCUMENT_KIND_DECK, ActivityEventType, MatchRule
from insights_api.domain.errors import DataAccessError
from insights_api.infrastructure.repositories import ActivityLogRepository, DocumentRepository

from .contracts import count_in_window
from .metrics import resolve_window

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS = 30
RECENT_DECKS_LIMIT = 5
UNTITLED_DECK = "Untitled deck"

GENERATED_RULES = (MatchRule.prefix(ActivityEventType.DECK_GENERATED.value),)
SAVED_RULES = (MatchRule.prefix(ActivityEventType.DECK_SAVED_TO_VAULT.value),)
EXPORTED_RULES = (MatchRule.prefix(ActivityEventType.DECK_EXPORTED.value),)


@dataclass
class RecentDeck:
    id: str
    title: str
    updated_at: datetime | None


@dataclass
class DecksInsights:
    generated: int
    saved_to_vault: int
    exported: int
    window_days: int
    recent_decks: list[RecentDeck] = field(default_factory=list)


def _fetch_recent_decks(session: Session, org_id: str) -> list[RecentDeck]:
    try:
        documents = DocumentRepository(session).list_recent(
            org_id=org_id, kind=DOCUMENT_KIND_DECK, limit=RECENT_DECKS_LIMIT
        )
    except DataAccessError:
        logger.error("Failed to fetch recent decks for org %s", org_id, exc_info=True)
        return []

    return [
        RecentDeck(
            id=document.id,
            title=document.title.strip()
            if document.title and document.title.strip()
            else UNTITLED_DECK,
            updated_at=document.updated_at,
        )
        for document in documents
    ]


def get_decks_insights(
    session: Session,
    org_id: str,
    *,
    days: int = DEFAULT_WINDOW_DAYS,
    now: datetime | None = None,
) -> DecksInsights:
    """Count generated, saved and exported decks and list the latest decks."""

    window = resolve_window(days, now)
    repository = ActivityLogRepository(session)
    return DecksInsights(
        generated=count_in_window(repository, org_id, GENERATED_RULES, window),
        saved_to_vault=count_in_window(repository, org_id, SAVED_RULES, window),
        exported=count_in_window(repository, org_id, EXPORTED_RULES, window),
        window_days=days,
        recent_decks=_fetch_recent_decks(session, org_id),
    )


__all__ = ["DecksInsights", "RecentDeck", "get_decks_insights"]
