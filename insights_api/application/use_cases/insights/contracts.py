"""Contracts insights counted from the activity log."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Session

from insights_api.domain.entities import ActivityEventType, MatchRule
from insights_api.domain.errors import DataAccessError
from insights_api.infrastructure.repositories import ActivityLogRepository

from .metrics import TimeWindow, resolve_window

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS = 30

DRAFT_CREATED_RULES = (MatchRule.prefix(ActivityEventType.CONTRACT_DRAFT_CREATED.value),)
SENT_FOR_SIGNATURE_RULES = (
    MatchRule.prefix(ActivityEventType.CONTRACT_SENT_FOR_SIGNATURE.value),
)
SIGNED_RULES = (MatchRule.prefix(ActivityEventType.CONTRACT_SIGNED.value),)


@dataclass
class ContractsInsights:
    drafts: int
    sent_for_signature: int
    signed: int
    window_days: int


def count_in_window(
    repository: ActivityLogRepository,
    org_id: str,
    rules: tuple[MatchRule, ...],
    window: TimeWindow,
) -> int:
    """Count matching events, degrading to ``0`` when the store fails."""

    try:
        return repository.count(org_id=org_id, rules=rules, start=window.start, end=window.end)
    except DataAccessError:
        logger.error(
            "Failed to count %s events for org %s",
            ", ".join(rule.value for rule in rules),
            org_id,
            exc_info=True,
        )
        return 0


def get_contracts_insights(
    session: Session,
    org_id: str,
    *,
    days: int = DEFAULT_WINDOW_DAYS,
    now: datetime | None = None,
) -> ContractsInsights:
    """Count drafts, signature requests and signatures over the last ``days``."""

    window = resolve_window(days, now)
    repository = ActivityLogRepository(session)
    return ContractsInsights(
        drafts=count_in_window(repository, org_id, DRAFT_CREATED_RULES, window),
        sent_for_signature=count_in_window(repository, org_id, SENT_FOR_SIGNATURE_RULES, window),
        signed=count_in_window(repository, org_id, SIGNED_RULES, window),
        window_days=days,
    )


__all__ = ["ContractsInsights", "count_in_window", "get_contracts_insights"]
