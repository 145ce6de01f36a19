"""Insight cards: a normalized view over the accounts, contracts and decks insights."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from functools import partial
from typing import Any, TypeVar

import anyio
from sqlalchemy.orm import Session

from insights_api.utils import ensure_app_timezone, now_in_app_timezone

from .accounts import AccountsInsights, get_accounts_insights
from .contracts import ContractsInsights, get_contracts_insights
from .decks import DecksInsights, get_decks_insights
from .metrics import Number

logger = logging.getLogger(__name__)

T = TypeVar("T")
SessionFactory = Callable[[], Session]

SOURCE_PACK_RUNS = "accounts_pack_runs"
SOURCE_ACTIVITY_LOG = "activity_log"
SOURCE_ACTIVITY_LOG_AND_DOCUMENTS = "activity_log+documents"


class InsightsRange(str, Enum):
    LAST_7_DAYS = "7d"
    LAST_30_DAYS = "30d"
    LAST_90_DAYS = "90d"


DEFAULT_RANGE = InsightsRange.LAST_30_DAYS
_RANGE_DAYS = {
    InsightsRange.LAST_7_DAYS: 7,
    InsightsRange.LAST_30_DAYS: 30,
    InsightsRange.LAST_90_DAYS: 90,
}


class InsightsCardKind(str, Enum):
    ACCOUNTS = "accounts"
    CONTRACTS = "contracts"
    DECKS = "decks"


@dataclass(frozen=True)
class InsightsCardCTA:
    label: str
    href: str


@dataclass(frozen=True)
class InsightsCard:
    """UI-facing unit of a derived metric.

    ``value`` is ``None`` when there is not enough data yet; it is never
    replaced by ``0``.
    """

    id: str
    kind: InsightsCardKind
    title: str
    value: Number | None
    period: str
    source: str
    cta: InsightsCardCTA | None = None
    delta: Number | None = None


@dataclass(frozen=True)
class InsightsReport:
    range: InsightsRange
    cards: list[InsightsCard]


def resolve_range(value: Any) -> tuple[InsightsRange, int, str]:
    """Map ``value`` to ``(range, days, label)``; unknown values mean ``30d``."""

    try:
        insights_range = InsightsRange(value)
    except ValueError:
        insights_range = DEFAULT_RANGE
    days = _RANGE_DAYS[insights_range]
    return insights_range, days, f"Last {days} days"


def _run_aggregator(
    session_factory: SessionFactory,
    domain: str,
    aggregator: Callable[..., T],
    org_id: str,
    **kwargs: Any,
) -> T | None:
    """Run one aggregator in its own session; a failure only affects its domain."""

    try:
        with session_factory() as session:
            return aggregator(session, org_id, **kwargs)
    except Exception:
        logger.exception("The %s insights aggregator failed for org %s", domain, org_id)
        return None


def _build_cards(
    label: str,
    accounts: AccountsInsights | None,
    contracts: ContractsInsights | None,
    decks: DecksInsights | None,
) -> list[InsightsCard]:
    return [
        InsightsCard(
            id="accounts-monthly-saas-total",
            kind=InsightsCardKind.ACCOUNTS,
            title="Monthly SaaS spend",
            value=accounts.monthly_saas.total if accounts else None,
            period=label,
            source=SOURCE_PACK_RUNS,
            cta=InsightsCardCTA(label="Open Accounts", href="/accounts"),
        ),
        InsightsCard(
            id="accounts-investor-runway-months",
            kind=InsightsCardKind.ACCOUNTS,
            title="Runway (months)",
            value=accounts.investor_snapshot.runway_months if accounts else None,
            period=label,
            source=SOURCE_PACK_RUNS,
            cta=InsightsCardCTA(label="Investor snapshot", href="/accounts"),
        ),
        InsightsCard(
            id="contracts-signed",
            kind=InsightsCardKind.CONTRACTS,
            title="Contracts signed",
            value=contracts.signed if contracts else None,
            period=label,
            source=SOURCE_ACTIVITY_LOG,
            cta=InsightsCardCTA(label="Open Contracts", href="/builder?tab=contracts"),
        ),
        InsightsCard(
            id="decks-exported",
            kind=InsightsCardKind.DECKS,
            title="Decks exported",
            value=decks.exported if decks else None,
            period=label,
            source=SOURCE_ACTIVITY_LOG_AND_DOCUMENTS,
            cta=InsightsCardCTA(label="Open Decks", href="/builder?tab=decks"),
        ),
    ]


async def build_insights_cards(
    session_factory: SessionFactory,
    org_id: str,
    range_value: Any = None,
    *,
    now: datetime | None = None,
) -> InsightsReport:
    """Compute the insight cards of ``org_id`` for the requested range.

    The three aggregators are independent and read-only, so they run
    concurrently in worker threads, each with its own session. Their results
    are joined before the cards are built in a fixed order.
    """

    insights_range, days, label = resolve_range(range_value)
    reference = ensure_app_timezone(now) or now_in_app_timezone()
    results: dict[str, Any] = {}

    async def _collect(domain: str, job: Callable[[], Any]) -> None:
        results[domain] = await anyio.to_thread.run_sync(job)

    async with anyio.create_task_group() as task_group:
        task_group.start_soon(
            _collect,
            "accounts",
            partial(_run_aggregator, session_factory, "accounts", get_accounts_insights, org_id),
        )
        task_group.start_soon(
            _collect,
            "contracts",
            partial(
                _run_aggregator,
                session_factory,
                "contracts",
                get_contracts_insights,
                org_id,
                days=days,
                now=reference,
            ),
        )
        task_group.start_soon(
            _collect,
            "decks",
            partial(
                _run_aggregator,
                session_factory,
                "decks",
                get_decks_insights,
                org_id,
                days=days,
                now=reference,
            ),
        )

    cards = _build_cards(
        label, results.get("accounts"), results.get("contracts"), results.get("decks")
    )
    return InsightsReport(range=insights_range, cards=cards)


__all__ = [
    "DEFAULT_RANGE",
    "InsightsCard",
    "InsightsCardCTA",
    "InsightsCardKind",
    "InsightsRange",
    "InsightsReport",
    "build_insights_cards",
    "resolve_range",
]
