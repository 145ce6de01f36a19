"""Tests for the concurrent insight card assembly."""

from __future__ import annotations

from datetime import date
from functools import partial

import anyio
import pytest

from conftest import ORG_ID, insert_event, utc
from insights_api.application.use_cases.insights import cards as cards_module
from insights_api.application.use_cases.insights import build_insights_cards, resolve_range
from insights_api.application.use_cases.insights.cards import InsightsRange
from insights_api.domain.entities import PackRun, PackRunStatus, PackType
from insights_api.infrastructure.database import SessionLocal
from insights_api.infrastructure.repositories import PackRunRepository

NOW = utc(2024, 6, 30, 12)
CARD_IDS = [
    "accounts-monthly-saas-total",
    "accounts-investor-runway-months",
    "contracts-signed",
    "decks-exported",
]


def _build(range_value=None):
    return anyio.run(partial(build_insights_cards, SessionLocal, ORG_ID, range_value, now=NOW))


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("7d", (InsightsRange.LAST_7_DAYS, 7, "Last 7 days")),
        ("30d", (InsightsRange.LAST_30_DAYS, 30, "Last 30 days")),
        ("90d", (InsightsRange.LAST_90_DAYS, 90, "Last 90 days")),
        ("365d", (InsightsRange.LAST_30_DAYS, 30, "Last 30 days")),
        (None, (InsightsRange.LAST_30_DAYS, 30, "Last 30 days")),
    ],
)
def test_resolve_range(value, expected) -> None:
    assert resolve_range(value) == expected


def test_cards_are_null_not_zero_without_pack_runs() -> None:
    report = _build("30d")

    assert report.range is InsightsRange.LAST_30_DAYS
    assert [card.id for card in report.cards] == CARD_IDS
    accounts_cards = report.cards[:2]
    assert all(card.value is None for card in accounts_cards)
    assert all(card.period == "Last 30 days" for card in report.cards)
    assert report.cards[2].value == 0
    assert report.cards[3].value == 0


def test_cards_reflect_each_domain(session) -> None:
    PackRunRepository(session).add(
        PackRun(
            id=None,
            org_id=ORG_ID,
            type=PackType.SAAS_MONTHLY_EXPENSES,
            status=PackRunStatus.SUCCESS,
            period_start=date(2024, 6, 1),
            period_end=date(2024, 6, 30),
            metrics={"totalAmount": "1234.5"},
            created_at=utc(2024, 6, 29),
        )
    )
    insert_event(session, event_type="contract_signed", created_at=utc(2024, 6, 28))
    insert_event(session, event_type="contract_signed", created_at=utc(2024, 6, 1))
    insert_event(session, event_type="deck_exported", created_at=utc(2024, 6, 29))

    report = _build("7d")

    values = {card.id: card.value for card in report.cards}
    assert values == {
        "accounts-monthly-saas-total": 1234.5,
        "accounts-investor-runway-months": None,
        "contracts-signed": 1,
        "decks-exported": 1,
    }
    assert report.cards[0].source == "accounts_pack_runs"
    assert report.cards[2].cta.href == "/builder?tab=contracts"
    assert report.cards[3].source == "activity_log+documents"


def test_failing_aggregator_only_nulls_its_own_cards(session, monkeypatch, caplog) -> None:
    insert_event(session, event_type="contract_signed", created_at=utc(2024, 6, 28))

    def _explode(*args, **kwargs):
        raise RuntimeError("accounts store unavailable")

    monkeypatch.setattr(cards_module, "get_accounts_insights", _explode)

    report = _build("invalid")

    assert report.range is InsightsRange.LAST_30_DAYS
    assert [card.id for card in report.cards] == CARD_IDS
    assert report.cards[0].value is None
    assert report.cards[1].value is None
    assert report.cards[2].value == 1
    assert report.cards[3].value == 0
    assert "accounts insights aggregator failed" in caplog.text
