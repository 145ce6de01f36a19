"""Tests for the accounts, contracts, decks and overview aggregators."""

from __future__ import annotations

from datetime import date, datetime, timezone

from conftest import OTHER_ORG_ID, ORG_ID, insert_event, utc
from insights_api.application.use_cases.insights import (
    get_accounts_insights,
    get_activity_overview,
    get_contracts_insights,
    get_decks_insights,
)
from insights_api.application.use_cases.insights.decks import UNTITLED_DECK
from insights_api.domain.entities import PackRun, PackRunStatus, PackType
from insights_api.domain.errors import DataAccessError
from insights_api.infrastructure.models import DocumentModel
from insights_api.infrastructure.repositories import (
    ActivityLogRepository,
    DocumentRepository,
    PackRunRepository,
)


NOW = utc(2024, 6, 30, 12)


def _add_run(
    session,
    *,
    pack_type: PackType,
    status: PackRunStatus,
    metrics: dict | None,
    created_at: datetime,
    org_id: str = ORG_ID,
) -> None:
    PackRunRepository(session).add(
        PackRun(
            id=None,
            org_id=org_id,
            type=pack_type,
            status=status,
            period_start=date(2024, 6, 1),
            period_end=date(2024, 6, 30),
            metrics=metrics,
            created_at=created_at,
        )
    )


def test_accounts_insights_are_none_without_runs(session) -> None:
    insights = get_accounts_insights(session, ORG_ID)

    assert insights.monthly_saas.total is None
    assert insights.monthly_saas.last_run_at is None
    assert insights.investor_snapshot.runway_months is None
    assert insights.investor_snapshot.cash is None


def test_accounts_insights_use_latest_successful_run(session) -> None:
    _add_run(
        session,
        pack_type=PackType.SAAS_MONTHLY_EXPENSES,
        status=PackRunStatus.SUCCESS,
        metrics={"totalAmount": 100},
        created_at=utc(2024, 6, 1),
    )
    _add_run(
        session,
        pack_type=PackType.SAAS_MONTHLY_EXPENSES,
        status=PackRunStatus.SUCCESS,
        metrics={"total": "250.5", "vendorCount": 7},
        created_at=utc(2024, 6, 10),
    )
    _add_run(
        session,
        pack_type=PackType.SAAS_MONTHLY_EXPENSES,
        status=PackRunStatus.FAILURE,
        metrics={"error": {"message": "boom"}},
        created_at=utc(2024, 6, 20),
    )
    _add_run(
        session,
        pack_type=PackType.INVESTOR_ACCOUNTS_SNAPSHOT,
        status=PackRunStatus.SUCCESS,
        metrics={"headline": {"estimatedRunwayMonths": 18, "cashBalance": 50000}, "burn": "2500"},
        created_at=utc(2024, 6, 15),
    )
    _add_run(
        session,
        pack_type=PackType.INVESTOR_ACCOUNTS_SNAPSHOT,
        status=PackRunStatus.SUCCESS,
        metrics={"runwayMonths": 99},
        created_at=utc(2024, 6, 25),
        org_id=OTHER_ORG_ID,
    )

    insights = get_accounts_insights(session, ORG_ID)

    assert insights.monthly_saas.total == 250.5
    assert insights.monthly_saas.top_vendors_count == 7
    assert insights.monthly_saas.last_run_at == utc(2024, 6, 10)
    assert insights.investor_snapshot.runway_months == 18
    assert insights.investor_snapshot.cash == 50000
    assert insights.investor_snapshot.burn == 2500


def test_accounts_insights_degrade_on_store_failure(session, monkeypatch) -> None:
    def _fail(self, **kwargs):
        raise DataAccessError("down")

    monkeypatch.setattr(PackRunRepository, "get_latest", _fail)

    insights = get_accounts_insights(session, ORG_ID)

    assert insights.monthly_saas.total is None
    assert insights.investor_snapshot.runway_months is None


def test_contracts_insights_count_events_in_window(session) -> None:
    insert_event(session, event_type="contract_draft_created", created_at=utc(2024, 6, 29))
    insert_event(session, event_type="contract_draft_created", created_at=utc(2024, 6, 2))
    insert_event(session, event_type="contract_sent_for_signature", created_at=utc(2024, 6, 20))
    insert_event(session, event_type="contract_signed", created_at=utc(2024, 6, 25))
    insert_event(session, event_type="contract_signed", created_at=utc(2024, 5, 1))
    insert_event(
        session, event_type="contract_signed", created_at=utc(2024, 6, 25), org_id=OTHER_ORG_ID
    )

    insights = get_contracts_insights(session, ORG_ID, days=30, now=NOW)

    assert insights.drafts == 2
    assert insights.sent_for_signature == 1
    assert insights.signed == 1
    assert insights.window_days == 30

    short = get_contracts_insights(session, ORG_ID, days=7, now=NOW)
    assert short.drafts == 1
    assert short.signed == 1


def test_contracts_insights_count_zero_on_store_failure(session, monkeypatch) -> None:
    def _fail(self, **kwargs):
        raise DataAccessError("down")

    monkeypatch.setattr(ActivityLogRepository, "count", _fail)

    insights = get_contracts_insights(session, ORG_ID, now=NOW)

    assert (insights.drafts, insights.sent_for_signature, insights.signed) == (0, 0, 0)


def test_decks_insights_counts_and_recent_decks(session) -> None:
    insert_event(session, event_type="deck_generated", created_at=utc(2024, 6, 28))
    insert_event(session, event_type="deck_saved_to_vault", created_at=utc(2024, 6, 28))
    insert_event(session, event_type="deck_exported", created_at=utc(2024, 6, 29))
    insert_event(session, event_type="deck_exported", created_at=utc(2024, 6, 29, 1))

    documents = [
        ("d1", ORG_ID, "Seed round", "deck", datetime(2024, 6, 1)),
        ("d2", ORG_ID, "  ", "deck", datetime(2024, 6, 20)),
        ("d3", ORG_ID, "No date", "deck", None),
        ("d4", ORG_ID, "Contract", "contract", datetime(2024, 6, 25)),
        ("d5", OTHER_ORG_ID, "Foreign", "deck", datetime(2024, 6, 26)),
    ]
    session.add_all(
        [
            DocumentModel(id=doc_id, org_id=org_id, title=title, kind=kind, updated_at=updated_at)
            for doc_id, org_id, title, kind, updated_at in documents
        ]
    )
    session.commit()

    insights = get_decks_insights(session, ORG_ID, days=30, now=NOW)

    assert insights.generated == 1
    assert insights.saved_to_vault == 1
    assert insights.exported == 2
    assert [deck.id for deck in insights.recent_decks] == ["d2", "d1", "d3"]
    assert insights.recent_decks[0].title == UNTITLED_DECK
    assert insights.recent_decks[0].updated_at == datetime(2024, 6, 20, tzinfo=timezone.utc)
    assert insights.recent_decks[2].updated_at is None


def test_decks_insights_keep_counts_when_documents_fail(session, monkeypatch) -> None:
    insert_event(session, event_type="deck_exported", created_at=utc(2024, 6, 29))

    def _fail(self, **kwargs):
        raise DataAccessError("down")

    monkeypatch.setattr(DocumentRepository, "list_recent", _fail)

    insights = get_decks_insights(session, ORG_ID, now=NOW)

    assert insights.exported == 1
    assert insights.recent_decks == []


def test_activity_overview_summarizes_window(session) -> None:
    insert_event(session, event_type="doc_generated", created_at=utc(2024, 6, 29, 9),
                 document_id="doc-a")
    insert_event(session, event_type="doc_saved_to_vault", created_at=utc(2024, 6, 29, 10),
                 document_id="doc-a")
    insert_event(session, event_type="share_link_created", created_at=utc(2024, 6, 30, 8),
                 document_id="doc-b")
    insert_event(session, event_type="mono_query", created_at=utc(2024, 6, 30, 9))
    insert_event(session, event_type="connector_sync_completed", created_at=utc(2024, 6, 28),
                 provider="google_drive")
    insert_event(session, event_type="connector_sync_completed", created_at=utc(2024, 6, 28, 1),
                 context={"connector_provider": "dropbox"})
    insert_event(session, event_type="connector_sync_completed", created_at=utc(2024, 6, 28, 2))
    insert_event(session, event_type="signature_completed", created_at=utc(2024, 6, 27),
                 document_id="doc-c")
    insert_event(session, event_type="mono_query", created_at=utc(2024, 6, 1))

    overview = get_activity_overview(session, ORG_ID, days=7, now=NOW)

    assert overview.window_days == 7
    assert overview.documents_created == 1
    assert overview.assistant_queries == 1
    assert overview.connector_syncs == 3
    assert overview.connector_syncs_by_provider == {
        "dropbox": 1,
        "google_drive": 1,
        "unknown": 1,
    }
    assert overview.signatures_completed == 1
    assert overview.active_documents == 3
    assert len(overview.daily) == 7
    assert overview.daily[-1].day == date(2024, 6, 30)
    assert overview.daily[-1].documents == 1
    assert overview.daily[-1].assistant_queries == 1
    assert overview.daily[-2].documents == 2
    assert overview.daily[-3].connector_syncs == 3
    assert overview.daily[-4].signatures == 1


def test_activity_overview_is_zeroed_on_store_failure(session, monkeypatch) -> None:
    def _fail(self, **kwargs):
        raise DataAccessError("down")

    monkeypatch.setattr(ActivityLogRepository, "list_window", _fail)

    overview = get_activity_overview(session, ORG_ID, now=NOW)

    assert overview.assistant_queries == 0
    assert len(overview.daily) == 7
