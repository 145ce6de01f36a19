"""Tests for the insights endpoints."""

from __future__ import annotations

from datetime import timedelta

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from conftest import insert_event
from insights_api.utils import now_in_app_timezone


def test_cards_require_authentication(client: TestClient) -> None:
    response = client.get("/insights/cards")

    assert response.status_code == 401


def test_cards_default_to_thirty_days(client: TestClient, auth_headers) -> None:
    response = client.get("/insights/cards", params={"range": "bogus"}, headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["range"] == "30d"
    assert [card["id"] for card in body["cards"]] == [
        "accounts-monthly-saas-total",
        "accounts-investor-runway-months",
        "contracts-signed",
        "decks-exported",
    ]
    first = body["cards"][0]
    assert first["value"] is None
    assert first["period"] == "Last 30 days"
    assert first["kind"] == "accounts"
    assert first["cta"] == {"label": "Open Accounts", "href": "/accounts"}


def test_cards_count_recent_events(client: TestClient, auth_headers, session) -> None:
    recent = now_in_app_timezone() - timedelta(days=2)
    insert_event(session, event_type="deck_exported", created_at=recent)
    insert_event(session, event_type="deck_exported", created_at=recent)
    insert_event(session, event_type="contract_signed", created_at=recent - timedelta(days=20))

    body = client.get("/insights/cards", params={"range": "7d"}, headers=auth_headers).json()

    values = {card["id"]: card["value"] for card in body["cards"]}
    assert body["range"] == "7d"
    assert values["decks-exported"] == 2
    assert values["contracts-signed"] == 0


def test_overview_reports_daily_buckets(client: TestClient, auth_headers, session) -> None:
    insert_event(
        session,
        event_type="mono_query",
        created_at=now_in_app_timezone() - timedelta(minutes=5),
    )

    response = client.get("/insights/overview", params={"days": 3}, headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["windowDays"] == 3
    assert body["assistantQueries"] == 1
    assert len(body["daily"]) == 3
    assert sum(day["assistantQueries"] for day in body["daily"]) == 1


def test_overview_rejects_out_of_range_days(client: TestClient, auth_headers) -> None:
    response = client.get("/insights/overview", params={"days": 0}, headers=auth_headers)

    assert response.status_code == 422
