"""Tests for recording activity events."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import OperationalError

from conftest import ORG_ID, USER_ID
from insights_api.application.use_cases.activity_log import (
    record_activity_event,
    record_activity_event_safely,
)
from insights_api.application.use_cases.activity_query import (
    ActivityQuery,
    query_activity_events,
)
from insights_api.domain.entities import (
    EVENT_TAXONOMY_VERSION,
    ActivityEventType,
    ActivityReferences,
)
from insights_api.domain.errors import DataAccessError, ValidationError
from insights_api.infrastructure.models import ActivityLogModel
from insights_api.infrastructure.repositories import ActivityLogRepository


def test_record_activity_event_persists_row(session) -> None:
    event = record_activity_event(
        session,
        org_id=ORG_ID,
        user_id=USER_ID,
        event_type="doc_generated",
        references=ActivityReferences(document_id="doc-1", version_id="v-1"),
        context={"template": "nda"},
        source="builder",
        trigger_route="/builder",
        duration_ms=120,
    )

    assert event.id is not None
    assert event.type is ActivityEventType.DOC_GENERATED
    assert event.taxonomy_version == EVENT_TAXONOMY_VERSION
    assert event.created_at is not None and event.created_at.tzinfo is not None

    row = session.get(ActivityLogModel, event.id)
    assert row.org_id == ORG_ID
    assert row.user_id == USER_ID
    assert row.document_id == "doc-1"
    assert row.version_id == "v-1"
    assert row.context == {
        "template": "nda",
        "source": "builder",
        "trigger_route": "/builder",
        "duration_ms": 120,
    }


def test_empty_context_is_stored_as_null(session) -> None:
    event = record_activity_event(session, org_id=ORG_ID, event_type="analyze")

    assert event.context is None
    assert session.get(ActivityLogModel, event.id).context is None


def test_provider_is_copied_from_context(session) -> None:
    event = record_activity_event(
        session,
        org_id=ORG_ID,
        event_type=ActivityEventType.CONNECTOR_SYNC_COMPLETED,
        context={"provider": "google_drive"},
    )

    assert event.provider == "google_drive"


def test_unknown_type_is_rejected_before_writing(session) -> None:
    with pytest.raises(ValidationError):
        record_activity_event(session, org_id=ORG_ID, event_type="made_up_event")

    assert session.query(ActivityLogModel).count() == 0


@pytest.mark.parametrize("org_id", ["", "   "])
def test_blank_org_is_rejected(session, org_id: str) -> None:
    with pytest.raises(ValidationError):
        record_activity_event(session, org_id=org_id, event_type="analyze")


def test_negative_duration_is_rejected(session) -> None:
    with pytest.raises(ValidationError):
        record_activity_event(session, org_id=ORG_ID, event_type="analyze", duration_ms=-1)


def test_safe_recording_swallows_validation_errors(session, caplog) -> None:
    result = record_activity_event_safely(session, org_id=ORG_ID, event_type="made_up_event")

    assert result is None
    assert "Failed to record activity event" in caplog.text


def test_safe_recording_swallows_storage_errors(session, monkeypatch) -> None:
    def _fail_commit() -> None:
        raise OperationalError("INSERT", {}, Exception("database is locked"))

    monkeypatch.setattr(session, "commit", _fail_commit)

    assert record_activity_event_safely(session, org_id=ORG_ID, event_type="analyze") is None


def test_storage_errors_surface_as_data_access_errors(session, monkeypatch) -> None:
    def _fail_commit() -> None:
        raise OperationalError("INSERT", {}, Exception("database is locked"))

    monkeypatch.setattr(session, "commit", _fail_commit)

    with pytest.raises(DataAccessError):
        record_activity_event(session, org_id=ORG_ID, event_type="analyze")


@pytest.mark.parametrize(
    "kwargs",
    [
        {"duration_ms": "15"},
        {"duration_ms": True},
        {"context": ["a"]},
        {"context": "provider=google_drive"},
    ],
)
def test_malformed_inputs_are_rejected(session, kwargs) -> None:
    with pytest.raises(ValidationError):
        record_activity_event(session, org_id=ORG_ID, event_type="analyze", **kwargs)

    assert session.query(ActivityLogModel).count() == 0


@pytest.mark.parametrize("kwargs", [{"duration_ms": "15"}, {"context": ["a"]}])
def test_safe_recording_returns_none_for_malformed_inputs(session, kwargs) -> None:
    result = record_activity_event_safely(session, org_id=ORG_ID, event_type="analyze", **kwargs)

    assert result is None


def test_safe_recording_swallows_unexpected_errors(session, monkeypatch, caplog) -> None:
    def _explode(self, event):
        raise RuntimeError("boom")

    monkeypatch.setattr(ActivityLogRepository, "add", _explode)

    result = record_activity_event_safely(session, org_id=ORG_ID, event_type="analyze")

    assert result is None
    assert "Unexpected error recording activity event" in caplog.text


@pytest.mark.parametrize("event_type", list(ActivityEventType))
def test_every_event_type_can_be_recorded_and_read_back(
    session, event_type: ActivityEventType
) -> None:
    recorded = record_activity_event(session, org_id=ORG_ID, event_type=event_type.value)

    page = query_activity_events(session, ORG_ID, ActivityQuery())

    assert [row.id for row in page.rows] == [recorded.id]
    assert page.rows[0].type is event_type
