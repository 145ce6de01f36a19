"""Tests for settings parsing, bearer tokens and timezone helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from insights_api.config import Settings, get_settings
from insights_api.infrastructure.security import (
    create_access_token,
    decode_access_token,
    resolve_request_context,
)
from insights_api.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    get_app_timezone,
    parse_iso_datetime,
)


def test_settings_parse_cors_origins_and_log_level() -> None:
    settings = Settings(
        secret_key="s",
        cors_origins="http://a.test, http://b.test,,",
        log_level="debug",
    )

    assert settings.allowed_origins == ["http://a.test", "http://b.test"]
    assert settings.log_level == "DEBUG"


def test_settings_reject_unknown_log_level() -> None:
    with pytest.raises(ValueError):
        Settings(secret_key="s", log_level="chatty")


def test_token_round_trip() -> None:
    token = create_access_token(org_id="org-42", user_id="user-7")

    context = resolve_request_context(token)

    assert context.org_id == "org-42"
    assert context.user_id == "user-7"


def test_expired_token_is_rejected() -> None:
    token = create_access_token(org_id="org-42", expires_delta=timedelta(seconds=-1))

    with pytest.raises(ValueError):
        decode_access_token(token)


def test_token_without_user_has_no_user_id() -> None:
    context = resolve_request_context(create_access_token(org_id="org-42"))

    assert context.user_id is None


def test_naive_values_are_interpreted_in_app_timezone() -> None:
    aware = ensure_app_timezone(datetime(2024, 5, 1, 10))

    assert aware == datetime(2024, 5, 1, 10, tzinfo=timezone.utc)
    assert ensure_app_naive_datetime(aware) == datetime(2024, 5, 1, 10)
    assert ensure_app_timezone(None) is None


def test_parse_iso_datetime_accepts_offsets() -> None:
    parsed = parse_iso_datetime("2024-05-01T12:00:00+02:00")

    assert ensure_app_timezone(parsed) == datetime(2024, 5, 1, 10, tzinfo=timezone.utc)
    with pytest.raises(ValueError):
        parse_iso_datetime("soon")


@pytest.mark.parametrize(
    ("name", "expected"),
    [("UTC", timezone.utc), ("", timezone.utc), ("Mars/Olympus", timezone.utc)],
)
def test_blank_or_unknown_timezone_resolves_to_utc(monkeypatch, name: str, expected) -> None:
    monkeypatch.setenv("APP_TIMEZONE", name)
    get_settings.cache_clear()
    get_app_timezone.cache_clear()
    try:
        assert get_app_timezone() == expected
    finally:
        monkeypatch.undo()
        get_settings.cache_clear()
        get_app_timezone.cache_clear()
