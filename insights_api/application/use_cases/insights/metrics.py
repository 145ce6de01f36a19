"""Shared helpers for deriving insight metrics.

Pack metrics are a free-form payload whose field names drift between pack
versions. A logical metric is therefore described as an ordered list of
accessors; :func:`resolve_metric` tries them in sequence and returns the first
value that coerces to a finite number.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any

from insights_api.utils import ensure_app_timezone, now_in_app_timezone

MetricAccessor = Callable[[Mapping[str, Any]], Any]
Number = int | float


@dataclass(frozen=True)
class TimeWindow:
    """Inclusive ``[start, end]`` window ending at ``end``."""

    start: datetime
    end: datetime
    days: int


def resolve_window(days: int, now: datetime | None = None) -> TimeWindow:
    end = ensure_app_timezone(now) or now_in_app_timezone()
    return TimeWindow(start=end - timedelta(days=days), end=end, days=days)


def to_number_or_none(value: Any) -> Number | None:
    """Coerce ``value`` to a finite number, or return ``None``.

    Booleans are not numbers here, and numeric strings are accepted after
    trimming (``"12"`` -> ``12``, ``"12.5"`` -> ``12.5``).
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, (float, Decimal)):
        number = float(value)
        return number if math.isfinite(number) else None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None


def field(name: str) -> MetricAccessor:
    """Accessor reading the top-level ``name`` key."""

    def _accessor(payload: Mapping[str, Any]) -> Any:
        return payload.get(name)

    _accessor.__name__ = f"field_{name}"
    return _accessor


def path(*keys: str) -> MetricAccessor:
    """Accessor walking nested mappings along ``keys``."""

    def _accessor(payload: Mapping[str, Any]) -> Any:
        current: Any = payload
        for key in keys:
            if not isinstance(current, Mapping):
                return None
            current = current.get(key)
        return current

    _accessor.__name__ = "path_" + "_".join(keys)
    return _accessor


def resolve_metric(
    payload: Mapping[str, Any] | None, accessors: Sequence[MetricAccessor]
) -> Number | None:
    """Return the first accessor result that coerces to a number."""

    if not isinstance(payload, Mapping):
        return None
    for accessor in accessors:
        try:
            raw = accessor(payload)
        except (KeyError, TypeError, AttributeError):
            continue
        number = to_number_or_none(raw)
        if number is not None:
            return number
    return None


__all__ = [
    "MetricAccessor",
    "TimeWindow",
    "field",
    "path",
    "resolve_metric",
    "resolve_window",
    "to_number_or_none",
]
