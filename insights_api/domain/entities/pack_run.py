"""Domain entity representing one execution of a financial pack."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any


class PackType(str, Enum):
    SAAS_MONTHLY_EXPENSES = "saas_monthly_expenses"
    INVESTOR_ACCOUNTS_SNAPSHOT = "investor_accounts_snapshot"


class PackRunStatus(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class PackRun:
    """Immutable record of a pack computation attempt and its metrics."""

    id: int | None
    org_id: str
    type: PackType
    status: PackRunStatus
    period_start: date | None
    period_end: date | None
    metrics: dict[str, Any] | None
    created_at: datetime | None


__all__ = ["PackRun", "PackRunStatus", "PackType"]
