"""Schemas for accounts pack run endpoints."""

from datetime import date
from typing import Any, Literal

from pydantic import Field, model_validator

from .base import CamelModel


class PackRunCreate(CamelModel):
    """Outcome of one accounts pack computation reported by the caller."""

    type: str = Field(..., description="saas_monthly_expenses or investor_accounts_snapshot")
    status: Literal["success", "failure"] = "success"
    period_start: date | None = None
    period_end: date | None = None
    metrics: dict[str, Any] | None = None
    error: str | None = Field(None, description="Failure message, for failed runs")
    error_name: str | None = None

    @model_validator(mode="after")
    def _check_period(self) -> "PackRunCreate":
        if self.period_start and self.period_end and self.period_start > self.period_end:
            raise ValueError("periodStart must not be after periodEnd")
        return self


class PackRunResponse(CamelModel):
    ok: bool = True
    recorded: bool
    run_id: int | None = None
