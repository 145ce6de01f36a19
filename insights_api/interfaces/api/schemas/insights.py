"""Schemas for insights endpoints."""

from datetime import date

from .base import CamelModel


class InsightsCardCTARead(CamelModel):
    label: str
    href: str


class InsightsCardRead(CamelModel):
    id: str
    kind: str
    title: str
    value: int | float | None
    period: str
    delta: int | float | None = None
    source: str
    cta: InsightsCardCTARead | None = None


class InsightsCardsResponse(CamelModel):
    range: str
    cards: list[InsightsCardRead]


class DailyActivityRead(CamelModel):
    day: date
    documents: int
    assistant_queries: int
    connector_syncs: int
    signatures: int


class ActivityOverviewRead(CamelModel):
    window_days: int
    documents_created: int
    assistant_queries: int
    connector_syncs: int
    connector_syncs_by_provider: dict[str, int]
    signatures_completed: int
    active_documents: int
    daily: list[DailyActivityRead]
