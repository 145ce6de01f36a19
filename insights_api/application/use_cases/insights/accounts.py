"""Accounts insights derived from the latest successful pack runs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field as dataclass_field
from datetime import datetime

from sqlalchemy.orm import Session

from insights_api.domain.entities import PackRun, PackRunStatus, PackType
from insights_api.domain.errors import DataAccessError
from insights_api.infrastructure.repositories import PackRunRepository

from .metrics import Number, field, path, resolve_metric

logger = logging.getLogger(__name__)

SAAS_TOTAL_FIELDS = (field("totalAmount"), field("total"), path("headline", "totalAmount"))
SAAS_VENDOR_COUNT_FIELDS = (
    field("vendorCount"),
    field("topVendorsCount"),
    path("headline", "vendorCount"),
)
RUNWAY_FIELDS = (
    field("estimatedRunwayMonths"),
    field("runwayMonths"),
    path("headline", "estimatedRunwayMonths"),
)
CASH_FIELDS = (field("cashBalance"), field("cash"), path("headline", "cashBalance"))
BURN_FIELDS = (
    field("totalMonthlyBurn"),
    field("monthlySaaSBurn"),
    field("burn"),
    path("headline", "totalMonthlyBurn"),
)


@dataclass
class MonthlySaasInsights:
    total: Number | None = None
    top_vendors_count: Number | None = None
    last_run_at: datetime | None = None


@dataclass
class InvestorSnapshotInsights:
    runway_months: Number | None = None
    cash: Number | None = None
    burn: Number | None = None
    last_run_at: datetime | None = None


@dataclass
class AccountsInsights:
    """Headline figures of the two accounts packs; ``None`` means no data yet."""

    monthly_saas: MonthlySaasInsights = dataclass_field(default_factory=MonthlySaasInsights)
    investor_snapshot: InvestorSnapshotInsights = dataclass_field(
        default_factory=InvestorSnapshotInsights
    )


def _latest_success_run(
    repository: PackRunRepository, org_id: str, pack_type: PackType
) -> PackRun | None:
    try:
        run = repository.get_latest(
            org_id=org_id, pack_type=pack_type, status=PackRunStatus.SUCCESS
        )
    except DataAccessError:
        logger.error(
            "Failed to fetch the latest %s run for org %s", pack_type.value, org_id, exc_info=True
        )
        return None
    if run is None:
        logger.info("No successful %s runs found for org %s", pack_type.value, org_id)
    return run


def get_accounts_insights(session: Session, org_id: str) -> AccountsInsights:
    """Return the accounts insights of ``org_id``; never raises for store failures."""

    repository = PackRunRepository(session)
    saas_run = _latest_success_run(repository, org_id, PackType.SAAS_MONTHLY_EXPENSES)
    investor_run = _latest_success_run(repository, org_id, PackType.INVESTOR_ACCOUNTS_SNAPSHOT)

    saas_metrics = saas_run.metrics if saas_run else None
    investor_metrics = investor_run.metrics if investor_run else None

    return AccountsInsights(
        monthly_saas=MonthlySaasInsights(
            total=resolve_metric(saas_metrics, SAAS_TOTAL_FIELDS),
            top_vendors_count=resolve_metric(saas_metrics, SAAS_VENDOR_COUNT_FIELDS),
            last_run_at=saas_run.created_at if saas_run else None,
        ),
        investor_snapshot=InvestorSnapshotInsights(
            runway_months=resolve_metric(investor_metrics, RUNWAY_FIELDS),
            cash=resolve_metric(investor_metrics, CASH_FIELDS),
            burn=resolve_metric(investor_metrics, BURN_FIELDS),
            last_run_at=investor_run.created_at if investor_run else None,
        ),
    )


__all__ = [
    "AccountsInsights",
    "InvestorSnapshotInsights",
    "MonthlySaasInsights",
    "get_accounts_insights",
]
