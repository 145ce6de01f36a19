"""Use cases for recording accounts pack runs."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping

from sqlalchemy.orm import Session

from insights_api.domain.entities import PackRun, PackRunStatus, PackType
from insights_api.domain.errors import DataAccessError, ValidationError
from insights_api.infrastructure.repositories import PackRunRepository
from insights_api.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


def resolve_pack_type(value: PackType | str) -> PackType:
    if isinstance(value, PackType):
        return value
    try:
        return PackType(str(value).strip())
    except ValueError as exc:
        raise ValidationError(f"Unknown pack type: {value!r}") from exc


def _error_payload(error: BaseException | str | None, name: str | None) -> dict[str, Any]:
    if isinstance(error, BaseException):
        return {"message": str(error), "name": name or type(error).__name__}
    payload: dict[str, Any] = {"message": str(error) if error is not None else "Unknown error"}
    if name:
        payload["name"] = name
    return payload


def _append(session: Session, run: PackRun) -> PackRun | None:
    try:
        created = PackRunRepository(session).add(run)
    except DataAccessError:
        logger.exception(
            "Failed to record %s run of %s for org %s",
            run.status.value,
            run.type.value,
            run.org_id,
        )
        return None
    logger.info(
        "Recorded %s run %s of %s for org %s",
        created.status.value,
        created.id,
        created.type.value,
        created.org_id,
    )
    return created


def record_pack_run_success(
    session: Session,
    *,
    org_id: str,
    pack_type: PackType | str,
    period_start: date | None,
    period_end: date | None,
    metrics: Mapping[str, Any] | None,
) -> PackRun | None:
    """Append a successful run with its metrics; storage failures return ``None``."""

    if not org_id:
        raise ValidationError("An organization id is required to record a pack run")
    if period_start and period_end and period_start > period_end:
        raise ValidationError("period_start must not be after period_end")
    run = PackRun(
        id=None,
        org_id=org_id,
        type=resolve_pack_type(pack_type),
        status=PackRunStatus.SUCCESS,
        period_start=period_start,
        period_end=period_end,
        metrics=dict(metrics) if metrics else None,
        created_at=now_in_app_timezone(),
    )
    return _append(session, run)


def record_pack_run_failure(
    session: Session,
    *,
    org_id: str,
    pack_type: PackType | str,
    error: BaseException | str | None,
    error_name: str | None = None,
) -> PackRun | None:
    """Append a failed run whose metrics hold the error description."""

    if not org_id:
        raise ValidationError("An organization id is required to record a pack run")
    run = PackRun(
        id=None,
        org_id=org_id,
        type=resolve_pack_type(pack_type),
        status=PackRunStatus.FAILURE,
        period_start=None,
        period_end=None,
        metrics={"error": _error_payload(error, error_name)},
        created_at=now_in_app_timezone(),
    )
    return _append(session, run)


__all__ = ["record_pack_run_failure", "record_pack_run_success", "resolve_pack_type"]
