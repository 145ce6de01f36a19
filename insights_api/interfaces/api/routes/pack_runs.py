"""Endpoints for reporting accounts pack runs."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from insights_api.application.use_cases.activity_log import record_activity_event_safely
from insights_api.application.use_cases.pack_runs import (
    record_pack_run_failure,
    record_pack_run_success,
    resolve_pack_type,
)
from insights_api.domain.entities import ActivityEventType, PackRunStatus, RequestContext
from insights_api.domain.errors import ValidationError
from insights_api.interfaces.api.dependencies import get_db, get_request_context
from insights_api.interfaces.api.schemas import PackRunCreate, PackRunResponse

router = APIRouter(prefix="/accounts", tags=["accounts"])
logger = logging.getLogger(__name__)

TRIGGER_ROUTE = "/accounts/pack-runs"


@router.post(
    "/pack-runs",
    response_model=PackRunResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
def create_pack_run(
    payload: PackRunCreate,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
) -> PackRunResponse:
    """Record one pack run and log the matching activity event."""

    try:
        pack_type = resolve_pack_type(payload.type)
        if payload.status == PackRunStatus.SUCCESS.value:
            run = record_pack_run_success(
                db,
                org_id=context.org_id,
                pack_type=pack_type,
                period_start=payload.period_start,
                period_end=payload.period_end,
                metrics=payload.metrics,
            )
        else:
            run = record_pack_run_failure(
                db,
                org_id=context.org_id,
                pack_type=pack_type,
                error=payload.error,
                error_name=payload.error_name,
            )
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    if payload.status == PackRunStatus.SUCCESS.value:
        event_type = ActivityEventType.ACCOUNTS_PACK_SUCCESS
        event_context = {"pack_type": pack_type.value}
    else:
        event_type = ActivityEventType.ACCOUNTS_PACK_FAILURE
        event_context = {
            "pack_type": pack_type.value,
            "error": run.metrics.get("error") if run and run.metrics else {"message": payload.error},
        }
    record_activity_event_safely(
        db,
        org_id=context.org_id,
        user_id=context.user_id,
        event_type=event_type,
        context=event_context,
        source="accounts",
        trigger_route=TRIGGER_ROUTE,
    )

    return PackRunResponse(recorded=run is not None, run_id=run.id if run else None)


__all__ = ["router"]
