"""Callbacks sent by external providers."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.orm import Session

from insights_api.application.use_cases.signature_callbacks import (
    process_signature_status_callback,
)
from insights_api.domain.errors import DataAccessError, ValidationError
from insights_api.interfaces.api.dependencies import get_db
from insights_api.interfaces.api.schemas import SignatureCallbackResponse

router = APIRouter(prefix="/webhooks", tags=["webhooks"])
logger = logging.getLogger(__name__)


@router.post(
    "/signatures/{provider}",
    response_model=SignatureCallbackResponse,
    response_model_exclude_none=True,
)
def receive_signature_callback(
    provider: str,
    payload: dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
) -> SignatureCallbackResponse:
    """Apply an envelope status change reported by a signature provider.

    Unknown envelopes are acknowledged with ``ignored`` so the provider does
    not keep retrying them.
    """

    try:
        outcome = process_signature_status_callback(db, provider=provider, payload=payload)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except DataAccessError as exc:
        logger.exception("Failed to process %s signature callback", provider)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process callback",
        ) from exc

    if outcome.ignored:
        return SignatureCallbackResponse(ignored=True, reason=outcome.reason)
    return SignatureCallbackResponse()


__all__ = ["router"]
