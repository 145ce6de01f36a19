"""Handle envelope status callbacks sent by e-signature providers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from sqlalchemy.orm import Session

from insights_api.domain.entities import (
    ENVELOPE_STATUS_CANCELLED,
    ENVELOPE_STATUS_COMPLETED,
    ENVELOPE_STATUS_DECLINED,
    ENVELOPE_STATUS_FAILED,
    ENVELOPE_STATUS_SENT,
    ENVELOPE_STATUS_UNKNOWN,
    ENVELOPE_STATUS_VIEWED,
    ActivityEventType,
    ActivityReferences,
    Envelope,
)
from insights_api.domain.errors import ValidationError
from insights_api.infrastructure.repositories import EnvelopeRepository
from insights_api.utils import now_in_app_timezone

from .activity_log import record_activity_event_safely

logger = logging.getLogger(__name__)

REASON_ENVELOPE_NOT_FOUND = "envelope_not_found"

# Checked in order; the first keyword found in the event type wins.
_STATUS_KEYWORDS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("sent",), ENVELOPE_STATUS_SENT),
    (("viewed",), ENVELOPE_STATUS_VIEWED),
    (("completed", "signed"), ENVELOPE_STATUS_COMPLETED),
    (("declined", "rejected"), ENVELOPE_STATUS_DECLINED),
    (("cancelled",), ENVELOPE_STATUS_CANCELLED),
    (("failed",), ENVELOPE_STATUS_FAILED),
)


@dataclass(frozen=True)
class CallbackOutcome:
    ignored: bool = False
    reason: str | None = None
    envelope_id: str | None = None
    status: str | None = None


def map_event_type_to_status(event_type: str | None) -> str:
    """Translate a provider event type such as ``document.completed`` to a status."""

    normalized = (event_type or "").lower()
    for keywords, status in _STATUS_KEYWORDS:
        if any(keyword in normalized for keyword in keywords):
            return status
    return ENVELOPE_STATUS_UNKNOWN


def extract_provider_envelope_id(payload: Mapping[str, Any]) -> str:
    data = payload.get("data")
    candidates = (
        payload.get("documentId"),
        payload.get("envelopeId"),
        data.get("id") if isinstance(data, Mapping) else None,
    )
    for candidate in candidates:
        if candidate is None:
            continue
        if isinstance(candidate, str) and candidate.strip():
            return candidate.strip()
        break
    raise ValidationError("Missing documentId or envelopeId in callback body")


def _apply_status(envelope: Envelope, status: str) -> Envelope:
    now = now_in_app_timezone()
    envelope.status = status
    envelope.updated_at = now
    if status == ENVELOPE_STATUS_SENT and envelope.sent_at is None:
        envelope.sent_at = now
    if status == ENVELOPE_STATUS_COMPLETED and envelope.completed_at is None:
        envelope.completed_at = now
    if status == ENVELOPE_STATUS_CANCELLED and envelope.cancelled_at is None:
        envelope.cancelled_at = now
    return envelope


def process_signature_status_callback(
    session: Session,
    *,
    provider: str,
    payload: Mapping[str, Any],
) -> CallbackOutcome:
    """Update the envelope referenced by ``payload`` and log the transition.

    Callbacks for envelopes this service does not know about are acknowledged
    and ignored so the provider stops retrying them. Storage failures while
    updating the envelope propagate as :class:`DataAccessError`; the activity
    events are recorded best-effort.
    """

    provider = (provider or "").strip().lower()
    if not provider:
        raise ValidationError("A signature provider is required")

    provider_envelope_id = extract_provider_envelope_id(payload)
    raw_type = payload.get("type")
    event_type = raw_type if isinstance(raw_type, str) and raw_type else "unknown"
    status = map_event_type_to_status(event_type)

    repository = EnvelopeRepository(session)
    envelope = repository.get_by_provider_id(
        provider=provider, provider_envelope_id=provider_envelope_id
    )
    if envelope is None:
        logger.warning(
            "No %s envelope found for provider envelope id %s", provider, provider_envelope_id
        )
        return CallbackOutcome(ignored=True, reason=REASON_ENVELOPE_NOT_FOUND)

    previous_status = envelope.status
    updated = repository.update_status(_apply_status(envelope, status))

    data = payload.get("data") if isinstance(payload.get("data"), Mapping) else {}
    references = ActivityReferences(document_id=updated.document_id, envelope_id=updated.id)
    context = {
        "provider": provider,
        "provider_envelope_id": provider_envelope_id,
        "status": status,
        "event_type": event_type,
        "previous_status": previous_status,
        "raw_event": {
            "type": event_type,
            "timestamp": payload.get("timestamp"),
            "data_id": data.get("id"),
            "data_status": data.get("status"),
        },
    }
    record_activity_event_safely(
        session,
        org_id=updated.org_id,
        user_id=updated.created_by,
        event_type=ActivityEventType.ENVELOPE_STATUS_CHANGED,
        references=references,
        context=context,
    )
    if status == ENVELOPE_STATUS_COMPLETED and previous_status != ENVELOPE_STATUS_COMPLETED:
        record_activity_event_safely(
            session,
            org_id=updated.org_id,
            user_id=updated.created_by,
            event_type=ActivityEventType.SIGNATURE_COMPLETED,
            references=references,
            context={"provider": provider, "provider_envelope_id": provider_envelope_id},
        )

    logger.info(
        "Processed %s callback %s for envelope %s: %s -> %s",
        provider,
        event_type,
        updated.id,
        previous_status,
        status,
    )
    return CallbackOutcome(envelope_id=updated.id, status=status)


__all__ = [
    "CallbackOutcome",
    "REASON_ENVELOPE_NOT_FOUND",
    "extract_provider_envelope_id",
    "map_event_type_to_status",
    "process_signature_status_callback",
]
