"""Domain entity representing an e-signature envelope."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

ENVELOPE_STATUS_SENT = "sent"
ENVELOPE_STATUS_VIEWED = "viewed"
ENVELOPE_STATUS_COMPLETED = "completed"
ENVELOPE_STATUS_DECLINED = "declined"
ENVELOPE_STATUS_CANCELLED = "cancelled"
ENVELOPE_STATUS_FAILED = "failed"
ENVELOPE_STATUS_UNKNOWN = "unknown"


@dataclass
class Envelope:
    """Signature request tracked against a provider envelope id."""

    id: str
    org_id: str
    provider: str
    provider_envelope_id: str
    status: str
    document_id: str | None = None
    created_by: str | None = None
    sent_at: datetime | None = None
    completed_at: datetime | None = None
    cancelled_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = [
    "Envelope",
    "ENVELOPE_STATUS_SENT",
    "ENVELOPE_STATUS_VIEWED",
    "ENVELOPE_STATUS_COMPLETED",
    "ENVELOPE_STATUS_DECLINED",
    "ENVELOPE_STATUS_CANCELLED",
    "ENVELOPE_STATUS_FAILED",
    "ENVELOPE_STATUS_UNKNOWN",
]
