"""Domain entity with the document attributes used by insights."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

DOCUMENT_KIND_DECK = "deck"
DOCUMENT_KIND_CONTRACT = "contract"


@dataclass(frozen=True)
class DocumentSummary:
    id: str
    org_id: str
    title: str | None
    kind: str
    updated_at: datetime | None


__all__ = ["DOCUMENT_KIND_CONTRACT", "DOCUMENT_KIND_DECK", "DocumentSummary"]
