"""Domain entities exposed by the application."""

from .activity_event import ActivityEvent, ActivityReferences
from .document import DOCUMENT_KIND_CONTRACT, DOCUMENT_KIND_DECK, DocumentSummary
from .envelope import (
    ENVELOPE_STATUS_CANCELLED,
    ENVELOPE_STATUS_COMPLETED,
    ENVELOPE_STATUS_DECLINED,
    ENVELOPE_STATUS_FAILED,
    ENVELOPE_STATUS_SENT,
    ENVELOPE_STATUS_UNKNOWN,
    ENVELOPE_STATUS_VIEWED,
    Envelope,
)
from .event_types import (
    EVENT_TAXONOMY_VERSION,
    GROUP_RULES,
    ActivityEventType,
    EventGroup,
    MatchKind,
    MatchRule,
    groups_for_event_type,
    rules_for_groups,
)
from .pack_run import PackRun, PackRunStatus, PackType
from .request_context import RequestContext

__all__ = [
    "ActivityEvent",
    "ActivityReferences",
    "ActivityEventType",
    "EVENT_TAXONOMY_VERSION",
    "EventGroup",
    "GROUP_RULES",
    "MatchKind",
    "MatchRule",
    "groups_for_event_type",
    "rules_for_groups",
    "DocumentSummary",
    "DOCUMENT_KIND_DECK",
    "DOCUMENT_KIND_CONTRACT",
    "Envelope",
    "ENVELOPE_STATUS_SENT",
    "ENVELOPE_STATUS_VIEWED",
    "ENVELOPE_STATUS_COMPLETED",
    "ENVELOPE_STATUS_DECLINED",
    "ENVELOPE_STATUS_CANCELLED",
    "ENVELOPE_STATUS_FAILED",
    "ENVELOPE_STATUS_UNKNOWN",
    "PackRun",
    "PackRunStatus",
    "PackType",
    "RequestContext",
]
