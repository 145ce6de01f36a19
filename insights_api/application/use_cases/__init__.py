"""Aggregate application use cases."""

from .activity_log import record_activity_event, record_activity_event_safely
from .activity_query import ActivityPage, ActivityQuery, query_activity_events
from .insights import build_insights_cards, get_activity_overview
from .pack_runs import record_pack_run_failure, record_pack_run_success
from .signature_callbacks import CallbackOutcome, process_signature_status_callback

__all__ = [
    "ActivityPage",
    "ActivityQuery",
    "CallbackOutcome",
    "build_insights_cards",
    "get_activity_overview",
    "process_signature_status_callback",
    "query_activity_events",
    "record_activity_event",
    "record_activity_event_safely",
    "record_pack_run_failure",
    "record_pack_run_success",
]
