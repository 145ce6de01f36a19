"""Repository implementations for infrastructure layer."""

from .activity_log_repository import ActivityLogRepository
from .document_repository import DocumentRepository
from .envelope_repository import EnvelopeRepository
from .pack_run_repository import PackRunRepository

__all__ = [
    "ActivityLogRepository",
    "DocumentRepository",
    "EnvelopeRepository",
    "PackRunRepository",
]
