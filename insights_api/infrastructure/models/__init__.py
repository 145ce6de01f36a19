"""ORM models used by the application infrastructure."""

from .activity_log import ActivityLogModel
from .document import DocumentModel
from .envelope import EnvelopeModel
from .pack_run import PackRunModel

__all__ = [
    "ActivityLogModel",
    "DocumentModel",
    "EnvelopeModel",
    "PackRunModel",
]
