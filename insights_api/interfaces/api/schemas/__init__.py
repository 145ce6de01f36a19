from .activity import (
    ActivityEventRead,
    ActivityPageRead,
    ActivityReferencesPayload,
    EventTypeCatalogRead,
    EventTypeRead,
    RecordActivityRequest,
    RecordActivityResponse,
)
from .insights import (
    ActivityOverviewRead,
    DailyActivityRead,
    InsightsCardCTARead,
    InsightsCardRead,
    InsightsCardsResponse,
)
from .pack_run import PackRunCreate, PackRunResponse
from .webhook import SignatureCallbackResponse

__all__ = [
    "ActivityEventRead",
    "ActivityOverviewRead",
    "ActivityPageRead",
    "ActivityReferencesPayload",
    "DailyActivityRead",
    "EventTypeCatalogRead",
    "EventTypeRead",
    "InsightsCardCTARead",
    "InsightsCardRead",
    "InsightsCardsResponse",
    "PackRunCreate",
    "PackRunResponse",
    "RecordActivityRequest",
    "RecordActivityResponse",
    "SignatureCallbackResponse",
]
