"""Use cases deriving insight metrics and cards from the activity log."""

from .accounts import AccountsInsights, get_accounts_insights
from .cards import (
    InsightsCard,
    InsightsCardCTA,
    InsightsCardKind,
    InsightsRange,
    InsightsReport,
    build_insights_cards,
    resolve_range,
)
from .contracts import ContractsInsights, get_contracts_insights
from .decks import DecksInsights, RecentDeck, get_decks_insights
from .overview import ActivityOverview, DailyActivity, get_activity_overview

__all__ = [
    "AccountsInsights",
    "ActivityOverview",
    "ContractsInsights",
    "DailyActivity",
    "DecksInsights",
    "InsightsCard",
    "InsightsCardCTA",
    "InsightsCardKind",
    "InsightsRange",
    "InsightsReport",
    "RecentDeck",
    "build_insights_cards",
    "get_accounts_insights",
    "get_activity_overview",
    "get_contracts_insights",
    "get_decks_insights",
    "resolve_range",
]
