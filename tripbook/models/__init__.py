"""Models package - re-exports for convenience."""

from tripbook.models.activity import Activity, ActivityDraft
from tripbook.models.budget import BudgetBreakdown, BudgetStatus, BudgetStatusCode
from tripbook.models.common import (
    ActivityCategory,
    Currency,
    MealType,
    PackingCategory,
    Provenance,
    TransportType,
)
from tripbook.models.lookup import LocalizedList, LocalizedText, PlaceResult
from tripbook.models.trip import (
    DayPlan,
    PackingItem,
    PreDeparture,
    TransferDraft,
    TransportLeg,
    TripState,
    WeatherCard,
    WishlistItem,
)

__all__ = [
    # Common
    "Currency",
    "ActivityCategory",
    "MealType",
    "TransportType",
    "PackingCategory",
    "Provenance",
    # Activity
    "Activity",
    "ActivityDraft",
    # Trip
    "DayPlan",
    "TransportLeg",
    "TransferDraft",
    "PreDeparture",
    "PackingItem",
    "WishlistItem",
    "WeatherCard",
    "TripState",
    # Lookup
    "PlaceResult",
    "LocalizedText",
    "LocalizedList",
    # Budget
    "BudgetBreakdown",
    "BudgetStatus",
    "BudgetStatusCode",
]
