"""Activity models - one planned event within a day."""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from tripbook.models.common import (
    TIME_PATTERN,
    ActivityCategory,
    MealType,
    TransportType,
    blank_to_none,
    coerce_amount,
)


class Activity(BaseModel):
    """Single activity in a day plan.

    Exactly one of ``transport_cost_twd``, ``meal_cost_twd`` and
    ``ticket_cost_twd`` is active, selected by ``category``. The ledger zeroes
    the others on every save. ``arrival_cost_twd`` only applies to Sightseeing.
    """

    id: str = Field(..., min_length=1, frozen=True)
    time: str = Field(..., pattern=TIME_PATTERN)
    category: ActivityCategory
    location_name: str = Field(..., min_length=1)
    description: str = ""
    location_address: str | None = None
    google_maps_url: str | None = None

    # Transport category
    transport_type: TransportType | None = None
    transport_cost_twd: float = 0.0

    # Food category
    meal_type: MealType | None = None
    meal_cost_twd: float = 0.0

    # Sightseeing: how to get there
    arrival_transport: TransportType | None = None
    arrival_cost_twd: float = 0.0

    # Sightseeing / Other: entrance fees, shopping, etc.
    ticket_cost_twd: float = 0.0

    notes: str | None = None


class ActivityDraft(BaseModel):
    """Form-level candidate for creating or updating an activity.

    ``cost_twd`` is the single cost the user entered; the ledger routes it to
    the category's own cost field. Non-numeric cost input becomes 0.
    """

    time: str | None = Field(default=None, pattern=TIME_PATTERN)
    category: ActivityCategory = ActivityCategory.sightseeing
    location_name: str = ""
    description: str = ""
    location_address: str | None = None
    google_maps_url: str | None = None
    transport_type: TransportType | None = None
    meal_type: MealType | None = None
    arrival_transport: TransportType | None = None
    notes: str | None = None
    cost_twd: float = 0.0
    arrival_cost_twd: float = 0.0

    @field_validator("time", mode="before")
    @classmethod
    def blank_time(cls, v: Any) -> Any:
        """A blank time means "use the default"."""
        return blank_to_none(v)

    @field_validator("cost_twd", "arrival_cost_twd", mode="before")
    @classmethod
    def coerce_cost(cls, v: Any) -> float:
        """Coerce free-text cost input."""
        return coerce_amount(v)

    @classmethod
    def from_activity(cls, activity: Activity) -> "ActivityDraft":
        """Build a draft pre-filled from a saved activity (edit form)."""
        if activity.category == ActivityCategory.transport:
            main_cost = activity.transport_cost_twd
        elif activity.category == ActivityCategory.food:
            main_cost = activity.meal_cost_twd
        else:
            main_cost = activity.ticket_cost_twd

        return cls(
            time=activity.time,
            category=activity.category,
            location_name=activity.location_name,
            description=activity.description,
            location_address=activity.location_address,
            google_maps_url=activity.google_maps_url,
            transport_type=activity.transport_type,
            meal_type=activity.meal_type,
            arrival_transport=activity.arrival_transport,
            notes=activity.notes,
            cost_twd=main_cost,
            arrival_cost_twd=activity.arrival_cost_twd,
        )
