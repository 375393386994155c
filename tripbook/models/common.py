"""Common types and enums shared across all models."""

import math
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel

# Wall-clock time of day, e.g. "09:30"
TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"
DEFAULT_ACTIVITY_TIME = "09:00"


class Currency(str, Enum):
    """Currencies the trip is budgeted in."""

    TWD = "TWD"
    MYR = "MYR"


class ActivityCategory(str, Enum):
    """Activity category; selects which cost field is active."""

    sightseeing = "Sightseeing"
    food = "Food"
    transport = "Transport"
    other = "Other"


class MealType(str, Enum):
    """Meal type for Food activities."""

    breakfast = "Breakfast"
    brunch = "Brunch"
    lunch = "Lunch"
    high_tea = "High Tea"
    dinner = "Dinner"
    supper = "Supper"
    snack = "Snack"
    street_food = "Street Food"
    drink = "Drink"
    other = "Other"


class TransportType(str, Enum):
    """Local transport method."""

    mrt = "MRT"
    bus = "Bus"
    taxi_uber = "Taxi/Uber"
    hsr = "HSR"
    train = "Train"
    walking = "Walking"
    youbike = "YouBike"
    charter = "Charter"
    ferry = "Ferry"
    shuttle = "Shuttle"
    other = "Other"


class PackingCategory(str, Enum):
    """Packing list grouping."""

    clothing = "Clothing"
    electronics = "Electronics"
    toiletries = "Toiletries"
    documents = "Documents"
    misc = "Misc"


class Provenance(BaseModel):
    """Provenance metadata for lookup results."""

    source: str  # e.g. "tool.place.openai", "tool.place.fallback"
    ref_id: str | None = None
    source_url: str | None = None
    fetched_at: datetime
    cache_hit: bool | None = None


def blank_to_none(value: Any) -> Any:
    """Treat an empty or whitespace-only form value as missing."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def coerce_amount(value: Any, fallback: float = 0.0) -> float:
    """Coerce user-entered numeric input to a finite float.

    Anything that does not parse as a finite number yields ``fallback``.
    """
    if value is None or isinstance(value, bool):
        return fallback
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(amount):
        return fallback
    return amount
