"""Trip aggregate models - day plans, logistics, lists and the root state."""

import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from tripbook.models.activity import Activity
from tripbook.models.common import Currency, PackingCategory, blank_to_none, coerce_amount


class DayPlan(BaseModel):
    """Plan for a single calendar day.

    ``day_number`` is assigned once at creation (offset from the trip start
    plus one) and is not renumbered when other days are inserted.
    """

    date: datetime.date
    day_number: int
    activities: list[Activity] = Field(default_factory=list)
    daily_summary: str = ""


class TransportLeg(BaseModel):
    """Pre-departure logistics line item (e.g. airport transfer)."""

    id: str
    label: str
    method: str = ""
    cost: float = 0.0
    currency: Currency = Currency.TWD
    date: datetime.date | None = None

    @field_validator("date", mode="before")
    @classmethod
    def blank_date(cls, v: Any) -> Any:
        return blank_to_none(v)


class PreDeparture(BaseModel):
    """Flights and transfers booked before the trip."""

    flight_info: str = ""
    flight_cost_myr: float = 0.0
    return_flight_info: str = ""
    return_flight_cost_myr: float = 0.0
    transfers: list[TransportLeg] = Field(default_factory=list)
    notes: str = ""


class PackingItem(BaseModel):
    """Packing checklist entry."""

    id: str
    name: str
    category: PackingCategory = PackingCategory.misc
    is_packed: bool = False


class WishlistItem(BaseModel):
    """Candidate place to visit, independent of the itinerary."""

    id: str
    name: str
    notes: str | None = None
    map_url: str | None = None
    address: str | None = None
    is_loading: bool = False


class WeatherCard(BaseModel):
    """Cached per-day forecast with clothing advice."""

    date: str
    day_name: str
    condition: str
    temp: str
    rain_chance: str
    advice: str


class TripState(BaseModel):
    """Aggregate root persisted as one JSON document.

    Activity and TWD transfer amounts are canonical TWD. Flight costs and
    MYR-tagged transfers are stored in MYR and converted on demand.
    """

    itinerary: list[DayPlan] = Field(default_factory=list)
    wishlist: list[WishlistItem] = Field(default_factory=list)
    packing_list: list[PackingItem] = Field(default_factory=list)
    pre_departure: PreDeparture = Field(default_factory=PreDeparture)
    exchange_rate: float = 0.15  # 1 TWD = X MYR
    display_currency: Currency = Currency.TWD
    budget_limit_myr: float = 5000.0
    weather_cache: list[WeatherCard] = Field(default_factory=list)

    @model_validator(mode="after")
    def normalize_itinerary(self) -> "TripState":
        """Keep day plans ordered by date with one plan per date.

        The first plan stored for a date wins; later duplicates are dropped.
        """
        seen: set[datetime.date] = set()
        days: list[DayPlan] = []
        for plan in self.itinerary:
            if plan.date not in seen:
                seen.add(plan.date)
                days.append(plan)
        days.sort(key=lambda d: d.date.isoformat())
        self.itinerary = days
        return self


class TransferDraft(BaseModel):
    """Form-level candidate for a transfer; non-numeric cost becomes 0."""

    label: str = ""
    method: str = ""
    cost: float = 0.0
    currency: Currency = Currency.TWD
    date: datetime.date | None = None

    @field_validator("cost", mode="before")
    @classmethod
    def coerce_cost(cls, v: Any) -> float:
        return coerce_amount(v)

    @field_validator("date", mode="before")
    @classmethod
    def blank_date(cls, v: Any) -> Any:
        return blank_to_none(v)
