"""Cost aggregation - derived totals recomputed from canonical TWD values.

Nothing here mutates state. Totals are always rebuilt from the stored
amounts, so changing the exchange rate changes every MYR figure at once.
"""

import math
from numbers import Real

from tripbook.models.activity import Activity
from tripbook.models.budget import BudgetBreakdown
from tripbook.models.common import Currency
from tripbook.models.trip import DayPlan, TripState


def is_valid_rate(rate: object) -> bool:
    """True for a finite, strictly positive exchange rate."""
    if isinstance(rate, bool) or not isinstance(rate, Real):
        return False
    return math.isfinite(rate) and rate > 0


def myr_to_twd(amount_myr: float, rate: float) -> float | None:
    """Convert MYR to TWD; None when the rate cannot be used."""
    if not is_valid_rate(rate):
        return None
    return amount_myr / rate


def activity_cost(activity: Activity) -> float:
    """Sum of all four cost fields, whatever the category."""
    return (
        activity.transport_cost_twd
        + activity.meal_cost_twd
        + activity.ticket_cost_twd
        + activity.arrival_cost_twd
    )


def day_cost(day: DayPlan) -> float:
    """Total TWD cost of a day's activities."""
    return sum((activity_cost(a) for a in day.activities), 0.0)


def trip_budget_breakdown(state: TripState) -> BudgetBreakdown:
    """Whole-trip totals by category, in TWD.

    Arrival costs on Sightseeing activities count as transport. MYR amounts
    contribute 0 while the exchange rate is invalid, and the breakdown is
    flagged with ``rate_valid=False``.
    """
    rate = state.exchange_rate
    rate_valid = is_valid_rate(rate)
    pre = state.pre_departure

    flight_myr = pre.flight_cost_myr + pre.return_flight_cost_myr
    flights = myr_to_twd(flight_myr, rate) or 0.0

    transfers = 0.0
    for leg in pre.transfers:
        if leg.currency == Currency.MYR:
            transfers += myr_to_twd(leg.cost, rate) or 0.0
        else:
            transfers += leg.cost

    transport = food = sightseeing = 0.0
    for day in state.itinerary:
        for act in day.activities:
            transport += act.transport_cost_twd + act.arrival_cost_twd
            food += act.meal_cost_twd
            sightseeing += act.ticket_cost_twd

    total = flights + transfers + transport + food + sightseeing
    return BudgetBreakdown(
        flights=flights,
        transfers=transfers,
        transport=transport,
        food=food,
        sightseeing=sightseeing,
        total=total,
        rate_valid=rate_valid,
    )


def format_for_display(amount_twd: float, currency: Currency, rate: float) -> float | None:
    """Amount in the display currency; None for MYR with an invalid rate."""
    if currency == Currency.TWD:
        return amount_twd
    if not is_valid_rate(rate):
        return None
    return amount_twd * rate


def format_money(amount_twd: float, currency: Currency, rate: float) -> str:
    """Human-readable amount, e.g. ``NT$ 1,234`` or ``RM 185.10``."""
    value = format_for_display(amount_twd, currency, rate)
    if currency == Currency.TWD:
        return f"NT$ {amount_twd:,.0f}"
    if value is None:
        return "RM --"
    return f"RM {value:,.2f}"
