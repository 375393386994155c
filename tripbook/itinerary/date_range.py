"""Trip date range helpers - pure functions, no I/O."""

from datetime import date, timedelta

from tripbook.errors import InvalidDateError
from tripbook.models.trip import DayPlan


def parse_day(value: date | str) -> date:
    """Accept a date or an ISO ``YYYY-MM-DD`` string.

    Raises:
        InvalidDateError: If the string is not a calendar date
    """
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError) as e:
        raise InvalidDateError(str(value)) from e


def day_number_for(day: date, start: date) -> int:
    """1-based day index of ``day`` counted from the trip start."""
    return (day - start).days + 1


def generate_initial_itinerary(start: date, end: date) -> list[DayPlan]:
    """Generate one empty DayPlan per calendar day in [start, end].

    Args:
        start: First trip day
        end: Last trip day (inclusive)

    Returns:
        DayPlans in date order, numbered 1..N

    Raises:
        ValueError: If start is after end
    """
    if start > end:
        raise ValueError(f"start {start} is after end {end}")

    plans: list[DayPlan] = []
    current = start
    while current <= end:
        plans.append(DayPlan(date=current, day_number=day_number_for(current, start)))
        current += timedelta(days=1)
    return plans


def days_until_departure(start: date, today: date) -> int:
    """Countdown shown before the trip; 0 once the trip has started."""
    return max(0, (start - today).days)


def leading_trip_dates(start: date, end: date, count: int) -> list[date]:
    """First ``count`` dates of the trip, clipped to the trip end."""
    dates = []
    for offset in range(max(count, 0)):
        current = start + timedelta(days=offset)
        if current > end:
            break
        dates.append(current)
    return dates
