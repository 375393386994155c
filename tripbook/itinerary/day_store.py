"""Day plan store - date-keyed, chronologically ordered day plans."""

import logging
from collections.abc import Iterator
from datetime import date

from tripbook.errors import DateOutOfRangeError
from tripbook.itinerary.date_range import day_number_for, parse_day
from tripbook.models.activity import Activity
from tripbook.models.common import ActivityCategory
from tripbook.models.trip import DayPlan

logger = logging.getLogger(__name__)


class DayPlanStore:
    """Ordered view over a trip's day plans.

    Wraps (and mutates in place) the list owned by TripState.itinerary. The
    list stays sorted ascending by date with unique dates.
    """

    def __init__(self, days: list[DayPlan], start: date, end: date) -> None:
        self._days = days
        self.start = start
        self.end = end

    def __len__(self) -> int:
        return len(self._days)

    def __iter__(self) -> Iterator[DayPlan]:
        return iter(self._days)

    @property
    def days(self) -> list[DayPlan]:
        return self._days

    def index_of(self, day: date | str) -> int | None:
        target = parse_day(day)
        for i, plan in enumerate(self._days):
            if plan.date == target:
                return i
        return None

    def select_by_date(self, day: date | str) -> DayPlan | None:
        """Day plan for ``day`` or None."""
        index = self.index_of(day)
        return self._days[index] if index is not None else None

    def select_by_index(self, index: int) -> DayPlan | None:
        """Day plan at ordinal ``index`` or None when out of bounds."""
        if 0 <= index < len(self._days):
            return self._days[index]
        return None

    def upsert_for_date(self, day: date | str) -> int:
        """Index of the plan for ``day``, creating it if needed.

        New plans get ``day_number`` from their offset to the trip start; other
        plans keep their numbers.

        Raises:
            DateOutOfRangeError: If no plan exists and ``day`` is outside the trip
        """
        target = parse_day(day)
        existing = self.index_of(target)
        if existing is not None:
            return existing

        if target < self.start or target > self.end:
            raise DateOutOfRangeError(target, self.start, self.end)

        plan = DayPlan(date=target, day_number=day_number_for(target, self.start))
        self._days.append(plan)
        self._days.sort(key=lambda d: d.date.isoformat())
        logger.info("Inserted day plan for %s (day %d)", target, plan.day_number)

        index = self.index_of(target)
        assert index is not None
        return index

    def update_summary(self, day: date | str, text: str) -> DayPlan | None:
        """Set the free-text reflection for ``day``; None if no such plan."""
        plan = self.select_by_date(day)
        if plan is None:
            return None
        plan.daily_summary = text
        return plan

    def sightseeing_log(self) -> list[tuple[date, list[Activity]]]:
        """Sightseeing activities grouped by day, skipping days without any."""
        log = []
        for plan in self._days:
            spots = [a for a in plan.activities if a.category == ActivityCategory.sightseeing]
            if spots:
                log.append((plan.date, spots))
        return log
