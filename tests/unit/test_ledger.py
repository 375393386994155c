"""Tests for the activity ledger."""

from datetime import date

import pytest

from tripbook.errors import MissingLocationError
from tripbook.itinerary import ledger
from tripbook.models.activity import ActivityDraft
from tripbook.models.common import ActivityCategory, MealType
from tripbook.models.trip import DayPlan


@pytest.fixture
def day() -> DayPlan:
    return DayPlan(date=date(2025, 12, 15), day_number=1)


def _draft(name: str, time: str | None = None, **kwargs) -> ActivityDraft:
    return ActivityDraft(location_name=name, time=time, **kwargs)


def test_activities_sorted_by_time(day: DayPlan) -> None:
    ledger.add_activity(day, _draft("Dinner", "19:00"))
    ledger.add_activity(day, _draft("Breakfast", "08:00"))
    ledger.add_activity(day, _draft("Museum", "13:30"))

    assert [a.time for a in day.activities] == ["08:00", "13:30", "19:00"]


def test_time_ties_keep_insertion_order(day: DayPlan) -> None:
    ledger.add_activity(day, _draft("First", "10:00"))
    ledger.add_activity(day, _draft("Early", "09:00"))
    ledger.add_activity(day, _draft("Second", "10:00"))

    assert [a.location_name for a in day.activities] == ["Early", "First", "Second"]


def test_missing_time_defaults_to_nine(day: DayPlan) -> None:
    activity = ledger.add_activity(day, _draft("Longshan Temple"))

    assert activity.time == "09:00"


def test_blank_time_defaults_to_nine(day: DayPlan) -> None:
    activity = ledger.add_activity(day, _draft("Taipei 101", "   "))

    assert activity.time == "09:00"


def test_blank_time_on_update_keeps_existing(day: DayPlan) -> None:
    a = ledger.add_activity(day, _draft("A", "14:45"))

    updated = ledger.update_activity(day, a.id, _draft("A", ""))

    assert updated is not None
    assert updated.time == "14:45"


def test_update_resorts(day: DayPlan) -> None:
    a = ledger.add_activity(day, _draft("A", "08:00"))
    ledger.add_activity(day, _draft("B", "12:00"))

    ledger.update_activity(day, a.id, _draft("A", "15:00"))

    assert [x.location_name for x in day.activities] == ["B", "A"]


def test_update_keeps_time_when_not_given(day: DayPlan) -> None:
    a = ledger.add_activity(day, _draft("A", "11:15"))

    updated = ledger.update_activity(day, a.id, _draft("A renamed"))

    assert updated is not None
    assert updated.time == "11:15"
    assert updated.id == a.id


def test_cost_routed_to_category_field(day: DayPlan) -> None:
    food = ledger.add_activity(
        day,
        _draft("Din Tai Fung", "12:00", category=ActivityCategory.food, cost_twd=500,
               meal_type=MealType.lunch),
    )

    assert food.meal_cost_twd == 500
    assert food.transport_cost_twd == 0
    assert food.ticket_cost_twd == 0
    assert food.arrival_cost_twd == 0


def test_category_change_zeroes_previous_cost(day: DayPlan) -> None:
    """Switching Food -> Transport leaves only the transport cost."""
    a = ledger.add_activity(
        day, _draft("Lunch", "12:00", category=ActivityCategory.food, cost_twd=500)
    )

    updated = ledger.update_activity(
        day, a.id, _draft("Taxi", "12:00", category=ActivityCategory.transport, cost_twd=120)
    )

    assert updated is not None
    assert updated.transport_cost_twd == 120
    assert updated.meal_cost_twd == 0
    assert updated.ticket_cost_twd == 0


def test_arrival_cost_only_for_sightseeing(day: DayPlan) -> None:
    sight = ledger.add_activity(
        day,
        _draft("Taipei 101", "10:00", category=ActivityCategory.sightseeing,
               cost_twd=600, arrival_cost_twd=30),
    )
    other = ledger.add_activity(
        day,
        _draft("Night market", "20:00", category=ActivityCategory.food,
               cost_twd=200, arrival_cost_twd=30),
    )

    assert sight.ticket_cost_twd == 600
    assert sight.arrival_cost_twd == 30
    assert other.arrival_cost_twd == 0


def test_other_category_uses_ticket_cost(day: DayPlan) -> None:
    a = ledger.add_activity(
        day, _draft("Shopping", "16:00", category=ActivityCategory.other, cost_twd=900)
    )

    assert a.ticket_cost_twd == 900
    assert a.arrival_cost_twd == 0


def test_blank_location_rejected_without_change(day: DayPlan) -> None:
    ledger.add_activity(day, _draft("Existing", "09:00"))

    with pytest.raises(MissingLocationError):
        ledger.add_activity(day, _draft("   ", "10:00"))

    assert len(day.activities) == 1


def test_blank_location_on_update_rejected(day: DayPlan) -> None:
    a = ledger.add_activity(day, _draft("Existing", "09:00"))

    with pytest.raises(MissingLocationError):
        ledger.update_activity(day, a.id, _draft(""))

    assert day.activities[0].location_name == "Existing"


def test_maps_url_synthesized_from_location() -> None:
    day = DayPlan(date=date(2025, 12, 15), day_number=1)

    a = ledger.add_activity(day, _draft("Taipei 101", "10:00"), map_query_suffix="Taiwan")

    assert a.google_maps_url == (
        "https://www.google.com/maps/search/?api=1&query=Taipei%20101%20Taiwan"
    )


def test_explicit_maps_url_kept(day: DayPlan) -> None:
    url = "https://www.google.com/maps/place/Taipei+101"

    a = ledger.add_activity(day, _draft("Taipei 101", "10:00", google_maps_url=url))

    assert a.google_maps_url == url


def test_update_unknown_id_is_noop(day: DayPlan) -> None:
    ledger.add_activity(day, _draft("A", "08:00"))
    before = [a.model_copy() for a in day.activities]

    assert ledger.update_activity(day, "missing", _draft("B", "09:00")) is None
    assert day.activities == before


def test_remove_activity(day: DayPlan) -> None:
    a = ledger.add_activity(day, _draft("A", "08:00"))

    assert ledger.remove_activity(day, "missing") is False
    assert ledger.remove_activity(day, a.id) is True
    assert day.activities == []


def test_draft_cost_coercion() -> None:
    assert ActivityDraft(cost_twd="abc").cost_twd == 0.0
    assert ActivityDraft(cost_twd="12.5").cost_twd == 12.5
    assert ActivityDraft(cost_twd=None).cost_twd == 0.0
    assert ActivityDraft(arrival_cost_twd="nan").arrival_cost_twd == 0.0


def test_draft_from_activity_prefills_primary_cost(day: DayPlan) -> None:
    a = ledger.add_activity(
        day, _draft("Lunch", "12:00", category=ActivityCategory.food, cost_twd=350)
    )

    draft = ActivityDraft.from_activity(a)

    assert draft.cost_twd == 350
    assert draft.category == ActivityCategory.food
    assert draft.time == "12:00"
