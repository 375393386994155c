"""Tests for the trip state container."""

import json
from datetime import date

import pytest

from tripbook.adapters.place import degraded_place
from tripbook.config import Settings
from tripbook.errors import (
    DateOutOfRangeError,
    EmptyNameError,
    InvalidDateError,
    MissingLabelError,
    MissingLocationError,
)
from tripbook.models.activity import ActivityDraft
from tripbook.models.common import ActivityCategory, Currency, PackingCategory
from tripbook.models.trip import DayPlan, TransferDraft, TransportLeg, TripState
from tripbook.state.container import TripStateContainer
from tripbook.state.storage import InMemoryStorage

KEY = "trip_state_v1"


def _saved(storage: InMemoryStorage) -> TripState:
    blob = storage.read(KEY)
    assert blob is not None
    return TripState.model_validate_json(blob)


# Load / save


def test_missing_state_generates_default(container: TripStateContainer) -> None:
    state = container.state

    assert len(state.itinerary) == 22
    assert state.exchange_rate == 0.15
    assert state.display_currency == Currency.TWD
    assert state.wishlist == []
    assert state.packing_list == []
    assert state.pre_departure.transfers == []


def test_load_does_not_write(storage: InMemoryStorage, settings: Settings) -> None:
    TripStateContainer(storage, settings).load()

    assert storage.read(KEY) is None


def test_save_then_load_is_idempotent(
    container: TripStateContainer, storage: InMemoryStorage, settings: Settings
) -> None:
    container.add_activity(
        "2025-12-15",
        ActivityDraft(location_name="Taipei 101", time="10:00", cost_twd=600),
    )
    container.set_exchange_rate(0.148)
    container.add_packing("Passport", PackingCategory.documents)
    container.save()

    reloaded = TripStateContainer(storage, settings)
    state = reloaded.load()

    assert state == container.state


def test_corrupt_json_repaired(storage: InMemoryStorage, settings: Settings) -> None:
    storage.write(KEY, "{not json")

    state = TripStateContainer(storage, settings).load()

    assert len(state.itinerary) == 22


def test_wrong_shape_repaired(storage: InMemoryStorage, settings: Settings) -> None:
    storage.write(KEY, json.dumps({"itinerary": "oops", "exchange_rate": "x"}))

    state = TripStateContainer(storage, settings).load()

    assert len(state.itinerary) == 22
    assert state.exchange_rate == 0.15


def test_empty_itinerary_regenerated_keeping_other_fields(
    storage: InMemoryStorage, settings: Settings
) -> None:
    storage.write(
        KEY,
        TripState(
            itinerary=[], exchange_rate=0.2, display_currency=Currency.MYR
        ).model_dump_json(),
    )

    state = TripStateContainer(storage, settings).load()

    assert len(state.itinerary) == 22
    assert state.exchange_rate == 0.2
    assert state.display_currency == Currency.MYR


def test_itinerary_sorted_and_deduplicated_on_load(
    storage: InMemoryStorage, settings: Settings
) -> None:
    blob = {
        "itinerary": [
            {"date": "2025-12-20", "day_number": 6},
            {"date": "2025-12-16", "day_number": 2, "daily_summary": "kept"},
            {"date": "2025-12-16", "day_number": 2, "daily_summary": "dropped"},
        ]
    }
    storage.write(KEY, json.dumps(blob))

    container = TripStateContainer(storage, settings)
    state = container.load()

    assert [p.date.isoformat() for p in state.itinerary] == ["2025-12-16", "2025-12-20"]
    assert state.itinerary[0].daily_summary == "kept"
    assert container.days.select_by_index(0).date == date(2025, 12, 16)


def test_trip_state_orders_days_on_construction() -> None:
    state = TripState(
        itinerary=[
            DayPlan(date=date(2026, 1, 2), day_number=19),
            DayPlan(date=date(2025, 12, 31), day_number=17),
        ]
    )

    assert [p.day_number for p in state.itinerary] == [17, 19]


def test_every_mutation_writes_through(
    container: TripStateContainer, storage: InMemoryStorage
) -> None:
    container.update_summary("2025-12-15", "Arrived")

    assert _saved(storage).itinerary[0].daily_summary == "Arrived"


# Itinerary


def test_jump_to_date_inside_range(container: TripStateContainer) -> None:
    assert container.jump_to_date("2025-12-20") == 5


def test_jump_to_date_out_of_range(
    container: TripStateContainer, storage: InMemoryStorage
) -> None:
    with pytest.raises(DateOutOfRangeError):
        container.jump_to_date(date(2026, 1, 6))

    assert len(container.state.itinerary) == 22
    assert storage.read(KEY) is None


def test_add_activity_unknown_day(container: TripStateContainer) -> None:
    assert container.add_activity("2027-01-01", ActivityDraft(location_name="X")) is None


def test_add_activity_rejects_blank_location(
    container: TripStateContainer, storage: InMemoryStorage
) -> None:
    with pytest.raises(MissingLocationError):
        container.add_activity("2025-12-15", ActivityDraft(location_name=" "))

    assert storage.read(KEY) is None


def test_update_and_remove_activity(container: TripStateContainer) -> None:
    a = container.add_activity("2025-12-15", ActivityDraft(location_name="A", time="10:00"))
    assert a is not None

    updated = container.update_activity(
        "2025-12-15",
        a.id,
        ActivityDraft(location_name="Lunch", category=ActivityCategory.food, cost_twd=250),
    )

    assert updated is not None
    assert updated.meal_cost_twd == 250
    assert updated.time == "10:00"
    assert container.update_activity("2025-12-15", "missing", ActivityDraft(location_name="B")) is None
    assert container.remove_activity("2025-12-15", "missing") is False
    assert container.remove_activity("2025-12-15", a.id) is True
    assert container.state.itinerary[0].activities == []


def test_malformed_date_text_rejected(
    container: TripStateContainer, storage: InMemoryStorage
) -> None:
    with pytest.raises(InvalidDateError):
        container.update_summary("2025-13-40", "nope")
    with pytest.raises(InvalidDateError):
        container.jump_to_date("someday")
    with pytest.raises(InvalidDateError):
        container.add_activity("12/16/2025", ActivityDraft(location_name="X"))

    assert storage.read(KEY) is None


# Money


def test_exchange_rate_non_numeric_keeps_previous(container: TripStateContainer) -> None:
    container.set_exchange_rate("0.16")
    container.set_exchange_rate("abc")
    container.set_exchange_rate(None)
    container.set_exchange_rate(float("nan"))

    assert container.state.exchange_rate == 0.16


def test_exchange_rate_zero_accepted(container: TripStateContainer) -> None:
    assert container.set_exchange_rate(0) == 0
    assert container.state.exchange_rate == 0
    assert container.budget().rate_valid is False


def test_display_currency(container: TripStateContainer, storage: InMemoryStorage) -> None:
    container.set_display_currency("MYR")

    assert container.state.display_currency == Currency.MYR
    assert _saved(storage).display_currency == Currency.MYR


def test_budget_limit_status(container: TripStateContainer) -> None:
    container.add_activity(
        "2025-12-15",
        ActivityDraft(location_name="Dinner", category=ActivityCategory.food, cost_twd=10000),
    )
    container.set_budget_limit("1000")

    status = container.budget_status()

    assert container.state.budget_limit_myr == 1000
    assert status.code.value == "OVER_LIMIT"


def test_days_until_departure(container: TripStateContainer) -> None:
    assert container.days_until_departure(date(2025, 12, 1)) == 14
    assert container.days_until_departure(date(2025, 12, 25)) == 0


# Pre-departure


def test_update_pre_departure_partial(container: TripStateContainer) -> None:
    container.update_pre_departure(flight_info="MH 366", flight_cost_myr="850")
    container.update_pre_departure(return_flight_cost_myr="oops", notes="Check in online")

    pre = container.state.pre_departure
    assert pre.flight_info == "MH 366"
    assert pre.flight_cost_myr == 850
    assert pre.return_flight_cost_myr == 0
    assert pre.notes == "Check in online"


def test_transfer_crud(container: TripStateContainer) -> None:
    leg = container.save_transfer(
        TransferDraft(label="Airport MRT", method="MRT", cost="160")
    )
    assert leg is not None
    assert leg.cost == 160

    replaced = container.save_transfer(
        TransferDraft(label="KL Grab", cost=45, currency=Currency.MYR), leg.id
    )

    assert replaced is not None
    assert replaced.id == leg.id
    assert container.state.pre_departure.transfers == [replaced]
    assert container.save_transfer(TransferDraft(label="X"), "missing") is None
    assert container.remove_transfer(leg.id) is True
    assert container.remove_transfer(leg.id) is False


def test_transfer_blank_date_is_none(container: TripStateContainer) -> None:
    leg = container.save_transfer(TransferDraft(label="Airport bus", cost=30, date=""))

    assert leg is not None
    assert leg.date is None
    assert TransportLeg(id="t1", label="Taxi", date="  ").date is None
    assert TransferDraft(label="Taxi", date="2025-12-15").date == date(2025, 12, 15)


def test_transfer_requires_label(container: TripStateContainer) -> None:
    with pytest.raises(MissingLabelError):
        container.save_transfer(TransferDraft(label="  ", cost=10))

    assert container.state.pre_departure.transfers == []


# Packing list


def test_packing_list(container: TripStateContainer) -> None:
    first = container.add_packing("Adapter", PackingCategory.electronics)
    second = container.add_packing(" Umbrella ")

    assert [i.name for i in container.state.packing_list] == ["Umbrella", first.name]
    assert second.category == PackingCategory.misc

    toggled = container.toggle_packed(first.id)
    assert toggled is not None and toggled.is_packed is True
    assert container.toggle_packed("missing") is None
    assert container.remove_packing(second.id) is True
    assert container.remove_packing(second.id) is False


def test_packing_blank_name_rejected(container: TripStateContainer) -> None:
    with pytest.raises(EmptyNameError):
        container.add_packing("")


# Wishlist


def test_wishlist_merge_by_id_keeps_concurrent_edits(container: TripStateContainer) -> None:
    pending = container.add_pending_wishlist("Raohe Night Market")
    other = container.add_pending_wishlist("Beitou")
    # Edits made while the lookup is in flight
    other.notes = "Hot springs"
    container.remove_wishlist(other.id)
    pending.notes = "Go hungry"

    place = degraded_place("Raohe Night Market").model_copy(
        update={"address": "Raohe St, Songshan", "degraded": False}
    )
    merged = container.merge_wishlist_lookup(pending.id, place)

    assert merged is not None
    assert merged.is_loading is False
    assert merged.address == "Raohe St, Songshan"
    assert merged.notes == "Go hungry"
    assert [i.id for i in container.state.wishlist] == [pending.id]


def test_wishlist_merge_after_removal_is_noop(container: TripStateContainer) -> None:
    pending = container.add_pending_wishlist("Elephant Mountain")
    container.remove_wishlist(pending.id)

    assert container.merge_wishlist_lookup(pending.id, degraded_place("Elephant Mountain")) is None
    assert container.state.wishlist == []


def test_wishlist_notes_from_description(container: TripStateContainer) -> None:
    pending = container.add_pending_wishlist("Din Tai Fung")
    place = degraded_place("Din Tai Fung")
    place.description.en = "Famous soup dumplings."
    place.degraded = False

    merged = container.merge_wishlist_lookup(pending.id, place)

    assert merged is not None
    assert merged.notes == "Famous soup dumplings."


def test_add_wishlist_prepends(container: TripStateContainer) -> None:
    container.add_wishlist(degraded_place("Jiufen"))
    container.add_wishlist(degraded_place("Shifen"))

    assert [i.name for i in container.state.wishlist] == ["Shifen", "Jiufen"]
    with pytest.raises(EmptyNameError):
        container.add_pending_wishlist("   ")
