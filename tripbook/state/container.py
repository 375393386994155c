"""Trip state container - owns the TripState and its load/save lifecycle.

Every mutating method runs to completion (validate, mutate, re-sort) and then
writes the whole aggregate through to storage. Validation errors are raised
before anything changes; unknown ids return None/False and write nothing.
"""

import logging
from datetime import date

from pydantic import ValidationError

from tripbook.budget.aggregator import is_valid_rate, trip_budget_breakdown
from tripbook.budget.limits import check_budget_limit
from tripbook.config import Settings, get_settings
from tripbook.errors import EmptyNameError, MissingLabelError
from tripbook.itinerary import ledger
from tripbook.itinerary.date_range import days_until_departure, generate_initial_itinerary
from tripbook.itinerary.day_store import DayPlanStore
from tripbook.models.activity import Activity, ActivityDraft
from tripbook.models.budget import BudgetBreakdown, BudgetStatus
from tripbook.models.common import Currency, PackingCategory, coerce_amount
from tripbook.models.lookup import PlaceResult
from tripbook.models.trip import (
    DayPlan,
    PackingItem,
    TransferDraft,
    TransportLeg,
    TripState,
    WeatherCard,
    WishlistItem,
)
from tripbook.state.storage import StateStorage

logger = logging.getLogger(__name__)


class TripStateContainer:
    """Single owner of the trip state.

    Call ``load()`` once before use; until then the container holds a freshly
    generated default state.
    """

    def __init__(self, storage: StateStorage, settings: Settings | None = None) -> None:
        self._storage = storage
        self._settings = settings or get_settings()
        self._state = self.default_state()

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def state(self) -> TripState:
        return self._state

    @property
    def days(self) -> DayPlanStore:
        return DayPlanStore(
            self._state.itinerary, self._settings.trip_start, self._settings.trip_end
        )

    # Lifecycle

    def default_state(self) -> TripState:
        """Fresh state: full date range, empty lists, default rate, TWD display."""
        return TripState(
            itinerary=self._generate_itinerary(),
            exchange_rate=self._settings.default_exchange_rate,
            display_currency=Currency.TWD,
            budget_limit_myr=self._settings.default_budget_limit_myr,
        )

    def _generate_itinerary(self) -> list[DayPlan]:
        return generate_initial_itinerary(self._settings.trip_start, self._settings.trip_end)

    def load(self) -> TripState:
        """Read the persisted state, repairing it when missing or corrupt.

        Returns:
            The loaded (or regenerated) state, now owned by the container
        """
        key = self._settings.storage_key
        blob = self._storage.read(key)

        if blob is None:
            logger.info("No saved trip state under %r, starting fresh", key)
            state = self.default_state()
        else:
            try:
                state = TripState.model_validate_json(blob)
            except ValidationError as e:
                logger.warning(
                    "Saved trip state under %r is invalid (%d errors), starting fresh",
                    key,
                    e.error_count(),
                )
                state = self.default_state()

        if not state.itinerary:
            logger.warning("Saved trip state has no day plans, regenerating itinerary")
            state.itinerary = self._generate_itinerary()

        self._state = state
        return state

    def save(self, state: TripState | None = None) -> None:
        """Serialize the whole aggregate to storage."""
        if state is not None:
            self._state = state
        self._storage.write(self._settings.storage_key, self._state.model_dump_json())

    def _commit(self, command: str) -> None:
        self.save()
        logger.debug("Saved trip state after %s", command)

    # Itinerary

    def jump_to_date(self, day: date | str) -> int:
        """Select a day by date, creating its plan if needed.

        Raises:
            DateOutOfRangeError: For a missing day outside the trip range
        """
        store = self.days
        before = len(store)
        index = store.upsert_for_date(day)
        if len(store) != before:
            self._commit("jump_to_date")
        return index

    def update_summary(self, day: date | str, text: str) -> DayPlan | None:
        plan = self.days.update_summary(day, text)
        if plan is not None:
            self._commit("update_summary")
        return plan

    def add_activity(self, day: date | str, draft: ActivityDraft) -> Activity | None:
        """Add an activity to ``day``; None if the day has no plan.

        Raises:
            MissingLocationError: If the draft has no location name
        """
        plan = self.days.select_by_date(day)
        if plan is None:
            return None
        activity = ledger.add_activity(
            plan, draft, map_query_suffix=self._settings.map_query_suffix
        )
        self._commit("add_activity")
        return activity

    def update_activity(
        self, day: date | str, activity_id: str, draft: ActivityDraft
    ) -> Activity | None:
        plan = self.days.select_by_date(day)
        if plan is None:
            return None
        activity = ledger.update_activity(
            plan, activity_id, draft, map_query_suffix=self._settings.map_query_suffix
        )
        if activity is not None:
            self._commit("update_activity")
        return activity

    def remove_activity(self, day: date | str, activity_id: str) -> bool:
        plan = self.days.select_by_date(day)
        if plan is None or not ledger.remove_activity(plan, activity_id):
            return False
        self._commit("remove_activity")
        return True

    # Money

    def set_exchange_rate(self, raw: object) -> float:
        """Set the rate from user input; non-numeric input keeps the prior value.

        Zero and negative rates are accepted as entered.
        """
        rate = coerce_amount(raw, fallback=self._state.exchange_rate)
        if not is_valid_rate(rate):
            logger.warning("Exchange rate %s is not positive, MYR amounts cannot be shown", rate)
        self._state.exchange_rate = rate
        self._commit("set_exchange_rate")
        return rate

    def set_display_currency(self, currency: Currency | str) -> Currency:
        self._state.display_currency = Currency(currency)
        self._commit("set_display_currency")
        return self._state.display_currency

    def set_budget_limit(self, raw: object) -> float:
        limit = coerce_amount(raw, fallback=self._state.budget_limit_myr)
        self._state.budget_limit_myr = limit
        self._commit("set_budget_limit")
        return limit

    def budget(self) -> BudgetBreakdown:
        return trip_budget_breakdown(self._state)

    def budget_status(self) -> BudgetStatus:
        return check_budget_limit(
            self.budget(), self._state.budget_limit_myr, self._state.exchange_rate
        )

    def days_until_departure(self, today: date | None = None) -> int:
        return days_until_departure(self._settings.trip_start, today or date.today())

    # Pre-departure logistics

    def update_pre_departure(
        self,
        *,
        flight_info: str | None = None,
        flight_cost_myr: object = None,
        return_flight_info: str | None = None,
        return_flight_cost_myr: object = None,
        notes: str | None = None,
    ) -> None:
        """Partially update flight details. None leaves a field unchanged."""
        pre = self._state.pre_departure
        if flight_info is not None:
            pre.flight_info = flight_info
        if flight_cost_myr is not None:
            pre.flight_cost_myr = coerce_amount(flight_cost_myr, fallback=pre.flight_cost_myr)
        if return_flight_info is not None:
            pre.return_flight_info = return_flight_info
        if return_flight_cost_myr is not None:
            pre.return_flight_cost_myr = coerce_amount(
                return_flight_cost_myr, fallback=pre.return_flight_cost_myr
            )
        if notes is not None:
            pre.notes = notes
        self._commit("update_pre_departure")

    def save_transfer(
        self, draft: TransferDraft, transfer_id: str | None = None
    ) -> TransportLeg | None:
        """Create a transfer, or replace the one with ``transfer_id``.

        Raises:
            MissingLabelError: If the draft has no label
        """
        if not draft.label.strip():
            raise MissingLabelError()

        transfers = self._state.pre_departure.transfers
        if transfer_id is None:
            leg = TransportLeg(id=ledger.new_id(), **draft.model_dump())
            transfers.append(leg)
        else:
            index = next((i for i, t in enumerate(transfers) if t.id == transfer_id), None)
            if index is None:
                return None
            leg = TransportLeg(id=transfer_id, **draft.model_dump())
            transfers[index] = leg

        self._commit("save_transfer")
        return leg

    def remove_transfer(self, transfer_id: str) -> bool:
        pre = self._state.pre_departure
        remaining = [t for t in pre.transfers if t.id != transfer_id]
        if len(remaining) == len(pre.transfers):
            return False
        pre.transfers = remaining
        self._commit("remove_transfer")
        return True

    # Packing list

    def add_packing(
        self, name: str, category: PackingCategory = PackingCategory.misc
    ) -> PackingItem:
        if not name.strip():
            raise EmptyNameError("packing item")
        item = PackingItem(id=ledger.new_id(), name=name.strip(), category=category)
        self._state.packing_list.insert(0, item)
        self._commit("add_packing")
        return item

    def toggle_packed(self, item_id: str) -> PackingItem | None:
        for item in self._state.packing_list:
            if item.id == item_id:
                item.is_packed = not item.is_packed
                self._commit("toggle_packed")
                return item
        return None

    def remove_packing(self, item_id: str) -> bool:
        items = self._state.packing_list
        remaining = [i for i in items if i.id != item_id]
        if len(remaining) == len(items):
            return False
        self._state.packing_list = remaining
        self._commit("remove_packing")
        return True

    # Wishlist

    def add_wishlist(self, place: PlaceResult) -> WishlistItem:
        """Add a looked-up place to the top of the wishlist."""
        if not place.name.strip():
            raise EmptyNameError("wishlist entry")
        item = WishlistItem(
            id=ledger.new_id(),
            name=place.name,
            address=place.address,
            map_url=place.map_url,
        )
        self._state.wishlist.insert(0, item)
        self._commit("add_wishlist")
        return item

    def add_pending_wishlist(self, query: str) -> WishlistItem:
        """Add a placeholder entry while its lookup is in flight."""
        if not query.strip():
            raise EmptyNameError("wishlist entry")
        item = WishlistItem(id=ledger.new_id(), name=query.strip(), is_loading=True)
        self._state.wishlist.insert(0, item)
        self._commit("add_pending_wishlist")
        return item

    def merge_wishlist_lookup(self, item_id: str, place: PlaceResult) -> WishlistItem | None:
        """Fill in lookup results on one entry, found by id.

        Only the looked-up fields are touched, so edits made while the lookup
        was in flight survive. None if the entry was removed meanwhile.
        """
        for item in self._state.wishlist:
            if item.id == item_id:
                item.name = place.name or item.name
                item.address = place.address
                item.map_url = place.map_url
                if item.notes is None and not place.degraded and place.description.en:
                    item.notes = place.description.en
                item.is_loading = False
                self._commit("merge_wishlist_lookup")
                return item
        logger.info("Wishlist entry %s gone before its lookup finished", item_id)
        return None

    def remove_wishlist(self, item_id: str) -> bool:
        items = self._state.wishlist
        remaining = [i for i in items if i.id != item_id]
        if len(remaining) == len(items):
            return False
        self._state.wishlist = remaining
        self._commit("remove_wishlist")
        return True

    # Weather

    def set_weather(self, cards: list[WeatherCard]) -> None:
        self._state.weather_cache = list(cards)
        self._commit("set_weather")
