"""Activity ledger - per-day activity CRUD with cost normalization.

Every save resets the cost fields that do not belong to the activity's
category, and every mutation leaves the day's activities stably sorted by
time (ties keep insertion order).
"""

import uuid
from urllib.parse import quote

from tripbook.errors import MissingLocationError
from tripbook.models.activity import Activity, ActivityDraft
from tripbook.models.common import DEFAULT_ACTIVITY_TIME, ActivityCategory
from tripbook.models.trip import DayPlan

MAPS_SEARCH_URL = "https://www.google.com/maps/search/?api=1&query="

# Category -> the single primary cost field it populates
PRIMARY_COST_FIELD: dict[ActivityCategory, str] = {
    ActivityCategory.transport: "transport_cost_twd",
    ActivityCategory.food: "meal_cost_twd",
    ActivityCategory.sightseeing: "ticket_cost_twd",
    ActivityCategory.other: "ticket_cost_twd",
}

COST_FIELDS = ("transport_cost_twd", "meal_cost_twd", "ticket_cost_twd", "arrival_cost_twd")


def maps_search_url(query: str) -> str:
    """Google Maps search URL for a free-text query."""
    return MAPS_SEARCH_URL + quote(query, safe="!~*'()")


def new_id() -> str:
    """Opaque unique id for activities and list entries."""
    return uuid.uuid4().hex


def normalized_costs(draft: ActivityDraft) -> dict[str, float]:
    """Route the draft's single cost to the category's field; zero the rest."""
    costs = dict.fromkeys(COST_FIELDS, 0.0)
    costs[PRIMARY_COST_FIELD[draft.category]] = draft.cost_twd
    if draft.category == ActivityCategory.sightseeing:
        costs["arrival_cost_twd"] = draft.arrival_cost_twd
    return costs


def build_activity(
    draft: ActivityDraft,
    activity_id: str,
    *,
    time: str,
    map_query_suffix: str = "",
) -> Activity:
    """Build a normalized Activity from a draft.

    Raises:
        MissingLocationError: If the draft has no location name
    """
    location = draft.location_name.strip()
    if not location:
        raise MissingLocationError()

    maps_url = draft.google_maps_url
    if not maps_url:
        maps_url = maps_search_url(f"{location} {map_query_suffix}".strip())

    return Activity(
        id=activity_id,
        time=time,
        category=draft.category,
        location_name=location,
        description=draft.description,
        location_address=draft.location_address,
        google_maps_url=maps_url,
        transport_type=draft.transport_type,
        meal_type=draft.meal_type,
        arrival_transport=draft.arrival_transport,
        notes=draft.notes,
        **normalized_costs(draft),
    )


def sort_activities(activities: list[Activity]) -> list[Activity]:
    """Stable sort by HH:MM time."""
    return sorted(activities, key=lambda a: a.time)


def find_activity(day: DayPlan, activity_id: str) -> Activity | None:
    """Look up an activity by id."""
    for activity in day.activities:
        if activity.id == activity_id:
            return activity
    return None


def add_activity(
    day: DayPlan,
    draft: ActivityDraft,
    *,
    map_query_suffix: str = "",
    activity_id: str | None = None,
) -> Activity:
    """Create an activity on ``day`` and re-sort.

    Raises:
        MissingLocationError: If the draft has no location name (day untouched)
    """
    activity = build_activity(
        draft,
        activity_id or new_id(),
        time=draft.time or DEFAULT_ACTIVITY_TIME,
        map_query_suffix=map_query_suffix,
    )
    day.activities = sort_activities([*day.activities, activity])
    return activity


def update_activity(
    day: DayPlan,
    activity_id: str,
    draft: ActivityDraft,
    *,
    map_query_suffix: str = "",
) -> Activity | None:
    """Replace the activity with ``activity_id`` and re-sort.

    Returns:
        The saved activity, or None if no activity has that id

    Raises:
        MissingLocationError: If the draft has no location name (day untouched)
    """
    existing = find_activity(day, activity_id)
    if existing is None:
        return None

    updated = build_activity(
        draft,
        activity_id,
        time=draft.time or existing.time,
        map_query_suffix=map_query_suffix,
    )
    day.activities = sort_activities(
        [updated if a.id == activity_id else a for a in day.activities]
    )
    return updated


def remove_activity(day: DayPlan, activity_id: str) -> bool:
    """Remove the activity with ``activity_id``; False if absent."""
    remaining = [a for a in day.activities if a.id != activity_id]
    if len(remaining) == len(day.activities):
        return False
    day.activities = remaining
    return True
