"""Async lookup tasks that merge their results into the trip state.

A lookup may still be in flight while the user keeps editing. On completion
each task merges into the one entry it was started for, found by id, instead
of writing back a snapshot taken before the request.
"""

import logging
from collections.abc import Awaitable, Callable
from datetime import date

from tripbook.adapters.place import PlaceLookupClient
from tripbook.itinerary.date_range import leading_trip_dates
from tripbook.models.activity import ActivityDraft
from tripbook.models.trip import WeatherCard, WishlistItem
from tripbook.state.container import TripStateContainer

logger = logging.getLogger(__name__)

WeatherFetcher = Callable[[list[date]], Awaitable[list[WeatherCard]]]


async def lookup_wishlist_place(
    container: TripStateContainer,
    query: str,
    client: PlaceLookupClient,
) -> WishlistItem | None:
    """Add a pending wishlist entry for ``query`` and fill it in when the lookup returns.

    Returns:
        The merged entry, or None if it was removed before the lookup finished

    Raises:
        EmptyNameError: If the query is blank
    """
    pending = container.add_pending_wishlist(query)
    place = await client.search_place(pending.name)
    return container.merge_wishlist_lookup(pending.id, place)


async def lookup_activity_place(draft: ActivityDraft, client: PlaceLookupClient) -> ActivityDraft:
    """Return a copy of ``draft`` with location fields from a place lookup."""
    if not draft.location_name.strip():
        return draft
    place = await client.search_place(draft.location_name)
    return draft.model_copy(
        update={
            "location_name": place.name,
            "location_address": place.address,
            "google_maps_url": place.map_url,
        }
    )


async def refresh_weather(
    container: TripStateContainer,
    fetch: WeatherFetcher,
) -> list[WeatherCard]:
    """Fetch the forecast for the first trip days and cache it.

    An empty result means no forecast is available; the existing cache is kept.
    """
    settings = container.settings
    dates = leading_trip_dates(settings.trip_start, settings.trip_end, settings.forecast_days)
    cards = await fetch(dates)
    if cards:
        container.set_weather(cards)
    else:
        logger.warning("No forecast available for %s, keeping cached weather", dates)
    return container.state.weather_cache
