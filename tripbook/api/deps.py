"""FastAPI dependencies - the single container the routes operate on."""

from functools import lru_cache, partial

from tripbook.adapters.place import PlaceLookupClient, get_place_client
from tripbook.adapters.weather import fetch_weather_cards
from tripbook.config import get_settings
from tripbook.state.container import TripStateContainer
from tripbook.state.lookups import WeatherFetcher
from tripbook.state.storage import JsonFileStorage


@lru_cache
def get_container() -> TripStateContainer:
    """Load the on-device trip state once per process."""
    settings = get_settings()
    container = TripStateContainer(JsonFileStorage(settings.data_dir), settings)
    container.load()
    return container


@lru_cache
def get_lookup_client() -> PlaceLookupClient:
    return get_place_client(get_settings())


def get_weather_fetcher() -> WeatherFetcher:
    settings = get_settings()
    return partial(
        fetch_weather_cards,
        latitude=settings.location_lat,
        longitude=settings.location_lon,
        base_url=settings.weather_base_url,
        timeout_ms=settings.lookup_timeout_ms,
    )
