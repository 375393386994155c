"""Weather adapter using Open-Meteo API (keyless, free tier).

Produces the cached weather cards shown before the trip. Failures return an
empty list, which callers treat as "no forecast available".
"""

import logging
import time
from datetime import date

import httpx

from tripbook.models.trip import WeatherCard
from tripbook.utils.logging import StructuredLookupLogger

logger = logging.getLogger(__name__)
lookup_logger = StructuredLookupLogger()

# WMO weather interpretation codes, grouped
WMO_CONDITIONS: dict[int, str] = {
    0: "Clear",
    1: "Mostly Clear",
    2: "Partly Cloudy",
    3: "Cloudy",
    45: "Fog",
    48: "Fog",
    51: "Drizzle",
    53: "Drizzle",
    55: "Drizzle",
    56: "Freezing Drizzle",
    57: "Freezing Drizzle",
    61: "Light Rain",
    63: "Rainy",
    65: "Heavy Rain",
    66: "Freezing Rain",
    67: "Freezing Rain",
    71: "Light Snow",
    73: "Snow",
    75: "Heavy Snow",
    77: "Snow Grains",
    80: "Showers",
    81: "Showers",
    82: "Heavy Showers",
    85: "Snow Showers",
    86: "Snow Showers",
    95: "Thunderstorm",
    96: "Thunderstorm",
    99: "Thunderstorm",
}


def condition_for_code(code: int | None) -> str:
    if code is None:
        return "Unknown"
    return WMO_CONDITIONS.get(int(code), "Unknown")


def clothing_advice(temp_high: float | None, temp_low: float | None, rain_pct: int | None) -> str:
    """Short clothing advice from the day's forecast."""
    tips: list[str] = []
    if rain_pct is not None and rain_pct >= 50:
        tips.append("Bring an umbrella")
    if temp_high is not None and temp_high < 18:
        tips.append("Pack a warm jacket")
    elif temp_low is not None and temp_low < 15:
        tips.append("Layer up for cool evenings")
    elif temp_high is not None and temp_high >= 28:
        tips.append("Light clothing and sunscreen")
    if not tips:
        tips.append("Comfortable layers")
    return "; ".join(tips)


def _format_temp(temp_low: float | None, temp_high: float | None) -> str:
    if temp_low is None or temp_high is None:
        return "--"
    return f"{round(temp_low)}-{round(temp_high)}°C"


async def fetch_weather_cards(
    dates: list[date],
    latitude: float,
    longitude: float,
    base_url: str = "https://api.open-meteo.com/v1/forecast",
    timezone: str = "Asia/Taipei",
    client: httpx.AsyncClient | None = None,
    timeout_ms: int = 8000,
) -> list[WeatherCard]:
    """Fetch a forecast card per requested date.

    Args:
        dates: Calendar dates to forecast
        latitude: Location latitude
        longitude: Location longitude
        base_url: Open-Meteo API base URL
        timezone: Timezone the daily buckets are computed in
        client: Optional httpx client (for testing with mocks)
        timeout_ms: Request timeout when no client is given

    Returns:
        WeatherCard list in request order; [] on any failure
    """
    if not dates:
        return []

    # Docs: https://open-meteo.com/en/docs
    params: dict[str, str | float] = {
        "latitude": latitude,
        "longitude": longitude,
        "start_date": min(dates).isoformat(),
        "end_date": max(dates).isoformat(),
        "daily": (
            "weather_code,temperature_2m_max,temperature_2m_min,"
            "precipitation_probability_max"
        ),
        "timezone": timezone,
    }

    close_client = False
    if client is None:
        client = httpx.AsyncClient(timeout=timeout_ms / 1000)
        close_client = True

    started = time.perf_counter()
    try:
        response = await client.get(base_url, params=params)
        response.raise_for_status()
        daily = response.json()["daily"]

        by_date = {}
        for i, day_str in enumerate(daily["time"]):
            by_date[date.fromisoformat(day_str)] = i

        cards: list[WeatherCard] = []
        for d in dates:
            i = by_date.get(d)
            if i is None:
                continue
            temp_high = daily["temperature_2m_max"][i]
            temp_low = daily["temperature_2m_min"][i]
            rain = daily["precipitation_probability_max"][i]
            rain_pct = int(rain) if rain is not None else None

            cards.append(
                WeatherCard(
                    date=f"{d:%b} {d.day}",
                    day_name=f"{d:%A}",
                    condition=condition_for_code(daily["weather_code"][i]),
                    temp=_format_temp(temp_low, temp_high),
                    rain_chance=f"{rain_pct}%" if rain_pct is not None else "--",
                    advice=clothing_advice(temp_high, temp_low, rain_pct),
                )
            )
    except (httpx.HTTPError, KeyError, IndexError, TypeError, ValueError) as e:
        latency_ms = (time.perf_counter() - started) * 1000
        lookup_logger.log_lookup("weather", "failed", latency_ms, error_reason=type(e).__name__)
        return []
    finally:
        if close_client:
            await client.aclose()

    latency_ms = (time.perf_counter() - started) * 1000
    lookup_logger.log_lookup("weather", "success", latency_ms, days=len(cards))
    return cards
