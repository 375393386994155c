"""Place lookup clients.

The OpenAI client asks a chat model for place details in JSON mode. Any
failure (no key, network error, malformed reply) yields the same degraded
placeholder the fallback client returns, so callers never see an exception.
"""

import json
import logging
import time
from typing import Any, Protocol

from openai import AsyncOpenAI

from tripbook.adapters.provenance import provenance_for_fallback, provenance_for_http
from tripbook.config import Settings, get_settings
from tripbook.itinerary.ledger import maps_search_url
from tripbook.models.lookup import LocalizedList, LocalizedText, PlaceResult
from tripbook.utils.logging import StructuredLookupLogger

logger = logging.getLogger(__name__)
lookup_logger = StructuredLookupLogger()

FALLBACK_DESCRIPTION = LocalizedText(
    en="Could not fetch details.",
    zh="無法取得詳細資訊。",
)


def degraded_place(query: str) -> PlaceResult:
    """Placeholder result: query as name, no address, a map search URL."""
    return PlaceResult(
        name=query,
        address="",
        map_url=maps_search_url(query),
        description=FALLBACK_DESCRIPTION.model_copy(),
        fun_things=LocalizedList(),
        degraded=True,
        provenance=provenance_for_fallback("place.fallback", query),
    )


def _str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item]


class PlaceLookupClient(Protocol):
    """Protocol for place lookup implementations."""

    async def search_place(self, query: str) -> PlaceResult:
        """Look up a free-text place query. Never raises."""
        ...


class FallbackPlaceClient:
    """Offline client; always returns the degraded placeholder."""

    async def search_place(self, query: str) -> PlaceResult:
        return degraded_place(query)


class OpenAIPlaceClient:
    """OpenAI-backed place lookup."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        location: str = "Taipei, Taiwan",
        map_query_suffix: str = "Taiwan",
        timeout_ms: int = 8000,
    ):
        """Initialize OpenAI client.

        Args:
            api_key: OpenAI API key (read from settings)
            model: Model name to use
            location: Region the places are searched in
            map_query_suffix: Appended to names in synthesized map URLs
            timeout_ms: Request timeout
        """
        self.client = AsyncOpenAI(api_key=api_key, timeout=timeout_ms / 1000)
        self.model = model
        self.location = location
        self.map_query_suffix = map_query_suffix

    async def search_place(self, query: str) -> PlaceResult:
        """Look up place details; degraded placeholder on any failure."""
        if not query.strip():
            return degraded_place(query)

        started = time.perf_counter()
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                temperature=0.2,
                response_format={"type": "json_object"},
                messages=[
                    {"role": "system", "content": self._build_system_prompt()},
                    {"role": "user", "content": f'Find information about "{query}" in {self.location}.'},
                ],
            )
            content = response.choices[0].message.content or ""
            data = json.loads(content)
            if not isinstance(data, dict):
                raise ValueError("place lookup reply is not a JSON object")
            result = self._parse_result(query, data)
        except Exception as e:
            latency_ms = (time.perf_counter() - started) * 1000
            lookup_logger.log_lookup("place", "fallback", latency_ms, error_reason=type(e).__name__)
            return degraded_place(query)

        latency_ms = (time.perf_counter() - started) * 1000
        lookup_logger.log_lookup("place", "success", latency_ms)
        return result

    def _build_system_prompt(self) -> str:
        return f"""You are a travel assistant for a trip to {self.location}.
Return only a JSON object with these keys:
- name: official place name
- address: street address, or "" if unknown
- map_url: a Google Maps URL for the place, or "" if unknown
- description: {{"en": short English description, "zh": same in Traditional Chinese}}
- fun_things: {{"en": up to 3 short things to do, "zh": same in Traditional Chinese}}
Do not invent an address you are not confident about."""

    def _parse_result(self, query: str, data: dict[str, Any]) -> PlaceResult:
        name = str(data.get("name") or query).strip() or query
        address = str(data.get("address") or "").strip()

        map_url = str(data.get("map_url") or "").strip()
        if not map_url.startswith(("https://www.google.com/maps", "https://maps.google.")):
            map_url = maps_search_url(f"{name} {self.map_query_suffix}".strip())

        raw_description = data.get("description")
        if isinstance(raw_description, dict):
            description = LocalizedText(
                en=str(raw_description.get("en") or ""),
                zh=str(raw_description.get("zh") or ""),
            )
        else:
            description = LocalizedText(en=str(raw_description or ""))

        raw_fun = data.get("fun_things")
        fun_things = LocalizedList()
        if isinstance(raw_fun, dict):
            fun_things = LocalizedList(en=_str_list(raw_fun.get("en")), zh=_str_list(raw_fun.get("zh")))

        return PlaceResult(
            name=name,
            address=address,
            map_url=map_url,
            description=description,
            fun_things=fun_things,
            provenance=provenance_for_http("place.openai", f"openai://{self.model}"),
        )


def get_place_client(settings: Settings | None = None) -> PlaceLookupClient:
    """Factory function to get the place client based on config.

    Returns:
        OpenAIPlaceClient if an API key is configured, FallbackPlaceClient otherwise
    """
    settings = settings or get_settings()
    api_key = settings.openai_api_key

    if api_key and api_key.get_secret_value():
        logger.info("Using OpenAI client for place lookup")
        return OpenAIPlaceClient(
            api_key=api_key.get_secret_value(),
            model=settings.openai_model,
            location=settings.trip_location,
            map_query_suffix=settings.map_query_suffix,
            timeout_ms=settings.lookup_timeout_ms,
        )
    logger.warning("No OpenAI API key configured, place lookups return placeholders")
    return FallbackPlaceClient()
