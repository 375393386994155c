"""Provenance helpers for lookup adapters."""

from datetime import UTC, datetime

from tripbook.models.common import Provenance


def provenance_for_http(source: str, url: str, cache_hit: bool = False) -> Provenance:
    """Create provenance for results fetched from a remote service.

    Args:
        source: Source identifier (e.g., "place.openai")
        url: Endpoint or model URL the result came from
        cache_hit: Whether result came from cache

    Returns:
        Provenance with source=tool-specific string, fetched_at=now(UTC)
    """
    return Provenance(
        source=f"tool.{source}",
        ref_id=source,
        source_url=url,
        fetched_at=datetime.now(UTC),
        cache_hit=cache_hit,
    )


def provenance_for_fallback(source: str, ref_id: str | None = None) -> Provenance:
    """Create provenance for placeholder results built locally."""
    return Provenance(
        source=f"tool.{source}",
        ref_id=f"{source}/{ref_id}" if ref_id else source,
        source_url=None,
        fetched_at=datetime.now(UTC),
        cache_hit=False,
    )
