"""Structured logging for external lookups."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class StructuredLookupLogger:
    """Structured logger for place and weather lookups."""

    def log_lookup(
        self,
        lookup: str,
        outcome: str,
        latency_ms: float,
        error_reason: str | None = None,
        **fields: Any,
    ) -> None:
        """Log one lookup with structured data."""
        log_data: dict[str, Any] = {
            "lookup": lookup,
            "outcome": outcome,
            "latency_ms": round(latency_ms, 2),
            **fields,
        }

        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"Lookup: {lookup} - {outcome}"

        if outcome == "success":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})
