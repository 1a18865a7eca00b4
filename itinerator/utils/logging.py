"""Structured logging for cascade adjustments."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class StructuredCascadeLogger:
    """Structured logger for cascade outcomes."""

    def log_cascade(
        self,
        moved_segment_id: str,
        delta_ms: int,
        outcome: str,
        affected_count: int = 0,
        conflict_count: int = 0,
        error_code: str | None = None,
    ) -> None:
        """Log a cascade attempt with structured data."""
        log_data: dict[str, Any] = {
            "moved_segment_id": moved_segment_id,
            "delta_ms": delta_ms,
            "outcome": outcome,
            "affected_count": affected_count,
            "conflict_count": conflict_count,
        }

        if error_code:
            log_data["error_code"] = error_code

        log_msg = f"Cascade adjustment: {moved_segment_id} - {outcome}"

        if outcome == "success":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})


def configure_logging(level: str) -> None:
    """Configure root logging for the service process."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
