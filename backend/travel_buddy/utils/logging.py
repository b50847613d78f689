"""Structured logging for itinerary resets, restores and purges."""

import json
import logging
import sys
from typing import Any

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


class StructuredFormatter(logging.Formatter):
    """Formatter that appends the ``structured`` extra payload as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        structured = getattr(record, "structured", None)
        if structured:
            line = f"{line} {json.dumps(structured, default=str, sort_keys=True)}"
        return line


def configure_logging(log_level: str = "INFO") -> None:
    """Configure root logging once at application start-up.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter(LOG_FORMAT))

    logging.basicConfig(
        handlers=[handler],
        level=getattr(logging, log_level.upper(), logging.INFO),
    )


class StructuredStoreLogger:
    """Structured logger for itinerary store mutations."""

    def log_reset(
        self,
        reset_type: Any,
        outcome: str,
        *,
        timestamp: str | None = None,
        activities_before: int | None = None,
        activities_after: int | None = None,
        error_reason: str | None = None,
    ) -> None:
        """Log a reset call with structured data."""
        log_data: dict[str, Any] = {
            "reset_type": reset_type,
            "outcome": outcome,
            "history_timestamp": timestamp,
        }

        if activities_before is not None:
            log_data["activities_before"] = activities_before
        if activities_after is not None:
            log_data["activities_after"] = activities_after
        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"Itinerary reset: {reset_type} - {outcome}"

        if outcome == "success":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})

    def log_restore(self, timestamp: Any, outcome: str) -> None:
        """Log a restore attempt."""
        log_data = {"timestamp": timestamp, "outcome": outcome}
        log_msg = f"Itinerary restore: {timestamp} - {outcome}"

        if outcome == "success":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})

    def log_purge(
        self,
        upload_dir: str,
        outcome: str,
        files_deleted: int = 0,
        error_reason: str | None = None,
    ) -> None:
        """Log a document purge."""
        log_data: dict[str, Any] = {
            "upload_dir": upload_dir,
            "outcome": outcome,
            "files_deleted": files_deleted,
        }

        if error_reason:
            log_data["error_reason"] = error_reason

        if outcome == "success":
            logger.info(f"Document purge: {files_deleted} file(s) deleted", extra={"structured": log_data})
        else:
            logger.warning(f"Document purge failed: {error_reason}", extra={"structured": log_data})
