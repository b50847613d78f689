"""Error types for itinerary reset and restore.

Each error carries the HTTP status the API reports it with, so routes can
build the ``{success, message}`` envelope without a lookup table.
"""

from pathlib import Path
from typing import Any


class ItineraryResetError(Exception):
    """Base exception for all reset-engine errors."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidResetOptionsError(ItineraryResetError):
    """Unknown resetType, or partial reset requested without options."""

    status_code = 400

    def __init__(self, message: str = "Invalid reset options") -> None:
        super().__init__(message)


class NoItineraryError(ItineraryResetError):
    """Partial reset requested while no itinerary is loaded."""

    status_code = 400

    def __init__(self, message: str = "No itinerary data to reset") -> None:
        super().__init__(message)


class BackupNotFoundError(ItineraryResetError):
    """Restore requested for a timestamp with no matching history record."""

    status_code = 404

    def __init__(self, timestamp: Any = None) -> None:
        super().__init__("Backup not found")
        self.timestamp = timestamp


class PurgeError(ItineraryResetError):
    """Filesystem failure while deleting uploaded documents."""

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(f"Failed to delete {path.name}: {cause.strerror or cause}")
        self.path = path
        self.cause = cause


class UnexpectedError(ItineraryResetError):
    """Any non-domain failure surfaced through the API envelope."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause

    @classmethod
    def wrap(cls, exc: BaseException, fallback: str) -> "UnexpectedError":
        """Wrap an arbitrary exception, keeping its message when it has one."""
        return cls(str(exc) or fallback, cause=exc)
