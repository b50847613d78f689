"""Models package - re-exports for convenience."""

from backend.travel_buddy.models.itinerary import Activity, Itinerary
from backend.travel_buddy.models.reset import (
    ApiResponse,
    DateRange,
    PartialResetOptions,
    ResetHistoryEntry,
    ResetRequest,
    ResetType,
    RestoreRequest,
)

__all__ = [
    # Itinerary
    "Activity",
    "Itinerary",
    # Reset
    "ApiResponse",
    "DateRange",
    "PartialResetOptions",
    "ResetHistoryEntry",
    "ResetRequest",
    "ResetType",
    "RestoreRequest",
]
