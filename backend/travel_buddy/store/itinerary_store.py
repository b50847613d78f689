"""Process-wide holder of the current itinerary."""

import copy
import threading
from typing import Any


class ItineraryStore:
    """Owns the single CurrentItinerary value.

    One instance is shared by the reset engine and by whatever produces
    itineraries (uploads, the chat assistant). Every read and write goes
    through ``lock``; callers that need a capture-then-mutate sequence hold
    it across both steps. Values are deep-copied on the way in and out, so
    readers never see a half-edited document.
    """

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self.lock = threading.RLock()
        self._current: dict[str, Any] | None = copy.deepcopy(initial)

    def get(self) -> dict[str, Any] | None:
        """Return a copy of the current itinerary, or None."""
        with self.lock:
            return copy.deepcopy(self._current)

    def set(self, itinerary: dict[str, Any] | None) -> None:
        """Replace the current itinerary."""
        with self.lock:
            self._current = copy.deepcopy(itinerary)

    def clear(self) -> None:
        """Drop the current itinerary."""
        self.set(None)

    def has_itinerary(self) -> bool:
        with self.lock:
            return self._current is not None
