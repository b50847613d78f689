"""Prometheus metrics for itinerary reset and restore."""

from typing import Any

from prometheus_client import Counter, Gauge

from backend.travel_buddy.models.reset import ResetType

# Reset engine metrics
itinerary_resets_total = Counter(
    "itinerary_resets_total",
    "Total itinerary reset calls",
    ["reset_type", "outcome"],
)

itinerary_restores_total = Counter(
    "itinerary_restores_total",
    "Total itinerary restore calls",
    ["outcome"],
)

documents_purged_total = Counter(
    "documents_purged_total",
    "Total uploaded documents deleted by complete resets",
)

reset_history_size = Gauge(
    "reset_history_size",
    "Number of records currently held in reset history",
)


def reset_type_label(reset_type: Any) -> str:
    """Label value for a caller-supplied reset type; unknown values collapse to 'invalid'."""
    for known in ResetType:
        if reset_type == known:
            return known.value
    return "invalid"


class PrometheusStoreMetrics:
    """Prometheus-based store metrics implementation."""

    def inc_reset(self, reset_type: Any, outcome: str) -> None:
        """Increment reset counter."""
        itinerary_resets_total.labels(reset_type=reset_type_label(reset_type), outcome=outcome).inc()

    def inc_restore(self, outcome: str) -> None:
        """Increment restore counter."""
        itinerary_restores_total.labels(outcome=outcome).inc()

    def add_purged(self, count: int) -> None:
        """Add deleted document count."""
        documents_purged_total.inc(count)

    def set_history_size(self, size: int) -> None:
        """Record current history length."""
        reset_history_size.set(size)
