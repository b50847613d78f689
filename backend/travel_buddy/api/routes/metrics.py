"""Prometheus metrics endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from backend.travel_buddy.api.deps import get_history
from backend.travel_buddy.store.history import ResetHistory
from backend.travel_buddy.utils.metrics import reset_history_size

router = APIRouter()


@router.get("/metrics")
async def metrics(history: Annotated[ResetHistory, Depends(get_history)]) -> Response:
    """Prometheus metrics endpoint.

    Exposes all registered Prometheus metrics including:
    - itinerary_resets_total{reset_type, outcome}
    - itinerary_restores_total{outcome}
    - documents_purged_total
    - reset_history_size (read from the live history on each scrape)
    """
    reset_history_size.set(len(history))
    metrics_output = generate_latest()
    return Response(content=metrics_output, media_type=CONTENT_TYPE_LATEST)
