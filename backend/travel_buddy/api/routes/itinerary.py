"""Current itinerary endpoints - GET /latest, PUT /latest."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from backend.travel_buddy.api.deps import get_itinerary_store
from backend.travel_buddy.api.responses import envelope
from backend.travel_buddy.models.itinerary import Itinerary
from backend.travel_buddy.models.reset import ApiResponse
from backend.travel_buddy.store.itinerary_store import ItineraryStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["itinerary"])

NO_ITINERARY_MESSAGE = (
    "No itinerary data available yet. Please upload and process an itinerary document first."
)


@router.get("/latest", response_model=ApiResponse)
def get_latest_itinerary(
    store: Annotated[ItineraryStore, Depends(get_itinerary_store)],
) -> JSONResponse:
    """Return the current itinerary, 404 when none is loaded."""
    itinerary = store.get()
    if itinerary is None:
        return envelope(ApiResponse(success=False, message=NO_ITINERARY_MESSAGE), 404)

    return envelope(
        ApiResponse(
            success=True,
            message="Latest itinerary data retrieved successfully",
            data=itinerary,
        )
    )


@router.put("/latest", response_model=ApiResponse)
def set_latest_itinerary(
    itinerary: Itinerary,
    store: Annotated[ItineraryStore, Depends(get_itinerary_store)],
) -> JSONResponse:
    """Replace the current itinerary.

    Entry point for itinerary producers (document processing, the chat
    assistant). Fields beyond ``activities`` are stored untouched.
    """
    document = itinerary.to_document()
    store.set(document)
    logger.info(
        "Itinerary replaced",
        extra={"structured": {"activities": len(document["activities"])}},
    )
    return envelope(
        ApiResponse(success=True, message="Itinerary updated successfully", data=document)
    )
