"""Itinerary reset endpoints - POST /reset, GET /reset-history, POST /restore."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from backend.travel_buddy.api.deps import get_reset_service
from backend.travel_buddy.api.responses import envelope, error_response
from backend.travel_buddy.errors import ItineraryResetError, UnexpectedError
from backend.travel_buddy.models.reset import ApiResponse, ResetRequest, RestoreRequest
from backend.travel_buddy.services.reset import ItineraryResetService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["reset"])


@router.post("/reset", response_model=ApiResponse)
def reset_itinerary(
    request: ResetRequest,
    service: Annotated[ItineraryResetService, Depends(get_reset_service)],
) -> JSONResponse:
    """Reset the current itinerary completely or partially.

    A complete reset whose document cleanup fails still returns 200 with
    ``success: true``; the cleanup failure is reported under ``warnings``.

    Args:
        request: Reset type, document handling and partial filters
        service: Reset engine

    Returns:
        Envelope with the itinerary after the reset (null after a complete reset)
    """
    try:
        outcome = service.reset_itinerary(
            request.reset_type,
            preserve_documents=request.preserve_documents,
            partial_reset_options=request.partial_reset_options,
        )
    except ItineraryResetError as e:
        return error_response(e)
    except Exception as e:
        logger.exception("Error in reset_itinerary")
        return error_response(UnexpectedError.wrap(e, "Failed to reset itinerary"))

    body = ApiResponse(success=True, message=outcome.message, data=outcome.itinerary)
    if outcome.warnings:
        body.warnings = outcome.warnings
    return envelope(body)


@router.get("/reset-history", response_model=ApiResponse)
def get_reset_history(
    service: Annotated[ItineraryResetService, Depends(get_reset_service)],
) -> JSONResponse:
    """List reset history metadata, oldest first. Snapshots are never included."""
    try:
        entries = service.get_reset_history()
    except Exception as e:
        logger.exception("Error in get_reset_history")
        return error_response(UnexpectedError.wrap(e, "Failed to get reset history"))

    data = [entry.model_dump(mode="json", by_alias=True) for entry in entries]
    return envelope(ApiResponse(success=True, data=data))


@router.post("/restore", response_model=ApiResponse)
def restore_from_history(
    request: RestoreRequest,
    service: Annotated[ItineraryResetService, Depends(get_reset_service)],
) -> JSONResponse:
    """Restore the itinerary captured just before the reset at ``timestamp``."""
    try:
        restored = service.restore_from_history(request.timestamp)
    except ItineraryResetError as e:
        return error_response(e)
    except Exception as e:
        logger.exception("Error in restore_from_history")
        return error_response(UnexpectedError.wrap(e, "Failed to restore itinerary"))

    return envelope(
        ApiResponse(success=True, message="Itinerary restored successfully", data=restored)
    )
