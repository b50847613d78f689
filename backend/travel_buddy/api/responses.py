"""Envelope helpers shared by itinerary routes."""

from fastapi.responses import JSONResponse

from backend.travel_buddy.errors import ItineraryResetError
from backend.travel_buddy.models.reset import ApiResponse


def envelope(body: ApiResponse, status_code: int = 200) -> JSONResponse:
    """Serialize an envelope, keeping only the fields that were set.

    ``data: null`` survives when passed explicitly.
    """
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_unset=True),
    )


def error_response(error: ItineraryResetError) -> JSONResponse:
    """``{success: false, message}`` with the error's HTTP status."""
    return envelope(ApiResponse(success=False, message=error.message), error.status_code)
