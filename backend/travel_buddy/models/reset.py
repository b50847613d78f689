"""Request and response models for reset, history and restore."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ResetType(str, Enum):
    """Kind of reset."""

    complete = "complete"
    partial = "partial"


class DateRange(BaseModel):
    """Inclusive removal window for partial resets."""

    model_config = ConfigDict(frozen=True)

    start: datetime | None = None
    end: datetime | None = None


class PartialResetOptions(BaseModel):
    """Filters for a partial reset; an activity matching either is removed."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    activity_types: list[str] | None = Field(None, alias="activityTypes")
    date_range: DateRange | None = Field(None, alias="dateRange")


class ResetRequest(BaseModel):
    """Request body for POST /reset.

    Fields are kept as raw JSON so every call reaches the reset engine, gets a
    history record, and is validated there. Bad values come back as a 400
    envelope instead of a validation 422.
    """

    model_config = ConfigDict(populate_by_name=True)

    reset_type: Any = Field(None, alias="resetType")
    preserve_documents: Any = Field(False, alias="preserveDocuments")
    partial_reset_options: Any = Field(None, alias="partialResetOptions")


class RestoreRequest(BaseModel):
    """Request body for POST /restore. Non-string timestamps match no backup."""

    timestamp: Any = None


class ResetHistoryEntry(BaseModel):
    """History metadata exposed by GET /reset-history (never the snapshot).

    ``partialResetOptions`` is echoed as the caller sent it.
    """

    model_config = ConfigDict(populate_by_name=True)

    timestamp: str
    reset_type: Any = Field(..., alias="resetType")
    partial_reset_options: Any = Field(None, alias="partialResetOptions")


class ApiResponse(BaseModel):
    """Envelope returned by every itinerary endpoint."""

    success: bool
    message: str | None = None
    data: Any = None
    warnings: list[str] | None = None
