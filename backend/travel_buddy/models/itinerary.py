"""Itinerary document shape accepted from producers."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Activity(BaseModel):
    """Single itinerary activity.

    Only ``type`` and ``dateTime`` drive reset filtering; everything else the
    producer attaches (title, location, confirmation numbers) is carried as-is.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type: str
    date_time: str = Field(..., alias="dateTime")


class Itinerary(BaseModel):
    """Current itinerary document."""

    model_config = ConfigDict(extra="allow")

    activities: list[Activity] = Field(default_factory=list)

    def to_document(self) -> dict[str, Any]:
        """Plain JSON-compatible dict with wire field names."""
        return self.model_dump(mode="json", by_alias=True)
