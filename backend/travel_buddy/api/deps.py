"""Dependency providers for the itinerary store and reset engine.

The store, history and document store are process-wide singletons; tests
swap them through ``app.dependency_overrides``.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from backend.travel_buddy.config import get_settings
from backend.travel_buddy.services.reset import ItineraryResetService
from backend.travel_buddy.store.documents import DocumentStore
from backend.travel_buddy.store.history import ResetHistory
from backend.travel_buddy.store.itinerary_store import ItineraryStore


@lru_cache
def get_itinerary_store() -> ItineraryStore:
    """Get the shared itinerary store."""
    return ItineraryStore()


@lru_cache
def get_history() -> ResetHistory:
    """Get the shared reset history."""
    return ResetHistory(limit=get_settings().reset_history_limit)


@lru_cache
def get_document_store() -> DocumentStore:
    """Get the upload directory store."""
    return DocumentStore(get_settings().upload_dir)


def get_reset_service(
    store: Annotated[ItineraryStore, Depends(get_itinerary_store)],
    history: Annotated[ResetHistory, Depends(get_history)],
    documents: Annotated[DocumentStore, Depends(get_document_store)],
) -> ItineraryResetService:
    """Build the reset engine over the shared collaborators."""
    return ItineraryResetService(store, history, documents)
