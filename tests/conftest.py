"""Shared pytest fixtures for all test suites."""

from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient

from backend.travel_buddy.api.deps import get_document_store, get_history, get_itinerary_store
from backend.travel_buddy.main import app
from backend.travel_buddy.services.reset import ItineraryResetService
from backend.travel_buddy.store.documents import DocumentStore
from backend.travel_buddy.store.history import ResetHistory
from backend.travel_buddy.store.itinerary_store import ItineraryStore


@pytest.fixture
def sample_itinerary() -> dict[str, Any]:
    """Two-activity itinerary: a flight and a hotel check-in."""
    return {
        "title": "Lisbon long weekend",
        "activities": [
            {"type": "flight", "dateTime": "2025-04-15T08:00:00", "title": "TP 1351"},
            {"type": "hotel", "dateTime": "2025-04-20T10:00:00", "title": "Check-in"},
        ],
    }


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    """Empty upload directory."""
    directory = tmp_path / "uploads"
    directory.mkdir()
    return directory


@pytest.fixture
def store() -> ItineraryStore:
    return ItineraryStore()


@pytest.fixture
def history() -> ResetHistory:
    return ResetHistory()


@pytest.fixture
def documents(upload_dir: Path) -> DocumentStore:
    return DocumentStore(upload_dir)


@pytest.fixture
def service(
    store: ItineraryStore, history: ResetHistory, documents: DocumentStore
) -> ItineraryResetService:
    """Reset engine over fresh collaborators."""
    return ItineraryResetService(store, history, documents)


@pytest.fixture
def client(
    store: ItineraryStore, history: ResetHistory, documents: DocumentStore
) -> Generator[TestClient, None, None]:
    """Test client wired to fresh store, history and document store."""
    app.dependency_overrides[get_itinerary_store] = lambda: store
    app.dependency_overrides[get_history] = lambda: history
    app.dependency_overrides[get_document_store] = lambda: documents

    yield TestClient(app)

    app.dependency_overrides.clear()
