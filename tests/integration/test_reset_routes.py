"""Integration tests for reset, history and restore routes."""

from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient

from backend.travel_buddy.api.deps import get_document_store
from backend.travel_buddy.errors import PurgeError
from backend.travel_buddy.main import app
from backend.travel_buddy.store.documents import DocumentStore
from backend.travel_buddy.store.history import ResetHistory
from backend.travel_buddy.store.itinerary_store import ItineraryStore

PREFIX = "/api/itinerary"


class FailingDocumentStore(DocumentStore):
    """Document store whose purge always fails."""

    def purge(self) -> int:
        raise PurgeError(self.upload_dir / "locked.pdf", PermissionError(13, "Permission denied"))


def test_complete_reset_returns_null_data(
    client: TestClient, store: ItineraryStore, sample_itinerary: dict[str, Any]
) -> None:
    """Test that POST /reset complete clears the itinerary and returns data: null."""
    store.set(sample_itinerary)

    response = client.post(
        f"{PREFIX}/reset", json={"resetType": "complete", "preserveDocuments": True}
    )

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Itinerary completely reset successfully",
        "data": None,
    }
    assert store.get() is None


def test_complete_reset_purges_uploads(client: TestClient, upload_dir: Path) -> None:
    """Test that preserveDocuments false deletes uploaded files."""
    for i in range(3):
        (upload_dir / f"booking-{i}.pdf").write_bytes(b"x")

    response = client.post(
        f"{PREFIX}/reset", json={"resetType": "complete", "preserveDocuments": False}
    )

    assert response.status_code == 200
    assert list(upload_dir.iterdir()) == []


def test_complete_reset_preserves_uploads(client: TestClient, upload_dir: Path) -> None:
    """Test that preserveDocuments true keeps uploaded files."""
    for i in range(3):
        (upload_dir / f"booking-{i}.pdf").write_bytes(b"x")

    response = client.post(
        f"{PREFIX}/reset", json={"resetType": "complete", "preserveDocuments": True}
    )

    assert response.status_code == 200
    assert len(list(upload_dir.iterdir())) == 3


def test_complete_reset_purge_failure_is_warning(
    client: TestClient,
    store: ItineraryStore,
    upload_dir: Path,
    sample_itinerary: dict[str, Any],
) -> None:
    """Test that a failed purge after a committed reset is reported as a warning."""
    store.set(sample_itinerary)
    app.dependency_overrides[get_document_store] = lambda: FailingDocumentStore(upload_dir)

    response = client.post(f"{PREFIX}/reset", json={"resetType": "complete"})

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["data"] is None
    assert data["warnings"] == [
        "Uploaded documents could not be purged: Failed to delete locked.pdf: Permission denied"
    ]
    assert store.get() is None


def test_complete_reset_unreadable_upload_dir_is_warning(
    client: TestClient,
    store: ItineraryStore,
    upload_dir: Path,
    sample_itinerary: dict[str, Any],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Test that an upload directory that cannot be checked is a cleanup warning, not a 500."""
    store.set(sample_itinerary)
    original_stat = Path.stat

    def deny_dir(self: Path, **kwargs: Any) -> Any:
        if self == upload_dir:
            raise PermissionError(13, "Permission denied")
        return original_stat(self, **kwargs)

    monkeypatch.setattr(Path, "stat", deny_dir)

    response = client.post(f"{PREFIX}/reset", json={"resetType": "complete"})

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["data"] is None
    assert data["warnings"] == [
        "Uploaded documents could not be purged: Failed to delete uploads: Permission denied"
    ]
    assert store.get() is None


def test_partial_reset_by_type(
    client: TestClient, store: ItineraryStore, sample_itinerary: dict[str, Any]
) -> None:
    """Test that removing flights returns only the hotel."""
    store.set(sample_itinerary)

    response = client.post(
        f"{PREFIX}/reset",
        json={"resetType": "partial", "partialResetOptions": {"activityTypes": ["flight"]}},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Itinerary partially reset successfully"
    assert [a["type"] for a in body["data"]["activities"]] == ["hotel"]
    assert "warnings" not in body


def test_partial_reset_by_date_range(
    client: TestClient, store: ItineraryStore, sample_itinerary: dict[str, Any]
) -> None:
    """Test that a date window covering the flight removes only the flight."""
    store.set(sample_itinerary)

    response = client.post(
        f"{PREFIX}/reset",
        json={
            "resetType": "partial",
            "partialResetOptions": {
                "dateRange": {"start": "2025-04-15T00:00:00Z", "end": "2025-04-16T00:00:00Z"}
            },
        },
    )

    assert response.status_code == 200
    assert [a["type"] for a in response.json()["data"]["activities"]] == ["hotel"]


def test_partial_reset_without_itinerary_returns_400(
    client: TestClient, history: ResetHistory
) -> None:
    """Test 400 when there is nothing to reset, with the call still in history."""
    response = client.post(
        f"{PREFIX}/reset",
        json={"resetType": "partial", "partialResetOptions": {"activityTypes": ["flight"]}},
    )

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "No itinerary data to reset"}
    assert len(history) == 1


def test_invalid_reset_type_returns_400(
    client: TestClient, store: ItineraryStore, sample_itinerary: dict[str, Any]
) -> None:
    """Test that an unknown resetType yields the 400 envelope, not a 422."""
    store.set(sample_itinerary)

    response = client.post(f"{PREFIX}/reset", json={"resetType": "nuke"})

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Invalid reset options"}
    assert store.get() == sample_itinerary


def test_missing_reset_type_returns_400(client: TestClient) -> None:
    """Test that an empty body is an invalid reset."""
    response = client.post(f"{PREFIX}/reset", json={})

    assert response.status_code == 400
    assert response.json()["success"] is False


@pytest.mark.parametrize(
    "options",
    [
        False,
        {"activityTypes": "flight"},
        {"dateRange": {"start": "soon", "end": "later"}},
    ],
)
def test_malformed_partial_options_return_400_and_are_recorded(
    options: Any,
    client: TestClient,
    store: ItineraryStore,
    history: ResetHistory,
    sample_itinerary: dict[str, Any],
) -> None:
    """Test that badly shaped options get the 400 envelope and still append a history record."""
    store.set(sample_itinerary)

    response = client.post(
        f"{PREFIX}/reset", json={"resetType": "partial", "partialResetOptions": options}
    )

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Invalid reset options"}
    assert len(history) == 1
    assert store.get() == sample_itinerary

    entries = client.get(f"{PREFIX}/reset-history").json()["data"]
    assert entries[0]["resetType"] == "partial"
    assert entries[0]["partialResetOptions"] == options


def test_unexpected_error_returns_500(
    client: TestClient, store: ItineraryStore, monkeypatch: Any
) -> None:
    """Test that an unexpected failure is caught and reported with its message."""

    def explode() -> None:
        raise RuntimeError("store offline")

    monkeypatch.setattr(store, "get", explode)

    response = client.post(f"{PREFIX}/reset", json={"resetType": "complete"})

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "store offline"}


def test_reset_history_lists_metadata_only(
    client: TestClient, store: ItineraryStore, sample_itinerary: dict[str, Any]
) -> None:
    """Test GET /reset-history returns timestamp, type and options without snapshots."""
    store.set(sample_itinerary)
    client.post(
        f"{PREFIX}/reset",
        json={"resetType": "partial", "partialResetOptions": {"activityTypes": ["flight"]}},
    )
    client.post(f"{PREFIX}/reset", json={"resetType": "complete", "preserveDocuments": True})

    response = client.get(f"{PREFIX}/reset-history")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert "message" not in body
    assert [entry["resetType"] for entry in body["data"]] == ["partial", "complete"]
    assert body["data"][0]["partialResetOptions"]["activityTypes"] == ["flight"]
    assert body["data"][1]["partialResetOptions"] is None
    for entry in body["data"]:
        assert set(entry) == {"timestamp", "resetType", "partialResetOptions"}


def test_reset_history_echoes_options_as_sent(
    client: TestClient, store: ItineraryStore, sample_itinerary: dict[str, Any]
) -> None:
    """Test that history returns partialResetOptions exactly as posted, not re-serialized."""
    store.set(sample_itinerary)
    options = {"dateRange": {"start": "2025-04-15T00:00Z", "end": "2025-04-16T00:00Z"}}
    client.post(f"{PREFIX}/reset", json={"resetType": "partial", "partialResetOptions": options})

    data = client.get(f"{PREFIX}/reset-history").json()["data"]

    assert data[0]["partialResetOptions"] == options


def test_reset_history_empty(client: TestClient) -> None:
    """Test that history starts empty."""
    response = client.get(f"{PREFIX}/reset-history")

    assert response.status_code == 200
    assert response.json() == {"success": True, "data": []}


def test_reset_history_capped_at_ten(client: TestClient) -> None:
    """Test that eleven resets leave ten history entries, oldest evicted."""
    for _ in range(11):
        client.post(f"{PREFIX}/reset", json={"resetType": "complete", "preserveDocuments": True})

    data = client.get(f"{PREFIX}/reset-history").json()["data"]

    assert len(data) == 10


def test_restore_unknown_timestamp_returns_404(
    client: TestClient, store: ItineraryStore, sample_itinerary: dict[str, Any]
) -> None:
    """Test 404 envelope for an unknown backup."""
    store.set(sample_itinerary)

    response = client.post(f"{PREFIX}/restore", json={"timestamp": "2000-01-01T00:00:00.000Z"})

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Backup not found"}
    assert store.get() == sample_itinerary


def test_restore_without_timestamp_returns_404(client: TestClient) -> None:
    """Test that a missing timestamp matches nothing."""
    response = client.post(f"{PREFIX}/restore", json={})

    assert response.status_code == 404


def test_restore_non_string_timestamp_returns_404(client: TestClient) -> None:
    """Test that a numeric timestamp is looked up like any other and not found."""
    client.post(f"{PREFIX}/reset", json={"resetType": "complete", "preserveDocuments": True})

    response = client.post(f"{PREFIX}/restore", json={"timestamp": 123})

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Backup not found"}


def test_partial_reset_and_restore_round_trip(client: TestClient) -> None:
    """Test upload, partial reset, history, and restore through the API."""
    original = {
        "activities": [
            {"type": "flight", "dateTime": "2025-04-15T08:00"},
            {"type": "hotel", "dateTime": "2025-04-20T10:00"},
        ]
    }
    assert client.put(f"{PREFIX}/latest", json=original).status_code == 200

    reset = client.post(
        f"{PREFIX}/reset",
        json={"resetType": "partial", "partialResetOptions": {"activityTypes": ["flight"]}},
    )
    assert reset.json()["data"]["activities"] == [{"type": "hotel", "dateTime": "2025-04-20T10:00"}]

    history = client.get(f"{PREFIX}/reset-history").json()["data"]
    assert len(history) == 1
    assert history[0]["resetType"] == "partial"

    restored = client.post(f"{PREFIX}/restore", json={"timestamp": history[0]["timestamp"]})

    assert restored.status_code == 200
    assert restored.json()["message"] == "Itinerary restored successfully"
    assert restored.json()["data"] == original
    assert client.get(f"{PREFIX}/latest").json()["data"] == original
