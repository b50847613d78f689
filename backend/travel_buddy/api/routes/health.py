"""Health check endpoints.

- /health: liveness only
- /healthz: itinerary store and upload directory status
"""

import json
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Response

from backend.travel_buddy.api.deps import get_document_store, get_itinerary_store
from backend.travel_buddy.store.documents import DocumentStore
from backend.travel_buddy.store.itinerary_store import ItineraryStore

router = APIRouter()


def check_store(store: ItineraryStore) -> tuple[bool, str]:
    """Report whether an itinerary is loaded.

    Returns:
        (is_ok, status_message)
    """
    return (True, "loaded" if store.has_itinerary() else "empty")


def check_uploads(documents: DocumentStore) -> tuple[bool, str]:
    """Check the upload directory.

    A missing directory is fine (purge treats it as empty); a path that
    exists but is not a directory would make every purge fail.

    Returns:
        (is_ok, status_message)
    """
    try:
        if not documents.exists():
            return (True, "missing")
        if not documents.upload_dir.is_dir():
            return (False, "error: not a directory")
        return (True, "ok")
    except OSError as e:
        return (False, f"error: {type(e).__name__}")


@router.get("/health")
async def health() -> dict[str, str]:
    """Simple health check for Docker/k8s.

    Returns:
        200 OK always (application is running)
    """
    return {"status": "ok"}


@router.get("/healthz", response_model=None)
async def healthz(
    store: Annotated[ItineraryStore, Depends(get_itinerary_store)],
    documents: Annotated[DocumentStore, Depends(get_document_store)],
) -> dict[str, Any] | Response:
    """Component health.

    Returns:
        200 with component status if the upload directory is usable
        503 otherwise
    """
    store_ok, store_status = check_store(store)
    uploads_ok, uploads_status = check_uploads(documents)

    core_ok = store_ok and uploads_ok

    response_body = {
        "status": "ok" if core_ok else "degraded",
        "components": {
            "store": store_status,
            "uploads": uploads_status,
        },
    }

    if not core_ok:
        return Response(
            content=json.dumps(response_body),
            status_code=503,
            media_type="application/json",
        )

    return response_body
