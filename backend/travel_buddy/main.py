"""FastAPI application - Travel Buddy itinerary backend."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.travel_buddy.api.routes.health import router as health_router
from backend.travel_buddy.api.routes.itinerary import router as itinerary_router
from backend.travel_buddy.api.routes.metrics import router as metrics_router
from backend.travel_buddy.api.routes.reset import router as reset_router
from backend.travel_buddy.config import get_settings
from backend.travel_buddy.utils.logging import configure_logging

settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(title="Travel Buddy API", version="1.0.0")

# Web and mobile front ends
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(itinerary_router, prefix=settings.api_prefix)
app.include_router(reset_router, prefix=settings.api_prefix)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Welcome to the Travel Buddy API", "version": "1.0.0"}
