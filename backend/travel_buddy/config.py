"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Document store (uploaded itinerary files)
    upload_dir: str = "uploads"

    # Reset history bound (FIFO eviction beyond this)
    reset_history_limit: int = Field(10, ge=1)

    # Logging
    log_level: str = "INFO"

    # Front ends (web + mobile dev servers)
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:19006"]

    # Routing
    api_prefix: str = "/api/itinerary"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
