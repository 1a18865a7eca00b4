"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from itinerator.models.common import SegmentKind


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="ITINERATOR_", extra="ignore"
    )

    # Chronological inference window (minutes)
    chronological_window_min: int = 30

    # Segment kinds that may not overlap each other
    exclusive_segment_kinds: list[SegmentKind] = [SegmentKind.flight, SegmentKind.transfer]

    # Logging
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
