"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    env: str = "development"
    log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Drawing surface limits (the visible canvas never exceeds these)
    max_width: int = 1000
    max_height: int = 800

    # Classification
    degenerate_size_threshold: int = 10
    reference_stroke_width: int = 25
    legacy_sentinel_extrema: bool = False

    # Corner markers drawn on the surface after classification
    mark_corners: bool = True
    corner_marker_size: int = 5

    model_config = SettingsConfigDict(
        env_prefix="SHAPESKETCH_",
        env_file=".env",
        env_file_encoding="utf-8",
    )


settings = Settings()
