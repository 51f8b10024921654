"""
Mars Photo API: Application Configuration
===========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time.

Every value has a working default, so the service starts without any
environment at all. Upstream URLs are overridable so tests and staging
deployments can point the adapters at a fake feed.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from mars_photos import __version__


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes are grouped by concern for readability.
    """

    # ── Upstream Feeds ────────────────────────────────────────────────────
    # Curiosity: mars.nasa.gov raw image items API (paged JSON)
    curiosity_api_url: str = Field(
        default="https://mars.nasa.gov/api/v1/raw_image_items/",
        description="Curiosity raw image items endpoint",
    )

    # Perseverance: mars.nasa.gov RSS API in JSON mode
    perseverance_api_url: str = Field(
        default="https://mars.nasa.gov/rss/api/",
        description="Perseverance raw images feed endpoint",
    )

    # Applied to connect, read and write phases of every upstream call.
    # There are no retries, so this bounds how long one fetch can hold a request.
    upstream_timeout: float = Field(default=30.0, ge=1.0, le=120.0)

    user_agent: str = Field(default=f"mars-photo-api/{__version__}")

    # ── Pagination ────────────────────────────────────────────────────────
    default_per_page: int = Field(default=25, ge=1, le=200)
    max_per_page: int = Field(default=200, ge=1, le=1000)

    # ── Estimation Sampling ───────────────────────────────────────────────
    # Page size for each sampled sol. One page per sample, so busy sols
    # are counted up to this cap.
    sample_per_page: int = Field(default=200, ge=1, le=1000)

    # Upper bound on sampled sols per estimate (the latest sol included)
    max_samples: int = Field(default=20, ge=1, le=100)

    # Number of evenly spaced intervals between sol 0 and the latest sol
    sample_intervals: int = Field(default=10, ge=1, le=100)

    # Sampled fetches in flight at once for a single request
    sample_concurrency: int = Field(default=5, ge=1, le=50)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs, or "*" for any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=3000, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("curiosity_api_url", "perseverance_api_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Upstream URLs must be absolute http(s) URLs."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Upstream URL '{v}' must start with http:// or https://")
        return v

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Singleton instance, imported throughout the application
settings = Settings()
