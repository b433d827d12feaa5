"""
Restaurant API - Application Configuration
===========================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the app factory, which hands it to the store gateway.
When:  Loaded once at module import time.
"""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from typing import List


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for a local MongoDB instance.
    Attributes are grouped by concern for readability.
    """

    # ── Document Store ────────────────────────────────────────────────────
    # What: MongoDB connection string; the path component names the database
    mongodb_uri: str = Field(
        default="mongodb://localhost:27017/food-delivery-app",
        description="MongoDB connection URI",
    )

    # What: Database used when the URI does not name one
    mongodb_database: str = Field(default="food-delivery-app")

    mongodb_collection: str = Field(default="restaurants")

    # What: Client-side operation timeout applied to every store call
    # Valid range: 100ms to 60s
    mongodb_timeout_ms: int = Field(default=5000, ge=100, le=60_000)

    # What: How long the driver waits to find a reachable server
    # Trade-off: Lower = faster 500 when the store is down, but less tolerant of slow networks
    mongodb_server_selection_timeout_ms: int = Field(default=3000, ge=100, le=60_000)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs, or "*" for any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5080, ge=1, le=65535)

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

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # MONGODB_URI and mongodb_uri both work
    }


# Singleton instance; the app factory passes it to the store gateway
settings = Settings()
