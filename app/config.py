# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.GITHUB_API_BASE)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# Nothing here is required: without GITHUB_TOKEN the service calls GitHub
# anonymously and gets the lower unauthenticated rate limit.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Reported by /health and the root index
VERSION = "2.0.0"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # GitHub Configuration
    # -------------------------------------------------------------------------

    GITHUB_TOKEN: str | None = Field(
        default=None,
        description="Personal access token for GitHub (optional, raises rate limits)"
    )

    GITHUB_API_BASE: str = Field(
        default="https://api.github.com",
        description="Base URL of the GitHub REST API"
    )

    USER_AGENT: str = Field(
        default="GitHub-Contributors-Badge-Service",
        min_length=1,
        description="User-Agent header sent to GitHub"
    )

    UPSTREAM_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        gt=0,
        description="Timeout for contributor and repository API calls"
    )

    AVATAR_TIMEOUT_SECONDS: float = Field(
        default=5.0,
        gt=0,
        description="Timeout for each avatar image download"
    )

    # -------------------------------------------------------------------------
    # Pagination & Avatar Inlining
    # -------------------------------------------------------------------------

    MAX_PAGES: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Hard ceiling on pages requested for limit=all"
    )

    PAGE_DELAY_SECONDS: float = Field(
        default=0.1,
        ge=0.0,
        description="Pause between page requests to stay clear of throttling"
    )

    AVATAR_BATCH_SIZE: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Avatars fetched concurrently per batch"
    )

    MAX_INLINED_AVATARS: int = Field(
        default=50,
        ge=0,
        description="Avatars embedded for limit=all badges (the rest use placeholders)"
    )

    # -------------------------------------------------------------------------
    # Cache
    # -------------------------------------------------------------------------

    CACHE_TTL_SECONDS: float = Field(
        default=300.0,
        gt=0,
        description="Freshness window for cached contributor lists"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, auto-reload)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    PORT: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="*",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "https://a.dev, https://b.dev" -> ["https://a.dev", "https://b.dev"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def has_github_token(self) -> bool:
        return bool(self.GITHUB_TOKEN)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
