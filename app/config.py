# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.POLAR_API_URL)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# Provider keys (OpenAI, Polar, Resend) are optional. Handlers report
# "not configured" per request instead of refusing to start.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses pydantic-settings to:
    - Automatically load from .env file
    - Validate types and constraints
    - Provide sensible defaults for development

    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # Supabase Configuration (Auth)
    # -------------------------------------------------------------------------

    SUPABASE_URL: str = Field(
        ...,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_ANON_KEY: str = Field(
        ...,
        description="Supabase anon/public API key"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="Supabase service_role key (needed for user admin operations)"
    )

    SUPABASE_JWT_SECRET: str = Field(
        default="",
        description="Legacy HS256 JWT secret used to verify Supabase access tokens"
    )

    # -------------------------------------------------------------------------
    # OpenAI Configuration
    # -------------------------------------------------------------------------

    OPENAI_API_KEY: str = Field(
        default="",
        description="OpenAI API key for report and style image generation"
    )

    OPENAI_TEXT_MODEL: str = Field(
        default="gpt-4o-mini",
        description="Vision-capable chat model used for the style report"
    )

    ANALYZE_TIMEOUT_SECONDS: float = Field(
        default=28.0,
        gt=0,
        le=300,
        description="Wall-clock limit for the parallel report + image requests"
    )

    # -------------------------------------------------------------------------
    # Polar Configuration (Payments)
    # -------------------------------------------------------------------------

    POLAR_ACCESS_TOKEN: str = Field(
        default="",
        description="Polar organization access token"
    )

    POLAR_API_URL: str = Field(
        default="https://sandbox-api.polar.sh",
        description="Polar API base URL (sandbox by default)"
    )

    POLAR_PRODUCT_ID: str = Field(
        default="147c1b35-42a4-4a5d-82a2-865f282be343",
        description="Product sold by the style report checkout"
    )

    REFUND_MAX_ATTEMPTS: int = Field(
        default=4,
        ge=1,
        le=10,
        description="Order lookups before giving up on a refund"
    )

    REFUND_BACKOFF_SECONDS: float = Field(
        default=3.0,
        ge=0,
        description="Delay multiplier between order lookups (delay = backoff * attempt)"
    )

    # -------------------------------------------------------------------------
    # Resend Configuration (Email)
    # -------------------------------------------------------------------------

    RESEND_API_KEY: str = Field(
        default="",
        description="Resend API key for report emails"
    )

    RESEND_API_URL: str = Field(
        default="https://api.resend.com",
        description="Resend API base URL"
    )

    EMAIL_FROM: str = Field(
        default="AJY Stylist <onboarding@resend.dev>",
        description="Sender used for report emails"
    )

    # -------------------------------------------------------------------------
    # Redis Configuration (for Celery)
    # -------------------------------------------------------------------------

    REDIS_URL: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL for Celery broker"
    )

    CELERY_TASK_ALWAYS_EAGER: bool = Field(
        default=False,
        description="Run Celery tasks inline (tests and local development)"
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
        description="Enable debug mode (verbose logging)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="*",
        description="Allowed CORS origins (comma-separated, * for any)"
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

        Example: "http://localhost:5173, https://ajy.style" -> ["http://localhost:5173", "https://ajy.style"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

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

    Returns:
        Settings: The application settings instance
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
