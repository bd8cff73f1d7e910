# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.SUPABASE_URL)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# Supabase credentials are NOT required at startup: a missing URL or key is
# reported loudly by lib/supabase_client.py the first time a client is built.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------

    SUPABASE_URL: str = Field(
        default="",
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_ANON_KEY: str = Field(
        default="",
        description="Supabase anon/public API key"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        default="",
        description="Supabase service_role key (bypasses RLS, needed for bucket management)"
    )

    SUPABASE_JWT_SECRET: str = Field(
        default="",
        description="Supabase JWT secret used to verify admin bearer tokens"
    )

    # -------------------------------------------------------------------------
    # Auth Front End
    # -------------------------------------------------------------------------

    AUTH_PUBLISHABLE_KEY: str = Field(
        default="",
        description="Publishable key of the hosted sign-in widget used by the admin UI"
    )

    ADMIN_EMAILS: str = Field(
        default="",
        description="Comma-separated allowlist of admin emails (empty = any signed-in user)"
    )

    # -------------------------------------------------------------------------
    # Content Backend
    # -------------------------------------------------------------------------

    DATA_BACKEND: Literal["supabase", "local"] = Field(
        default="supabase",
        description="Where content lives: Supabase tables or local draft JSON files"
    )

    LOCAL_DATA_DIR: str = Field(
        default=".portfolio-data",
        description="Directory holding the local draft blobs (siteSettings, projects, contactSubmissions)"
    )

    # -------------------------------------------------------------------------
    # Media Storage
    # -------------------------------------------------------------------------

    DEFAULT_BUCKET: str = Field(
        default="portfolio",
        description="Bucket used when an upload does not name one"
    )

    PROJECTS_BUCKET: str = Field(
        default="portfolio-projects",
        description="Bucket for project images"
    )

    PROFILE_BUCKET: str = Field(
        default="portfolio-profile",
        description="Bucket for profile and hero images"
    )

    MAX_UPLOAD_SIZE_MB: int = Field(
        default=5,
        ge=1,
        le=100,
        description="Maximum file upload size in MB"
    )

    ACCEPTED_FILE_TYPES: str = Field(
        default="image/*",
        description="Accepted MIME types (comma-separated, 'type/*' wildcards allowed)"
    )

    UPLOAD_NAMING: Literal["unique", "original"] = Field(
        default="unique",
        description="Object naming on upload: random unique names or the original filename (overwrites)"
    )

    INIT_STORAGE_ON_STARTUP: bool = Field(
        default=False,
        description="Provision the standard buckets when the API starts"
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

    CORS_ORIGINS: str = Field(
        default="http://localhost:5173",
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
        """Parse CORS_ORIGINS string into a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def accepted_file_types_list(self) -> list[str]:
        """
        Parse ACCEPTED_FILE_TYPES string into a list.

        Example: "image/png, image/jpeg" -> ["image/png", "image/jpeg"]
        """
        return [t.strip().lower() for t in self.ACCEPTED_FILE_TYPES.split(",") if t.strip()]

    @property
    def admin_emails_list(self) -> list[str]:
        return [e.strip().lower() for e in self.ADMIN_EMAILS.split(",") if e.strip()]

    @property
    def site_buckets(self) -> tuple[str, str, str]:
        """The buckets the site stores images in."""
        return (self.DEFAULT_BUCKET, self.PROJECTS_BUCKET, self.PROFILE_BUCKET)

    @property
    def max_upload_size_bytes(self) -> int:
        """Convert MB to bytes for file size validation."""
        return self.MAX_UPLOAD_SIZE_MB * 1024 * 1024

    @property
    def missing_supabase_settings(self) -> list[str]:
        """Names of the Supabase variables that are not set."""
        missing = []
        if not self.SUPABASE_URL:
            missing.append("SUPABASE_URL")
        if not (self.SUPABASE_SERVICE_KEY or self.SUPABASE_ANON_KEY):
            missing.append("SUPABASE_SERVICE_KEY")
        return missing

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
