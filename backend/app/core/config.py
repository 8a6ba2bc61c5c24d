"""
config.py — Centralized Application Configuration Loader

Purpose:
- Define a single source of truth for application settings.
- Load and validate environment variables from `.env` or OS environment.

Core Settings:
- Supabase connection (project URL + keys) used for spots, saved spots, reviews.
- Optional JWT secret so bearer tokens can be verified without a round trip.
- Nominatim settings for the reverse-geocoding proxy.

This module does NOT:
- Open any connections.
- Make external API calls.
- Modify runtime settings.
"""

from pathlib import Path
from typing import Any, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# config.py is at: backend/app/core/config.py
# .env should be at: backend/.env
_CONFIG_DIR = Path(__file__).parent  # backend/app/core
_BACKEND_DIR = _CONFIG_DIR.parent.parent  # backend
_ENV_FILE = _BACKEND_DIR / ".env"

if _ENV_FILE.exists():
    _ENV_FILE_PATH = str(_ENV_FILE.resolve())
else:
    # Fallback: use relative path (pydantic will look in CWD)
    _ENV_FILE_PATH = ".env"


class Settings(BaseSettings):
    """
    SlopeScout backend settings.

    Only the Supabase values are needed for the spot endpoints; the app still
    boots without them so that the health check and geocoding proxy work.
    """
    # Supabase
    SUPABASE_URL: str = Field(
        "",
        description="Supabase project URL",
    )
    SUPABASE_ANON_KEY: str = Field(
        "",
        description="Supabase anon (public) key, used when no service role key is set",
    )
    SUPABASE_SERVICE_ROLE_KEY: str = Field(
        "",
        description="Supabase service role key for server-side table access",
    )
    SUPABASE_JWT_SECRET: str = Field(
        "",
        description="JWT secret of the Supabase project; enables local token verification",
    )
    SUPABASE_JWT_AUDIENCE: str = Field(
        "authenticated",
        description="Expected `aud` claim of Supabase access tokens",
    )

    # Reverse geocoding
    NOMINATIM_REVERSE_URL: str = Field(
        "https://nominatim.openstreetmap.org/reverse",
        description="Nominatim reverse geocoding endpoint",
    )
    NOMINATIM_USER_AGENT: str = Field(
        "SlopeScoutApp/1.0 (contact: support@slopescout.app)",
        description="User-Agent header required by the Nominatim usage policy",
    )
    NOMINATIM_TIMEOUT_SECONDS: float = Field(
        10.0,
        description="HTTP timeout for Nominatim requests (seconds)",
    )

    # App
    LOG_LEVEL: str = Field(
        "INFO",
        description="Root log level",
    )
    CORS_ALLOW_ORIGINS: List[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed by the CORS middleware",
    )

    # Profile overview
    PROFILE_SAVED_SPOTS_LIMIT: int = Field(
        5,
        gt=0,
        description="Number of saved spots shown on the profile overview",
    )
    PROFILE_REVIEWS_LIMIT: int = Field(
        10,
        gt=0,
        description="Number of reviews shown on the profile overview",
    )

    @field_validator(
        "SUPABASE_URL",
        "SUPABASE_ANON_KEY",
        "SUPABASE_SERVICE_ROLE_KEY",
        "SUPABASE_JWT_SECRET",
        mode="before",
    )
    @classmethod
    def strip_secret(cls, v: Any) -> str:
        """Strip whitespace from keys pasted into .env files."""
        if isinstance(v, str):
            return v.strip()
        return v or ""

    @property
    def supabase_key(self) -> str:
        """Key used by the server-side client (service role wins over anon)."""
        return self.SUPABASE_SERVICE_ROLE_KEY or self.SUPABASE_ANON_KEY

    @property
    def supabase_configured(self) -> bool:
        return bool(self.SUPABASE_URL and self.supabase_key)

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE_PATH,
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Module-level instance shared by every importer
settings = Settings()
