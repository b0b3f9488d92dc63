"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str | None = None
    supabase_service_key: str | None = None
    whop_api_key: str | None = None
    whop_app_id: str | None = None
    whop_base_url: str = "https://api.whop.com/api/v1"
    whop_token_jwk: str | None = None
    timezone: str = "UTC"
    weight_goal_slope: float | None = 0.4
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def missing_supabase_settings(settings: Settings) -> list[str]:
    """Return the names of unset database settings."""
    missing = []
    if not settings.supabase_url:
        missing.append("SUPABASE_URL")
    if not settings.supabase_service_key:
        missing.append("SUPABASE_SERVICE_KEY")
    return missing


def missing_whop_settings(settings: Settings) -> list[str]:
    """Return the names of unset Whop settings."""
    missing = []
    if not settings.whop_api_key:
        missing.append("WHOP_API_KEY")
    if not settings.whop_app_id:
        missing.append("WHOP_APP_ID")
    return missing
