"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    spoonacular_api_key: str | None = None
    spoonacular_base_url: str = "https://api.spoonacular.com"
    api_daily_limit: int = 150
    quota_timezone: str = "UTC"
    remote_timeout_seconds: float = 15
    session_ttl_hours: int = 168
    cache_max_entries: int | None = None
    password_hash_rounds: int = 12
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_api_key(raw: str | None) -> str | None:
    """Return the Spoonacular key, treating blanks and placeholders as unset."""
    if raw is None:
        return None
    cleaned = raw.strip()
    if cleaned in {"", "YOUR_SPOONACULAR_API_KEY"}:
        return None
    return cleaned
