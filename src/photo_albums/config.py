"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    admin_token: str
    photo_api_base_url: str = "http://localhost:8080"
    photo_api_token: str | None = None
    request_timeout_seconds: float = 15
    photo_timeout_seconds: float = 20
    blob_dir: str | None = None
    max_upload_bytes: int = 5 * 1024 * 1024
    fetch_all_or_nothing: bool = True
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def normalize_base_url(raw: str) -> str:
    """Strip whitespace and trailing slashes from a service base URL."""
    cleaned = raw.strip().rstrip("/")
    if not cleaned:
        raise ValueError("photo_api_base_url must not be empty")
    return cleaned
