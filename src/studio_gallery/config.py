"""Application configuration."""

import os
from uuid import UUID

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    storage_bucket: str = "photos"
    photographer_tokens: str | None = None
    default_expiry_days: int = 30
    signed_url_ttl_seconds: int = 86400
    watermark_text: str = "Preview Only"
    watermark_font_path: str | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_photographer_tokens(raw: str | None) -> dict[str, UUID]:
    """Parse `token:photographer-id` pairs from env."""
    if raw is None:
        return {}
    tokens: dict[str, UUID] = {}
    for chunk in raw.split(","):
        token, _, photographer_id = chunk.strip().rpartition(":")
        if not token or not photographer_id:
            continue
        try:
            tokens[token.strip()] = UUID(photographer_id.strip())
        except ValueError:
            continue
    return tokens
