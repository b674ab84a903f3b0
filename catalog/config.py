# catalog/config.py
from typing import List, Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables (and .env)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = "0.0.0.0"
    port: int = 5000

    # Shared secret expected in the `token` header on write routes
    api_token: str = "12345"

    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"

    environment: str = "local"
    cors_origins: List[str] = ["*"]


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings (tests)."""
    global _settings
    _settings = None
