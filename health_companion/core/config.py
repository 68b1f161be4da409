"""Application configuration loaded via Pydantic settings."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed configuration sourced from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    OPENAI_API_KEY: str = Field(...)
    OPENAI_MODEL: str = Field(default="gpt-3.5-turbo")
    OPENAI_MAX_TOKENS: int = Field(default=200)
    OPENAI_TEMPERATURE: float = Field(default=0.7)
    OPENAI_BASE_URL: str | None = Field(default=None)
    OPENAI_TIMEOUT_SECONDS: float | None = Field(default=None)

    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=3000)

    HEALTH_COMPANION_LOG_LEVEL: str = Field(default="info")
    HEALTH_COMPANION_LOG_DIR: Path | None = Field(default=None)

    # Alexa request verification
    ALEXA_SKILL_ID: str | None = Field(default=None)
    ALEXA_VERIFY_TIMESTAMP: bool = Field(default=False)
    ALEXA_TIMESTAMP_TOLERANCE_SECONDS: int = Field(default=150)


settings = Settings()  # type: ignore[call-arg]
config = settings  # Alias used by route modules

# Surface OpenAI credentials for libraries that only check raw environment vars
os.environ.setdefault("OPENAI_API_KEY", settings.OPENAI_API_KEY)


__all__ = ["Settings", "settings", "config"]
