"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    DEBUG: bool = False
    API_V1_PREFIX: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # Analysis
    MIN_BARS: int = Field(default=30, ge=2)  # shorter series get the neutral response
    MAX_BARS: int = Field(default=1000, ge=2)  # request size cap


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
