"""Configuration settings for the OSRM client."""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client defaults loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # OSRM engine
    osrm_base_url: str = "http://router.project-osrm.org"
    osrm_api_version: str = "v1"
    osrm_default_profile: str = "driving"

    # HTTP transport
    osrm_timeout_seconds: float = 30.0
    osrm_user_agent: str = "osrm-client/0.1.0"


@lru_cache
def get_settings() -> Settings:
    """Get cached client settings."""
    return Settings()
