"""SDK settings with Pydantic Settings."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """SDK settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    app_mode: Literal["development", "production"] = Field(
        default="development",
        alias="APP_MODE",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "silent"] = Field(
        default="INFO",
        alias="LOG_LEVEL",
    )

    # Profile API
    profile_api_url: str = Field(
        default="https://api.profiles.example.com",
        alias="PROFILE_API_URL",
    )
    profile_org_token: SecretStr | None = Field(default=None, alias="PROFILE_ORG_TOKEN")
    http_timeout: float = Field(default=30.0, gt=0, alias="PROFILE_HTTP_TIMEOUT")

    # Polling
    search_timeout: float = Field(default=30.0, ge=0, alias="PROFILE_SEARCH_TIMEOUT")
    poll_interval: float = Field(default=0.5, gt=0, alias="PROFILE_POLL_INTERVAL")
    poll_backoff: float = Field(default=1.5, ge=1.0, alias="PROFILE_POLL_BACKOFF")
    poll_max_interval: float = Field(default=5.0, gt=0, alias="PROFILE_POLL_MAX_INTERVAL")

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_mode == "production"

    @property
    def is_silent(self) -> bool:
        """Check if logging should be suppressed."""
        return self.log_level == "silent"

    @property
    def org_token(self) -> str | None:
        """Plain org token, or None when not configured."""
        if self.profile_org_token is None:
            return None
        return self.profile_org_token.get_secret_value()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()  # type: ignore[call-arg]
