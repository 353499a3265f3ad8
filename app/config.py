"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret used to verify the identity provider JWT tokens",
        min_length=1,
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    jwt_audience: str | None = Field(
        default=None,
        description="Expected audience claim, skipped when not configured",
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before locally minted access tokens expire",
        gt=0,
    )
    app_timezone: str = Field(default="UTC", description="Timezone used for timestamps")
    feed_default_limit: int = Field(
        default=20, description="Page size used when the caller omits a usable limit", ge=1
    )
    feed_max_limit: int = Field(
        default=100, description="Upper bound applied to requested page sizes", ge=1
    )
    upstream_timeout_seconds: float = Field(
        default=5.0,
        description="Timeout applied to each friendship, activity and profile lookup",
        gt=0,
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:8081"],
        description="Origins allowed to call the API from a browser",
    )
    log_level: str = Field(default="INFO", description="Root logging level")

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"

    @model_validator(mode="after")
    def _validate_feed_limits(self) -> "Settings":
        if self.feed_default_limit > self.feed_max_limit:
            raise ValueError("FEED_DEFAULT_LIMIT cannot exceed FEED_MAX_LIMIT")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
