"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./fitpulse.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key used to verify access tokens", min_length=1
    )
    jwt_algorithm: str = Field(
        default="HS256", description="Algorithm used to sign access tokens"
    )
    app_timezone: str = Field(
        default="UTC", description="Timezone used to stamp notifications"
    )
    user_access_cookie: str = Field(
        default="userAccessToken",
        description="Cookie carrying the access token of members",
        min_length=1,
    )
    trainer_access_cookie: str = Field(
        default="trainerAccessToken",
        description="Cookie carrying the access token of trainers",
        min_length=1,
    )
    redis_url: str | None = Field(
        default=None,
        description="Redis URL backing the shared broadcast bus; local bus when unset",
    )
    redis_channel_prefix: str = Field(
        default="fitpulse:notifications:",
        description="Prefix prepended to every Redis pub/sub channel",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173"],
        description="Origins allowed to open realtime connections",
    )
    log_level: str = Field(default="INFO", description="Root logging level")

    @field_validator("redis_url")
    @classmethod
    def _blank_redis_url_disables_bus(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip()

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
