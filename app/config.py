"""Application configuration settings."""
from __future__ import annotations

import os
from functools import lru_cache

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Runtime toggles -----------------------------------------------------
# Environnement d'exécution: "dev" | "staging" | "prod"
ENV = os.getenv("APP_ENV", "dev").lower()

# Environments where create_all() is tolerated at startup
DEV_ENVIRONMENTS = {"dev", "local", "test"}


class Settings(BaseSettings):
    """Environment configuration for the Open Payments demo backend."""

    app_env: str = ENV
    database_url: str = "sqlite:///payments.db"
    PORT: int = 3000

    # --- Open Payments gateway -------------------------------------------
    OPEN_PAYMENTS_BASE: str | None = None
    OPEN_PAYMENTS_API_KEY: str = Field(
        default="TEST_KEY",
        validation_alias=AliasChoices("OPEN_PAYMENTS_API_KEY", "OPEN_PAYMENTS_TOKEN"),
    )
    OPEN_PAYMENTS_TIMEOUT_SECONDS: float = 15.0
    DEFAULT_CURRENCY: str = "MXN"
    PAYMENTS_LIST_LIMIT: int = 100

    ALLOW_DB_CREATE_ALL: bool = True
    CORS_ALLOW_ORIGINS: list[str] = ["*"]
    LOG_LEVEL: str = "INFO"
    SENTRY_DSN: str | None = None
    PROMETHEUS_ENABLED: bool = False

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("OPEN_PAYMENTS_BASE")
    @classmethod
    def _strip_empty_base(cls, value: str | None) -> str | None:
        """Normalise an empty base URL to ``None`` so relative refs fail loudly."""

        if value is None:
            return None
        cleaned = value.strip()
        return cleaned or None


class AppInfo(BaseModel):
    name: str = "pay-per-use-backend-openpayments"
    version: str = "0.1.0"


settings = Settings()


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""

    return settings


__all__ = [
    "ENV",
    "DEV_ENVIRONMENTS",
    "Settings",
    "AppInfo",
    "settings",
    "get_settings",
]
