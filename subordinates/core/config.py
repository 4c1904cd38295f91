"""Application configuration loaded from environment variables."""

import logging
from functools import lru_cache
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Level names accepted for LOG_LEVEL (module-level so validators can use it).
VALID_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%SZ"


class Settings(BaseSettings):
    """Validated application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    APP_ENV: Literal["dev", "prod"] = "dev"
    DEBUG: bool = False
    API_V1_PREFIX: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # Optional JSON files loaded into the finder at startup; set both or neither.
    SEED_ROLES_PATH: str | None = None
    SEED_USERS_PATH: str | None = None

    # Upper bound on roles/users accepted by a single load (HTTP body or file).
    MAX_ITEMS_PER_LOAD: int = 100_000

    @field_validator("API_V1_PREFIX")
    @classmethod
    def validate_api_prefix(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if not v.startswith("/"):
            raise ValueError("API_V1_PREFIX must start with '/' (e.g. /api/v1)")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        normalized = v.strip().upper()
        if normalized not in VALID_LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}")
        return normalized

    @field_validator("SEED_ROLES_PATH", "SEED_USERS_PATH")
    @classmethod
    def validate_seed_path(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("MAX_ITEMS_PER_LOAD")
    @classmethod
    def validate_max_items(cls, v: int) -> int:
        if v < 1 or v > 1_000_000:
            raise ValueError("MAX_ITEMS_PER_LOAD must be between 1 and 1000000")
        return v

    @model_validator(mode="after")
    def validate_seed_pair(self) -> "Settings":
        if (self.SEED_ROLES_PATH is None) != (self.SEED_USERS_PATH is None):
            raise ValueError("SEED_ROLES_PATH and SEED_USERS_PATH must be set together")
        return self


def configure_logging(settings: Settings) -> None:
    """Configure root logging for a process entrypoint (CLI or app startup)."""
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()


settings = get_settings()
