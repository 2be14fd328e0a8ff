# backend/shopmgr/core/settings.py
"""
Shop Manager - Configuration Management with pydantic-settings

- Loads from environment and root .env
- Validates and normalizes values
- Cached singleton via get_settings()
"""
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# backend/shopmgr/core/settings.py -> <repo>/.env
_ENV_FILE = Path(__file__).resolve().parent.parent.parent.parent / ".env"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_LOG_FORMATS = ("json", "text")


class Settings(BaseSettings):
    """
    Application settings with validation.

    Environment variables take precedence over .env file values.
    """

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ===================
    # Application Settings
    # ===================
    PROJECT_NAME: str = "Shop Manager"
    VERSION: str = "1.0.0"
    DEBUG: bool = Field(default=False, description="Enable debug mode")
    ENVIRONMENT: str = Field(default="development", description="Deployment environment")

    # ===================
    # Database Settings
    # ===================
    DATABASE_URL: str = Field(
        default="sqlite:///./shopmgr.db", description="SQLAlchemy database URL"
    )
    DB_ECHO: bool = Field(default=False, description="Echo SQL statements")
    SLOW_QUERY_THRESHOLD: float = Field(
        default=1.0, description="Queries slower than this (seconds) log as ERROR"
    )
    WARN_QUERY_THRESHOLD: float = Field(
        default=0.5, description="Queries slower than this (seconds) log as WARNING"
    )

    # ===================
    # Logging
    # ===================
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"  # json or text
    LOG_FILE: Optional[str] = None

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}, got {v!r}")
        return level

    @field_validator("LOG_FORMAT")
    @classmethod
    def normalize_log_format(cls, v: str) -> str:
        fmt = v.strip().lower()
        if fmt not in _LOG_FORMATS:
            raise ValueError(f"LOG_FORMAT must be 'json' or 'text', got {v!r}")
        return fmt

    # ===================
    # Work Logs
    # ===================
    WORK_LOG_TRUNCATE_TO_MINUTES: bool = Field(
        default=True,
        description="Truncate elapsed work time to whole minutes before converting to hours",
    )

    @model_validator(mode="after")
    def check_query_thresholds(self):
        """Thresholds must be positive and ordered."""
        if self.WARN_QUERY_THRESHOLD <= 0 or self.SLOW_QUERY_THRESHOLD <= 0:
            raise ValueError("Query thresholds must be > 0")
        if self.WARN_QUERY_THRESHOLD > self.SLOW_QUERY_THRESHOLD:
            raise ValueError(
                "WARN_QUERY_THRESHOLD must not exceed SLOW_QUERY_THRESHOLD, "
                f"got {self.WARN_QUERY_THRESHOLD} > {self.SLOW_QUERY_THRESHOLD}"
            )
        return self

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    """Singleton settings loader (cached)."""
    return Settings()


settings = get_settings()
