"""
Configuration Management for MoneyDay

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Nothing else in the package reads the environment, so it is easy
to see which knobs exist.
"""

from datetime import tzinfo
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Where and how expenses are persisted."""

    model_config = SettingsConfigDict(
        env_prefix="MONEYDAY_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backend: Literal["file", "memory"] = Field(
        default="file",
        description="Storage backend: 'file' keeps data on disk, 'memory' for throwaway sessions"
    )
    directory: Path = Field(
        default=Path("~/.moneyday"),
        description="Directory holding the stored payloads (file backend)"
    )
    key: str = Field(
        default="expenses",
        min_length=1,
        pattern=r"^[A-Za-z0-9_.-]+$",
        description="Key the expense list is stored under"
    )

    @field_validator("directory")
    @classmethod
    def expand_directory(cls, v: Path) -> Path:
        """Expand ~ so the path is usable as-is."""
        return v.expanduser()

    @field_validator("key")
    @classmethod
    def reject_relative_keys(cls, v: str) -> str:
        """'.' and '..' would name a directory, not a file."""
        if v in {".", ".."}:
            raise ValueError(f"Storage key cannot be {v!r}")
        return v


class CalendarSettings(BaseSettings):
    """Calendar used for day and month bucketing."""

    model_config = SettingsConfigDict(
        env_prefix="MONEYDAY_CALENDAR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    timezone: Optional[str] = Field(
        default=None,
        description="IANA timezone name (e.g. 'Europe/Madrid'); unset uses the system local timezone"
    )

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: Optional[str]) -> Optional[str]:
        """Reject unknown timezone names at startup rather than on first query."""
        if v is None or not v.strip():
            return None
        try:
            ZoneInfo(v.strip())
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v.strip()

    def zone(self) -> Optional[tzinfo]:
        """The configured timezone, or None for system local time."""
        return ZoneInfo(self.timezone) if self.timezone else None


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="MONEYDAY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Minimum level for local logs"
    )

    # Display
    currency_symbol: str = Field(
        default="€",
        max_length=5,
        description="Symbol shown after amounts"
    )
    timestamp_format: str = Field(
        default="%d/%m/%Y %H:%M",
        description="strftime format for expense timestamps in lists"
    )
    date_format: str = Field(
        default="%d/%m/%Y",
        description="strftime format for calendar dates"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v

    @property
    def effective_log_level(self) -> str:
        """Debug mode always logs at DEBUG."""
        return "DEBUG" if self.debug_mode else self.log_level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Note: These are loaded lazily to allow partial configuration

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def calendar(self) -> CalendarSettings:
        return CalendarSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, object]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid} plus
    {setting_name_error: message} for the ones that failed.
    Useful for startup checks and the settings page.
    """
    results: dict[str, object] = {}

    settings = get_settings()

    for name in ("storage", "calendar", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
