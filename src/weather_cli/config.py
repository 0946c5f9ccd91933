"""Typed settings loader and credential-file location."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigDirUnavailable, ConfigError

CONFIG_SUFFIX = ".json"


class Settings(BaseSettings):
    """Application settings loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    weather_config_dir: Path | None = Field(default=None, alias="WEATHER_CONFIG_DIR")
    weather_config_name: str = Field(default="weather-config", alias="WEATHER_CONFIG_NAME")
    weather_timeout_seconds: float = Field(default=15.0, alias="WEATHER_TIMEOUT_SECONDS")
    weather_strict_parsing: bool = Field(default=True, alias="WEATHER_STRICT_PARSING")
    weather_user_agent: str = Field(default="weather-cli/0.1", alias="WEATHER_USER_AGENT")
    weather_log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        alias="WEATHER_LOG_LEVEL",
    )

    @field_validator("weather_config_dir", mode="before")
    @classmethod
    def empty_string_to_none(cls, value: Any) -> Any:
        """Treat an empty env-string as an unset directory override."""
        if isinstance(value, str) and value.strip() == "":
            return None
        return value

    @field_validator("weather_log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @model_validator(mode="after")
    def validate_values(self) -> Settings:
        """Reject settings that would produce an unusable file path or client."""
        name = self.weather_config_name.strip()
        if not name:
            raise ValueError("WEATHER_CONFIG_NAME must not be empty.")
        if "/" in name or "\\" in name:
            raise ValueError("WEATHER_CONFIG_NAME must be a bare file name, not a path.")
        self.weather_config_name = name
        if self.weather_timeout_seconds <= 0:
            raise ValueError("WEATHER_TIMEOUT_SECONDS must be > 0.")
        if not self.weather_user_agent.strip():
            raise ValueError("WEATHER_USER_AGENT must not be empty.")
        return self

    def safe_summary(self) -> dict[str, Any]:
        """Return config summary safe for logging (no credentials)."""
        return {
            "config_dir": str(self.weather_config_dir) if self.weather_config_dir else None,
            "config_name": self.weather_config_name,
            "timeout_seconds": self.weather_timeout_seconds,
            "strict_parsing": self.weather_strict_parsing,
            "log_level": self.weather_log_level,
        }


def load_settings() -> Settings:
    """Load and validate settings, raising ConfigError on failure."""
    try:
        return Settings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed reading environment/.env: {exc}") from exc


def platform_config_dir() -> Path:
    """Return the per-user configuration directory for the current platform."""
    try:
        if sys.platform == "win32":
            appdata = os.environ.get("APPDATA")
            if appdata:
                return Path(appdata)
            return Path.home() / "AppData" / "Roaming"
        if sys.platform == "darwin":
            return Path.home() / "Library" / "Application Support"
        xdg = os.environ.get("XDG_CONFIG_HOME", "").strip()
        # XDG requires an absolute path; relative values are ignored.
        if xdg and Path(xdg).is_absolute():
            return Path(xdg)
        return Path.home() / ".config"
    except RuntimeError as exc:
        raise ConfigDirUnavailable(f"No configuration directory available: {exc}") from exc


def resolve_credentials_path(settings: Settings) -> Path:
    """Resolve the credential file path once per invocation."""
    directory = settings.weather_config_dir or platform_config_dir()
    return directory.expanduser() / f"{settings.weather_config_name}{CONFIG_SUFFIX}"
