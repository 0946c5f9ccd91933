"""Application exception classes."""

from __future__ import annotations

from enum import StrEnum


class ConfigError(Exception):
    """Raised when runtime settings are invalid or incomplete."""


class ErrorKind(StrEnum):
    """Closed set of failure kinds reported by the CLI."""

    CONFIG_UNREADABLE = "config_unreadable"
    CONFIG_WRITE_FAILED = "config_write_failed"
    CONFIG_DIR_UNAVAILABLE = "config_dir_unavailable"
    MISSING_CREDENTIAL = "missing_credential"
    UNKNOWN_PROVIDER = "unknown_provider"
    NETWORK_ERROR = "network_error"
    RESPONSE_PARSE_ERROR = "response_parse_error"


class WeatherCLIError(Exception):
    """Base class for failures surfaced to the top-level command dispatch."""

    kind: ErrorKind
    fatal: bool = True


class ConfigUnreadable(WeatherCLIError):
    """Raised when the credential file exists but cannot be read or decoded."""

    kind = ErrorKind.CONFIG_UNREADABLE


class ConfigWriteFailed(WeatherCLIError):
    """Raised when persisting the credential file fails."""

    kind = ErrorKind.CONFIG_WRITE_FAILED


class ConfigDirUnavailable(WeatherCLIError):
    """Raised when no per-user configuration directory can be determined."""

    kind = ErrorKind.CONFIG_DIR_UNAVAILABLE


class MissingCredential(WeatherCLIError):
    """Raised when no API key is stored for the requested provider."""

    kind = ErrorKind.MISSING_CREDENTIAL

    def __init__(self, provider_id: str) -> None:
        super().__init__(
            f"empty configuration for provider '{provider_id}'; "
            f"run `weather configure {provider_id}` first."
        )
        self.provider_id = provider_id


class UnknownProvider(WeatherCLIError):
    """Raised when a provider id has no registered strategy."""

    kind = ErrorKind.UNKNOWN_PROVIDER
    fatal = False

    def __init__(self, provider_id: str) -> None:
        super().__init__(f"unknown provider '{provider_id}'")
        self.provider_id = provider_id


class NetworkError(WeatherCLIError):
    """Raised when the HTTP request fails or returns an error status."""

    kind = ErrorKind.NETWORK_ERROR

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ResponseParseError(WeatherCLIError):
    """Raised when a provider response is not JSON or misses a required field."""

    kind = ErrorKind.RESPONSE_PARSE_ERROR
