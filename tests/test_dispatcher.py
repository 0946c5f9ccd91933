"""Dispatcher: configure round trip and fetch orchestration."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from weather_cli.credentials import CredentialStore
from weather_cli.dispatcher import Dispatcher
from weather_cli.exceptions import MissingCredential, NetworkError, UnknownProvider
from weather_cli.providers import WeatherRequest, build_default_registry

LITERAL_BODY = (
    '{"current":{"condition":{"text":"Sunny"}},"forecast":{"forecastday":'
    '[{"date":"2024-01-01","day":{"condition":{"text":"Cloudy"}}}]}}'
)


class _RecordingTransport:
    def __init__(self, body: str = LITERAL_BODY, error: Exception | None = None) -> None:
        self.body = body
        self.error = error
        self.requests: list[WeatherRequest] = []

    def get_text(self, request: WeatherRequest) -> str:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.body


def _dispatcher(tmp_path: Path, transport: _RecordingTransport) -> Dispatcher:
    return Dispatcher(
        credentials_path=tmp_path / "weather-config.json",
        registry=build_default_registry(),
        transport=transport,
        logger=logging.getLogger("test_dispatcher"),
    )


def _seed(tmp_path: Path, credentials: dict[str, str]) -> None:
    (tmp_path / "weather-config.json").write_text(json.dumps(credentials), encoding="utf-8")


@pytest.mark.parametrize(
    ("provider", "key"),
    [("weatherapi", "KEY123"), ("openweather", "  spaced-key \n"), ("someday-provider", "k")],
)
def test_configure_round_trip(tmp_path: Path, provider: str, key: str) -> None:
    dispatcher = _dispatcher(tmp_path, _RecordingTransport())
    path = dispatcher.configure(provider, key)

    assert path == tmp_path / "weather-config.json"
    assert CredentialStore.load(path).get(provider) == key.strip()


def test_configure_unregistered_provider_warns(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    dispatcher = _dispatcher(tmp_path, _RecordingTransport())
    with caplog.at_level(logging.WARNING, logger="test_dispatcher"):
        dispatcher.configure("bogus", "k")
    assert "unregistered provider 'bogus'" in caplog.text


def test_missing_credential_halts_before_network(tmp_path: Path) -> None:
    transport = _RecordingTransport()
    dispatcher = _dispatcher(tmp_path, transport)
    for days in (0, 1, 5):
        with pytest.raises(MissingCredential, match="weatherapi"):
            dispatcher.fetch_weather("weatherapi", "Toledo", days)
    assert transport.requests == []


def test_credential_for_other_provider_does_not_count(tmp_path: Path) -> None:
    _seed(tmp_path, {"openweather": "OW"})
    transport = _RecordingTransport()
    with pytest.raises(MissingCredential):
        _dispatcher(tmp_path, transport).fetch_weather("weatherapi", "Toledo", 0)
    assert transport.requests == []


def test_empty_stored_key_is_missing(tmp_path: Path) -> None:
    _seed(tmp_path, {"weatherapi": ""})
    with pytest.raises(MissingCredential):
        _dispatcher(tmp_path, _RecordingTransport()).fetch_weather("weatherapi", "Toledo", 0)


def test_unknown_provider_is_non_fatal_and_offline(tmp_path: Path) -> None:
    _seed(tmp_path, {"bogus": "K"})
    transport = _RecordingTransport()
    with pytest.raises(UnknownProvider) as excinfo:
        _dispatcher(tmp_path, transport).fetch_weather("bogus", "Toledo", 1)
    assert excinfo.value.fatal is False
    assert transport.requests == []


def test_literal_end_to_end_example(tmp_path: Path) -> None:
    _seed(tmp_path, {"weatherapi": "KEY123"})
    transport = _RecordingTransport()
    result = _dispatcher(tmp_path, transport).fetch_weather("weatherapi", "Toledo", 1)

    assert result.city == "Toledo"
    assert result.current_condition == "Sunny"
    assert result.forecast == []
    assert len(transport.requests) == 1
    assert transport.requests[0].params["key"] == "KEY123"
    assert transport.requests[0].params["q"] == "Toledo"


def test_forecast_branch_with_two_days(tmp_path: Path) -> None:
    _seed(tmp_path, {"weatherapi": "KEY123"})
    body = json.dumps(
        {
            "current": {"condition": {"text": "Sunny"}},
            "forecast": {
                "forecastday": [
                    {"date": "2024-01-01", "day": {"condition": {"text": "Cloudy"}}},
                    {"date": "2024-01-02", "day": {"condition": {"text": "Rain"}}},
                ]
            },
        }
    )
    result = _dispatcher(tmp_path, _RecordingTransport(body)).fetch_weather(
        "weatherapi", "Toledo", 2
    )
    assert [(e.date, e.condition) for e in result.forecast] == [
        ("2024-01-01", "Cloudy"),
        ("2024-01-02", "Rain"),
    ]


def test_network_error_propagates_unchanged(tmp_path: Path) -> None:
    _seed(tmp_path, {"openweather": "OW"})
    error = NetworkError("boom", status_code=503)
    with pytest.raises(NetworkError) as excinfo:
        _dispatcher(tmp_path, _RecordingTransport(error=error)).fetch_weather(
            "openweather", "Toledo", 0
        )
    assert excinfo.value is error


def test_list_providers_reports_configured_state(tmp_path: Path) -> None:
    _seed(tmp_path, {"weatherapi": "KEY", "other": "X"})
    assert _dispatcher(tmp_path, _RecordingTransport()).list_providers() == [
        ("openweather", False),
        ("weatherapi", True),
    ]
