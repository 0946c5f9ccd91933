"""Provider-agnostic weather strategy interface."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any, ClassVar

from ..exceptions import ResponseParseError
from .models import ForecastEntry, WeatherRequest, WeatherResult

JsonPath = tuple[str | int, ...]

_MISSING = object()


def format_path(path: JsonPath) -> str:
    """Render a JSON path as `a.b[0].c` for error messages."""
    rendered = ""
    for part in path:
        if isinstance(part, int):
            rendered += f"[{part}]"
        else:
            rendered += f".{part}" if rendered else part
    return rendered or "<root>"


def lookup_path(payload: Any, path: JsonPath) -> Any:
    """Walk `path` through nested dicts/lists, returning `_MISSING` on any miss."""
    current = payload
    for part in path:
        if isinstance(part, int):
            if not isinstance(current, list) or not (0 <= part < len(current)):
                return _MISSING
            current = current[part]
        else:
            if not isinstance(current, dict) or part not in current:
                return _MISSING
            current = current[part]
    return current


class WeatherProvider(ABC):
    """Base strategy: build a provider request and parse its JSON response.

    Subclasses declare where the interesting fields live through the class
    level JSON paths; `parse_response` is shared. Forecast parsing is skipped
    when `forecast_path` is None.
    """

    provider_id: ClassVar[str]
    base_url: ClassVar[str]
    max_forecast_days: ClassVar[int] = 0

    current_condition_path: ClassVar[JsonPath]
    forecast_path: ClassVar[JsonPath | None] = None
    forecast_date_path: ClassVar[JsonPath] = ("date",)
    forecast_condition_path: ClassVar[JsonPath] = ()

    def __init__(self, *, strict: bool = True) -> None:
        self.strict = strict

    @abstractmethod
    def build_request(self, city: str, days: int, api_key: str) -> WeatherRequest:
        """Return the GET request for `city` authenticated with `api_key`."""

    def forecast_days_for(self, days: int) -> int:
        """Number of forecast entries a result must carry for `days` requested."""
        if days < 2 or self.forecast_path is None:
            return 0
        return min(days, self.max_forecast_days)

    def parse_response(self, raw_json: str, *, city: str, days: int) -> WeatherResult:
        """Normalize a raw JSON body into a WeatherResult."""
        try:
            payload = json.loads(raw_json)
        except (TypeError, ValueError) as exc:
            raise ResponseParseError(
                f"{self.provider_id} returned a non-JSON response: {exc}"
            ) from exc
        if not isinstance(payload, dict):
            raise ResponseParseError(
                f"{self.provider_id} returned unexpected payload type "
                f"{type(payload).__name__}."
            )

        current = self._text_at(payload, self.current_condition_path)
        forecast = self._parse_forecast(payload, self.forecast_days_for(days))
        return WeatherResult(
            provider_id=self.provider_id,
            city=city,
            current_condition=current,
            forecast=forecast,
        )

    def _parse_forecast(self, payload: dict[str, Any], wanted: int) -> list[ForecastEntry]:
        if wanted == 0 or self.forecast_path is None:
            return []

        days_payload = lookup_path(payload, self.forecast_path)
        if not isinstance(days_payload, list):
            if self.strict:
                raise ResponseParseError(
                    f"{self.provider_id} response missing forecast list at "
                    f"'{format_path(self.forecast_path)}'."
                )
            days_payload = []
        if self.strict and len(days_payload) < wanted:
            raise ResponseParseError(
                f"{self.provider_id} response has {len(days_payload)} forecast days, "
                f"expected {wanted}."
            )

        entries: list[ForecastEntry] = []
        for index in range(wanted):
            item = days_payload[index] if index < len(days_payload) else {}
            entries.append(
                ForecastEntry(
                    date=self._text_at(item, self.forecast_date_path, prefix=(index,)),
                    condition=self._text_at(
                        item, self.forecast_condition_path, prefix=(index,)
                    ),
                )
            )
        return entries

    def _text_at(self, payload: Any, path: JsonPath, prefix: JsonPath = ()) -> str:
        value = lookup_path(payload, path)
        if isinstance(value, str):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        if self.strict:
            full_path = (self.forecast_path or ()) + prefix + path if prefix else path
            raise ResponseParseError(
                f"{self.provider_id} response missing required field "
                f"'{format_path(full_path)}'."
            )
        return ""
