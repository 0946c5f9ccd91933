"""Typed models for provider requests and normalized weather results."""

from __future__ import annotations

from pydantic import BaseModel, Field


class WeatherRequest(BaseModel):
    """HTTP GET description built by a provider.

    `params` is encoded by the transport; nothing here is concatenated into
    the URL by hand.
    """

    provider_id: str
    url: str
    params: dict[str, str] = Field(default_factory=dict)


class ForecastEntry(BaseModel):
    """One forecast day."""

    date: str
    condition: str


class WeatherResult(BaseModel):
    """Normalized current conditions plus optional forecast days."""

    provider_id: str
    city: str
    current_condition: str
    forecast: list[ForecastEntry] = Field(default_factory=list)
