"""WeatherAPI.com current conditions and daily forecast provider."""

from __future__ import annotations

from .base import WeatherProvider
from .models import WeatherRequest


class WeatherAPIProvider(WeatherProvider):
    """api.weatherapi.com forecast endpoint.

    The free plan serves up to 14 forecast days; the request is clamped to
    that range so the response always covers what gets parsed.
    """

    provider_id = "weatherapi"
    base_url = "https://api.weatherapi.com/v1/forecast.json"
    max_forecast_days = 14

    current_condition_path = ("current", "condition", "text")
    forecast_path = ("forecast", "forecastday")
    forecast_date_path = ("date",)
    forecast_condition_path = ("day", "condition", "text")

    def build_request(self, city: str, days: int, api_key: str) -> WeatherRequest:
        request_days = max(1, min(days, self.max_forecast_days))
        return WeatherRequest(
            provider_id=self.provider_id,
            url=self.base_url,
            params={
                "key": api_key,
                "q": city,
                "days": str(request_days),
                "aqi": "no",
                "alerts": "no",
            },
        )
