"""OpenWeather current-conditions provider."""

from __future__ import annotations

from .base import WeatherProvider
from .models import WeatherRequest


class OpenWeatherProvider(WeatherProvider):
    """api.openweathermap.org current weather; forecasts are not supported."""

    provider_id = "openweather"
    base_url = "https://api.openweathermap.org/data/2.5/weather"
    max_forecast_days = 0

    current_condition_path = ("weather", 0, "description")

    def build_request(self, city: str, days: int, api_key: str) -> WeatherRequest:
        # `days` is accepted for interface parity and ignored.
        return WeatherRequest(
            provider_id=self.provider_id,
            url=self.base_url,
            params={"q": city, "APPID": api_key},
        )
