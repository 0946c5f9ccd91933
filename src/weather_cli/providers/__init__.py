"""Weather provider strategies."""

from .base import WeatherProvider
from .models import ForecastEntry, WeatherRequest, WeatherResult
from .openweather import OpenWeatherProvider
from .registry import ProviderRegistry, build_default_registry
from .weatherapi import WeatherAPIProvider

__all__ = [
    "ForecastEntry",
    "OpenWeatherProvider",
    "ProviderRegistry",
    "WeatherAPIProvider",
    "WeatherProvider",
    "WeatherRequest",
    "WeatherResult",
    "build_default_registry",
]
