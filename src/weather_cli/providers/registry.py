"""Provider id -> strategy lookup."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from ..exceptions import UnknownProvider
from .base import WeatherProvider
from .openweather import OpenWeatherProvider
from .weatherapi import WeatherAPIProvider


class ProviderRegistry:
    """Holds one strategy instance per provider id."""

    def __init__(self, providers: Iterable[WeatherProvider] = ()) -> None:
        self._providers: dict[str, WeatherProvider] = {}
        for provider in providers:
            self.register(provider)

    def register(self, provider: WeatherProvider) -> None:
        if provider.provider_id in self._providers:
            raise ValueError(f"Provider '{provider.provider_id}' is already registered.")
        self._providers[provider.provider_id] = provider

    def get(self, provider_id: str) -> WeatherProvider | None:
        return self._providers.get(provider_id.strip())

    def resolve(self, provider_id: str) -> WeatherProvider:
        """Return the strategy for `provider_id` or raise UnknownProvider."""
        provider = self.get(provider_id)
        if provider is None:
            raise UnknownProvider(provider_id.strip())
        return provider

    def provider_ids(self) -> list[str]:
        return sorted(self._providers)

    def __contains__(self, provider_id: object) -> bool:
        return isinstance(provider_id, str) and provider_id.strip() in self._providers

    def __iter__(self) -> Iterator[WeatherProvider]:
        return iter(self._providers.values())


def build_default_registry(*, strict: bool = True) -> ProviderRegistry:
    """Registry with the built-in providers."""
    return ProviderRegistry(
        [
            OpenWeatherProvider(strict=strict),
            WeatherAPIProvider(strict=strict),
        ]
    )
