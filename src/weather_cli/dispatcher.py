"""Provider selection, credential resolution and fetch orchestration."""

from __future__ import annotations

import logging
from pathlib import Path

from .credentials import CredentialStore
from .exceptions import MissingCredential
from .providers.models import WeatherResult
from .providers.registry import ProviderRegistry
from .transport import Transport


class Dispatcher:
    """Runs the `configure` and `get` operations for one invocation."""

    def __init__(
        self,
        *,
        credentials_path: Path,
        registry: ProviderRegistry,
        transport: Transport,
        logger: logging.Logger,
    ) -> None:
        self.credentials_path = credentials_path
        self.registry = registry
        self.transport = transport
        self.logger = logger

    def configure(self, provider_id: str, api_key_input: str) -> Path:
        """Store the API key for `provider_id` and return the file written.

        Provider ids are not checked against the registry, so keys for
        providers added later can be stored ahead of time.
        """
        store = CredentialStore.load(self.credentials_path)
        store.set(provider_id, api_key_input)
        store.persist()
        if provider_id.strip() not in self.registry:
            self.logger.warning("Stored key for unregistered provider '%s'", provider_id.strip())
        self.logger.info("Saved API key for provider '%s'", provider_id.strip())
        return store.path

    def fetch_weather(self, provider_id: str, city: str, days: int) -> WeatherResult:
        """Fetch and normalize weather for `city` from `provider_id`.

        Raises UnknownProvider or MissingCredential before any network call.
        """
        provider = self.registry.resolve(provider_id)
        store = CredentialStore.load(self.credentials_path)
        api_key = store.get(provider.provider_id)
        if not api_key:
            raise MissingCredential(provider.provider_id)

        request = provider.build_request(city, days, api_key)
        body = self.transport.get_text(request)
        result = provider.parse_response(body, city=city, days=days)
        self.logger.info(
            "Fetched %s weather for %s with %d forecast days",
            provider.provider_id,
            city,
            len(result.forecast),
        )
        return result

    def list_providers(self) -> list[tuple[str, bool]]:
        """Registered provider ids paired with whether a key is stored."""
        store = CredentialStore.load(self.credentials_path)
        return [
            (provider_id, bool(store.get(provider_id)))
            for provider_id in self.registry.provider_ids()
        ]
