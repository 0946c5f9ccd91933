"""Blocking HTTP transport for provider requests."""

from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx

from .exceptions import NetworkError
from .providers.models import WeatherRequest
from .redaction import sanitize_text

BODY_EXCERPT_CHARS = 300


class Transport(Protocol):
    """Anything that can execute a WeatherRequest and return the body text."""

    def get_text(self, request: WeatherRequest) -> str: ...


def request_url(request: WeatherRequest) -> str:
    """Full URL with every query value percent-encoded."""
    return str(httpx.URL(request.url, params=request.params))


class HttpTransport:
    """Executes one GET per call through a shared httpx client. No retries."""

    def __init__(
        self,
        *,
        timeout_seconds: float,
        user_agent: str,
        logger: logging.Logger,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.logger = logger
        self._client = httpx.Client(
            timeout=timeout_seconds,
            headers={"Accept": "application/json", "User-Agent": user_agent},
            transport=transport,
        )

    def __enter__(self) -> HttpTransport:
        return self

    def __exit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def get_text(self, request: WeatherRequest) -> str:
        safe_url = sanitize_text(request_url(request))
        self.logger.info("GET %s", safe_url)
        try:
            response = self._client.get(request.url, params=request.params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise NetworkError(
                f"{request.provider_id} request failed with status {status} at {safe_url}: "
                f"{sanitize_text(exc.response.text[:BODY_EXCERPT_CHARS])}",
                status_code=status,
            ) from exc
        except httpx.HTTPError as exc:
            raise NetworkError(
                f"{request.provider_id} request failed at {safe_url}: "
                f"{type(exc).__name__}: {sanitize_text(str(exc))}"
            ) from exc
        return response.text
