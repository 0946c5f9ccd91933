"""`weather` CLI: store provider API keys and fetch current weather/forecast."""

from __future__ import annotations

import argparse
import logging
import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import Settings, load_settings, resolve_credentials_path
from .dispatcher import Dispatcher
from .exceptions import ConfigError, ErrorKind, WeatherCLIError
from .log_setup import setup_logger
from .providers.models import WeatherResult
from .providers.registry import build_default_registry
from .transport import HttpTransport

COMMANDS = ("configure", "get", "providers")

EXIT_CODES: dict[ErrorKind, int] = {
    ErrorKind.UNKNOWN_PROVIDER: 0,
    ErrorKind.CONFIG_UNREADABLE: 3,
    ErrorKind.CONFIG_WRITE_FAILED: 3,
    ErrorKind.CONFIG_DIR_UNAVAILABLE: 3,
    ErrorKind.MISSING_CREDENTIAL: 4,
    ErrorKind.NETWORK_ERROR: 5,
    ErrorKind.RESPONSE_PARSE_ERROR: 6,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="weather",
        description="Fetch current weather and short forecasts from OpenWeather or WeatherAPI.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True, metavar="command")

    configure = subparsers.add_parser(
        "configure", help="Store the API key for a provider (read from stdin)."
    )
    configure.add_argument("provider", help="Provider name, e.g. weatherapi.")

    get = subparsers.add_parser("get", help="Fetch weather for a city.")
    get.add_argument("provider", help="Provider name, e.g. weatherapi.")
    get.add_argument("city", help="City name, e.g. Toledo.")
    get.add_argument(
        "days",
        nargs="?",
        default=None,
        help="Forecast days; 2 or more prints a forecast. Defaults to 0.",
    )

    subparsers.add_parser("providers", help="List providers and whether a key is stored.")
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace | None:
    """Parse CLI arguments; return None for an unrecognized top-level command."""
    argv = sys.argv[1:] if argv is None else argv
    if argv and not argv[0].startswith("-") and argv[0] not in COMMANDS:
        return None
    return build_parser().parse_args(argv)


def parse_days(raw: str | None, logger: logging.Logger) -> int:
    """Parse the optional days argument, falling back to 0 with a warning."""
    if raw is None:
        return 0
    try:
        return int(raw.strip())
    except ValueError:
        logger.warning("could not parse days from arguments (%r), using default zero", raw)
        return 0


def _build_transport(settings: Settings, logger: logging.Logger) -> HttpTransport:
    return HttpTransport(
        timeout_seconds=settings.weather_timeout_seconds,
        user_agent=settings.weather_user_agent,
        logger=logger,
    )


def _print_result(console: Console, result: WeatherResult) -> None:
    console.print(
        f"Current weather in {escape(result.city)} is {escape(result.current_condition)}"
    )
    if not result.forecast:
        return

    table = Table(title=f"Forecast for {escape(result.city)}")
    table.add_column("Date")
    table.add_column("Condition", overflow="fold")
    for entry in result.forecast:
        table.add_row(escape(entry.date or "-"), escape(entry.condition or "-"))
    console.print(table)


def _run_configure(args: argparse.Namespace, dispatcher: Dispatcher, console: Console) -> int:
    console.print(f"Please, provide API key for the provider {escape(args.provider)}")
    api_key = sys.stdin.readline()
    path = dispatcher.configure(args.provider, api_key)
    console.print(f"Saved to file {escape(path.name)} in {escape(str(path.parent))}")
    return 0


def _run_get(
    args: argparse.Namespace,
    dispatcher: Dispatcher,
    console: Console,
    logger: logging.Logger,
) -> int:
    days = parse_days(args.days, logger)
    result = dispatcher.fetch_weather(args.provider, args.city, days)
    _print_result(console, result)
    return 0


def _run_providers(dispatcher: Dispatcher, console: Console) -> int:
    table = Table(title="Weather Providers")
    table.add_column("Provider")
    table.add_column("API key")
    for provider_id, configured in dispatcher.list_providers():
        table.add_row(provider_id, "configured" if configured else "missing")
    console.print(table)
    return 0


def main() -> int:
    """Run one CLI invocation and return its exit code."""
    args = parse_args()
    console = Console(highlight=False)
    if args is None:
        console.print("unknown command")
        return 0

    logger = setup_logger()
    try:
        settings = load_settings()
    except ConfigError as exc:
        logger.error("Configuration failure: %s", exc)
        return 2
    logger = setup_logger(level=settings.weather_log_level)
    logger.debug("Settings: %s", settings.safe_summary())

    try:
        credentials_path = resolve_credentials_path(settings)
        with _build_transport(settings, logger) as transport:
            dispatcher = Dispatcher(
                credentials_path=credentials_path,
                registry=build_default_registry(strict=settings.weather_strict_parsing),
                transport=transport,
                logger=logger,
            )
            if args.command == "configure":
                return _run_configure(args, dispatcher, console)
            if args.command == "get":
                return _run_get(args, dispatcher, console, logger)
            return _run_providers(dispatcher, console)
    except WeatherCLIError as exc:
        if not exc.fatal:
            logger.warning("%s", exc)
            console.print(escape(str(exc)))
            return EXIT_CODES[exc.kind]
        logger.error("%s: %s", exc.kind.value, exc)
        return EXIT_CODES[exc.kind]
    except Exception as exc:  # pragma: no cover - last-resort catch for CLI runtime
        logger.exception("Unexpected weather CLI failure: %s", exc)
        return 99


if __name__ == "__main__":
    sys.exit(main())
