"""Command-line weather lookups across interchangeable providers."""

__version__ = "0.1.0"
