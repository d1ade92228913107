"""Error hierarchy.

All bbands exceptions inherit from BandsError, so the CLI can convert
them to user-facing messages at one boundary. Settings validation errors
are pydantic ValidationErrors raised by IndicatorSettings itself.
"""

from __future__ import annotations


class BandsError(Exception):
    """Base exception for all bbands errors."""


class SeriesLoadError(BandsError):
    """An OHLCV resource could not be read or failed validation.

    Stores the path (if any) the series was loaded from.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        self.message = message
        prefix = f"{path}: " if path else ""
        super().__init__(f"{prefix}{message}")
