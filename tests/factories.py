"""Shared test factories for creating domain objects.

Provides make_candle() and make_series() with sensible defaults so tests
can focus on the values they care about.
"""

from __future__ import annotations

from collections.abc import Sequence

from bbands.types import Candle

# 2023-11-14 22:13:20 UTC, daily candles after that
_DEFAULT_TIMESTAMP = 1_700_000_000_000
DAY_MS = 86_400_000


def make_candle(
    *,
    timestamp: int = _DEFAULT_TIMESTAMP,
    open: float = 150.0,
    high: float = 151.0,
    low: float = 149.0,
    close: float = 150.5,
    volume: float = 1000.0,
) -> Candle:
    """Create a Candle with sensible defaults."""
    return Candle(
        timestamp=timestamp,
        open=open,
        high=high,
        low=low,
        close=close,
        volume=volume,
    )


def make_series(
    closes: Sequence[float],
    *,
    start: int = _DEFAULT_TIMESTAMP,
    interval: int = DAY_MS,
) -> list[Candle]:
    """Create one daily candle per close.

    open = close - 1, high = close + 2, low = close - 3, so every source
    field is distinguishable.
    """
    return [
        make_candle(
            timestamp=start + i * interval,
            open=c - 1,
            high=c + 2,
            low=c - 3,
            close=c,
        )
        for i, c in enumerate(closes)
    ]


def ramp_closes(n: int, start: float = 100.0, step: float = 1.0) -> list[float]:
    """Linear ramp: start, start + step, ..."""
    return [start + i * step for i in range(n)]


def wavy_closes(n: int) -> list[float]:
    """Deterministic non-linear prices for property-style checks."""
    return [100.0 + i * 3.0 - (i % 7) + (i % 5) * 0.25 for i in range(n)]
