"""Indicator domain types shared across the engine.

Frozen dataclasses for value objects. Prices are plain floats; ``None`` marks
an indicator value that is undefined (warm-up region, shifted-out index).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum


class PriceSource(str, Enum):
    """Candle field used as the indicator input."""

    CLOSE = "close"
    OPEN = "open"
    HIGH = "high"
    LOW = "low"


class MAType(str, Enum):
    """Moving average used for the basis line. Only SMA is defined."""

    SMA = "SMA"


# --- Value Objects (frozen) ---


@dataclass(frozen=True)
class Candle:
    """OHLCV candle. Timestamp is epoch milliseconds."""

    timestamp: int
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0


Series = Sequence[Candle]


@dataclass(frozen=True)
class BandPoint:
    """One Bollinger Bands output point, aligned 1:1 with its input candle.

    basis/upper/lower/std_dev are None where undefined. source_value is
    always populated.
    """

    timestamp: int
    basis: float | None
    upper: float | None
    lower: float | None
    source_value: float
    std_dev: float | None

    @property
    def is_defined(self) -> bool:
        """True when all three band lines carry a value."""
        return (
            self.basis is not None
            and self.upper is not None
            and self.lower is not None
        )


@dataclass(frozen=True)
class BandsValidationReport:
    """Result of a band sanity check over a computed series."""

    is_valid: bool
    errors: tuple[str, ...] = field(default_factory=tuple)
    valid_count: int = 0
