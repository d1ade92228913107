"""Rolling-window primitives for band calculation.

RollingWindow is a ring buffer that re-sums its contents for each statistic:
O(period) mean and two-pass sample standard deviation.
The module-level functions map whole sequences positionally and return
None wherever a statistic is undefined.
"""

from __future__ import annotations

import math
from collections import deque
from collections.abc import Sequence

import structlog

from bbands.types import Candle, PriceSource

log = structlog.get_logger()


class RollingWindow:
    """Fixed-size window over the most recent values.

    Every statistic re-sums the buffer, so a large value that has left the
    window leaves no residue in later results.
    """

    __slots__ = ("_buf", "_period")

    def __init__(self, period: int) -> None:
        if period < 1:
            raise ValueError(f"Window period must be >= 1, got {period}")
        self._period = period
        self._buf: deque[float] = deque(maxlen=period)

    def update(self, value: float) -> None:
        """Add a value. Evicts oldest if at capacity."""
        self._buf.append(value)

    @property
    def mean(self) -> float | None:
        """Mean of the window, or None if not full."""
        if len(self._buf) < self._period:
            return None
        return sum(self._buf) / self._period

    @property
    def sample_std(self) -> float | None:
        """Sample standard deviation (n - 1 denominator) of the window.

        None if the window is not full, or if period is 1 (zero denominator).
        Deviations are taken from the same mean the basis reports.
        """
        m = self.mean
        if self._period < 2 or m is None:
            return None
        variance = sum((v - m) ** 2 for v in self._buf) / (self._period - 1)
        return math.sqrt(variance)

    @property
    def is_full(self) -> bool:
        return len(self._buf) >= self._period

    @property
    def count(self) -> int:
        """Number of values currently in the buffer."""
        return len(self._buf)


def extract_source(
    series: Sequence[Candle],
    source: PriceSource | str = PriceSource.CLOSE,
) -> list[float]:
    """Pick one price field from every candle, in order.

    Unknown source names fall back to close.
    """
    if not isinstance(source, PriceSource):
        try:
            source = PriceSource(str(source).strip().lower())
        except ValueError:
            log.warning("unknown_price_source", source=source, fallback="close")
            source = PriceSource.CLOSE
    field_name = source.value
    return [float(getattr(candle, field_name)) for candle in series]


def rolling_sma(values: Sequence[float], length: int) -> list[float | None]:
    """Simple moving average over a trailing window of ``length`` values."""
    window = RollingWindow(length)
    out: list[float | None] = []
    for v in values:
        window.update(v)
        out.append(window.mean)
    return out


def rolling_stddev(values: Sequence[float], length: int) -> list[float | None]:
    """Sample standard deviation over a trailing window of ``length`` values.

    length == 1 yields None everywhere.
    """
    window = RollingWindow(length)
    out: list[float | None] = []
    for v in values:
        window.update(v)
        out.append(window.sample_std)
    return out


def build_bands(
    basis: Sequence[float | None],
    std_dev: Sequence[float | None],
    multiplier: float,
) -> tuple[list[float | None], list[float | None]]:
    """Upper and lower bands at basis +/- multiplier * std_dev."""
    upper: list[float | None] = []
    lower: list[float | None] = []
    for b, s in zip(basis, std_dev):
        if b is None or s is None:
            upper.append(None)
            lower.append(None)
            continue
        width = multiplier * s
        upper.append(b + width)
        lower.append(b - width)
    return upper, lower


def apply_offset(
    values: Sequence[float | None], offset: int
) -> list[float | None]:
    """Shift a sequence by ``offset`` positions, padding with None.

    Positive offset moves values to later indices (drawn to the right of
    the candles they were computed from); negative moves them earlier.
    Always returns a new list of the same length.
    """
    n = len(values)
    if offset == 0:
        return list(values)
    out: list[float | None] = [None] * n
    for i in range(n):
        src = i - offset
        if 0 <= src < n:
            out[i] = values[src]
    return out
