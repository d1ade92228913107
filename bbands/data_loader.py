"""Static OHLCV loader.

Reads a JSON array of ``{timestamp, open, high, low, close, volume}``
objects (epoch-millisecond timestamps), validates each record with
pydantic, and returns an oldest-first tuple of Candle. Raises
SeriesLoadError on any problem so callers see one exception type.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from bbands.errors import SeriesLoadError
from bbands.types import Candle

log = structlog.get_logger()


class CandleRecord(BaseModel):
    """Wire shape of one candle in the JSON resource. NaN and inf are rejected."""

    model_config = ConfigDict(allow_inf_nan=False)

    timestamp: int
    open: float
    high: float
    low: float
    close: float
    volume: float = Field(default=0.0, ge=0)

    def to_candle(self) -> Candle:
        return Candle(
            timestamp=self.timestamp,
            open=self.open,
            high=self.high,
            low=self.low,
            close=self.close,
            volume=self.volume,
        )


def series_from_records(
    records: Iterable[Mapping[str, Any]],
    *,
    path: str | None = None,
) -> tuple[Candle, ...]:
    """Validate raw records and convert them to candles.

    Timestamps must be strictly increasing.
    """
    candles: list[Candle] = []
    for i, raw in enumerate(records):
        try:
            candle = CandleRecord.model_validate(raw).to_candle()
        except ValidationError as e:
            raise SeriesLoadError(f"Invalid candle at index {i}: {e}", path) from e
        if candles and candle.timestamp <= candles[-1].timestamp:
            raise SeriesLoadError(
                f"Timestamps must be strictly increasing: index {i} "
                f"({candle.timestamp}) follows {candles[-1].timestamp}",
                path,
            )
        candles.append(candle)
    return tuple(candles)


def load_series(path: str | Path) -> tuple[Candle, ...]:
    """Load and validate a candle series from a JSON file."""
    p = Path(path)
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise SeriesLoadError("File not found", str(p)) from e
    except json.JSONDecodeError as e:
        raise SeriesLoadError(f"Invalid JSON: {e}", str(p)) from e

    if not isinstance(raw, list):
        raise SeriesLoadError("Expected a JSON array of candles", str(p))

    series = series_from_records(raw, path=str(p))
    log.info(
        "series_loaded",
        path=str(p),
        candle_count=len(series),
        first=series[0].timestamp if series else None,
        last=series[-1].timestamp if series else None,
    )
    return series
