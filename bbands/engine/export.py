"""Renderer-facing views of a computed band series.

The chart layer takes up to three line values per point and tolerates
missing values in the warm-up region. Nothing here recomputes anything.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from bbands.types import BandPoint

BAND_LINES = ("upper", "basis", "lower")


def to_chart_lines(points: Sequence[BandPoint]) -> list[dict[str, Any]]:
    """One record per point, positionally aligned. Missing values are None."""
    return [
        {
            "timestamp": p.timestamp,
            "upper": p.upper,
            "basis": p.basis,
            "lower": p.lower,
        }
        for p in points
    ]


def to_overlay_series(
    points: Sequence[BandPoint],
) -> dict[str, list[dict[str, float | int]]]:
    """Per-line ``{time, value}`` lists, dropping undefined values."""
    overlay: dict[str, list[dict[str, float | int]]] = {
        name: [] for name in BAND_LINES
    }
    for p in points:
        for name in BAND_LINES:
            value = getattr(p, name)
            if value is not None:
                overlay[name].append({"time": p.timestamp, "value": value})
    return overlay
