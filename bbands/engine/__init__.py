"""Engine layer: rolling statistics and Bollinger Bands computation."""

from bbands.engine.bollinger import compute_bollinger_bands, validate_bollinger_bands
from bbands.engine.export import to_chart_lines, to_overlay_series
from bbands.engine.indicators import (
    RollingWindow,
    apply_offset,
    build_bands,
    extract_source,
    rolling_sma,
    rolling_stddev,
)

__all__ = [
    "RollingWindow",
    "apply_offset",
    "build_bands",
    "compute_bollinger_bands",
    "extract_source",
    "rolling_sma",
    "rolling_stddev",
    "to_chart_lines",
    "to_overlay_series",
    "validate_bollinger_bands",
]
