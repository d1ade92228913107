"""Bollinger Bands engine for OHLCV candlestick series."""

from bbands.config import IndicatorSettings
from bbands.engine.bollinger import compute_bollinger_bands, validate_bollinger_bands
from bbands.types import BandPoint, Candle, MAType, PriceSource

__version__ = "0.1.0"

__all__ = [
    "BandPoint",
    "Candle",
    "IndicatorSettings",
    "MAType",
    "PriceSource",
    "compute_bollinger_bands",
    "validate_bollinger_bands",
]
