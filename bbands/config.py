"""Pydantic Settings configuration models.

Config hierarchy (lowest to highest priority):
1. Pydantic defaults (in code below)
2. .env file (loaded by Pydantic Settings)
3. Environment variables (e.g., BBANDS_INDICATOR__LENGTH=50)
4. Explicit CLI options, applied via IndicatorSettings.model_copy()

IndicatorSettings is the settings-entry boundary: invalid lengths and
multipliers are rejected here, never inside the numeric pipeline.
"""

from __future__ import annotations

from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from bbands.types import MAType, PriceSource

log = structlog.get_logger()

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})
VALID_LOG_FORMATS = frozenset({"console", "json"})

DEFAULT_LENGTH = 20
DEFAULT_STD_DEV_MULTIPLIER = 2.0


class IndicatorSettings(BaseModel):
    """Bollinger Bands parameters. Immutable snapshot per computation."""

    model_config = ConfigDict(frozen=True)

    length: int = Field(default=DEFAULT_LENGTH, ge=1)
    ma_type: MAType = MAType.SMA
    source: PriceSource = PriceSource.CLOSE
    std_dev_multiplier: float = Field(
        default=DEFAULT_STD_DEV_MULTIPLIER, gt=0, allow_inf_nan=False
    )
    offset: int = 0

    @field_validator("ma_type", mode="before")
    @classmethod
    def normalize_ma_type(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("source", mode="before")
    @classmethod
    def lenient_source(cls, v: Any) -> Any:
        """Unknown source names fall back to close instead of failing."""
        if isinstance(v, PriceSource):
            return v
        name = str(v).strip().lower()
        try:
            return PriceSource(name)
        except ValueError:
            log.warning("unknown_price_source", source=v, fallback="close")
            return PriceSource.CLOSE


class AppConfig(BaseSettings):
    """Top-level application configuration.

    Env var examples:
        BBANDS_LOG_LEVEL=DEBUG
        BBANDS_DATA_PATH=public/data/ohlcv.json
        BBANDS_INDICATOR__LENGTH=50
        BBANDS_INDICATOR__SOURCE=high
    """

    model_config = SettingsConfigDict(
        env_prefix="BBANDS_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"
    log_format: str = "console"
    data_path: str = "data/ohlcv.json"
    indicator: IndicatorSettings = IndicatorSettings()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in VALID_LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {sorted(VALID_LOG_LEVELS)}, got {v}"
            )
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in VALID_LOG_FORMATS:
            raise ValueError(
                f"log_format must be one of {sorted(VALID_LOG_FORMATS)}, got {v}"
            )
        return v
