"""Bollinger Bands pipeline.

source -> SMA basis + sample std-dev -> upper/lower bands -> offset.

Settings are validated when IndicatorSettings is built, so the pipeline
itself never raises for a well-formed series. Each call is independent
and returns a new list of BandPoint.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from bbands.config import IndicatorSettings
from bbands.engine.indicators import (
    apply_offset,
    build_bands,
    extract_source,
    rolling_sma,
    rolling_stddev,
)
from bbands.types import BandPoint, BandsValidationReport, Series

log = structlog.get_logger()

SYMMETRY_TOLERANCE = 1e-4


def compute_bollinger_bands(
    series: Series,
    settings: IndicatorSettings | None = None,
) -> list[BandPoint]:
    """Compute one BandPoint per candle.

    basis/upper/lower are shifted by settings.offset; source_value and
    std_dev stay at the candle's own index.
    """
    if not series:
        return []
    if settings is None:
        settings = IndicatorSettings()

    source_values = extract_source(series, settings.source)
    basis = rolling_sma(source_values, settings.length)
    std_dev = rolling_stddev(source_values, settings.length)
    upper, lower = build_bands(basis, std_dev, settings.std_dev_multiplier)

    if abs(settings.offset) >= len(series):
        log.debug(
            "bollinger_offset_exceeds_series",
            offset=settings.offset,
            series_len=len(series),
        )

    basis = apply_offset(basis, settings.offset)
    upper = apply_offset(upper, settings.offset)
    lower = apply_offset(lower, settings.offset)

    points = [
        BandPoint(
            timestamp=candle.timestamp,
            basis=basis[i],
            upper=upper[i],
            lower=lower[i],
            source_value=source_values[i],
            std_dev=std_dev[i],
        )
        for i, candle in enumerate(series)
    ]

    log.debug(
        "bollinger_computed",
        points=len(points),
        defined=sum(1 for p in points if p.is_defined),
        length=settings.length,
        source=settings.source.value,
        multiplier=settings.std_dev_multiplier,
        offset=settings.offset,
    )
    return points


def validate_bollinger_bands(
    points: Sequence[BandPoint],
    settings: IndicatorSettings | None = None,
) -> BandsValidationReport:
    """Sanity-check a computed band series.

    From index length - 1 onward, every point with all three lines defined
    must satisfy upper > basis > lower with equal distances (within
    SYMMETRY_TOLERANCE). Points with undefined lines are skipped.
    """
    if settings is None:
        settings = IndicatorSettings()

    errors: list[str] = []
    valid_count = 0

    for i in range(settings.length - 1, len(points)):
        bp = points[i]
        if bp.basis is None or bp.upper is None or bp.lower is None:
            continue

        valid_count += 1

        if bp.upper <= bp.basis:
            errors.append(
                f"Index {i}: upper band ({bp.upper}) should be > basis ({bp.basis})"
            )
        if bp.basis <= bp.lower:
            errors.append(
                f"Index {i}: basis ({bp.basis}) should be > lower band ({bp.lower})"
            )

        upper_distance = bp.upper - bp.basis
        lower_distance = bp.basis - bp.lower
        if abs(upper_distance - lower_distance) > SYMMETRY_TOLERANCE:
            errors.append(
                f"Index {i}: bands should be symmetric around basis "
                f"(upper distance {upper_distance}, lower distance {lower_distance})"
            )

    if errors:
        log.warning(
            "bollinger_validation_failed",
            error_count=len(errors),
            valid_count=valid_count,
        )

    return BandsValidationReport(
        is_valid=not errors,
        errors=tuple(errors),
        valid_count=valid_count,
    )
