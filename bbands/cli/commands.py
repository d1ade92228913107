"""Click CLI commands for bbands."""

from __future__ import annotations

import json
import sys
from collections.abc import Sequence
from typing import Any

import click
from pydantic import ValidationError

from bbands.config import AppConfig, IndicatorSettings
from bbands.errors import BandsError
from bbands.types import BandPoint, PriceSource


def _fmt(value: float | None) -> str:
    return "-" if value is None else f"{value:.4f}"


def _build_settings(
    base: IndicatorSettings,
    length: int | None,
    source: str | None,
    multiplier: float | None,
    offset: int | None,
) -> IndicatorSettings:
    """Overlay explicit CLI options on the configured settings, revalidating."""
    overrides: dict[str, Any] = {
        "length": length,
        "source": source,
        "std_dev_multiplier": multiplier,
        "offset": offset,
    }
    data = base.model_dump()
    data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return IndicatorSettings.model_validate(data)
    except ValidationError as e:
        raise click.ClickException(f"Invalid indicator settings: {e}") from e


def _load_config() -> AppConfig:
    """Read env/.env configuration, reporting bad values as a CLI error."""
    try:
        return AppConfig()
    except ValidationError as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e


def _indicator_options(f: Any) -> Any:
    f = click.option(
        "--offset", type=int, default=None, help="Shift bands by N bars (+ = later)."
    )(f)
    f = click.option(
        "--multiplier", type=float, default=None, help="Std-dev multiplier (> 0)."
    )(f)
    f = click.option(
        "--source",
        type=click.Choice([s.value for s in PriceSource], case_sensitive=False),
        default=None,
        help="Candle field to use (default from config: close).",
    )(f)
    f = click.option(
        "--length", type=int, default=None, help="Lookback window (>= 1)."
    )(f)
    f = click.option(
        "--data",
        "data_path",
        type=click.Path(dir_okay=False),
        default=None,
        help="OHLCV JSON file (default from config).",
    )(f)
    return f


def _load_and_compute(
    data_path: str | None,
    length: int | None,
    source: str | None,
    multiplier: float | None,
    offset: int | None,
) -> tuple[IndicatorSettings, list[BandPoint]]:
    from bbands.data_loader import load_series
    from bbands.engine.bollinger import compute_bollinger_bands
    from bbands.utils.logging import bind_series_context, setup_logging_from_config

    cfg = _load_config()
    setup_logging_from_config(cfg)
    settings = _build_settings(cfg.indicator, length, source, multiplier, offset)
    path = data_path or cfg.data_path
    bind_series_context(
        path,
        length=settings.length,
        source=settings.source.value,
        multiplier=settings.std_dev_multiplier,
        offset=settings.offset,
    )

    try:
        series = load_series(path)
    except BandsError as e:
        raise click.ClickException(str(e)) from e

    return settings, compute_bollinger_bands(series, settings)


@click.group()
def cli() -> None:
    """bbands: Bollinger Bands for OHLCV candle series."""


@cli.command()
@_indicator_options
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format (default: table).",
)
@click.option(
    "--tail",
    type=click.IntRange(min=0),
    default=None,
    help="Only print the last N points.",
)
def compute(
    data_path: str | None,
    length: int | None,
    source: str | None,
    multiplier: float | None,
    offset: int | None,
    output_format: str,
    tail: int | None,
) -> None:
    """Compute Bollinger Bands for a candle file."""
    from bbands.engine.export import to_chart_lines

    settings, points = _load_and_compute(data_path, length, source, multiplier, offset)
    if tail is not None:
        points = points[len(points) - min(tail, len(points)) :]

    if output_format == "json":
        click.echo(json.dumps(to_chart_lines(points), indent=2))
        return

    _print_table(points, settings)


def _print_table(points: Sequence[BandPoint], settings: IndicatorSettings) -> None:
    click.echo(
        f"\nBollinger Bands ({settings.ma_type.value} {settings.length}, "
        f"{settings.source.value}, k={settings.std_dev_multiplier:g}, "
        f"offset={settings.offset})"
    )
    click.echo(
        f"{'timestamp':>15}  {'source':>10}  {'lower':>10}  "
        f"{'basis':>10}  {'upper':>10}  {'stddev':>10}"
    )
    for p in points:
        click.echo(
            f"{p.timestamp:>15}  {_fmt(p.source_value):>10}  {_fmt(p.lower):>10}  "
            f"{_fmt(p.basis):>10}  {_fmt(p.upper):>10}  {_fmt(p.std_dev):>10}"
        )


@cli.command()
@_indicator_options
def validate(
    data_path: str | None,
    length: int | None,
    source: str | None,
    multiplier: float | None,
    offset: int | None,
) -> None:
    """Check computed bands for ordering and symmetry."""
    from bbands.engine.bollinger import validate_bollinger_bands

    settings, points = _load_and_compute(data_path, length, source, multiplier, offset)
    report = validate_bollinger_bands(points, settings)

    click.echo(f"Points:        {len(points)}")
    click.echo(f"Checked:       {report.valid_count}")
    if report.is_valid:
        click.echo("Result:        OK")
        return

    click.echo(f"Result:        {len(report.errors)} error(s)")
    for err in report.errors:
        click.echo(f"  {err}")
    sys.exit(1)


@cli.command()
def config() -> None:
    """Show current configuration."""
    cfg = _load_config()

    click.echo("=== bbands Configuration ===\n")

    click.echo(f"Log Level:    {cfg.log_level}")
    click.echo(f"Log Format:   {cfg.log_format}")
    click.echo(f"Data Path:    {cfg.data_path}")
    click.echo("")

    ind = cfg.indicator
    click.echo("[Indicator]")
    click.echo(f"  Length:      {ind.length}")
    click.echo(f"  MA Type:     {ind.ma_type.value}")
    click.echo(f"  Source:      {ind.source.value}")
    click.echo(f"  Multiplier:  {ind.std_dev_multiplier:g}")
    click.echo(f"  Offset:      {ind.offset}")
