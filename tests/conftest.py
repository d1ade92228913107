"""Shared test fixtures for bbands."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

from tests.factories import make_series, ramp_closes


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep BBANDS_* variables and stray .env files out of every test."""
    for key in list(os.environ):
        if key.startswith("BBANDS_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Drop handlers bound to streams captured by a previous test."""
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    logging.getLogger().handlers.clear()


@pytest.fixture
def ohlcv_file(tmp_path: Path) -> Path:
    """A 20-candle JSON resource with closes 100..119."""
    records = [
        {
            "timestamp": c.timestamp,
            "open": c.open,
            "high": c.high,
            "low": c.low,
            "close": c.close,
            "volume": c.volume,
        }
        for c in make_series(ramp_closes(20))
    ]
    path = tmp_path / "ohlcv.json"
    path.write_text(json.dumps(records), encoding="utf-8")
    return path
