"""Tests for renderer-facing band exports."""

from __future__ import annotations

import json

from bbands.config import IndicatorSettings
from bbands.engine.bollinger import compute_bollinger_bands
from bbands.engine.export import to_chart_lines, to_overlay_series
from tests.factories import make_series, ramp_closes


def _points() -> list:
    return compute_bollinger_bands(
        make_series(ramp_closes(8)), IndicatorSettings(length=3)
    )


class TestChartLines:
    def test_one_record_per_point(self) -> None:
        points = _points()
        lines = to_chart_lines(points)
        assert len(lines) == len(points)
        assert [r["timestamp"] for r in lines] == [p.timestamp for p in points]

    def test_warmup_values_are_none(self) -> None:
        lines = to_chart_lines(_points())
        assert lines[0] == {
            "timestamp": lines[0]["timestamp"],
            "upper": None,
            "basis": None,
            "lower": None,
        }
        assert lines[2]["basis"] == 101.0

    def test_json_serializable(self) -> None:
        encoded = json.dumps(to_chart_lines(_points()))
        decoded = json.loads(encoded)
        assert decoded[0]["basis"] is None

    def test_empty(self) -> None:
        assert to_chart_lines([]) == []


class TestOverlaySeries:
    def test_warmup_points_omitted(self) -> None:
        overlay = to_overlay_series(_points())
        assert set(overlay) == {"upper", "basis", "lower"}
        for values in overlay.values():
            assert len(values) == 6

    def test_records_have_time_and_value(self) -> None:
        points = _points()
        overlay = to_overlay_series(points)
        assert overlay["basis"][0] == {"time": points[2].timestamp, "value": 101.0}

    def test_empty(self) -> None:
        assert to_overlay_series([]) == {"upper": [], "basis": [], "lower": []}
