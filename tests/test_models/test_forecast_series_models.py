"""Tests for ForecastPoint, ForecastSeries and ScoringResult models."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from commerce_scoring.models.forecast import ForecastPoint, ForecastSeries
from commerce_scoring.models.scoring import ScoringResult

_NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _point(period: int, value: int = 100) -> ForecastPoint:
    return ForecastPoint(period=period, date=_NOW, predicted_value=value, confidence=0.85)


class TestForecastPoint:
    def test_valid_construction(self):
        p = _point(1, 120)
        assert p.period == 1
        assert p.predicted_value == 120

    def test_period_zero_raises(self):
        with pytest.raises(ValidationError, match="period"):
            _point(0)

    def test_negative_value_raises(self):
        with pytest.raises(ValidationError, match="non-negative"):
            _point(1, -5)


class TestForecastSeries:
    def test_valid_series(self):
        series = ForecastSeries(
            subject_id=7, horizon=3, points=(_point(1, 10), _point(2, 20), _point(3, 30)),
        )
        assert series.values == [10, 20, 30]
        assert series.total == 60

    def test_length_mismatch_raises(self):
        with pytest.raises(ValidationError, match="expected 3 points"):
            ForecastSeries(subject_id=7, horizon=3, points=(_point(1), _point(2)))

    def test_out_of_order_periods_raise(self):
        with pytest.raises(ValidationError, match="ordered by period"):
            ForecastSeries(subject_id=7, horizon=2, points=(_point(2), _point(1)))


class TestScoringResult:
    def _result(self, **overrides) -> ScoringResult:
        fields = dict(
            score=0.5, raw_score=0.5, label="Neutral", confidence=0.92,
            strategy_name="sentiment", computed_at=_NOW,
        )
        fields.update(overrides)
        return ScoringResult(**fields)

    def test_valid_construction(self):
        r = self._result()
        assert r.label == "Neutral"

    @pytest.mark.parametrize("confidence", [-0.01, 1.01])
    def test_confidence_out_of_range_raises(self, confidence):
        with pytest.raises(ValidationError, match="confidence"):
            self._result(confidence=confidence)

    def test_non_finite_score_raises(self):
        with pytest.raises(ValidationError, match="finite"):
            self._result(score=float("inf"))

    def test_raw_score_may_exceed_clamp_range(self):
        assert self._result(score=1.0, raw_score=1.4).raw_score == 1.4
