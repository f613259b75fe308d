"""
Demand forecast models.

``ForecastPoint`` is one period of a generated series; ``ForecastSeries`` is
the ordered sequence for one subject.  Both are frozen: a series generated
for (subject, horizon) is reproducible, so there is nothing to mutate.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class ForecastPoint(BaseModel):
    """One forecast period.

    Attributes:
        period:          1-based period index.
        date:            ``now + period`` days (UTC).
        predicted_value: Forecast demand in units, never negative.
        confidence:      Per-point confidence annotation.
    """

    model_config = ConfigDict(frozen=True)

    period: int
    date: datetime
    predicted_value: int
    confidence: float

    @field_validator("period")
    @classmethod
    def validate_period(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"period must be >= 1, got {v}.")
        return v

    @field_validator("predicted_value")
    @classmethod
    def validate_predicted_value(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"predicted_value must be non-negative, got {v}.")
        return v


class ForecastSeries(BaseModel):
    """Ordered forecast for one subject; ``len(points) == horizon``."""

    model_config = ConfigDict(frozen=True)

    subject_id: int
    horizon: int
    points: tuple[ForecastPoint, ...]

    @model_validator(mode="after")
    def validate_points(self) -> "ForecastSeries":
        if len(self.points) != self.horizon:
            raise ValueError(
                f"expected {self.horizon} points, got {len(self.points)}."
            )
        periods = [p.period for p in self.points]
        if periods != list(range(1, self.horizon + 1)):
            raise ValueError("points must be ordered by period 1..horizon.")
        return self

    @property
    def values(self) -> list[int]:
        return [p.predicted_value for p in self.points]

    @property
    def total(self) -> int:
        return sum(self.values)
