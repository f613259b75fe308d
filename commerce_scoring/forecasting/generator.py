"""
Deterministic demand forecast generator.

Series formula (period i = 1..horizon)
--------------------------------------
    base           = 100 + U[-20, 30)           integer draw
    trend          = i * 5
    seasonality    = round(15 * sin(i * 0.5))
    predicted      = max(0, base + trend + seasonality)
    confidence     = 0.85 + U[-10, 10) / 100    integer draw, i.e. 0.75–0.94
    date           = now + i days

Both draws come from one generator seeded by ``subject_id`` and are taken
in the order (base, confidence) for each period, so ``generate(7, 5)``
always yields the same values; only the dates follow the clock.  A longer
horizon extends a shorter one: the first ``n`` points of ``generate(s, m)``
equal ``generate(s, n)`` for ``m >= n``.

The base signal, trend and seasonality are placeholders for a trained time
series model; no fitting happens here.
"""

from __future__ import annotations

import math

from commerce_scoring.errors import ValidationError
from commerce_scoring.models.forecast import ForecastPoint, ForecastSeries
from commerce_scoring.utils.random_utils import seeded_generator, uniform_int
from commerce_scoring.utils.time_utils import Clock, days_from, utcnow

BASE_LEVEL = 100
BASE_JITTER = (-20, 30)
TREND_PER_PERIOD = 5
SEASONAL_AMPLITUDE = 15
SEASONAL_FREQUENCY = 0.5
BASE_CONFIDENCE = 0.85
CONFIDENCE_JITTER = (-10, 10)


def seasonality(period: int) -> int:
    return int(round(SEASONAL_AMPLITUDE * math.sin(period * SEASONAL_FREQUENCY)))


class ForecastGenerator:
    """Produces reproducible ``ForecastSeries`` for a subject id.

    Args:
        clock: Source of "now" for point dates; injectable for tests.
    """

    def __init__(self, clock: Clock = utcnow) -> None:
        self._clock = clock

    def generate(self, subject_id: int, horizon: int) -> ForecastSeries:
        """Generate ``horizon`` forecast points for ``subject_id``.

        Args:
            subject_id: Product (or other subject) identifier; seeds the stream.
            horizon:    Number of periods, must be a positive integer.

        Returns:
            ``ForecastSeries`` with periods 1..horizon.

        Raises:
            ValidationError: If ``horizon`` is not a positive integer or
                ``subject_id`` is not an integer.
        """
        if isinstance(subject_id, bool) or not isinstance(subject_id, int):
            raise ValidationError(
                f"subject_id must be an integer, got {subject_id!r}.", field="subject_id"
            )
        if isinstance(horizon, bool) or not isinstance(horizon, int):
            raise ValidationError(
                f"horizon must be an integer, got {horizon!r}.", field="horizon"
            )
        if horizon <= 0:
            raise ValidationError(
                f"horizon must be positive, got {horizon}.", field="horizon"
            )

        rng = seeded_generator(subject_id)
        now = self._clock()
        points: list[ForecastPoint] = []

        for period in range(1, horizon + 1):
            base = BASE_LEVEL + uniform_int(rng, *BASE_JITTER)
            trend = period * TREND_PER_PERIOD
            value = max(0, base + trend + seasonality(period))
            confidence = BASE_CONFIDENCE + uniform_int(rng, *CONFIDENCE_JITTER) / 100

            points.append(ForecastPoint(
                period=period,
                date=days_from(now, period),
                predicted_value=value,
                confidence=round(confidence, 2),
            ))

        return ForecastSeries(subject_id=subject_id, horizon=horizon, points=tuple(points))
