"""
Demand forecast endpoint.

``periods`` must lie in ``[1, forecast.max_horizon]``; the generator itself
only rejects non-positive horizons.
"""

from __future__ import annotations

from commerce_scoring.endpoints.base import Endpoint, require_int
from commerce_scoring.models.envelope import ForecastEnvelope


class ForecastEndpoint(Endpoint):
    endpoint_name = "demand-forecast"

    def _handle(self, product_id: int, periods: int) -> ForecastEnvelope:
        cfg = self.config.forecast
        product_id = require_int(product_id, "product_id")
        periods = require_int(periods, "periods", 1, cfg.max_horizon)

        series = self.context.forecaster.generate(product_id, periods)
        return ForecastEnvelope(
            product_id=product_id,
            periods=periods,
            forecast=list(series.points),
            generated_at=self.context.clock(),
            model=cfg.model_name,
            accuracy=cfg.accuracy,
            confidence_interval=(cfg.interval_lower, cfg.interval_upper),
        )
