"""
Model management endpoints: retrain and health.
"""

from __future__ import annotations

from commerce_scoring.endpoints.base import Endpoint
from commerce_scoring.models.envelope import HealthReport, RetrainResult
from commerce_scoring.monitoring.health import build_health_report


class RetrainEndpoint(Endpoint):
    endpoint_name = "retrain"

    def _handle(self) -> RetrainResult:
        previous, current = self.context.recommender.retrain()
        return RetrainResult(
            message="Recommendation model retrained",
            previous_version=previous.model_version,
            model_version=current.model_version,
            strategies=current.strategy_names,
            retrained_at=current.last_updated,
        )


class HealthEndpoint(Endpoint):
    endpoint_name = "health"

    def _handle(self) -> HealthReport:
        return build_health_report(self.context)
