"""
Static liveness report.

The report never probes anything: it states the service identity, the
strategies currently registered (all reported as active) and the
recommendation model version and its last update.  It is the backend for
the ``health`` CLI command and ``HealthEndpoint``.
"""

from __future__ import annotations

from commerce_scoring.context import ServiceContext
from commerce_scoring.models.envelope import HealthReport

HEALTH_HEALTHY = "Healthy"
MODEL_ACTIVE = "active"

FORECAST_MODEL_KEY = "demand_forecast"


def active_models(context: ServiceContext) -> dict[str, str]:
    """Model name -> status for every registered strategy plus the forecaster."""
    names = [
        *(f"recommendation.{n}" for n in context.recommender.state.strategy_names),
        *(f"scoring.{n}" for n in context.scoring.registry.list_names()),
        FORECAST_MODEL_KEY,
    ]
    return {name: MODEL_ACTIVE for name in names}


def build_health_report(context: ServiceContext) -> HealthReport:
    state = context.recommender.state
    return HealthReport(
        status=HEALTH_HEALTHY,
        service=context.config.service.name,
        version=context.config.service.version,
        timestamp=context.clock(),
        models=active_models(context),
        model_version=state.model_version,
        last_model_update=state.last_updated,
    )
