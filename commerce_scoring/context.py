"""
Composition root: wires configuration into the engines the endpoints use.

``build_context(config)`` is called once at start-up (CLI entry, tests).
Everything it builds is read-only afterwards except the recommendation
model state, which ``RecommendationEngine.retrain()`` swaps atomically.
"""

from __future__ import annotations

from dataclasses import dataclass

from commerce_scoring.config import AppConfig
from commerce_scoring.forecasting.generator import ForecastGenerator
from commerce_scoring.recommendations.engine import RecommendationEngine
from commerce_scoring.scoring.domains import build_domain_registry
from commerce_scoring.scoring.engine import ScoringEngine
from commerce_scoring.utils.time_utils import Clock, utcnow


@dataclass(frozen=True)
class ServiceContext:
    """Process-wide collaborators shared by every endpoint.

    Attributes:
        config:      Validated application config.
        scoring:     Domain scoring engine (fraud, sentiment, rating, ...).
        recommender: Recommendation engine (variants, similar, popular).
        forecaster:  Demand forecast generator.
        clock:       Source of "now" for envelope timestamps.
    """

    config:      AppConfig
    scoring:     ScoringEngine
    recommender: RecommendationEngine
    forecaster:  ForecastGenerator
    clock:       Clock = utcnow


def build_context(config: AppConfig, clock: Clock = utcnow) -> ServiceContext:
    """Build all engines from ``config``.

    Raises:
        ValueError: If a configured default strategy or algorithm is unknown.
    """
    registry = build_domain_registry(
        default=config.scoring.default_strategy,
        confidence=config.scoring.confidence,
    )
    return ServiceContext(
        config=config,
        scoring=ScoringEngine(registry, precision=config.scoring.precision, clock=clock),
        recommender=RecommendationEngine(
            config.recommendations, precision=config.scoring.precision, clock=clock,
        ),
        forecaster=ForecastGenerator(clock=clock),
        clock=clock,
    )
