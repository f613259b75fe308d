"""
Shared pytest fixtures for the commerce scoring test suite.

Provides:
  - ``fixed_clock``: a clock pinned to ``FIXED_NOW`` so timestamps and
    forecast dates are exact.
  - Engine fixtures built from default config: ``domain_engine``,
    ``recommender``, ``forecaster`` and the full ``context``.
  - ``make_product``: factory for valid ``Product`` instances.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable

import pytest

from commerce_scoring.config import AppConfig, RecommendationConfig, ScoringConfig
from commerce_scoring.context import ServiceContext, build_context
from commerce_scoring.forecasting.generator import ForecastGenerator
from commerce_scoring.models.product import Product
from commerce_scoring.recommendations.engine import RecommendationEngine
from commerce_scoring.scoring.domains import build_domain_registry
from commerce_scoring.scoring.engine import ScoringEngine

FIXED_NOW = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


# ── Clock ─────────────────────────────────────────────────────────────────────

@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """A clock that always returns ``FIXED_NOW``."""
    return lambda: FIXED_NOW


# ── Engines ───────────────────────────────────────────────────────────────────

@pytest.fixture
def app_config() -> AppConfig:
    """Built-in default configuration (no TOML, no env)."""
    return AppConfig()


@pytest.fixture
def domain_engine(fixed_clock) -> ScoringEngine:
    """Scoring engine over the five domain strategies."""
    cfg = ScoringConfig()
    registry = build_domain_registry(cfg.default_strategy, cfg.confidence)
    return ScoringEngine(registry, precision=cfg.precision, clock=fixed_clock)


@pytest.fixture
def recommender(fixed_clock) -> RecommendationEngine:
    return RecommendationEngine(RecommendationConfig(), clock=fixed_clock)


@pytest.fixture
def forecaster(fixed_clock) -> ForecastGenerator:
    return ForecastGenerator(clock=fixed_clock)


@pytest.fixture
def context(app_config, fixed_clock) -> ServiceContext:
    """Full service context as the CLI builds it, with a pinned clock."""
    return build_context(app_config, clock=fixed_clock)


# ── Sample domain object factories ────────────────────────────────────────────

@pytest.fixture
def make_product() -> Callable[..., Product]:
    """Factory for valid ``Product`` instances; override any field by keyword."""

    def _make(**overrides) -> Product:
        fields = dict(
            product_id=1,
            name="Sample Product",
            description="A product for tests",
            price=100.0,
            category="Books",
            image_url="https://example.com/images/sample-1.jpg",
            rating=4.5,
            stock_quantity=25,
            created_at=FIXED_NOW - timedelta(days=30),
        )
        fields.update(overrides)
        return Product(**fields)

    return _make
