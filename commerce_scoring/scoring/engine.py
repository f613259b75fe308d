"""
Scoring engine: resolve a strategy, score a feature vector, label the score.

Algorithm for ``compute(strategy_name, features)``
---------------------------------------------------
1. Resolve the strategy by name; unknown or empty names fall back to the
   registry default (never an error).
2. Evaluate each weighted rule against the features and sum the weighted
   matches (plus the strategy intercept).  Absent features contribute their
   predicate's neutral value.
3. Clamp to the strategy's declared range, then round to ``precision``
   decimal places (2 by default) for presentation stability.
4. Label the rounded score with the strategy's band table (top-down, first
   band whose lower bound <= score).
5. Attach the strategy's fixed confidence and a UTC timestamp.

The engine is a pure function of its inputs plus the registry snapshot it
reads; it holds no mutable state, takes no locks and performs no I/O, so any
number of threads may call ``compute()`` concurrently.  It raises
``ValidationError`` only for structurally invalid features and does not log
or catch on behalf of its caller.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from commerce_scoring.errors import ValidationError
from commerce_scoring.models.scoring import ScoringResult
from commerce_scoring.scoring.features import FeatureVector
from commerce_scoring.scoring.registry import StrategyRegistry
from commerce_scoring.scoring.rules import StrategyDefinition, clamp
from commerce_scoring.utils.time_utils import Clock, utcnow

DEFAULT_PRECISION = 2


class ScoringEngine:
    """Dispatches scoring requests to registered strategies.

    Attributes:
        registry:  Strategy lookup with default fallback.
        precision: Decimal places the score is rounded to.
    """

    def __init__(
        self,
        registry: StrategyRegistry,
        precision: int = DEFAULT_PRECISION,
        clock: Clock = utcnow,
    ) -> None:
        if precision < 0:
            raise ValueError(f"precision must be >= 0, got {precision}.")
        self.registry = registry
        self.precision = precision
        self._clock = clock

    def compute(
        self,
        strategy_name: str | None,
        features: FeatureVector | Mapping[str, Any],
    ) -> ScoringResult:
        """Score ``features`` with the named strategy.

        Args:
            strategy_name: Registry key; unknown/empty names use the default.
            features:      A ``FeatureVector``, or a plain mapping which is
                           built into one first.

        Returns:
            Immutable ``ScoringResult``.

        Raises:
            ValidationError: If ``features`` is structurally invalid.
        """
        vector = self._coerce(features)
        strategy = self.registry.resolve(strategy_name)
        return self.score_with(strategy, vector)

    def score_with(
        self,
        strategy: StrategyDefinition,
        features: FeatureVector,
    ) -> ScoringResult:
        """Score with an already-resolved strategy (skips registry lookup)."""
        raw = strategy.raw_score(features)
        lo, hi = strategy.clamp
        # an overflowed sum (inf) clamps to a bound; inf - inf (nan) maps to the floor
        bounded = lo if math.isnan(raw) else clamp(raw, lo, hi)
        score = round(bounded, self.precision)

        return ScoringResult(
            score=score,
            raw_score=round(raw, self.precision) if math.isfinite(raw) else None,
            label=str(strategy.bands.label(score)),
            confidence=strategy.confidence,
            strategy_name=str(strategy.name),
            computed_at=self._clock(),
        )

    @staticmethod
    def _coerce(features: FeatureVector | Mapping[str, Any]) -> FeatureVector:
        if isinstance(features, FeatureVector):
            return features
        if isinstance(features, Mapping):
            return FeatureVector.build(features)
        raise ValidationError(
            f"features must be a FeatureVector or mapping, got {type(features).__name__}."
        )
