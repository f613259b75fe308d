"""
Recommendation engine: variant dispatch, relevance scoring and retrain.

Operations
----------
generate(user_id, limit, algorithm)
    Resolve ``algorithm`` through the relevance registry (unknown or empty
    names fall back to the default, ``hybrid``), draw ``limit`` candidates
    from a stream seeded by (user_id, variant), score each with the
    variant's relevance strategy and rank them.

similar(product_id, limit)
    Candidates around a base product (price 150.0, category
    drawn from the stream seeded by product_id), scored with the ``content``
    relevance strategy.

popular(limit, category=None)
    Popularity list for anonymous visitors, seeded from the category text
    (``"all"`` when no category is given), scored with ``collaborative``.

retrain()
    Rebuild the relevance registry and publish it together with a bumped
    model version as a single ``ModelState`` reference.

The engine does not validate ``limit`` bounds; endpoints do.  A ``limit``
of zero or less yields an empty list.

Concurrency
-----------
Every operation reads ``self._state`` once and works from that snapshot, so
a concurrent ``retrain()`` is observed either entirely or not at all.
"""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from commerce_scoring.config import RecommendationConfig
from commerce_scoring.models.product import Product
from commerce_scoring.recommendations.ranker import rank_products
from commerce_scoring.recommendations.variants import (
    IMAGE_URL_TEMPLATE,
    VARIANTS,
    build_relevance_registry,
    relevance_features,
)
from commerce_scoring.scoring.engine import DEFAULT_PRECISION, ScoringEngine
from commerce_scoring.scoring.rules import StrategyDefinition
from commerce_scoring.taxonomy.labels import RecommendationAlgorithm
from commerce_scoring.utils.random_utils import seeded_generator, uniform_int, unit_float
from commerce_scoring.utils.time_utils import Clock, days_from, utcnow

logger = logging.getLogger(__name__)

BASE_PRODUCT_PRICE = 150.0
SIMILAR_ID_STRIDE = 100
ANONYMOUS_ID_OFFSET = 1000
ALL_CATEGORIES = "all"

_VERSION_RE = re.compile(r"^(?P<head>.*?)(?P<patch>\d+)$")


def _bump_patch_version(version: str) -> str:
    """``"v2.1.0"`` -> ``"v2.1.1"``; a version without a numeric tail gains ``".1"``."""
    match = _VERSION_RE.match(version)
    if match is None:
        return f"{version}.1"
    return f"{match.group('head')}{int(match.group('patch')) + 1}"


@dataclass(frozen=True)
class ModelState:
    """Everything a retrain replaces, published as one reference."""

    scorer:        ScoringEngine
    model_version: str
    last_updated:  datetime

    @property
    def strategy_names(self) -> list[str]:
        return self.scorer.registry.list_names()


@dataclass(frozen=True)
class RecommendationBatch:
    """Ranked products plus the variant and model version that produced them."""

    algorithm:     str
    products:      list[Product]
    model_version: str
    confidence:    float


class RecommendationEngine:
    """Dispatches recommendation requests to the named variant.

    Args:
        config:    Recommendation settings (default algorithm, version, categories).
        precision: Decimal places for relevance scores.
        clock:     Source of "now"; injectable for tests.
    """

    def __init__(
        self,
        config: RecommendationConfig,
        precision: int = DEFAULT_PRECISION,
        clock: Clock = utcnow,
    ) -> None:
        self.config = config
        self._precision = precision
        self._clock = clock
        self._retrain_lock = threading.Lock()
        self._state = self._build_state(config.model_version)

    @property
    def state(self) -> ModelState:
        return self._state

    @property
    def model_version(self) -> str:
        return self._state.model_version

    # ── Public operations ────────────────────────────────────────────────────

    def generate(
        self,
        user_id: int,
        limit: int,
        algorithm: Optional[str] = None,
    ) -> RecommendationBatch:
        """Personalized recommendations for ``user_id``.

        Args:
            user_id:   User identifier; seeds the candidate stream.
            limit:     Number of products (bounds are the caller's concern).
            algorithm: Variant name; unknown or empty -> default variant.

        Returns:
            ``RecommendationBatch`` ranked by relevance.
        """
        state = self._state
        strategy = state.scorer.registry.resolve(algorithm)
        profile = VARIANTS[str(strategy.name)]
        now = self._clock()

        rng = seeded_generator(user_id, profile.algorithm)
        candidates = profile.candidates(rng, limit, now, self.config.categories)
        ranked = self._score_and_rank(state, strategy, candidates, now)

        logger.debug(
            "Generated %d '%s' recommendations for user %s (requested '%s').",
            len(ranked), profile.algorithm, user_id, algorithm,
        )
        return RecommendationBatch(
            algorithm=str(profile.algorithm),
            products=ranked,
            model_version=state.model_version,
            confidence=strategy.confidence,
        )

    def similar(self, product_id: int, limit: int) -> list[Product]:
        """Products similar to ``product_id``, same category, ranked."""
        state = self._state
        strategy = state.scorer.registry.resolve(RecommendationAlgorithm.CONTENT)
        now = self._clock()

        rng = seeded_generator(product_id)
        categories = self.config.categories
        category = categories[uniform_int(rng, 0, len(categories))]
        base_name = f"Base Product {product_id}"

        candidates: list[Product] = []
        for i in range(1, limit + 1):
            candidate_id = product_id + i * SIMILAR_ID_STRIDE
            price = BASE_PRODUCT_PRICE * (0.7 + unit_float(rng) * 0.6)
            stock = uniform_int(rng, 10, 100)
            rating = 4.0 + unit_float(rng) * 1.0
            age = uniform_int(rng, 1, 365)
            candidates.append(Product(
                product_id=candidate_id,
                name=f"Similar Product {i} - {category}",
                description=f"Similar to {base_name}",
                price=round(price, 2),
                category=category,
                image_url=IMAGE_URL_TEMPLATE.format(slug="product", index=candidate_id),
                rating=min(5.0, round(rating, 1)),
                stock_quantity=stock,
                created_at=days_from(now, -age),
                reason=f"Shares category and price range with {base_name}",
            ))

        return self._score_and_rank(state, strategy, candidates, now)

    def popular(self, limit: int, category: Optional[str] = None) -> list[Product]:
        """Popular products for anonymous visitors, optionally in one category."""
        state = self._state
        strategy = state.scorer.registry.resolve(RecommendationAlgorithm.COLLABORATIVE)
        now = self._clock()

        category = (category or "").strip() or None
        categories = [category] if category else self.config.popular_categories
        rng = seeded_generator(category or ALL_CATEGORIES)

        candidates: list[Product] = []
        for i in range(1, limit + 1):
            chosen = categories[uniform_int(rng, 0, len(categories))]
            price = 50.0 + unit_float(rng) * 500.0
            stock = uniform_int(rng, 50, 200)
            rating = 4.2 + unit_float(rng) * 0.8
            age = uniform_int(rng, 1, 180)
            candidates.append(Product(
                product_id=ANONYMOUS_ID_OFFSET + i,
                name=f"Popular Product {i} - {chosen}",
                description=f"Popular product in {chosen}",
                price=round(price, 2),
                category=chosen,
                image_url=IMAGE_URL_TEMPLATE.format(slug="popular", index=i),
                rating=min(5.0, round(rating, 1)),
                stock_quantity=stock,
                created_at=days_from(now, -age),
                reason=self.config.anonymous_algorithm,
            ))

        return self._score_and_rank(state, strategy, candidates, now)

    def retrain(self) -> tuple[ModelState, ModelState]:
        """Rebuild the relevance strategies and publish a new model version.

        Returns:
            ``(previous_state, new_state)``.
        """
        with self._retrain_lock:
            previous = self._state
            new_state = self._build_state(_bump_patch_version(previous.model_version))
            self._state = new_state

        logger.info(
            "Recommendation model retrained: %s -> %s",
            previous.model_version, new_state.model_version,
        )
        return previous, new_state

    # ── Internals ────────────────────────────────────────────────────────────

    def _build_state(self, model_version: str) -> ModelState:
        registry = build_relevance_registry(
            default=self.config.default_algorithm,
            confidence=self.config.confidence,
        )
        return ModelState(
            scorer=ScoringEngine(registry, precision=self._precision, clock=self._clock),
            model_version=model_version,
            last_updated=self._clock(),
        )

    @staticmethod
    def _score_and_rank(
        state: ModelState,
        strategy: StrategyDefinition,
        candidates: list[Product],
        now: datetime,
    ) -> list[Product]:
        scored = []
        for product in candidates:
            result = state.scorer.score_with(strategy, relevance_features(product, now))
            scored.append(product.model_copy(update={
                "relevance_score": result.score,
                "relevance_label": result.label,
            }))
        return rank_products(scored)
