"""
Recommendation variants and their relevance strategies.

Each named algorithm (collaborative, content, hybrid, deeplearning) is a
``VariantProfile``: the catalogue ranges its simulated candidates are drawn
from, a fixed reason string, and a relevance ``StrategyDefinition`` that the
scoring engine uses to score and rank the candidates.

Candidate ranges (u ~ U[0, 1), n ~ integer U[lo, hi))
-----------------------------------------------------
    variant        id        price            rating          stock      age (days)
    collaborative  2000+i    100 + u*400      4.1 + u*0.9     [20, 150)  [1, 200)
    content        3000+i     75 + u*300      4.3 + u*0.7     [15, 120)  [1, 150)
    hybrid         4000+i     60 + u*350      4.4 + u*0.6     [25, 130)  [1, 180)
    deeplearning   5000+i     80 + u*320      4.5 + u*0.5     [30, 140)  [1, 160)

Draw order per candidate: price, category, stock, rating, age.

Relevance (clamp 0–1)
---------------------
    rating_fit    = rating / 5
    price_fit     = 1 − min(1, price / 500)
    stock_depth   = stock_quantity >= 50
    freshness     = 1 − min(1, recency_days / 365)

    variant        rating_fit  price_fit  stock_depth  freshness
    collaborative     0.60       0.20        0.10        0.10
    content           0.50       0.30        0.10        0.10
    hybrid            0.50       0.25        0.10        0.15
    deeplearning      0.55       0.20        0.05        0.20

The weights are placeholders for model-reported relevance; every row sums
to 1.0 so a perfect candidate scores exactly 1.0.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

import numpy as np

from commerce_scoring.models.product import Product
from commerce_scoring.scoring.bands import RELEVANCE_BANDS
from commerce_scoring.scoring.features import FeatureVector
from commerce_scoring.scoring.registry import StrategyRegistry
from commerce_scoring.scoring.rules import (
    StrategyDefinition,
    at_least,
    inverse_ratio,
    ratio,
    rules_from,
)
from commerce_scoring.taxonomy.labels import RecommendationAlgorithm
from commerce_scoring.utils.random_utils import uniform_int, unit_float
from commerce_scoring.utils.time_utils import days_from

IMAGE_URL_TEMPLATE = "https://example.com/images/{slug}-{index}.jpg"

# ── Relevance features ────────────────────────────────────────────────────────

RATING_FEATURE   = "rating"
PRICE_FEATURE    = "price"
STOCK_FEATURE    = "stock_quantity"
RECENCY_FEATURE  = "recency_days"

PRICE_FULL_SCALE   = 500.0
RECENCY_FULL_SCALE = 365.0
DEEP_STOCK         = 50


def relevance_features(product: Product, now: datetime) -> FeatureVector:
    """Relevance inputs for one candidate, relative to ``now``."""
    recency = max(0, (now - product.created_at).days)
    return FeatureVector.build({
        RATING_FEATURE:  product.rating,
        PRICE_FEATURE:   product.price,
        STOCK_FEATURE:   product.stock_quantity,
        RECENCY_FEATURE: recency,
    })


def _relevance_strategy(
    algorithm: RecommendationAlgorithm,
    rating_w: float,
    price_w: float,
    stock_w: float,
    recency_w: float,
    description: str,
) -> StrategyDefinition:
    return StrategyDefinition(
        name=algorithm,
        rules=rules_from([
            ("rating_fit",  ratio(RATING_FEATURE, 5.0),                       rating_w),
            ("price_fit",   inverse_ratio(PRICE_FEATURE, PRICE_FULL_SCALE),   price_w),
            ("stock_depth", at_least(STOCK_FEATURE, DEEP_STOCK),              stock_w),
            ("freshness",   inverse_ratio(RECENCY_FEATURE, RECENCY_FULL_SCALE), recency_w),
        ]),
        bands=RELEVANCE_BANDS,
        description=description,
    )


# ── Variant profiles ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class VariantProfile:
    """Candidate ranges, reason and relevance strategy of one variant.

    Attributes:
        algorithm:    Variant name.
        title:        Display prefix for candidate names.
        reason:       Fixed descriptive reason attached to every candidate.
        id_offset:    Candidate ``i`` gets id ``id_offset + i``.
        price:        ``(base, span)``: price = base + u * span.
        rating:       ``(base, span)``: rating = base + u * span.
        stock:        Half-open integer range for stock quantity.
        age_days:     Half-open integer range for days since creation.
        relevance:    Weighted relevance strategy.
    """

    algorithm:  RecommendationAlgorithm
    title:      str
    reason:     str
    id_offset:  int
    price:      tuple[float, float]
    rating:     tuple[float, float]
    stock:      tuple[int, int]
    age_days:   tuple[int, int]
    relevance:  StrategyDefinition

    def candidates(
        self,
        rng: np.random.Generator,
        limit: int,
        now: datetime,
        categories: Sequence[str],
    ) -> list[Product]:
        """Draw ``limit`` unscored candidates from ``rng``."""
        products: list[Product] = []
        for i in range(1, limit + 1):
            price = self.price[0] + unit_float(rng) * self.price[1]
            category = categories[uniform_int(rng, 0, len(categories))]
            stock = uniform_int(rng, *self.stock)
            rating = self.rating[0] + unit_float(rng) * self.rating[1]
            age = uniform_int(rng, *self.age_days)

            products.append(Product(
                product_id=self.id_offset + i,
                name=f"{self.title} {i}",
                description=self.reason,
                price=round(price, 2),
                category=category,
                image_url=IMAGE_URL_TEMPLATE.format(slug=self.algorithm, index=i),
                rating=min(5.0, round(rating, 1)),
                stock_quantity=stock,
                created_at=days_from(now, -age),
                reason=self.reason,
            ))
        return products


COLLABORATIVE = VariantProfile(
    algorithm=RecommendationAlgorithm.COLLABORATIVE,
    title="Collaborative Recommendation",
    reason="Based on users with similar preferences",
    id_offset=2000,
    price=(100.0, 400.0),
    rating=(4.1, 0.9),
    stock=(20, 150),
    age_days=(1, 200),
    relevance=_relevance_strategy(
        RecommendationAlgorithm.COLLABORATIVE, 0.60, 0.20, 0.10, 0.10,
        "Crowd rating dominates; price and freshness as tie-breakers.",
    ),
)

CONTENT = VariantProfile(
    algorithm=RecommendationAlgorithm.CONTENT,
    title="Content Recommendation",
    reason="Based on the characteristics of products you like",
    id_offset=3000,
    price=(75.0, 300.0),
    rating=(4.3, 0.7),
    stock=(15, 120),
    age_days=(1, 150),
    relevance=_relevance_strategy(
        RecommendationAlgorithm.CONTENT, 0.50, 0.30, 0.10, 0.10,
        "Attribute fit: rating and price affinity.",
    ),
)

HYBRID = VariantProfile(
    algorithm=RecommendationAlgorithm.HYBRID,
    title="Hybrid Recommendation",
    reason="Combination of multiple algorithms for maximum precision",
    id_offset=4000,
    price=(60.0, 350.0),
    rating=(4.4, 0.6),
    stock=(25, 130),
    age_days=(1, 180),
    relevance=_relevance_strategy(
        RecommendationAlgorithm.HYBRID, 0.50, 0.25, 0.10, 0.15,
        "Blend of collaborative, content and freshness signals (default).",
    ),
)

DEEP_LEARNING = VariantProfile(
    algorithm=RecommendationAlgorithm.DEEP_LEARNING,
    title="Deep Learning Recommendation",
    reason="Using neural networks to capture complex patterns",
    id_offset=5000,
    price=(80.0, 320.0),
    rating=(4.5, 0.5),
    stock=(30, 140),
    age_days=(1, 160),
    relevance=_relevance_strategy(
        RecommendationAlgorithm.DEEP_LEARNING, 0.55, 0.20, 0.05, 0.20,
        "Neural collaborative filtering stand-in; favours fresh, well-rated items.",
    ),
)

VARIANTS: dict[str, VariantProfile] = {
    str(v.algorithm): v for v in (COLLABORATIVE, CONTENT, HYBRID, DEEP_LEARNING)
}


def build_relevance_registry(
    default: str = RecommendationAlgorithm.HYBRID,
    confidence: float | None = None,
) -> StrategyRegistry:
    """Registry of the four relevance strategies, falling back to ``default``.

    Args:
        default:    Variant used for unknown or empty algorithm names.
        confidence: Confidence constant applied to every relevance strategy
                    (``RecommendationConfig.confidence``).

    Raises:
        ValueError: If ``default`` is not a known variant.
    """
    if default.strip().lower() not in VARIANTS:
        raise ValueError(
            f"Unknown default algorithm '{default}'. Must be one of {sorted(VARIANTS)}."
        )
    definitions = [
        v.relevance if confidence is None else v.relevance.with_confidence(confidence)
        for v in VARIANTS.values()
    ]
    return StrategyRegistry(default=default, strategies=definitions)
