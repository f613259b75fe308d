"""
Recommendation endpoints: personalized, similar products, anonymous.

Transport-side bounds (from ``RecommendationConfig``):
    personalized  limit in [1, max_personalized_limit]   default 10
    similar       limit in [1, max_similar_limit]        default 8
    anonymous     limit in [1, max_anonymous_limit]      default 12

An empty or unknown algorithm name is not an error; the engine falls back
to the default variant and the envelope reports the variant that ran.
"""

from __future__ import annotations

import logging
from typing import Optional

from commerce_scoring.endpoints.base import Endpoint, require_int, require_limit
from commerce_scoring.models.envelope import (
    AnonymousRecommendationEnvelope,
    RecommendationEnvelope,
    SimilarProductsEnvelope,
)

logger = logging.getLogger(__name__)


class PersonalizedRecommendationEndpoint(Endpoint):
    endpoint_name = "recommendations"

    def _handle(
        self,
        user_id: int,
        limit: Optional[int] = None,
        algorithm: Optional[str] = None,
    ) -> RecommendationEnvelope:
        cfg = self.config.recommendations
        user_id = require_int(user_id, "user_id")
        limit = require_limit(limit, cfg.default_limit, cfg.max_personalized_limit)

        batch = self.context.recommender.generate(user_id, limit, algorithm)
        if algorithm and algorithm.strip().lower() != batch.algorithm:
            logger.info(
                "Unknown algorithm '%s' for user %d; used '%s'.",
                algorithm, user_id, batch.algorithm,
            )

        return RecommendationEnvelope(
            user_id=user_id,
            algorithm=batch.algorithm,
            recommendations=batch.products,
            generated_at=self.context.clock(),
            total_count=len(batch.products),
            confidence=batch.confidence,
            model_version=batch.model_version,
        )


class SimilarProductsEndpoint(Endpoint):
    endpoint_name = "similar-products"

    def _handle(
        self,
        product_id: int,
        limit: Optional[int] = None,
    ) -> SimilarProductsEnvelope:
        cfg = self.config.recommendations
        product_id = require_int(product_id, "product_id")
        limit = require_limit(limit, cfg.default_similar_limit, cfg.max_similar_limit)

        return SimilarProductsEnvelope(
            product_id=product_id,
            similar_products=self.context.recommender.similar(product_id, limit),
            similarity_threshold=cfg.similarity_threshold,
            algorithm=cfg.similar_algorithm,
            generated_at=self.context.clock(),
        )


class AnonymousRecommendationEndpoint(Endpoint):
    endpoint_name = "anonymous-recommendations"

    def _handle(
        self,
        limit: Optional[int] = None,
        category: Optional[str] = None,
    ) -> AnonymousRecommendationEnvelope:
        cfg = self.config.recommendations
        limit = require_limit(limit, cfg.default_anonymous_limit, cfg.max_anonymous_limit)
        category = (category or "").strip() or None

        return AnonymousRecommendationEnvelope(
            category=category,
            recommendations=self.context.recommender.popular(limit, category),
            algorithm=cfg.anonymous_algorithm,
            popular_categories=list(cfg.popular_categories),
            generated_at=self.context.clock(),
        )
