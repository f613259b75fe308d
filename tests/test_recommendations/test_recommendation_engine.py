"""
Tests for commerce_scoring/recommendations/engine.py and variants.py.

What we test
------------
generate():
  - Each named variant produces `limit` products with its id offset and
    its price / rating / stock ranges and fixed reason.
  - Unknown ("quantum"), empty and None algorithm names resolve to hybrid.
  - Output is ranked by relevance (desc), ranks 1..n, reproducible per user.
similar():
  - Ids product_id + 100*i, shared category, price within 150 × [0.7, 1.3].
popular():
  - Ids 1000+i, requested category honoured, default categories otherwise.
retrain():
  - Bumps the patch version and publishes a new state; old snapshots stay valid.
"""

from __future__ import annotations

import pytest

from commerce_scoring.config import RecommendationConfig
from commerce_scoring.recommendations.engine import RecommendationEngine, _bump_patch_version
from commerce_scoring.recommendations.variants import VARIANTS, build_relevance_registry
from commerce_scoring.scoring.bands import RELEVANCE_BANDS


class TestGenerate:
    @pytest.mark.parametrize("algorithm, offset, price, rating, stock", [
        ("collaborative", 2000, (100, 500), (4.1, 5.0), (20, 150)),
        ("content",       3000, (75, 375),  (4.3, 5.0), (15, 120)),
        ("hybrid",        4000, (60, 410),  (4.4, 5.0), (25, 130)),
        ("deeplearning",  5000, (80, 400),  (4.5, 5.0), (30, 140)),
    ])
    def test_variant_shapes(
        self, recommender, algorithm, offset, price, rating, stock,
    ) -> None:
        batch = recommender.generate(user_id=42, limit=20, algorithm=algorithm)

        assert batch.algorithm == algorithm
        assert len(batch.products) == 20
        assert sorted(p.product_id for p in batch.products) == list(
            range(offset + 1, offset + 21)
        )
        for p in batch.products:
            assert price[0] <= p.price <= price[1]
            assert rating[0] <= p.rating <= rating[1]
            assert stock[0] <= p.stock_quantity < stock[1]
            assert p.reason == VARIANTS[algorithm].reason
            assert p.category in RecommendationConfig().categories

    @pytest.mark.parametrize("algorithm", ["quantum", "", "   ", None])
    def test_unknown_algorithm_resolves_to_hybrid(self, recommender, algorithm) -> None:
        batch = recommender.generate(user_id=1, limit=5, algorithm=algorithm)
        assert batch.algorithm == "hybrid"
        assert sorted(p.product_id for p in batch.products) == [4001, 4002, 4003, 4004, 4005]

    def test_algorithm_name_is_case_insensitive(self, recommender) -> None:
        assert recommender.generate(1, 3, "DeepLearning").algorithm == "deeplearning"

    def test_ranked_by_relevance(self, recommender) -> None:
        products = recommender.generate(user_id=9, limit=15).products
        scores = [p.relevance_score for p in products]
        assert scores == sorted(scores, reverse=True)
        assert [p.rank for p in products] == list(range(1, 16))
        for p in products:
            assert 0.0 <= p.relevance_score <= 1.0
            assert p.relevance_label in RELEVANCE_BANDS.labels

    def test_reproducible_per_user(self, recommender) -> None:
        first = recommender.generate(user_id=5, limit=10, algorithm="content")
        second = recommender.generate(user_id=5, limit=10, algorithm="content")
        assert first.products == second.products

    def test_zero_limit_is_empty(self, recommender) -> None:
        assert recommender.generate(user_id=1, limit=0).products == []

    def test_batch_metadata(self, recommender) -> None:
        batch = recommender.generate(user_id=1, limit=1)
        assert batch.model_version == "v2.1.0"
        assert batch.confidence == 0.94

    def test_configured_default_algorithm(self, fixed_clock) -> None:
        engine = RecommendationEngine(
            RecommendationConfig(default_algorithm="content"), clock=fixed_clock,
        )
        assert engine.generate(1, 2, "quantum").algorithm == "content"


class TestSimilar:
    def test_ids_category_and_prices(self, recommender) -> None:
        products = recommender.similar(product_id=7, limit=4)

        assert sorted(p.product_id for p in products) == [107, 207, 307, 407]
        assert len({p.category for p in products}) == 1
        for p in products:
            assert 105.0 <= p.price <= 195.0
            assert 4.0 <= p.rating <= 5.0
            assert 10 <= p.stock_quantity < 100
            assert p.relevance_score is not None

    def test_reproducible(self, recommender) -> None:
        assert recommender.similar(7, 5) == recommender.similar(7, 5)


class TestPopular:
    def test_requested_category(self, recommender) -> None:
        products = recommender.popular(limit=6, category="Books")
        assert {p.category for p in products} == {"Books"}
        assert sorted(p.product_id for p in products) == [1001, 1002, 1003, 1004, 1005, 1006]
        for p in products:
            assert 50.0 <= p.price <= 550.0
            assert 4.2 <= p.rating <= 5.0
            assert 50 <= p.stock_quantity < 200

    def test_default_categories(self, recommender) -> None:
        products = recommender.popular(limit=30)
        assert {p.category for p in products} <= set(RecommendationConfig().popular_categories)

    def test_blank_category_means_all(self, recommender) -> None:
        assert recommender.popular(5, "  ") == recommender.popular(5)


class TestRetrain:
    def test_bumps_version_and_swaps_state(self, recommender) -> None:
        before = recommender.state
        previous, current = recommender.retrain()

        assert previous is before
        assert current is recommender.state
        assert previous.model_version == "v2.1.0"
        assert current.model_version == "v2.1.1"
        assert recommender.generate(1, 1).model_version == "v2.1.1"

    def test_successive_retrains(self, recommender) -> None:
        recommender.retrain()
        _, current = recommender.retrain()
        assert current.model_version == "v2.1.2"

    def test_old_snapshot_still_resolves(self, recommender) -> None:
        old_registry = recommender.state.scorer.registry
        recommender.retrain()
        assert old_registry.resolve("content").name == "content"
        assert recommender.state.strategy_names == [
            "collaborative", "content", "deeplearning", "hybrid",
        ]

    @pytest.mark.parametrize("version, expected", [
        ("v2.1.0", "v2.1.1"),
        ("v2.1.9", "v2.1.10"),
        ("3", "4"),
        ("beta", "beta.1"),
    ])
    def test_bump_patch_version(self, version: str, expected: str) -> None:
        assert _bump_patch_version(version) == expected


class TestRelevanceRegistry:
    def test_default_is_hybrid(self) -> None:
        registry = build_relevance_registry()
        assert registry.default_name == "hybrid"
        assert registry.resolve("quantum").name == "hybrid"

    def test_confidence_applied(self) -> None:
        registry = build_relevance_registry(confidence=0.5)
        assert {registry.resolve(n).confidence for n in registry.list_names()} == {0.5}

    def test_unknown_default_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unknown default algorithm"):
            build_relevance_registry(default="quantum")

    def test_weights_sum_to_one(self) -> None:
        for variant in VARIANTS.values():
            total = sum(rule.weight for rule in variant.relevance.rules)
            assert total == pytest.approx(1.0)
