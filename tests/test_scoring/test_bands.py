"""
Tests for commerce_scoring/scoring/bands.py.

What we test
------------
BandTable:
  - Bands are stored descending regardless of input order.
  - label() is top-down: first band with lower <= score wins; lower bounds
    are inclusive.
  - Scores below the domain minimum get the lowest label.
  - Empty tables and duplicate lower bounds are rejected.
  - rank() counts from the bottom; unknown labels raise KeyError.

Domain tables:
  - Exact thresholds for fraud risk, sentiment, rating, popularity, stock.
  - Band monotonicity: s1 < s2 never yields a strictly higher band for s1.
"""

from __future__ import annotations

import pytest

from commerce_scoring.scoring.bands import (
    FRAUD_RISK_BANDS,
    POPULARITY_BANDS,
    RATING_BANDS,
    RELEVANCE_BANDS,
    SENTIMENT_BANDS,
    STOCK_STATUS_BANDS,
    BandTable,
    ScoreBand,
)

ALL_TABLES = [
    FRAUD_RISK_BANDS,
    SENTIMENT_BANDS,
    RATING_BANDS,
    POPULARITY_BANDS,
    STOCK_STATUS_BANDS,
    RELEVANCE_BANDS,
]


class TestBandTable:
    def test_sorted_descending(self) -> None:
        table = BandTable("t", [ScoreBand(0.0, "low"), ScoreBand(0.5, "high")])
        assert [b.lower for b in table.bands] == [0.5, 0.0]
        assert table.labels == ["high", "low"]
        assert table.minimum == 0.0

    def test_lower_bound_inclusive(self) -> None:
        table = BandTable("t", [ScoreBand(0.5, "high"), ScoreBand(0.0, "low")])
        assert table.label(0.5) == "high"
        assert table.label(0.49) == "low"

    def test_below_minimum_gets_lowest_label(self) -> None:
        table = BandTable("t", [ScoreBand(1.0, "high"), ScoreBand(0.5, "low")])
        assert table.label(-3.0) == "low"

    def test_empty_table_rejected(self) -> None:
        with pytest.raises(ValueError, match="at least one band"):
            BandTable("t", [])

    def test_duplicate_lower_bounds_rejected(self) -> None:
        with pytest.raises(ValueError, match="duplicate lower bounds"):
            BandTable("t", [ScoreBand(0.5, "a"), ScoreBand(0.5, "b")])

    def test_rank_counts_from_bottom(self) -> None:
        assert FRAUD_RISK_BANDS.rank("Low") == 0
        assert FRAUD_RISK_BANDS.rank("High") == 4

    def test_rank_unknown_label(self) -> None:
        with pytest.raises(KeyError):
            FRAUD_RISK_BANDS.rank("Catastrophic")

    def test_repr(self) -> None:
        assert "fraud_risk" in repr(FRAUD_RISK_BANDS)


class TestDomainThresholds:
    @pytest.mark.parametrize("score, label", [
        (1.0, "High"), (0.8, "High"), (0.79, "Medium-High"), (0.6, "Medium-High"),
        (0.4, "Medium"), (0.2, "Low-Medium"), (0.19, "Low"), (0.0, "Low"),
    ])
    def test_fraud_risk(self, score: float, label: str) -> None:
        assert FRAUD_RISK_BANDS.label(score) == label

    @pytest.mark.parametrize("score, label", [
        (0.9, "Very Positive"), (0.6, "Positive"), (0.5, "Neutral"),
        (0.2, "Negative"), (0.1, "Very Negative"),
    ])
    def test_sentiment(self, score: float, label: str) -> None:
        assert SENTIMENT_BANDS.label(score) == label

    @pytest.mark.parametrize("rating, label", [
        (5.0, "Excellent"), (4.7, "Excellent"), (4.5, "Excellent"),
        (4.2, "Very Good"), (3.7, "Good"), (3.2, "Regular"),
        (2.5, "Poor"), (1.0, "Very Poor"), (0.0, "Very Poor"),
    ])
    def test_rating(self, rating: float, label: str) -> None:
        assert RATING_BANDS.label(rating) == label

    @pytest.mark.parametrize("score, label", [
        (0.7, "Popular"), (0.5, "Trending"), (0.1, "Niche"),
    ])
    def test_popularity(self, score: float, label: str) -> None:
        assert POPULARITY_BANDS.label(score) == label

    @pytest.mark.parametrize("qty, label", [
        (0, "Out of Stock"), (1, "Low Stock"), (9, "Low Stock"),
        (10, "Moderate Stock"), (49, "Moderate Stock"), (50, "In Stock"),
    ])
    def test_stock_status(self, qty: int, label: str) -> None:
        assert STOCK_STATUS_BANDS.label(qty) == label


class TestMonotonicity:
    @pytest.mark.parametrize("table", ALL_TABLES, ids=lambda t: t.domain)
    def test_higher_score_never_gets_lower_band(self, table: BandTable) -> None:
        top = table.bands[0].lower
        grid = [table.minimum - 1 + i * (top + 2 - table.minimum) / 400 for i in range(401)]
        ranks = [table.rank(table.label(s)) for s in grid]
        assert all(a <= b for a, b in zip(ranks, ranks[1:]))

    @pytest.mark.parametrize("table", ALL_TABLES, ids=lambda t: t.domain)
    def test_tables_are_exhaustive(self, table: BandTable) -> None:
        assert table.label(table.minimum) == table.labels[-1]
