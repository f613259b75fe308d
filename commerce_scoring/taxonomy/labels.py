"""
Label taxonomy for the scoring core.

Two kinds of vocabulary live here:
  - ``RecommendationAlgorithm`` / ``ScoringDomain`` — the *names* callers
    use to pick a strategy.
  - ``RiskLevel``, ``SentimentLabel``, ``RatingText``, ``PopularityLabel``,
    ``StockStatus`` — the *labels* a band table assigns to a score.

All are ``StrEnum`` so members compare equal to their plain string values
(``RiskLevel.HIGH == "High"``) and serialize as strings.

This module has NO imports from any other ``commerce_scoring`` package.
"""

from enum import StrEnum


class RecommendationAlgorithm(StrEnum):
    """Named recommendation variants; unknown names resolve to HYBRID."""

    COLLABORATIVE = "collaborative"
    """Based on users with similar preferences."""

    CONTENT = "content"
    """Based on the characteristics of products the user likes."""

    HYBRID = "hybrid"
    """Blend of collaborative, content and learned signals (default)."""

    DEEP_LEARNING = "deeplearning"
    """Neural collaborative filtering."""


class ScoringDomain(StrEnum):
    """Named domain strategies registered with the scoring engine."""

    FRAUD_RISK = "fraud_risk"
    SENTIMENT = "sentiment"
    RATING = "rating"
    POPULARITY = "popularity"
    STOCK_STATUS = "stock_status"


class RiskLevel(StrEnum):
    """Fraud risk bands over a 0–1 score."""

    HIGH = "High"
    MEDIUM_HIGH = "Medium-High"
    MEDIUM = "Medium"
    LOW_MEDIUM = "Low-Medium"
    LOW = "Low"


class SentimentLabel(StrEnum):
    """Sentiment bands over a 0–1 score."""

    VERY_POSITIVE = "Very Positive"
    POSITIVE = "Positive"
    NEUTRAL = "Neutral"
    NEGATIVE = "Negative"
    VERY_NEGATIVE = "Very Negative"


class RatingText(StrEnum):
    """Rating bands over a 0–5 star average."""

    EXCELLENT = "Excellent"
    VERY_GOOD = "Very Good"
    GOOD = "Good"
    REGULAR = "Regular"
    POOR = "Poor"
    VERY_POOR = "Very Poor"


class PopularityLabel(StrEnum):
    """Popularity bands over a 0–1 engagement score."""

    POPULAR = "Popular"
    TRENDING = "Trending"
    NICHE = "Niche"


class StockStatus(StrEnum):
    """Stock bands over a unit count."""

    IN_STOCK = "In Stock"
    MODERATE = "Moderate Stock"
    LOW = "Low Stock"
    OUT_OF_STOCK = "Out of Stock"
