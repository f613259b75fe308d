"""
Domain analysis helpers: build a feature vector from raw request fields and
score it with the matching domain strategy.

These are thin façades over ``ScoringEngine.compute()``.  They own feature
extraction (keyword counting, transaction fields, engagement counters) and
the domain decisions layered on top of the banded score:

    is_fraudulent = score > fraud_threshold   (0.7 by default)
    is_popular    = score > popularity_threshold (0.7 by default)

Both comparisons use the rounded, clamped score that is reported to the
caller, so the flag always agrees with the displayed number.

Keyword matching
----------------
A keyword counts once per text if it occurs anywhere in the lower-cased
text (substring containment, not token match): "not good" counts one
positive keyword, "goodness" counts one too.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from commerce_scoring.models.scoring import ScoringResult
from commerce_scoring.scoring import domains
from commerce_scoring.scoring.engine import ScoringEngine
from commerce_scoring.scoring.features import FeatureVector
from commerce_scoring.taxonomy.labels import ScoringDomain

DEFAULT_FRAUD_THRESHOLD = 0.7
DEFAULT_POPULARITY_THRESHOLD = 0.7


@dataclass(frozen=True)
class FraudAssessment:
    """Fraud score plus the threshold decision."""

    result:         ScoringResult
    is_fraudulent:  bool

    @property
    def risk_level(self) -> str:
        return self.result.label


@dataclass(frozen=True)
class PopularityAssessment:
    """Popularity score plus the threshold decision."""

    result:     ScoringResult
    is_popular: bool


# ── Feature extraction ────────────────────────────────────────────────────────


def count_keywords(text: str, keywords: Iterable[str]) -> int:
    """Number of distinct keywords contained in ``text`` (case-insensitive)."""
    lowered = text.lower()
    return sum(1 for word in set(k.lower() for k in keywords) if word and word in lowered)


def sentiment_features(
    text: str,
    positive_keywords: Iterable[str],
    negative_keywords: Iterable[str],
) -> FeatureVector:
    return FeatureVector.build({
        domains.POSITIVE_COUNT: count_keywords(text, positive_keywords),
        domains.NEGATIVE_COUNT: count_keywords(text, negative_keywords),
    })


def transaction_features(
    amount: float,
    location: str | None = None,
    time_of_day: int | None = None,
    user_behavior: str | None = None,
) -> FeatureVector:
    """Feature vector for one transaction.  ``None`` fields are omitted."""
    return FeatureVector.build({
        domains.AMOUNT:        amount,
        domains.LOCATION:      location,
        domains.TIME_OF_DAY:   time_of_day,
        domains.USER_BEHAVIOR: user_behavior,
    })


def engagement_features(
    view_count: int,
    cart_add_count: int,
    sales_count: int,
) -> FeatureVector:
    return FeatureVector.build({
        domains.VIEW_COUNT:     view_count,
        domains.CART_ADD_COUNT: cart_add_count,
        domains.SALES_COUNT:    sales_count,
    })


# ── Domain scoring ────────────────────────────────────────────────────────────


def analyze_sentiment(
    engine: ScoringEngine,
    text: str,
    positive_keywords: Iterable[str],
    negative_keywords: Iterable[str],
) -> ScoringResult:
    """Score ``text`` by keyword polarity.

    Text with no keyword matches always scores exactly 0.5 ("Neutral").
    """
    features = sentiment_features(text, positive_keywords, negative_keywords)
    return engine.compute(ScoringDomain.SENTIMENT, features)


def assess_fraud(
    engine: ScoringEngine,
    amount: float,
    location: str | None = None,
    time_of_day: int | None = None,
    user_behavior: str | None = None,
    threshold: float = DEFAULT_FRAUD_THRESHOLD,
) -> FraudAssessment:
    """Score one transaction and decide whether it is fraudulent.

    Raises:
        ValidationError: If ``amount`` or ``time_of_day`` is non-finite.
    """
    features = transaction_features(amount, location, time_of_day, user_behavior)
    result = engine.compute(ScoringDomain.FRAUD_RISK, features)
    return FraudAssessment(result=result, is_fraudulent=result.score > threshold)


def rating_text(engine: ScoringEngine, rating: float) -> str:
    """Band label for a 0–5 star average, e.g. 4.7 -> "Excellent"."""
    features = FeatureVector.build({domains.RATING: rating})
    return engine.compute(ScoringDomain.RATING, features).label


def assess_popularity(
    engine: ScoringEngine,
    view_count: int,
    cart_add_count: int,
    sales_count: int,
    threshold: float = DEFAULT_POPULARITY_THRESHOLD,
) -> PopularityAssessment:
    features = engagement_features(view_count, cart_add_count, sales_count)
    result = engine.compute(ScoringDomain.POPULARITY, features)
    return PopularityAssessment(result=result, is_popular=result.score > threshold)


def stock_status(engine: ScoringEngine, stock_quantity: int) -> str:
    """Band label for units on hand, e.g. 0 -> "Out of Stock"."""
    features = FeatureVector.build({domains.STOCK_QUANTITY: stock_quantity})
    return engine.compute(ScoringDomain.STOCK_STATUS, features).label
