"""
Domain strategies: fraud risk, sentiment, rating, popularity, stock status.

Every domain is one ``StrategyDefinition`` over a small, named feature set.
Weights and thresholds are fixed configuration carried over from the
rule-based system; they are placeholders, not learned values.

fraud_risk (clamp 0–1)
    amount > 10000                 +0.3
    location == "Unknown"          +0.4
    time_of_day < 6 or > 23        +0.2
    user_behavior == "Suspicious"  +0.5

sentiment (clamp 0–1, intercept 0.5, no-signal score 0.5)
    positive_keyword_count × +0.1
    negative_keyword_count × −0.1
    i.e. clamp01((positive − negative + 5) / 10); text with no keyword
    matches scores exactly 0.5.

rating (clamp 0–5)
    rating × 1.0   (a pass-through so star averages share the band mechanism)

popularity (clamp 0–1)
    min(1, view_count / 1000)     × 0.3
    min(1, cart_add_count / 100)  × 0.4
    min(1, sales_count / 50)      × 0.3

stock_status (clamp 0–1e9)
    stock_quantity × 1.0
"""

from __future__ import annotations

from collections.abc import Mapping

from commerce_scoring.scoring.bands import (
    FRAUD_RISK_BANDS,
    POPULARITY_BANDS,
    RATING_BANDS,
    SENTIMENT_BANDS,
    STOCK_STATUS_BANDS,
)
from commerce_scoring.scoring.registry import StrategyRegistry
from commerce_scoring.scoring.rules import (
    StrategyDefinition,
    count,
    equals,
    greater_than,
    outside,
    ratio,
    rules_from,
)
from commerce_scoring.taxonomy.labels import ScoringDomain

# ── Feature names ─────────────────────────────────────────────────────────────

AMOUNT          = "amount"
LOCATION        = "location"
TIME_OF_DAY     = "time_of_day"
USER_BEHAVIOR   = "user_behavior"
POSITIVE_COUNT  = "positive_keyword_count"
NEGATIVE_COUNT  = "negative_keyword_count"
RATING          = "rating"
VIEW_COUNT      = "view_count"
CART_ADD_COUNT  = "cart_add_count"
SALES_COUNT     = "sales_count"
STOCK_QUANTITY  = "stock_quantity"

UNKNOWN_LOCATION    = "Unknown"
SUSPICIOUS_BEHAVIOR = "Suspicious"

_MAX_STOCK = 1_000_000_000.0


FRAUD_RISK = StrategyDefinition(
    name=ScoringDomain.FRAUD_RISK,
    rules=rules_from([
        ("high_amount",         greater_than(AMOUNT, 10_000),                 0.3),
        ("unknown_location",    equals(LOCATION, UNKNOWN_LOCATION),           0.4),
        ("off_hours",           outside(TIME_OF_DAY, 6, 23),                  0.2),
        ("suspicious_behavior", equals(USER_BEHAVIOR, SUSPICIOUS_BEHAVIOR),   0.5),
    ]),
    bands=FRAUD_RISK_BANDS,
    confidence=0.89,
    description="Sum of independent binary risk signals, capped at 1.0.",
)

SENTIMENT = StrategyDefinition(
    name=ScoringDomain.SENTIMENT,
    rules=rules_from([
        ("positive_keywords", count(POSITIVE_COUNT),  0.1),
        ("negative_keywords", count(NEGATIVE_COUNT), -0.1),
    ]),
    bands=SENTIMENT_BANDS,
    confidence=0.92,
    intercept=0.5,
    no_signal_score=0.5,
    description="Keyword polarity balance centred on neutral (0.5).",
)

RATING_TEXT = StrategyDefinition(
    name=ScoringDomain.RATING,
    rules=rules_from([
        ("rating", count(RATING), 1.0),
    ]),
    bands=RATING_BANDS,
    confidence=1.0,
    clamp=(0.0, 5.0),
    description="Star average mapped to a rating text.",
)

POPULARITY = StrategyDefinition(
    name=ScoringDomain.POPULARITY,
    rules=rules_from([
        ("views",     ratio(VIEW_COUNT, 1000),   0.3),
        ("cart_adds", ratio(CART_ADD_COUNT, 100), 0.4),
        ("sales",     ratio(SALES_COUNT, 50),     0.3),
    ]),
    bands=POPULARITY_BANDS,
    confidence=0.90,
    description="Normalised engagement: views, cart additions and sales.",
)

STOCK_STATUS = StrategyDefinition(
    name=ScoringDomain.STOCK_STATUS,
    rules=rules_from([
        ("stock_quantity", count(STOCK_QUANTITY), 1.0),
    ]),
    bands=STOCK_STATUS_BANDS,
    confidence=1.0,
    clamp=(0.0, _MAX_STOCK),
    description="Units on hand mapped to a stock status.",
)

DOMAIN_STRATEGIES: tuple[StrategyDefinition, ...] = (
    FRAUD_RISK,
    SENTIMENT,
    RATING_TEXT,
    POPULARITY,
    STOCK_STATUS,
)


def build_domain_registry(
    default: str = ScoringDomain.SENTIMENT,
    confidence: Mapping[str, float] | None = None,
) -> StrategyRegistry:
    """Build the registry of domain strategies.

    Args:
        default:    Fallback strategy for unknown names.  Sentiment is the
                    default because, with no features, it reports the
                    neutral mid-point rather than an extreme.
        confidence: Optional per-strategy confidence overrides (from
                    ``ScoringConfig.confidence``); unnamed strategies keep
                    their built-in constant.

    Returns:
        A populated ``StrategyRegistry``.

    Raises:
        ValueError: If ``default`` is not one of the domain strategies.
    """
    overrides = dict(confidence or {})
    definitions = [
        d.with_confidence(overrides[d.name]) if d.name in overrides else d
        for d in DOMAIN_STRATEGIES
    ]
    names = {str(d.name) for d in definitions}
    if default.strip().lower() not in names:
        raise ValueError(
            f"Unknown default scoring strategy '{default}'. Must be one of {sorted(names)}."
        )
    return StrategyRegistry(default=default, strategies=definitions)
