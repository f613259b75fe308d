"""
Response envelopes.

An envelope wraps an engine result with what the engine does not compute:
request echo fields (user / product / transaction id, analysed text), the
wall-clock generation timestamp and static model identifiers.  Endpoints
build envelopes; the CLI and any transport serialise them with
``model_dump(mode="json")``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from commerce_scoring.models.forecast import ForecastPoint
from commerce_scoring.models.product import Product


class _Envelope(BaseModel):
    model_config = ConfigDict(frozen=True, protected_namespaces=())


class RecommendationEnvelope(_Envelope):
    """Personalized recommendation list for one user."""

    user_id: int
    algorithm: str
    recommendations: list[Product]
    generated_at: datetime
    total_count: int
    confidence: float
    model_version: str


class SimilarProductsEnvelope(_Envelope):
    """Products similar to one base product."""

    product_id: int
    similar_products: list[Product]
    similarity_threshold: float
    algorithm: str
    generated_at: datetime


class AnonymousRecommendationEnvelope(_Envelope):
    """Popular products for visitors without a user id."""

    category: Optional[str]
    recommendations: list[Product]
    algorithm: str
    popular_categories: list[str]
    generated_at: datetime


class SentimentEnvelope(_Envelope):
    text: str
    sentiment_score: float
    sentiment_label: str
    confidence: float
    analyzed_at: datetime
    model: str


class PopularityEnvelope(_Envelope):
    """Engagement popularity for one product, with the counters it used."""

    product_id: int
    popularity_score: float
    popularity_label: str
    is_popular: bool
    confidence: float
    view_count: int
    cart_add_count: int
    sales_count: int
    analyzed_at: datetime
    model: str


class FraudEnvelope(_Envelope):
    """Fraud assessment for one transaction, with the features it used."""

    transaction_id: int
    fraud_score: float
    is_fraudulent: bool
    risk_level: str
    confidence: float
    features: dict[str, Any]
    analyzed_at: datetime
    model: str


class ForecastEnvelope(_Envelope):
    product_id: int
    periods: int
    forecast: list[ForecastPoint]
    generated_at: datetime
    model: str
    accuracy: float
    confidence_interval: tuple[float, float]


class RetrainResult(_Envelope):
    """Outcome of a model retrain: the newly published version."""

    message: str
    previous_version: str
    model_version: str
    strategies: list[str]
    retrained_at: datetime


class HealthReport(_Envelope):
    """Static liveness / version report."""

    status: str
    service: str
    version: str
    timestamp: datetime
    models: dict[str, str]
    model_version: str
    last_model_update: datetime
