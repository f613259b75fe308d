"""
Analysis endpoints: sentiment, fraud detection and product popularity.
"""

from __future__ import annotations

from typing import Optional

from commerce_scoring.endpoints.base import Endpoint, require_int, require_text
from commerce_scoring.errors import ValidationError
from commerce_scoring.models.envelope import (
    FraudEnvelope,
    PopularityEnvelope,
    SentimentEnvelope,
)
from commerce_scoring.scoring.analysis import (
    analyze_sentiment,
    assess_fraud,
    assess_popularity,
)


class SentimentEndpoint(Endpoint):
    endpoint_name = "sentiment"

    def _handle(self, text: str) -> SentimentEnvelope:
        cfg = self.config.scoring
        text = require_text(text, "text")

        result = analyze_sentiment(
            self.context.scoring, text, cfg.positive_keywords, cfg.negative_keywords,
        )
        return SentimentEnvelope(
            text=text,
            sentiment_score=result.score,
            sentiment_label=result.label,
            confidence=result.confidence,
            analyzed_at=result.computed_at,
            model=cfg.sentiment_model,
        )


class FraudEndpoint(Endpoint):
    endpoint_name = "fraud-detection"

    def _handle(
        self,
        transaction_id: int,
        amount: float,
        location: Optional[str] = None,
        time_of_day: Optional[int] = None,
        user_behavior: Optional[str] = None,
    ) -> FraudEnvelope:
        cfg = self.config.scoring
        transaction_id = require_int(transaction_id, "transaction_id")
        if isinstance(amount, bool) or not isinstance(amount, (int, float)):
            raise ValidationError(f"amount must be a number, got {amount!r}.", field="amount")
        if time_of_day is not None:
            time_of_day = require_int(time_of_day, "time_of_day")

        assessment = assess_fraud(
            self.context.scoring,
            amount=amount,
            location=location,
            time_of_day=time_of_day,
            user_behavior=user_behavior,
            threshold=cfg.fraud_threshold,
        )
        return FraudEnvelope(
            transaction_id=transaction_id,
            fraud_score=assessment.result.score,
            is_fraudulent=assessment.is_fraudulent,
            risk_level=assessment.risk_level,
            confidence=assessment.result.confidence,
            features={
                "amount": amount,
                "location": location,
                "time_of_day": time_of_day,
                "user_behavior": user_behavior,
            },
            analyzed_at=assessment.result.computed_at,
            model=cfg.fraud_model,
        )


class PopularityEndpoint(Endpoint):
    endpoint_name = "popularity"

    def _handle(
        self,
        product_id: int,
        view_count: int,
        cart_add_count: int,
        sales_count: int,
    ) -> PopularityEnvelope:
        cfg = self.config.scoring
        product_id = require_int(product_id, "product_id")
        view_count = require_int(view_count, "view_count", minimum=0)
        cart_add_count = require_int(cart_add_count, "cart_add_count", minimum=0)
        sales_count = require_int(sales_count, "sales_count", minimum=0)

        assessment = assess_popularity(
            self.context.scoring,
            view_count,
            cart_add_count,
            sales_count,
            threshold=cfg.popularity_threshold,
        )
        return PopularityEnvelope(
            product_id=product_id,
            popularity_score=assessment.result.score,
            popularity_label=assessment.result.label,
            is_popular=assessment.is_popular,
            confidence=assessment.result.confidence,
            view_count=view_count,
            cart_add_count=cart_add_count,
            sales_count=sales_count,
            analyzed_at=assessment.result.computed_at,
            model=cfg.popularity_model,
        )
