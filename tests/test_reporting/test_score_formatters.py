"""Tests for commerce_scoring/reporting/formatters.py and monitoring/health.py."""

from __future__ import annotations

from commerce_scoring.endpoints.analysis import (
    FraudEndpoint,
    PopularityEndpoint,
    SentimentEndpoint,
)
from commerce_scoring.endpoints.forecast import ForecastEndpoint
from commerce_scoring.endpoints.model import RetrainEndpoint
from commerce_scoring.monitoring.health import active_models, build_health_report
from commerce_scoring.reporting.formatters import (
    format_category_summary,
    format_forecast,
    format_fraud,
    format_health,
    format_popularity,
    format_product_table,
    format_retrain,
    format_sentiment,
)


class TestProductFormatters:
    def test_empty_table(self):
        text = format_product_table([], title="Popular Products")
        assert "=== Popular Products ===" in text
        assert "(no products)" in text

    def test_table_rows(self, recommender):
        products = recommender.generate(1, 3, "hybrid").products
        text = format_product_table(products, title="Recs", details=[("User", "1")])
        assert "User:" in text
        for p in products:
            assert str(p.product_id) in text
        assert "Relevance" in text

    def test_unscored_product(self, make_product):
        text = format_product_table([make_product()], title="Raw")
        assert "Sample Product" in text

    def test_category_summary(self, make_product):
        products = [
            make_product(product_id=1, category="Books", relevance_score=0.9, rank=1),
            make_product(product_id=2, category="Toys", relevance_score=0.5, rank=2),
        ]
        text = format_category_summary(products)
        assert "[Books] #1 Sample Product" in text
        assert "[Toys] #2 Sample Product" in text


class TestAnalysisFormatters:
    def test_sentiment(self, context):
        body = SentimentEndpoint(context).run(text="x" * 80 + " good").body
        text = format_sentiment(body)
        assert "Positive" in text or "Neutral" in text
        assert "..." in text

    def test_fraud_verdicts(self, context):
        bad = FraudEndpoint(context).run(
            transaction_id=1, amount=15000, location="Unknown", user_behavior="Suspicious",
        ).body
        good = FraudEndpoint(context).run(transaction_id=2, amount=10).body
        assert "FRAUDULENT" in format_fraud(bad)
        assert "legitimate" in format_fraud(good)

    def test_popularity(self, context):
        body = PopularityEndpoint(context).run(
            product_id=7, view_count=1000, cart_add_count=100, sales_count=50,
        ).body
        text = format_popularity(body)
        assert "=== Product Popularity ===" in text
        assert "1000 views, 100 cart adds, 50 sales" in text
        assert "Popular (popular)" in text

    def test_forecast_total(self, context):
        body = ForecastEndpoint(context).run(product_id=7, periods=3).body
        text = format_forecast(body)
        total = sum(p.predicted_value for p in body.forecast)
        assert text.splitlines()[-1].split()[-1] == str(total)
        assert "2026-01-02" in text


class TestModelFormatters:
    def test_retrain(self, context):
        body = RetrainEndpoint(context).run().body
        assert "v2.1.0 -> v2.1.1" in format_retrain(body)

    def test_health(self, context):
        text = format_health(build_health_report(context))
        assert "Healthy" in text
        assert "demand_forecast" in text


class TestHealth:
    def test_active_models(self, context):
        models = active_models(context)
        assert sorted(k for k in models if k.startswith("recommendation.")) == [
            "recommendation.collaborative",
            "recommendation.content",
            "recommendation.deeplearning",
            "recommendation.hybrid",
        ]
        assert len([k for k in models if k.startswith("scoring.")]) == 5

    def test_report_tracks_retrain(self, context, fixed_clock):
        context.recommender.retrain()
        report = build_health_report(context)
        assert report.model_version == "v2.1.1"
        assert report.last_model_update == fixed_clock()
