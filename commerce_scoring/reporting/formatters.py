"""
ASCII terminal formatters for CLI output.

All formatters accept envelopes / models and return plain multi-line
strings suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).
"""

from __future__ import annotations

from collections.abc import Sequence

from commerce_scoring.models.envelope import (
    ForecastEnvelope,
    FraudEnvelope,
    HealthReport,
    PopularityEnvelope,
    RetrainResult,
    SentimentEnvelope,
)
from commerce_scoring.models.product import Product
from commerce_scoring.recommendations.ranker import top_n_per_category


def _ts(value) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S UTC")


# ── Products ──────────────────────────────────────────────────────────────────


def format_product_table(
    products: Sequence[Product],
    title: str,
    details: Sequence[tuple[str, str]] = (),
) -> str:
    """Format a ranked product list as an ASCII table::

        Rank      ID  Name                  Category     Price  Rating  Stock  Relevance
        --------------------------------------------------------------------------------
           1    4003  Hybrid Recommendation Books        91.20     4.9     88  0.93 Strong Match

    Args:
        products: Ranked products.
        title:    Block header.
        details:  ``(label, value)`` lines printed under the header.

    Returns:
        Multi-line string.
    """
    lines: list[str] = ["", f"=== {title} ==="]
    for label, value in details:
        lines.append(f"  {label + ':':<14}{value}")

    if not products:
        lines.append("")
        lines.append("  (no products)")
        return "\n".join(lines)

    header = (
        f"  {'Rank':>4}  {'ID':>6}  {'Name':<32}  {'Category':<14}  "
        f"{'Price':>8}  {'Rating':>6}  {'Stock':>5}  {'Relevance':<18}"
    )
    lines.append("")
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))
    for p in products:
        relevance = (
            f"{p.relevance_score:.2f} {p.relevance_label or ''}"
            if p.relevance_score is not None else "-"
        )
        lines.append(
            f"  {p.rank or '':>4}  {p.product_id:>6}  {p.name[:32]:<32}  "
            f"{p.category[:14]:<14}  {p.price:>8.2f}  {p.rating:>6.1f}  "
            f"{p.stock_quantity:>5}  {relevance:<18}"
        )
    return "\n".join(lines)


def format_category_summary(products: Sequence[Product], n: int = 3) -> str:
    """Top-N product names per category, one block per category."""
    grouped = top_n_per_category(products, n=n)
    lines: list[str] = ["", f"  Top {n} per category:"]
    for cat in sorted(grouped):
        names = ", ".join(f"#{p.rank or '-'} {p.name}" for p in grouped[cat])
        lines.append(f"    [{cat}] {names}")
    return "\n".join(lines)


# ── Analysis ──────────────────────────────────────────────────────────────────


def format_sentiment(envelope: SentimentEnvelope) -> str:
    text = envelope.text if len(envelope.text) <= 60 else envelope.text[:57] + "..."
    return "\n".join([
        "",
        "=== Sentiment Analysis ===",
        f"  Text:        {text}",
        f"  Score:       {envelope.sentiment_score:.2f}",
        f"  Label:       {envelope.sentiment_label}",
        f"  Confidence:  {envelope.confidence:.2f}",
        f"  Model:       {envelope.model}",
        f"  Analyzed at: {_ts(envelope.analyzed_at)}",
    ])


def format_fraud(envelope: FraudEnvelope) -> str:
    verdict = "FRAUDULENT" if envelope.is_fraudulent else "legitimate"
    lines = [
        "",
        "=== Fraud Detection ===",
        f"  Transaction: {envelope.transaction_id}",
        f"  Score:       {envelope.fraud_score:.2f}",
        f"  Risk level:  {envelope.risk_level}",
        f"  Verdict:     {verdict}",
        f"  Confidence:  {envelope.confidence:.2f}",
        f"  Model:       {envelope.model}",
        "  Features:",
    ]
    for key, value in envelope.features.items():
        lines.append(f"    {key:<14}{'-' if value is None else value}")
    return "\n".join(lines)


def format_popularity(envelope: PopularityEnvelope) -> str:
    verdict = "popular" if envelope.is_popular else "not popular"
    return "\n".join([
        "",
        "=== Product Popularity ===",
        f"  Product:     {envelope.product_id}",
        f"  Engagement:  {envelope.view_count} views, {envelope.cart_add_count} cart adds, "
        f"{envelope.sales_count} sales",
        f"  Score:       {envelope.popularity_score:.2f}",
        f"  Label:       {envelope.popularity_label} ({verdict})",
        f"  Confidence:  {envelope.confidence:.2f}",
        f"  Model:       {envelope.model}",
    ])


# ── Forecast ──────────────────────────────────────────────────────────────────


def format_forecast(envelope: ForecastEnvelope) -> str:
    """Format a forecast series::

        Period  Date          Predicted  Confidence
        -------------------------------------------
             1  2026-01-02          117        0.84
    """
    lo, hi = envelope.confidence_interval
    lines = [
        "",
        "=== Demand Forecast ===",
        f"  Product:     {envelope.product_id}",
        f"  Periods:     {envelope.periods}",
        f"  Model:       {envelope.model} (accuracy {envelope.accuracy:.0%}, "
        f"interval {lo:.2f}-{hi:.2f})",
        "",
    ]
    header = f"  {'Period':>6}  {'Date':<10}  {'Predicted':>9}  {'Confidence':>10}"
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))
    for point in envelope.forecast:
        lines.append(
            f"  {point.period:>6}  {point.date.strftime('%Y-%m-%d'):<10}  "
            f"{point.predicted_value:>9}  {point.confidence:>10.2f}"
        )
    total = sum(p.predicted_value for p in envelope.forecast)
    lines.append("  " + "-" * (len(header) - 2))
    lines.append(f"  {'Total':>6}  {'':<10}  {total:>9}")
    return "\n".join(lines)


# ── Model management ──────────────────────────────────────────────────────────


def format_retrain(result: RetrainResult) -> str:
    return "\n".join([
        "",
        "=== Retrain ===",
        f"  {result.message}",
        f"  Version:    {result.previous_version} -> {result.model_version}",
        f"  Strategies: {', '.join(result.strategies)}",
        f"  At:         {_ts(result.retrained_at)}",
    ])


def format_health(report: HealthReport) -> str:
    lines = [
        "",
        f"=== {report.service} ===",
        f"  Status:            {report.status}",
        f"  Version:           {report.version}",
        f"  Timestamp:         {_ts(report.timestamp)}",
        f"  Model version:     {report.model_version}",
        f"  Last model update: {_ts(report.last_model_update)}",
        "  Models:",
    ]
    for name in sorted(report.models):
        lines.append(f"    {name:<34}{report.models[name]}")
    return "\n".join(lines)
