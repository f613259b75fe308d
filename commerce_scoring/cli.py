"""
Commerce Scoring — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Build the service context (engines + registries).
  4. Run the matching endpoint.
  5. Print the envelope (ASCII table, or JSON with ``--json``); a non-200
     response prints an ``[ERROR]`` line to stderr and exits with code 1.

Install and run::

    pip install -e .
    commerce-scoring --help
    commerce-scoring validate-config
    commerce-scoring list-strategies
    commerce-scoring recommend --user-id 42 --algorithm content
    commerce-scoring similar --product-id 7
    commerce-scoring popular --category Books
    commerce-scoring sentiment "Great product, excellent quality"
    commerce-scoring fraud --transaction-id 1 --amount 15000 --location Unknown
    commerce-scoring popularity --product-id 7 --views 800 --cart-adds 90 --sales 40
    commerce-scoring forecast --product-id 7 --periods 14
    commerce-scoring rating 4.7
    commerce-scoring retrain
    commerce-scoring health
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="commerce-scoring",
    help="Commerce Scoring — recommendation, fraud, sentiment and forecast scoring CLI.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from commerce_scoring.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from commerce_scoring.utils.logging import configure_logging
    configure_logging(config.logging)


def _context_or_exit(config_path: Optional[str] = None):
    """Load config, configure logging and build the service context."""
    from commerce_scoring.context import build_context

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    try:
        return build_context(config)
    except (ValueError, LookupError) as exc:
        typer.echo(f"[ERROR] Could not build scoring engines: {exc}", err=True)
        raise typer.Exit(code=1)


def _emit(response, formatter, as_json: bool) -> None:
    """Print a successful envelope, or the error and exit 1."""
    if not response.ok:
        typer.echo(f"[ERROR] {response.status_code}: {response.error}", err=True)
        raise typer.Exit(code=1)
    if as_json:
        typer.echo(json.dumps(response.to_dict(), indent=2))
    else:
        typer.echo(formatter(response.body))


_CONFIG_OPTION = typer.Option(
    None, "--config", help="Path to TOML config file (default: config/default.toml).",
)
_JSON_OPTION = typer.Option(False, "--json", help="Print the raw envelope as JSON.")


# ── Configuration ─────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = _CONFIG_OPTION,
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Service:           {config.service.name} {config.service.version}")
    typer.echo(f"  Default strategy:  {config.scoring.default_strategy}")
    typer.echo(f"  Default algorithm: {config.recommendations.default_algorithm}")
    typer.echo(f"  Model version:     {config.recommendations.model_version}")
    typer.echo(f"  Fraud threshold:   {config.scoring.fraud_threshold}")
    typer.echo(f"  Max horizon:       {config.forecast.max_horizon}")
    typer.echo(f"  Log level:         {config.logging.level}")
    typer.echo(f"  Debug mode:        {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config is valid.")


@app.command("list-strategies")
def list_strategies(config_path: Optional[str] = _CONFIG_OPTION) -> None:
    """List registered scoring strategies and recommendation variants."""
    ctx = _context_or_exit(config_path)

    scoring = ctx.scoring.registry
    typer.echo("")
    typer.echo(f"Scoring strategies (default: {scoring.default_name}):")
    for name, definition in sorted(scoring.snapshot().items()):
        typer.echo(
            f"  {name:<14} conf={definition.confidence:.2f}  "
            f"bands={', '.join(definition.bands.labels)}"
        )

    relevance = ctx.recommender.state.scorer.registry
    typer.echo("")
    typer.echo(f"Recommendation variants (default: {relevance.default_name}):")
    for name, definition in sorted(relevance.snapshot().items()):
        typer.echo(f"  {name:<14} {definition.description}")


# ── Recommendations ───────────────────────────────────────────────────────────

@app.command("recommend")
def recommend(
    user_id: int = typer.Option(..., "--user-id", help="User to recommend for."),
    limit: Optional[int] = typer.Option(None, "--limit", help="Number of products (1-100)."),
    algorithm: Optional[str] = typer.Option(
        None,
        "--algorithm",
        help="collaborative | content | hybrid | deeplearning (unknown -> hybrid).",
    ),
    by_category: bool = typer.Option(
        False, "--by-category", help="Also print the top 3 per category.",
    ),
    as_json: bool = _JSON_OPTION,
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Personalized recommendations for one user."""
    from commerce_scoring.endpoints.recommend import PersonalizedRecommendationEndpoint
    from commerce_scoring.reporting.formatters import (
        format_category_summary,
        format_product_table,
    )

    ctx = _context_or_exit(config_path)
    response = PersonalizedRecommendationEndpoint(ctx).run(
        user_id=user_id, limit=limit, algorithm=algorithm,
    )

    def _format(env):
        text = format_product_table(
            env.recommendations,
            title="Recommendations",
            details=[
                ("User", str(env.user_id)),
                ("Algorithm", env.algorithm),
                ("Model", env.model_version),
                ("Confidence", f"{env.confidence:.2f}"),
            ],
        )
        if by_category:
            text += "\n" + format_category_summary(env.recommendations)
        return text

    _emit(response, _format, as_json)


@app.command("similar")
def similar(
    product_id: int = typer.Option(..., "--product-id", help="Base product id."),
    limit: Optional[int] = typer.Option(None, "--limit", help="Number of products (1-50)."),
    as_json: bool = _JSON_OPTION,
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Products similar to a base product."""
    from commerce_scoring.endpoints.recommend import SimilarProductsEndpoint
    from commerce_scoring.reporting.formatters import format_product_table

    ctx = _context_or_exit(config_path)
    response = SimilarProductsEndpoint(ctx).run(product_id=product_id, limit=limit)

    _emit(
        response,
        lambda env: format_product_table(
            env.similar_products,
            title="Similar Products",
            details=[
                ("Product", str(env.product_id)),
                ("Algorithm", env.algorithm),
                ("Threshold", f"{env.similarity_threshold:.2f}"),
            ],
        ),
        as_json,
    )


@app.command("popular")
def popular(
    limit: Optional[int] = typer.Option(None, "--limit", help="Number of products (1-50)."),
    category: Optional[str] = typer.Option(None, "--category", help="Restrict to one category."),
    as_json: bool = _JSON_OPTION,
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Popular products for anonymous visitors."""
    from commerce_scoring.endpoints.recommend import AnonymousRecommendationEndpoint
    from commerce_scoring.reporting.formatters import format_product_table

    ctx = _context_or_exit(config_path)
    response = AnonymousRecommendationEndpoint(ctx).run(limit=limit, category=category)

    _emit(
        response,
        lambda env: format_product_table(
            env.recommendations,
            title="Popular Products",
            details=[
                ("Category", env.category or "all"),
                ("Algorithm", env.algorithm),
            ],
        ),
        as_json,
    )


# ── Analysis ──────────────────────────────────────────────────────────────────

@app.command("sentiment")
def sentiment(
    text: str = typer.Argument(..., help="Review or comment text to analyse."),
    as_json: bool = _JSON_OPTION,
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Keyword sentiment score and label for a piece of text."""
    from commerce_scoring.endpoints.analysis import SentimentEndpoint
    from commerce_scoring.reporting.formatters import format_sentiment

    ctx = _context_or_exit(config_path)
    _emit(SentimentEndpoint(ctx).run(text=text), format_sentiment, as_json)


@app.command("fraud")
def fraud(
    transaction_id: int = typer.Option(..., "--transaction-id", help="Transaction id (echoed)."),
    amount: float = typer.Option(..., "--amount", help="Transaction amount."),
    location: Optional[str] = typer.Option(None, "--location", help='e.g. "Unknown".'),
    time_of_day: Optional[int] = typer.Option(None, "--hour", help="Hour of day (0-23)."),
    user_behavior: Optional[str] = typer.Option(
        None, "--behavior", help='e.g. "Normal" or "Suspicious".',
    ),
    as_json: bool = _JSON_OPTION,
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Rule-based fraud risk for one transaction."""
    from commerce_scoring.endpoints.analysis import FraudEndpoint
    from commerce_scoring.reporting.formatters import format_fraud

    ctx = _context_or_exit(config_path)
    response = FraudEndpoint(ctx).run(
        transaction_id=transaction_id,
        amount=amount,
        location=location,
        time_of_day=time_of_day,
        user_behavior=user_behavior,
    )
    _emit(response, format_fraud, as_json)


@app.command("popularity")
def popularity(
    product_id: int = typer.Option(..., "--product-id", help="Product id (echoed)."),
    view_count: int = typer.Option(0, "--views", help="Page views."),
    cart_add_count: int = typer.Option(0, "--cart-adds", help="Add-to-cart events."),
    sales_count: int = typer.Option(0, "--sales", help="Units sold."),
    as_json: bool = _JSON_OPTION,
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Engagement popularity score for one product."""
    from commerce_scoring.endpoints.analysis import PopularityEndpoint
    from commerce_scoring.reporting.formatters import format_popularity

    ctx = _context_or_exit(config_path)
    response = PopularityEndpoint(ctx).run(
        product_id=product_id,
        view_count=view_count,
        cart_add_count=cart_add_count,
        sales_count=sales_count,
    )
    _emit(response, format_popularity, as_json)


@app.command("rating")
def rating(
    value: float = typer.Argument(..., help="Average star rating (0-5)."),
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Rating text for a star average, e.g. 4.7 -> Excellent."""
    from commerce_scoring.errors import ValidationError
    from commerce_scoring.scoring.analysis import rating_text

    ctx = _context_or_exit(config_path)
    try:
        label = rating_text(ctx.scoring, value)
    except ValidationError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"{value:.1f} -> {label}")


# ── Forecast ──────────────────────────────────────────────────────────────────

@app.command("forecast")
def forecast(
    product_id: int = typer.Option(..., "--product-id", help="Product to forecast."),
    periods: int = typer.Option(7, "--periods", help="Forecast horizon in days."),
    as_json: bool = _JSON_OPTION,
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Deterministic demand forecast for a product."""
    from commerce_scoring.endpoints.forecast import ForecastEndpoint
    from commerce_scoring.reporting.formatters import format_forecast

    ctx = _context_or_exit(config_path)
    response = ForecastEndpoint(ctx).run(product_id=product_id, periods=periods)
    _emit(response, format_forecast, as_json)


# ── Model management ──────────────────────────────────────────────────────────

@app.command("retrain")
def retrain(
    as_json: bool = _JSON_OPTION,
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Rebuild the recommendation model and bump its version."""
    from commerce_scoring.endpoints.model import RetrainEndpoint
    from commerce_scoring.reporting.formatters import format_retrain

    ctx = _context_or_exit(config_path)
    _emit(RetrainEndpoint(ctx).run(), format_retrain, as_json)


@app.command("health")
def health(
    as_json: bool = _JSON_OPTION,
    config_path: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Static liveness and version report."""
    from commerce_scoring.endpoints.model import HealthEndpoint
    from commerce_scoring.reporting.formatters import format_health

    ctx = _context_or_exit(config_path)
    _emit(HealthEndpoint(ctx).run(), format_health, as_json)


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
