"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local secrets and env overrides (gitignored)
  4. Environment variables        — ``COMMERCE_SCORING_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The strategy tables, band tables and confidence constants built from this
config are process-wide and read-only once the application has started.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

# ── Sub-config models ─────────────────────────────────────────────────────────


class ServiceConfig(BaseModel):
    """Static identity reported by the health check."""

    model_config = ConfigDict(frozen=True)

    name: str = "Commerce Scoring Service"
    version: str = "1.0.0"


class ScoringConfig(BaseModel):
    """Domain scoring settings (fraud, sentiment, rating, popularity, stock).

    ``confidence`` maps a strategy name to the fixed confidence annotation
    attached to its results.  These are placeholders, not model-reported
    statistics.
    """

    model_config = ConfigDict(frozen=True)

    precision: int = 2
    default_strategy: str = "sentiment"
    fraud_threshold: float = 0.7
    popularity_threshold: float = 0.7
    confidence: dict[str, float] = {
        "fraud_risk":   0.89,
        "sentiment":    0.92,
        "rating":       1.0,
        "popularity":   0.90,
        "stock_status": 1.0,
    }
    positive_keywords: list[str] = [
        "good", "excellent", "great", "wonderful", "fantastic", "amazing",
    ]
    negative_keywords: list[str] = [
        "bad", "terrible", "awful", "horrible", "disappointing",
    ]
    fraud_model: str = "Rule-based Risk Ensemble"
    sentiment_model: str = "Keyword Polarity Lexicon"
    popularity_model: str = "Engagement Popularity Index"

    @field_validator("precision")
    @classmethod
    def validate_precision(cls, v: int) -> int:
        if not 0 <= v <= 6:
            raise ValueError(f"precision must be in [0, 6], got {v}.")
        return v

    @field_validator("fraud_threshold", "popularity_threshold")
    @classmethod
    def validate_threshold(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"threshold must be in [0.0, 1.0], got {v}.")
        return v

    @field_validator("confidence")
    @classmethod
    def validate_confidence(cls, v: dict[str, float]) -> dict[str, float]:
        for name, value in v.items():
            if not 0.0 <= value <= 1.0:
                raise ValueError(
                    f"confidence for '{name}' must be in [0.0, 1.0], got {value}."
                )
        return {name.strip().lower(): value for name, value in v.items()}

    @field_validator("positive_keywords", "negative_keywords")
    @classmethod
    def normalize_keywords(cls, v: list[str]) -> list[str]:
        return [w.strip().lower() for w in v if w.strip()]


class RecommendationConfig(BaseModel):
    """Recommendation dispatch and transport-side limit bounds."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    default_algorithm: str = "hybrid"
    model_version: str = "v2.1.0"
    confidence: float = 0.94
    default_limit: int = 10
    default_similar_limit: int = 8
    default_anonymous_limit: int = 12
    max_personalized_limit: int = 100
    max_similar_limit: int = 50
    max_anonymous_limit: int = 50
    similarity_threshold: float = 0.75
    similar_algorithm: str = "Content-Based + Embeddings"
    anonymous_algorithm: str = "Popularity + Trending + Category"
    categories: list[str] = [
        "Electronics", "Fashion", "Home & Garden", "Sports", "Books",
        "Automotive", "Beauty", "Toys", "Tools", "Food",
    ]
    popular_categories: list[str] = [
        "Electronics", "Fashion", "Home & Garden", "Sports", "Books",
    ]

    @field_validator("default_algorithm")
    @classmethod
    def normalize_algorithm(cls, v: str) -> str:
        return v.strip().lower() or "hybrid"

    @field_validator("confidence", "similarity_threshold")
    @classmethod
    def validate_unit_interval(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"value must be in [0.0, 1.0], got {v}.")
        return v

    @field_validator("categories", "popular_categories")
    @classmethod
    def validate_categories(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("category lists must not be empty.")
        return v

    @model_validator(mode="after")
    def validate_limits(self) -> "RecommendationConfig":
        pairs = [
            (self.default_limit, self.max_personalized_limit, "default_limit"),
            (self.default_similar_limit, self.max_similar_limit, "default_similar_limit"),
            (self.default_anonymous_limit, self.max_anonymous_limit, "default_anonymous_limit"),
        ]
        for default, maximum, name in pairs:
            if not 1 <= default <= maximum:
                raise ValueError(f"{name} must be in [1, {maximum}], got {default}.")
        return self


class ForecastConfig(BaseModel):
    """Demand forecast settings."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model_name: str = "LSTM + Prophet Time Series"
    accuracy: float = 0.87
    interval_lower: float = 0.82
    interval_upper: float = 0.92
    max_horizon: int = 365

    @field_validator("max_horizon")
    @classmethod
    def validate_max_horizon(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_horizon must be >= 1, got {v}.")
        return v

    @model_validator(mode="after")
    def validate_interval(self) -> "ForecastConfig":
        if not 0.0 <= self.interval_lower <= self.interval_upper <= 1.0:
            raise ValueError(
                f"interval must satisfy 0 <= lower <= upper <= 1, got "
                f"({self.interval_lower}, {self.interval_upper})."
            )
        return self


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration — the single source of truth.

    Constructed by ``load_config()``, which merges TOML + .env + environment.
    ``AppConfig()`` with no arguments yields the built-in defaults.
    """

    model_config = ConfigDict(frozen=True)

    service: ServiceConfig = ServiceConfig()
    scoring: ScoringConfig = ScoringConfig()
    recommendations: RecommendationConfig = RecommendationConfig()
    forecast: ForecastConfig = ForecastConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the config file does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    # 3. Apply COMMERCE_SCORING_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply COMMERCE_SCORING_* env vars to the raw config dict.

    Supported overrides:
      COMMERCE_SCORING_LOG_LEVEL          → raw["logging"]["level"]
      COMMERCE_SCORING_DEFAULT_ALGORITHM  → raw["recommendations"]["default_algorithm"]
      COMMERCE_SCORING_MODEL_VERSION      → raw["recommendations"]["model_version"]
      COMMERCE_SCORING_DEBUG              → raw["debug"]
    """
    if log_level := os.environ.get("COMMERCE_SCORING_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if algorithm := os.environ.get("COMMERCE_SCORING_DEFAULT_ALGORITHM"):
        raw.setdefault("recommendations", {})["default_algorithm"] = algorithm

    if version := os.environ.get("COMMERCE_SCORING_MODEL_VERSION"):
        raw.setdefault("recommendations", {})["model_version"] = version

    if debug := os.environ.get("COMMERCE_SCORING_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})

    return AppConfig(
        service=ServiceConfig(**raw.get("service", {})),
        scoring=ScoringConfig(**raw.get("scoring", {})),
        recommendations=RecommendationConfig(**raw.get("recommendations", {})),
        forecast=ForecastConfig(**raw.get("forecast", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
