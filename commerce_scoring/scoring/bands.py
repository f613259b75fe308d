"""
Score bands: ordered threshold tables mapping a numeric score to a label.

One mechanism, several domains.  Each ``BandTable`` is a list of
``(lower bound inclusive, label)`` entries evaluated top-down, highest
threshold first; the first band whose lower bound is <= score wins::

    FRAUD_RISK_BANDS (0–1)      SENTIMENT_BANDS (0–1)     RATING_BANDS (0–5)
      >= 0.8  High                >= 0.8  Very Positive     >= 4.5  Excellent
      >= 0.6  Medium-High         >= 0.6  Positive          >= 4.0  Very Good
      >= 0.4  Medium              >= 0.4  Neutral           >= 3.5  Good
      >= 0.2  Low-Medium          >= 0.2  Negative          >= 3.0  Regular
      >= 0.0  Low                 >= 0.0  Very Negative     >= 2.0  Poor
                                                            >= 0.0  Very Poor

    POPULARITY_BANDS (0–1)      STOCK_STATUS_BANDS (units)
      >= 0.7  Popular             >= 50   In Stock
      >= 0.4  Trending            >= 10   Moderate Stock
      >= 0.0  Niche               >= 1    Low Stock
                                  >= 0    Out of Stock

Tables are exhaustive: the lowest band's lower bound is the domain minimum,
and a score below it (only possible for unclamped inputs) still receives the
lowest label.  Lower bounds must be unique so top-down evaluation is never
ambiguous; entries are sorted descending at construction regardless of the
order they are given in.

Thresholds are placeholders carried over unchanged from the rule-based
system; they are not learned from data.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from commerce_scoring.taxonomy.labels import (
    PopularityLabel,
    RatingText,
    RiskLevel,
    SentimentLabel,
    StockStatus,
)


@dataclass(frozen=True)
class ScoreBand:
    """One band entry.

    Attributes:
        lower: Inclusive lower bound of the band.
        label: Label assigned to scores in this band.
    """

    lower: float
    label: str


class BandTable:
    """Immutable, descending-ordered band table for one scoring domain.

    Attributes:
        domain:  Domain name, used in error messages and reports.
        bands:   Tuple of ``ScoreBand`` sorted by ``lower`` descending.
        minimum: Domain minimum (the lowest band's lower bound).
    """

    __slots__ = ("domain", "bands")

    def __init__(self, domain: str, bands: Iterable[ScoreBand]) -> None:
        ordered = tuple(sorted(bands, key=lambda b: b.lower, reverse=True))
        if not ordered:
            raise ValueError(f"Band table '{domain}' must contain at least one band.")

        lowers = [b.lower for b in ordered]
        if len(set(lowers)) != len(lowers):
            raise ValueError(
                f"Band table '{domain}' has duplicate lower bounds: {lowers}."
            )

        self.domain = domain
        self.bands = ordered

    @property
    def minimum(self) -> float:
        return self.bands[-1].lower

    @property
    def labels(self) -> list[str]:
        """Labels from highest band to lowest."""
        return [b.label for b in self.bands]

    def label(self, score: float) -> str:
        """Return the label of the first band (top-down) with ``lower <= score``."""
        for band in self.bands:
            if score >= band.lower:
                return band.label
        return self.bands[-1].label

    def rank(self, label: str) -> int:
        """Return the band's position counted from the bottom (lowest band = 0).

        Raises:
            KeyError: If ``label`` is not in this table.
        """
        for idx, band in enumerate(reversed(self.bands)):
            if band.label == label:
                return idx
        raise KeyError(f"Label '{label}' not in band table '{self.domain}'.")

    def __repr__(self) -> str:
        entries = ", ".join(f">={b.lower:g}:{b.label}" for b in self.bands)
        return f"BandTable({self.domain!r}, [{entries}])"


# ── Domain tables ─────────────────────────────────────────────────────────────

FRAUD_RISK_BANDS = BandTable("fraud_risk", [
    ScoreBand(0.8, RiskLevel.HIGH),
    ScoreBand(0.6, RiskLevel.MEDIUM_HIGH),
    ScoreBand(0.4, RiskLevel.MEDIUM),
    ScoreBand(0.2, RiskLevel.LOW_MEDIUM),
    ScoreBand(0.0, RiskLevel.LOW),
])

SENTIMENT_BANDS = BandTable("sentiment", [
    ScoreBand(0.8, SentimentLabel.VERY_POSITIVE),
    ScoreBand(0.6, SentimentLabel.POSITIVE),
    ScoreBand(0.4, SentimentLabel.NEUTRAL),
    ScoreBand(0.2, SentimentLabel.NEGATIVE),
    ScoreBand(0.0, SentimentLabel.VERY_NEGATIVE),
])

RATING_BANDS = BandTable("rating", [
    ScoreBand(4.5, RatingText.EXCELLENT),
    ScoreBand(4.0, RatingText.VERY_GOOD),
    ScoreBand(3.5, RatingText.GOOD),
    ScoreBand(3.0, RatingText.REGULAR),
    ScoreBand(2.0, RatingText.POOR),
    ScoreBand(0.0, RatingText.VERY_POOR),
])

POPULARITY_BANDS = BandTable("popularity", [
    ScoreBand(0.7, PopularityLabel.POPULAR),
    ScoreBand(0.4, PopularityLabel.TRENDING),
    ScoreBand(0.0, PopularityLabel.NICHE),
])

STOCK_STATUS_BANDS = BandTable("stock_status", [
    ScoreBand(50.0, StockStatus.IN_STOCK),
    ScoreBand(10.0, StockStatus.MODERATE),
    ScoreBand(1.0, StockStatus.LOW),
    ScoreBand(0.0, StockStatus.OUT_OF_STOCK),
])

# Relevance scores for recommended products reuse a simple three-tier table.
RELEVANCE_BANDS = BandTable("relevance", [
    ScoreBand(0.75, "Strong Match"),
    ScoreBand(0.5, "Good Match"),
    ScoreBand(0.0, "Weak Match"),
])
