"""
Weighted rules and strategy definitions.

A strategy is an ordered list of ``WeightedRule``s plus a clamp range::

    raw   = intercept + Σ weight_i × match_i(features)
    score = round(clamp(raw, lo, hi), precision)

``match_i`` is a pure predicate over a ``FeatureVector``.  Boolean
predicates contribute 0 or 1; partial-match predicates return a value in
``[0, 1]``; count predicates (``count``) return the raw count so a weight
of 0.1 per keyword reads naturally.  A predicate whose feature is absent
always returns its neutral value (``False`` / ``0.0``).

Predicate helpers
-----------------
greater_than(name, threshold)   number > threshold
at_least(name, threshold)       number >= threshold
outside(name, low, high)        number < low  OR  number > high
equals(name, value)             category == value
is_set(name)                    flag is True
count(name)                     raw non-negative number
ratio(name, full_scale)         min(1, number / full_scale), floored at 0
inverse_ratio(name, full_scale) 1 − ratio(name, full_scale)
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from commerce_scoring.scoring.bands import BandTable
from commerce_scoring.scoring.features import FeatureVector

Predicate = Callable[[FeatureVector], "bool | float"]


@dataclass(frozen=True)
class WeightedRule:
    """A (predicate, signed weight) pair.

    Attributes:
        name:      Short identifier, used in score breakdowns.
        predicate: Pure function of a ``FeatureVector``.
        weight:    Signed contribution per unit of match.
    """

    name:      str
    predicate: Predicate
    weight:    float

    def match(self, features: FeatureVector) -> float:
        """Evaluate the predicate as a float (``True`` -> 1.0).

        Non-finite or negative matches are treated as neutral (0.0).
        """
        value = float(self.predicate(features))
        if not math.isfinite(value) or value < 0.0:
            return 0.0
        return value

    def contribution(self, features: FeatureVector) -> float:
        return self.match(features) * self.weight


@dataclass(frozen=True)
class StrategyDefinition:
    """A named, immutable scoring strategy.

    Attributes:
        name:            Registry key, e.g. ``"fraud_risk"``.
        rules:           Ordered weighted rules.
        bands:           Band table used to label the clamped score.
        confidence:      Fixed confidence annotation in ``[0, 1]``.  This is a
                         configured constant, not a statistic derived from the
                         score; a trained model would report its own.
        clamp:           ``(lo, hi)`` range the score is clamped to.
        intercept:       Constant added before clamping.
        no_signal_score: Score reported when every rule's match is zero,
                         bypassing the formula (``None`` = use the formula).
        description:     Human-readable summary for listings.
    """

    name:            str
    rules:           tuple[WeightedRule, ...]
    bands:           BandTable
    confidence:      float = 1.0
    clamp:           tuple[float, float] = (0.0, 1.0)
    intercept:       float = 0.0
    no_signal_score: float | None = None
    description:     str = ""

    def __post_init__(self) -> None:
        lo, hi = self.clamp
        if lo > hi:
            raise ValueError(
                f"Strategy '{self.name}': clamp lower bound {lo} exceeds upper bound {hi}."
            )
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(
                f"Strategy '{self.name}': confidence must be in [0, 1], got {self.confidence}."
            )
        if self.no_signal_score is not None and not lo <= self.no_signal_score <= hi:
            raise ValueError(
                f"Strategy '{self.name}': no_signal_score {self.no_signal_score} "
                f"is outside clamp range {self.clamp}."
            )
        # Accept any iterable of rules but always store a tuple.
        if not isinstance(self.rules, tuple):
            object.__setattr__(self, "rules", tuple(self.rules))

    def breakdown(self, features: FeatureVector) -> dict[str, float]:
        """Per-rule contributions, keyed by rule name (for explanations)."""
        return {rule.name: rule.contribution(features) for rule in self.rules}

    def raw_score(self, features: FeatureVector) -> float:
        """Unclamped score: intercept plus the weighted sum of rule matches."""
        matches = [(rule, rule.match(features)) for rule in self.rules]
        if self.no_signal_score is not None and all(m == 0.0 for _, m in matches):
            return self.no_signal_score
        return self.intercept + sum(m * rule.weight for rule, m in matches)

    def with_confidence(self, confidence: float) -> "StrategyDefinition":
        """Return a copy carrying a different confidence constant."""
        return StrategyDefinition(
            name=self.name,
            rules=self.rules,
            bands=self.bands,
            confidence=confidence,
            clamp=self.clamp,
            intercept=self.intercept,
            no_signal_score=self.no_signal_score,
            description=self.description,
        )


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


# ── Predicate helpers ─────────────────────────────────────────────────────────


def greater_than(name: str, threshold: float) -> Predicate:
    def _pred(features: FeatureVector) -> bool:
        return features.has_number(name) and features.number(name) > threshold
    _pred.__name__ = f"{name}>{threshold:g}"
    return _pred


def at_least(name: str, threshold: float) -> Predicate:
    def _pred(features: FeatureVector) -> bool:
        return features.has_number(name) and features.number(name) >= threshold
    _pred.__name__ = f"{name}>={threshold:g}"
    return _pred


def outside(name: str, low: float, high: float) -> Predicate:
    """True when the number lies strictly below ``low`` or strictly above ``high``."""
    def _pred(features: FeatureVector) -> bool:
        if not features.has_number(name):
            return False
        value = features.number(name)
        return value < low or value > high
    _pred.__name__ = f"{name}!in[{low:g},{high:g}]"
    return _pred


def equals(name: str, expected: str) -> Predicate:
    def _pred(features: FeatureVector) -> bool:
        return features.category(name) == expected
    _pred.__name__ = f"{name}=={expected}"
    return _pred


def is_set(name: str) -> Predicate:
    def _pred(features: FeatureVector) -> bool:
        return features.flag(name)
    _pred.__name__ = name
    return _pred


def count(name: str) -> Predicate:
    def _pred(features: FeatureVector) -> float:
        return max(0.0, features.number(name))
    _pred.__name__ = f"count({name})"
    return _pred


def ratio(name: str, full_scale: float) -> Predicate:
    if full_scale <= 0:
        raise ValueError(f"full_scale must be positive, got {full_scale}.")

    def _pred(features: FeatureVector) -> float:
        return clamp(features.number(name) / full_scale, 0.0, 1.0)
    _pred.__name__ = f"{name}/{full_scale:g}"
    return _pred


def inverse_ratio(name: str, full_scale: float) -> Predicate:
    """``1 - ratio``; an absent feature is neutral (0.0), not a perfect match."""
    forward = ratio(name, full_scale)

    def _pred(features: FeatureVector) -> float:
        if not features.has_number(name):
            return 0.0
        return 1.0 - forward(features)
    _pred.__name__ = f"1-{name}/{full_scale:g}"
    return _pred


def rules_from(pairs: Iterable[tuple[str, Predicate, float]]) -> tuple[WeightedRule, ...]:
    """Build a rule tuple from ``(name, predicate, weight)`` triples."""
    return tuple(WeightedRule(name, pred, weight) for name, pred, weight in pairs)
