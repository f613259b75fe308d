"""
Scoring result model.

``ScoringResult`` is the immutable output of one ``ScoringEngine.compute()``
call.  It is request-scoped: created once, handed to the caller, discarded.
The endpoint layer wraps it in a response envelope together with request
echo fields and a static model name, none of which the engine computes.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class ScoringResult(BaseModel):
    """Clamped, labelled score produced by a named strategy.

    Attributes:
        score:         Clamped score rounded to the engine precision.
        raw_score:     Weighted sum before clamping (rounded likewise); may
                       fall outside the strategy's clamp range.  ``None`` when
                       the sum overflowed the float range.
        label:         Band label for ``score``.
        confidence:    Configured confidence constant of the strategy, in [0, 1].
        strategy_name: Name of the strategy that actually ran (after fallback).
        computed_at:   UTC timestamp of the computation.
    """

    model_config = ConfigDict(frozen=True)

    score: float
    raw_score: Optional[float] = None
    label: str
    confidence: float
    strategy_name: str
    computed_at: datetime

    @field_validator("confidence")
    @classmethod
    def validate_confidence(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"confidence must be in [0.0, 1.0], got {v}.")
        return v

    @field_validator("score")
    @classmethod
    def validate_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError(f"score must be finite, got {v}.")
        return v
