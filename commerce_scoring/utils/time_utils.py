"""
Time helpers shared by the forecast generator and the endpoint layer.

Every timestamp in the system is timezone-aware UTC.  Components that stamp
results (``ScoringEngine``, ``ForecastGenerator``, endpoints) accept a
``clock`` callable so tests can pin "now".
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    """Return the current UTC datetime with timezone info.

    Prefer this over ``datetime.utcnow()`` (which returns naive datetimes).
    """
    return datetime.now(tz=timezone.utc)


def days_from(base: datetime, days: int) -> datetime:
    """Return ``base`` shifted forward by ``days`` whole days.

    Args:
        base: Anchor datetime (usually "now").
        days: Number of days to add; may be zero or negative.

    Returns:
        Shifted datetime, preserving ``base``'s tzinfo.
    """
    return base + timedelta(days=days)
