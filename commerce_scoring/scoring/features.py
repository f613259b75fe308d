"""
Feature vectors: the flat, immutable input to every scoring strategy.

A ``FeatureVector`` maps feature names to tagged values:

    Number    finite real (amount, hour of day, keyword counts, ...)
    Flag      boolean signal (in stock, flagged behaviour, ...)
    Category  free-text categorical value (location, behaviour label, ...)

Vectors are built once per request with ``FeatureVector.build()`` and never
mutated.  Lookups of absent features return the neutral value for the
requested kind (``0.0`` / ``False`` / ``None``); absence is never an error.
Structural problems (non-finite numbers, unsupported value types, duplicate
names) raise ``ValidationError`` at build time.
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Union

from commerce_scoring.errors import ValidationError


@dataclass(frozen=True)
class Number:
    """A finite numeric feature value."""

    value: float


@dataclass(frozen=True)
class Flag:
    """A boolean feature value."""

    value: bool


@dataclass(frozen=True)
class Category:
    """A categorical (string) feature value."""

    value: str


FeatureValue = Union[Number, Flag, Category]


def to_feature_value(name: str, raw: Any) -> FeatureValue:
    """Wrap a raw Python value in its tagged ``FeatureValue``.

    ``bool`` is checked before ``int`` (``True`` is an ``int`` in Python).

    Raises:
        ValidationError: For non-finite numbers or unsupported types.
    """
    if isinstance(raw, (Number, Flag, Category)):
        value = raw
    elif isinstance(raw, bool):
        return Flag(raw)
    elif isinstance(raw, numbers.Real):
        value = Number(float(raw))
    elif isinstance(raw, str):
        return Category(raw)
    else:
        raise ValidationError(
            f"Feature '{name}' has unsupported type {type(raw).__name__}; "
            "expected a number, bool or str.",
            field=name,
        )

    if isinstance(value, Number) and not math.isfinite(value.value):
        raise ValidationError(
            f"Feature '{name}' must be finite, got {value.value!r}.",
            field=name,
        )
    return value


class FeatureVector(Mapping[str, FeatureValue]):
    """Ordered, read-only mapping of feature name -> ``FeatureValue``.

    Build with ``FeatureVector.build(...)``; the constructor is internal.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, FeatureValue]) -> None:
        self._values: Mapping[str, FeatureValue] = MappingProxyType(dict(values))

    @classmethod
    def build(
        cls,
        fields: Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None,
        **kwargs: Any,
    ) -> "FeatureVector":
        """Build a vector from a mapping, ``(name, value)`` pairs or kwargs.

        Raw values are coerced with ``to_feature_value()``.  ``None`` values
        are dropped (treated as absent features).

        Raises:
            ValidationError: On duplicate names, non-finite numbers or
                unsupported value types.
        """
        if fields is None:
            pairs: Iterable[tuple[str, Any]] = ()
        elif isinstance(fields, Mapping):
            pairs = fields.items()
        else:
            pairs = fields

        values: dict[str, FeatureValue] = {}
        for name, raw in [*pairs, *kwargs.items()]:
            if not isinstance(name, str) or not name:
                raise ValidationError(f"Feature names must be non-empty strings, got {name!r}.")
            if name in values:
                raise ValidationError(f"Duplicate feature name '{name}'.", field=name)
            if raw is None:
                continue
            values[name] = to_feature_value(name, raw)
        return cls(values)

    # ── Mapping protocol ─────────────────────────────────────────────────────

    def __getitem__(self, name: str) -> FeatureValue:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        inner = ", ".join(f"{k}={v.value!r}" for k, v in self._values.items())
        return f"FeatureVector({inner})"

    # ── Typed accessors ──────────────────────────────────────────────────────

    def number(self, name: str, default: float = 0.0) -> float:
        """Return a numeric feature; flags read as 0/1, anything else as ``default``."""
        value = self._values.get(name)
        if isinstance(value, Number):
            return value.value
        if isinstance(value, Flag):
            return 1.0 if value.value else 0.0
        return default

    def flag(self, name: str) -> bool:
        """Return a boolean feature; absent or non-flag values read as ``False``."""
        value = self._values.get(name)
        return isinstance(value, Flag) and value.value

    def category(self, name: str) -> str | None:
        """Return a categorical feature, or ``None`` when absent or not a category."""
        value = self._values.get(name)
        return value.value if isinstance(value, Category) else None

    def has_number(self, name: str) -> bool:
        """True if ``name`` is present as a ``Number``."""
        return isinstance(self._values.get(name), Number)

    def as_dict(self) -> dict[str, float | bool | str]:
        """Plain ``{name: raw value}`` dict, e.g. for echoing into an envelope."""
        return {name: value.value for name, value in self._values.items()}
