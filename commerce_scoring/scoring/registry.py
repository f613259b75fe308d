"""
Strategy registry: name -> ``StrategyDefinition`` with a default fallback.

Usage
-----
    registry = StrategyRegistry(default="hybrid")
    registry.register(hybrid_definition)
    registry.register(content_definition)

    registry.resolve("content")   # -> content_definition
    registry.resolve("quantum")   # -> hybrid_definition (fallback)
    registry.resolve("")          # -> hybrid_definition (fallback)
    registry.list_names()         # -> ["content", "hybrid"]

Concurrency
-----------
The table is an immutable ``MappingProxyType`` published through a single
attribute.  ``register()`` and ``swap()`` build a complete new table and
then rebind that attribute, so concurrent readers always see either the old
table or the new one in full, never a partially updated dict.  Readers
take no locks; the writer-side lock only serialises concurrent writers.

Names are matched case-insensitively after stripping whitespace.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from commerce_scoring.scoring.rules import StrategyDefinition


def normalize_name(name: str | None) -> str:
    """Canonical registry key: stripped and lower-cased (``None`` -> ``""``)."""
    return (name or "").strip().lower()


class StrategyRegistry:
    """Read-mostly mapping of strategy names to definitions.

    Args:
        default:    Name of the fallback strategy.  It must be registered
                    before the first ``resolve()`` of an unknown name.
        strategies: Optional initial definitions.
    """

    def __init__(
        self,
        default: str,
        strategies: Iterable[StrategyDefinition] = (),
    ) -> None:
        self._default = normalize_name(default)
        self._write_lock = threading.Lock()
        self._table: Mapping[str, StrategyDefinition] = MappingProxyType({})
        for definition in strategies:
            self.register(definition)

    @property
    def default_name(self) -> str:
        return self._default

    def register(
        self,
        definition: StrategyDefinition,
        name: str | None = None,
    ) -> None:
        """Add or replace one strategy (copy-on-write).

        Args:
            definition: Strategy to publish.
            name:       Registry key; defaults to ``definition.name``.

        Raises:
            ValueError: If the resolved key is empty.
        """
        key = normalize_name(name if name is not None else definition.name)
        if not key:
            raise ValueError("Strategy name must not be empty.")
        with self._write_lock:
            table = dict(self._table)
            table[key] = definition
            self._table = MappingProxyType(table)

    def swap(self, strategies: Iterable[StrategyDefinition]) -> None:
        """Atomically replace the whole table (used by retrain / reload).

        Raises:
            ValueError: If the new table does not contain the default strategy.
        """
        table = {normalize_name(d.name): d for d in strategies}
        if self._default not in table:
            raise ValueError(
                f"Replacement table must include the default strategy '{self._default}'."
            )
        with self._write_lock:
            self._table = MappingProxyType(table)

    def resolve(self, name: str | None) -> StrategyDefinition:
        """Return the named strategy, or the default one on a miss.

        Unknown, empty and ``None`` names never raise.

        Raises:
            LookupError: Only if the default strategy itself is not registered
                (a start-up configuration error).
        """
        table = self._table
        definition = table.get(normalize_name(name))
        if definition is not None:
            return definition
        try:
            return table[self._default]
        except KeyError:
            raise LookupError(
                f"Default strategy '{self._default}' is not registered; "
                f"available: {sorted(table)}"
            ) from None

    def is_registered(self, name: str | None) -> bool:
        return normalize_name(name) in self._table

    def list_names(self) -> list[str]:
        """Registered strategy names, sorted."""
        return sorted(self._table)

    def snapshot(self) -> Mapping[str, StrategyDefinition]:
        """The current immutable table (safe to hold across a later swap)."""
        return self._table

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.is_registered(name)

    def __len__(self) -> int:
        return len(self._table)
