"""
Tests for commerce_scoring/scoring/registry.py.

What we test
------------
  - resolve() returns the named strategy; names are case/space-insensitive.
  - Unknown, empty and None names fall back to the default (never raise).
  - A missing default raises LookupError only when a fallback is needed.
  - list_names() is sorted.
  - register() rejects empty names and replaces existing entries.
  - swap() replaces the whole table atomically and requires the default.
  - snapshot() taken before a write is unaffected by it.
"""

from __future__ import annotations

import threading

import pytest

from commerce_scoring.scoring.bands import RELEVANCE_BANDS
from commerce_scoring.scoring.registry import StrategyRegistry, normalize_name
from commerce_scoring.scoring.rules import StrategyDefinition


def _strategy(name: str, confidence: float = 1.0) -> StrategyDefinition:
    return StrategyDefinition(name=name, rules=(), bands=RELEVANCE_BANDS, confidence=confidence)


@pytest.fixture
def registry() -> StrategyRegistry:
    return StrategyRegistry(
        default="hybrid",
        strategies=[_strategy("hybrid"), _strategy("content"), _strategy("collaborative")],
    )


class TestResolve:
    def test_known_name(self, registry: StrategyRegistry) -> None:
        assert registry.resolve("content").name == "content"

    def test_case_and_whitespace_insensitive(self, registry: StrategyRegistry) -> None:
        assert registry.resolve("  CONTENT ").name == "content"

    @pytest.mark.parametrize("name", ["quantum", "", "   ", None])
    def test_fallback_to_default(self, registry: StrategyRegistry, name) -> None:
        assert registry.resolve(name).name == "hybrid"

    def test_missing_default_raises_lookup_error(self) -> None:
        registry = StrategyRegistry(default="hybrid", strategies=[_strategy("content")])
        assert registry.resolve("content").name == "content"
        with pytest.raises(LookupError, match="Default strategy 'hybrid'"):
            registry.resolve("quantum")


class TestRegistration:
    def test_list_names_sorted(self, registry: StrategyRegistry) -> None:
        assert registry.list_names() == ["collaborative", "content", "hybrid"]

    def test_register_replaces(self, registry: StrategyRegistry) -> None:
        registry.register(_strategy("content", confidence=0.5))
        assert registry.resolve("content").confidence == 0.5
        assert len(registry) == 3

    def test_register_under_alias(self, registry: StrategyRegistry) -> None:
        registry.register(_strategy("deeplearning"), name="DL")
        assert registry.resolve("dl").name == "deeplearning"

    def test_register_empty_name_rejected(self, registry: StrategyRegistry) -> None:
        with pytest.raises(ValueError, match="must not be empty"):
            registry.register(_strategy("  "))

    def test_contains(self, registry: StrategyRegistry) -> None:
        assert "Hybrid" in registry
        assert "quantum" not in registry
        assert 42 not in registry

    def test_default_name_normalized(self) -> None:
        assert StrategyRegistry(default=" Hybrid ").default_name == "hybrid"
        assert normalize_name(None) == ""


class TestSwap:
    def test_swap_replaces_table(self, registry: StrategyRegistry) -> None:
        registry.swap([_strategy("hybrid", confidence=0.7)])
        assert registry.list_names() == ["hybrid"]
        assert registry.resolve("content").confidence == 0.7

    def test_swap_requires_default(self, registry: StrategyRegistry) -> None:
        with pytest.raises(ValueError, match="must include the default"):
            registry.swap([_strategy("content")])
        assert registry.list_names() == ["collaborative", "content", "hybrid"]

    def test_snapshot_is_stable_across_writes(self, registry: StrategyRegistry) -> None:
        before = registry.snapshot()
        registry.register(_strategy("deeplearning"))
        registry.swap([_strategy("hybrid")])
        assert sorted(before) == ["collaborative", "content", "hybrid"]
        with pytest.raises(TypeError):
            before["x"] = _strategy("x")  # type: ignore[index]

    def test_readers_see_whole_tables_during_swaps(self, registry: StrategyRegistry) -> None:
        table_a = [_strategy("hybrid"), _strategy("content")]
        table_b = [_strategy("hybrid"), _strategy("collaborative"), _strategy("deeplearning")]
        valid = {("content", "hybrid"), ("collaborative", "deeplearning", "hybrid")}
        seen: set[tuple[str, ...]] = set()
        stop = threading.Event()

        def writer() -> None:
            for i in range(500):
                registry.swap(table_a if i % 2 else table_b)
            stop.set()

        thread = threading.Thread(target=writer)
        thread.start()
        while not stop.is_set():
            seen.add(tuple(sorted(registry.snapshot())))
        thread.join()

        assert seen <= valid | {("collaborative", "content", "hybrid")}
