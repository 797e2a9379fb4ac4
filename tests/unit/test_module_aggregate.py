"""Tests for module set aggregation."""

from __future__ import annotations

from changes.aggregate import merge_module_sets, sorted_modules


def test_merge_with_empty_returns_other_set() -> None:
    """Ensure merging with an empty set is the identity."""
    modules = frozenset({"alpha"})
    assert merge_module_sets(frozenset(), modules) is modules
    assert merge_module_sets(modules, frozenset()) is modules


def test_merge_is_commutative_and_idempotent() -> None:
    """Ensure union semantics regardless of argument order."""
    left = frozenset({"alpha", "beta"})
    right = {"beta", "gamma"}
    assert merge_module_sets(left, right) == merge_module_sets(right, left)
    assert merge_module_sets(left, left) == left


def test_sorted_modules_orders_and_deduplicates() -> None:
    """Ensure final module lists are lexicographic and unique."""
    assert sorted_modules(["gamma", "alpha", "gamma", "beta"]) == ("alpha", "beta", "gamma")
    assert sorted_modules(()) == ()
