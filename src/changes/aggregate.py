"""Module set aggregation."""

from __future__ import annotations

from collections.abc import Iterable, Set


def merge_module_sets(left: Set[str], right: Set[str]) -> Set[str]:
    """Return the union of two module sets.

    Merging with an empty set returns the other set unchanged.

    Returns
    -------
    Set[str]
        Deduplicated module identifiers, unordered.
    """
    if not left:
        return right
    if not right:
        return left
    return frozenset(left) | frozenset(right)


def sorted_modules(modules: Iterable[str]) -> tuple[str, ...]:
    """Return module identifiers in lexicographic order without duplicates.

    Returns
    -------
    tuple[str, ...]
        Sorted identifiers.
    """
    return tuple(sorted(set(modules)))


__all__ = ["merge_module_sets", "sorted_modules"]
