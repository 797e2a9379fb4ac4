"""Tests for commit reference parsing and resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from changes.commits import (
    CommitReference,
    CommitResolver,
    ReferenceForm,
    abbreviate,
    same_abbreviation,
)
from errors import AmbiguousReferenceError, InvalidReferenceError, ReferenceNotFoundError
from vcs.memory import InMemoryBackend

_FULL_A = "abcdef1" + "0" * 33
_FULL_B = "abcdef1" + "1" * 33
_FULL_C = "1234567" + "f" * 33


def test_parse_abbreviated_reference() -> None:
    """Ensure seven hex characters parse as an abbreviated reference."""
    reference = CommitReference.parse("ABCDEF1")
    assert reference.form is ReferenceForm.ABBREVIATED
    assert reference.value == "abcdef1"


def test_parse_full_reference() -> None:
    """Ensure forty hex characters parse as a full reference."""
    reference = CommitReference.parse(f"  {_FULL_A}\n")
    assert reference.form is ReferenceForm.FULL
    assert reference.abbreviated() == "abcdef1"


@pytest.mark.parametrize("raw", ["", "abc", "abcdef12", "a" * 39, "a" * 41])
def test_parse_rejects_other_lengths(raw: str) -> None:
    """Ensure lengths other than abbreviated or full are invalid."""
    with pytest.raises(InvalidReferenceError, match="invalid commit"):
        CommitReference.parse(raw)


def test_parse_rejects_non_hex() -> None:
    """Ensure non-hexadecimal references are invalid."""
    with pytest.raises(InvalidReferenceError, match="hexadecimal"):
        CommitReference.parse("main123")


def test_parse_honors_configured_abbreviated_length() -> None:
    """Ensure the abbreviated length is configurable."""
    reference = CommitReference.parse("abcdef1234", abbreviated_length=10)
    assert reference.form is ReferenceForm.ABBREVIATED
    with pytest.raises(InvalidReferenceError):
        CommitReference.parse("abcdef1", abbreviated_length=10)


def test_same_abbreviation_compares_prefixes() -> None:
    """Ensure abbreviated and full ids of one commit compare equal."""
    assert same_abbreviation("ABCDEF1", _FULL_A)
    assert not same_abbreviation(_FULL_C, _FULL_A)
    assert abbreviate(_FULL_C, 4) == "1234"


def test_resolver_expands_abbreviated_reference(tmp_path: Path) -> None:
    """Ensure an unambiguous prefix resolves to the full commit id."""
    backend = InMemoryBackend(root=tmp_path)
    backend.commit({"a.txt": "a"}, commit_id=_FULL_A)
    backend.commit({"a.txt": "b"}, commit_id=_FULL_C)
    resolver = CommitResolver(backend)
    assert resolver.resolve_id("abcdef1") == _FULL_A
    assert resolver.resolve_id(_FULL_C) == _FULL_C
    assert resolver.head_id() == _FULL_C


def test_resolver_snapshot_reflects_tree(tmp_path: Path) -> None:
    """Ensure resolved snapshots expose the commit's tracked files."""
    backend = InMemoryBackend(root=tmp_path)
    backend.commit({"a.txt": "a", "dir/b.txt": "b"}, commit_id=_FULL_A)
    snapshot = CommitResolver(backend).resolve("abcdef1")
    assert snapshot.commit_id == _FULL_A
    assert len(snapshot) == 2
    assert "dir/b.txt" in snapshot
    assert CommitResolver(backend).head() == snapshot


def test_resolver_reports_ambiguous_prefix(tmp_path: Path) -> None:
    """Ensure a prefix matching two commits is rejected as ambiguous."""
    backend = InMemoryBackend(root=tmp_path)
    backend.commit({"a.txt": "a"}, commit_id=_FULL_A)
    backend.commit({"a.txt": "b"}, commit_id=_FULL_B)
    with pytest.raises(AmbiguousReferenceError):
        CommitResolver(backend).resolve_id("abcdef1")


def test_resolver_reports_unknown_commit(tmp_path: Path) -> None:
    """Ensure unknown references raise ReferenceNotFoundError."""
    backend = InMemoryBackend(root=tmp_path)
    backend.commit({"a.txt": "a"}, commit_id=_FULL_A)
    resolver = CommitResolver(backend)
    with pytest.raises(ReferenceNotFoundError):
        resolver.resolve_id("7654321")
    with pytest.raises(ReferenceNotFoundError):
        resolver.resolve_id(_FULL_C)


def test_resolver_rejects_unborn_head(tmp_path: Path) -> None:
    """Ensure a repository without commits has no HEAD to compare against."""
    with pytest.raises(ReferenceNotFoundError, match="unborn"):
        CommitResolver(InMemoryBackend(root=tmp_path)).head_id()
