"""Narrow repository capability interface used by change detection."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from vcs.models import TreeEntry


class RepositoryBackend(Protocol):
    """Read-only view of a repository's object store and working tree.

    Implementations raise the ``errors`` taxonomy rather than backend-specific
    exceptions: ``ReferenceNotFoundError`` for unknown commits,
    ``AmbiguousReferenceError`` for non-unique prefixes and
    ``InvalidReferenceError`` for malformed references.
    """

    @property
    def workdir(self) -> Path:
        """Return the working tree root."""
        ...

    def head_commit_id(self) -> str:
        """Return the full id of the commit HEAD points at."""
        ...

    def resolve_prefix(self, prefix: str) -> str:
        """Disambiguate an abbreviated id into exactly one full commit id."""
        ...

    def lookup_commit(self, commit_id: str) -> str:
        """Return ``commit_id`` when it names a commit in the repository."""
        ...

    def tree_entries(self, commit_id: str) -> Mapping[str, TreeEntry]:
        """Return every tracked file of a commit keyed by posix path."""
        ...

    def status(self) -> Mapping[str, int]:
        """Return working-tree status flags keyed by path, untracked included."""
        ...


__all__ = ["RepositoryBackend"]
