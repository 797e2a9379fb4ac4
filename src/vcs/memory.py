"""In-memory repository backend for tests and dry runs."""

from __future__ import annotations

import hashlib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from errors import AmbiguousReferenceError, ReferenceNotFoundError
from vcs.models import FILEMODE_BLOB, TreeEntry


def blob_id(content: str | bytes) -> str:
    """Return the git blob id for file content.

    Returns
    -------
    str
        Hex object id, identical to ``git hash-object`` output.
    """
    data = content.encode("utf-8") if isinstance(content, str) else content
    header = f"blob {len(data)}\0".encode()
    return hashlib.sha1(header + data, usedforsecurity=False).hexdigest()


@dataclass
class InMemoryBackend:
    """``RepositoryBackend`` holding commits and status as plain mappings.

    Commits are recorded with :meth:`commit`; each call moves HEAD to the new
    commit. Working-tree status is set directly through ``worktree_status``
    using ``StatusFlag`` values.
    """

    root: Path = field(default_factory=Path.cwd)
    commits: dict[str, Mapping[str, TreeEntry]] = field(default_factory=dict)
    head: str | None = None
    worktree_status: dict[str, int] = field(default_factory=dict)

    @property
    def workdir(self) -> Path:
        return self.root

    def commit(
        self,
        files: Mapping[str, str | bytes | TreeEntry],
        *,
        commit_id: str | None = None,
    ) -> str:
        """Record a commit whose tree holds exactly ``files`` and move HEAD.

        Returns
        -------
        str
            Full id of the new commit.
        """
        entries = {
            path: value
            if isinstance(value, TreeEntry)
            else TreeEntry(blob_id(value), FILEMODE_BLOB)
            for path, value in files.items()
        }
        if commit_id is None:
            seed = f"{self.head}:{len(self.commits)}:" + ";".join(
                f"{path}={entry.oid}:{entry.filemode:o}" for path, entry in sorted(entries.items())
            )
            commit_id = hashlib.sha1(seed.encode(), usedforsecurity=False).hexdigest()
        self.commits[commit_id] = entries
        self.head = commit_id
        return commit_id

    def head_commit_id(self) -> str:
        if self.head is None:
            msg = "HEAD is unborn; the repository has no commits yet."
            raise ReferenceNotFoundError(msg)
        return self.head

    def resolve_prefix(self, prefix: str) -> str:
        needle = prefix.lower()
        matches = [commit_id for commit_id in self.commits if commit_id.startswith(needle)]
        if not matches:
            msg = f"Commit [{prefix}] not found in repository."
            raise ReferenceNotFoundError(msg)
        if len(matches) > 1:
            msg = f"Commit [{prefix}] is ambiguous: matches {len(matches)} commits."
            raise AmbiguousReferenceError(msg)
        return matches[0]

    def lookup_commit(self, commit_id: str) -> str:
        key = commit_id.lower()
        if key not in self.commits:
            msg = f"Commit [{commit_id}] not found in repository."
            raise ReferenceNotFoundError(msg)
        return key

    def tree_entries(self, commit_id: str) -> Mapping[str, TreeEntry]:
        return self.commits[self.lookup_commit(commit_id)]

    def status(self) -> Mapping[str, int]:
        return dict(self.worktree_status)


__all__ = ["InMemoryBackend", "blob_id"]
