"""Repository backend backed by pygit2."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

import pygit2

from core_types import PathLike, ensure_path
from errors import (
    AmbiguousReferenceError,
    ConfigurationError,
    InvalidReferenceError,
    ReferenceNotFoundError,
)
from vcs.models import TreeEntry
from vcs.settings import apply_git_settings_once

_LOGGER = logging.getLogger(__name__)


class Pygit2Backend:
    """``RepositoryBackend`` over a pygit2 repository with a working tree."""

    def __init__(self, repo: pygit2.Repository) -> None:
        if repo.workdir is None:
            msg = f"Repository at {repo.path} is bare; a working tree is required."
            raise ConfigurationError(msg)
        self.repo = repo

    @property
    def workdir(self) -> Path:
        return Path(self.repo.workdir)

    def head_commit_id(self) -> str:
        if self.repo.head_is_unborn:
            msg = "HEAD is unborn; the repository has no commits yet."
            raise ReferenceNotFoundError(msg)
        try:
            head = self.repo.head.peel(pygit2.Commit)
        except (KeyError, ValueError, pygit2.GitError) as exc:
            msg = f"Cannot resolve HEAD to a commit: {exc}"
            raise ReferenceNotFoundError(msg) from exc
        return str(head.id)

    def resolve_prefix(self, prefix: str) -> str:
        try:
            obj = self.repo.revparse_single(prefix)
        except KeyError as exc:
            msg = f"Commit [{prefix}] not found in repository."
            raise ReferenceNotFoundError(msg) from exc
        except pygit2.InvalidSpecError as exc:
            msg = f"Commit [{prefix}] is an invalid commit reference."
            raise InvalidReferenceError(msg) from exc
        except ValueError as exc:
            msg = f"Commit [{prefix}] is ambiguous: {exc}"
            raise AmbiguousReferenceError(msg) from exc
        except pygit2.GitError as exc:
            msg = f"Commit [{prefix}] cannot be resolved: {exc}"
            raise ReferenceNotFoundError(msg) from exc
        return str(_peel_commit(obj, prefix).id)

    def lookup_commit(self, commit_id: str) -> str:
        try:
            oid = pygit2.Oid(hex=commit_id)
        except ValueError as exc:
            msg = f"Commit [{commit_id}] is an invalid commit reference."
            raise InvalidReferenceError(msg) from exc
        obj = self.repo.get(oid)
        if obj is None:
            msg = f"Commit [{commit_id}] not found in repository."
            raise ReferenceNotFoundError(msg)
        return str(_peel_commit(obj, commit_id).id)

    def tree_entries(self, commit_id: str) -> Mapping[str, TreeEntry]:
        commit = _peel_commit(self.repo[commit_id], commit_id)
        entries: dict[str, TreeEntry] = {}
        pending: list[tuple[str, pygit2.Tree]] = [("", commit.tree)]
        while pending:
            prefix, tree = pending.pop()
            for obj in tree:
                path = f"{prefix}{obj.name}"
                if obj.type_str == "tree":
                    pending.append((f"{path}/", self.repo[obj.id]))
                    continue
                entries[path] = TreeEntry(oid=str(obj.id), filemode=int(obj.filemode))
        _LOGGER.debug("Read %d tree entries for %s", len(entries), commit_id)
        return entries

    def status(self) -> Mapping[str, int]:
        try:
            raw = self.repo.status(untracked_files="all")
        except pygit2.GitError as exc:
            msg = f"Failed to read repository status: {exc}"
            raise ConfigurationError(msg) from exc
        return {path: int(flags) for path, flags in raw.items()}


def open_backend(path: PathLike) -> Pygit2Backend:
    """Open the repository containing ``path``.

    Returns
    -------
    Pygit2Backend
        Backend for the discovered repository.

    Raises
    ------
    ConfigurationError
        Raised when ``path`` is not inside a git working tree.
    """
    apply_git_settings_once()
    source_root = ensure_path(path)
    try:
        repo_path = pygit2.discover_repository(str(source_root))
    except (KeyError, ValueError, pygit2.GitError) as exc:
        msg = f"Cannot open repository at {source_root}: {exc}"
        raise ConfigurationError(msg) from exc
    if repo_path is None:
        msg = f"{source_root} is not inside a git repository."
        raise ConfigurationError(msg)
    return Pygit2Backend(pygit2.Repository(repo_path))


def _peel_commit(obj: pygit2.Object, ref: str) -> pygit2.Commit:
    try:
        return obj.peel(pygit2.Commit)
    except (ValueError, pygit2.GitError) as exc:
        msg = f"Reference [{ref}] does not point at a commit."
        raise ReferenceNotFoundError(msg) from exc


__all__ = ["Pygit2Backend", "open_backend"]
