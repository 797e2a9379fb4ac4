"""Repository access for change detection.

This package provides:
- The ``RepositoryBackend`` capability protocol
- A pygit2 implementation for real repositories
- An in-memory implementation for tests
- Value objects for snapshots, status flags and change records
"""

from __future__ import annotations

from vcs.backend import RepositoryBackend
from vcs.memory import InMemoryBackend, blob_id
from vcs.models import (
    ChangeKind,
    ChangeOrigin,
    ChangeRecord,
    StatusFlag,
    TreeEntry,
    TreeSnapshot,
)
from vcs.pygit2_backend import Pygit2Backend, open_backend
from vcs.settings import GitSettingsSpec, apply_git_settings, apply_git_settings_once

__all__ = [
    "ChangeKind",
    "ChangeOrigin",
    "ChangeRecord",
    "GitSettingsSpec",
    "InMemoryBackend",
    "Pygit2Backend",
    "RepositoryBackend",
    "StatusFlag",
    "TreeEntry",
    "TreeSnapshot",
    "apply_git_settings",
    "apply_git_settings_once",
    "blob_id",
    "open_backend",
]
