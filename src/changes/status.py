"""Working-tree status scanning for uncommitted changes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from vcs.models import ChangeKind, ChangeOrigin, ChangeRecord, StatusFlag

if TYPE_CHECKING:
    from vcs.backend import RepositoryBackend

_LOGGER = logging.getLogger(__name__)

# Checked in order; the first flag present on an axis names the change.
_INDEX_KINDS: tuple[tuple[StatusFlag, ChangeKind], ...] = (
    (StatusFlag.INDEX_NEW, ChangeKind.ADDED),
    (StatusFlag.INDEX_DELETED, ChangeKind.DELETED),
    (StatusFlag.INDEX_RENAMED, ChangeKind.RENAMED),
    (StatusFlag.INDEX_TYPECHANGE, ChangeKind.TYPE_CHANGED),
    (StatusFlag.INDEX_MODIFIED, ChangeKind.MODIFIED),
)
_WORKDIR_KINDS: tuple[tuple[StatusFlag, ChangeKind], ...] = (
    (StatusFlag.WT_NEW, ChangeKind.ADDED),
    (StatusFlag.WT_DELETED, ChangeKind.DELETED),
    (StatusFlag.WT_RENAMED, ChangeKind.RENAMED),
    (StatusFlag.WT_TYPECHANGE, ChangeKind.TYPE_CHANGED),
    (StatusFlag.WT_MODIFIED, ChangeKind.MODIFIED),
    (StatusFlag.CONFLICTED, ChangeKind.MODIFIED),
)


def classify_status(path: str, flags: int) -> tuple[ChangeRecord, ...]:
    """Classify one status entry into per-axis change records.

    Returns
    -------
    tuple[ChangeRecord, ...]
        Index record first, then workdir record; empty for ignored or
        unchanged entries.
    """
    status = StatusFlag(flags)
    if status & StatusFlag.IGNORED:
        return ()
    records: list[ChangeRecord] = []
    for origin, table in (
        (ChangeOrigin.INDEX, _INDEX_KINDS),
        (ChangeOrigin.WORKDIR, _WORKDIR_KINDS),
    ):
        for flag, kind in table:
            if status & flag:
                records.append(ChangeRecord(path, kind, origin=origin))
                break
    return tuple(records)


class WorkingTreeStatusScanner:
    """Enumerate staged, unstaged and untracked changes of the working tree."""

    def __init__(
        self,
        backend: RepositoryBackend,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._backend = backend
        self._logger = logger or _LOGGER

    def scan(self) -> tuple[ChangeRecord, ...]:
        """Return change records for both the index and workdir axes.

        Returns
        -------
        tuple[ChangeRecord, ...]
            Records sorted by path, index axis before workdir axis.
        """
        records: list[ChangeRecord] = []
        for path, flags in sorted(self._backend.status().items()):
            records.extend(classify_status(path, flags))
        for record in records:
            self._logger.debug("%s (%s)", record.describe(), record.origin)
        if records:
            self._logger.info("uncommitted changes found: %d", len(records))
        else:
            self._logger.info("no uncommitted files found locally")
        return tuple(records)


__all__ = ["WorkingTreeStatusScanner", "classify_status"]
