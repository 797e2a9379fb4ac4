"""Tree-to-tree diffing of commit snapshots."""

from __future__ import annotations

import logging
from collections import defaultdict

from vcs.models import ChangeKind, ChangeRecord, TreeSnapshot

_LOGGER = logging.getLogger(__name__)


class HistoryDiffEngine:
    """Compare two tree snapshots file by file."""

    def __init__(
        self,
        *,
        detect_renames: bool = True,
        logger: logging.Logger | None = None,
    ) -> None:
        self._detect_renames = detect_renames
        self._logger = logger or _LOGGER

    def diff(self, old: TreeSnapshot, new: TreeSnapshot) -> tuple[ChangeRecord, ...]:
        """Return one record per path whose content, mode or existence differs.

        Renames are exact: a deleted path and an added path with the same
        object id collapse into one ``renamed`` record. Equal commit ids
        short-circuit to an empty result.

        Returns
        -------
        tuple[ChangeRecord, ...]
            Change records sorted by path.
        """
        if old.commit_id == new.commit_id:
            self._logger.debug("Skipping history diff for identical commit %s", new.commit_id)
            return ()
        records: list[ChangeRecord] = []
        added: list[str] = []
        deleted: list[str] = []
        for path in sorted(old.entries.keys() | new.entries.keys()):
            before = old.entries.get(path)
            after = new.entries.get(path)
            if before is None:
                added.append(path)
            elif after is None:
                deleted.append(path)
            elif before.object_kind != after.object_kind:
                records.append(ChangeRecord(path, ChangeKind.TYPE_CHANGED))
            elif before != after:
                records.append(ChangeRecord(path, ChangeKind.MODIFIED))
        renames = self._pair_renames(old, new, added=added, deleted=deleted)
        renamed_old = set(renames.values())
        records.extend(
            ChangeRecord(path, ChangeKind.RENAMED, old_path=old_path)
            for path, old_path in renames.items()
        )
        records.extend(
            ChangeRecord(path, ChangeKind.ADDED) for path in added if path not in renames
        )
        records.extend(
            ChangeRecord(path, ChangeKind.DELETED) for path in deleted if path not in renamed_old
        )
        records.sort(key=lambda record: record.path)
        for record in records:
            self._logger.debug("%s", record.describe())
        self._logger.info("total number of files changed: %d", len(records))
        return tuple(records)

    def _pair_renames(
        self,
        old: TreeSnapshot,
        new: TreeSnapshot,
        *,
        added: list[str],
        deleted: list[str],
    ) -> dict[str, str]:
        if not self._detect_renames or not added or not deleted:
            return {}
        deleted_by_oid: dict[str, list[str]] = defaultdict(list)
        for path in deleted:
            deleted_by_oid[old.entries[path].oid].append(path)
        renames: dict[str, str] = {}
        for path in added:
            candidates = deleted_by_oid.get(new.entries[path].oid)
            if candidates:
                renames[path] = candidates.pop(0)
        return renames


__all__ = ["HistoryDiffEngine"]
