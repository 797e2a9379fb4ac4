"""Value objects shared by repository backends and change detection."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import IntFlag, StrEnum
from types import MappingProxyType

# Git file modes.
FILEMODE_BLOB = 0o100644
FILEMODE_BLOB_EXECUTABLE = 0o100755
FILEMODE_LINK = 0o120000
FILEMODE_COMMIT = 0o160000


class ChangeKind(StrEnum):
    """Kind of difference observed for one path."""

    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"
    TYPE_CHANGED = "type_changed"

    @property
    def tag(self) -> str:
        """Return the three-letter console tag for the kind.

        Returns
        -------
        str
            Upper-case tag such as ``MOD``.
        """
        return _KIND_TAGS[self]


_KIND_TAGS: dict[ChangeKind, str] = {
    ChangeKind.ADDED: "ADD",
    ChangeKind.MODIFIED: "MOD",
    ChangeKind.DELETED: "DEL",
    ChangeKind.RENAMED: "REN",
    ChangeKind.TYPE_CHANGED: "TYP",
}


class ChangeOrigin(StrEnum):
    """Where a change record was observed."""

    HISTORY = "history"
    INDEX = "index"
    WORKDIR = "workdir"


class StatusFlag(IntFlag):
    """Working-tree status bits, numerically identical to libgit2's."""

    CURRENT = 0
    INDEX_NEW = 1 << 0
    INDEX_MODIFIED = 1 << 1
    INDEX_DELETED = 1 << 2
    INDEX_RENAMED = 1 << 3
    INDEX_TYPECHANGE = 1 << 4
    WT_NEW = 1 << 7
    WT_MODIFIED = 1 << 8
    WT_DELETED = 1 << 9
    WT_TYPECHANGE = 1 << 10
    WT_RENAMED = 1 << 11
    WT_UNREADABLE = 1 << 12
    IGNORED = 1 << 14
    CONFLICTED = 1 << 15


@dataclass(frozen=True)
class TreeEntry:
    """Object id and file mode of one tracked file."""

    oid: str
    filemode: int = FILEMODE_BLOB

    @property
    def object_kind(self) -> str:
        """Return ``blob``, ``link`` or ``commit`` for the entry mode.

        Returns
        -------
        str
            Coarse object kind.
        """
        if self.filemode == FILEMODE_LINK:
            return "link"
        if self.filemode == FILEMODE_COMMIT:
            return "commit"
        return "blob"


@dataclass(frozen=True)
class TreeSnapshot:
    """Tracked files of one commit, keyed by repo-relative posix path."""

    commit_id: str
    entries: Mapping[str, TreeEntry] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, path: object) -> bool:
        return path in self.entries


@dataclass(frozen=True)
class ChangeRecord:
    """One changed path plus the kind of difference observed."""

    path: str
    kind: ChangeKind
    origin: ChangeOrigin = ChangeOrigin.HISTORY
    old_path: str | None = None

    def paths(self) -> tuple[str, ...]:
        """Return every path touched by the change.

        Returns
        -------
        tuple[str, ...]
            New path first, then the pre-rename path when it differs.
        """
        if self.old_path is None or self.old_path == self.path:
            return (self.path,)
        return (self.path, self.old_path)

    def describe(self) -> str:
        """Return the console line for the record.

        Returns
        -------
        str
            ``[TAG] path`` line, with ``old -> new`` for renames.
        """
        if self.old_path is not None and self.old_path != self.path:
            return f"[{self.kind.tag}] {self.old_path} -> {self.path}"
        return f"[{self.kind.tag}] {self.path}"


__all__ = [
    "FILEMODE_BLOB",
    "FILEMODE_BLOB_EXECUTABLE",
    "FILEMODE_COMMIT",
    "FILEMODE_LINK",
    "ChangeKind",
    "ChangeOrigin",
    "ChangeRecord",
    "StatusFlag",
    "TreeEntry",
    "TreeSnapshot",
]
