"""Map changed paths to the build module that owns them.

Modules follow a fixed layout: a module root holds the descriptor file
(``pom.xml``) next to a source-boundary directory (``src``). Any path below
``<module>/src/`` belongs to ``<module>``; a changed descriptor belongs to its
own directory. Paths outside that convention (docs, CI files, a top-level
README) own no module and are skipped with a warning.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from errors import FilesystemInconsistencyError

if TYPE_CHECKING:
    from vcs.models import ChangeRecord

_LOGGER = logging.getLogger(__name__)

DEFAULT_DESCRIPTOR_NAME = "pom.xml"
DEFAULT_SOURCE_MARKER = "src"

type DescriptorReader = Callable[[Path], str]


@dataclass(frozen=True)
class ModuleLayout:
    """Directory convention that ties source paths to module descriptors."""

    descriptor_name: str = DEFAULT_DESCRIPTOR_NAME
    source_marker: str = DEFAULT_SOURCE_MARKER


class SkipReason(StrEnum):
    """Why a changed path produced no module."""

    OUT_OF_CONVENTION = "out_of_convention"


@dataclass(frozen=True)
class SkippedPath:
    """A changed path that ownership resolution skipped."""

    path: str
    reason: SkipReason


class ModuleOwnershipResolver:
    """Resolve changed paths to module identifiers under one repository root.

    Directory listings and descriptor reads are memoized for the lifetime of
    the resolver, which is one run.
    """

    def __init__(
        self,
        repo_root: Path,
        *,
        read_identifier: DescriptorReader,
        layout: ModuleLayout | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._repo_root = repo_root
        self._read_identifier = read_identifier
        self._layout = layout or ModuleLayout()
        self._logger = logger or _LOGGER
        self._descriptors: dict[Path, Path | None] = {}
        self._identifiers: dict[Path, str] = {}
        self._skipped: dict[str, SkippedPath] = {}

    @property
    def skipped(self) -> tuple[SkippedPath, ...]:
        """Return skipped paths in the order they were first seen."""
        return tuple(self._skipped.values())

    def descriptor_location(self, path: str) -> Path | None:
        """Return the descriptor governing ``path``.

        Returns
        -------
        pathlib.Path | None
            Descriptor path, or None when the path is skipped.

        Raises
        ------
        FilesystemInconsistencyError
            Raised when the module root or its descriptor is missing on disk.
        """
        parts = PurePosixPath(path).parts
        if not parts:
            return self._skip(path, SkipReason.OUT_OF_CONVENTION)
        if parts[-1] == self._layout.descriptor_name:
            descriptor = self._repo_root.joinpath(*parts)
            if not descriptor.is_file():
                msg = f"[{path}] changed but {descriptor} does not exist."
                raise FilesystemInconsistencyError(msg)
            return descriptor
        marker_index = _marker_index(parts[:-1], self._layout.source_marker)
        if marker_index is None:
            return self._skip(path, SkipReason.OUT_OF_CONVENTION)
        module_root = self._repo_root.joinpath(*parts[:marker_index])
        descriptor = self._find_descriptor(module_root) if module_root.is_dir() else None
        if descriptor is None:
            msg = (
                f"[{path}] is under {self._layout.source_marker}/ but {module_root} "
                f"has no {self._layout.descriptor_name}."
            )
            raise FilesystemInconsistencyError(msg)
        return descriptor

    def resolve_owner(self, path: str) -> str | None:
        """Return the module identifier owning ``path``, or None when skipped.

        Returns
        -------
        str | None
            Module identifier.
        """
        descriptor = self.descriptor_location(path)
        if descriptor is None:
            return None
        identifier = self._identifiers.get(descriptor)
        if identifier is None:
            identifier = self._read_identifier(descriptor)
            self._identifiers[descriptor] = identifier
        return identifier

    def resolve_record(self, record: ChangeRecord) -> frozenset[str]:
        """Return the modules owning a change, both sides for renames.

        Returns
        -------
        frozenset[str]
            Module identifiers.
        """
        owners = (self.resolve_owner(path) for path in record.paths())
        return frozenset(owner for owner in owners if owner is not None)

    def resolve_records(self, records: Iterable[ChangeRecord]) -> frozenset[str]:
        """Return the modules owning any of ``records``.

        Returns
        -------
        frozenset[str]
            Module identifiers.
        """
        seen: set[str] = set()
        modules: set[str] = set()
        for record in records:
            for path in record.paths():
                if path in seen:
                    continue
                seen.add(path)
                owner = self.resolve_owner(path)
                if owner is not None:
                    modules.add(owner)
        return frozenset(modules)

    def _find_descriptor(self, module_root: Path) -> Path | None:
        if module_root in self._descriptors:
            return self._descriptors[module_root]
        found: Path | None = None
        with os.scandir(module_root) as entries:
            for entry in entries:
                if entry.name == self._layout.descriptor_name and entry.is_file():
                    found = Path(entry.path)
                    break
        self._descriptors[module_root] = found
        return found

    def _skip(self, path: str, reason: SkipReason) -> None:
        if path not in self._skipped:
            self._skipped[path] = SkippedPath(path, reason)
            self._logger.warning(
                "ignoring [%s] since it is not part of a module %s/ tree",
                path,
                self._layout.source_marker,
            )
        return None


def _marker_index(directories: tuple[str, ...], marker: str) -> int | None:
    try:
        return directories.index(marker)
    except ValueError:
        return None


__all__ = [
    "DEFAULT_DESCRIPTOR_NAME",
    "DEFAULT_SOURCE_MARKER",
    "DescriptorReader",
    "ModuleLayout",
    "ModuleOwnershipResolver",
    "SkipReason",
    "SkippedPath",
]
