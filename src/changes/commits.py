"""Commit reference parsing and resolution into tree snapshots."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from errors import InvalidReferenceError
from vcs.models import TreeSnapshot

if TYPE_CHECKING:
    from vcs.backend import RepositoryBackend

_LOGGER = logging.getLogger(__name__)

ABBREVIATED_LENGTH = 7
FULL_LENGTH = 40

_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")


class ReferenceForm(StrEnum):
    """Shape of a commit reference."""

    ABBREVIATED = "abbreviated"
    FULL = "full"


@dataclass(frozen=True)
class CommitReference:
    """Validated commit identifier in abbreviated or full form."""

    value: str
    form: ReferenceForm

    @classmethod
    def parse(cls, raw: str, *, abbreviated_length: int = ABBREVIATED_LENGTH) -> CommitReference:
        """Validate ``raw`` and classify its form.

        Returns
        -------
        CommitReference
            Parsed reference.

        Raises
        ------
        InvalidReferenceError
            Raised when the length matches neither form or the value is not hex.
        """
        value = raw.strip().lower()
        if len(value) == FULL_LENGTH:
            form = ReferenceForm.FULL
        elif len(value) == abbreviated_length:
            form = ReferenceForm.ABBREVIATED
        else:
            msg = (
                f"commit [{raw}] is an invalid commit: expected {abbreviated_length} "
                f"or {FULL_LENGTH} characters, got {len(value)}."
            )
            raise InvalidReferenceError(msg)
        if _HEX_RE.match(value) is None:
            msg = f"commit [{raw}] is an invalid commit: not a hexadecimal id."
            raise InvalidReferenceError(msg)
        return cls(value=value, form=form)

    def abbreviated(self, length: int = ABBREVIATED_LENGTH) -> str:
        """Return the abbreviated form of the reference.

        Returns
        -------
        str
            Leading ``length`` characters.
        """
        return abbreviate(self.value, length)


def abbreviate(commit_id: str, length: int = ABBREVIATED_LENGTH) -> str:
    """Return the abbreviated form of a commit id.

    Returns
    -------
    str
        Lower-cased leading ``length`` characters.
    """
    return commit_id.strip().lower()[:length]


def same_abbreviation(left: str, right: str, length: int = ABBREVIATED_LENGTH) -> bool:
    """Return whether two commit ids share their abbreviated form.

    Returns
    -------
    bool
        True when both abbreviate to the same prefix.
    """
    return abbreviate(left, length) == abbreviate(right, length)


class CommitResolver:
    """Turn commit references into tree snapshots via a repository backend."""

    def __init__(
        self,
        backend: RepositoryBackend,
        *,
        abbreviated_length: int = ABBREVIATED_LENGTH,
        logger: logging.Logger | None = None,
    ) -> None:
        self._backend = backend
        self._abbreviated_length = abbreviated_length
        self._logger = logger or _LOGGER

    def parse(self, ref: str | CommitReference) -> CommitReference:
        """Return ``ref`` as a validated reference.

        Returns
        -------
        CommitReference
            Parsed reference.
        """
        if isinstance(ref, CommitReference):
            return ref
        return CommitReference.parse(ref, abbreviated_length=self._abbreviated_length)

    def resolve_id(self, ref: str | CommitReference) -> str:
        """Resolve a reference to a full commit id.

        Abbreviated references go through repository disambiguation and must
        match exactly one commit; full references are looked up directly.

        Returns
        -------
        str
            Full commit id.
        """
        reference = self.parse(ref)
        if reference.form is ReferenceForm.ABBREVIATED:
            commit_id = self._backend.resolve_prefix(reference.value)
        else:
            commit_id = self._backend.lookup_commit(reference.value)
        self._logger.debug("Resolved commit [%s] to %s", reference.value, commit_id)
        return commit_id

    def resolve(self, ref: str | CommitReference) -> TreeSnapshot:
        """Resolve a reference into the tracked-file snapshot of its commit.

        Returns
        -------
        TreeSnapshot
            Snapshot of the commit's tree.
        """
        return self.snapshot(self.resolve_id(ref))

    def head_id(self) -> str:
        """Return the full id of the current HEAD commit.

        Returns
        -------
        str
            Full commit id.
        """
        return self._backend.head_commit_id()

    def head(self) -> TreeSnapshot:
        """Resolve the current HEAD commit into a snapshot.

        Returns
        -------
        TreeSnapshot
            Snapshot of HEAD.
        """
        return self.snapshot(self.head_id())

    def snapshot(self, commit_id: str) -> TreeSnapshot:
        """Read the snapshot of an already-resolved full commit id.

        Returns
        -------
        TreeSnapshot
            Snapshot of the commit's tree.
        """
        return TreeSnapshot(commit_id=commit_id, entries=self._backend.tree_entries(commit_id))


__all__ = [
    "ABBREVIATED_LENGTH",
    "FULL_LENGTH",
    "CommitReference",
    "CommitResolver",
    "ReferenceForm",
    "abbreviate",
    "same_abbreviation",
]
