"""Whole-run change-to-module resolution.

A run walks a fixed sequence of stages::

    start -> resolve_last_build_state -> skip_history_diff | compute_history_diff
          -> scan_working_tree -> resolve_ownership -> aggregate -> done

The history diff is skipped when the recorded build commit and HEAD share
their abbreviated form. The working-tree scan always runs. Any failure ends
the run in ``failed`` and the error propagates to the caller unchanged.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from changes.aggregate import merge_module_sets, sorted_modules
from changes.commits import ABBREVIATED_LENGTH, CommitResolver, abbreviate, same_abbreviation
from changes.history import HistoryDiffEngine
from changes.ownership import ModuleLayout, ModuleOwnershipResolver, SkippedPath
from changes.status import WorkingTreeStatusScanner

if TYPE_CHECKING:
    from changes.ownership import DescriptorReader
    from vcs.backend import RepositoryBackend
    from vcs.models import ChangeRecord

_LOGGER = logging.getLogger(__name__)


class RunStage(StrEnum):
    """Stages of one resolution run."""

    START = "start"
    RESOLVE_LAST_BUILD_STATE = "resolve_last_build_state"
    SKIP_HISTORY_DIFF = "skip_history_diff"
    COMPUTE_HISTORY_DIFF = "compute_history_diff"
    SCAN_WORKING_TREE = "scan_working_tree"
    RESOLVE_OWNERSHIP = "resolve_ownership"
    AGGREGATE = "aggregate"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class ChangeScopeReport:
    """Outcome of one resolution run."""

    last_build_commit: str
    head_commit: str
    history_skipped: bool
    history_changes: tuple[ChangeRecord, ...] = ()
    worktree_changes: tuple[ChangeRecord, ...] = ()
    skipped: tuple[SkippedPath, ...] = ()
    modules: tuple[str, ...] = ()
    stages: tuple[RunStage, ...] = ()
    elapsed_ms: float = 0.0

    @property
    def needs_rebuild(self) -> bool:
        """Return whether any module changed."""
        return bool(self.modules)


@dataclass
class _StageLog:
    logger: logging.Logger
    stages: list[RunStage] = field(default_factory=lambda: [RunStage.START])

    @property
    def current(self) -> RunStage:
        return self.stages[-1]

    def enter(self, stage: RunStage) -> None:
        self.logger.debug("stage %s -> %s", self.current, stage)
        self.stages.append(stage)


def resolve_changed_modules(
    backend: RepositoryBackend,
    *,
    last_build_commit: str,
    read_identifier: DescriptorReader,
    layout: ModuleLayout | None = None,
    abbreviated_length: int = ABBREVIATED_LENGTH,
    detect_renames: bool = True,
    logger: logging.Logger | None = None,
) -> ChangeScopeReport:
    """Resolve the modules changed since ``last_build_commit``.

    Parameters
    ----------
    backend
        Repository to inspect.
    last_build_commit
        Abbreviated or full commit recorded by the last build.
    read_identifier
        Reads a module identifier from a descriptor path.
    layout
        Module directory convention.
    abbreviated_length
        Length of abbreviated commit ids.
    detect_renames
        Pair exact renames in the history diff.
    logger
        Logger for progress messages.

    Returns
    -------
    ChangeScopeReport
        Changed files, skipped paths and the sorted module set.
    """
    log = logger or _LOGGER
    started = time.perf_counter()
    stage_log = _StageLog(log)
    try:
        stage_log.enter(RunStage.RESOLVE_LAST_BUILD_STATE)
        resolver = CommitResolver(backend, abbreviated_length=abbreviated_length, logger=log)
        reference = resolver.parse(last_build_commit)
        head_id = resolver.head_id()
        head_short = abbreviate(head_id, abbreviated_length)

        history: tuple[ChangeRecord, ...] = ()
        history_skipped = same_abbreviation(reference.value, head_id, abbreviated_length)
        if history_skipped:
            stage_log.enter(RunStage.SKIP_HISTORY_DIFF)
            log.info(
                "a last build already exists with same commit [%s]. checking for uncommitted files",
                reference.value,
            )
        else:
            stage_log.enter(RunStage.COMPUTE_HISTORY_DIFF)
            log.info(
                "existing build found, comparing diffs between [%s] and [%s]",
                reference.abbreviated(abbreviated_length),
                head_short,
            )
            engine = HistoryDiffEngine(detect_renames=detect_renames, logger=log)
            history = engine.diff(resolver.resolve(reference), resolver.snapshot(head_id))

        stage_log.enter(RunStage.SCAN_WORKING_TREE)
        log.info("checking uncommitted files locally")
        worktree = WorkingTreeStatusScanner(backend, logger=log).scan()

        stage_log.enter(RunStage.RESOLVE_OWNERSHIP)
        ownership = ModuleOwnershipResolver(
            backend.workdir,
            read_identifier=read_identifier,
            layout=layout,
            logger=log,
        )
        history_modules = ownership.resolve_records(history)
        worktree_modules = ownership.resolve_records(worktree)

        stage_log.enter(RunStage.AGGREGATE)
        modules = sorted_modules(merge_module_sets(history_modules, worktree_modules))
        stage_log.enter(RunStage.DONE)
    except Exception:
        log.error("resolution failed during stage %s", stage_log.current)
        stage_log.enter(RunStage.FAILED)
        raise
    elapsed_ms = (time.perf_counter() - started) * 1000.0
    return ChangeScopeReport(
        last_build_commit=reference.value,
        head_commit=head_id,
        history_skipped=history_skipped,
        history_changes=history,
        worktree_changes=worktree,
        skipped=ownership.skipped,
        modules=modules,
        stages=tuple(stage_log.stages),
        elapsed_ms=elapsed_ms,
    )


__all__ = ["ChangeScopeReport", "RunStage", "resolve_changed_modules"]
