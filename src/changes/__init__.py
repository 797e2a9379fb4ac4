"""Change-to-module resolution engine."""

from __future__ import annotations

from changes.aggregate import merge_module_sets, sorted_modules
from changes.commits import CommitReference, CommitResolver, ReferenceForm
from changes.history import HistoryDiffEngine
from changes.ownership import ModuleLayout, ModuleOwnershipResolver, SkippedPath, SkipReason
from changes.pipeline import ChangeScopeReport, RunStage, resolve_changed_modules
from changes.status import WorkingTreeStatusScanner

__all__ = [
    "ChangeScopeReport",
    "CommitReference",
    "CommitResolver",
    "HistoryDiffEngine",
    "ModuleLayout",
    "ModuleOwnershipResolver",
    "ReferenceForm",
    "RunStage",
    "SkipReason",
    "SkippedPath",
    "WorkingTreeStatusScanner",
    "merge_module_sets",
    "resolve_changed_modules",
    "sorted_modules",
]
