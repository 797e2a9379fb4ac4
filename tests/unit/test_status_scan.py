"""Tests for working-tree status classification."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from changes.status import WorkingTreeStatusScanner, classify_status
from vcs.memory import InMemoryBackend
from vcs.models import ChangeKind, ChangeOrigin, ChangeRecord, StatusFlag


@pytest.mark.parametrize(
    ("flags", "expected"),
    [
        (StatusFlag.WT_NEW, ((ChangeKind.ADDED, ChangeOrigin.WORKDIR),)),
        (StatusFlag.WT_DELETED, ((ChangeKind.DELETED, ChangeOrigin.WORKDIR),)),
        (StatusFlag.INDEX_NEW, ((ChangeKind.ADDED, ChangeOrigin.INDEX),)),
        (StatusFlag.INDEX_RENAMED, ((ChangeKind.RENAMED, ChangeOrigin.INDEX),)),
        (StatusFlag.WT_TYPECHANGE, ((ChangeKind.TYPE_CHANGED, ChangeOrigin.WORKDIR),)),
        (StatusFlag.CONFLICTED, ((ChangeKind.MODIFIED, ChangeOrigin.WORKDIR),)),
        (
            StatusFlag.INDEX_MODIFIED | StatusFlag.WT_MODIFIED,
            (
                (ChangeKind.MODIFIED, ChangeOrigin.INDEX),
                (ChangeKind.MODIFIED, ChangeOrigin.WORKDIR),
            ),
        ),
        (StatusFlag.CURRENT, ()),
        (StatusFlag.IGNORED, ()),
    ],
)
def test_classify_status(
    flags: StatusFlag,
    expected: tuple[tuple[ChangeKind, ChangeOrigin], ...],
) -> None:
    """Ensure status bits map to at most one record per axis."""
    records = classify_status("pkg/File.java", int(flags))
    assert tuple((record.kind, record.origin) for record in records) == expected
    assert all(record.path == "pkg/File.java" for record in records)


def test_scanner_sorts_by_path(tmp_path: Path) -> None:
    """Ensure scan output is ordered by path."""
    backend = InMemoryBackend(root=tmp_path)
    backend.worktree_status = {
        "z.txt": int(StatusFlag.WT_NEW),
        "a.txt": int(StatusFlag.INDEX_MODIFIED),
        "ignored.log": int(StatusFlag.IGNORED),
    }
    records = WorkingTreeStatusScanner(backend).scan()
    assert records == (
        ChangeRecord("a.txt", ChangeKind.MODIFIED, origin=ChangeOrigin.INDEX),
        ChangeRecord("z.txt", ChangeKind.ADDED, origin=ChangeOrigin.WORKDIR),
    )


def test_scanner_logs_clean_tree(
    tmp_path: Path,
    caplog: pytest.LogCaptureFixture,
    scope_logger: logging.Logger,
) -> None:
    """Ensure a clean working tree is reported."""
    caplog.set_level(logging.INFO, logger=scope_logger.name)
    records = WorkingTreeStatusScanner(InMemoryBackend(root=tmp_path), logger=scope_logger).scan()
    assert records == ()
    assert "no uncommitted files found locally" in caplog.text
