"""Tests for mapping changed paths to owning modules."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from changes.ownership import ModuleLayout, ModuleOwnershipResolver, SkipReason
from errors import FilesystemInconsistencyError
from maven.descriptor import read_artifact_id
from tests.test_helpers.git_repo import pom_xml, write_files, write_module
from vcs.models import ChangeKind, ChangeRecord


@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    """Return a tree holding the ``alpha`` and ``beta`` modules.

    Returns
    -------
    pathlib.Path
        Repository root.
    """
    write_module(tmp_path, "services/alpha", "alpha")
    write_module(tmp_path, "services/beta", "beta")
    return tmp_path


def _resolver(root: Path, layout: ModuleLayout | None = None) -> ModuleOwnershipResolver:
    return ModuleOwnershipResolver(root, read_identifier=read_artifact_id, layout=layout)


def test_source_file_belongs_to_module(repo_root: Path) -> None:
    """Ensure a path under the source marker resolves to its module."""
    resolver = _resolver(repo_root)
    assert resolver.resolve_owner("services/alpha/src/main/java/App.java") == "alpha"
    assert resolver.descriptor_location("services/beta/src/test/java/T.java") == (
        repo_root / "services/beta/pom.xml"
    )


def test_descriptor_change_belongs_to_its_module(repo_root: Path) -> None:
    """Ensure a changed POM resolves to its own module."""
    assert _resolver(repo_root).resolve_owner("services/beta/pom.xml") == "beta"


def test_nested_marker_uses_outermost_module(repo_root: Path) -> None:
    """Ensure the first source marker segment decides the module root."""
    path = "services/alpha/src/main/resources/src/data.txt"
    assert _resolver(repo_root).resolve_owner(path) == "alpha"


@pytest.mark.parametrize(
    "path",
    ["README.md", "docs/guide.md", ".github/workflows/ci.yml", "tools/src"],
)
def test_paths_outside_convention_are_skipped(
    repo_root: Path,
    path: str,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Ensure paths without a source marker directory own no module."""
    caplog.set_level(logging.WARNING)
    resolver = _resolver(repo_root)
    assert resolver.resolve_owner(path) is None
    assert [(item.path, item.reason) for item in resolver.skipped] == [
        (path, SkipReason.OUT_OF_CONVENTION)
    ]
    assert f"ignoring [{path}]" in caplog.text


def test_repository_root_module(tmp_path: Path) -> None:
    """Ensure a marker at the top level makes the repository root a module."""
    write_files(tmp_path, {"pom.xml": pom_xml("root-app"), "src/main/java/Main.java": ""})
    assert _resolver(tmp_path).resolve_owner("src/main/java/Main.java") == "root-app"


def test_missing_descriptor_is_fatal(tmp_path: Path) -> None:
    """Ensure an existing module root without a descriptor aborts the run."""
    write_files(tmp_path, {"orphan/src/Main.java": ""})
    with pytest.raises(FilesystemInconsistencyError, match="has no pom.xml"):
        _resolver(tmp_path).resolve_owner("orphan/src/Main.java")


@pytest.mark.parametrize("path", ["services/gone/src/Main.java", "services/gone/pom.xml"])
def test_module_missing_from_disk_is_fatal(repo_root: Path, path: str) -> None:
    """Ensure a module path whose root or descriptor is gone aborts the run."""
    resolver = _resolver(repo_root)
    with pytest.raises(FilesystemInconsistencyError):
        resolver.resolve_owner(path)
    assert resolver.skipped == ()


def test_ownership_is_idempotent(repo_root: Path) -> None:
    """Ensure resolving the same path twice yields the same module."""
    resolver = _resolver(repo_root)
    path = "services/beta/src/main/java/App.java"
    assert resolver.resolve_owner(path) == resolver.resolve_owner(path) == "beta"


def test_identifier_reads_are_memoized(repo_root: Path) -> None:
    """Ensure each descriptor is read once per resolver."""
    calls: list[Path] = []

    def counting_reader(path: Path) -> str:
        calls.append(path)
        return read_artifact_id(path)

    resolver = ModuleOwnershipResolver(repo_root, read_identifier=counting_reader)
    first = resolver.resolve_owner("services/alpha/src/A.java")
    second = resolver.resolve_owner("services/alpha/src/B.java")
    again = resolver.resolve_owner("services/alpha/pom.xml")
    assert first == second == again == "alpha"
    assert calls == [repo_root / "services/alpha/pom.xml"]


def test_rename_across_modules_claims_both(repo_root: Path) -> None:
    """Ensure both sides of a cross-module rename are owned."""
    record = ChangeRecord(
        "services/beta/src/Util.java",
        ChangeKind.RENAMED,
        old_path="services/alpha/src/Util.java",
    )
    assert _resolver(repo_root).resolve_record(record) == frozenset({"alpha", "beta"})


def test_resolve_records_deduplicates(repo_root: Path) -> None:
    """Ensure repeated paths are resolved once and modules are unique."""
    records = [
        ChangeRecord("services/alpha/src/A.java", ChangeKind.MODIFIED),
        ChangeRecord("services/alpha/src/A.java", ChangeKind.MODIFIED),
        ChangeRecord("services/beta/src/B.java", ChangeKind.ADDED),
        ChangeRecord("README.md", ChangeKind.MODIFIED),
    ]
    resolver = _resolver(repo_root)
    assert resolver.resolve_records(records) == frozenset({"alpha", "beta"})
    assert len(resolver.skipped) == 1


def test_custom_layout(tmp_path: Path) -> None:
    """Ensure the descriptor name and source marker are configurable."""
    write_files(
        tmp_path,
        {"lib/module.xml": pom_xml("lib"), "lib/sources/Lib.java": ""},
    )
    resolver = _resolver(
        tmp_path,
        layout=ModuleLayout(descriptor_name="module.xml", source_marker="sources"),
    )
    assert resolver.resolve_owner("lib/sources/Lib.java") == "lib"
    assert resolver.resolve_owner("lib/src/Lib.java") is None
