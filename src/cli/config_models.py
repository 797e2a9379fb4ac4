"""Typed configuration models for modscope."""

from __future__ import annotations

from core_types import AbbreviatedLength, NonEmptyStr
from serde_msgspec import StructBaseStrict


class LayoutConfig(StructBaseStrict, frozen=True):
    """Module directory convention."""

    descriptor_name: NonEmptyStr | None = None
    source_marker: NonEmptyStr | None = None


class BuildInfoConfig(StructBaseStrict, frozen=True):
    """Location and key of the last-build metadata record."""

    path: NonEmptyStr | None = None
    commit_key: NonEmptyStr | None = None


class CommitsConfig(StructBaseStrict, frozen=True):
    """Commit reference handling."""

    abbreviated_length: AbbreviatedLength | None = None
    detect_renames: bool | None = None


class BuildConfig(StructBaseStrict, frozen=True):
    """Build tool invocation."""

    executable: NonEmptyStr | None = None
    goals: tuple[str, ...] | None = None
    flags: tuple[str, ...] | None = None
    also_make_dependents: bool | None = None
    full_build_args: tuple[str, ...] | None = None


class GitConfig(StructBaseStrict, frozen=True):
    """pygit2 settings overrides."""

    owner_validation: bool | None = None


class RootConfigSpec(StructBaseStrict, frozen=True):
    """Root configuration for modscope."""

    source_root: NonEmptyStr | None = None
    layout: LayoutConfig | None = None
    build_info: BuildInfoConfig | None = None
    commits: CommitsConfig | None = None
    build: BuildConfig | None = None
    git: GitConfig | None = None


__all__ = [
    "BuildConfig",
    "BuildInfoConfig",
    "CommitsConfig",
    "GitConfig",
    "LayoutConfig",
    "RootConfigSpec",
]
