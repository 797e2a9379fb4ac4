"""Shared help-panel groups for the modscope CLI."""

from __future__ import annotations

from cyclopts import Group

session_group = Group(
    "Session",
    help="Session and run context options.",
    sort_key=0,
)

repository_group = Group(
    "Repository",
    help="Locate the source tree and the last build record.",
    sort_key=1,
)

build_group = Group(
    "Build",
    help="Control whether and how the scoped build runs.",
    sort_key=2,
)

output_group = Group(
    "Output",
    help="Configure report output.",
    sort_key=3,
)

__all__ = [
    "build_group",
    "output_group",
    "repository_group",
    "session_group",
]
