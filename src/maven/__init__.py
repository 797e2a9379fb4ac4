"""Maven collaborators: build metadata, POM descriptors and build invocation."""

from __future__ import annotations

from maven.build_info import BuildInfo, parse_properties, read_build_info
from maven.descriptor import read_artifact_id
from maven.invocation import BuildCommand, full_build_command, parse_confirmation, run_build

__all__ = [
    "BuildCommand",
    "BuildInfo",
    "full_build_command",
    "parse_confirmation",
    "parse_properties",
    "read_artifact_id",
    "read_build_info",
    "run_build",
]
