"""Configuration management commands."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

from cyclopts import Parameter

from cli.config_loader import CONFIG_FILENAME
from cli.context import RunContext
from cli.settings import settings_with_sources
from serde_msgspec import dumps_json

_TEMPLATE = """# modscope.toml

# Source tree to inspect; MODSCOPE_SOURCE_ROOT and --source-root take precedence.
# source_root = "~/src/platform"

[layout]
descriptor_name = "pom.xml"
source_marker = "src"

[build_info]
path = "target/classes/build-info.properties"
commit_key = "build.number"

[commits]
abbreviated_length = 7
detect_renames = true

[build]
executable = "mvn"
goals = ["clean", "install"]
flags = ["-DskipTests"]
also_make_dependents = true
full_build_args = ["clean", "install", "-DskipTests=true", "-P", "full"]

# [git]
# owner_validation = false
"""


def show_config(
    *,
    with_sources: Annotated[
        bool,
        Parameter(
            name="--with-sources",
            negative="",
            help="Show the source of each configuration value.",
        ),
    ] = False,
    run_context: Annotated[RunContext | None, Parameter(parse=False)] = None,
) -> int:
    """Show the effective settings as JSON.

    Returns
    -------
    int
        Exit status code.
    """
    context = run_context or RunContext(log_level="INFO")
    sources = settings_with_sources(context.config, config_location=context.config_location)
    payload = sources.to_display_dict() if with_sources else sources.to_flat_dict()
    sys.stdout.write(dumps_json(payload, pretty=True) + "\n")
    return 0


def init_config(
    *,
    path: Annotated[
        Path | None,
        Parameter(
            name="--path",
            help=f"Path to write the configuration template (default: {CONFIG_FILENAME}).",
        ),
    ] = None,
    force: Annotated[
        bool,
        Parameter(
            name="--force",
            negative="",
            help="Overwrite existing config file.",
        ),
    ] = False,
) -> int:
    """Write a configuration template to disk.

    Parameters
    ----------
    path
        Optional output path for the template file.
    force
        Whether to overwrite an existing file.

    Returns
    -------
    int
        Exit status code.

    Raises
    ------
    FileExistsError
        Raised when the target path exists and ``force`` is false.
    """
    target_path = path if path is not None else Path(CONFIG_FILENAME)
    if target_path.exists() and not force:
        msg = f"Config file already exists: {target_path}."
        raise FileExistsError(msg)
    target_path.write_text(_TEMPLATE, encoding="utf-8")
    return 0


__all__ = ["init_config", "show_config"]
