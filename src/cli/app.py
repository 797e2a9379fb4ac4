"""Main application setup for the modscope CLI."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Annotated, Literal

from cyclopts import App, Parameter

from cli.commands.version import get_version
from cli.config_loader import load_effective_config
from cli.context import RunContext
from cli.exit_codes import ExitCode
from cli.groups import session_group
from cli.invoke import invoke_command
from cli.result_action import cli_result_action
from errors import ConfigurationError

_LOGGER = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
LOG_FORMAT = ">> %(message)s"
DEFAULT_COMMAND = "changed"

_HELP_EPILOGUE = """
Examples:
  modscope                               Detect changed modules, prompt to build them
  modscope changed ~/src/platform        Use an explicit source root
  modscope changed --print-only --json   Report changes without building
  modscope changed --since 1a2b3c4 -y    Compare against a commit and build without asking
  modscope config show --with-sources    Show effective settings and their sources

Environment Variables:
  MODSCOPE_SOURCE_ROOT            Source tree to inspect
  MODSCOPE_BUILD_INFO             Build metadata file (relative to the source root)
  MODSCOPE_LOG_LEVEL              Default log level (DEBUG, INFO, WARNING, ERROR)
  MODSCOPE_GIT_OWNER_VALIDATION   Toggle libgit2 repository owner validation
"""

app = App(
    name="modscope",
    help="Rebuild only the Maven modules that changed since the last build.",
    help_format="rich",
    help_epilogue=_HELP_EPILOGUE,
    version=get_version(),
    version_flags=["--version", "-V"],
    default_parameter=Parameter(
        show_default=True,
        show_env_var=True,
    ),
    result_action=cli_result_action,
    exit_on_error=True,
    print_error=True,
    help_on_error=False,
)

app.meta.group_parameters = session_group


@dataclass(frozen=True)
class SessionOptions:
    """Session-level configuration parameters."""

    config_file: Annotated[
        str | None,
        Parameter(
            name="--config",
            help="Path to configuration file (overrides default search).",
            group=session_group,
        ),
    ] = None
    log_level: Annotated[
        Literal["DEBUG", "INFO", "WARNING", "ERROR"],
        Parameter(
            name="--log-level",
            help="Logging verbosity level.",
            env_var="MODSCOPE_LOG_LEVEL",
            group=session_group,
        ),
    ] = "INFO"


_DEFAULT_SESSION_OPTIONS = SessionOptions()


@app.meta.default
def meta_launcher(
    *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    session: Annotated[SessionOptions, Parameter(name="*")] = _DEFAULT_SESSION_OPTIONS,
) -> int:
    """Meta launcher for config selection and context injection.

    Returns
    -------
    int
        Exit status code from command execution.

    Raises
    ------
    ValueError
        Raised when the log level is invalid.
    """
    if session.log_level not in LOG_LEVELS:
        msg = f"Unsupported log level {session.log_level!r}."
        raise ValueError(msg)
    logging.basicConfig(level=session.log_level.upper(), format=LOG_FORMAT)

    try:
        config_resolution = load_effective_config(session.config_file)
    except ConfigurationError as exc:
        _LOGGER.error("%s", exc)
        return int(ExitCode.from_exception(exc))
    run_context = RunContext(
        log_level=session.log_level,
        config=config_resolution.config,
        config_location=config_resolution.location,
    )

    exit_code, event = invoke_command(
        app,
        list(tokens) or [DEFAULT_COMMAND],
        run_context=run_context,
    )
    _LOGGER.debug(
        "command %s exited with %d (parse %.1fms, exec %.1fms, error %s)",
        event.command,
        event.exit_code,
        event.parse_ms,
        event.exec_ms,
        event.error_class,
    )
    return exit_code


app.command("cli.commands.changed:changed_command", name="changed", alias="c")

# Config subapp with alias
_config_app = App(name="config", help="Configuration management.")
_config_app.command("cli.commands.config:show_config", name="show")
_config_app.command("cli.commands.config:init_config", name="init")
app.command(_config_app, alias="cfg")
app.command("cli.commands.version:version_command", name="version", alias="v")


def main() -> None:
    """Run the modscope CLI."""
    app.meta()


__all__ = ["app", "main", "meta_launcher"]
