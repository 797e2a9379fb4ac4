"""Changed-module detection and scoped build command."""

from __future__ import annotations

import logging
import shlex
import sys
import time
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

from cyclopts import Parameter
from rich.console import Console

from changes.pipeline import resolve_changed_modules
from cli.context import RunContext
from cli.exit_codes import ExitCode
from cli.groups import build_group, output_group, repository_group
from cli.result import CliResult
from cli.settings import resolve_settings
from errors import BuildInfoMissingError
from maven.build_info import read_build_info
from maven.descriptor import read_artifact_id
from maven.invocation import full_build_command, parse_confirmation, run_build
from serde_msgspec import dumps_json, to_builtins
from vcs.pygit2_backend import open_backend
from vcs.settings import GitSettingsSpec, apply_git_settings

if TYPE_CHECKING:
    from changes.pipeline import ChangeScopeReport
    from maven.build_info import BuildInfo
    from maven.invocation import BuildCommand

_LOGGER = logging.getLogger(__name__)

_PROMPT = "run the above command? (y/n) "


def changed_command(
    source_root: Annotated[
        Path | None,
        Parameter(
            name=["--source-root", "-C"],
            help="Source tree to inspect. Falls back to MODSCOPE_SOURCE_ROOT, then config.",
            group=repository_group,
        ),
    ] = None,
    *,
    since: Annotated[
        str | None,
        Parameter(
            name="--since",
            help="Compare against this commit instead of the one recorded by the last build.",
            group=repository_group,
        ),
    ] = None,
    build_info: Annotated[
        Path | None,
        Parameter(
            name="--build-info",
            help="Build metadata file, absolute or relative to the source root.",
            group=repository_group,
        ),
    ] = None,
    yes: Annotated[
        bool,
        Parameter(
            name=["--yes", "-y"],
            negative="",
            help="Run the scoped build without prompting.",
            group=build_group,
        ),
    ] = False,
    print_only: Annotated[
        bool,
        Parameter(
            name="--print-only",
            negative="",
            help="Print the scoped build command but never prompt or build.",
            group=build_group,
        ),
    ] = False,
    json_output: Annotated[
        bool,
        Parameter(
            name="--json",
            negative="",
            help="Write the report as JSON to stdout. Implies --print-only unless --yes.",
            group=output_group,
        ),
    ] = False,
    run_context: Annotated[RunContext | None, Parameter(parse=False)] = None,
) -> CliResult:
    """Detect modules changed since the last build and optionally rebuild them.

    Returns
    -------
    CliResult
        Result carrying the build exit status when a build ran.
    """
    started = time.perf_counter()
    context = run_context or RunContext(log_level="INFO")
    settings = resolve_settings(
        context.config,
        config_location=context.config_location,
        source_root=source_root,
        build_info=build_info,
    )
    if settings.owner_validation is not None:
        apply_git_settings(GitSettingsSpec(owner_validation=settings.owner_validation))
    backend = open_backend(settings.source_root)
    console = Console(highlight=False, soft_wrap=True)

    if since is None:
        try:
            info = read_build_info(settings.build_info_path)
        except BuildInfoMissingError as exc:
            _LOGGER.warning("%s; a full build is required", exc)
            full_build = full_build_command(settings.build_executable, settings.full_build_args)
            console.print(shlex.join(full_build), style="green", markup=False)
            return CliResult.success()
        if not json_output:
            _print_build_info(console, info)
        last_build = info.commit(settings.commit_key)
    else:
        last_build = since

    report = resolve_changed_modules(
        backend,
        last_build_commit=last_build,
        read_identifier=read_artifact_id,
        layout=settings.layout,
        abbreviated_length=settings.abbreviated_length,
        detect_renames=settings.detect_renames,
    )
    command = settings.build_command(report.modules) if report.needs_rebuild else None
    if json_output:
        sys.stdout.write(dumps_json(_report_payload(report, command), pretty=True) + "\n")
    else:
        _print_report(console, report)

    if command is None:
        _LOGGER.info("no changes detected. You may start server as is.")
        return CliResult.success()
    _LOGGER.info(
        "changed modules are %s. Completed in %.1fms",
        ", ".join(report.modules),
        report.elapsed_ms,
    )
    if not json_output:
        console.print(command.render(), style="green", markup=False)
    if not yes and (print_only or json_output):
        return CliResult.success()
    if not yes:
        confirmed = _ask_confirmation(console)
        if confirmed is None:
            _LOGGER.info("answer not recognised. exiting....")
            return CliResult.success()
        if not confirmed:
            return CliResult.success()

    status = run_build(command.argv(), cwd=settings.source_root)
    duration_ms = (time.perf_counter() - started) * 1000.0
    if status != 0:
        return CliResult.error(
            ExitCode.BUILD_ERROR,
            summary=f"build failed with exit status {status}",
        )
    return CliResult.success(metrics={"duration_ms": duration_ms})


def _ask_confirmation(console: Console) -> bool | None:
    try:
        answer = console.input(_PROMPT)
    except EOFError:
        return None
    return parse_confirmation(answer)


def _print_build_info(console: Console, info: BuildInfo) -> None:
    console.rule(info.path.name, characters="#")
    for key, value in info.properties.items():
        console.print(f"{key}={value}", markup=False)
    console.rule(characters="#")


def _print_report(console: Console, report: ChangeScopeReport) -> None:
    for record in (*report.history_changes, *report.worktree_changes):
        console.print(record.describe(), markup=False)
    for skipped in report.skipped:
        console.print(f"[SKIP] {skipped.path} ({skipped.reason})", style="yellow", markup=False)


def _report_payload(report: ChangeScopeReport, command: BuildCommand | None) -> dict[str, object]:
    payload = dict(to_builtins(report))
    payload["needs_rebuild"] = report.needs_rebuild
    payload["build_command"] = list(command.argv()) if command is not None else None
    return payload


__all__ = ["changed_command"]
