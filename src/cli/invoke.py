"""Command dispatch for the meta launcher."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from cyclopts import App
from cyclopts.exceptions import CycloptsError

from cli.context import RunContext
from cli.exit_codes import ExitCode
from cli.result_action import cli_result_action
from errors import ChangeScopeError

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CliInvokeEvent:
    """Structured record of one CLI invocation."""

    ok: bool
    command: str | None
    parse_ms: float
    exec_ms: float
    exit_code: int
    error_class: str | None = None
    error_message: str | None = None


def invoke_command(
    app: App,
    tokens: list[str],
    *,
    run_context: RunContext | None,
) -> tuple[int, CliInvokeEvent]:
    """Parse ``tokens``, inject the run context and execute the command.

    Domain errors are logged without a traceback; anything else is logged with
    one. Both are converted to exit codes rather than propagated.

    Returns
    -------
    tuple[int, CliInvokeEvent]
        Exit code and invocation record.
    """
    t0 = time.perf_counter()
    command_name = tokens[0] if tokens else None
    try:
        command, bound, ignored = app.parse_args(
            tokens,
            exit_on_error=False,
            print_error=True,
        )
    except CycloptsError as exc:
        exit_code = ExitCode.from_exception(exc)
        return exit_code, CliInvokeEvent(
            ok=False,
            command=command_name,
            parse_ms=(time.perf_counter() - t0) * 1000.0,
            exec_ms=0.0,
            exit_code=exit_code,
            error_class=f"cyclopts.{exc.__class__.__name__}",
            error_message=str(exc),
        )
    parse_ms = (time.perf_counter() - t0) * 1000.0
    command_name = getattr(command, "__qualname__", command_name)

    if run_context is not None and ignored:
        for name, hint in ignored.items():
            if hint is RunContext or name == "run_context":
                bound.arguments[name] = run_context

    t1 = time.perf_counter()
    error: BaseException | None = None
    try:
        result = command(*bound.args, **bound.kwargs)
    except ChangeScopeError as exc:
        _LOGGER.error("%s", exc)
        error = exc
    except Exception as exc:
        _LOGGER.exception("Command execution failed.")
        error = exc
    exec_ms = (time.perf_counter() - t1) * 1000.0
    if error is not None:
        exit_code = int(ExitCode.from_exception(error))
        return exit_code, CliInvokeEvent(
            ok=False,
            command=command_name,
            parse_ms=parse_ms,
            exec_ms=exec_ms,
            exit_code=exit_code,
            error_class=error.__class__.__name__,
            error_message=str(error),
        )
    exit_code = cli_result_action(app, command, result)
    return exit_code, CliInvokeEvent(
        ok=exit_code == ExitCode.SUCCESS,
        command=command_name,
        parse_ms=parse_ms,
        exec_ms=exec_ms,
        exit_code=exit_code,
    )


__all__ = ["CliInvokeEvent", "invoke_command"]
