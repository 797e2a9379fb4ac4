"""Scoped Maven build command construction and execution."""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from errors import BuildInvocationError

_LOGGER = logging.getLogger(__name__)

DEFAULT_EXECUTABLE = "mvn"
DEFAULT_GOALS: tuple[str, ...] = ("clean", "install")
DEFAULT_FLAGS: tuple[str, ...] = ("-DskipTests",)
DEFAULT_FULL_BUILD_ARGS: tuple[str, ...] = ("clean", "install", "-DskipTests=true", "-P", "full")

_YES = frozenset({"y", "yes"})
_NO = frozenset({"n", "no"})


@dataclass(frozen=True)
class BuildCommand:
    """Build-tool invocation limited to a set of modules."""

    modules: tuple[str, ...]
    executable: str = DEFAULT_EXECUTABLE
    goals: tuple[str, ...] = DEFAULT_GOALS
    flags: tuple[str, ...] = DEFAULT_FLAGS
    also_make_dependents: bool = True

    @property
    def projects(self) -> str:
        """Return the ``--projects`` selector, e.g. ``:alpha,:beta``."""
        return ",".join(f":{module}" for module in self.modules)

    def argv(self) -> tuple[str, ...]:
        """Return the full argument vector.

        Returns
        -------
        tuple[str, ...]
            Executable followed by its arguments.
        """
        args: list[str] = [self.executable]
        if self.modules:
            args.extend(("--projects", self.projects))
            if self.also_make_dependents:
                args.append("--also-make-dependents")
        args.extend(self.goals)
        args.extend(self.flags)
        return tuple(args)

    def render(self) -> str:
        """Return the command as a shell-quoted line.

        Returns
        -------
        str
            Printable command line.
        """
        return shlex.join(self.argv())


def full_build_command(
    executable: str = DEFAULT_EXECUTABLE,
    args: Sequence[str] = DEFAULT_FULL_BUILD_ARGS,
) -> tuple[str, ...]:
    """Return the command for a complete rebuild of every module.

    Returns
    -------
    tuple[str, ...]
        Executable followed by its arguments.
    """
    return (executable, *args)


def parse_confirmation(answer: str) -> bool | None:
    """Interpret an answer to the run-the-build prompt.

    Returns
    -------
    bool | None
        True for yes, False for no, None when the answer is not recognised.
    """
    normalized = answer.strip().lower()
    if normalized in _YES:
        return True
    if normalized in _NO:
        return False
    return None


def run_build(argv: Sequence[str], *, cwd: Path) -> int:
    """Run the build tool in ``cwd`` with inherited stdout/stderr.

    Returns
    -------
    int
        Build tool exit status.

    Raises
    ------
    BuildInvocationError
        Raised when the executable cannot be started.
    """
    _LOGGER.info("running %s in %s", shlex.join(argv), cwd)
    try:
        proc = subprocess.run(list(argv), cwd=str(cwd), check=False)
    except (FileNotFoundError, PermissionError) as exc:
        msg = f"cannot start build tool {argv[0]!r}: {exc}"
        raise BuildInvocationError(msg) from exc
    if proc.returncode != 0:
        _LOGGER.error("build failed with exit status %d", proc.returncode)
    return proc.returncode


__all__ = [
    "DEFAULT_EXECUTABLE",
    "DEFAULT_FLAGS",
    "DEFAULT_FULL_BUILD_ARGS",
    "DEFAULT_GOALS",
    "BuildCommand",
    "full_build_command",
    "parse_confirmation",
    "run_build",
]
