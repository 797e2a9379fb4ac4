"""Tests for CLI exit code mapping."""

from __future__ import annotations

import pytest

from cli.exit_codes import ExitCode
from cli.result import CliResult
from errors import (
    AmbiguousReferenceError,
    BuildInfoMissingError,
    BuildInvocationError,
    ConfigurationError,
    DescriptorError,
    FilesystemInconsistencyError,
    InvalidReferenceError,
    ReferenceNotFoundError,
)


@pytest.mark.parametrize(
    ("exc", "expected"),
    [
        (ConfigurationError("x"), ExitCode.CONFIG_ERROR),
        (BuildInfoMissingError("x"), ExitCode.CONFIG_ERROR),
        (InvalidReferenceError("x"), ExitCode.INVALID_REFERENCE),
        (ReferenceNotFoundError("x"), ExitCode.REFERENCE_NOT_FOUND),
        (AmbiguousReferenceError("x"), ExitCode.REFERENCE_NOT_FOUND),
        (FilesystemInconsistencyError("x"), ExitCode.LAYOUT_ERROR),
        (DescriptorError("x"), ExitCode.LAYOUT_ERROR),
        (BuildInvocationError("x"), ExitCode.BUILD_ERROR),
        (ValueError("x"), ExitCode.VALIDATION_ERROR),
        (FileExistsError("x"), ExitCode.CONFIG_ERROR),
        (RuntimeError("x"), ExitCode.GENERAL_ERROR),
    ],
)
def test_exit_code_from_exception(exc: BaseException, expected: ExitCode) -> None:
    """Ensure each error family maps to its documented exit code."""
    assert ExitCode.from_exception(exc) is expected


def test_cli_result_from_exception() -> None:
    """Ensure results built from errors carry the message and code."""
    result = CliResult.from_exception(InvalidReferenceError("commit [abc] is an invalid commit"))
    assert result.exit_code == ExitCode.INVALID_REFERENCE
    assert result.summary == "commit [abc] is an invalid commit"
    assert not result.ok
    assert CliResult.success().ok
