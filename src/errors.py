"""Error taxonomy for changed-module resolution.

Every error here is fatal for a run. Each class carries the process exit code
the CLI reports when the error aborts a command.
"""

from __future__ import annotations


class ChangeScopeError(RuntimeError):
    """Base error for changed-module resolution failures."""

    exit_code: int = 1


class ConfigurationError(ChangeScopeError):
    """Required location, setting, or build-metadata key is missing or invalid."""

    exit_code: int = 4


class BuildInfoMissingError(ConfigurationError):
    """No build-metadata record exists, so there is no prior build to compare."""


class InvalidReferenceError(ChangeScopeError):
    """Commit identifier is neither abbreviated nor full length."""

    exit_code: int = 10


class ReferenceNotFoundError(ChangeScopeError):
    """Repository has no commit matching the reference."""

    exit_code: int = 11


class AmbiguousReferenceError(ReferenceNotFoundError):
    """Abbreviated reference matches more than one object."""


class FilesystemInconsistencyError(ChangeScopeError):
    """Path follows the module convention but its module root has no descriptor."""

    exit_code: int = 12


class DescriptorError(ChangeScopeError):
    """Module descriptor cannot be read or declares no identifier."""

    exit_code: int = 12


class BuildInvocationError(ChangeScopeError):
    """Build tool could not be started."""

    exit_code: int = 20


__all__ = [
    "AmbiguousReferenceError",
    "BuildInfoMissingError",
    "BuildInvocationError",
    "ChangeScopeError",
    "ConfigurationError",
    "DescriptorError",
    "FilesystemInconsistencyError",
    "InvalidReferenceError",
    "ReferenceNotFoundError",
]
