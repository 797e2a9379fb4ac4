"""Global pygit2 settings helpers."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cache

import pygit2

from utils.env_utils import env_bool

OWNER_VALIDATION_ENV = "MODSCOPE_GIT_OWNER_VALIDATION"


@dataclass(frozen=True)
class GitSettingsSpec:
    """Optional pygit2 Settings overrides."""

    owner_validation: bool | None = None


def apply_git_settings(spec: GitSettingsSpec) -> None:
    """Apply pygit2 settings overrides when supported.

    Disabling owner validation allows reading repositories owned by other users
    (common in containers or shared volumes) but removes a safety guard. Only
    disable it for trusted workspaces.
    """
    settings = pygit2.Settings()
    if spec.owner_validation is not None and hasattr(settings, "owner_validation"):
        settings.owner_validation = spec.owner_validation


@cache
def apply_git_settings_once() -> None:
    """Apply settings once based on environment overrides."""
    spec = git_settings_from_env()
    if spec is not None:
        apply_git_settings(spec)


def git_settings_from_env() -> GitSettingsSpec | None:
    """Build GitSettingsSpec from environment variables when present.

    Returns
    -------
    GitSettingsSpec | None
        Settings derived from environment variables.
    """
    owner_validation = env_bool(OWNER_VALIDATION_ENV, default=None, on_invalid="none")
    if owner_validation is None:
        return None
    return GitSettingsSpec(owner_validation=owner_validation)


__all__ = [
    "OWNER_VALIDATION_ENV",
    "GitSettingsSpec",
    "apply_git_settings",
    "apply_git_settings_once",
    "git_settings_from_env",
]
