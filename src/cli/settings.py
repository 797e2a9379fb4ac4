"""Effective settings for a run, resolved from CLI, environment and config."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from changes.commits import ABBREVIATED_LENGTH
from changes.ownership import DEFAULT_DESCRIPTOR_NAME, DEFAULT_SOURCE_MARKER, ModuleLayout
from cli.config_models import (
    BuildConfig,
    BuildInfoConfig,
    CommitsConfig,
    GitConfig,
    LayoutConfig,
    RootConfigSpec,
)
from cli.config_source import ConfigSource, ConfigValue, ConfigWithSources
from errors import ConfigurationError
from maven.build_info import DEFAULT_BUILD_INFO_PATH, DEFAULT_COMMIT_KEY
from maven.invocation import (
    DEFAULT_EXECUTABLE,
    DEFAULT_FLAGS,
    DEFAULT_FULL_BUILD_ARGS,
    DEFAULT_GOALS,
    BuildCommand,
)
from utils.env_utils import env_value

if TYPE_CHECKING:
    from core_types import JsonValue

SOURCE_ROOT_ENV = "MODSCOPE_SOURCE_ROOT"
BUILD_INFO_ENV = "MODSCOPE_BUILD_INFO"


@dataclass(frozen=True)
class ScopeSettings:
    """Fully resolved settings for one changed-module run."""

    source_root: Path
    build_info_path: Path
    commit_key: str
    layout: ModuleLayout
    abbreviated_length: int
    detect_renames: bool
    build_executable: str
    build_goals: tuple[str, ...]
    build_flags: tuple[str, ...]
    also_make_dependents: bool
    full_build_args: tuple[str, ...]
    owner_validation: bool | None

    def build_command(self, modules: tuple[str, ...]) -> BuildCommand:
        """Return the scoped build command for ``modules``.

        Returns
        -------
        BuildCommand
            Command limited to the changed modules.
        """
        return BuildCommand(
            modules=modules,
            executable=self.build_executable,
            goals=self.build_goals,
            flags=self.build_flags,
            also_make_dependents=self.also_make_dependents,
        )


def settings_with_sources(
    config: RootConfigSpec,
    *,
    config_location: str | None = None,
    source_root: Path | None = None,
    build_info: Path | None = None,
) -> ConfigWithSources:
    """Resolve every setting and record where its value came from.

    CLI values win over environment variables, which win over the config
    file, which wins over built-in defaults.

    Returns
    -------
    ConfigWithSources
        Values keyed by setting name.
    """
    layout = config.layout or LayoutConfig()
    info = config.build_info or BuildInfoConfig()
    commits = config.commits or CommitsConfig()
    build = config.build or BuildConfig()
    git = config.git or GitConfig()

    def pick(
        key: str,
        configured: JsonValue,
        default: JsonValue,
        *,
        cli_value: JsonValue = None,
        env_name: str | None = None,
    ) -> ConfigValue:
        if cli_value is not None:
            return ConfigValue(key, cli_value, ConfigSource.CLI)
        env_raw = env_value(env_name) if env_name else None
        if env_raw is not None:
            return ConfigValue(key, env_raw, ConfigSource.ENV, env_name)
        if configured is not None:
            return ConfigValue(key, configured, ConfigSource.CONFIG_FILE, config_location)
        return ConfigValue(key, default, ConfigSource.DEFAULT)

    values = [
        pick(
            "source_root",
            config.source_root,
            None,
            cli_value=str(source_root) if source_root is not None else None,
            env_name=SOURCE_ROOT_ENV,
        ),
        pick(
            "build_info_path",
            info.path,
            DEFAULT_BUILD_INFO_PATH,
            cli_value=str(build_info) if build_info is not None else None,
            env_name=BUILD_INFO_ENV,
        ),
        pick("commit_key", info.commit_key, DEFAULT_COMMIT_KEY),
        pick("descriptor_name", layout.descriptor_name, DEFAULT_DESCRIPTOR_NAME),
        pick("source_marker", layout.source_marker, DEFAULT_SOURCE_MARKER),
        pick("abbreviated_length", commits.abbreviated_length, ABBREVIATED_LENGTH),
        pick("detect_renames", commits.detect_renames, True),
        pick("build_executable", build.executable, DEFAULT_EXECUTABLE),
        pick("build_goals", _list_or_none(build.goals), list(DEFAULT_GOALS)),
        pick("build_flags", _list_or_none(build.flags), list(DEFAULT_FLAGS)),
        pick("also_make_dependents", build.also_make_dependents, True),
        pick(
            "full_build_args",
            _list_or_none(build.full_build_args),
            list(DEFAULT_FULL_BUILD_ARGS),
        ),
        pick("owner_validation", git.owner_validation, None),
    ]
    return ConfigWithSources(values={value.key: value for value in values})


def resolve_settings(
    config: RootConfigSpec,
    *,
    config_location: str | None = None,
    source_root: Path | None = None,
    build_info: Path | None = None,
) -> ScopeSettings:
    """Resolve the settings for a run.

    Returns
    -------
    ScopeSettings
        Effective settings.

    Raises
    ------
    ConfigurationError
        Raised when no source root is configured or it is not a directory.
    """
    sources = settings_with_sources(
        config,
        config_location=config_location,
        source_root=source_root,
        build_info=build_info,
    )
    flat = sources.to_flat_dict()
    raw_root = flat["source_root"]
    if not raw_root:
        msg = f"{SOURCE_ROOT_ENV} is not set. Please set it, pass --source-root, and try again."
        raise ConfigurationError(msg)
    root = Path(str(raw_root)).expanduser()
    if not root.is_dir():
        msg = f"Source root {root} is not a directory."
        raise ConfigurationError(msg)
    info_path = Path(str(flat["build_info_path"])).expanduser()
    if not info_path.is_absolute():
        info_path = root / info_path
    owner_validation = flat["owner_validation"]
    return ScopeSettings(
        source_root=root,
        build_info_path=info_path,
        commit_key=str(flat["commit_key"]),
        layout=ModuleLayout(
            descriptor_name=str(flat["descriptor_name"]),
            source_marker=str(flat["source_marker"]),
        ),
        abbreviated_length=int(str(flat["abbreviated_length"])),
        detect_renames=bool(flat["detect_renames"]),
        build_executable=str(flat["build_executable"]),
        build_goals=_as_tuple(flat["build_goals"]),
        build_flags=_as_tuple(flat["build_flags"]),
        also_make_dependents=bool(flat["also_make_dependents"]),
        full_build_args=_as_tuple(flat["full_build_args"]),
        owner_validation=owner_validation if isinstance(owner_validation, bool) else None,
    )


def _list_or_none(value: tuple[str, ...] | None) -> list[str] | None:
    return list(value) if value is not None else None


def _as_tuple(value: JsonValue) -> tuple[str, ...]:
    if isinstance(value, (list, tuple)):
        return tuple(str(item) for item in value)
    return ()


__all__ = [
    "BUILD_INFO_ENV",
    "SOURCE_ROOT_ENV",
    "ScopeSettings",
    "resolve_settings",
    "settings_with_sources",
]
