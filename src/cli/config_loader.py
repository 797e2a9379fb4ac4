"""Config loading and normalization helpers for the CLI."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import cast

import msgspec

from cli.config_models import RootConfigSpec
from core_types import JsonValue
from errors import ConfigurationError
from serde_msgspec import convert_strict, to_builtins, validation_error_payload
from utils.file_io import read_text, read_toml

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "modscope.toml"
PYPROJECT_FILENAME = "pyproject.toml"
TOOL_KEY = "modscope"


@dataclass(frozen=True)
class ConfigResolution:
    """Decoded configuration plus the file it came from."""

    config: RootConfigSpec
    location: str | None = None

    @property
    def contents(self) -> dict[str, JsonValue]:
        """Return the configuration as builtins, defaults omitted."""
        return cast("dict[str, JsonValue]", to_builtins(self.config))


def load_effective_config(
    config_file: str | None,
    *,
    start: Path | None = None,
) -> ConfigResolution:
    """Load config from modscope.toml / pyproject.toml or an explicit --config.

    Parameters
    ----------
    config_file
        Optional explicit config file path.
    start
        Directory to start the parent search from; defaults to the cwd.

    Returns
    -------
    ConfigResolution
        Decoded configuration and its location.

    Raises
    ------
    ConfigurationError
        Raised when an explicit file is missing or any file fails validation.
    """
    if config_file:
        path = Path(config_file)
        if not path.is_file():
            msg = f"Config file not found: {config_file!r}."
            raise ConfigurationError(msg)
        raw, location = _resolve_explicit_payload(path)
        return ConfigResolution(_decode_root_config(raw, location=location), location)

    search_root = start or Path.cwd()
    modscope_path = _find_in_parents(CONFIG_FILENAME, search_root)
    if modscope_path is not None:
        raw = _read_toml(modscope_path)
        location = str(modscope_path)
        return ConfigResolution(_decode_root_config(raw, location=location), location)

    pyproject_path = _find_in_parents(PYPROJECT_FILENAME, search_root)
    if pyproject_path is not None:
        nested = _extract_tool_config(_read_toml(pyproject_path))
        if nested is not None:
            location = f"{pyproject_path}:tool.{TOOL_KEY}"
            return ConfigResolution(_decode_root_config(nested, location=location), location)
    return ConfigResolution(RootConfigSpec())


def _find_in_parents(filename: str, start: Path) -> Path | None:
    """Walk parents from ``start`` to find a filename.

    Returns
    -------
    Path | None
        Path to the first matching file in ``start`` or its parents.
    """
    path = start.resolve()
    while True:
        candidate = path / filename
        if candidate.is_file():
            return candidate
        if path.parent == path:
            return None
        path = path.parent


def _read_toml(path: Path) -> dict[str, JsonValue]:
    try:
        return cast("dict[str, JsonValue]", read_toml(path))
    except (msgspec.DecodeError, TypeError) as exc:
        msg = f"Config parsing failed for {path}: {exc}"
        raise ConfigurationError(msg) from exc


def _decode_root_config(raw: Mapping[str, JsonValue], *, location: str) -> RootConfigSpec:
    try:
        config = convert_strict(raw, target_type=RootConfigSpec)
    except msgspec.ValidationError as exc:
        details = validation_error_payload(exc)
        msg = f"Config validation failed for {location}: {details}"
        raise ConfigurationError(msg) from exc
    logger.debug("Loaded configuration from %s", location)
    return config


def _resolve_explicit_payload(path: Path) -> tuple[Mapping[str, JsonValue], str]:
    if path.suffix == ".json":
        try:
            raw = msgspec.json.decode(read_text(path))
        except msgspec.DecodeError as exc:
            msg = f"Config parsing failed for {path}: {exc}"
            raise ConfigurationError(msg) from exc
        if not isinstance(raw, dict):
            msg = f"Config validation failed for {path}: JSON root must be an object."
            raise ConfigurationError(msg)
        return cast("Mapping[str, JsonValue]", raw), str(path)
    raw = _read_toml(path)
    if _is_pyproject_config(path):
        nested = _extract_tool_config(raw)
        if nested is None:
            msg = f"Config validation failed for {path}: missing [tool.{TOOL_KEY}] section."
            raise ConfigurationError(msg)
        return nested, f"{path}:tool.{TOOL_KEY}"
    return raw, str(path)


def _extract_tool_config(raw: Mapping[str, JsonValue]) -> dict[str, JsonValue] | None:
    tool_section = raw.get("tool")
    if not isinstance(tool_section, dict):
        return None
    nested = tool_section.get(TOOL_KEY)
    if not isinstance(nested, dict):
        return None
    return cast("dict[str, JsonValue]", nested)


def _is_pyproject_config(path: Path) -> bool:
    return path.name == PYPROJECT_FILENAME


__all__ = [
    "CONFIG_FILENAME",
    "ConfigResolution",
    "load_effective_config",
]
