"""Tests for configuration discovery and validation."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from cli.config_loader import load_effective_config
from cli.config_models import RootConfigSpec
from errors import ConfigurationError


def test_modscope_toml_is_found_in_parents(tmp_path: Path) -> None:
    """Ensure the nearest modscope.toml configures the run."""
    (tmp_path / "modscope.toml").write_text(
        'source_root = "/work/platform"\n\n[commits]\nabbreviated_length = 8\n',
        encoding="utf-8",
    )
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    resolution = load_effective_config(None, start=nested)

    assert resolution.location == str(tmp_path / "modscope.toml")
    assert resolution.config.source_root == "/work/platform"
    assert resolution.config.commits is not None
    assert resolution.config.commits.abbreviated_length == 8
    assert resolution.contents == {
        "source_root": "/work/platform",
        "commits": {"abbreviated_length": 8},
    }


def test_pyproject_tool_section(tmp_path: Path) -> None:
    """Ensure [tool.modscope] in pyproject.toml is used as a fallback."""
    (tmp_path / "pyproject.toml").write_text(
        '[project]\nname = "x"\n\n[tool.modscope.build]\nexecutable = "./mvnw"\n',
        encoding="utf-8",
    )
    resolution = load_effective_config(None, start=tmp_path)
    assert resolution.location == f"{tmp_path / 'pyproject.toml'}:tool.modscope"
    assert resolution.config.build is not None
    assert resolution.config.build.executable == "./mvnw"


def test_explicit_json_config(tmp_path: Path) -> None:
    """Ensure an explicit JSON file is accepted."""
    path = tmp_path / "scope.json"
    path.write_text(json.dumps({"layout": {"source_marker": "source"}}), encoding="utf-8")
    resolution = load_effective_config(str(path))
    assert resolution.config.layout is not None
    assert resolution.config.layout.source_marker == "source"


def test_explicit_missing_file(tmp_path: Path) -> None:
    """Ensure a missing explicit file is a configuration error."""
    with pytest.raises(ConfigurationError, match="Config file not found"):
        load_effective_config(str(tmp_path / "absent.toml"))


@pytest.mark.parametrize(
    "text",
    [
        "unknown_key = 1\n",
        "[commits]\nabbreviated_length = 2\n",
        "[build]\ngoals = 'install'\n",
        "[layout\n",
    ],
)
def test_invalid_config_is_rejected(tmp_path: Path, text: str) -> None:
    """Ensure unknown keys, bad values and broken TOML are configuration errors."""
    path = tmp_path / "modscope.toml"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_effective_config(str(path))


def test_defaults_without_config(tmp_path: Path) -> None:
    """Ensure an empty configuration is used when no file is found."""
    resolution = load_effective_config(None, start=tmp_path)
    assert resolution.config == RootConfigSpec()
    assert resolution.location is None
