"""Tests for settings precedence and resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from cli.config_models import (
    BuildConfig,
    BuildInfoConfig,
    CommitsConfig,
    LayoutConfig,
    RootConfigSpec,
)
from cli.config_source import ConfigSource
from cli.settings import BUILD_INFO_ENV, SOURCE_ROOT_ENV, resolve_settings, settings_with_sources
from errors import ConfigurationError


def test_cli_beats_env_beats_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure CLI values win over environment variables and config files."""
    config = RootConfigSpec(
        source_root="/from/config",
        build_info=BuildInfoConfig(path="config.properties"),
        build=BuildConfig(executable="./mvnw"),
    )
    monkeypatch.setenv(SOURCE_ROOT_ENV, "/from/env")
    monkeypatch.setenv(BUILD_INFO_ENV, "env.properties")

    values = settings_with_sources(
        config,
        config_location="modscope.toml",
        source_root=tmp_path,
    ).values

    assert values["source_root"].value == str(tmp_path)
    assert values["source_root"].source is ConfigSource.CLI
    assert values["build_info_path"].value == "env.properties"
    assert values["build_info_path"].location == BUILD_INFO_ENV
    assert values["build_executable"].source is ConfigSource.CONFIG_FILE
    assert values["build_executable"].location == "modscope.toml"
    assert values["commit_key"].source is ConfigSource.DEFAULT


def test_resolve_settings_defaults(tmp_path: Path) -> None:
    """Ensure defaults reproduce the standard Maven layout and build."""
    settings = resolve_settings(RootConfigSpec(), source_root=tmp_path)
    assert settings.source_root == tmp_path
    assert settings.build_info_path == tmp_path / "target/classes/build-info.properties"
    assert settings.commit_key == "build.number"
    assert settings.layout.descriptor_name == "pom.xml"
    assert settings.layout.source_marker == "src"
    assert settings.abbreviated_length == 7
    assert settings.detect_renames
    assert settings.owner_validation is None
    assert settings.build_command(("alpha",)).render() == (
        "mvn --projects :alpha --also-make-dependents clean install -DskipTests"
    )


def test_resolve_settings_from_config(tmp_path: Path) -> None:
    """Ensure config sections flow into the resolved settings."""
    absolute_info = tmp_path / "meta" / "info.properties"
    config = RootConfigSpec(
        source_root=str(tmp_path),
        layout=LayoutConfig(source_marker="source"),
        build_info=BuildInfoConfig(path=str(absolute_info), commit_key="git.commit"),
        commits=CommitsConfig(abbreviated_length=10, detect_renames=False),
        build=BuildConfig(goals=("verify",), flags=(), also_make_dependents=False),
    )
    settings = resolve_settings(config)
    assert settings.build_info_path == absolute_info
    assert settings.commit_key == "git.commit"
    assert settings.layout.source_marker == "source"
    assert settings.abbreviated_length == 10
    assert not settings.detect_renames
    assert settings.build_command(("a", "b")).argv() == ("mvn", "--projects", ":a,:b", "verify")


def test_missing_source_root() -> None:
    """Ensure a run without any source root is a configuration error."""
    with pytest.raises(ConfigurationError, match="MODSCOPE_SOURCE_ROOT is not set"):
        resolve_settings(RootConfigSpec())


def test_source_root_must_be_directory(tmp_path: Path) -> None:
    """Ensure a non-directory source root is rejected."""
    with pytest.raises(ConfigurationError, match="is not a directory"):
        resolve_settings(RootConfigSpec(), source_root=tmp_path / "absent")
