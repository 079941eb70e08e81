# Copyright 2026 Hermes Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the workspace configuration module."""

from pathlib import Path

import pytest

from hermes.workspace import (
    DEFAULT_CONFIG_TEXT,
    WorkspaceConfig,
    WorkspaceConfigError,
    load_workspace_config,
    parse_workspace_config,
)

# ###############
# Helpers
# ###############


def _write_config(tmp_path: Path, content: str) -> Path:
    """Write a workspace config file and return its path."""
    config_file = tmp_path / ".hermes-workspace.yaml"
    config_file.write_text(content, encoding="utf-8")
    return config_file


# ###############
# Normal Cases
# ###############


def test_full_config(tmp_path: Path) -> None:
    """Every known field is parsed into the WorkspaceConfig."""
    content = """\
collections-directory: api
file-suffix: .hrm
anonymous-name-length: 8
log-level: debug
"""
    config = load_workspace_config(_write_config(tmp_path, content))

    assert isinstance(config, WorkspaceConfig)
    assert config.collections_directory == "api"
    assert config.file_suffix == ".hrm"
    assert config.anonymous_name_length == 8
    assert config.log_level == "DEBUG"


def test_partial_config_uses_defaults(tmp_path: Path) -> None:
    config = load_workspace_config(_write_config(tmp_path, "file-suffix: .api\n"))
    assert config.file_suffix == ".api"
    assert config.collections_directory == "."
    assert config.anonymous_name_length == 12
    assert config.log_level == "WARNING"


def test_empty_file_yields_defaults(tmp_path: Path) -> None:
    """An empty document (or one with only comments) means all defaults."""
    assert load_workspace_config(_write_config(tmp_path, "")) == WorkspaceConfig()
    assert load_workspace_config(_write_config(tmp_path, "# nothing\n")) == WorkspaceConfig()


def test_default_config_text_parses_to_defaults() -> None:
    assert parse_workspace_config(DEFAULT_CONFIG_TEXT) == WorkspaceConfig()


# ###############
# Error Cases
# ###############


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(WorkspaceConfigError, match="not found"):
        load_workspace_config(tmp_path / "nope.yaml")


def test_invalid_yaml(tmp_path: Path) -> None:
    with pytest.raises(WorkspaceConfigError, match="Invalid YAML"):
        load_workspace_config(_write_config(tmp_path, "key: [unclosed\n"))


def test_not_a_mapping() -> None:
    with pytest.raises(WorkspaceConfigError, match="mapping"):
        parse_workspace_config("- a\n- b\n")


def test_unknown_field() -> None:
    with pytest.raises(WorkspaceConfigError, match="unknown field"):
        parse_workspace_config("build-directory: out\n")


def test_absolute_collections_directory(tmp_path: Path) -> None:
    with pytest.raises(WorkspaceConfigError, match="relative to the workspace root"):
        parse_workspace_config(f"collections-directory: {tmp_path / 'shared'}\n")


def test_suffix_without_dot() -> None:
    with pytest.raises(WorkspaceConfigError, match="file-suffix"):
        parse_workspace_config("file-suffix: hermes\n")


def test_wrong_string_type() -> None:
    with pytest.raises(WorkspaceConfigError, match="collections-directory"):
        parse_workspace_config("collections-directory: 42\n")


@pytest.mark.parametrize("value", ["0", "-3", "true", "ten"])
def test_invalid_name_length(value: str) -> None:
    with pytest.raises(WorkspaceConfigError, match="anonymous-name-length"):
        parse_workspace_config(f"anonymous-name-length: {value}\n")


def test_invalid_log_level() -> None:
    with pytest.raises(WorkspaceConfigError, match="log-level"):
        parse_workspace_config("log-level: LOUD\n")


def test_error_message_names_source() -> None:
    with pytest.raises(WorkspaceConfigError, match="custom.yaml"):
        parse_workspace_config("log-level: LOUD\n", source_label="custom.yaml")
