# Copyright 2026 Hermes Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the Hermes workspace configuration file."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".hermes-workspace.yaml"

DEFAULT_CONFIG_TEXT = (
    "# Hermes Workspace Configuration\n"
    "collections-directory: .\n"
    "file-suffix: .hermes\n"
    "anonymous-name-length: 12\n"
    "log-level: WARNING\n"
)


class WorkspaceConfigError(Exception):
    """Raised when a workspace configuration file is invalid or cannot be loaded."""


@dataclass
class WorkspaceConfig:
    """The parsed configuration for a Hermes workspace.

    Attributes:
        collections_directory: Relative path (from the workspace root) searched
            for collection files.
        file_suffix: Suffix identifying collection files.
        anonymous_name_length: Length of names generated for anonymous
            environment blocks.
        log_level: Name of the logging level used by the CLI.
    """

    collections_directory: str = "."
    file_suffix: str = ".hermes"
    anonymous_name_length: int = 12
    log_level: str = "WARNING"


def load_workspace_config(path: Path) -> WorkspaceConfig:
    """Load and parse a Hermes workspace configuration file.

    Args:
        path: Path to the `.hermes-workspace.yaml` file.

    Returns:
        A WorkspaceConfig instance populated from the file.

    Raises:
        WorkspaceConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise WorkspaceConfigError(f"Workspace config file not found: {path}") from None
    except OSError as exc:
        raise WorkspaceConfigError(f"Cannot read workspace config file: {exc}") from exc

    return parse_workspace_config(text, source_label=str(path))


def parse_workspace_config(text: str, source_label: str = "<string>") -> WorkspaceConfig:
    """Parse workspace config YAML text into a WorkspaceConfig.

    An empty document yields the defaults.

    Raises:
        WorkspaceConfigError: If the YAML is invalid or a field has the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise WorkspaceConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return WorkspaceConfig()
    if not isinstance(data, dict):
        raise WorkspaceConfigError(f"{source_label}: workspace config must be a YAML mapping")

    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        raise WorkspaceConfigError(f"{source_label}: unknown field(s): {', '.join(map(str, unknown))}")

    defaults = WorkspaceConfig()
    collections_directory = _optional_string(data, "collections-directory", defaults.collections_directory, source_label)
    if Path(collections_directory).is_absolute():
        raise WorkspaceConfigError(f"{source_label}: 'collections-directory' must be relative to the workspace root")
    file_suffix = _optional_string(data, "file-suffix", defaults.file_suffix, source_label)
    if not file_suffix.startswith("."):
        raise WorkspaceConfigError(f"{source_label}: 'file-suffix' must start with '.'")

    name_length = data.get("anonymous-name-length", defaults.anonymous_name_length)
    if isinstance(name_length, bool) or not isinstance(name_length, int) or name_length <= 0:
        raise WorkspaceConfigError(f"{source_label}: 'anonymous-name-length' must be a positive integer")

    log_level = _optional_string(data, "log-level", defaults.log_level, source_label).upper()
    if log_level not in _LOG_LEVELS:
        raise WorkspaceConfigError(
            f"{source_label}: 'log-level' must be one of {', '.join(sorted(_LOG_LEVELS))}"
        )

    return WorkspaceConfig(
        collections_directory=collections_directory,
        file_suffix=file_suffix,
        anonymous_name_length=name_length,
        log_level=log_level,
    )


# ################
# Implementation
# ################

_KNOWN_KEYS = frozenset({"collections-directory", "file-suffix", "anonymous-name-length", "log-level"})

_LOG_LEVELS = frozenset(
    logging.getLevelName(level)
    for level in (logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL)
)


def _optional_string(mapping: dict[str, object], key: str, default: str, source_label: str) -> str:
    """Extract an optional string field from a mapping, raising WorkspaceConfigError on a wrong type."""
    if key not in mapping:
        return default
    value = mapping[key]
    if not isinstance(value, str):
        raise WorkspaceConfigError(f"{source_label}: '{key}' must be a string")
    return value
