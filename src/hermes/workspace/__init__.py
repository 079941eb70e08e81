# Copyright 2026 Hermes Contributors
# SPDX-License-Identifier: Apache-2.0

"""Workspace configuration and batch loading for Hermes."""

from hermes.workspace.config import (
    CONFIG_FILE_NAME,
    DEFAULT_CONFIG_TEXT,
    WorkspaceConfig,
    WorkspaceConfigError,
    load_workspace_config,
    parse_workspace_config,
)
from hermes.workspace.loader import (
    FileError,
    LoadResult,
    describe_parse_error,
    discover_files,
    load_collections,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "DEFAULT_CONFIG_TEXT",
    "FileError",
    "LoadResult",
    "WorkspaceConfig",
    "WorkspaceConfigError",
    "describe_parse_error",
    "discover_files",
    "load_collections",
    "load_workspace_config",
    "parse_workspace_config",
]
