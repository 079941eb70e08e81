# Copyright 2026 Hermes Contributors
# SPDX-License-Identifier: Apache-2.0

"""Core entities of a parsed Hermes collection."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class HttpMethod(str, Enum):
    """HTTP method a request is sent with."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"


class BodyKind(str, Enum):
    """Encoding of a request body, selected by the body sub-block type."""

    JSON = "json"
    TEXT = "text"
    FORM_URLENCODED = "form-urlencoded"
    MULTIPART_FORM = "multipart-form"


class Request(BaseModel):
    """A single API request: method, URL, headers and optional body."""

    name: str = ""
    identifier: str | None = None
    method: HttpMethod = HttpMethod.GET
    url: str = ""
    body: str | None = None
    body_kind: BodyKind | None = None
    headers: dict[str, str] = _Field(default_factory=dict)
    queries: dict[str, str] = _Field(default_factory=dict)
    variables: dict[str, str] = _Field(default_factory=dict)
    form: dict[str, str] = _Field(default_factory=dict)


class Folder(BaseModel):
    """A named group of requests, possibly containing nested folders."""

    name: str = ""
    identifier: str | None = None
    requests: list[Request] = _Field(default_factory=list)
    folders: list[Folder] = _Field(default_factory=list)
    variables: dict[str, str] = _Field(default_factory=dict)


class Collection(BaseModel):
    """Top-level model representing the parsed contents of a single .hermes file.

    Attributes:
        environments: Environment name to its flat variable mapping.
        active_environment: Name of the selected environment, or "" if none.
        environment_active: Whether the selected environment is enabled.
        unresolved_environments: Environment names referenced by the
            collection but never declared in the document.
    """

    name: str = "Untitled Collection"
    identifier: str | None = None
    requests: list[Request] = _Field(default_factory=list)
    folders: list[Folder] = _Field(default_factory=list)
    includes: list[str] = _Field(default_factory=list)
    environments: dict[str, dict[str, str]] = _Field(default_factory=dict)
    active_environment: str = ""
    environment_active: bool = False
    unresolved_environments: list[str] = _Field(default_factory=list)

    def active_variables(self) -> dict[str, str]:
        """Return the variables of the active environment, or {} if none is enabled."""
        if not self.environment_active:
            return {}
        return dict(self.environments.get(self.active_environment, {}))

    def request_count(self) -> int:
        """Return the number of requests, including those nested in folders."""
        return len(self.requests) + sum(_folder_request_count(f) for f in self.folders)


# ################
# Implementation
# ################


def _folder_request_count(folder: Folder) -> int:
    return len(folder.requests) + sum(_folder_request_count(f) for f in folder.folders)


# Resolve forward references in self-referential models.
Folder.model_rebuild()
