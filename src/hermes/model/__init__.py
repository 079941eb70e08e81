# Copyright 2026 Hermes Contributors
# SPDX-License-Identifier: Apache-2.0

"""Document model for Hermes collections (requests, folders, environments)."""

from hermes.model.collection import (
    BodyKind,
    Collection,
    Folder,
    HttpMethod,
    Request,
)

__all__ = [
    "BodyKind",
    "Collection",
    "Folder",
    "HttpMethod",
    "Request",
]
