# Copyright 2026 Hermes Contributors
# SPDX-License-Identifier: Apache-2.0

"""Batch loading of .hermes collection files.

Each file is read and parsed with its own scanner and parser; a failure in one
file is recorded and does not stop the others. Include directives are recorded
on the parsed collections but not followed.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass, field
from pathlib import Path

from hermes.model.collection import Collection
from hermes.parser.location import location
from hermes.parser.parser import ANONYMOUS_NAME_LENGTH, ParseError, parse, random_name

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class FileError:
    """A failure to load one file.

    Attributes:
        message: Human-readable description of the error.
        line: 1-based line of the offending token, if known.
        column: 1-based column of the offending token, if known.
    """

    message: str
    line: int | None = None
    column: int | None = None

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"Line {self.line}, column {self.column}: {self.message}"


@dataclass
class LoadResult:
    """Outcome of loading a batch of files."""

    collections: dict[Path, Collection] = field(default_factory=dict)
    errors: dict[Path, FileError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors


def discover_files(root: Path, suffix: str = ".hermes") -> list[Path]:
    """Return all files under *root* ending in *suffix*, sorted."""
    return sorted(p for p in root.rglob(f"*{suffix}") if p.is_file())


def load_collections(files: list[Path], *, name_length: int = ANONYMOUS_NAME_LENGTH) -> LoadResult:
    """Parse every file in *files*.

    Args:
        files: Paths of the .hermes files to load.
        name_length: Length of names generated for anonymous environments.

    Returns:
        A LoadResult holding the parsed collections and the per-file errors.
    """
    result = LoadResult()
    name_generator = functools.partial(random_name, name_length)
    for path in files:
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Cannot read %s: %s", path, exc)
            result.errors[path] = FileError(f"Cannot read file: {exc}")
            continue
        try:
            result.collections[path] = parse(source, name_generator=name_generator)
        except ParseError as exc:
            logger.warning("Failed to parse %s: %s", path, exc)
            result.errors[path] = describe_parse_error(source, exc)
            continue
        logger.debug("Parsed %s", path)
    return result


def describe_parse_error(source: str, error: ParseError) -> FileError:
    """Translate a ParseError into a FileError with line and column."""
    if error.offset is None:
        return FileError(str(error))
    line, column = location(source, error.offset)
    return FileError(str(error), line, column)
