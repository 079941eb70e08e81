# Copyright 2026 Hermes Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for batch discovery and loading of collection files."""

import logging
from pathlib import Path

import pytest

from hermes.parser.parser import UnexpectedTokenError, parse
from hermes.workspace import FileError, describe_parse_error, discover_files, load_collections

# ###############
# Discovery
# ###############


def test_discover_files_recursive_and_sorted(tmp_path: Path) -> None:
    """Files are found in nested directories and returned in sorted order."""
    (tmp_path / "b.hermes").write_text("")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "a.hermes").write_text("")
    (tmp_path / "notes.txt").write_text("")

    files = discover_files(tmp_path)
    assert files == sorted([tmp_path / "b.hermes", tmp_path / "sub" / "a.hermes"])


def test_discover_files_custom_suffix(tmp_path: Path) -> None:
    (tmp_path / "one.api").write_text("")
    (tmp_path / "two.hermes").write_text("")
    assert discover_files(tmp_path, ".api") == [tmp_path / "one.api"]


def test_discover_files_skips_directories(tmp_path: Path) -> None:
    (tmp_path / "dir.hermes").mkdir()
    assert discover_files(tmp_path) == []


# ###############
# Loading
# ###############


def test_load_valid_files(tmp_path: Path) -> None:
    good = tmp_path / "good.hermes"
    good.write_text('collection { name "Good" }\nrequest::"r" { url "http://x" }\n')

    result = load_collections([good])
    assert result.ok
    assert result.collections[good].name == "Good"
    assert result.collections[good].request_count() == 1


def test_one_bad_file_does_not_stop_others(tmp_path: Path) -> None:
    """Errors are recorded per file and the remaining files are still parsed."""
    bad = tmp_path / "bad.hermes"
    bad.write_text("collection {\n  name $\n}\n")
    good = tmp_path / "good.hermes"
    good.write_text("request { }\n")

    result = load_collections([bad, good])
    assert not result.ok
    assert list(result.collections) == [good]
    error = result.errors[bad]
    assert error.line == 2
    assert error.column == 8
    assert "$" in error.message


def test_unreadable_file(tmp_path: Path) -> None:
    missing = tmp_path / "missing.hermes"
    result = load_collections([missing])
    assert missing in result.errors
    assert result.errors[missing].line is None
    assert "Cannot read file" in str(result.errors[missing])


def test_undecodable_file_does_not_stop_others(tmp_path: Path) -> None:
    """A file that is not valid UTF-8 is recorded as an error like an unreadable one."""
    bad = tmp_path / "bad.hermes"
    bad.write_bytes(b"collection { name \xff\xfe }")
    good = tmp_path / "good.hermes"
    good.write_text('collection { name "Good" }\n')

    result = load_collections([bad, good])
    assert "Cannot read file" in result.errors[bad].message
    assert result.collections[good].name == "Good"


def test_anonymous_name_length(tmp_path: Path) -> None:
    path = tmp_path / "env.hermes"
    path.write_text("environment { A `1` }\n")
    result = load_collections([path], name_length=5)
    [name] = result.collections[path].environments
    assert len(name) == 5


def test_parse_failure_is_logged(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "broken.hermes"
    path.write_text("}")
    with caplog.at_level(logging.WARNING, logger="hermes.workspace.loader"):
        load_collections([path])
    assert "broken.hermes" in caplog.text


# ###############
# Error Formatting
# ###############


def test_describe_parse_error_has_position() -> None:
    source = "request {\n  }\n}"
    with pytest.raises(UnexpectedTokenError) as exc_info:
        parse(source)
    error = describe_parse_error(source, exc_info.value)
    assert (error.line, error.column) == (3, 1)
    assert str(error).startswith("Line 3, column 1: ")


def test_file_error_without_position() -> None:
    assert str(FileError("boom")) == "boom"
