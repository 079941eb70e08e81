# Copyright 2026 Hermes Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for offset to line/column translation."""

from hermes.parser.lexer import tokenize
from hermes.parser.location import LineIndex, location


def test_first_character() -> None:
    assert location("abc", 0) == (1, 1)


def test_same_line() -> None:
    assert location("abc def", 4) == (1, 5)


def test_after_newline() -> None:
    """The character right after a newline starts a new line at column 1."""
    assert location("ab\ncd", 3) == (2, 1)
    assert location("ab\ncd", 4) == (2, 2)


def test_newline_itself_belongs_to_its_line() -> None:
    assert location("ab\ncd", 2) == (1, 3)


def test_end_of_source() -> None:
    assert location("ab\n", 3) == (2, 1)


def test_offset_is_clamped() -> None:
    assert location("ab", 99) == (1, 3)
    assert location("ab", -5) == (1, 1)


def test_empty_source() -> None:
    assert location("", 0) == (1, 1)


def test_token_positions() -> None:
    """Token offsets map to the line and column where each token starts."""
    source = 'request {\n  url "x"\n}'
    positions = [location(source, tok.offset) for tok in tokenize(source)]
    assert positions == [(1, 1), (1, 9), (2, 3), (2, 7), (3, 1), (3, 2)]


def test_line_index_matches_location() -> None:
    """A LineIndex answers every offset exactly like location()."""
    source = "collection {\n\n  name `a\nb`\n}\n"
    index = LineIndex(source)
    for offset in range(-2, len(source) + 3):
        assert index.location(offset) == location(source, offset)


def test_line_index_empty_source() -> None:
    assert LineIndex("").location(0) == (1, 1)
