# Copyright 2026 Hermes Contributors
# SPDX-License-Identifier: Apache-2.0

"""Character classification for the .hermes scanner.

Every character of a source document maps to exactly one input class. The
classes are the column labels of the transition table.
"""

import enum

# ###############
# Public Interface
# ###############


class InputClass(enum.Enum):
    """Closed set of character categories consumed by the transition table."""

    LETTER = "letter"
    UNDERSCORE = "underscore"
    DIGIT = "digit"
    WHITESPACE = "whitespace"
    NEWLINE = "newline"
    DOUBLE_QUOTE = "double_quote"
    BACKTICK = "backtick"
    BACKSLASH = "backslash"
    DOT = "dot"
    COLON = "colon"
    HASH = "hash"
    LEFT_BRACE = "left_brace"
    RIGHT_BRACE = "right_brace"
    END_OF_INPUT = "end_of_input"
    OTHER = "other"


def classify(ch: str) -> InputClass:
    """Return the input class of a single character.

    The empty string stands for end of input. Any whitespace character other
    than a newline is WHITESPACE.
    """
    if ch == "":
        return InputClass.END_OF_INPUT
    if ch in _LETTERS:
        return InputClass.LETTER
    if ch in _DIGITS:
        return InputClass.DIGIT
    input_class = _PUNCTUATION.get(ch, InputClass.OTHER)
    if input_class == InputClass.OTHER and ch.isspace():
        # Form feeds, vertical tabs and Unicode spaces separate tokens like a space.
        return InputClass.WHITESPACE
    return input_class


# ################
# Implementation
# ################

_LETTERS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ-")
_DIGITS = frozenset("0123456789")

_PUNCTUATION: dict[str, InputClass] = {
    "_": InputClass.UNDERSCORE,
    " ": InputClass.WHITESPACE,
    "\t": InputClass.WHITESPACE,
    "\r": InputClass.WHITESPACE,
    "\n": InputClass.NEWLINE,
    '"': InputClass.DOUBLE_QUOTE,
    "`": InputClass.BACKTICK,
    "\\": InputClass.BACKSLASH,
    ".": InputClass.DOT,
    ":": InputClass.COLON,
    "#": InputClass.HASH,
    "{": InputClass.LEFT_BRACE,
    "}": InputClass.RIGHT_BRACE,
}
