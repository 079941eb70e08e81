# Copyright 2026 Hermes Contributors
# SPDX-License-Identifier: Apache-2.0

"""Finite-state transition table driving the .hermes scanner.

The table maps a ``(LexerState, InputClass)`` pair to the next state. States
are split into *transitional* states, in which the scanner keeps consuming
characters, and *terminal* states, which mark a token boundary. The table is
built once at import time and exposed read-only as :data:`TRANSITION_TABLE`.

Each transitional state has a row covering every input class, so the scanner
never needs a fallback lookup.
"""

import enum
from collections.abc import Mapping
from types import MappingProxyType

from hermes.parser.classifier import InputClass

# ###############
# Public Interface
# ###############


class LexerState(enum.Enum):
    """All scanner states."""

    # Transitional
    START = "start"
    READ_IDENTIFIER = "read_identifier"
    READ_SUB_BLOCK_TYPE = "read_sub_block_type"
    READ_SELECTOR = "read_selector"
    READ_SELECTOR_END = "read_selector_end"
    READ_SPECIAL_IDENTIFIER = "read_special_identifier"
    READ_STRING = "read_string"
    READ_ESCAPED_CHARACTER = "read_escaped_character"
    READ_COMMENT = "read_comment"

    # Terminal
    END_IDENTIFIER = "end_identifier"
    END_SUB_BLOCK_TYPE = "end_sub_block_type"
    END_SPECIAL_IDENTIFIER = "end_special_identifier"
    END_DIGIT = "end_digit"
    END_STRING = "end_string"
    END_DELIMITER = "end_delimiter"
    END_COMMENT = "end_comment"
    END_OF_INPUT = "end_of_input"
    ERROR = "error"


TRANSITIONAL_STATES: frozenset[LexerState] = frozenset(
    {
        LexerState.START,
        LexerState.READ_IDENTIFIER,
        LexerState.READ_SUB_BLOCK_TYPE,
        LexerState.READ_SELECTOR,
        LexerState.READ_SELECTOR_END,
        LexerState.READ_SPECIAL_IDENTIFIER,
        LexerState.READ_STRING,
        LexerState.READ_ESCAPED_CHARACTER,
        LexerState.READ_COMMENT,
    }
)

TERMINAL_STATES: frozenset[LexerState] = frozenset(set(LexerState) - TRANSITIONAL_STATES)

TransitionTable = Mapping[tuple[LexerState, InputClass], LexerState]


def is_transitional(state: LexerState) -> bool:
    """Return True if the scanner keeps reading characters in *state*."""
    return state in TRANSITIONAL_STATES


def build_transition_table() -> TransitionTable:
    """Build the complete transition table.

    Returns:
        A read-only mapping from ``(state, input_class)`` to the next state.
    """
    table: dict[tuple[LexerState, InputClass], LexerState] = {}
    _insert_start_states(table)
    _insert_identifier_states(table)
    _insert_sub_block_type_states(table)
    _insert_selector_states(table)
    _insert_special_identifier_states(table)
    _insert_string_states(table)
    _insert_comment_states(table)
    return MappingProxyType(table)


# ################
# Implementation
# ################


def _insert_row(
    table: dict[tuple[LexerState, InputClass], LexerState],
    state: LexerState,
    default: LexerState,
    overrides: dict[InputClass, LexerState],
) -> None:
    """Fill every input class of *state*, using *default* unless overridden."""
    for input_class in InputClass:
        table[(state, input_class)] = overrides.get(input_class, default)


def _insert_start_states(table: dict[tuple[LexerState, InputClass], LexerState]) -> None:
    _insert_row(
        table,
        LexerState.START,
        LexerState.ERROR,
        {
            InputClass.LETTER: LexerState.READ_IDENTIFIER,
            InputClass.UNDERSCORE: LexerState.READ_IDENTIFIER,
            InputClass.DIGIT: LexerState.END_DIGIT,
            InputClass.WHITESPACE: LexerState.START,
            InputClass.NEWLINE: LexerState.START,
            InputClass.DOUBLE_QUOTE: LexerState.READ_SPECIAL_IDENTIFIER,
            InputClass.BACKTICK: LexerState.READ_STRING,
            InputClass.DOT: LexerState.READ_SUB_BLOCK_TYPE,
            InputClass.COLON: LexerState.READ_SELECTOR,
            InputClass.HASH: LexerState.READ_COMMENT,
            InputClass.LEFT_BRACE: LexerState.END_DELIMITER,
            InputClass.RIGHT_BRACE: LexerState.END_DELIMITER,
            InputClass.END_OF_INPUT: LexerState.END_OF_INPUT,
        },
    )


def _insert_identifier_states(table: dict[tuple[LexerState, InputClass], LexerState]) -> None:
    # Letters, digits and underscores continue a word; any other structural
    # character ends it without being consumed.
    _insert_row(
        table,
        LexerState.READ_IDENTIFIER,
        LexerState.END_IDENTIFIER,
        {
            InputClass.LETTER: LexerState.READ_IDENTIFIER,
            InputClass.UNDERSCORE: LexerState.READ_IDENTIFIER,
            InputClass.DIGIT: LexerState.READ_IDENTIFIER,
            InputClass.BACKSLASH: LexerState.ERROR,
            InputClass.OTHER: LexerState.ERROR,
        },
    )


def _insert_sub_block_type_states(table: dict[tuple[LexerState, InputClass], LexerState]) -> None:
    _insert_row(
        table,
        LexerState.READ_SUB_BLOCK_TYPE,
        LexerState.END_SUB_BLOCK_TYPE,
        {
            InputClass.LETTER: LexerState.READ_SUB_BLOCK_TYPE,
            InputClass.UNDERSCORE: LexerState.READ_SUB_BLOCK_TYPE,
            InputClass.DIGIT: LexerState.READ_SUB_BLOCK_TYPE,
            InputClass.BACKSLASH: LexerState.ERROR,
            InputClass.OTHER: LexerState.ERROR,
        },
    )


def _insert_selector_states(table: dict[tuple[LexerState, InputClass], LexerState]) -> None:
    # "::" must be followed directly by a double-quoted block identifier.
    _insert_row(
        table,
        LexerState.READ_SELECTOR,
        LexerState.ERROR,
        {InputClass.COLON: LexerState.READ_SELECTOR_END},
    )
    _insert_row(
        table,
        LexerState.READ_SELECTOR_END,
        LexerState.ERROR,
        {InputClass.DOUBLE_QUOTE: LexerState.READ_SPECIAL_IDENTIFIER},
    )


def _insert_special_identifier_states(table: dict[tuple[LexerState, InputClass], LexerState]) -> None:
    _insert_row(
        table,
        LexerState.READ_SPECIAL_IDENTIFIER,
        LexerState.READ_SPECIAL_IDENTIFIER,
        {
            InputClass.DOUBLE_QUOTE: LexerState.END_SPECIAL_IDENTIFIER,
            InputClass.END_OF_INPUT: LexerState.END_SPECIAL_IDENTIFIER,
        },
    )


def _insert_string_states(table: dict[tuple[LexerState, InputClass], LexerState]) -> None:
    _insert_row(
        table,
        LexerState.READ_STRING,
        LexerState.READ_STRING,
        {
            InputClass.BACKTICK: LexerState.END_STRING,
            InputClass.BACKSLASH: LexerState.READ_ESCAPED_CHARACTER,
            InputClass.END_OF_INPUT: LexerState.END_STRING,
        },
    )
    _insert_row(
        table,
        LexerState.READ_ESCAPED_CHARACTER,
        LexerState.READ_STRING,
        {InputClass.END_OF_INPUT: LexerState.END_STRING},
    )


def _insert_comment_states(table: dict[tuple[LexerState, InputClass], LexerState]) -> None:
    _insert_row(
        table,
        LexerState.READ_COMMENT,
        LexerState.READ_COMMENT,
        {
            InputClass.NEWLINE: LexerState.END_COMMENT,
            InputClass.END_OF_INPUT: LexerState.END_COMMENT,
        },
    )


TRANSITION_TABLE: TransitionTable = build_transition_table()
