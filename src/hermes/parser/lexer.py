# Copyright 2026 Hermes Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner for .hermes files.

The scanner walks the source one character at a time, classifying each
character and feeding it through the transition table until a terminal state
marks a token boundary.
"""

from collections.abc import Iterator

from hermes.parser.classifier import InputClass, classify
from hermes.parser.tokens import Token, TokenKind, decode_keyword
from hermes.parser.transitions import TRANSITION_TABLE, LexerState, TransitionTable, is_transitional

# ###############
# Public Interface
# ###############


class Tokenizer:
    """Lazy token stream over a single source document.

    Call :meth:`next` repeatedly; once the input is exhausted every further
    call returns an ``END_OF_INPUT`` token. Iterating the tokenizer yields
    tokens up to and including the first ``END_OF_INPUT`` or ``ILLEGAL``
    token. The stream cannot be restarted.
    """

    def __init__(self, source: str, table: TransitionTable = TRANSITION_TABLE) -> None:
        self._source = source
        self._table = table
        self._pos = 0
        self._start = 0
        self._finished = False

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        if self._finished:
            raise StopIteration
        token = self.next()
        if token.kind in (TokenKind.END_OF_INPUT, TokenKind.ILLEGAL):
            self._finished = True
        return token

    def next(self) -> Token:
        """Scan and return the next token."""
        while True:
            self._skip_whitespace()
            self._start = self._pos
            input_class = classify(self._current())
            state = self._table[(LexerState.START, input_class)]
            while is_transitional(state):
                self._advance()
                input_class = classify(self._current())
                state = self._table[(state, input_class)]
            if state in _CONSUMING_STATES:
                self._advance()
            if state == LexerState.END_COMMENT:
                continue
            return self._make_token(state, input_class)

    # ------------------------------------------------------------------
    # Low-level character access helpers
    # ------------------------------------------------------------------

    def _current(self) -> str:
        """Return the character at the current position, or '' at end of input."""
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _advance(self) -> None:
        """Move past the current character; a no-op at end of input."""
        if self._pos < len(self._source):
            self._pos += 1

    def _skip_whitespace(self) -> None:
        while classify(self._current()) in _BLANK:
            self._advance()

    def _next_significant(self) -> str:
        """Return the next character that is not blank or inside a comment.

        Does not move the scanner.
        """
        pos = self._pos
        in_comment = False
        while pos < len(self._source):
            ch = self._source[pos]
            if in_comment:
                in_comment = ch != "\n"
            elif ch == "#":
                in_comment = True
            elif classify(ch) not in _BLANK:
                return ch
            pos += 1
        return ""

    # ------------------------------------------------------------------
    # Token construction
    # ------------------------------------------------------------------

    def _make_token(self, state: LexerState, input_class: InputClass) -> Token:
        """Build the token for the literal spanning [start, current)."""
        literal = self._source[self._start : self._pos]
        offset = self._start

        if state == LexerState.END_OF_INPUT:
            return Token(TokenKind.END_OF_INPUT, "", offset)
        if state == LexerState.END_DELIMITER:
            kind = TokenKind.LEFT_BRACE if literal == "{" else TokenKind.RIGHT_BRACE
            return Token(kind, literal, offset)
        if state == LexerState.END_DIGIT:
            return Token(TokenKind.FLAG, literal, offset)
        if state == LexerState.END_IDENTIFIER:
            # A word opens a block when a sub-block type, selector or body follows it.
            kind = TokenKind.BLOCK_TYPE if self._next_significant() in _BLOCK_FOLLOWERS else TokenKind.IDENTIFIER
            return Token(kind, literal, offset, decode_keyword(kind, literal))
        if state == LexerState.END_SUB_BLOCK_TYPE:
            value = literal[1:]
            return Token(
                TokenKind.SUB_BLOCK_TYPE,
                value,
                offset,
                decode_keyword(TokenKind.SUB_BLOCK_TYPE, value),
            )
        if state == LexerState.END_SPECIAL_IDENTIFIER:
            value = literal.removeprefix("::")[1:]
            if input_class == InputClass.DOUBLE_QUOTE:
                value = value[:-1]
            return Token(TokenKind.BLOCK_IDENTIFIER, value, offset)
        if state == LexerState.END_STRING:
            value = literal[1:]
            if input_class == InputClass.BACKTICK:
                value = value[:-1]
            return Token(TokenKind.STRING_VALUE, _unescape(value), offset)
        return Token(TokenKind.ILLEGAL, literal, offset)


def tokenize(source: str) -> list[Token]:
    """Tokenize a .hermes document.

    Args:
        source: The full text of a .hermes file.

    Returns:
        All tokens of the document. The final token is either the
        ``END_OF_INPUT`` token or the first ``ILLEGAL`` token.
    """
    return list(Tokenizer(source))


# ################
# Implementation
# ################

_BLANK = frozenset({InputClass.WHITESPACE, InputClass.NEWLINE})

_BLOCK_FOLLOWERS = frozenset({"{", ".", ":"})

# Terminal states reached on the last character of their own token. The
# identifier and sub-block-type terminals are reached on the character after
# the token, which is left for the next scan.
_CONSUMING_STATES = frozenset(
    {
        LexerState.END_DIGIT,
        LexerState.END_DELIMITER,
        LexerState.END_SPECIAL_IDENTIFIER,
        LexerState.END_STRING,
        LexerState.END_COMMENT,
        LexerState.ERROR,
    }
)


def _unescape(text: str) -> str:
    """Drop escape backslashes; each one keeps the character that follows it."""
    chars: list[str] = []
    escaped = False
    for ch in text:
        if escaped:
            chars.append(ch)
            escaped = False
        elif ch == "\\":
            escaped = True
        else:
            chars.append(ch)
    return "".join(chars)
