# Copyright 2026 Hermes Contributors
# SPDX-License-Identifier: Apache-2.0

"""Scanner and block parser for .hermes files."""

from hermes.parser.classifier import InputClass, classify
from hermes.parser.lexer import Tokenizer, tokenize
from hermes.parser.location import LineIndex, location
from hermes.parser.parser import (
    CollectionParser,
    IllegalTokenError,
    ParseError,
    UnexpectedBlockKeywordError,
    UnexpectedEndOfTokensError,
    UnexpectedFieldKeywordError,
    UnexpectedTokenError,
    parse,
    random_name,
)
from hermes.parser.tokens import BlockKeyword, FieldKeyword, SubBlockKeyword, Token, TokenKind
from hermes.parser.transitions import TRANSITION_TABLE, LexerState, build_transition_table, is_transitional

__all__ = [
    "BlockKeyword",
    "CollectionParser",
    "FieldKeyword",
    "IllegalTokenError",
    "InputClass",
    "LexerState",
    "LineIndex",
    "ParseError",
    "SubBlockKeyword",
    "TRANSITION_TABLE",
    "Token",
    "TokenKind",
    "Tokenizer",
    "UnexpectedBlockKeywordError",
    "UnexpectedEndOfTokensError",
    "UnexpectedFieldKeywordError",
    "UnexpectedTokenError",
    "build_transition_table",
    "classify",
    "is_transitional",
    "location",
    "parse",
    "random_name",
    "tokenize",
]
