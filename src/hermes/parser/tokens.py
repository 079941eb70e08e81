# Copyright 2026 Hermes Contributors
# SPDX-License-Identifier: Apache-2.0

"""Token types produced by the .hermes scanner."""

import enum
from dataclasses import dataclass

# ###############
# Public Interface
# ###############


class TokenKind(enum.Enum):
    """All token kinds produced by the Hermes scanner."""

    BLOCK_TYPE = "block type"
    SUB_BLOCK_TYPE = "sub-block type"
    BLOCK_IDENTIFIER = "block identifier"
    IDENTIFIER = "identifier"
    FLAG = "flag"
    STRING_VALUE = "string"
    LEFT_BRACE = "{"
    RIGHT_BRACE = "}"
    END_OF_INPUT = "end of input"
    ILLEGAL = "illegal"


class BlockKeyword(enum.Enum):
    """Recognized block-type keywords."""

    COLLECTION = "collection"
    ENVIRONMENT = "environment"
    REQUEST = "request"
    FOLDER = "folder"
    HEADERS = "headers"
    QUERIES = "queries"
    BODY = "body"
    VARIABLES = "variables"


class SubBlockKeyword(enum.Enum):
    """Recognized sub-block-type qualifiers (used on body blocks)."""

    JSON = "json"
    TEXT = "text"
    FORM_URLENCODED = "form-urlencoded"
    MULTIPART_FORM = "multipart-form"


class FieldKeyword(enum.Enum):
    """Reserved field names of the collection, request and folder blocks."""

    NAME = "name"
    INCLUDE = "include"
    ENVIRONMENT = "environment"
    METHOD = "method"
    URL = "url"


Keyword = BlockKeyword | SubBlockKeyword | FieldKeyword


@dataclass(frozen=True)
class Token:
    """A lexical token.

    Attributes:
        kind: The kind of token.
        value: The token text with structural delimiters removed. For string
            values escape backslashes are removed as well; for illegal tokens
            this is the offending literal.
        offset: Character offset of the first character of the token.
        keyword: The decoded keyword for block types, sub-block types and
            identifiers, or None if the text is not a recognized keyword.
    """

    kind: TokenKind
    value: str = ""
    offset: int = 0
    keyword: Keyword | None = None

    @property
    def flag(self) -> bool:
        """Return the boolean meaning of a flag token.

        Raises:
            ValueError: If the token is not a flag or its digit is not 0 or 1.
        """
        if self.kind != TokenKind.FLAG or self.value not in _FLAG_VALUES:
            raise ValueError(f"Not a valid flag: {self.value!r}")
        return _FLAG_VALUES[self.value]

    def describe(self) -> str:
        """Return a short human-readable description used in error messages."""
        if self.kind == TokenKind.END_OF_INPUT:
            return "end of input"
        if self.kind in (TokenKind.LEFT_BRACE, TokenKind.RIGHT_BRACE):
            return repr(self.kind.value)
        return f"{self.kind.value} {self.value!r}"


def decode_keyword(kind: TokenKind, text: str) -> Keyword | None:
    """Map raw token text to its keyword, if the token kind carries one."""
    table = _KEYWORD_TABLES.get(kind)
    if table is None:
        return None
    return table.get(text)


# ################
# Implementation
# ################

_FLAG_VALUES: dict[str, bool] = {"0": False, "1": True}

_KEYWORD_TABLES: dict[TokenKind, dict[str, Keyword]] = {
    TokenKind.BLOCK_TYPE: {kw.value: kw for kw in BlockKeyword},
    TokenKind.SUB_BLOCK_TYPE: {kw.value: kw for kw in SubBlockKeyword},
    TokenKind.IDENTIFIER: {kw.value: kw for kw in FieldKeyword},
}
