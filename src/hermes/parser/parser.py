# Copyright 2026 Hermes Contributors
# SPDX-License-Identifier: Apache-2.0

"""Block parser for .hermes files.

Consumes the token stream produced by the scanner and builds a Collection.
Every block is read in three phases: its header (block type, optional
sub-block type and identifier), its body between braces, and the closing
brace. Nested blocks are parsed recursively.

A collection may activate an environment that is only declared further down
the document. Such references are kept pending until the matching environment
block is parsed; names that are never declared are reported on the resulting
Collection instead of raising.
"""

from __future__ import annotations

import enum
import logging
import random
import string
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from hermes.model.collection import BodyKind, Collection, Folder, HttpMethod, Request
from hermes.parser.lexer import Tokenizer
from hermes.parser.tokens import BlockKeyword, FieldKeyword, Token, TokenKind

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class ParseError(Exception):
    """Base class of all errors raised while parsing a .hermes document.

    Attributes:
        token: The offending token, if any.
    """

    def __init__(self, message: str, token: Token | None = None) -> None:
        super().__init__(message)
        self.token = token

    @property
    def offset(self) -> int | None:
        """Character offset of the offending token, or None."""
        return self.token.offset if self.token is not None else None


class IllegalTokenError(ParseError):
    """Raised when the scanner cannot match the input to any token."""

    def __init__(self, token: Token) -> None:
        super().__init__(f"Illegal input {token.value!r}", token)


class UnexpectedTokenError(ParseError):
    """Raised when a token is not valid at the current grammar position."""

    def __init__(self, token: Token, expected: str | None = None) -> None:
        message = f"Unexpected {token.describe()}"
        if expected:
            message += f", expected {expected}"
        super().__init__(message, token)


class UnexpectedEndOfTokensError(ParseError):
    """Raised when the input ends while a block or field is still open."""

    def __init__(self, token: Token | None = None) -> None:
        super().__init__("Unexpected end of input inside an open block", token)


class UnexpectedBlockKeywordError(ParseError):
    """Raised for a block type that is unknown or not allowed where it appears."""

    def __init__(self, token: Token, context: str) -> None:
        super().__init__(f"Unexpected block type {token.value!r} {context}", token)


class UnexpectedFieldKeywordError(ParseError):
    """Raised for a field name that the enclosing block does not accept."""

    def __init__(self, token: Token, block: str) -> None:
        super().__init__(f"Unknown field {token.value!r} in {block} block", token)


NameGenerator = Callable[[], str]

ANONYMOUS_NAME_LENGTH = 12


def random_name(length: int = ANONYMOUS_NAME_LENGTH) -> str:
    """Return a random alphanumeric name for an anonymous environment."""
    return "".join(random.choices(_ALPHANUMERIC, k=length))


def parse(source: str, *, name_generator: NameGenerator | None = None) -> Collection:
    """Parse Hermes source text into a Collection.

    Args:
        source: The full text of a .hermes file.
        name_generator: Produces names for anonymous environment blocks.
            Defaults to :func:`random_name`. It is called again while it
            returns a name that is already taken.

    Returns:
        The parsed Collection.

    Raises:
        ParseError: On the first lexical, structural or keyword error.
    """
    return CollectionParser(Tokenizer(source), name_generator=name_generator).parse()


class BlockState(enum.Enum):
    """Phases of reading a single block."""

    IDLE = "idle"
    READING_HEADER = "reading_header"
    IN_BODY = "in_body"


class CollectionParser:
    """Single-pass block parser over a token stream."""

    def __init__(self, tokenizer: Tokenizer, *, name_generator: NameGenerator | None = None) -> None:
        self._tokens = tokenizer
        self._name_generator = name_generator or random_name
        self._collection = Collection()
        self._resolved: set[str] = set()
        self._pending: dict[str, bool] = {}

    def parse(self) -> Collection:
        """Parse every top-level block and return the Collection."""
        self._collection = Collection()
        self._resolved = set()
        self._pending = {}
        while True:
            tok = self._next()
            if tok.kind == TokenKind.END_OF_INPUT:
                break
            if tok.kind != TokenKind.BLOCK_TYPE:
                raise UnexpectedTokenError(tok, "a block type")
            self._parse_top_level(tok)
        self._report_unresolved()
        return self._collection

    # ------------------------------------------------------------------
    # Token access helpers
    # ------------------------------------------------------------------

    def _next(self) -> Token:
        """Return the next token, raising on illegal input."""
        tok = self._tokens.next()
        if tok.kind == TokenKind.ILLEGAL:
            raise IllegalTokenError(tok)
        return tok

    def _next_in_block(self) -> Token:
        """Return the next token of an open block; end of input is an error."""
        tok = self._next()
        if tok.kind == TokenKind.END_OF_INPUT:
            raise UnexpectedEndOfTokensError(tok)
        return tok

    # ------------------------------------------------------------------
    # Block framing
    # ------------------------------------------------------------------

    def _open_block(self, block_type: Token, *, allow_sub_block_type: bool = False) -> _Block:
        """Read a block header up to and including the opening brace."""
        block = _Block(block_type=block_type, state=BlockState.READING_HEADER)
        logger.debug("Opening %s block at offset %d", block_type.value, block_type.offset)
        while block.state == BlockState.READING_HEADER:
            tok = self._next_in_block()
            if (
                tok.kind == TokenKind.SUB_BLOCK_TYPE
                and allow_sub_block_type
                and block.sub_block_type is None
                and block.identifier is None
            ):
                block.sub_block_type = tok
            elif tok.kind == TokenKind.BLOCK_IDENTIFIER and block.identifier is None:
                block.identifier = tok
            elif tok.kind == TokenKind.LEFT_BRACE:
                block.state = BlockState.IN_BODY
            else:
                raise UnexpectedTokenError(tok, "'{'")
        return block

    def _body(self, block: _Block) -> Iterator[Token]:
        """Yield the field names and nested block types of an open block body.

        Stops after the closing brace.
        """
        while block.state == BlockState.IN_BODY:
            tok = self._next_in_block()
            if tok.kind == TokenKind.RIGHT_BRACE:
                block.state = BlockState.IDLE
            elif tok.kind in (TokenKind.IDENTIFIER, TokenKind.BLOCK_TYPE):
                yield tok
            else:
                raise UnexpectedTokenError(tok, "a field name, a nested block or '}'")

    # ------------------------------------------------------------------
    # Field values
    # ------------------------------------------------------------------

    def _read_value(self) -> str:
        tok = self._next_in_block()
        if tok.kind not in _VALUE_KINDS:
            raise UnexpectedTokenError(tok, "a value")
        return tok.value

    def _read_flag(self) -> bool:
        tok = self._next_in_block()
        if tok.kind != TokenKind.FLAG:
            raise UnexpectedTokenError(tok, "a flag (0 or 1)")
        return _flag_of(tok)

    def _read_entry(self) -> tuple[bool, str]:
        """Read ``[flag] value``; a missing flag means enabled."""
        tok = self._next_in_block()
        enabled = True
        if tok.kind == TokenKind.FLAG:
            enabled = _flag_of(tok)
            tok = self._next_in_block()
        if tok.kind not in _VALUE_KINDS:
            raise UnexpectedTokenError(tok, "a value")
        return enabled, tok.value

    def _read_method(self) -> HttpMethod:
        tok = self._next_in_block()
        if tok.kind not in _VALUE_KINDS:
            raise UnexpectedTokenError(tok, "an HTTP method")
        try:
            return HttpMethod(tok.value.upper())
        except ValueError:
            raise UnexpectedTokenError(tok, "an HTTP method") from None

    def _parse_entries(self, block: _Block) -> dict[str, str]:
        """Parse a body of ``key [flag] value`` lines, dropping disabled ones."""
        entries: dict[str, str] = {}
        for tok in self._body(block):
            if tok.kind == TokenKind.BLOCK_TYPE:
                raise UnexpectedBlockKeywordError(tok, f"inside {block.block_type.value} block")
            enabled, value = self._read_entry()
            if enabled:
                entries[tok.value] = value
        return entries

    # ------------------------------------------------------------------
    # Top-level blocks
    # ------------------------------------------------------------------

    def _parse_top_level(self, tok: Token) -> None:
        if tok.keyword == BlockKeyword.COLLECTION:
            self._parse_collection(tok)
        elif tok.keyword == BlockKeyword.ENVIRONMENT:
            self._parse_environment(tok)
        elif tok.keyword == BlockKeyword.REQUEST:
            self._collection.requests.append(self._parse_request(tok))
        elif tok.keyword == BlockKeyword.FOLDER:
            self._collection.folders.append(self._parse_folder(tok))
        else:
            raise UnexpectedBlockKeywordError(tok, "at top level")

    def _parse_collection(self, block_type: Token) -> None:
        """Parse: collection[::"id"] { name v  include v  environment <flag> v  request/folder blocks }"""
        block = self._open_block(block_type)
        if block.identifier is not None:
            self._collection.identifier = block.identifier.value
        for tok in self._body(block):
            if tok.kind == TokenKind.BLOCK_TYPE:
                if tok.keyword == BlockKeyword.REQUEST:
                    self._collection.requests.append(self._parse_request(tok))
                elif tok.keyword == BlockKeyword.FOLDER:
                    self._collection.folders.append(self._parse_folder(tok))
                else:
                    raise UnexpectedBlockKeywordError(tok, "inside collection block")
            elif tok.keyword == FieldKeyword.NAME:
                self._collection.name = self._read_value()
            elif tok.keyword == FieldKeyword.INCLUDE:
                self._collection.includes.append(self._read_value())
            elif tok.keyword == FieldKeyword.ENVIRONMENT:
                enabled = self._read_flag()
                self._select_environment(self._read_value(), enabled)
            else:
                raise UnexpectedFieldKeywordError(tok, "collection")

    def _parse_environment(self, block_type: Token) -> None:
        """Parse: environment[::"id"] { key [flag] value ... }"""
        block = self._open_block(block_type)
        if block.identifier is not None:
            name = block.identifier.value
        else:
            name = self._name_generator()
            # A generated name never replaces an environment already declared.
            while name in self._collection.environments:
                name = self._name_generator()
            logger.debug("Anonymous environment named %r", name)
        self._collection.environments[name] = self._parse_entries(block)
        self._resolved.add(name)
        if name in self._pending:
            logger.debug("Resolved pending environment reference %r", name)
            self._activate(name, self._pending.pop(name))

    def _parse_request(self, block_type: Token) -> Request:
        """Parse: request[::"id"] { name v  method v  url v  headers/queries/variables/body blocks }"""
        block = self._open_block(block_type)
        identifier = block.identifier.value if block.identifier is not None else None
        request = Request(name=identifier or "", identifier=identifier)
        for tok in self._body(block):
            if tok.kind == TokenKind.BLOCK_TYPE:
                self._parse_request_block(tok, request)
            elif tok.keyword == FieldKeyword.NAME:
                request.name = self._read_value()
            elif tok.keyword == FieldKeyword.METHOD:
                request.method = self._read_method()
            elif tok.keyword == FieldKeyword.URL:
                request.url = self._read_value()
            else:
                raise UnexpectedFieldKeywordError(tok, "request")
        return request

    def _parse_request_block(self, tok: Token, request: Request) -> None:
        if tok.keyword == BlockKeyword.HEADERS:
            request.headers.update(self._parse_entries(self._open_block(tok)))
        elif tok.keyword == BlockKeyword.QUERIES:
            request.queries.update(self._parse_entries(self._open_block(tok)))
        elif tok.keyword == BlockKeyword.VARIABLES:
            request.variables.update(self._parse_entries(self._open_block(tok)))
        elif tok.keyword == BlockKeyword.BODY:
            self._parse_body(tok, request)
        else:
            raise UnexpectedBlockKeywordError(tok, "inside request block")

    def _parse_body(self, block_type: Token, request: Request) -> None:
        """Parse: body[.kind] { value } or, for form kinds, body.kind { key [flag] value ... }"""
        block = self._open_block(block_type, allow_sub_block_type=True)
        kind: BodyKind | None = None
        if block.sub_block_type is not None:
            sub = block.sub_block_type
            if sub.keyword is None:
                raise UnexpectedTokenError(sub, "json, text, form-urlencoded or multipart-form")
            kind = BodyKind(sub.keyword.value)
        request.body_kind = kind
        if kind in _FORM_BODIES:
            request.form.update(self._parse_entries(block))
            return
        tok = self._next_in_block()
        if tok.kind == TokenKind.RIGHT_BRACE:
            block.state = BlockState.IDLE
            return
        if tok.kind not in _VALUE_KINDS:
            raise UnexpectedTokenError(tok, "a body value or '}'")
        request.body = tok.value
        closing = self._next_in_block()
        if closing.kind != TokenKind.RIGHT_BRACE:
            raise UnexpectedTokenError(closing, "'}'")
        block.state = BlockState.IDLE

    def _parse_folder(self, block_type: Token) -> Folder:
        """Parse: folder[::"id"] { name v  request/folder/variables blocks }"""
        block = self._open_block(block_type)
        identifier = block.identifier.value if block.identifier is not None else None
        folder = Folder(name=identifier or "", identifier=identifier)
        for tok in self._body(block):
            if tok.kind == TokenKind.BLOCK_TYPE:
                if tok.keyword == BlockKeyword.REQUEST:
                    folder.requests.append(self._parse_request(tok))
                elif tok.keyword == BlockKeyword.FOLDER:
                    folder.folders.append(self._parse_folder(tok))
                elif tok.keyword == BlockKeyword.VARIABLES:
                    folder.variables.update(self._parse_entries(self._open_block(tok)))
                else:
                    raise UnexpectedBlockKeywordError(tok, "inside folder block")
            elif tok.keyword == FieldKeyword.NAME:
                folder.name = self._read_value()
            else:
                raise UnexpectedFieldKeywordError(tok, "folder")
        return folder

    # ------------------------------------------------------------------
    # Environment activation
    # ------------------------------------------------------------------

    def _select_environment(self, name: str, enabled: bool) -> None:
        """Apply an activation now if *name* is declared, otherwise defer it."""
        if name in self._resolved:
            self._activate(name, enabled)
        else:
            logger.debug("Environment %r referenced before its declaration", name)
            self._pending[name] = enabled

    def _activate(self, name: str, enabled: bool) -> None:
        self._collection.active_environment = name
        self._collection.environment_active = enabled

    def _report_unresolved(self) -> None:
        if not self._pending:
            return
        unresolved = sorted(self._pending)
        logger.warning("Environment(s) referenced but never declared: %s", ", ".join(unresolved))
        self._collection.unresolved_environments = unresolved


# ################
# Implementation
# ################

_ALPHANUMERIC = string.ascii_letters + string.digits

_VALUE_KINDS = frozenset({TokenKind.IDENTIFIER, TokenKind.BLOCK_IDENTIFIER, TokenKind.STRING_VALUE})

_FORM_BODIES = frozenset({BodyKind.FORM_URLENCODED, BodyKind.MULTIPART_FORM})


@dataclass
class _Block:
    """Header tokens and reading phase of the block being parsed."""

    block_type: Token
    state: BlockState = BlockState.IDLE
    sub_block_type: Token | None = None
    identifier: Token | None = None


def _flag_of(tok: Token) -> bool:
    try:
        return tok.flag
    except ValueError:
        raise UnexpectedTokenError(tok, "a flag (0 or 1)") from None
