"""MiniSQL Lexer - Converts SQL text into a token stream.

The lexer classifies keywords, identifiers, integer/string/boolean literals,
operators and punctuation, skipping whitespace and ``--`` comments. Tokens are
produced lazily; iterating a ``Lexer`` twice yields the same sequence.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import string
from dataclasses import dataclass
from enum import Enum, auto
from types import MappingProxyType
from typing import Iterator, List, Union

from minisql_core.errors import InvalidCharacter, Position, UnterminatedString

logger = logging.getLogger(__name__)


# =============================================================================
# Token Types
# =============================================================================


class TokenKind(Enum):
    """Lexical token categories."""

    KEYWORD = auto()
    IDENTIFIER = auto()
    INTEGER = auto()
    STRING = auto()
    BOOLEAN = auto()
    OPERATOR = auto()
    PUNCTUATION = auto()
    EOF = auto()


@dataclass(frozen=True)
class Token:
    """Lexical token.

    ``value`` is normalized per kind: the upper-cased name for keywords, an
    ``int`` for integers, a ``bool`` for booleans, the unquoted body for
    strings and the symbol itself for operators and punctuation. ``text`` is
    the raw span as it appeared in the input.
    """

    kind: TokenKind
    value: Union[str, int, bool, None]
    text: str
    position: Position

    def is_keyword(self, *names: str) -> bool:
        return self.kind is TokenKind.KEYWORD and self.value in names

    def is_symbol(self, *symbols: str) -> bool:
        return self.kind in (TokenKind.OPERATOR, TokenKind.PUNCTUATION) and self.value in symbols

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.value!r})"


KEYWORDS = frozenset({
    "SELECT", "FROM", "WHERE", "ORDER", "BY", "ASC", "DESC",
    "CREATE", "TABLE", "INT", "VARCHAR", "BOOL",
    "PRIMARY", "KEY", "NOT", "NULL", "CHECK",
    "AND", "OR",
})

BOOLEANS = MappingProxyType({"TRUE": True, "FALSE": False})

TWO_CHAR_OPERATORS = frozenset({"!=", ">=", "<="})
SINGLE_CHAR_OPERATORS = frozenset({"+", "-", "*", "/", "=", ">", "<"})
PUNCTUATION = frozenset({"(", ")", ",", ";"})

# ASCII only: words and numbers never contain other Unicode letters or digits.
DIGITS = frozenset(string.digits)
WORD_START = frozenset(string.ascii_letters + "_")
WORD_CHARS = frozenset(string.ascii_letters + string.digits + "_")


# =============================================================================
# Lexer
# =============================================================================


class Lexer:
    """SQL lexer (tokenizer)."""

    def __init__(self, sql: str):
        """Initialize lexer.

        Args:
            sql: SQL string to tokenize
        """
        self.sql = sql

    def __iter__(self) -> Iterator[Token]:
        return _Scanner(self.sql).scan()

    def tokenize(self) -> List[Token]:
        """Tokenize the SQL string.

        Returns:
            List of tokens, ending with a single EOF token
        """
        tokens = list(self)
        logger.debug(f"Tokenized {len(self.sql)} characters into {len(tokens)} tokens")
        return tokens


class _Scanner:
    """Single-use cursor over the input; one per iteration."""

    def __init__(self, sql: str):
        self.sql = sql
        self.pos = 0
        self.line = 1
        self.column = 1

    def scan(self) -> Iterator[Token]:
        while True:
            self._skip_trivia()
            if self.pos >= len(self.sql):
                yield Token(TokenKind.EOF, None, "", self._position())
                return
            yield self._next_token()

    def _position(self) -> Position:
        return Position(self.pos, self.line, self.column)

    def _peek(self, offset: int = 0) -> str:
        """Peek at character at offset."""
        pos = self.pos + offset
        if pos < len(self.sql):
            return self.sql[pos]
        return ""

    def _advance(self) -> str:
        char = self.sql[self.pos]
        self.pos += 1
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return char

    def _skip_trivia(self) -> None:
        """Skip whitespace and ``--`` comments."""
        while self.pos < len(self.sql):
            char = self.sql[self.pos]
            if char.isspace():
                self._advance()
            elif char == "-" and self._peek(1) == "-":
                while self.pos < len(self.sql) and self.sql[self.pos] != "\n":
                    self._advance()
            else:
                break

    def _next_token(self) -> Token:
        start = self._position()
        char = self.sql[self.pos]

        if char in ("'", '"'):
            return self._read_string(char, start)

        if char in DIGITS:
            return self._read_integer(start)

        if char in WORD_START:
            return self._read_word(start)

        return self._read_symbol(start)

    def _read_string(self, quote: str, start: Position) -> Token:
        """Read a string literal delimited by ``quote``."""
        self._advance()
        body_start = self.pos

        while self.pos < len(self.sql):
            if self.sql[self.pos] == quote:
                value = self.sql[body_start:self.pos]
                self._advance()
                return Token(TokenKind.STRING, value, self.sql[start.offset:self.pos], start)
            self._advance()

        raise UnterminatedString(self._position())

    def _read_integer(self, start: Position) -> Token:
        """Read a maximal run of digits."""
        while self.pos < len(self.sql) and self.sql[self.pos] in DIGITS:
            self._advance()

        text = self.sql[start.offset:self.pos]
        return Token(TokenKind.INTEGER, int(text), text, start)

    def _read_word(self, start: Position) -> Token:
        """Read an identifier, keyword or boolean literal."""
        while self.pos < len(self.sql):
            char = self.sql[self.pos]
            if char in WORD_CHARS:
                self._advance()
            else:
                break

        text = self.sql[start.offset:self.pos]
        upper = text.upper()
        if upper in BOOLEANS:
            return Token(TokenKind.BOOLEAN, BOOLEANS[upper], text, start)
        if upper in KEYWORDS:
            return Token(TokenKind.KEYWORD, upper, text, start)
        return Token(TokenKind.IDENTIFIER, text, text, start)

    def _read_symbol(self, start: Position) -> Token:
        """Read an operator or punctuation."""
        char = self.sql[self.pos]
        two_char = char + self._peek(1)

        if two_char in TWO_CHAR_OPERATORS:
            self._advance()
            self._advance()
            return Token(TokenKind.OPERATOR, two_char, two_char, start)

        if char in SINGLE_CHAR_OPERATORS:
            self._advance()
            return Token(TokenKind.OPERATOR, char, char, start)

        if char in PUNCTUATION:
            self._advance()
            return Token(TokenKind.PUNCTUATION, char, char, start)

        raise InvalidCharacter(char, start)


__all__ = [
    "Lexer",
    "Token",
    "TokenKind",
    "KEYWORDS",
]
