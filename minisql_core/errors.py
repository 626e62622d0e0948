"""MiniSQL Errors - Lexical and syntactic error taxonomy.

Every failure raised while lexing or parsing derives from ``ParseError`` and
carries a human-readable message plus, where one is known, the source
``Position`` of the offending input.

Hierarchy:
    ParseError
    ├── LexError
    │   ├── InvalidCharacter
    │   └── UnterminatedString
    ├── UnexpectedToken
    ├── UnmatchedParenthesis
    ├── MissingClause
    ├── InvalidTypeArgument
    ├── InvalidConstraint
    ├── UnsupportedStatement
    └── ExpressionTooDeep

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, FrozenSet, Iterable, Optional

if TYPE_CHECKING:
    from minisql_core.query.lexer import Token


@dataclass(frozen=True)
class Position:
    """Location in the source text."""

    offset: int
    line: int
    column: int

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"


class ParseError(Exception):
    """Base class for all SQL lexing and parsing errors."""

    def __init__(self, message: str, position: Optional[Position] = None):
        self.message = message
        self.position = position
        if position is not None:
            super().__init__(f"{message} at {position}")
        else:
            super().__init__(message)


# =============================================================================
# Lexical errors
# =============================================================================


class LexError(ParseError):
    """Raised when the input text cannot be split into tokens."""


class InvalidCharacter(LexError):
    """A character matches no token rule."""

    def __init__(self, char: str, position: Position):
        self.char = char
        super().__init__(f"Invalid character {char!r}", position)


class UnterminatedString(LexError):
    """A string literal reached end of input before its closing quote."""

    def __init__(self, position: Position):
        super().__init__("Unterminated string literal", position)


# =============================================================================
# Syntactic errors
# =============================================================================


def _describe(token: Token) -> str:
    if token.kind.name == "EOF":
        return "end of input"
    return repr(token.text)


class UnexpectedToken(ParseError):
    """A token did not match any production accepted at its position."""

    def __init__(self, expected: Iterable[str], found: Token):
        self.expected: FrozenSet[str] = frozenset(expected)
        self.found = found
        choices = ", ".join(sorted(self.expected))
        super().__init__(f"Expected one of [{choices}], got {_describe(found)}", found.position)


class UnmatchedParenthesis(ParseError):
    """An opening parenthesis has no matching ``)``."""

    def __init__(self, position: Position):
        super().__init__("Unmatched parenthesis", position)


class MissingClause(ParseError):
    """A required keyword or clause is absent."""

    def __init__(self, name: str, found: Token):
        self.name = name
        self.found = found
        super().__init__(f"Missing {name}, got {_describe(found)}", found.position)


class InvalidTypeArgument(ParseError):
    """A VARCHAR length argument is missing or malformed."""

    def __init__(self, reason: str, found: Token):
        self.reason = reason
        self.found = found
        super().__init__(f"Invalid type argument: {reason}", found.position)


class InvalidConstraint(ParseError):
    """A column constraint is malformed."""

    def __init__(self, reason: str, found: Token):
        self.reason = reason
        self.found = found
        super().__init__(f"Invalid constraint: {reason}", found.position)


class UnsupportedStatement(ParseError):
    """The statement does not start with a supported keyword."""

    def __init__(self, leading_token: Token):
        self.leading_token = leading_token
        super().__init__(f"Unsupported statement starting with {_describe(leading_token)}", leading_token.position)


class ExpressionTooDeep(ParseError):
    """Expression nesting exceeded the configured depth limit."""

    def __init__(self, limit: int, found: Token):
        self.limit = limit
        self.found = found
        super().__init__(f"Expression nesting exceeds {limit} levels", found.position)


__all__ = [
    "Position",
    "ParseError",
    "LexError",
    "InvalidCharacter",
    "UnterminatedString",
    "UnexpectedToken",
    "UnmatchedParenthesis",
    "MissingClause",
    "InvalidTypeArgument",
    "InvalidConstraint",
    "UnsupportedStatement",
    "ExpressionTooDeep",
]
