"""MiniSQL - Parser for a small SQL dialect.

MiniSQL turns the text of one SQL statement into an immutable syntax tree:
- SELECT with FROM, WHERE and ORDER BY
- CREATE TABLE with INT / VARCHAR(n) / BOOL columns and
  PRIMARY KEY, NOT NULL and CHECK constraints

Architecture:
    ┌─────────────────────────────────────────────────────────────────┐
    │                          MiniSQL Core                          │
    ├─────────────────────────────────────────────────────────────────┤
    │  ┌─────────────┐  ┌─────────────┐  ┌─────────────┐             │
    │  │   Lexer     │──│   Parser    │──│    AST      │             │
    │  │  (Tokens)   │  │ (Pratt+RD)  │  │   Nodes     │             │
    │  └─────────────┘  └─────────────┘  └─────────────┘             │
    │         │               │               │                       │
    │  ┌─────────────┐  ┌─────────────┐  ┌─────────────┐             │
    │  │   Errors    │  │   Config    │  │  Formatter  │             │
    │  └─────────────┘  └─────────────┘  └─────────────┘             │
    └─────────────────────────────────────────────────────────────────┘

Usage:
    from minisql_core import parse, Select

    stmt = parse("SELECT name FROM users WHERE age >= 18 ORDER BY name;")
    assert isinstance(stmt, Select)

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

__version__ = "0.1.0"

from minisql_core.config import ParserConfig
from minisql_core.errors import (
    ExpressionTooDeep,
    InvalidCharacter,
    InvalidConstraint,
    InvalidTypeArgument,
    LexError,
    MissingClause,
    ParseError,
    Position,
    UnexpectedToken,
    UnmatchedParenthesis,
    UnsupportedStatement,
    UnterminatedString,
)
from minisql_core.query.ast import (
    BinaryOp,
    BinaryOperator,
    BoolLiteral,
    BoolType,
    Check,
    ColumnDef,
    ColumnRef,
    CreateTable,
    Direction,
    IntLiteral,
    IntType,
    NotNull,
    OrderByItem,
    PrimaryKey,
    Select,
    StringLiteral,
    UnaryOp,
    UnaryOperator,
    VarcharType,
    Wildcard,
)
from minisql_core.query.formatter import format_expression, format_statement
from minisql_core.query.lexer import Lexer, Token, TokenKind
from minisql_core.query.parser import Parser, Query, parse

__all__ = [
    # Version
    "__version__",

    # Entry points
    "parse",
    "Query",
    "Lexer",
    "Parser",
    "ParserConfig",
    "format_expression",
    "format_statement",

    # Tokens
    "Token",
    "TokenKind",

    # AST
    "ColumnRef",
    "IntLiteral",
    "StringLiteral",
    "BoolLiteral",
    "Wildcard",
    "UnaryOp",
    "UnaryOperator",
    "BinaryOp",
    "BinaryOperator",
    "Select",
    "OrderByItem",
    "Direction",
    "CreateTable",
    "ColumnDef",
    "IntType",
    "VarcharType",
    "BoolType",
    "PrimaryKey",
    "NotNull",
    "Check",

    # Errors
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
