"""MiniSQL Query Parser - SQL parsing and AST generation.

Supports a deliberately small dialect:
- SELECT ... FROM ... [WHERE ...] [ORDER BY ... [ASC|DESC], ...]
- CREATE TABLE name (column type [PRIMARY KEY | NOT NULL | CHECK (...)]*, ...)

Architecture:
    ┌─────────────────────────────────────────────────────────────────────┐
    │                         Query Parser                               │
    ├─────────────────────────────────────────────────────────────────────┤
    │  ┌─────────────┐  ┌──────────────────┐  ┌─────────────┐            │
    │  │   Lexer     │──│ Statement Parser │──│    AST      │            │
    │  │  (Tokens)   │  │ (Recursive Desc) │  │   Nodes     │            │
    │  └─────────────┘  └──────────────────┘  └─────────────┘            │
    │                            │                                        │
    │                   ┌──────────────────┐                              │
    │                   │ Expression Parser│                              │
    │                   │     (Pratt)      │                              │
    │                   └──────────────────┘                              │
    └─────────────────────────────────────────────────────────────────────┘

Tokens are pulled from the lexer one at a time, so the first error in source
order is the one reported.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterable, Iterator, List, Optional, Tuple

from minisql_core.config import DEFAULT_CONFIG, ParserConfig
from minisql_core.errors import (
    ExpressionTooDeep,
    InvalidConstraint,
    InvalidTypeArgument,
    MissingClause,
    ParseError,
    UnexpectedToken,
    UnmatchedParenthesis,
    UnsupportedStatement,
)
from minisql_core.query.ast import (
    BinaryOp,
    BinaryOperator,
    BoolLiteral,
    BoolType,
    Check,
    ColumnDef,
    ColumnRef,
    Constraint,
    CreateTable,
    DataType,
    Direction,
    Expression,
    IntLiteral,
    IntType,
    NotNull,
    OrderByItem,
    PrimaryKey,
    Select,
    Statement,
    StringLiteral,
    UnaryOp,
    UnaryOperator,
    VarcharType,
    Wildcard,
)
from minisql_core.query.lexer import Lexer, Token, TokenKind

logger = logging.getLogger(__name__)


# =============================================================================
# Binding powers
# =============================================================================

# Higher binds tighter. Every infix operator is left-associative.
BINARY_BINDING_POWER = MappingProxyType({
    BinaryOperator.OR: 1,
    BinaryOperator.AND: 2,
    BinaryOperator.EQUAL: 3,
    BinaryOperator.NOT_EQUAL: 3,
    BinaryOperator.LESS: 4,
    BinaryOperator.LESS_EQUAL: 4,
    BinaryOperator.GREATER: 4,
    BinaryOperator.GREATER_EQUAL: 4,
    BinaryOperator.PLUS: 5,
    BinaryOperator.MINUS: 5,
    BinaryOperator.MULTIPLY: 6,
    BinaryOperator.DIVIDE: 6,
})

PREFIX_BINDING_POWER = 7

_SYMBOL_OPERATORS = MappingProxyType({op.value: op for op in BinaryOperator if op.value not in ("AND", "OR")})
_KEYWORD_OPERATORS = MappingProxyType({"AND": BinaryOperator.AND, "OR": BinaryOperator.OR})
_PREFIX_OPERATORS = MappingProxyType({"+": UnaryOperator.PLUS, "-": UnaryOperator.MINUS})

_PRIMARY_EXPECTED = frozenset({"integer", "string", "boolean", "identifier", "(", "NOT", "+", "-"})
_CONSTRAINT_KEYWORDS = ("PRIMARY", "NOT", "CHECK")


# =============================================================================
# Parser
# =============================================================================


class Parser:
    """SQL parser.

    A parser instance consumes one token stream and produces one statement;
    build a new instance for every statement.
    """

    def __init__(self, tokens: Iterable[Token], config: Optional[ParserConfig] = None):
        """Initialize parser.

        Args:
            tokens: Tokens from the lexer, terminated by an EOF token
            config: Parser settings; defaults to ``ParserConfig()``
        """
        self.config = config or DEFAULT_CONFIG
        self._tokens: Iterator[Token] = iter(tokens)
        self._token: Token = next(self._tokens)
        self._depth = 0

    def parse(self) -> Statement:
        """Parse tokens into AST.

        Returns:
            Statement AST node
        """
        token = self._current()

        try:
            if token.is_keyword("SELECT"):
                stmt = self._parse_select()
            elif token.is_keyword("CREATE"):
                stmt = self._parse_create()
            else:
                raise UnsupportedStatement(token)
        except RecursionError:
            # max_expression_depth above what the interpreter stack allows
            raise ExpressionTooDeep(self.config.max_expression_depth, self._current()) from None

        self._parse_statement_end()
        return stmt

    # -------------------------------------------------------------------------
    # Token cursor
    # -------------------------------------------------------------------------

    def _current(self) -> Token:
        """Get current token."""
        return self._token

    def _at_end(self) -> bool:
        return self._token.kind is TokenKind.EOF

    def _advance(self) -> Token:
        """Advance to next token and return previous."""
        token = self._token
        if not self._at_end():
            self._token = next(self._tokens)
        return token

    def _match_keyword(self, name: str) -> bool:
        """Match and consume if current token is the keyword ``name``."""
        if self._token.is_keyword(name):
            self._advance()
            return True
        return False

    def _match_symbol(self, symbol: str) -> bool:
        """Match and consume if current token is ``symbol``."""
        if self._token.is_symbol(symbol):
            self._advance()
            return True
        return False

    def _expect_identifier(self, what: str) -> str:
        token = self._current()
        if token.kind is not TokenKind.IDENTIFIER:
            raise UnexpectedToken({what}, token)
        self._advance()
        return token.value

    def _parse_statement_end(self) -> None:
        """Consume the optional ``;`` and require end of input."""
        if self._match_symbol(";"):
            if not self._at_end():
                raise UnexpectedToken({"end of input"}, self._current())
            return

        if self.config.require_semicolon:
            raise MissingClause(";", self._current())
        if not self._at_end():
            raise UnexpectedToken({";", "end of input"}, self._current())

    # -------------------------------------------------------------------------
    # Expression parsing
    # -------------------------------------------------------------------------

    def parse_expression(self, min_power: int = 0) -> Expression:
        """Parse an expression whose operators bind tighter than ``min_power``.

        Stops at the first token that is not such an operator, leaving it as
        the current token for the caller.
        """
        self._depth += 1
        if self._depth > self.config.max_expression_depth:
            raise ExpressionTooDeep(self.config.max_expression_depth, self._current())

        left = self._parse_prefix()

        while True:
            operator = self._binary_operator(self._current())
            if operator is None:
                break
            power = BINARY_BINDING_POWER[operator]
            if power <= min_power:
                break
            self._advance()
            right = self.parse_expression(power)
            left = BinaryOp(operator=operator, left=left, right=right)

        self._depth -= 1
        return left

    @staticmethod
    def _binary_operator(token: Token) -> Optional[BinaryOperator]:
        if token.kind is TokenKind.OPERATOR:
            return _SYMBOL_OPERATORS.get(token.value)
        if token.kind is TokenKind.KEYWORD:
            return _KEYWORD_OPERATORS.get(token.value)
        return None

    def _parse_prefix(self) -> Expression:
        """Parse a unary operator application or a primary expression."""
        token = self._current()

        if token.is_keyword("NOT"):
            self._advance()
            operand = self.parse_expression(PREFIX_BINDING_POWER)
            return UnaryOp(operator=UnaryOperator.NOT, operand=operand)

        if token.kind is TokenKind.OPERATOR and token.value in _PREFIX_OPERATORS:
            self._advance()
            operand = self.parse_expression(PREFIX_BINDING_POWER)
            return UnaryOp(operator=_PREFIX_OPERATORS[token.value], operand=operand)

        return self._parse_primary()

    def _parse_primary(self) -> Expression:
        """Parse primary expression."""
        token = self._current()

        if token.kind is TokenKind.INTEGER:
            self._advance()
            return IntLiteral(value=token.value)

        if token.kind is TokenKind.STRING:
            self._advance()
            return StringLiteral(value=token.value)

        if token.kind is TokenKind.BOOLEAN:
            self._advance()
            return BoolLiteral(value=token.value)

        if token.kind is TokenKind.IDENTIFIER:
            self._advance()
            return ColumnRef(name=token.value)

        if token.is_symbol("("):
            self._advance()
            expr = self.parse_expression()
            if not self._match_symbol(")"):
                raise UnmatchedParenthesis(token.position)
            return expr

        raise UnexpectedToken(_PRIMARY_EXPECTED, token)

    # -------------------------------------------------------------------------
    # SELECT parsing
    # -------------------------------------------------------------------------

    def _parse_select(self) -> Select:
        """Parse SELECT statement."""
        self._advance()

        columns = self._parse_select_list()

        if not self._match_keyword("FROM"):
            raise MissingClause("FROM", self._current())
        table = self._expect_identifier("table name")

        where_clause = None
        if self._match_keyword("WHERE"):
            where_clause = self.parse_expression()

        order_by: Tuple[OrderByItem, ...] = ()
        if self._match_keyword("ORDER"):
            if not self._match_keyword("BY"):
                raise MissingClause("BY", self._current())
            order_by = self._parse_order_by()

        logger.debug(f"Parsed SELECT of {len(columns)} column(s) from {table}")
        return Select(columns=columns, table=table, where_clause=where_clause, order_by=order_by)

    def _parse_select_list(self) -> Tuple[Expression, ...]:
        """Parse SELECT list; ``*`` is a wildcard only as the first item."""
        token = self._current()
        if token.is_keyword("FROM") or token.is_symbol(";") or self._at_end():
            raise MissingClause("column list", token)

        items: List[Expression] = []
        if self._match_symbol("*"):
            items.append(Wildcard())
        else:
            items.append(self.parse_expression())

        while self._match_symbol(","):
            items.append(self.parse_expression())

        return tuple(items)

    def _parse_order_by(self) -> Tuple[OrderByItem, ...]:
        """Parse ORDER BY clause."""
        items = []
        while True:
            expr = self.parse_expression()
            direction = Direction.ASC

            if self._match_keyword("ASC"):
                direction = Direction.ASC
            elif self._match_keyword("DESC"):
                direction = Direction.DESC

            items.append(OrderByItem(expression=expr, direction=direction))

            if not self._match_symbol(","):
                break

        return tuple(items)

    # -------------------------------------------------------------------------
    # CREATE TABLE parsing
    # -------------------------------------------------------------------------

    def _parse_create(self) -> CreateTable:
        """Parse CREATE statement."""
        self._advance()

        if not self._match_keyword("TABLE"):
            raise UnsupportedStatement(self._current())

        table = self._expect_identifier("table name")

        if not self._match_symbol("("):
            raise UnexpectedToken({"("}, self._current())

        if self._current().is_symbol(")"):
            raise MissingClause("column definitions", self._current())

        columns = []
        while True:
            columns.append(self._parse_column_definition())

            if self._match_symbol(","):
                continue
            if self._match_symbol(")"):
                break

            token = self._current()
            if self._at_end() or token.is_symbol(";"):
                raise MissingClause(")", token)
            raise UnexpectedToken({",", ")", "constraint"}, token)

        logger.debug(f"Parsed CREATE TABLE {table} with {len(columns)} column(s)")
        return CreateTable(table=table, columns=tuple(columns))

    def _parse_column_definition(self) -> ColumnDef:
        """Parse column definition."""
        name = self._expect_identifier("column name")
        data_type = self._parse_data_type()

        constraints = []
        while self._current().is_keyword(*_CONSTRAINT_KEYWORDS):
            constraints.append(self._parse_constraint())

        return ColumnDef(name=name, data_type=data_type, constraints=tuple(constraints))

    def _parse_data_type(self) -> DataType:
        token = self._current()

        if self._match_keyword("INT"):
            return IntType()

        if self._match_keyword("BOOL"):
            return BoolType()

        if self._match_keyword("VARCHAR"):
            open_paren = self._current()
            if not self._match_symbol("("):
                raise InvalidTypeArgument("VARCHAR requires a parenthesized length", open_paren)

            length = self._current()
            if length.kind is not TokenKind.INTEGER:
                raise InvalidTypeArgument("VARCHAR length must be an integer", length)
            if length.value <= 0:
                raise InvalidTypeArgument("VARCHAR length must be positive", length)
            self._advance()

            if not self._match_symbol(")"):
                raise UnmatchedParenthesis(open_paren.position)
            return VarcharType(length=length.value)

        raise UnexpectedToken({"INT", "VARCHAR", "BOOL"}, token)

    def _parse_constraint(self) -> Constraint:
        """Parse one column constraint."""
        if self._match_keyword("PRIMARY"):
            if not self._match_keyword("KEY"):
                raise MissingClause("KEY", self._current())
            return PrimaryKey()

        if self._match_keyword("NOT"):
            if not self._match_keyword("NULL"):
                raise MissingClause("NULL", self._current())
            return NotNull()

        self._advance()  # CHECK
        open_paren = self._current()
        if not self._match_symbol("("):
            raise InvalidConstraint("CHECK requires a parenthesized expression", open_paren)
        if self._current().is_symbol(")"):
            raise InvalidConstraint("CHECK expression is empty", self._current())

        expr = self.parse_expression()
        if not self._match_symbol(")"):
            raise UnmatchedParenthesis(open_paren.position)
        return Check(expression=expr)


# =============================================================================
# Query interface
# =============================================================================


def parse(sql: str, config: Optional[ParserConfig] = None) -> Statement:
    """Lex and parse one SQL statement.

    Args:
        sql: Text of exactly one statement; the trailing ``;`` is optional
        config: Parser settings

    Returns:
        Statement AST node

    Raises:
        ParseError: On the first lexical or syntactic error
    """
    try:
        return Parser(Lexer(sql), config).parse()
    except ParseError as e:
        logger.debug(f"Failed to parse {sql!r}: {e}")
        raise


class Query:
    """High-level parser interface holding the source text and its AST."""

    def __init__(self, sql: str, config: Optional[ParserConfig] = None):
        """Initialize query.

        Args:
            sql: SQL string to parse
            config: Parser settings
        """
        self.sql = sql
        self.config = config
        self.ast: Optional[Statement] = None

    def parse(self) -> Statement:
        """Parse SQL into AST."""
        if self.ast is None:
            self.ast = parse(self.sql, self.config)
        return self.ast


__all__ = [
    "Parser",
    "Query",
    "parse",
    "BINARY_BINDING_POWER",
    "PREFIX_BINDING_POWER",
]
