"""MiniSQL AST - Syntax tree node definitions.

Each grammar alternative is its own frozen dataclass; the ``Expression``,
``Statement``, ``DataType`` and ``Constraint`` unions name the closed set of
variants a consumer has to handle. Nodes hold plain Python values copied out
of the tokens, compare structurally and are never mutated after parsing.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union


# =============================================================================
# Operators
# =============================================================================


class UnaryOperator(Enum):
    """Prefix operators."""

    NOT = "NOT"
    PLUS = "+"
    MINUS = "-"


class BinaryOperator(Enum):
    """Infix operators."""

    PLUS = "+"
    MINUS = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    EQUAL = "="
    NOT_EQUAL = "!="
    GREATER = ">"
    GREATER_EQUAL = ">="
    LESS = "<"
    LESS_EQUAL = "<="
    AND = "AND"
    OR = "OR"


class Direction(Enum):
    """ORDER BY sort direction."""

    ASC = "ASC"
    DESC = "DESC"


# =============================================================================
# Expressions
# =============================================================================


@dataclass(frozen=True)
class ColumnRef:
    """Column reference."""

    name: str


@dataclass(frozen=True)
class IntLiteral:
    value: int


@dataclass(frozen=True)
class StringLiteral:
    value: str


@dataclass(frozen=True)
class BoolLiteral:
    value: bool


@dataclass(frozen=True)
class Wildcard:
    """``*`` in the SELECT list; selects every column."""


@dataclass(frozen=True)
class UnaryOp:
    """Unary operation."""

    operator: UnaryOperator
    operand: Expression


@dataclass(frozen=True)
class BinaryOp:
    """Binary operation."""

    operator: BinaryOperator
    left: Expression
    right: Expression


Expression = Union[ColumnRef, IntLiteral, StringLiteral, BoolLiteral, Wildcard, UnaryOp, BinaryOp]


# =============================================================================
# Column definitions
# =============================================================================


@dataclass(frozen=True)
class IntType:
    pass


@dataclass(frozen=True)
class VarcharType:
    length: int


@dataclass(frozen=True)
class BoolType:
    pass


DataType = Union[IntType, VarcharType, BoolType]


@dataclass(frozen=True)
class PrimaryKey:
    pass


@dataclass(frozen=True)
class NotNull:
    pass


@dataclass(frozen=True)
class Check:
    """CHECK (expression) constraint."""

    expression: Expression


Constraint = Union[PrimaryKey, NotNull, Check]


@dataclass(frozen=True)
class ColumnDef:
    """Column definition.

    ``constraints`` keeps the constraints in the order they were written,
    including repeated ``Check`` entries.
    """

    name: str
    data_type: DataType
    constraints: Tuple[Constraint, ...] = ()


# =============================================================================
# Statements
# =============================================================================


@dataclass(frozen=True)
class OrderByItem:
    """ORDER BY item."""

    expression: Expression
    direction: Direction = Direction.ASC


@dataclass(frozen=True)
class Select:
    """SELECT statement."""

    columns: Tuple[Expression, ...]
    table: str
    where_clause: Optional[Expression] = None
    order_by: Tuple[OrderByItem, ...] = ()


@dataclass(frozen=True)
class CreateTable:
    """CREATE TABLE statement."""

    table: str
    columns: Tuple[ColumnDef, ...]


Statement = Union[Select, CreateTable]


__all__ = [
    # Operators
    "UnaryOperator",
    "BinaryOperator",
    "Direction",
    # Expressions
    "Expression",
    "ColumnRef",
    "IntLiteral",
    "StringLiteral",
    "BoolLiteral",
    "Wildcard",
    "UnaryOp",
    "BinaryOp",
    # Column definitions
    "DataType",
    "IntType",
    "VarcharType",
    "BoolType",
    "Constraint",
    "PrimaryKey",
    "NotNull",
    "Check",
    "ColumnDef",
    # Statements
    "Statement",
    "OrderByItem",
    "Select",
    "CreateTable",
]
