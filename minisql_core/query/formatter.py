"""MiniSQL Formatter - Render AST nodes back to SQL text.

Output uses upper-case keywords and only the parentheses the parser needs to
rebuild the same tree, so ``parse(format_statement(stmt)) == stmt``.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from minisql_core.query.ast import (
    BinaryOp,
    BoolLiteral,
    BoolType,
    Check,
    ColumnDef,
    ColumnRef,
    Constraint,
    CreateTable,
    DataType,
    Expression,
    IntLiteral,
    IntType,
    NotNull,
    PrimaryKey,
    Select,
    Statement,
    StringLiteral,
    UnaryOp,
    UnaryOperator,
    VarcharType,
    Wildcard,
)
from minisql_core.query.parser import BINARY_BINDING_POWER


def _quote_string(value: str) -> str:
    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'
    raise ValueError(f"String literal cannot contain both quote characters: {value!r}")


def format_expression(expr: Expression) -> str:
    """Render an expression."""
    if isinstance(expr, ColumnRef):
        return expr.name
    if isinstance(expr, IntLiteral):
        return str(expr.value)
    if isinstance(expr, StringLiteral):
        return _quote_string(expr.value)
    if isinstance(expr, BoolLiteral):
        return "TRUE" if expr.value else "FALSE"
    if isinstance(expr, Wildcard):
        return "*"

    if isinstance(expr, UnaryOp):
        operand = format_expression(expr.operand)
        # Unary operators bind tighter than any infix operator. Nested signs
        # are wrapped so "- -x" never turns into a "--" comment.
        if isinstance(expr.operand, BinaryOp) or (
            isinstance(expr.operand, UnaryOp) and expr.operator is not UnaryOperator.NOT
        ):
            operand = f"({operand})"
        if expr.operator is UnaryOperator.NOT:
            return f"NOT {operand}"
        return f"{expr.operator.value}{operand}"

    if isinstance(expr, BinaryOp):
        power = BINARY_BINDING_POWER[expr.operator]
        left = format_expression(expr.left)
        right = format_expression(expr.right)
        if isinstance(expr.left, BinaryOp) and BINARY_BINDING_POWER[expr.left.operator] < power:
            left = f"({left})"
        if isinstance(expr.right, BinaryOp) and BINARY_BINDING_POWER[expr.right.operator] <= power:
            right = f"({right})"
        return f"{left} {expr.operator.value} {right}"

    raise TypeError(f"Not an expression node: {expr!r}")


def _format_data_type(data_type: DataType) -> str:
    if isinstance(data_type, IntType):
        return "INT"
    if isinstance(data_type, BoolType):
        return "BOOL"
    if isinstance(data_type, VarcharType):
        return f"VARCHAR({data_type.length})"
    raise TypeError(f"Not a data type: {data_type!r}")


def _format_constraint(constraint: Constraint) -> str:
    if isinstance(constraint, PrimaryKey):
        return "PRIMARY KEY"
    if isinstance(constraint, NotNull):
        return "NOT NULL"
    if isinstance(constraint, Check):
        return f"CHECK ({format_expression(constraint.expression)})"
    raise TypeError(f"Not a constraint: {constraint!r}")


def _format_column(column: ColumnDef) -> str:
    parts = [column.name, _format_data_type(column.data_type)]
    parts.extend(_format_constraint(c) for c in column.constraints)
    return " ".join(parts)


def format_statement(stmt: Statement) -> str:
    """Render a statement, terminated by ``;``."""
    if isinstance(stmt, Select):
        parts = ["SELECT", ", ".join(format_expression(c) for c in stmt.columns)]
        parts.extend(["FROM", stmt.table])

        if stmt.where_clause is not None:
            parts.extend(["WHERE", format_expression(stmt.where_clause)])

        if stmt.order_by:
            items = [f"{format_expression(item.expression)} {item.direction.value}" for item in stmt.order_by]
            parts.extend(["ORDER BY", ", ".join(items)])

        return " ".join(parts) + ";"

    if isinstance(stmt, CreateTable):
        columns = ", ".join(_format_column(c) for c in stmt.columns)
        return f"CREATE TABLE {stmt.table} ({columns});"

    raise TypeError(f"Not a statement node: {stmt!r}")


__all__ = [
    "format_expression",
    "format_statement",
]
