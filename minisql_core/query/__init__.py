"""MiniSQL query layer: lexer, AST, parser and formatter."""

from minisql_core.query.formatter import format_expression, format_statement
from minisql_core.query.lexer import Lexer, Token, TokenKind
from minisql_core.query.parser import Parser, Query, parse

__all__ = [
    "Lexer",
    "Token",
    "TokenKind",
    "Parser",
    "Query",
    "parse",
    "format_expression",
    "format_statement",
]
