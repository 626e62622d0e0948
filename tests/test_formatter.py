import pytest

from minisql_core import (
    BinaryOp,
    BinaryOperator,
    ColumnRef,
    IntLiteral,
    StringLiteral,
    UnaryOp,
    UnaryOperator,
    format_expression,
    format_statement,
    parse,
)


def test_select_is_rendered_canonically():
    stmt = parse("select a,b from t where a>1 and b<2 order by a desc, b")
    assert format_statement(stmt) == "SELECT a, b FROM t WHERE a > 1 AND b < 2 ORDER BY a DESC, b ASC;"


def test_create_table_is_rendered_canonically():
    stmt = parse("create table t(id int primary key, name varchar(20) not null, age int check(age>=18))")
    assert format_statement(stmt) == (
        "CREATE TABLE t (id INT PRIMARY KEY, name VARCHAR(20) NOT NULL, age INT CHECK (age >= 18));"
    )


def test_only_needed_parentheses_are_kept():
    assert format_expression(parse("SELECT ((a + b)) * c FROM t").columns[0]) == "(a + b) * c"
    assert format_expression(parse("SELECT a + (b * c) FROM t").columns[0]) == "a + b * c"
    assert format_expression(parse("SELECT a - (b - c) FROM t").columns[0]) == "a - (b - c)"
    assert format_expression(parse("SELECT (a - b) - c FROM t").columns[0]) == "a - b - c"


def test_nested_signs_do_not_become_comments():
    expr = UnaryOp(UnaryOperator.MINUS, UnaryOp(UnaryOperator.MINUS, ColumnRef("a")))
    assert format_expression(expr) == "-(-a)"


def test_unary_over_binary_is_wrapped():
    expr = UnaryOp(UnaryOperator.NOT, BinaryOp(BinaryOperator.EQUAL, ColumnRef("a"), IntLiteral(1)))
    assert format_expression(expr) == "NOT (a = 1)"


def test_string_quoting():
    assert format_expression(StringLiteral("plain")) == "'plain'"
    assert format_expression(StringLiteral("it's")) == '"it\'s"'
    with pytest.raises(ValueError):
        format_expression(StringLiteral("'\""))


@pytest.mark.parametrize(
    "sql",
    [
        "SELECT * FROM users WHERE NOT active OR -balance < 0 ORDER BY salary - 2 * 10 DESC",
        "SELECT a / (b / c), 'x', TRUE FROM t WHERE NOT (a = 1 OR b != 2) AND c <= -(-3)",
        "CREATE TABLE t (id INT PRIMARY KEY NOT NULL, age INT CHECK (age >= 18) CHECK (age <= 65))",
    ],
)
def test_formatted_output_parses_back_to_same_tree(sql):
    stmt = parse(sql)
    assert parse(format_statement(stmt)) == stmt
