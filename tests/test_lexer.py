import pytest

from minisql_core import InvalidCharacter, Lexer, TokenKind, UnterminatedString, parse


def kinds_and_values(sql):
    return [(t.kind, t.value) for t in Lexer(sql).tokenize()]


def test_basic_select_tokens():
    assert kinds_and_values("SELECT * FROM users;") == [
        (TokenKind.KEYWORD, "SELECT"),
        (TokenKind.OPERATOR, "*"),
        (TokenKind.KEYWORD, "FROM"),
        (TokenKind.IDENTIFIER, "users"),
        (TokenKind.PUNCTUATION, ";"),
        (TokenKind.EOF, None),
    ]


def test_keywords_are_case_insensitive_and_keep_raw_text():
    tokens = Lexer("select From wHeRe").tokenize()
    assert [t.value for t in tokens[:-1]] == ["SELECT", "FROM", "WHERE"]
    assert [t.text for t in tokens[:-1]] == ["select", "From", "wHeRe"]
    assert all(t.kind is TokenKind.KEYWORD for t in tokens[:-1])


def test_identifier_prefixed_by_keyword_is_identifier():
    assert kinds_and_values("selection order_id _tmp1") == [
        (TokenKind.IDENTIFIER, "selection"),
        (TokenKind.IDENTIFIER, "order_id"),
        (TokenKind.IDENTIFIER, "_tmp1"),
        (TokenKind.EOF, None),
    ]


def test_boolean_literals():
    assert kinds_and_values("TRUE false") == [
        (TokenKind.BOOLEAN, True),
        (TokenKind.BOOLEAN, False),
        (TokenKind.EOF, None),
    ]


def test_string_literals_with_either_quote():
    tokens = Lexer("'hello' \"world\" 'it\"s'").tokenize()
    assert [(t.kind, t.value) for t in tokens[:-1]] == [
        (TokenKind.STRING, "hello"),
        (TokenKind.STRING, "world"),
        (TokenKind.STRING, 'it"s'),
    ]
    assert tokens[0].text == "'hello'"


def test_numbers_and_operators():
    assert kinds_and_values("42 >= 30") == [
        (TokenKind.INTEGER, 42),
        (TokenKind.OPERATOR, ">="),
        (TokenKind.INTEGER, 30),
        (TokenKind.EOF, None),
    ]


def test_minus_is_never_part_of_integer():
    assert kinds_and_values("-7") == [
        (TokenKind.OPERATOR, "-"),
        (TokenKind.INTEGER, 7),
        (TokenKind.EOF, None),
    ]


@pytest.mark.parametrize(
    "sql,expected",
    [
        ("!=", ["!="]),
        ("<=<", ["<=", "<"]),
        (">>=", [">", ">="]),
        ("= + / ( ) ,", ["=", "+", "/", "(", ")", ","]),
    ],
)
def test_operator_lookahead(sql, expected):
    assert [t.value for t in Lexer(sql).tokenize()[:-1]] == expected


def test_comments_and_whitespace_are_skipped():
    sql = "SELECT a -- pick a\n\tFROM t -- trailing"
    assert [t.value for t in Lexer(sql).tokenize()] == ["SELECT", "a", "FROM", "t", None]


def test_positions_track_lines_and_columns():
    tokens = Lexer("SELECT a\n  FROM t").tokenize()
    from_token = tokens[2]
    assert from_token.value == "FROM"
    assert (from_token.position.line, from_token.position.column) == (2, 3)
    assert from_token.position.offset == 11


def test_empty_input_yields_only_eof():
    tokens = Lexer("   ").tokenize()
    assert len(tokens) == 1
    assert tokens[0].kind is TokenKind.EOF
    assert tokens[0].position.offset == 3


def test_lexer_is_restartable():
    lexer = Lexer("SELECT a FROM t WHERE a > 1")
    assert list(lexer) == list(lexer)
    assert lexer.tokenize() == Lexer("SELECT a FROM t WHERE a > 1").tokenize()


def test_lexer_is_lazy():
    tokens = iter(Lexer("SELECT a # b"))
    assert next(tokens).value == "SELECT"
    assert next(tokens).value == "a"
    with pytest.raises(InvalidCharacter):
        next(tokens)


def test_invalid_character_reports_char_and_position():
    with pytest.raises(InvalidCharacter) as excinfo:
        Lexer("SELECT a FROM t WHERE a ! 1").tokenize()
    assert excinfo.value.char == "!"
    assert excinfo.value.position.offset == 24
    assert "line 1, column 25" in str(excinfo.value)


def test_unterminated_string_reports_end_of_input():
    sql = "SELECT 'abc FROM t;"
    with pytest.raises(UnterminatedString) as excinfo:
        Lexer(sql).tokenize()
    assert excinfo.value.position.offset == len(sql)


@pytest.mark.parametrize(
    "sql,char,offset",
    [
        ("1²", "²", 1),
        ("１", "１", 0),
        ("ſelect", "ſ", 0),
        ("naïve", "ï", 2),
    ],
)
def test_non_ascii_letters_and_digits_are_invalid(sql, char, offset):
    with pytest.raises(InvalidCharacter) as excinfo:
        Lexer(sql).tokenize()
    assert excinfo.value.char == char
    assert excinfo.value.position.offset == offset


def test_superscript_digit_in_statement_is_a_lex_error():
    with pytest.raises(InvalidCharacter):
        parse("SELECT a FROM t WHERE a > 1²")
