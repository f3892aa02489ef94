import pytest
from hypothesis import given
from hypothesis import strategies as st

from hedwig.hedwig_constants import KEYWORDS, TokenType
from hedwig.hedwig_lexer import CharacterStream, Lexer, Token, tokenize


def types_and_values(source: str) -> list[tuple[TokenType, str]]:
    return [(tok.type, tok.value) for tok in tokenize(source)]


def test_simple_variable_declaration() -> None:
    assert tokenize("let x = 10;") == [
        Token(TokenType.KEYWORD, "let", 1, 1),
        Token(TokenType.IDENTIFIER, "x", 1, 5),
        Token(TokenType.OPERATOR, "=", 1, 7),
        Token(TokenType.NUMBER, "10", 1, 9),
        Token(TokenType.PUNCTUATION, ";", 1, 11),
        Token(TokenType.EOF, "", 1, 12),
    ]


def test_function_declaration_columns() -> None:
    tokens = tokenize("function add(a, b) { return a + b; }")
    assert [(tok.value, tok.column) for tok in tokens] == [
        ("function", 1),
        ("add", 10),
        ("(", 13),
        ("a", 14),
        (",", 15),
        ("b", 17),
        (")", 18),
        ("{", 20),
        ("return", 22),
        ("a", 29),
        ("+", 31),
        ("b", 33),
        (";", 34),
        ("}", 36),
        ("", 37),
    ]


def test_numbers() -> None:
    tokens = tokenize("123 45.67 8.9e10 11E-2")
    assert [(tok.type, tok.value, tok.column) for tok in tokens] == [
        (TokenType.NUMBER, "123", 1),
        (TokenType.NUMBER, "45.67", 5),
        (TokenType.NUMBER, "8.9e10", 11),
        (TokenType.NUMBER, "11E-2", 18),
        (TokenType.EOF, "", 23),
    ]


def test_number_starting_with_dot() -> None:
    assert types_and_values(".5")[0] == (TokenType.NUMBER, ".5")


def test_second_dot_terminates_number() -> None:
    assert types_and_values("1.2.3") == [
        (TokenType.NUMBER, "1.2"),
        (TokenType.NUMBER, ".3"),
        (TokenType.EOF, ""),
    ]


def test_second_exponent_terminates_number() -> None:
    assert types_and_values("1e5e3")[:2] == [
        (TokenType.NUMBER, "1e5"),
        (TokenType.IDENTIFIER, "e3"),
    ]


def test_exponent_with_plus_sign() -> None:
    assert types_and_values("2e+8")[0] == (TokenType.NUMBER, "2e+8")


def test_strings_single_and_double_quotes() -> None:
    assert tokenize("'hello' \"world\"") == [
        Token(TokenType.STRING, "'hello'", 1, 1),
        Token(TokenType.STRING, '"world"', 1, 9),
        Token(TokenType.EOF, "", 1, 16),
    ]


def test_escape_sequences_kept_verbatim() -> None:
    tok = tokenize(r'"say \"hi\"\n"')[0]
    assert tok.type == TokenType.STRING
    assert tok.value == r'"say \"hi\"\n"'


def test_unterminated_string_reads_to_end() -> None:
    assert types_and_values('"abc') == [(TokenType.STRING, '"abc'), (TokenType.EOF, "")]


def test_unterminated_string_with_trailing_escape() -> None:
    assert types_and_values('"abc\\')[0] == (TokenType.STRING, '"abc\\')


def test_template_string() -> None:
    assert tokenize("`template string`") == [
        Token(TokenType.TEMPLATE_STRING, "`template string`", 1, 1),
        Token(TokenType.EOF, "", 1, 18),
    ]


def test_template_substitution_is_plain_text() -> None:
    assert types_and_values("`a ${b} c`") == [
        (TokenType.TEMPLATE_STRING, "`a ${b} c`"),
        (TokenType.EOF, ""),
    ]


def test_multiline_template_reports_start_position() -> None:
    tokens = tokenize("x = `one\ntwo`;")
    template = tokens[2]
    assert template.type == TokenType.TEMPLATE_STRING
    assert (template.line, template.column) == (1, 5)
    assert (tokens[3].line, tokens[3].column) == (2, 5)


def test_comments() -> None:
    code = "\n// single line comment\n/* multi-line\n   comment */\n"
    assert tokenize(code) == [
        Token(TokenType.COMMENT, "// single line comment", 2, 1),
        Token(TokenType.COMMENT, "/* multi-line\n   comment */", 3, 1),
        Token(TokenType.EOF, "", 5, 1),
    ]


def test_unterminated_block_comment_reads_to_end() -> None:
    assert types_and_values("/* never closed") == [
        (TokenType.COMMENT, "/* never closed"),
        (TokenType.EOF, ""),
    ]


def test_unknown_characters() -> None:
    assert tokenize("@#$") == [
        Token(TokenType.UNKNOWN, "@", 1, 1),
        Token(TokenType.UNKNOWN, "#", 1, 2),
        Token(TokenType.UNKNOWN, "$", 1, 3),
        Token(TokenType.EOF, "", 1, 4),
    ]


def test_line_and_column_numbers() -> None:
    code = "\nlet a = 1;\nconst b = \"two\";\n    "
    assert tokenize(code) == [
        Token(TokenType.KEYWORD, "let", 2, 1),
        Token(TokenType.IDENTIFIER, "a", 2, 5),
        Token(TokenType.OPERATOR, "=", 2, 7),
        Token(TokenType.NUMBER, "1", 2, 9),
        Token(TokenType.PUNCTUATION, ";", 2, 10),
        Token(TokenType.KEYWORD, "const", 3, 1),
        Token(TokenType.IDENTIFIER, "b", 3, 7),
        Token(TokenType.OPERATOR, "=", 3, 9),
        Token(TokenType.STRING, '"two"', 3, 11),
        Token(TokenType.PUNCTUATION, ";", 3, 16),
        Token(TokenType.EOF, "", 4, 5),
    ]


def test_tabs_and_carriage_returns_are_whitespace() -> None:
    tokens = tokenize("a\t\r\nb")
    assert [(tok.value, tok.line, tok.column) for tok in tokens] == [
        ("a", 1, 1),
        ("b", 2, 1),
        ("", 2, 2),
    ]


@pytest.mark.parametrize(
    "source,expected",
    [
        (">>>", [">>>"]),
        (">>>=", [">>>="]),
        ("===", ["==="]),
        ("!==", ["!=="]),
        ("**=", ["**="]),
        ("...", ["..."]),
        ("=>", ["=>"]),
        ("a++", ["a", "++"]),
        ("x>>=1", ["x", ">>=", "1"]),
        ("====", ["===", "="]),
    ],
)
def test_longest_operator_match(source: str, expected: list[str]) -> None:
    assert [tok.value for tok in tokenize(source)[:-1]] == expected


def test_triple_shift_is_one_operator() -> None:
    assert types_and_values(">>>") == [(TokenType.OPERATOR, ">>>"), (TokenType.EOF, "")]


def test_punctuation() -> None:
    tokens = tokenize("( ) [ ] { } , ; : .")
    assert all(tok.type == TokenType.PUNCTUATION for tok in tokens[:-1])
    assert len(tokens) == 11


def test_keyword_reclassification() -> None:
    assert types_and_values("true false null if foo undefined") == [
        (TokenType.BOOLEAN, "true"),
        (TokenType.BOOLEAN, "false"),
        (TokenType.NULL, "null"),
        (TokenType.KEYWORD, "if"),
        (TokenType.IDENTIFIER, "foo"),
        (TokenType.KEYWORD, "undefined"),
        (TokenType.EOF, ""),
    ]


def test_identifier_with_digits_and_underscores() -> None:
    assert types_and_values("_private9 $x")[:2] == [
        (TokenType.IDENTIFIER, "_private9"),
        (TokenType.UNKNOWN, "$"),
    ]


def test_empty_input_returns_single_eof() -> None:
    assert tokenize("") == [Token(TokenType.EOF, "", 1, 1)]


def test_lexer_is_reusable(lexer: Lexer) -> None:
    first = lexer.tokenize("a\nb")
    second = lexer.tokenize("a\nb")
    assert first == second
    assert second[0].line == 1


def test_token_offsets() -> None:
    tokens = tokenize("let  x")
    assert [tok.offset for tok in tokens] == [0, 5, 6]
    assert tokens[1].end_offset == 6


def test_token_equality_ignores_offset() -> None:
    assert Token(TokenType.NUMBER, "1", 1, 1, 0) == Token(TokenType.NUMBER, "1", 1, 1, 7)


def test_token_repr_and_dict() -> None:
    tok = Token(TokenType.NUMBER, "42", 1, 2)
    assert repr(tok) == "Token(NUMBER, 42)"
    assert tok.to_dict() == {"type": "NUMBER", "value": "42", "line": 1, "column": 2}


def test_token_is_immutable() -> None:
    tok = Token(TokenType.NUMBER, "42", 1, 2)
    with pytest.raises(AttributeError):
        tok.value = "43"  # type: ignore[misc]


def test_character_stream_methods() -> None:
    stream = CharacterStream("ab\nc")
    assert stream.peek() == "a"
    assert stream.next() == "a"
    assert stream.lookahead(2) == "b\n"
    stream.next()
    stream.next()
    assert stream.mark() == (3, 2, 1)
    assert not stream.end_of_file()
    stream.next()
    assert stream.end_of_file()
    assert stream.peek() == ""
    assert stream.peek(5) == ""


def test_character_stream_next_past_eof_raises() -> None:
    stream = CharacterStream("")
    with pytest.raises(IndexError, match="Attempted to read past end of source"):
        stream.next()


@given(st.text(max_size=200))  # type: ignore[misc]
def test_tokenize_always_ends_with_single_eof(source: str) -> None:
    tokens = tokenize(source)
    assert tokens[-1].type == TokenType.EOF
    assert [tok.type for tok in tokens].count(TokenType.EOF) == 1


@given(st.text(alphabet="@#$\\", min_size=1, max_size=30))  # type: ignore[misc]
def test_unrecognized_characters_one_token_each(source: str) -> None:
    tokens = tokenize(source)
    assert [tok.value for tok in tokens[:-1]] == list(source)
    assert all(tok.type == TokenType.UNKNOWN for tok in tokens[:-1])
    assert [tok.column for tok in tokens] == list(range(1, len(source) + 2))


@given(st.text(alphabet=st.characters(blacklist_categories=["Cs"]), max_size=100))  # type: ignore[misc]
def test_token_lexemes_match_source_slices(source: str) -> None:
    tokens = tokenize(source)
    previous_end = 0
    for tok in tokens[:-1]:
        assert source[tok.offset : tok.end_offset] == tok.value
        assert tok.offset >= previous_end
        assert source[previous_end : tok.offset].strip() == ""
        previous_end = tok.end_offset
    assert source[previous_end:].strip() == ""


@given(st.lists(st.sampled_from(["a", "1", "+", ";", " ", "\n"]), max_size=40))  # type: ignore[misc]
def test_newline_resets_column(parts: list[str]) -> None:
    source = "".join(parts)
    for tok in tokenize(source):
        line_start = source.rfind("\n", 0, tok.offset) + 1
        assert tok.column == tok.offset - line_start + 1
        assert tok.line == source.count("\n", 0, tok.offset) + 1


@given(st.sampled_from(sorted(KEYWORDS)))  # type: ignore[misc]
def test_every_keyword_is_reclassified(word: str) -> None:
    tok = tokenize(word)[0]
    if word in ("true", "false"):
        assert tok.type == TokenType.BOOLEAN
    elif word == "null":
        assert tok.type == TokenType.NULL
    else:
        assert tok.type == TokenType.KEYWORD
