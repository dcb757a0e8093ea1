import pytest

from safelang.lexer import (
    LexError,
    keyword_or_identifier,
    literal,
    parse_raw_string_literal,
    parse_string_literal,
    symbol,
    tokenize,
)
from safelang.tokens import TokenKind


def kinds(tokens):
    return [t.kind for t in tokens]


def test_lexer_simple():
    tokens = tokenize("safe fn main() { let x = 10 }")
    assert len(tokens) == 11
    assert kinds(tokens)[:7] == [
        TokenKind.SAFE,
        TokenKind.FN,
        TokenKind.IDENTIFIER,
        TokenKind.OPEN_PAREN,
        TokenKind.CLOSE_PAREN,
        TokenKind.OPEN_BRACE,
        TokenKind.LET,
    ]
    assert tokens[2].value == "main"
    assert tokens[7].kind is TokenKind.IDENTIFIER


def test_span():
    tokens = tokenize(" \n let x")
    assert tokens[0].kind is TokenKind.LET
    assert tokens[0].span.line == 2


def test_line_comment_is_ignored():
    tokens = tokenize("let high_x = 1 // comment\nlet high_y = 2")
    values = [t.value for t in tokens if t.kind is TokenKind.IDENTIFIER]
    assert "comment" not in values
    assert "high_y" in values


def test_block_comment_is_ignored():
    tokens = tokenize("let high_x = 1 /* multi\nline */ let high_y = 2")
    values = [t.value for t in tokens if t.kind is TokenKind.IDENTIFIER]
    assert "high_y" in values
    assert "multi" not in values


def test_new_keywords():
    tokens = tokenize("const if else for in break continue true false")
    assert kinds(tokens) == [
        TokenKind.CONST,
        TokenKind.IF,
        TokenKind.ELSE,
        TokenKind.FOR,
        TokenKind.IN,
        TokenKind.BREAK,
        TokenKind.CONTINUE,
        TokenKind.TRUE,
        TokenKind.FALSE,
    ]


def test_string_literal_disallows_newline():
    with pytest.raises(LexError, match="newline is not allowed"):
        tokenize('let high_x = "hello\nworld"')


def test_raw_string_literal_allows_multiline():
    tokens = tokenize('let high_x = r#"hello\nworld"#')
    assert any(
        t.kind is TokenKind.STRING_LITERAL and t.value == "hello\nworld" for t in tokens
    )


def test_raw_string_literal_with_extra_hashes():
    tokens = tokenize('let high_x = r###"line1\n"# inside"\nline2"###')
    assert any(
        t.kind is TokenKind.STRING_LITERAL and t.value == 'line1\n"# inside"\nline2'
        for t in tokens
    )


def test_lexer_error_reports_line_and_column():
    with pytest.raises(LexError) as info:
        tokenize("safe fn test() {\n    let high_x = @\n}")
    message = str(info.value)
    assert "line" in message
    assert "column" in message
    assert "line 2" in message


def test_large_integer_literal_is_lexed_as_text():
    tokens = tokenize("safe fn test() { let high_x = 9999999999999999999999999999 }")
    integers = [t.value for t in tokens if t.kind is TokenKind.INTEGER]
    assert integers == ["9999999999999999999999999999"]


def test_unterminated_block_comment_is_error():
    with pytest.raises(LexError, match="Lexing error at line 1"):
        tokenize("let high_x /* never closed")


def test_lex_error_is_value_error():
    with pytest.raises(ValueError):
        tokenize("$")


def test_span_offsets_cover_identifier_text():
    text = "let high_x = allocate_buffer(high_size)"
    for token in tokenize(text):
        if token.kind is TokenKind.IDENTIFIER:
            assert text[token.span.start:token.span.end] == token.value


def test_column_is_one_based():
    tokens = tokenize("x\n  let")
    assert (tokens[1].span.line, tokens[1].span.column) == (2, 3)


def test_symbol_prefers_longest_match():
    assert symbol("..=3") == (TokenKind.DOT_DOT_EQUAL, None, "3")
    assert symbol("..3") == (TokenKind.DOT_DOT, None, "3")
    assert symbol("->x") == (TokenKind.ARROW, None, "x")
    assert symbol("abc") is None


def test_range_tokens():
    assert kinds(tokenize("0..=3")) == [
        TokenKind.INTEGER,
        TokenKind.DOT_DOT_EQUAL,
        TokenKind.INTEGER,
    ]


def test_keyword_or_identifier():
    assert keyword_or_identifier("raw fn") == (TokenKind.RAW, None, " fn")
    assert keyword_or_identifier("raw_ptr)") == (TokenKind.IDENTIFIER, "raw_ptr", ")")
    assert keyword_or_identifier("9abc") is None


def test_literal_integer_and_string():
    assert literal("123abc") == (TokenKind.INTEGER, "123", "abc")
    assert literal('"hi" rest') == (TokenKind.STRING_LITERAL, "hi", " rest")
    assert literal("name") is None


def test_parse_string_literal_escapes():
    assert parse_string_literal('"a\\tb\\"c\\\\d" x') == ('a\tb"c\\d', " x")
    assert parse_string_literal('"\\0"') == ("\0", "")


def test_parse_string_literal_rejects_bad_input():
    assert parse_string_literal('"\\q"') is None
    assert parse_string_literal('"unterminated') is None
    assert parse_string_literal("plain") is None


def test_bad_escape_fails_tokenize():
    with pytest.raises(LexError):
        tokenize('let high_s = "\\q"')


def test_parse_raw_string_literal():
    assert parse_raw_string_literal('r"abc" tail') == ("abc", " tail")
    assert parse_raw_string_literal('r##"a"#b"## tail') == ('a"#b', " tail")
    assert parse_raw_string_literal("raw") is None
    assert parse_raw_string_literal('r#"open') is None


def test_escaped_string_round_trip_value():
    tokens = tokenize('let high_s = "a\\\\b"')
    assert tokens[-1].value == "a\\b"