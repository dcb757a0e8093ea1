"""Tokenizer for SAFE source text."""

from __future__ import annotations

import re
from typing import Optional

from .position import build_line_starts, line_col_from_offset
from .tokens import Span, Token, TokenKind

Lexed = tuple[TokenKind, Optional[str], str]

_SYMBOLS: tuple[tuple[str, TokenKind], ...] = (
    ("..=", TokenKind.DOT_DOT_EQUAL),
    ("..", TokenKind.DOT_DOT),
    ("->", TokenKind.ARROW),
    ("<=", TokenKind.LESS_EQUAL),
    (">=", TokenKind.GREATER_EQUAL),
    ("!=", TokenKind.NOT_EQUAL),
    ("==", TokenKind.EQUAL_EQUAL),
    ("<", TokenKind.LESS_THAN),
    (">", TokenKind.GREATER_THAN),
    ("(", TokenKind.OPEN_PAREN),
    (")", TokenKind.CLOSE_PAREN),
    ("{", TokenKind.OPEN_BRACE),
    ("}", TokenKind.CLOSE_BRACE),
    ("[", TokenKind.OPEN_BRACKET),
    ("]", TokenKind.CLOSE_BRACKET),
    (":", TokenKind.COLON),
    ("=", TokenKind.EQUAL),
    (",", TokenKind.COMMA),
    ("&", TokenKind.AMPERSAND),
    ("*", TokenKind.STAR),
)

_KEYWORDS: dict[str, TokenKind] = {
    "fn": TokenKind.FN,
    "let": TokenKind.LET,
    "const": TokenKind.CONST,
    "safe": TokenKind.SAFE,
    "raw": TokenKind.RAW,
    "unsafe": TokenKind.UNSAFE,
    "alias": TokenKind.ALIAS,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "for": TokenKind.FOR,
    "in": TokenKind.IN,
    "break": TokenKind.BREAK,
    "continue": TokenKind.CONTINUE,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
}

_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_DIGITS_RE = re.compile(r"[0-9]+")
_STRING_RE = re.compile(r'"((?:[^"\\\r\n]|\\[nrt"\\0])*)"')
_ESCAPE_RE = re.compile(r"\\(.)")
_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", '"': '"', "\\": "\\", "0": "\0"}

_NEWLINE_IN_STRING = (
    'newline is not allowed in normal string literal; use \\n or raw string r#"..."#'
)


class LexError(ValueError):
    """Raised when the source text cannot be tokenized."""


def symbol(text: str) -> Optional[Lexed]:
    """Lex a punctuation symbol at the start of ``text``."""
    for sym, kind in _SYMBOLS:
        if text.startswith(sym):
            return kind, None, text[len(sym):]
    return None


def keyword_or_identifier(text: str) -> Optional[Lexed]:
    """Lex a keyword or an identifier at the start of ``text``."""
    match = _IDENT_RE.match(text)
    if match is None:
        return None
    name = match.group()
    rest = text[match.end():]
    keyword = _KEYWORDS.get(name)
    if keyword is not None:
        return keyword, None, rest
    return TokenKind.IDENTIFIER, name, rest


def literal(text: str) -> Optional[Lexed]:
    """Lex a raw string, integer or string literal at the start of ``text``."""
    raw = parse_raw_string_literal(text)
    if raw is not None:
        return TokenKind.STRING_LITERAL, raw[0], raw[1]
    digits = _DIGITS_RE.match(text)
    if digits is not None:
        return TokenKind.INTEGER, digits.group(), text[digits.end():]
    string = parse_string_literal(text)
    if string is not None:
        return TokenKind.STRING_LITERAL, string[0], string[1]
    return None


def parse_string_literal(text: str) -> Optional[tuple[str, str]]:
    """Parse a quoted string with escapes; return (content, rest) or None."""
    match = _STRING_RE.match(text)
    if match is None:
        return None
    content = _ESCAPE_RE.sub(lambda m: _ESCAPES[m.group(1)], match.group(1))
    return content, text[match.end():]


def parse_raw_string_literal(text: str) -> Optional[tuple[str, str]]:
    """Parse ``r#"..."#`` with any number of hashes; return (content, rest) or None."""
    if not text.startswith("r"):
        return None
    after_r = text[1:]
    after_hashes = after_r.lstrip("#")
    hash_count = len(after_r) - len(after_hashes)
    if not after_hashes.startswith('"'):
        return None
    body = after_hashes[1:]
    closing = '"' + "#" * hash_count
    end = body.find(closing)
    if end < 0:
        return None
    return body[:end], body[end + len(closing):]


def _error(text: str, line_starts: list[int], rest: str, detail: Optional[str]) -> LexError:
    line, column = line_col_from_offset(text, line_starts, len(text) - len(rest))
    if detail is not None:
        return LexError(f"Lexing error at line {line}, column {column}: {detail}")
    return LexError(f"Lexing error at line {line}, column {column} near: '{rest}'")


def _skip_whitespace_and_comments(text: str, line_starts: list[int], rest: str) -> str:
    while True:
        before = rest
        rest = rest.lstrip()
        if rest.startswith("//"):
            newline = rest.find("\n", 2)
            rest = "" if newline < 0 else rest[newline + 1:]
            continue
        if rest.startswith("/*"):
            end = rest.find("*/", 2)
            if end < 0:
                raise _error(text, line_starts, rest, None)
            rest = rest[end + 2:]
            continue
        if rest == before:
            return rest


def _string_newline_error(rest: str) -> Optional[str]:
    if not rest.startswith('"'):
        return None
    escaped = False
    for ch in rest[1:]:
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == '"':
            return None
        elif ch in "\r\n":
            return _NEWLINE_IN_STRING
    return None


def tokenize(text: str) -> list[Token]:
    """Split source text into tokens, raising LexError on invalid input."""
    line_starts = build_line_starts(text)
    tokens: list[Token] = []
    rest = text
    while True:
        rest = _skip_whitespace_and_comments(text, line_starts, rest)
        if not rest:
            return tokens
        lexed = symbol(rest) or literal(rest) or keyword_or_identifier(rest)
        if lexed is None:
            raise _error(text, line_starts, rest, _string_newline_error(rest))
        kind, value, remaining = lexed
        start = len(text) - len(rest)
        end = len(text) - len(remaining)
        line, column = line_col_from_offset(text, line_starts, start)
        tokens.append(Token(kind, Span(start, end, line, column), value))
        rest = remaining