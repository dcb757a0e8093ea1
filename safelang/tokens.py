"""Token kinds, spans and tokens produced by the lexer."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Span:
    """Character offsets of a token plus its 1-based line and column."""

    start: int
    end: int
    line: int
    column: int


class TokenKind(enum.Enum):
    # Keywords
    FN = enum.auto()
    LET = enum.auto()
    CONST = enum.auto()
    SAFE = enum.auto()
    RAW = enum.auto()
    UNSAFE = enum.auto()
    ALIAS = enum.auto()
    IF = enum.auto()
    ELSE = enum.auto()
    FOR = enum.auto()
    IN = enum.auto()
    BREAK = enum.auto()
    CONTINUE = enum.auto()
    TRUE = enum.auto()
    FALSE = enum.auto()

    # Symbols
    OPEN_PAREN = enum.auto()
    CLOSE_PAREN = enum.auto()
    OPEN_BRACE = enum.auto()
    CLOSE_BRACE = enum.auto()
    OPEN_BRACKET = enum.auto()
    CLOSE_BRACKET = enum.auto()
    COLON = enum.auto()
    EQUAL = enum.auto()
    ARROW = enum.auto()
    COMMA = enum.auto()
    AMPERSAND = enum.auto()
    STAR = enum.auto()
    DOT_DOT = enum.auto()
    DOT_DOT_EQUAL = enum.auto()

    # Comparison and generics
    LESS_THAN = enum.auto()
    GREATER_THAN = enum.auto()
    LESS_EQUAL = enum.auto()
    GREATER_EQUAL = enum.auto()
    NOT_EQUAL = enum.auto()
    EQUAL_EQUAL = enum.auto()

    # Literals and identifiers; these carry a value on the token
    IDENTIFIER = enum.auto()
    INTEGER = enum.auto()
    STRING_LITERAL = enum.auto()


@dataclass(frozen=True)
class Token:
    """A lexed token; ``value`` holds the text of identifiers and literals."""

    kind: TokenKind
    span: Span
    value: Optional[str] = None