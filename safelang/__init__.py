"""Lexer, syntax tree data, checked memory, runtime types and project helpers for the SAFE? language."""

__version__ = "1.0.0"