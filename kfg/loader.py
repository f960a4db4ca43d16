"""Whole-pipeline helpers: source text or file in, Ast or plain dict out."""

from __future__ import annotations

from kfg.lexer import lex
from kfg.parser import Parser
from kfg.ast_nodes import Ast


def parse_source(source: bytes | str, strict: bool = False, sticky_scopes: bool = False) -> Ast:
    """Tokenize, filter and parse *source*."""
    return Parser(lex(source), strict=strict, sticky_scopes=sticky_scopes).parse()


def loads(source: bytes | str, strict: bool = False, sticky_scopes: bool = False) -> dict:
    """Parse *source* and return the assignments as plain Python values."""
    return parse_source(source, strict=strict, sticky_scopes=sticky_scopes).to_python()


def load(path: str, strict: bool = False, sticky_scopes: bool = False) -> dict:
    """Read the file at *path* and parse it like ``loads``.

    File errors (``FileNotFoundError`` and friends) propagate unchanged.
    """
    with open(path, "rb") as f:
        buffer = f.read()
    return loads(buffer, strict=strict, sticky_scopes=sticky_scopes)
