"""KFG parser — recursive-descent parser producing an Ast from filtered tokens."""

from __future__ import annotations

import math
import re

from kfg.lexer import Token, TokenType
from kfg.errors import ParseError, NumberFormatError
from kfg.ast_nodes import (
    Ast,
    Node,
    String,
    Integer,
    Float,
    Bool,
    Null,
    Array,
    Dict,
)


INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

BOOLEANS: dict[str, bool] = {
    "true": True,
    "false": False,
}

# Tokens allowed between the elements of an array or the entries of a dict.
SEPARATORS = (TokenType.COMMA, TokenType.NEWLINE)


# ASCII only: no padding, no underscores, no non-ASCII digits.
DECIMAL_RE = re.compile(r"[+-]?[0-9]+")
PREFIXED_RE = re.compile(r"[+-]?0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")
FLOAT_RE = re.compile(r"[+-]?[0-9]+\.[0-9]+(?:[eE][+-]?[0-9]+)?")


def _parse_int(text: str) -> int | None:
    """Decimal (leading zeros allowed), or ``0x``/``0o``/``0b`` prefixed."""
    if DECIMAL_RE.fullmatch(text):
        return int(text, 10)
    if PREFIXED_RE.fullmatch(text):
        return int(text, 0)
    return None


def _parse_float(text: str) -> float | None:
    if not FLOAT_RE.fullmatch(text):
        return None
    return float(text)


def _adjacent(left: Token, right: Token) -> bool:
    """True when *right* starts exactly where *left* ends on the same line."""
    return left.line == right.line and left.column + left.length == right.column


class Parser:
    """Recursive-descent parser for KFG.

    Consumes the token list produced by ``filter_tokens`` and builds an
    ``Ast``.  The first malformed construct raises ``ParseError``; there
    is no recovery.

    ``strict`` controls what happens to an array element or dict entry
    whose scalar fails to parse (``[1 null 2]``).  By default it is
    dropped and the error is recorded in ``skipped``; in strict mode it
    is raised.

    ``sticky_scopes`` keeps every ``name::`` declaration active for the
    rest of the file.  Without it the scope stack is consumed by the next
    assignment.
    """

    def __init__(self, tokens: list[Token], strict: bool = False, sticky_scopes: bool = False) -> None:
        self.tokens = tokens
        self.pos: int = 0
        self.strict = strict
        self.sticky_scopes = sticky_scopes
        self.scopes: list[str] = []
        self.skipped: list[ParseError] = []

    # -- Navigation helpers ------------------------------------------------

    def current(self) -> Token | None:
        """Return the token at the current position, or None past the end."""
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def peek(self, offset: int = 1) -> Token | None:
        idx = self.pos + offset
        if idx < len(self.tokens):
            return self.tokens[idx]
        return None

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    @staticmethod
    def error(message: str, tok: Token) -> ParseError:
        return ParseError(message, tok.line, tok.column, tok.length, tok)

    # -- Top-level ---------------------------------------------------------

    def parse(self) -> Ast:
        """Parse the full token list into an ``Ast``."""
        ast = Ast()
        while not self.at_end():
            tok = self.current()

            if tok.type == TokenType.NEWLINE:
                self.advance()
                continue

            if tok.type == TokenType.DOT:
                raise self.error("Dots are only allowed inside dictionaries", tok)

            if tok.type == TokenType.SYMBOL:
                self.parse_declaration(ast)
                continue

            raise self.error(f"Unexpected {tok.type.name} ({tok.value!r}) at top level", tok)
        return ast

    def parse_declaration(self, ast: Ast) -> None:
        """Parse ``key = value`` or ``key::`` starting at a SYMBOL."""
        key = self.advance()

        if self.at_end():
            raise self.error(f"Missing declaration after symbol {key.value!r}", key)

        tok = self.advance()

        if tok.type == TokenType.EQUALS:
            if self.at_end():
                raise self.error(f"Missing value after key {key.value!r}", key)
            node = self.parse_value()
            self._bind(ast, key.value, node)
            return

        if tok.type == TokenType.COLON:
            if self.at_end():
                raise self.error(f"Missing ':' after {key.value!r}", tok)
            second = self.advance()
            if second.type != TokenType.COLON:
                raise self.error(
                    f"Invalid symbol {second.value!r} after {key.value!r}:, expected ':'",
                    second,
                )
            self.scopes.append(key.value)
            return

        raise self.error(
            f"Expected '=' or '::' after {key.value!r} but got {tok.type.name} ({tok.value!r})",
            tok,
        )

    def _bind(self, ast: Ast, key: str, node: Node) -> None:
        """Store *node* under *key*, nested inside the active scopes."""
        if not self.scopes:
            ast.assignments[key] = node
            return

        for name in reversed(self.scopes[1:] + [key]):
            node = Dict({name: node})

        root = self.scopes[0]
        existing = ast.assignments.get(root)
        if isinstance(existing, Dict):
            existing.merge(node)
        else:
            ast.assignments[root] = node

        if not self.sticky_scopes:
            self.scopes = []

    # -- Values ------------------------------------------------------------

    def parse_value(self) -> Node:
        """Dispatch on the current token to the matching value parser."""
        tok = self.current()

        if tok.type == TokenType.LBRACKET:
            return self.parse_array()
        if tok.type == TokenType.LBRACE:
            return self.parse_dict()
        if tok.type == TokenType.QUOTE:
            return self.parse_string()
        if tok.type == TokenType.SYMBOL:
            return self.parse_symbol()

        raise self.error(f"Expected a value but got {tok.type.name} ({tok.value!r})", tok)

    def _parse_element(self) -> Node:
        """Parse a value inside an array or dict.

        In lenient mode a scalar that is neither number nor bool comes back
        as ``Null`` so the caller can leave it out.  Malformed structure,
        such as a dot with no decimal part, is raised in either mode.
        """
        if self.strict or self.current().type != TokenType.SYMBOL:
            return self.parse_value()
        try:
            return self.parse_symbol()
        except NumberFormatError as e:
            self.skipped.append(e)
            return Null()

    def _not_a_number(self, text: str, tok: Token, reason: str = "is not a number") -> NumberFormatError:
        return NumberFormatError(f"{text!r} {reason}", tok.line, tok.column, tok.length, tok)

    def parse_symbol(self) -> Node:
        """Parse an integer, float or bool from a SYMBOL token.

        A float is written as two symbols around a dot with no spaces in
        between (``1.5``); the dot in ``{.a: 1 .b: 2}`` belongs to the next
        dict entry instead.
        """
        tok = self.advance()
        dot = self.current()

        if dot is not None and dot.type == TokenType.DOT and _adjacent(tok, dot):
            self.advance()  # consume .
            right = self.current()
            if right is None or right.type != TokenType.SYMBOL or not _adjacent(dot, right):
                raise self.error(f"Missing decimal part of float value {tok.value!r}", dot)
            self.advance()
            text = f"{tok.value}.{right.value}"
            value = _parse_float(text)
            if value is None:
                raise self._not_a_number(text, tok)
            if math.isinf(value):
                raise self._not_a_number(text, tok, "is out of range for a 64-bit float")
            return Float(value)

        value = _parse_int(tok.value)
        if value is not None:
            if not INT64_MIN <= value <= INT64_MAX:
                raise self._not_a_number(tok.value, tok, "does not fit in a 64-bit integer")
            return Integer(value)

        if tok.value in BOOLEANS:
            return Bool(BOOLEANS[tok.value])

        raise self._not_a_number(tok.value, tok)

    def parse_string(self) -> String:
        """Parse ``'...'``, taking every token up to the closing quote literally."""
        opening = self.advance()  # consume '
        parts: list[str] = []

        while True:
            tok = self.current()
            if tok is None:
                raise self.error("Unclosed string", opening)
            if tok.type == TokenType.QUOTE:
                self.advance()
                break
            if tok.type == TokenType.NEWLINE:
                raise self.error("Broken string, newline before closing quote", tok)
            parts.append(tok.value)
            self.advance()

        return String("".join(parts))

    def parse_array(self) -> Array:
        """Parse ``[ value* ]``; commas and newlines between values are ignored."""
        opening = self.advance()  # consume [
        elements: list[Node] = []

        while True:
            tok = self.current()
            if tok is None:
                raise self.error("Unclosed array", opening)
            if tok.type == TokenType.RBRACKET:
                self.advance()
                break
            if tok.type in SEPARATORS:
                self.advance()
                continue

            node = self._parse_element()
            if not isinstance(node, Null):
                elements.append(node)

        return Array(elements)

    def parse_dict(self) -> Dict:
        """Parse ``{ .name: value ... }``."""
        opening = self.advance()  # consume {
        entries: dict[str, Node] = {}

        while True:
            tok = self.current()
            if tok is None:
                raise self.error("Unclosed dict", opening)
            if tok.type == TokenType.RBRACE:
                self.advance()
                break
            if tok.type in SEPARATORS:
                self.advance()
                continue

            if tok.type != TokenType.DOT:
                raise self.error(
                    f"Expected '.' before dictionary key but got {tok.type.name} ({tok.value!r})",
                    tok,
                )
            self.advance()  # consume .

            key = self.current()
            if key is None:
                raise self.error("Missing variable name after '.'", tok)
            if key.type != TokenType.SYMBOL:
                raise self.error(f"Invalid token {key.type.name}, expected SYMBOL", key)
            self.advance()

            colon = self.current()
            if colon is None:
                raise self.error(f"Missing ':' after dictionary key {key.value!r}", key)
            if colon.type != TokenType.COLON:
                raise self.error(f"Invalid token {colon.type.name}, expected COLON", colon)
            self.advance()

            value = self.current()
            if value is None:
                raise self.error(f"Missing value for dictionary key {key.value!r}", colon)
            if value.type == TokenType.COLON:
                raise self.error("Nested declarations are not allowed inside dictionaries", value)

            node = self._parse_element()
            if not isinstance(node, Null):
                entries[key.value] = node

        return Dict(entries)


def parse(tokens: list[Token], strict: bool = False, sticky_scopes: bool = False) -> Ast:
    """Convenience: parse filtered *tokens* in one call."""
    return Parser(tokens, strict=strict, sticky_scopes=sticky_scopes).parse()
