"""KFG lexer — scans raw bytes into tokens and filters out comments and spaces."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


# ---------------------------------------------------------------------------
# Token types
# ---------------------------------------------------------------------------

class TokenType(Enum):
    # Punctuation
    DOT = auto()           # .
    COMMA = auto()         # ,
    COLON = auto()         # :
    QUOTE = auto()         # '
    SLASH = auto()         # /
    ASTERISK = auto()      # *
    EQUALS = auto()        # =

    # Delimiters
    LBRACKET = auto()      # [
    RBRACKET = auto()      # ]
    LBRACE = auto()        # {
    RBRACE = auto()        # }

    # Whitespace
    SPACE = auto()
    NEWLINE = auto()

    # Any run of bytes that is none of the above
    SYMBOL = auto()


# ---------------------------------------------------------------------------
# Byte lookup
# ---------------------------------------------------------------------------

PUNCTUATION: dict[int, TokenType] = {
    ord("."): TokenType.DOT,
    ord(","): TokenType.COMMA,
    ord(":"): TokenType.COLON,
    ord("'"): TokenType.QUOTE,
    ord("/"): TokenType.SLASH,
    ord("*"): TokenType.ASTERISK,
    ord(" "): TokenType.SPACE,
    ord("="): TokenType.EQUALS,
    ord("\n"): TokenType.NEWLINE,
    ord("["): TokenType.LBRACKET,
    ord("]"): TokenType.RBRACKET,
    ord("{"): TokenType.LBRACE,
    ord("}"): TokenType.RBRACE,
}


def token_type_of(byte: int) -> TokenType:
    """Classify a single byte."""
    return PUNCTUATION.get(byte, TokenType.SYMBOL)


# ---------------------------------------------------------------------------
# Token dataclasses
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Position:
    line: int
    column: int
    length: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}-{self.length}"


@dataclass
class Token:
    type: TokenType
    value: str
    position: Position

    @property
    def line(self) -> int:
        return self.position.line

    @property
    def column(self) -> int:
        return self.position.column

    @property
    def length(self) -> int:
        return self.position.length

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.position})"


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------

class Tokenizer:
    """Scans a KFG byte buffer and produces a flat list of Token objects.

    Every byte ends up in exactly one token, spaces and newlines included;
    a CRLF pair is a single NEWLINE token.
    This pass has no error conditions.
    """

    def __init__(self, buffer: bytes | str) -> None:
        if isinstance(buffer, str):
            buffer = buffer.encode("utf-8")
        self.buffer = buffer
        self.pos: int = 0
        self.line: int = 1
        self.column: int = 0

    # -- Byte-level helpers ------------------------------------------------

    def _current(self) -> int:
        return self.buffer[self.pos]

    def at_end(self) -> bool:
        return self.pos >= len(self.buffer)

    def _crlf_at(self, index: int) -> bool:
        return self.buffer[index:index + 2] == b"\r\n"

    # -- Main entry point --------------------------------------------------

    def tokenize(self) -> list[Token]:
        """Scan the entire buffer and return its tokens in source order."""
        tokens: list[Token] = []

        while not self.at_end():
            token_type = token_type_of(self._current())

            if self._crlf_at(self.pos):
                tokens.append(self._emit(TokenType.NEWLINE, "\r\n", 2))
                self.line += 1
                self.column = 0
                continue

            if token_type == TokenType.SYMBOL:
                tokens.append(self._read_symbol())
                continue

            tokens.append(self._emit(token_type, chr(self._current()), 1))

            if token_type == TokenType.NEWLINE:
                self.line += 1
                self.column = 0

        return tokens

    # -- Token readers -----------------------------------------------------

    def _emit(self, token_type: TokenType, value: str, length: int) -> Token:
        token = Token(token_type, value, Position(self.line, self.column, length))
        self.pos += length
        self.column += length
        return token

    def _read_symbol(self) -> Token:
        """Greedily consume a run of non-punctuation bytes, stopping at a CRLF."""
        end = self.pos
        while (
            end < len(self.buffer)
            and token_type_of(self.buffer[end]) == TokenType.SYMBOL
            and not self._crlf_at(end)
        ):
            end += 1
        raw = self.buffer[self.pos:end]
        return self._emit(TokenType.SYMBOL, raw.decode("utf-8", errors="replace"), end - self.pos)


def tokenize(buffer: bytes | str) -> list[Token]:
    """Convenience: tokenize *buffer* in one call."""
    return Tokenizer(buffer).tokenize()


# ---------------------------------------------------------------------------
# Lexical filter
# ---------------------------------------------------------------------------

class _Mode(Enum):
    CODE = auto()
    LINE_COMMENT = auto()
    BLOCK_COMMENT = auto()
    STRING = auto()


def filter_tokens(tokens: list[Token]) -> list[Token]:
    """Strip comments and spaces, leaving the tokens the parser cares about.

    ``//`` runs to the end of the line (the NEWLINE goes with it) and
    ``/* ... */`` spans lines without nesting.  A quote toggles string mode,
    inside which every token is kept untouched.  Positions are not altered.
    """
    kept: list[Token] = []
    mode = _Mode.CODE

    for i, tok in enumerate(tokens):
        if mode == _Mode.LINE_COMMENT:
            if tok.type == TokenType.NEWLINE:
                mode = _Mode.CODE
            continue

        if mode == _Mode.BLOCK_COMMENT:
            if (
                tok.type == TokenType.SLASH
                and tokens[i - 1].type == TokenType.ASTERISK
                and tokens[i - 2].type != TokenType.SLASH
            ):
                mode = _Mode.CODE
            continue

        if mode == _Mode.STRING:
            if tok.type == TokenType.QUOTE:
                mode = _Mode.CODE
            kept.append(tok)
            continue

        if tok.type == TokenType.SLASH and i + 1 < len(tokens):
            following = tokens[i + 1].type
            if following == TokenType.SLASH:
                mode = _Mode.LINE_COMMENT
                continue
            if following == TokenType.ASTERISK:
                mode = _Mode.BLOCK_COMMENT
                continue

        if tok.type == TokenType.QUOTE:
            mode = _Mode.STRING

        if tok.type != TokenType.SPACE:
            kept.append(tok)

    return kept


def lex(buffer: bytes | str) -> list[Token]:
    """Tokenize and filter *buffer*: the token list the parser consumes."""
    return filter_tokens(tokenize(buffer))
