"""
Tokenizer for field composition invocations.

Converts invocation text into a sequence of tokens with source location
tracking. Host-language expressions embedded in an invocation are tokenized
only far enough to find where they end; the parser slices their raw text back
out of the source using token offsets.
"""

from __future__ import annotations

import logging
import re
from enum import StrEnum, auto

from .errors import FieldSyntaxError, make_syntax_error

logger = logging.getLogger(__name__)


class TokenKind(StrEnum):
    """Token types for the field composition language."""

    # Literals
    IDENT = auto()
    NUMBER = auto()
    STRING = auto()
    LIFETIME = auto()  # 'a (rust only)

    # Keywords
    IN = auto()
    MUT = auto()
    FN = auto()
    FOR = auto()
    STRUCT = auto()
    WHERE = auto()
    PUB = auto()

    # Punctuation
    LBRACE = auto()
    RBRACE = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    LPAREN = auto()
    RPAREN = auto()
    COMMA = auto()
    COLON = auto()
    PATH_SEP = auto()  # ::
    DOT = auto()
    DOTDOT = auto()  # ..
    ARROW = auto()  # ->
    AMP = auto()  # &
    PLUS = auto()  # +
    GT = auto()  # >
    LT = auto()  # <
    ASSIGN = auto()  # =
    SHR = auto()  # >> (closes two generic lists in types)

    # Any other operator, carried through inside expressions
    OP = auto()

    # End of input
    EOF = auto()


class Token:
    """A single token with its offsets and 1-indexed line/column."""

    __slots__ = ("kind", "value", "pos", "end", "line", "column")

    def __init__(
        self, kind: TokenKind, value: str, pos: int, end: int, line: int, column: int
    ) -> None:
        self.kind = kind
        self.value = value
        self.pos = pos
        self.end = end
        self.line = line
        self.column = column

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value!r}, {self.line}:{self.column})"


_KEYWORDS: dict[str, TokenKind] = {
    "in": TokenKind.IN,
    "mut": TokenKind.MUT,
    "fn": TokenKind.FN,
    "for": TokenKind.FOR,
    "struct": TokenKind.STRUCT,
    "where": TokenKind.WHERE,
    "pub": TokenKind.PUB,
}

# Longest first so that `..=` wins over `..`
_MULTI_CHAR: list[tuple[str, TokenKind]] = [
    ("...", TokenKind.OP),
    ("..=", TokenKind.OP),
    ("..", TokenKind.DOTDOT),
    ("::", TokenKind.PATH_SEP),
    ("->", TokenKind.ARROW),
    (">>", TokenKind.SHR),
    ("=>", TokenKind.OP),
    ("==", TokenKind.OP),
    ("!=", TokenKind.OP),
    ("<=", TokenKind.OP),
    (">=", TokenKind.OP),
    ("**", TokenKind.OP),
    ("//", TokenKind.OP),
    ("&&", TokenKind.OP),
    ("||", TokenKind.OP),
    ("<<", TokenKind.OP),
    (":=", TokenKind.OP),
]

_SINGLE_CHAR: dict[str, TokenKind] = {
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ",": TokenKind.COMMA,
    ":": TokenKind.COLON,
    ".": TokenKind.DOT,
    "&": TokenKind.AMP,
    "+": TokenKind.PLUS,
    ">": TokenKind.GT,
    "<": TokenKind.LT,
    "=": TokenKind.ASSIGN,
}

_OPERATOR_CHARS = set("-*/%!^|~@?$;#")

# Numbers: ints, floats, and suffixed literals such as 42u32 or 0x1F
_NUMBER_RE = re.compile(r"[0-9][0-9a-zA-Z_]*(\.[0-9][0-9a-zA-Z_]*)?")
# Identifier: any unicode word not starting with a digit
_IDENT_RE = re.compile(r"[^\W\d]\w*")


class _Lexer:
    """Single-pass lexer tracking line and column."""

    def __init__(self, text: str, dialect: str, file: str) -> None:
        self.text = text
        self.dialect = dialect
        self.file = file
        self.pos = 0
        self.line = 1
        self.line_start = 0
        self.tokens: list[Token] = []

    @property
    def column(self) -> int:
        return self.pos - self.line_start + 1

    def error(self, message: str, pos: int | None = None) -> FieldSyntaxError:
        if pos is None:
            pos = self.pos
        line = self.text.count("\n", 0, pos) + 1
        column = pos - (self.text.rfind("\n", 0, pos) + 1) + 1
        return make_syntax_error(message, self.text, line, column, self.file)

    def emit(self, kind: TokenKind, end: int) -> None:
        value = self.text[self.pos : end]
        self.tokens.append(Token(kind, value, self.pos, end, self.line, self.column))
        self.advance_to(end)

    def advance_to(self, end: int) -> None:
        newlines = self.text.count("\n", self.pos, end)
        if newlines:
            self.line += newlines
            self.line_start = self.text.rfind("\n", self.pos, end) + 1
        self.pos = end

    def skip_comment(self) -> bool:
        """Skip a line comment in the dialect's syntax, if one starts here."""
        marker = "//" if self.dialect == "rust" else "#"
        if not self.text.startswith(marker, self.pos):
            return False
        end = self.text.find("\n", self.pos)
        self.pos = len(self.text) if end == -1 else end
        return True

    def tokenize(self) -> list[Token]:
        text = self.text
        n = len(text)

        while self.pos < n:
            c = text[self.pos]

            if c in " \t\r\n":
                self.advance_to(self.pos + 1)
                continue

            if self.skip_comment():
                continue

            if c == "'" and self.dialect == "rust":
                m = _IDENT_RE.match(text, self.pos + 1)
                if m and not text.startswith("'", m.end()):
                    self.emit(TokenKind.LIFETIME, m.end())
                    continue

            if c in ('"', "'"):
                self.emit(TokenKind.STRING, self._string_end())
                continue

            m = _NUMBER_RE.match(text, self.pos)
            if m:
                self.emit(TokenKind.NUMBER, m.end())
                continue

            m = _IDENT_RE.match(text, self.pos)
            if m:
                if not m.group(0).isidentifier():
                    raise self.error(f"Invalid identifier: {m.group(0)!r}")
                kind = _KEYWORDS.get(m.group(0), TokenKind.IDENT)
                self.emit(kind, m.end())
                continue

            for op, kind in _MULTI_CHAR:
                if text.startswith(op, self.pos):
                    self.emit(kind, self.pos + len(op))
                    break
            else:
                if c in _SINGLE_CHAR:
                    self.emit(_SINGLE_CHAR[c], self.pos + 1)
                elif c in _OPERATOR_CHARS:
                    self.emit(TokenKind.OP, self.pos + 1)
                else:
                    raise self.error(f"Unexpected character: {c!r}")

        self.tokens.append(Token(TokenKind.EOF, "", n, n, self.line, self.column))
        return self.tokens

    def _string_end(self) -> int:
        """Return the offset just past the string literal starting here."""
        text = self.text
        quote = text[self.pos]
        if text.startswith(quote * 3, self.pos):
            end = text.find(quote * 3, self.pos + 3)
            if end == -1:
                raise self.error("Unterminated string literal")
            return end + 3

        i = self.pos + 1
        while i < len(text):
            c = text[i]
            if c == "\\":
                i += 2
                continue
            if c == quote:
                return i + 1
            if c == "\n" and self.dialect == "python":
                break
            i += 1
        raise self.error("Unterminated string literal")


def tokenize(text: str, dialect: str = "python", file: str = "<input>") -> list[Token]:
    """
    Tokenize invocation text.

    Args:
        text: Invocation source
        dialect: Host dialect, which decides comment syntax and lifetimes
        file: Source name used in error locations

    Returns:
        Tokens ending with an EOF token.

    Raises:
        FieldSyntaxError: On characters that start no token or unterminated strings.
    """
    tokens = _Lexer(text, dialect, file).tokenize()
    logger.debug("Tokenized %d characters into %d tokens", len(text), len(tokens))
    return tokens
