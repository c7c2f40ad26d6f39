"""
Tokenizer for sari expressions.

Turns an expression string into a lazy sequence of typed tokens. Tokens are
produced on demand; iterating a ``TokenStream`` again rescans from the start.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum, auto

from sari.errors import EvalError
from sari.source import SourceMap, Span

INT_MAX = 2**31 - 1


class TokenKind(StrEnum):
    """Token types for the expression language."""

    # Literals
    INT = auto()

    # Operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()


@dataclass(frozen=True, slots=True)
class Token:
    """A single token and the span of input it was scanned from."""

    kind: TokenKind
    span: Span
    value: int | None = None

    def __repr__(self) -> str:
        if self.value is None:
            return f"Token({self.kind}, {self.span.start}..{self.span.end})"
        return f"Token({self.kind}, {self.value}, {self.span.start}..{self.span.end})"


_SINGLE_CHAR: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}

_WHITESPACE = " \t\r\n"

# ASCII only: str.isdigit() also accepts superscripts and other scripts
_INT_RE = re.compile(r"[0-9]+")


class TokenStream:
    """Restartable, lazily scanned token sequence over one source string."""

    __slots__ = ("source", "source_map")

    def __init__(self, source: str, source_map: SourceMap | None = None) -> None:
        self.source = source
        self.source_map = source_map

    def __iter__(self) -> Iterator[Token]:
        return _scan(self.source, self.source_map)

    def __repr__(self) -> str:
        return f"TokenStream({self.source!r})"


def tokenize(source: str, source_map: SourceMap | None = None) -> TokenStream:
    """Tokenize an expression string.

    Args:
        source: Expression string (e.g., "(1 + 2) * 3")
        source_map: Optional map that records line starts while scanning.

    Returns:
        A token stream. Scanning errors are raised while iterating it, when
        the offending character is reached.
    """
    return TokenStream(source, source_map)


def _scan(source: str, source_map: SourceMap | None) -> Iterator[Token]:
    i = 0
    n = len(source)
    # A restarted scan must not re-record lines the map already holds
    recorded = source_map.line_starts[-1] if source_map is not None else 0

    while i < n:
        c = source[i]

        if c in _WHITESPACE:
            i += 1
            if c == "\n" and source_map is not None and i > recorded:
                source_map.add_line_start(i)
                recorded = i
            continue

        if "0" <= c <= "9":
            m = _INT_RE.match(source, i)
            assert m is not None
            digits = m.group(0)
            # Length check first: int() refuses very long digit strings
            significant = digits.lstrip("0") or "0"
            if len(significant) > len(str(INT_MAX)) or int(significant) > INT_MAX:
                raise EvalError(f"integer literal `{digits}` out of range")
            value = int(significant)
            yield Token(TokenKind.INT, Span(i, m.end()), value)
            i = m.end()
            continue

        kind = _SINGLE_CHAR.get(c)
        if kind is None:
            raise EvalError(f"unexpected character `{c}`")
        yield Token(kind, Span(i, i + 1))
        i += 1
