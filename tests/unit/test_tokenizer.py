"""Tests for the sari tokenizer."""

from __future__ import annotations

import pytest

from sari.errors import EvalError
from sari.source import SourceMap, Span
from sari.tokenizer import Token, TokenKind, TokenStream, tokenize


def kinds(source: str) -> list[TokenKind]:
    return [t.kind for t in tokenize(source)]


class TestTokenizer:
    """Tokenizer produces correct token sequences."""

    def test_empty_input(self) -> None:
        assert list(tokenize("")) == []

    def test_whitespace_only(self) -> None:
        assert list(tokenize(" \t\r\n ")) == []

    def test_integer(self) -> None:
        tokens = list(tokenize("42"))
        assert tokens == [Token(TokenKind.INT, Span(0, 2), 42)]

    def test_operators(self) -> None:
        assert kinds("+ - * /") == [
            TokenKind.PLUS,
            TokenKind.MINUS,
            TokenKind.STAR,
            TokenKind.SLASH,
        ]

    def test_punctuation(self) -> None:
        assert kinds("()") == [TokenKind.LPAREN, TokenKind.RPAREN]

    def test_operator_tokens_have_no_value(self) -> None:
        assert all(t.value is None for t in tokenize("+-*/()"))

    def test_whitespace_handling(self) -> None:
        tokens = list(tokenize("  1  +\t2\n"))
        assert [t.kind for t in tokens] == [TokenKind.INT, TokenKind.PLUS, TokenKind.INT]
        assert [t.span for t in tokens] == [Span(2, 3), Span(5, 6), Span(7, 8)]

    def test_maximal_digit_run(self) -> None:
        tokens = list(tokenize("123+4"))
        assert tokens[0] == Token(TokenKind.INT, Span(0, 3), 123)
        assert tokens[2] == Token(TokenKind.INT, Span(4, 5), 4)

    def test_leading_zeros(self) -> None:
        tokens = list(tokenize("007"))
        assert tokens == [Token(TokenKind.INT, Span(0, 3), 7)]

    def test_minus_is_always_an_operator_token(self) -> None:
        assert kinds("-7") == [TokenKind.MINUS, TokenKind.INT]

    def test_spans_are_contiguous_and_increasing(self) -> None:
        source = "(12 + 3)*45 / 6"
        tokens = list(tokenize(source))
        for prev, nxt in zip(tokens, tokens[1:]):
            assert prev.span.end <= nxt.span.start
        for tok in tokens:
            text = source[tok.span.start : tok.span.end]
            assert text.strip() == text
            if tok.kind == TokenKind.INT:
                assert int(text) == tok.value


class TestTokenizerLiteralRange:
    """Integer literals must fit a 32-bit signed integer."""

    def test_max_value(self) -> None:
        tokens = list(tokenize("2147483647"))
        assert tokens[0].value == 2147483647

    def test_one_past_max(self) -> None:
        with pytest.raises(EvalError) as exc_info:
            list(tokenize("2147483648"))
        assert exc_info.value == EvalError("integer literal `2147483648` out of range")

    def test_max_value_with_leading_zeros(self) -> None:
        tokens = list(tokenize("0002147483647"))
        assert tokens[0].value == 2147483647

    def test_very_long_literal(self) -> None:
        with pytest.raises(EvalError, match="out of range"):
            list(tokenize("9" * 10_000))

    def test_very_long_zero_padded_literal(self) -> None:
        tokens = list(tokenize("0" * 10_000 + "5"))
        assert tokens[0].value == 5


class TestTokenizerErrors:
    """Characters that cannot start a token are rejected."""

    @pytest.mark.parametrize("char", ["%", "a", "x", ".", "^", "@", "=", "‰"])
    def test_unexpected_character(self, char: str) -> None:
        with pytest.raises(EvalError) as exc_info:
            list(tokenize(char))
        assert exc_info.value.message == f"unexpected character `{char}`"

    def test_non_ascii_digit(self) -> None:
        with pytest.raises(EvalError, match="unexpected character"):
            list(tokenize("²"))

    def test_error_raised_when_reached(self) -> None:
        stream = iter(tokenize("1 + %"))
        assert next(stream).kind == TokenKind.INT
        assert next(stream).kind == TokenKind.PLUS
        with pytest.raises(EvalError, match="unexpected character `%`"):
            next(stream)


class TestTokenStream:
    """Token streams are lazy and restartable."""

    def test_tokenize_returns_stream(self) -> None:
        stream = tokenize("1 + 2")
        assert isinstance(stream, TokenStream)
        assert stream.source == "1 + 2"

    def test_restartable(self) -> None:
        stream = tokenize("(1 + 2) * 3")
        assert list(stream) == list(stream)

    def test_lazy_scan(self) -> None:
        # Creating the stream never scans; iteration reaches the bad character
        stream = tokenize("%")
        with pytest.raises(EvalError):
            list(stream)

    def test_records_line_starts(self) -> None:
        source_map = SourceMap()
        list(tokenize("1 +\n2 +\n3", source_map))
        assert source_map.line_starts == [0, 4, 8]

    def test_restart_does_not_duplicate_line_starts(self) -> None:
        source_map = SourceMap()
        stream = tokenize("1\n+\n2", source_map)
        list(stream)
        list(stream)
        assert source_map.line_starts == [0, 2, 4]
