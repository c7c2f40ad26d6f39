"""
Recursive descent parser for sari expressions.

Grammar (precedence low to high):
    expression  → term (("+" | "-") term)*
    term        → factor (("*" | "/") factor)*
    factor      → INT | "-" INT | "(" expression ")"

The parser does not build a syntax tree. Every rule returns the value of
the text it consumed, so each operator is applied as soon as both of its
operands are known. A "-" directly followed by digits is a negative literal;
there is no general unary minus.
"""

from __future__ import annotations

from collections.abc import Iterable

from sari.errors import EvalError
from sari.evaluator import BinaryOp, apply
from sari.tokenizer import Token, TokenKind, tokenize

# Each level of parentheses costs three stack frames
MAX_NESTING = 200

EXPECTED_OPERAND = "expected integer literal or `(`"
EXPECTED_RPAREN = "expected `)`"
EXPECTED_END = "expected end of input"
NESTED_TOO_DEEPLY = "expression nested too deeply"


class _Parser:
    """Recursive descent parser that evaluates as it reduces."""

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens = iter(tokens)
        self._peeked: Token | None = None
        self._has_peeked = False
        self.depth = 0

    @property
    def current(self) -> Token | None:
        """Next unconsumed token, scanned on first access; None at end of input."""
        if not self._has_peeked:
            self._peeked = next(self._tokens, None)
            self._has_peeked = True
        return self._peeked

    def advance(self) -> Token | None:
        tok = self.current
        self._has_peeked = False
        return tok

    def match(self, *kinds: TokenKind) -> Token | None:
        tok = self.current
        if tok is not None and tok.kind in kinds:
            return self.advance()
        return None

    # -- Grammar rules --

    def parse_expression(self) -> int:
        """term (('+' | '-') term)*"""
        left = self.parse_term()
        while (tok := self.match(TokenKind.PLUS, TokenKind.MINUS)) is not None:
            right = self.parse_term()
            left = apply(BinaryOp.from_token_kind(tok.kind), left, right)
        return left

    def parse_term(self) -> int:
        """factor (('*' | '/') factor)*"""
        left = self.parse_factor()
        while (tok := self.match(TokenKind.STAR, TokenKind.SLASH)) is not None:
            right = self.parse_factor()
            left = apply(BinaryOp.from_token_kind(tok.kind), left, right)
        return left

    def parse_factor(self) -> int:
        """INT | '-' INT | '(' expression ')'"""
        tok = self.advance()
        if tok is None:
            raise EvalError(EXPECTED_OPERAND)

        if tok.kind == TokenKind.INT:
            assert tok.value is not None
            return tok.value

        if tok.kind == TokenKind.MINUS:
            literal = self.current
            if (
                literal is not None
                and literal.kind == TokenKind.INT
                and literal.span.start == tok.span.end
            ):
                self.advance()
                assert literal.value is not None
                return -literal.value
            raise EvalError(EXPECTED_OPERAND)

        if tok.kind == TokenKind.LPAREN:
            if self.depth >= MAX_NESTING:
                raise EvalError(NESTED_TOO_DEEPLY)
            self.depth += 1
            value = self.parse_expression()
            if self.match(TokenKind.RPAREN) is None:
                raise EvalError(EXPECTED_RPAREN)
            self.depth -= 1
            return value

        raise EvalError(EXPECTED_OPERAND)


def evaluate(source: str) -> int:
    """Evaluate an expression string.

    Args:
        source: Expression string (e.g., "(1 + 2) * 3")

    Returns:
        The 32-bit signed result.

    Raises:
        EvalError: On the first lexical, syntax or arithmetic error found.
    """
    parser = _Parser(tokenize(source))
    value = parser.parse_expression()

    # Ensure all tokens consumed
    if parser.current is not None:
        raise EvalError(EXPECTED_END)

    return value
