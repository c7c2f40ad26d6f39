"""
Operator semantics for sari expressions.

All arithmetic is 32-bit two's complement: results that do not fit wrap
around instead of failing. Division truncates toward zero. The only
arithmetic error is division by zero.
"""

from __future__ import annotations

from enum import StrEnum

from sari.errors import EvalError
from sari.tokenizer import INT_MAX, TokenKind

INT_MIN = -INT_MAX - 1

_MODULUS = 2**32


class BinaryOp(StrEnum):
    """Binary operators for expressions."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"

    @classmethod
    def from_token_kind(cls, kind: TokenKind) -> BinaryOp:
        try:
            return _OPS_BY_KIND[kind]
        except KeyError:
            raise ValueError(f"not a binary operator: {kind}") from None


_OPS_BY_KIND: dict[TokenKind, BinaryOp] = {
    TokenKind.PLUS: BinaryOp.ADD,
    TokenKind.MINUS: BinaryOp.SUB,
    TokenKind.STAR: BinaryOp.MUL,
    TokenKind.SLASH: BinaryOp.DIV,
}


def wrap_i32(value: int) -> int:
    """Reinterpret an arbitrary integer as a 32-bit signed integer.

    >>> wrap_i32(INT_MAX + 1) == INT_MIN
    True
    """
    return (value - INT_MIN) % _MODULUS + INT_MIN


def apply(op: BinaryOp, left: int, right: int) -> int:
    """Apply a binary operator to two 32-bit operands.

    Args:
        op: Operator to apply.
        left: Left operand, already within 32-bit range.
        right: Right operand, already within 32-bit range.

    Returns:
        The wrapped 32-bit result.

    Raises:
        EvalError: If dividing by zero.
    """
    if op == BinaryOp.ADD:
        return wrap_i32(left + right)
    if op == BinaryOp.SUB:
        return wrap_i32(left - right)
    if op == BinaryOp.MUL:
        return wrap_i32(left * right)
    if op == BinaryOp.DIV:
        return _div(left, right)

    raise ValueError(f"Unknown binary op: {op}")


def _div(left: int, right: int) -> int:
    """Truncating division; INT_MIN / -1 wraps back to INT_MIN."""
    if right == 0:
        raise EvalError("division by zero")
    quotient = abs(left) // abs(right)
    if (left < 0) != (right < 0):
        quotient = -quotient
    return wrap_i32(quotient)
