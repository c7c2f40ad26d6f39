"""
Error type for sari expression evaluation.
"""

from __future__ import annotations


class EvalError(Exception):
    """
    Raised when an expression cannot be evaluated.

    Carries a single human-readable message. Two errors are equal when their
    messages are equal; there are no error codes or categories beyond that.

    Examples:
    - unexpected character `%`
    - expected `)`
    - division by zero
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"EvalError({self.message!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EvalError):
            return NotImplemented
        return self.message == other.message

    def __hash__(self) -> int:
        return hash(self.message)
