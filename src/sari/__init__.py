"""
sari - simple arithmetic expression evaluator.

Evaluates integers combined with +, -, *, / and parentheses, using wrapping
32-bit signed arithmetic.

Usage:
    import sari

    sari.evaluate("(1 + 2) * 3")  # 9

    try:
        sari.evaluate("1 / 0")
    except sari.EvalError as e:
        print(e)  # division by zero
"""

from __future__ import annotations

from sari._version import get_version
from sari.errors import EvalError
from sari.parser import evaluate
from sari.source import SourceMap, SourcePos, SourceSpan, Span
from sari.tokenizer import Token, TokenKind, TokenStream, tokenize

__version__ = get_version()

__all__ = [
    "__version__",
    "evaluate",
    "EvalError",
    "tokenize",
    "Token",
    "TokenKind",
    "TokenStream",
    "SourceMap",
    "SourcePos",
    "SourceSpan",
    "Span",
]
