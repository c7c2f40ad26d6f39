"""Shared pytest fixtures for sari tests."""

from __future__ import annotations

import pytest

_NEXT_OP = {"+": "*", "-": "/", "*": "-", "/": "+"}


def generate_expr(depth: int, start: int = 1, op: str = "+") -> str:
    """Build a balanced expression tree of the given depth as text.

    Leaves are consecutive integers starting at ``start``; operators cycle
    through + * - / by level, and additive subexpressions below the top are
    parenthesized so the text parses back into the same tree.
    """
    if depth == 0:
        return str(start)

    child_op = _NEXT_OP[op]
    child_depth = depth - 1
    use_parens = child_depth > 0 and child_op in ("+", "-")

    left = generate_expr(child_depth, start, child_op)
    right = generate_expr(child_depth, start + 2**child_depth, child_op)
    if use_parens:
        left, right = f"({left})", f"({right})"
    return f"{left} {op} {right}"


@pytest.fixture
def isolated_cwd(tmp_path, monkeypatch):
    """Run in an empty directory with no sari environment variables set."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SARI_FAIL_FAST", raising=False)
    monkeypatch.delenv("SARI_LOG_LEVEL", raising=False)
    return tmp_path


@pytest.fixture
def expr_generator():
    """The nested-expression builder, for stress tests."""
    return generate_expr
