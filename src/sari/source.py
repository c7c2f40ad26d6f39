"""
Source positions for sari expressions.

Tokens carry a ``Span`` of character offsets. A ``SourceMap`` filled in by the
tokenizer turns those offsets into line/column positions for display:

    source_map = SourceMap()
    tokens = list(tokenize("1 +\\n2", source_map))
    source_map.map_span(tokens[2].span)  # 2:1-2:2
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import total_ordering


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open range of character offsets ``[start, end)``."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"span start {self.start} is after end {self.end}")

    def cover(self, other: Span) -> Span:
        """Smallest span containing both spans."""
        return Span(min(self.start, other.start), max(self.end, other.end))


@total_ordering
@dataclass(frozen=True, slots=True, eq=False)
class SourcePos:
    """
    Position in source text.

    Attributes:
        offset: Character offset (0-indexed)
        line: Line number (1-indexed)
        column: Column number (1-indexed)

    Equality and ordering use the offset only; line and column are derived
    from it.
    """

    offset: int
    line: int
    column: int

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SourcePos):
            return NotImplemented
        return self.offset == other.offset

    def __lt__(self, other: SourcePos) -> bool:
        return self.offset < other.offset

    def __hash__(self) -> int:
        return hash(self.offset)

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Range between two source positions, start inclusive, end exclusive."""

    start: SourcePos
    end: SourcePos

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(f"span end {self.end} is before start {self.start}")

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass
class SourceMap:
    """Line-start offsets of a source text; there is always a line at 0."""

    line_starts: list[int] = field(default_factory=lambda: [0])

    def add_line_start(self, offset: int) -> None:
        if offset <= self.line_starts[-1]:
            raise ValueError(
                f"line start {offset} must follow previous line start {self.line_starts[-1]}"
            )
        self.line_starts.append(offset)

    def map_pos(self, offset: int) -> SourcePos:
        # Greatest line start <= offset
        lo, hi = 0, len(self.line_starts)
        while hi - lo > 1:
            mid = (lo + hi) // 2
            if self.line_starts[mid] <= offset:
                lo = mid
            else:
                hi = mid
        return SourcePos(offset, lo + 1, offset - self.line_starts[lo] + 1)

    def map_span(self, span: Span) -> SourceSpan:
        return SourceSpan(self.map_pos(span.start), self.map_pos(span.end))
