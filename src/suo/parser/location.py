"""
Source locations for tokens and AST nodes.

Lines are 1-indexed, columns are 0-indexed. Offsets index into the
normalized source (BOM stripped, line endings folded to \\n).
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """A single point in source text."""
    line: int
    column: int

    def __repr__(self):
        return f"L{self.line}:{self.column}"


@dataclass(frozen=True)
class SourceLocation:
    start: Position
    end: Position


@dataclass(frozen=True)
class Span:
    """Half-open offset range [start, end) plus its line/column location."""
    start: int
    end: int
    loc: SourceLocation

    @property
    def line(self) -> int:
        return self.loc.start.line

    @property
    def column(self) -> int:
        return self.loc.start.column

    @property
    def range(self):
        return (self.start, self.end)

    def to(self, other: "Span") -> "Span":
        """Span covering from the start of self to the end of other."""
        return Span(self.start, other.end, SourceLocation(self.loc.start, other.loc.end))
