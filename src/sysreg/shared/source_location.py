"""
Source Location (Span)

Locations are carried over from the ESTree `loc` objects produced by the
upstream parser. ESTree columns are 0-based; `SourceLocation` stores them
1-based so `file:line:column` reads like every other compiler diagnostic.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLocation:
    """
    Source location of a syntax tree node.

    - File (module relative path), 1-based line and column
    - Optional end position when the parser supplied one
    - Immutable (frozen) for hashability
    """
    file: str
    line: int
    column: int
    end_line: int = 0
    end_column: int = 0

    def __str__(self) -> str:
        """Format as file:line:column"""
        return f"{self.file}:{self.line}:{self.column}"

    def with_file(self, file: str) -> "SourceLocation":
        return SourceLocation(file, self.line, self.column, self.end_line, self.end_column)
