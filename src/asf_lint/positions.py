"""Offset <-> (line, column) mapping for a document snapshot."""

from __future__ import annotations

from bisect import bisect_right
from typing import List, Tuple

from typing_extensions import TypeAlias

Position: TypeAlias = Tuple[int, int]


class LineIndex:
    """
    Maps character offsets of one text to 1-based (line, column) pairs.

    Built once per text in O(n); each lookup is a bisect over the line start
    offsets.
    """

    def __init__(self, text: str):
        self.length = len(text)
        self.line_starts: List[int] = [0]
        pos = text.find("\n")
        while pos >= 0:
            self.line_starts.append(pos + 1)
            pos = text.find("\n", pos + 1)

    def position_at(self, offset: int) -> Position:
        """Return (line, column) of *offset*, clamped to the text."""
        offset = max(0, min(offset, self.length))
        line_idx = bisect_right(self.line_starts, offset) - 1
        return line_idx + 1, offset - self.line_starts[line_idx] + 1

    def offset_at(self, line: int, column: int) -> int:
        """Inverse of position_at for positions inside the text."""
        line_idx = max(0, min(line - 1, len(self.line_starts) - 1))
        return min(self.line_starts[line_idx] + max(column - 1, 0), self.length)

    @property
    def line_count(self) -> int:
        return len(self.line_starts)
