"""Position utilities for translation documents.

Converts character offsets into the 0-based line/character positions used by
editor hosts. Both LF and CRLF line endings work: a line is everything after
the previous "\\n", so a trailing "\\r" simply belongs to the end of its line.
"""

from __future__ import annotations

from intlkeys.diagnostics import Position, Range

__all__ = [
    "LineOffsetCache",
    "offset_at",
    "position_at",
]


class LineOffsetCache:
    """Cached line offset computation for efficient position lookups.

    Precomputes line start offsets in a single O(n) pass, then answers each
    lookup with a binary search. One cache is built per document per pass and
    shared by every key located in that document.

    Example:
        >>> cache = LineOffsetCache('{\\n  "a": "x"\\n}')
        >>> cache.position_at(5)
        Position(line=1, character=3)
    """

    __slots__ = ("_offsets", "_source_len")

    def __init__(self, source: str) -> None:
        """Build line offset cache from source.

        Args:
            source: Document text to index
        """
        offsets = [0]
        start = source.find("\n")
        while start != -1:
            offsets.append(start + 1)
            start = source.find("\n", start + 1)
        self._offsets: tuple[int, ...] = tuple(offsets)
        self._source_len = len(source)

    @property
    def line_count(self) -> int:
        """Number of lines in the indexed source (at least 1)."""
        return len(self._offsets)

    def position_at(self, offset: int) -> Position:
        """Get the 0-based position of a character offset.

        Offsets outside the source are clamped to its bounds.
        """
        offset = min(max(offset, 0), self._source_len)

        # index of the largest line start <= offset
        left, right = 0, len(self._offsets) - 1
        while left < right:
            mid = (left + right + 1) // 2
            if self._offsets[mid] <= offset:
                left = mid
            else:
                right = mid - 1

        return Position(line=left, character=offset - self._offsets[left])

    def offset_at(self, position: Position) -> int:
        """Get the character offset of a position (clamped to the source)."""
        if position.line >= len(self._offsets):
            return self._source_len
        offset = self._offsets[position.line] + position.character
        if position.line + 1 < len(self._offsets):
            # stay on the requested line
            offset = min(offset, self._offsets[position.line + 1] - 1)
        return min(offset, self._source_len)

    def range_of(self, start: int, end: int) -> Range:
        """Build a Range covering the character offsets ``[start, end)``."""
        return Range(
            start=self.position_at(start),
            end=self.position_at(end),
            start_offset=start,
            end_offset=end,
        )


def position_at(source: str, offset: int) -> Position:
    """Get the position of one offset without keeping a cache.

    Raises:
        ValueError: If offset is negative
    """
    if offset < 0:
        msg = f"Offset must be >= 0, got {offset}"
        raise ValueError(msg)
    offset = min(offset, len(source))
    line = source.count("\n", 0, offset)
    line_start = source.rfind("\n", 0, offset) + 1
    return Position(line=line, character=offset - line_start)


def offset_at(source: str, position: Position) -> int:
    """Get the offset of one position without keeping a cache."""
    return LineOffsetCache(source).offset_at(position)
