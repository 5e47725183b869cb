"""Line iteration over owned buffers without copying."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from .ranges import CharRange

if TYPE_CHECKING:
    from .owned import IndexedString
    from .view import IndexedSlice

LINE_FEED = "\n"


class IndexedLines(Iterator["IndexedSlice"]):
    """Yields one view per line-feed separated segment of a buffer.

    Every segment is kept, including the empty one after a trailing line
    feed, so ``"a\\n"`` yields ``"a"`` and ``""`` while an empty buffer
    yields a single empty line. The line feed itself is never part of a line.
    Scanning starts at ``start`` and runs to the end of the buffer.
    """

    __slots__ = ("_source", "_cursor")

    def __init__(self, source: "IndexedString", start: int = 0) -> None:
        self._source = source
        self._cursor = max(start, 0)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def finished(self) -> bool:
        return self._cursor > self._source.length()

    def __iter__(self) -> "IndexedLines":
        return self

    def __next__(self) -> "IndexedSlice":
        total = self._source.length()
        start = self._cursor
        if start > total:
            raise StopIteration

        if start == total:
            self._cursor = total + 1
            return self._source.slice(CharRange.between(start, start))

        end = self._source.text().find(LINE_FEED, start)
        if end == -1:
            self._cursor = total + 1
            return self._source.slice(CharRange.between(start, total))

        self._cursor = end + 1
        return self._source.slice(CharRange.between(start, end))


__all__ = ["IndexedLines", "LINE_FEED"]
