"""Zero-copy views into an owned text buffer."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Optional, Tuple, Union, overload

from indexed_text.runtime import telemetry

from .capability import IndexedStr
from .lines import IndexedLines
from .ranges import RangeExpr, resolve_range

if TYPE_CHECKING:
    from .owned import IndexedString


class CharacterWindow(Sequence[str]):
    """Read-only window over a run of characters that never copies them.

    Indexing follows ordinary Python sequence rules, including negative
    indices and ``IndexError``; it is the plain-sequence escape hatch, not
    part of the clamped API.
    """

    __slots__ = ("_chars", "_start", "_end")

    def __init__(self, chars: str, start: int, end: int) -> None:
        total = len(chars)
        start = min(max(start, 0), total)
        self._chars = chars
        self._start = start
        self._end = min(max(end, start), total)

    def __len__(self) -> int:
        return self._end - self._start

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> Tuple[str, ...]: ...

    def __getitem__(self, index: Union[int, slice]) -> Union[str, Tuple[str, ...]]:
        positions = range(self._start, self._end)[index]
        if isinstance(positions, range):
            return tuple(self._chars[position] for position in positions)
        return self._chars[positions]

    def __iter__(self) -> Iterator[str]:
        for position in range(self._start, self._end):
            yield self._chars[position]

    def __repr__(self) -> str:
        return f"CharacterWindow({self._chars[self._start:self._end]!r})"


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class IndexedSlice(IndexedStr):
    """A ``[start, end)`` character range of an :class:`IndexedString`.

    Slicing a view yields another view over the same buffer, with positions
    translated into the buffer's coordinates, so nesting never copies.
    Positions are clamped when a view is produced by slicing; a view built
    directly with inconsistent positions reads as empty rather than failing.
    """

    source: "IndexedString"
    start: int = 0
    end: int = 0

    def _byte_range(self) -> Optional[Tuple[int, int]]:
        return self.source.byte_range(self.start, self.end)

    def text(self) -> str:
        span = self._byte_range()
        if span is None:
            return ""
        start_byte, end_byte = span
        return str(memoryview(self.source.as_bytes())[start_byte:end_byte], "utf-8")

    def as_bytes(self) -> bytes:
        span = self._byte_range()
        if span is None:
            return b""
        start_byte, end_byte = span
        return self.source.as_bytes()[start_byte:end_byte]

    def length(self) -> int:
        return max(0, self.end - self.start)

    def byte_length(self) -> int:
        span = self._byte_range()
        if span is None:
            return 0
        return span[1] - span[0]

    def character_at(self, index: int) -> Optional[str]:
        if index < 0 or index >= self.length() or self._byte_range() is None:
            return None
        return self.source.character_at(self.start + index)

    def slice(self, bounds: RangeExpr) -> "IndexedSlice":
        resolved = resolve_range(bounds, self.length()).shifted(self.start)
        return IndexedSlice(self.source, resolved.start, resolved.end)

    def characters(self) -> CharacterWindow:
        if self._byte_range() is None:
            return CharacterWindow(self.source.text(), 0, 0)
        return CharacterWindow(self.source.text(), self.start, self.end)

    def to_owned_copy(self) -> "IndexedString":
        telemetry.record_event(
            "text::materialize",
            level="debug",
            data={"start": self.start, "end": self.end},
        )
        return type(self.source).from_chars(self.characters())

    def as_slice(self) -> "IndexedSlice":
        return self

    def lines(self) -> IndexedLines:
        return IndexedLines(self.source, self.start)

    def __repr__(self) -> str:
        return f"IndexedSlice({self.text()!r}, start={self.start}, end={self.end})"


__all__ = ["CharacterWindow", "IndexedSlice"]
