"""Character-indexed text: owned buffers, views, ranges and line iteration."""

from .capability import IndexedStr
from .errors import IndexedTextError, TextDecodeError
from .lines import IndexedLines
from .owned import IndexedString, TextSource, build_offsets, encoded_width
from .ranges import (
    Bound,
    BoundKind,
    CharRange,
    RangeExpr,
    ResolvedRange,
    as_char_range,
    resolve_range,
)
from .view import CharacterWindow, IndexedSlice

__all__ = [
    "Bound",
    "BoundKind",
    "CharRange",
    "CharacterWindow",
    "IndexedLines",
    "IndexedSlice",
    "IndexedStr",
    "IndexedString",
    "IndexedTextError",
    "RangeExpr",
    "ResolvedRange",
    "TextDecodeError",
    "TextSource",
    "as_char_range",
    "build_offsets",
    "encoded_width",
    "resolve_range",
]
