"""Text types that index and slice by character instead of by byte."""

from .core import (
    Bound,
    CharRange,
    CharacterWindow,
    IndexedLines,
    IndexedSlice,
    IndexedStr,
    IndexedString,
    IndexedTextError,
    TextDecodeError,
)

__all__ = [
    "core",
    "runtime",
    "Bound",
    "CharRange",
    "CharacterWindow",
    "IndexedLines",
    "IndexedSlice",
    "IndexedStr",
    "IndexedString",
    "IndexedTextError",
    "TextDecodeError",
]

__version__ = "0.1.0"
