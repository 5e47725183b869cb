"""The read-only interface shared by owned text buffers and their views."""

from __future__ import annotations

import operator
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, Iterator, Optional, Sequence, TypeVar

from .ranges import CharRange, RangeExpr

if TYPE_CHECKING:
    from .lines import IndexedLines
    from .owned import IndexedString
    from .view import IndexedSlice

T = TypeVar("T")


def _coerce_text(value: object) -> str:
    if isinstance(value, IndexedStr):
        return value.text()
    if isinstance(value, str):
        return value
    raise TypeError(f"expected str or IndexedStr, got {type(value).__name__}")


class IndexedStr(ABC):
    """Text addressed by character position rather than byte position.

    ``length()`` and every index or range argument count Unicode scalar
    values. Lookups past the end return ``None`` and ranges are clamped, so
    no read operation raises for out-of-range positions.

    Subclasses provide the core operations; the string conveniences below
    forward to the materialized :meth:`text`.
    """

    __slots__ = ()

    @abstractmethod
    def text(self) -> str:
        """Return the covered text.

        Once you hold a plain ``str`` you are back to ordinary string
        semantics; use it only to interface with code that needs one.
        """

    @abstractmethod
    def as_bytes(self) -> bytes:
        """Return the covered UTF-8 bytes."""

    @abstractmethod
    def length(self) -> int:
        """Return the number of characters, not bytes."""

    @abstractmethod
    def byte_length(self) -> int:
        """Return the UTF-8 encoded size of the covered text."""

    @abstractmethod
    def character_at(self, index: int) -> Optional[str]:
        """Return the character at ``index`` or ``None`` when out of range."""

    @abstractmethod
    def slice(self, bounds: RangeExpr) -> "IndexedSlice":
        """Return a view over ``bounds``, clamped to this text."""

    @abstractmethod
    def characters(self) -> Sequence[str]:
        """Return the covered characters in order, without copying."""

    @abstractmethod
    def to_owned_copy(self) -> "IndexedString":
        """Materialize the covered text into a new owned buffer."""

    @abstractmethod
    def as_slice(self) -> "IndexedSlice":
        """Return a view covering all of this text."""

    @abstractmethod
    def lines(self) -> "IndexedLines":
        """Return an iterator over line-feed separated views."""

    def is_empty(self) -> bool:
        return self.length() == 0

    def starts_with(self, prefix: "str | IndexedStr") -> bool:
        return self.text().startswith(_coerce_text(prefix))

    def ends_with(self, suffix: "str | IndexedStr") -> bool:
        return self.text().endswith(_coerce_text(suffix))

    def to_lowercase(self) -> "IndexedString":
        from .owned import IndexedString

        return IndexedString(self.text().lower())

    def to_uppercase(self) -> "IndexedString":
        from .owned import IndexedString

        return IndexedString(self.text().upper())

    def parse(self, converter: Callable[[str], T]) -> T:
        """Convert the text with ``converter`` (``int``, ``float``, ...).

        Whatever ``converter`` raises propagates unchanged.
        """

        return converter(self.text())

    def __len__(self) -> int:
        return self.length()

    def __iter__(self) -> Iterator[str]:
        return iter(self.characters())

    def __getitem__(self, key: "int | RangeExpr") -> "Optional[str] | IndexedSlice":
        if isinstance(key, (slice, range, CharRange)):
            return self.slice(key)
        if isinstance(key, bool):
            raise TypeError("character index must be an integer, not bool")
        return self.character_at(operator.index(key))

    def __str__(self) -> str:
        return self.text()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, IndexedStr):
            return self.text() == other.text()
        if isinstance(other, str):
            return self.text() == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.text())


__all__ = ["IndexedStr"]
