"""Owned text buffer with a per-character byte offset table."""

from __future__ import annotations

from typing import Any, Iterable, Optional, Tuple, Union

from indexed_text.runtime import telemetry

from .capability import IndexedStr
from .errors import TextDecodeError
from .lines import IndexedLines
from .ranges import RangeExpr, resolve_range
from .view import CharacterWindow, IndexedSlice

ENCODING = "utf-8"
COMPONENT = "indexed_text"

TextSource = Union[str, bytes, bytearray, memoryview]


def encoded_width(char: str) -> int:
    """Return how many UTF-8 bytes ``char`` occupies."""

    code = ord(char)
    if code < 0x80:
        return 1
    if code < 0x800:
        return 2
    if code < 0x10000:
        return 3
    return 4


def build_offsets(chars: str) -> Tuple[int, ...]:
    offsets = []
    running = 0
    for char in chars:
        offsets.append(running)
        running += encoded_width(char)
    return tuple(offsets)


def _failure(
    event: str, message: str, exc: UnicodeError, position: int
) -> TextDecodeError:
    telemetry.record_event(
        event,
        level="warning",
        data={"position": position, "reason": exc.reason},
    )
    return TextDecodeError(message, position=position, reason=exc.reason)


def _decode_failure(exc: UnicodeDecodeError) -> TextDecodeError:
    return _failure(
        "text::decode_failed",
        f"invalid UTF-8 at byte {exc.start}: {exc.reason}",
        exc,
        exc.start,
    )


def _encode_failure(exc: UnicodeEncodeError) -> TextDecodeError:
    return _failure(
        "text::encode_failed",
        f"character {exc.start} cannot be encoded as UTF-8: {exc.reason}",
        exc,
        exc.start,
    )


def _decode(data: bytes) -> str:
    # Failures are reported once, as a warning, after the span has closed.
    failure: UnicodeDecodeError
    with telemetry.span(
        "text::decode", component=COMPONENT, metadata={"byte_length": len(data)}
    ):
        try:
            return data.decode(ENCODING)
        except UnicodeDecodeError as exc:
            failure = exc
    raise _decode_failure(failure) from failure


def _encode(chars: str) -> bytes:
    try:
        return chars.encode(ENCODING)
    except UnicodeEncodeError as exc:
        raise _encode_failure(exc) from exc


class IndexedString(IndexedStr):
    """Owned, immutable text that can be indexed and sliced by character in O(1).

    Alongside the decoded characters the buffer keeps the UTF-8 bytes and the
    starting byte offset of every character, which is what lets views
    materialize their text without rescanning. This costs roughly twice the
    memory of a plain string; views over the buffer cost three fields each.

    >>> message = IndexedString("Hello, 世界!")
    >>> message.character_at(7)
    '世'
    >>> message.slice(slice(7, 9)).text()
    '世界'
    >>> message.slice(slice(20, 30)).text()
    ''
    """

    __slots__ = ("_chars", "_offsets", "_data")

    _chars: str
    _offsets: Tuple[int, ...]
    _data: bytes

    def __init__(self, source: TextSource = "") -> None:
        if isinstance(source, str):
            chars, data = source, _encode(source)
        elif isinstance(source, (bytes, bytearray, memoryview)):
            data = bytes(source)
            chars = _decode(data)
        else:
            raise TypeError(
                f"expected str or bytes-like source, got {type(source).__name__}"
            )
        self._chars = chars
        self._offsets = build_offsets(chars)
        self._data = data

    @classmethod
    def _from_parts(
        cls, chars: str, offsets: Tuple[int, ...], data: bytes
    ) -> "IndexedString":
        instance = cls.__new__(cls)
        instance._chars = chars
        instance._offsets = offsets
        instance._data = data
        return instance

    @classmethod
    def from_str(cls, value: object) -> "IndexedString":
        """Build from the string form of any object."""

        return cls(str(value))

    @classmethod
    def from_bytes(cls, data: Union[bytes, bytearray, memoryview]) -> "IndexedString":
        """Decode UTF-8 ``data``; raises :class:`TextDecodeError` if invalid."""

        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"expected bytes-like data, got {type(data).__name__}")
        return cls(data)

    @classmethod
    def from_chars(cls, chars: Iterable[str]) -> "IndexedString":
        """Build from a sequence of single characters."""

        collected = []
        for char in chars:
            if not isinstance(char, str):
                raise TypeError(f"expected a character, got {type(char).__name__}")
            if len(char) != 1:
                raise ValueError(f"expected a single character, got {char!r}")
            collected.append(char)

        joined = "".join(collected)
        failure: Optional[UnicodeEncodeError] = None
        with telemetry.span(
            "text::encode", component=COMPONENT, metadata={"length": len(joined)}
        ):
            try:
                data = joined.encode(ENCODING)
            except UnicodeEncodeError as exc:
                failure = exc
        if failure is not None:
            raise _encode_failure(failure) from failure
        return cls._from_parts(joined, build_offsets(joined), data)

    @property
    def byte_offsets(self) -> Tuple[int, ...]:
        """Starting byte position of each character."""

        return self._offsets

    def byte_range(self, start: int, end: int) -> Optional[Tuple[int, int]]:
        """Map character positions ``[start, end)`` to a byte range.

        Returns ``None`` when the positions do not describe a valid range of
        this buffer, e.g. a reversed range or a view built by hand.
        """

        count = len(self._offsets)
        if start < 0 or start > end or end > count:
            return None
        if start == count:
            return len(self._data), len(self._data)
        end_byte = self._offsets[end] if end < count else len(self._data)
        return self._offsets[start], end_byte

    def text(self) -> str:
        return self._chars

    def as_bytes(self) -> bytes:
        return self._data

    def length(self) -> int:
        return len(self._chars)

    def byte_length(self) -> int:
        return len(self._data)

    def character_at(self, index: int) -> Optional[str]:
        if 0 <= index < len(self._chars):
            return self._chars[index]
        return None

    def slice(self, bounds: RangeExpr) -> IndexedSlice:
        resolved = resolve_range(bounds, self.length())
        return IndexedSlice(self, resolved.start, resolved.end)

    def characters(self) -> CharacterWindow:
        return CharacterWindow(self._chars, 0, len(self._chars))

    def to_owned_copy(self) -> "IndexedString":
        return self.copy()

    def as_slice(self) -> IndexedSlice:
        return IndexedSlice(self, 0, self.length())

    def lines(self) -> IndexedLines:
        return IndexedLines(self, 0)

    def copy(self) -> "IndexedString":
        """Return a distinct buffer with the same contents.

        Views taken from this buffer keep pointing at this buffer.
        """

        return type(self)._from_parts(self._chars, self._offsets, self._data)

    def __copy__(self) -> "IndexedString":
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> "IndexedString":
        return self.copy()

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (self._data,))

    def __repr__(self) -> str:
        return f"IndexedString({self._chars!r})"


__all__ = [
    "ENCODING",
    "IndexedString",
    "TextSource",
    "build_offsets",
    "encoded_width",
]
