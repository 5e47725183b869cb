"""Error types raised by the indexed text engine."""

from __future__ import annotations


class IndexedTextError(ValueError):
    """Base class for errors raised by :mod:`indexed_text`."""


class TextDecodeError(IndexedTextError):
    """Raised when source data cannot be represented as UTF-8 text.

    Construction fails as a whole; no partially built buffer is returned.
    """

    def __init__(
        self,
        message: str,
        *,
        position: int | None = None,
        reason: str | None = None,
    ) -> None:
        super().__init__(message)
        self.position = position
        self.reason = reason
