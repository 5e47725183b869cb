"""Character range expressions and the clamping resolver shared by all text types."""

from __future__ import annotations

import operator
from dataclasses import dataclass
from enum import Enum
from typing import Union


class BoundKind(str, Enum):
    INCLUDED = "included"
    EXCLUDED = "excluded"
    UNBOUNDED = "unbounded"


def _as_position(value: object, label: str) -> int:
    if isinstance(value, bool):
        raise TypeError(f"{label} must be an integer, not bool")
    try:
        return operator.index(value)
    except TypeError as exc:
        raise TypeError(
            f"{label} must be an integer, got {type(value).__name__}"
        ) from exc


@dataclass(frozen=True, slots=True)
class Bound:
    """One end of a range: a character position plus how it is interpreted."""

    kind: BoundKind
    value: int = 0

    def __post_init__(self) -> None:
        kind = BoundKind(self.kind)
        object.__setattr__(self, "kind", kind)
        if kind is BoundKind.UNBOUNDED:
            object.__setattr__(self, "value", 0)
        else:
            object.__setattr__(self, "value", _as_position(self.value, "bound"))

    @classmethod
    def included(cls, value: int) -> "Bound":
        return cls(BoundKind.INCLUDED, value)

    @classmethod
    def excluded(cls, value: int) -> "Bound":
        return cls(BoundKind.EXCLUDED, value)

    @classmethod
    def unbounded(cls) -> "Bound":
        return cls(BoundKind.UNBOUNDED)

    def as_lower(self) -> int:
        if self.kind is BoundKind.INCLUDED:
            return self.value
        if self.kind is BoundKind.EXCLUDED:
            return self.value + 1
        return 0

    def as_upper(self, length: int) -> int:
        if self.kind is BoundKind.INCLUDED:
            return self.value + 1
        if self.kind is BoundKind.EXCLUDED:
            return self.value
        return length


@dataclass(frozen=True, slots=True)
class CharRange:
    """A range over character positions with independently typed bounds.

    ``CharRange.between(1, 3)`` is the half-open ``[1, 3)``,
    ``CharRange.inclusive(1, 3)`` is ``[1, 3]`` and ``CharRange.starting_at(2)``
    runs to the end of whatever it is applied to.
    """

    start: Bound
    end: Bound

    @classmethod
    def of(cls, start: Bound, end: Bound) -> "CharRange":
        return cls(start=start, end=end)

    @classmethod
    def between(cls, start: int, end: int) -> "CharRange":
        return cls(Bound.included(start), Bound.excluded(end))

    @classmethod
    def inclusive(cls, start: int, end: int) -> "CharRange":
        return cls(Bound.included(start), Bound.included(end))

    @classmethod
    def starting_at(cls, start: int) -> "CharRange":
        return cls(Bound.included(start), Bound.unbounded())

    @classmethod
    def up_to(cls, end: int) -> "CharRange":
        return cls(Bound.unbounded(), Bound.excluded(end))

    @classmethod
    def up_to_inclusive(cls, end: int) -> "CharRange":
        return cls(Bound.unbounded(), Bound.included(end))

    @classmethod
    def full(cls) -> "CharRange":
        return cls(Bound.unbounded(), Bound.unbounded())


RangeExpr = Union[CharRange, slice, range]


@dataclass(frozen=True, slots=True)
class ResolvedRange:
    """Clamped ``[start, end)`` positions; ``start > end`` means empty."""

    start: int
    end: int

    @property
    def length(self) -> int:
        return max(0, self.end - self.start)

    def shifted(self, base: int) -> "ResolvedRange":
        return ResolvedRange(base + self.start, base + self.end)


def as_char_range(expr: RangeExpr) -> CharRange:
    """Normalize a ``slice``, step-1 ``range`` or :class:`CharRange`."""

    if isinstance(expr, CharRange):
        return expr
    if isinstance(expr, slice):
        if expr.step is not None and _as_position(expr.step, "step") != 1:
            raise ValueError("character slices do not support a step")
        start = (
            Bound.unbounded()
            if expr.start is None
            else Bound.included(_as_position(expr.start, "start"))
        )
        end = (
            Bound.unbounded()
            if expr.stop is None
            else Bound.excluded(_as_position(expr.stop, "stop"))
        )
        return CharRange(start, end)
    if isinstance(expr, range):
        if expr.step != 1:
            raise ValueError("character ranges do not support a step")
        return CharRange.between(expr.start, expr.stop)
    raise TypeError(f"unsupported range expression: {type(expr).__name__}")


def _clamp(value: int, length: int) -> int:
    if value < 0:
        return 0
    return min(value, length)


def resolve_range(expr: RangeExpr, length: int) -> ResolvedRange:
    """Resolve ``expr`` against ``length`` characters without ever failing on size.

    Both ends are clamped to ``[0, length]`` independently and are never
    swapped, so a reversed range stays reversed and reads as empty.
    """

    bounds = as_char_range(expr)
    lower = _clamp(bounds.start.as_lower(), length)
    upper = _clamp(bounds.end.as_upper(length), length)
    return ResolvedRange(lower, upper)


__all__ = [
    "Bound",
    "BoundKind",
    "CharRange",
    "RangeExpr",
    "ResolvedRange",
    "as_char_range",
    "resolve_range",
]
