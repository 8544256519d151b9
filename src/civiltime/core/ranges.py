"""
Closed intervals of civil values.

A range is just two endpoints of the same value type. ``start <= end`` is
not enforced when the range is built; an inverted range is simply empty
and never intersects anything.

Intersection:
    ::

        self   : ├──────────────┤
        other  :         ├──────────────┤
        result :         ├──────┤

        latest_start  = max(self.start, other.start)
        earliest_end  = min(self.end, other.end)
        result        = (latest_start, earliest_end) if latest_start <= earliest_end

    Endpoints are inclusive, so ranges that only touch intersect in a
    single point.

Examples:
    >>> jan = LocalDateRange(LocalDate(2022, 1, 1), LocalDate(2022, 1, 31))
    >>> mid = LocalDateRange(LocalDate(2022, 1, 15), LocalDate(2022, 2, 15))
    >>> jan.intersect_with(mid)
    LocalDateRange(start=LocalDate('2022-01-15'), end=LocalDate('2022-01-31'))

Tags:
    range, interval, intersection, civiltime
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Generic, Self, TypeVar

from civiltime.core.bridge import AbsoluteTimeBridge
from civiltime.core.local_date import LocalDate
from civiltime.core.local_datetime import LocalDateTime
from civiltime.core.temporal import CivilValue

V = TypeVar("V", bound=CivilValue)


@dataclass(frozen=True, slots=True)
class CivilRange(Generic[V]):
    """Closed interval ``[start, end]`` over one civil value type."""

    start: V
    end: V

    def __post_init__(self) -> None:
        if type(self.start) is not type(self.end):
            raise TypeError(
                f"range endpoints must share a type, got "
                f"{type(self.start).__name__} and {type(self.end).__name__}"
            )

    @property
    def is_inverted(self) -> bool:
        return self.end < self.start

    def intersect_with(self, other: Self) -> Self | None:
        """The overlap of two ranges, or None when they are disjoint or either is inverted."""
        if self.is_inverted or other.is_inverted:
            return None

        latest_start = max(self.start, other.start)
        earliest_end = min(self.end, other.end)

        if not latest_start <= earliest_end:
            return None

        return type(self)(latest_start, earliest_end)

    def overlaps(self, other: Self) -> bool:
        return self.intersect_with(other) is not None

    def __contains__(self, value: object) -> bool:
        if type(value) is not type(self.start):
            return False
        return self.start <= value <= self.end

    def as_iso(self) -> str:
        return f"{self.start.as_iso()}/{self.end.as_iso()}"

    def to_dict(self) -> dict[str, str]:
        return {"start": self.start.as_iso(), "end": self.end.as_iso()}


@dataclass(frozen=True, slots=True)
class LocalDateRange(CivilRange[LocalDate]):
    """Closed range of dates."""

    def days(self, *, bridge: AbsoluteTimeBridge | None = None) -> Iterator[LocalDate]:
        """Expensive computation! Each date in the range; nothing when inverted."""
        return self.start.days_until(self.end, bridge=bridge)


@dataclass(frozen=True, slots=True)
class LocalDateTimeRange(CivilRange[LocalDateTime]):
    """Closed range of date-times."""

    def days(self) -> list[LocalDate]:
        """Calendar days the range touches. Expensive unless it spans one day."""
        if self.is_inverted:
            return []
        if self.start.is_same_day(self.end):
            return [self.start.to_date()]
        return list(self.start.to_date().days_until(self.end.to_date()))


__all__ = ["CivilRange", "LocalDateRange", "LocalDateTimeRange"]
