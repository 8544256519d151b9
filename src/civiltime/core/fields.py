"""
Complete civil field sets.

``CivilFields`` is the record every civil value wraps. Unlike a general
calendar-component record, it cannot be partially specified: the date fields
are required arguments and the time fields default to zero, so every
instance carries the whole set for its kind.

Construction does not range-check. Month 13 or day 0 are stored as given;
the absolute-time bridge normalizes them by wraparound when (and only when)
an instant is needed. Callers who want strict input call ``validate()``.

Examples:
    >>> CivilFields.date(2022, 5, 7).linear_timestamp
    752346
    >>> CivilFields.date_time(2022, 5, 7, 23, 59, 59).date_only()
    CivilFields(kind=<FieldSet.DATE: 'date'>, year=2022, month=5, day=7, hour=0, minute=0, second=0)

Tags:
    value-object, civil-time, immutable, civiltime
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from civiltime.core.errors import FieldRangeError


class FieldSet(str, Enum):
    """Which fields of a ``CivilFields`` are meaningful."""

    DATE = "date"
    DATE_TIME = "date_time"


_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap_year(year: int) -> bool:
    """Proleptic Gregorian leap-year rule."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    """Length of ``month`` (1-12) in ``year``."""
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def _require_int(name: str, value: object) -> None:
    # bool is an int subclass but never a calendar field
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be int, got {type(value).__name__}")


@dataclass(frozen=True, slots=True)
class CivilFields:
    """
    Immutable {year, month, day[, hour, minute, second]} record.

    Use the ``date`` / ``date_time`` constructors; the ``kind`` decides which
    ordering key applies and whether time fields may be non-zero.

    Attributes:
        kind: DATE or DATE_TIME
        year: Any integer; year 0 and negative years are accepted
        month: 1-12 by convention, not enforced
        day: 1-31 by convention, not enforced
        hour: 0-23 by convention, always 0 for DATE
        minute: 0-59 by convention, always 0 for DATE
        second: 0-59 by convention, always 0 for DATE
    """

    kind: FieldSet
    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.kind, FieldSet):
            raise TypeError(f"kind must be FieldSet, got {type(self.kind).__name__}")
        for name in ("year", "month", "day", "hour", "minute", "second"):
            _require_int(name, getattr(self, name))
        if self.kind == FieldSet.DATE and (self.hour, self.minute, self.second) != (0, 0, 0):
            raise ValueError("date fields cannot carry a time of day")

    @classmethod
    def date(cls, year: int, month: int, day: int) -> CivilFields:
        return cls(FieldSet.DATE, year, month, day)

    @classmethod
    def date_time(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
    ) -> CivilFields:
        return cls(FieldSet.DATE_TIME, year, month, day, hour, minute, second)

    @property
    def linear_timestamp(self) -> int:
        """Mixed-radix ordering key. Ordering semantics only, never a duration."""
        date_key = self.day + 31 * (self.month + 12 * self.year)
        if self.kind == FieldSet.DATE:
            return date_key
        return self.second + 60 * (self.minute + 60 * (self.hour + 24 * date_key))

    @property
    def sort_key(self) -> tuple[int, tuple[int, ...]]:
        """``linear_timestamp`` with the raw fields as tie-break.

        Out-of-range fields can share a key with conventional ones
        (2022-01-32 and 2022-02-01); the tuple keeps such pairs ordered.
        """
        return (self.linear_timestamp, self.as_tuple())

    def date_only(self) -> CivilFields:
        """Project onto the DATE field set."""
        return CivilFields.date(self.year, self.month, self.day)

    def same_day(self, other: CivilFields) -> bool:
        return (self.year, self.month, self.day) == (other.year, other.month, other.day)

    def as_tuple(self) -> tuple[int, ...]:
        if self.kind == FieldSet.DATE:
            return (self.year, self.month, self.day)
        return (self.year, self.month, self.day, self.hour, self.minute, self.second)

    @property
    def is_conventional(self) -> bool:
        """True when every field lies in its conventional range."""
        try:
            self.validate()
        except FieldRangeError:
            return False
        return True

    def validate(self) -> CivilFields:
        """
        Check conventional ranges and return self.

        Day is checked against the real month length (leap years included).

        Raises:
            FieldRangeError: Naming the first field out of range
        """
        if not 1 <= self.month <= 12:
            raise FieldRangeError(
                f"month {self.month} outside 1-12",
                field="month", value=self.month, constraint="1-12",
            )
        limit = days_in_month(self.year, self.month)
        if not 1 <= self.day <= limit:
            raise FieldRangeError(
                f"day {self.day} outside 1-{limit} for {self.year:04d}-{self.month:02d}",
                field="day", value=self.day, constraint=f"1-{limit}",
            )
        for name, upper in (("hour", 23), ("minute", 59), ("second", 59)):
            value = getattr(self, name)
            if not 0 <= value <= upper:
                raise FieldRangeError(
                    f"{name} {value} outside 0-{upper}",
                    field=name, value=value, constraint=f"0-{upper}",
                )
        return self


__all__ = ["FieldSet", "CivilFields", "is_leap_year", "days_in_month"]
