"""
Proleptic Gregorian calendar arithmetic.

This is the environment-dependent half of civiltime: everything here works
on absolute instants (aware ``datetime`` objects) re-expressed in a zone.
Value types never call it directly; they go through
``civiltime.core.bridge.AbsoluteTimeBridge``.

Two week rules are provided. The default follows the common US convention
(weeks start on Sunday, week 1 contains January 1st). ``iso8601()`` starts
weeks on Monday and requires four days of the new year in week 1, which
makes ``WEEK_OF_YEAR`` agree with ``date.isocalendar()``.

Weekdays are numbered 1 = Sunday ... 7 = Saturday regardless of the week
rule; ``first_weekday`` uses the same numbering.

Examples:
    >>> from datetime import datetime, timezone
    >>> cal = GregorianCalendar()
    >>> jan31 = datetime(2022, 1, 31, tzinfo=timezone.utc)
    >>> cal.adding(jan31, CalendarUnit.MONTH, 1, timezone.utc).date()
    datetime.date(2022, 2, 28)
    >>> GregorianCalendar.iso8601().component(
    ...     datetime(2021, 1, 1, tzinfo=timezone.utc), CalendarComponent.WEEK_OF_YEAR, timezone.utc)
    53

Tags:
    calendar, gregorian, week-rules, civiltime
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import MAXYEAR, date, datetime, timedelta, timezone, tzinfo
from enum import Enum

from civiltime.core.errors import CalendarRangeError
from civiltime.core.fields import CivilFields, FieldSet, days_in_month


class CalendarUnit(str, Enum):
    """Units accepted by calendar arithmetic."""

    YEAR = "year"
    MONTH = "month"
    WEEK = "week"
    DAY = "day"
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"


class CalendarComponent(str, Enum):
    """Derived fields that depend on the calendar, not just stored fields."""

    ERA = "era"
    YEAR = "year"
    MONTH = "month"
    DAY = "day"
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"
    NANOSECOND = "nanosecond"
    WEEKDAY = "weekday"
    WEEKDAY_ORDINAL = "weekday_ordinal"
    WEEK_OF_MONTH = "week_of_month"
    WEEK_OF_YEAR = "week_of_year"
    YEAR_FOR_WEEK_OF_YEAR = "year_for_week_of_year"
    DAY_OF_YEAR = "day_of_year"
    QUARTER = "quarter"


_ELAPSED_SECONDS = {
    CalendarUnit.HOUR: 3600,
    CalendarUnit.MINUTE: 60,
    CalendarUnit.SECOND: 1,
}


def weekday_of(d: date) -> int:
    """1 = Sunday ... 7 = Saturday."""
    return d.isoweekday() % 7 + 1


def day_of_year(d: date) -> int:
    return (d - date(d.year, 1, 1)).days + 1


@dataclass(frozen=True, slots=True)
class GregorianCalendar:
    """
    Gregorian calendar with a configurable week rule.

    Attributes:
        first_weekday: First day of the week (1 = Sunday)
        minimum_days_in_first_week: Days of January a week needs to be week 1
        weekend_days: Weekdays counted as weekend
        identifier: Name used in logs and error context
    """

    first_weekday: int = 1
    minimum_days_in_first_week: int = 1
    weekend_days: frozenset[int] = field(default_factory=lambda: frozenset({1, 7}))
    identifier: str = "gregorian"

    def __post_init__(self) -> None:
        if not 1 <= self.first_weekday <= 7:
            raise ValueError(f"first_weekday must be 1-7, got {self.first_weekday}")
        if not 1 <= self.minimum_days_in_first_week <= 7:
            raise ValueError(
                f"minimum_days_in_first_week must be 1-7, got {self.minimum_days_in_first_week}"
            )
        if not all(1 <= d <= 7 for d in self.weekend_days):
            raise ValueError(f"weekend_days must be weekdays 1-7, got {sorted(self.weekend_days)}")

    @classmethod
    def iso8601(cls) -> GregorianCalendar:
        """Monday-first weeks, week 1 holds the year's first Thursday."""
        return cls(first_weekday=2, minimum_days_in_first_week=4, identifier="iso8601")

    # ------------------------------------------------------------------ #
    # Field <-> instant
    # ------------------------------------------------------------------ #

    def resolve(self, fields: CivilFields, tz: tzinfo, base: datetime) -> datetime:
        """
        Overlay ``fields`` onto ``base`` and resolve to an instant.

        ``base`` is re-expressed in ``tz`` first; its sub-second part
        survives the overlay. Out-of-range fields wrap: the month carries
        into the year, and day/hour/minute/second are added as offsets
        from the first of the month, so day 0 is the last day of the
        previous month and hour 24 is midnight of the next day.

        Raises:
            CalendarRangeError: If the result falls outside years 1-9999
        """
        local = base.astimezone(tz)
        year, month_index = divmod(fields.year * 12 + fields.month - 1, 12)
        try:
            start = local.replace(year=year, month=month_index + 1, day=1, hour=0, minute=0, second=0)
            return start + timedelta(
                days=fields.day - 1,
                hours=fields.hour,
                minutes=fields.minute,
                seconds=fields.second,
            )
        except (ValueError, OverflowError) as exc:
            raise CalendarRangeError(
                f"{fields.as_tuple()} cannot be resolved to an instant", cause=exc
            ).with_context(operation="resolve", calendar=self.identifier, timezone=str(tz)) from exc

    def fields_from(self, instant: datetime, tz: tzinfo, kind: FieldSet = FieldSet.DATE_TIME) -> CivilFields:
        local = instant.astimezone(tz)
        if kind == FieldSet.DATE:
            return CivilFields.date(local.year, local.month, local.day)
        return CivilFields.date_time(
            local.year, local.month, local.day, local.hour, local.minute, local.second
        )

    # ------------------------------------------------------------------ #
    # Arithmetic
    # ------------------------------------------------------------------ #

    def adding(self, instant: datetime, unit: CalendarUnit, amount: int, tz: tzinfo) -> datetime:
        """
        Add ``amount`` units to ``instant``.

        Years and months keep the day of month, clamped to the target
        month's length (Jan 31 + 1 month = Feb 28/29). Weeks and days move
        the wall clock. Hours, minutes and seconds are elapsed time.

        Raises:
            CalendarRangeError: If the result falls outside years 1-9999
        """
        unit = CalendarUnit(unit)
        local = instant.astimezone(tz)
        try:
            if unit in (CalendarUnit.YEAR, CalendarUnit.MONTH):
                months = amount * 12 if unit == CalendarUnit.YEAR else amount
                year, month_index = divmod(local.year * 12 + local.month - 1 + months, 12)
                month = month_index + 1
                # ValueError below for years outside 1-9999
                day = min(local.day, days_in_month(year, month))
                return local.replace(year=year, month=month, day=day)
            if unit in (CalendarUnit.WEEK, CalendarUnit.DAY):
                days = amount * 7 if unit == CalendarUnit.WEEK else amount
                return local + timedelta(days=days)
            elapsed = timedelta(seconds=amount * _ELAPSED_SECONDS[unit])
            return (local.astimezone(timezone.utc) + elapsed).astimezone(tz)
        except (ValueError, OverflowError) as exc:
            raise CalendarRangeError(
                f"adding {amount} {unit.value}(s) to {local.isoformat()} leaves the supported range",
                cause=exc,
            ).with_context(operation="adding", calendar=self.identifier, timezone=str(tz)) from exc

    # ------------------------------------------------------------------ #
    # Derived components
    # ------------------------------------------------------------------ #

    def weekday(self, instant: datetime, tz: tzinfo) -> int:
        return weekday_of(instant.astimezone(tz).date())

    def is_weekend(self, instant: datetime, tz: tzinfo) -> bool:
        return self.weekday(instant, tz) in self.weekend_days

    def component(self, instant: datetime, component: CalendarComponent, tz: tzinfo) -> int:
        component = CalendarComponent(component)
        local = instant.astimezone(tz)
        d = local.date()
        try:
            if component == CalendarComponent.ERA:
                return 1  # datetime cannot represent BC
            if component == CalendarComponent.NANOSECOND:
                return local.microsecond * 1000
            if component == CalendarComponent.WEEKDAY:
                return weekday_of(d)
            if component == CalendarComponent.WEEKDAY_ORDINAL:
                return (d.day - 1) // 7 + 1
            if component == CalendarComponent.WEEK_OF_MONTH:
                return self._week_of_month(d)
            if component == CalendarComponent.WEEK_OF_YEAR:
                return self._year_and_week(d)[1]
            if component == CalendarComponent.YEAR_FOR_WEEK_OF_YEAR:
                return self._year_and_week(d)[0]
            if component == CalendarComponent.DAY_OF_YEAR:
                return day_of_year(d)
            if component == CalendarComponent.QUARTER:
                return (d.month - 1) // 3 + 1
        except (ValueError, OverflowError) as exc:
            raise CalendarRangeError(
                f"{component.value} of {d.isoformat()} leaves the supported range", cause=exc
            ).with_context(operation="component", calendar=self.identifier) from exc
        return getattr(local, component.value)

    def _week_one_start(self, year: int) -> date:
        jan1 = date(year, 1, 1)
        offset = (weekday_of(jan1) - self.first_weekday) % 7
        start = jan1 - timedelta(days=offset)
        if 7 - offset < self.minimum_days_in_first_week:
            start += timedelta(days=7)
        return start

    def _year_and_week(self, d: date) -> tuple[int, int]:
        year = d.year
        if d < self._week_one_start(year):
            year -= 1
        elif year < MAXYEAR and d >= self._week_one_start(year + 1):
            year += 1
        return year, (d - self._week_one_start(year)).days // 7 + 1

    def _week_of_month(self, d: date) -> int:
        offset = (weekday_of(d.replace(day=1)) - self.first_weekday) % 7
        week = (d.day - 1 + offset) // 7 + 1
        if 7 - offset < self.minimum_days_in_first_week:
            week -= 1
        return week


__all__ = [
    "CalendarUnit",
    "CalendarComponent",
    "GregorianCalendar",
    "weekday_of",
    "day_of_year",
]
