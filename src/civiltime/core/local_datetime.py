"""
LocalDateTime: a calendar day plus a time of day, without a zone.

Performance considerations: members that do calendar calculations are
marked as "expensive computation" and go through the absolute-time bridge;
everything else works on the six stored fields.
"""

from __future__ import annotations

from datetime import datetime, tzinfo

from civiltime.core.bridge import AbsoluteTimeBridge, get_bridge
from civiltime.core.calendar import CalendarUnit
from civiltime.core.fields import CivilFields, FieldSet
from civiltime.core.formatting import HourCycleCache, format_hour_minutes
from civiltime.core.iso import parse_date_time
from civiltime.core.local_date import LocalDate
from civiltime.core.protocols import CalendarSystem, FormattingService
from civiltime.core.temporal import CivilValue


class LocalDateTime(CivilValue):
    """
    Immutable {year, month, day, hour, minute, second}.

    Examples:
        >>> LocalDateTime(2022, 5, 7, 23, 59, 59) < LocalDateTime(2022, 5, 8)
        True
        >>> LocalDateTime(2022, 5, 7, 23, 59, 59).is_same_day(LocalDateTime(2022, 5, 7))
        True
        >>> LocalDateTime.from_iso("2022-12-08T07:15:00").midnight()
        LocalDateTime('2022-12-08T00:00:00')
    """

    __slots__ = ()

    _kind = FieldSet.DATE_TIME
    _parse = staticmethod(parse_date_time)
    _json_pattern = r"^\d{4,}-\d{2,}-\d{2,}T\d{2,}:\d{2,}:\d{2,}$"

    def __init__(
        self,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
    ):
        object.__setattr__(
            self, "_fields", CivilFields.date_time(year, month, day, hour, minute, second)
        )

    @classmethod
    def now(
        cls,
        timezone: tzinfo | None = None,
        *,
        bridge: AbsoluteTimeBridge | None = None,
    ) -> LocalDateTime:
        """The current date and time in ``timezone`` (the bridge's zone by default)."""
        return cls._from_fields((bridge or get_bridge()).now_fields(FieldSet.DATE_TIME, timezone))

    @classmethod
    def today_at(
        cls,
        hour: int,
        minute: int = 0,
        second: int = 0,
        *,
        timezone: tzinfo | None = None,
        bridge: AbsoluteTimeBridge | None = None,
    ) -> LocalDateTime:
        """Today's date with a custom time of day."""
        today = (bridge or get_bridge()).now_fields(FieldSet.DATE_TIME, timezone)
        return cls(today.year, today.month, today.day, hour, minute, second)

    @classmethod
    def from_instant(
        cls,
        instant: datetime,
        timezone: tzinfo | None = None,
        calendar: CalendarSystem | None = None,
        *,
        bridge: AbsoluteTimeBridge | None = None,
    ) -> LocalDateTime:
        """The wall-clock reading of ``instant`` in ``timezone``."""
        fields = (bridge or get_bridge()).from_absolute(instant, timezone, calendar, kind=FieldSet.DATE_TIME)
        return cls._from_fields(fields)

    @property
    def hour(self) -> int:
        return self._fields.hour

    @property
    def minute(self) -> int:
        return self._fields.minute

    @property
    def second(self) -> int:
        return self._fields.second

    def midnight(self) -> LocalDateTime:
        """aka "start_of_day"."""
        return LocalDateTime(self.year, self.month, self.day)

    def end_of_day(self) -> LocalDateTime:
        return LocalDateTime(self.year, self.month, self.day, 23, 59, 59)

    def to_date(self) -> LocalDate:
        return LocalDate(self.year, self.month, self.day)

    def add(
        self,
        unit: CalendarUnit,
        amount: int,
        calendar: CalendarSystem | None = None,
        *,
        bridge: AbsoluteTimeBridge | None = None,
    ) -> LocalDateTime:
        """Expensive computation! Calendar-aware addition."""
        fields = (bridge or get_bridge()).add(self._fields, unit, amount, calendar=calendar)
        return self._from_fields(fields)

    def hour_minutes(
        self,
        locale: str | None = None,
        *,
        service: FormattingService | None = None,
        cache: HourCycleCache | None = None,
    ) -> str:
        """Locale-aware time with minute precision, e.g. "07:00" or "10:15 AM"."""
        return format_hour_minutes(self.hour, self.minute, locale=locale, service=service, cache=cache)


__all__ = ["LocalDateTime"]
