"""
LocalDate: a calendar day without a time of day or a zone.

Performance considerations: members that do calendar calculations are
marked as "expensive computation" and go through the absolute-time bridge;
everything else works on the three stored fields.
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime, tzinfo
from typing import TYPE_CHECKING

from civiltime.core.bridge import AbsoluteTimeBridge, get_bridge
from civiltime.core.calendar import CalendarUnit
from civiltime.core.fields import CivilFields, FieldSet
from civiltime.core.iso import parse_date
from civiltime.core.protocols import CalendarSystem
from civiltime.core.temporal import CivilValue

if TYPE_CHECKING:
    from civiltime.core.local_datetime import LocalDateTime


class LocalDate(CivilValue):
    """
    Immutable {year, month, day}.

    Examples:
        >>> LocalDate(2022, 5, 7) < LocalDate(2022, 5, 8)
        True
        >>> LocalDate(5, 1, 2).as_iso()
        '0005-01-02'
        >>> LocalDate.from_iso("2022-12-08").end_of_year()
        LocalDate('2022-12-31')
    """

    __slots__ = ()

    _kind = FieldSet.DATE
    _parse = staticmethod(parse_date)
    _json_pattern = r"^\d{4,}-\d{2,}-\d{2,}$"

    def __init__(self, year: int, month: int, day: int):
        object.__setattr__(self, "_fields", CivilFields.date(year, month, day))

    @classmethod
    def today(
        cls,
        timezone: tzinfo | None = None,
        *,
        bridge: AbsoluteTimeBridge | None = None,
    ) -> LocalDate:
        """The current date in ``timezone`` (the bridge's date zone by default)."""
        return cls._from_fields((bridge or get_bridge()).now_fields(FieldSet.DATE, timezone))

    @classmethod
    def from_instant(
        cls,
        instant: datetime,
        timezone: tzinfo | None = None,
        calendar: CalendarSystem | None = None,
        *,
        bridge: AbsoluteTimeBridge | None = None,
    ) -> LocalDate:
        """The date ``instant`` falls on in ``timezone``."""
        fields = (bridge or get_bridge()).from_absolute(instant, timezone, calendar, kind=FieldSet.DATE)
        return cls._from_fields(fields)

    def start_of_year(self) -> LocalDate:
        return LocalDate(self.year, 1, 1)

    def end_of_year(self) -> LocalDate:
        return LocalDate(self.year, 12, 31)

    def at(self, hour: int = 0, minute: int = 0, second: int = 0) -> LocalDateTime:
        """This date at the given time of day."""
        from civiltime.core.local_datetime import LocalDateTime

        return LocalDateTime(self.year, self.month, self.day, hour, minute, second)

    def add(
        self,
        unit: CalendarUnit,
        amount: int,
        calendar: CalendarSystem | None = None,
        *,
        bridge: AbsoluteTimeBridge | None = None,
    ) -> LocalDate:
        """
        Expensive computation! Calendar-aware addition.

        >>> LocalDate(2022, 1, 31).add(CalendarUnit.MONTH, 1)
        LocalDate('2022-02-28')
        """
        fields = (bridge or get_bridge()).add(self._fields, unit, amount, calendar=calendar)
        return self._from_fields(fields)

    def days_until(self, other: LocalDate, *, bridge: AbsoluteTimeBridge | None = None) -> Iterator[LocalDate]:
        """Expensive computation! Every date from self through ``other`` inclusive."""
        bridge = bridge or get_bridge()
        if self > other:
            return
        current = self
        while True:
            yield current
            if current >= other:
                return
            current = current.add(CalendarUnit.DAY, 1, bridge=bridge)


__all__ = ["LocalDate"]
