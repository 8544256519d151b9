"""
Protocol definitions for civiltime.

Canonical structural interfaces shared across the package. Value types,
range types and the bridge depend on these shapes rather than on concrete
classes, so the clock, the calendar and the locale database can all be
swapped (typically for deterministic fakes in tests).

Architecture:
    ::

        LocalDateLike       year / month / day / linear_timestamp
                            (LocalDate, LocalDateTime)

        CurrentTimeProvider now() -> aware datetime
                            (SystemClock, FixedClock)

        CalendarSystem      resolve / fields_from / adding / component /
                            weekday / is_weekend
                            (GregorianCalendar)

        FormattingService   hour_cycle_uses_ampm / am_symbol / pm_symbol /
                            localized_date_string / current_locale
                            (PosixFormattingService)

Tags:
    protocol, contracts, civiltime
"""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from civiltime.core.calendar import CalendarComponent, CalendarUnit
    from civiltime.core.fields import CivilFields, FieldSet
    from civiltime.core.formatting import DateStyle


@runtime_checkable
class LocalDateLike(Protocol):
    """
    Capability shared by LocalDate and LocalDateTime.

    Anything exposing a calendar day plus an ordering key can be compared
    and put into a range.
    """

    @property
    def year(self) -> int: ...

    @property
    def month(self) -> int: ...

    @property
    def day(self) -> int: ...

    @property
    def linear_timestamp(self) -> int: ...


@runtime_checkable
class CurrentTimeProvider(Protocol):
    """Source of "now".

    ``now()`` returns a timezone-aware datetime, which carries both the
    absolute instant and the zone it is expressed in.
    """

    def now(self) -> datetime:
        ...


@runtime_checkable
class CalendarSystem(Protocol):
    """Calendar arithmetic over absolute instants."""

    identifier: str

    def resolve(self, fields: CivilFields, tz: tzinfo, base: datetime) -> datetime:
        """Overlay ``fields`` onto ``base`` (expressed in ``tz``) and resolve."""
        ...

    def fields_from(self, instant: datetime, tz: tzinfo, kind: FieldSet) -> CivilFields:
        """Extract the civil fields of ``instant`` in ``tz``."""
        ...

    def adding(self, instant: datetime, unit: CalendarUnit, amount: int, tz: tzinfo) -> datetime:
        """Add ``amount`` calendar units to ``instant``."""
        ...

    def component(self, instant: datetime, component: CalendarComponent, tz: tzinfo) -> int:
        """Derive a single calendar component of ``instant``."""
        ...

    def weekday(self, instant: datetime, tz: tzinfo) -> int:
        """Weekday, 1 = Sunday ... 7 = Saturday."""
        ...

    def is_weekend(self, instant: datetime, tz: tzinfo) -> bool:
        ...


@runtime_checkable
class FormattingService(Protocol):
    """Locale-aware presentation, implemented outside the value types."""

    def current_locale(self) -> str:
        """Identifier of the locale used when ``locale`` is None."""
        ...

    def hour_cycle_uses_ampm(self, locale: str | None) -> bool:
        ...

    def am_symbol(self, locale: str | None) -> str:
        ...

    def pm_symbol(self, locale: str | None) -> str:
        ...

    def localized_date_string(self, instant: datetime, locale: str | None, style: DateStyle) -> str:
        ...


__all__ = [
    "LocalDateLike",
    "CurrentTimeProvider",
    "CalendarSystem",
    "FormattingService",
]
