"""
AbsoluteTimeBridge: the single seam between civil fields and instants.

Civil values are compared, hashed and encoded without ever touching a zone
or a calendar. A few operations cannot avoid it (calendar arithmetic,
derived components such as week-of-year, weekday and weekend checks) and
those all funnel through this class, which owns the three environment
dependencies: the zone, the calendar and the clock.

Manifesto:
    Converting civil time to absolute time depends on the environment and
    costs far more than comparing two integers. Keeping every conversion
    behind one object makes the expensive path explicit, and makes it
    deterministic under test by injecting a fixed clock and zone.

Architecture:
    ::

        ┌──────────────┐   to_absolute()    ┌───────────────────────┐
        │ CivilFields  │ ─────────────────▶ │ aware datetime        │
        │ (DATE or     │                    │ (instant + zone)      │
        │  DATE_TIME)  │ ◀───────────────── │                       │
        └──────────────┘   from_absolute()  └───────────────────────┘
                 │
                 │ add() / component() / weekday() / is_weekend()
                 ▼
        to_absolute ──▶ CalendarSystem ──▶ from_absolute

        Zone selection:
          DATE fields       → date_timezone (UTC unless configured)
          DATE_TIME fields  → timezone      (system local unless configured)

Overlay onto now:
    ``to_absolute`` starts from the clock's current instant expressed in the
    target zone and overwrites the stored fields. Anything the value type
    does not store (sub-second precision) is inherited from that moment
    rather than zeroed.

Examples:
    >>> from datetime import datetime, timezone
    >>> from civiltime.core.clock import FixedClock
    >>> bridge = AbsoluteTimeBridge(
    ...     timezone=timezone.utc,
    ...     clock=FixedClock(datetime(2024, 1, 1, tzinfo=timezone.utc)),
    ... )
    >>> bridge.to_absolute(CivilFields.date_time(2022, 5, 7, 12)).isoformat()
    '2022-05-07T12:00:00+00:00'

Tags:
    bridge, absolute-time, timezone, calendar, civiltime
"""

from __future__ import annotations

import threading
from datetime import UTC, datetime, tzinfo

from civiltime.core.calendar import CalendarComponent, CalendarUnit, GregorianCalendar
from civiltime.core.clock import SystemClock
from civiltime.core.fields import CivilFields, FieldSet
from civiltime.core.logging import get_logger
from civiltime.core.protocols import CalendarSystem, CurrentTimeProvider
from civiltime.core.settings import (
    CalendarKind,
    CivilTimeSettings,
    get_settings,
    resolve_timezone,
)

logger = get_logger(__name__)


class AbsoluteTimeBridge:
    """
    Converts civil fields to and from absolute instants.

    Every method accepts per-call ``timezone`` / ``calendar`` overrides;
    otherwise the bridge's own defaults apply (chosen by field kind for the
    zone).

    Args:
        timezone: Zone for DATE_TIME fields (system local when None)
        date_timezone: Zone for DATE fields (UTC when None)
        calendar: Calendar system (Sunday-first Gregorian when None)
        clock: Current-time provider used for the overlay
    """

    def __init__(
        self,
        *,
        timezone: tzinfo | None = None,
        date_timezone: tzinfo | None = None,
        calendar: CalendarSystem | None = None,
        clock: CurrentTimeProvider | None = None,
    ):
        self.timezone = timezone or resolve_timezone(None)
        self.date_timezone = date_timezone or UTC
        self.calendar = calendar or GregorianCalendar()
        self.clock = clock or SystemClock()

    @classmethod
    def from_settings(
        cls,
        settings: CivilTimeSettings | None = None,
        *,
        clock: CurrentTimeProvider | None = None,
    ) -> AbsoluteTimeBridge:
        """Build a bridge from ``CivilTimeSettings``.

        Raises:
            ConfigError: If a configured zone is unknown
        """
        settings = settings or get_settings()
        if settings.calendar == CalendarKind.ISO8601:
            calendar = GregorianCalendar.iso8601()
        else:
            calendar = GregorianCalendar()
        return cls(
            timezone=resolve_timezone(settings.timezone),
            date_timezone=resolve_timezone(settings.date_timezone),
            calendar=calendar,
            clock=clock,
        )

    def zone_for(self, kind: FieldSet) -> tzinfo:
        return self.date_timezone if kind == FieldSet.DATE else self.timezone

    # ------------------------------------------------------------------ #
    # Conversions
    # ------------------------------------------------------------------ #

    def to_absolute(
        self,
        fields: CivilFields,
        timezone: tzinfo | None = None,
        calendar: CalendarSystem | None = None,
    ) -> datetime:
        """Overlay ``fields`` onto now and resolve. Expensive.

        Raises:
            CalendarRangeError: If the fields cannot be represented
        """
        tz = timezone or self.zone_for(fields.kind)
        cal = calendar or self.calendar
        instant = cal.resolve(fields, tz, self.clock.now())
        logger.debug(
            "bridge.to_absolute",
            fields=fields.as_tuple(),
            timezone=str(tz),
            calendar=cal.identifier,
            instant=instant.isoformat(),
        )
        return instant

    def from_absolute(
        self,
        instant: datetime,
        timezone: tzinfo | None = None,
        calendar: CalendarSystem | None = None,
        kind: FieldSet = FieldSet.DATE_TIME,
    ) -> CivilFields:
        """Extract civil fields from ``instant``.

        Naive instants are interpreted as system local time, following
        ``datetime.astimezone``.
        """
        tz = timezone or self.zone_for(kind)
        cal = calendar or self.calendar
        return cal.fields_from(instant, tz, kind)

    # ------------------------------------------------------------------ #
    # Calendar operations (all expensive)
    # ------------------------------------------------------------------ #

    def add(
        self,
        fields: CivilFields,
        unit: CalendarUnit,
        amount: int,
        timezone: tzinfo | None = None,
        calendar: CalendarSystem | None = None,
    ) -> CivilFields:
        """Calendar-aware addition, returning fields of the same kind."""
        tz = timezone or self.zone_for(fields.kind)
        cal = calendar or self.calendar
        instant = self.to_absolute(fields, tz, cal)
        shifted = cal.adding(instant, CalendarUnit(unit), amount, tz)
        return cal.fields_from(shifted, tz, fields.kind)

    def component(
        self,
        fields: CivilFields,
        component: CalendarComponent,
        timezone: tzinfo | None = None,
        calendar: CalendarSystem | None = None,
    ) -> int:
        tz = timezone or self.zone_for(fields.kind)
        cal = calendar or self.calendar
        return cal.component(self.to_absolute(fields, tz, cal), CalendarComponent(component), tz)

    def weekday(
        self,
        fields: CivilFields,
        timezone: tzinfo | None = None,
        calendar: CalendarSystem | None = None,
    ) -> int:
        tz = timezone or self.zone_for(fields.kind)
        cal = calendar or self.calendar
        return cal.weekday(self.to_absolute(fields, tz, cal), tz)

    def is_weekend(
        self,
        fields: CivilFields,
        timezone: tzinfo | None = None,
        calendar: CalendarSystem | None = None,
    ) -> bool:
        tz = timezone or self.zone_for(fields.kind)
        cal = calendar or self.calendar
        return cal.is_weekend(self.to_absolute(fields, tz, cal), tz)

    def now_fields(self, kind: FieldSet = FieldSet.DATE_TIME, timezone: tzinfo | None = None) -> CivilFields:
        """Civil fields of the clock's current instant."""
        return self.from_absolute(self.clock.now(), timezone, kind=kind)

    def __repr__(self) -> str:
        return (
            f"AbsoluteTimeBridge(timezone={self.timezone!r}, "
            f"date_timezone={self.date_timezone!r}, calendar={self.calendar!r})"
        )


# ── Process default ──────────────────────────────────────────────────────

_bridge_lock = threading.Lock()
_default_bridge: AbsoluteTimeBridge | None = None


def get_bridge() -> AbsoluteTimeBridge:
    """Return the process default bridge, building it from settings once."""
    global _default_bridge
    with _bridge_lock:
        if _default_bridge is None:
            _default_bridge = AbsoluteTimeBridge.from_settings()
        return _default_bridge


def set_bridge(bridge: AbsoluteTimeBridge) -> None:
    """Replace the process default bridge."""
    global _default_bridge
    with _bridge_lock:
        _default_bridge = bridge


def reset_bridge() -> None:
    """Forget the process default; the next ``get_bridge`` rebuilds it."""
    global _default_bridge
    with _bridge_lock:
        _default_bridge = None


__all__ = ["AbsoluteTimeBridge", "get_bridge", "set_bridge", "reset_bridge"]
