"""
Core civil-time primitives.

Leaves first:

    fields          CivilFields (complete field sets, ordering key)
    calendar        GregorianCalendar, CalendarUnit, CalendarComponent
    bridge          AbsoluteTimeBridge (the only civil <-> instant seam)
    iso             ISO text codec
    temporal        CivilValue (shared ordering / ISO / pydantic behaviour)
    local_date      LocalDate
    local_datetime  LocalDateTime
    ranges          LocalDateRange, LocalDateTimeRange
    formatting      FormattingService implementation + hour-cycle cache

Ambient:

    errors, result, logging, settings, protocols, clock
"""

from civiltime.core.bridge import AbsoluteTimeBridge, get_bridge, reset_bridge, set_bridge
from civiltime.core.calendar import CalendarComponent, CalendarUnit, GregorianCalendar
from civiltime.core.clock import FixedClock, SystemClock
from civiltime.core.errors import (
    CalendarError,
    CalendarRangeError,
    CivilTimeError,
    ConfigError,
    ErrorCategory,
    FieldRangeError,
    FormattingError,
    ParseError,
    ValidationError,
)
from civiltime.core.fields import CivilFields, FieldSet
from civiltime.core.formatting import (
    DateStyle,
    HourCycleCache,
    PosixFormattingService,
    set_formatting_service,
)
from civiltime.core.local_date import LocalDate
from civiltime.core.local_datetime import LocalDateTime
from civiltime.core.protocols import (
    CalendarSystem,
    CurrentTimeProvider,
    FormattingService,
    LocalDateLike,
)
from civiltime.core.ranges import LocalDateRange, LocalDateTimeRange
from civiltime.core.result import Err, Ok, Result

__all__ = [
    # Values
    "CivilFields",
    "FieldSet",
    "LocalDate",
    "LocalDateTime",
    "LocalDateRange",
    "LocalDateTimeRange",
    "LocalDateLike",
    # Bridge / calendar
    "AbsoluteTimeBridge",
    "get_bridge",
    "set_bridge",
    "reset_bridge",
    "CalendarSystem",
    "GregorianCalendar",
    "CalendarUnit",
    "CalendarComponent",
    "CurrentTimeProvider",
    "SystemClock",
    "FixedClock",
    # Formatting
    "FormattingService",
    "PosixFormattingService",
    "HourCycleCache",
    "DateStyle",
    "set_formatting_service",
    # Errors / results
    "CivilTimeError",
    "ErrorCategory",
    "ParseError",
    "ValidationError",
    "FieldRangeError",
    "CalendarError",
    "CalendarRangeError",
    "FormattingError",
    "ConfigError",
    "Ok",
    "Err",
    "Result",
]
