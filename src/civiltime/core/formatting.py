"""
Locale-aware presentation for civil values.

The value types never read locale data themselves. They ask a
``FormattingService`` for AM/PM symbols, the hour cycle, and localized date
text. ``PosixFormattingService`` answers from the C library's locale
database via :mod:`locale`.

Hour-cycle detection is comparatively expensive (it switches ``LC_TIME``),
so the answer is memoized per locale in an ``HourCycleCache``. The cache is
an explicit object guarded by a lock; callers may inject their own, and a
process default is used otherwise.

Examples:
    >>> cache = HourCycleCache()
    >>> format_hour_minutes(19, 5, locale="C", service=PosixFormattingService(), cache=cache)
    '19:05'

Tags:
    formatting, locale, cache, thread-safety, civiltime
"""

from __future__ import annotations

import locale as _locale
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from enum import Enum

from civiltime.core.errors import FormattingError
from civiltime.core.logging import get_logger
from civiltime.core.protocols import FormattingService
from civiltime.core.settings import get_settings

logger = get_logger(__name__)


class DateStyle(str, Enum):
    """Length of a localized date string."""

    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"
    FULL = "full"


# SHORT and MEDIUM use the locale's own numeric format; LONG and FULL spell
# out month (and weekday) names in the locale's language.
_STYLE_FORMATS = {
    DateStyle.LONG: "%d %B %Y",
    DateStyle.FULL: "%A, %d %B %Y",
}

_AMPM_DIRECTIVES = ("%p", "%r", "%I", "%l")


class HourCycleCache:
    """
    Thread-safe memo of "does this locale use a 12-hour clock".

    Keys are locale identifiers as reported by the formatting service. The
    lock is held while computing so concurrent misses for the same locale
    query the service once.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._values: dict[str, bool] = {}

    def uses_ampm(self, locale: str | None, service: FormattingService) -> bool:
        key = locale if locale is not None else service.current_locale()
        with self._lock:
            cached = self._values.get(key)
            if cached is not None:
                return cached
            value = service.hour_cycle_uses_ampm(key)
            self._values[key] = value
        logger.debug("hour_cycle.cache_miss", locale=key, uses_ampm=value)
        return value

    def clear(self) -> None:
        with self._lock:
            self._values.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)


# setlocale() is process-global; every switch goes through this lock.
_LC_TIME_LOCK = threading.RLock()


@contextmanager
def _time_locale(name: str | None) -> Iterator[None]:
    with _LC_TIME_LOCK:
        if name is None:
            yield
            return
        previous = _locale.setlocale(_locale.LC_TIME)
        try:
            _locale.setlocale(_locale.LC_TIME, name)
        except _locale.Error as exc:
            raise FormattingError(f"Unknown locale: {name!r}", cause=exc).with_context(
                locale=name
            ) from exc
        try:
            yield
        finally:
            _locale.setlocale(_locale.LC_TIME, previous)


class PosixFormattingService:
    """
    FormattingService backed by the C library locale database.

    ``locale=None`` means whatever ``LC_TIME`` is currently set to (``"C"``
    unless the application called ``setlocale``).

    Raises:
        FormattingError: When a locale is not installed
    """

    def current_locale(self) -> str:
        with _LC_TIME_LOCK:
            return _locale.setlocale(_locale.LC_TIME)

    def hour_cycle_uses_ampm(self, locale: str | None) -> bool:
        with _time_locale(locale):
            time_format = _locale.nl_langinfo(_locale.T_FMT)
        return any(directive in time_format for directive in _AMPM_DIRECTIVES)

    def am_symbol(self, locale: str | None) -> str:
        with _time_locale(locale):
            return _locale.nl_langinfo(_locale.AM_STR) or "AM"

    def pm_symbol(self, locale: str | None) -> str:
        with _time_locale(locale):
            return _locale.nl_langinfo(_locale.PM_STR) or "PM"

    def localized_date_string(self, instant: datetime, locale: str | None, style: DateStyle) -> str:
        style = DateStyle(style)
        with _time_locale(locale):
            pattern = _STYLE_FORMATS.get(style) or _locale.nl_langinfo(_locale.D_FMT)
            return instant.strftime(pattern)


def format_hour_minutes(
    hour: int,
    minute: int,
    *,
    locale: str | None = None,
    service: FormattingService | None = None,
    cache: HourCycleCache | None = None,
) -> str:
    """
    Minute-precision time of day, e.g. ``"07:00"`` or ``"10:15 AM"``.

    12-hour locales render hours 1-12 (midnight is ``12:xx AM``, noon is
    ``12:xx PM``). Without ``locale`` the configured ``CIVILTIME_LOCALE``
    applies, then the service's current locale.
    """
    if locale is None:
        locale = get_settings().locale
    if service is None:
        service = get_formatting_service()
    if cache is None:
        cache = get_hour_cycle_cache()
    if not cache.uses_ampm(locale, service):
        return f"{hour:02d}:{minute:02d}"
    if hour < 12:
        symbol = service.am_symbol(locale)
    else:
        symbol = service.pm_symbol(locale)
    return f"{hour % 12 or 12:02d}:{minute:02d} {symbol}"


# ── Process defaults ─────────────────────────────────────────────────────

_defaults_lock = threading.Lock()
_default_service: FormattingService | None = None
_default_cache = HourCycleCache()


def get_formatting_service() -> FormattingService:
    global _default_service
    with _defaults_lock:
        if _default_service is None:
            _default_service = PosixFormattingService()
        return _default_service


def set_formatting_service(service: FormattingService | None) -> None:
    """Install ``service`` as the default (None restores the POSIX one).

    The default hour-cycle cache is cleared since its answers came from the
    previous service.
    """
    global _default_service
    with _defaults_lock:
        _default_service = service
    _default_cache.clear()


def get_hour_cycle_cache() -> HourCycleCache:
    return _default_cache


__all__ = [
    "DateStyle",
    "HourCycleCache",
    "PosixFormattingService",
    "format_hour_minutes",
    "get_formatting_service",
    "set_formatting_service",
    "get_hour_cycle_cache",
]
