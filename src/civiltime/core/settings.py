"""Centralized settings for civiltime.

One validated, cached settings object describes the environment-dependent
half of the library: which zone and calendar the absolute-time bridge uses
and which locale the formatting service defaults to. Everything else in the
library is a pure function of its inputs and needs no configuration.

All fields can be set via ``CIVILTIME_*`` environment variables (e.g.
``CIVILTIME_TIMEZONE=Europe/Berlin``) or a ``.env`` file.

Examples:
    >>> from civiltime.core.settings import get_settings
    >>> settings = get_settings()
    >>> settings.date_timezone
    'UTC'

Tags:
    configuration, settings, pydantic, civiltime
"""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from enum import Enum
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from civiltime.core.errors import ConfigError


class CalendarKind(str, Enum):
    """Week rules available for the Gregorian calendar."""

    GREGORIAN = "gregorian"
    ISO8601 = "iso8601"


class LogFormat(str, Enum):
    JSON = "json"
    CONSOLE = "console"
    AUTO = "auto"


class CivilTimeSettings(BaseSettings):
    """civiltime configuration.

    Fields
    ──────
    timezone       : Zone for LocalDateTime bridge calls (None = system local)
    date_timezone  : Zone for LocalDate bridge calls
    calendar       : Week rule of the default calendar
    locale         : Default formatting locale (None = current LC_TIME)
    log_level      : Structlog log level
    log_format     : json / console / auto
    """

    model_config = SettingsConfigDict(
        env_prefix="CIVILTIME_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Bridge ───────────────────────────────────────────────────
    timezone: str | None = Field(default=None, description="IANA zone for date-times")
    date_timezone: str = Field(default="UTC", description="IANA zone for dates")
    calendar: CalendarKind = Field(default=CalendarKind.GREGORIAN)

    # ── Formatting ───────────────────────────────────────────────
    locale: str | None = Field(default=None)

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="WARNING")
    log_format: LogFormat = Field(default=LogFormat.AUTO)

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level {value!r}")
        return level

    @property
    def json_logs(self) -> bool | None:
        """``configure_logging`` json_format argument for ``log_format``."""
        if self.log_format == LogFormat.AUTO:
            return None
        return self.log_format == LogFormat.JSON


def resolve_timezone(name: str | None) -> tzinfo:
    """Turn a zone name into a ``tzinfo``.

    ``None`` resolves to the system's current local zone, ``"UTC"`` to
    ``datetime.timezone.utc``; anything else must be an IANA key.

    The local zone comes back as the fixed offset in force when this is
    called, not as an IANA zone. A bridge built from it keeps that offset
    for its lifetime, so values on the far side of a DST change (or a
    process that outlives one) see the old offset. Set ``CIVILTIME_TIMEZONE``
    to an IANA key when that matters.

    Raises:
        ConfigError: If the zone key is unknown
    """
    if name is None:
        return datetime.now().astimezone().tzinfo
    if name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigError("timezone", name, f"Unknown time zone: {name!r}") from exc


# ── Settings factory with caching ────────────────────────────────────────

_settings_cache: dict[str, CivilTimeSettings] = {}


def get_settings(*, _force_reload: bool = False) -> CivilTimeSettings:
    """Load, validate, and cache a :class:`CivilTimeSettings` instance."""
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]
    settings = CivilTimeSettings()
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    """Drop the cached settings (tests, or after changing the environment)."""
    _settings_cache.clear()


__all__ = [
    "CalendarKind",
    "LogFormat",
    "CivilTimeSettings",
    "resolve_timezone",
    "get_settings",
    "clear_settings_cache",
]
