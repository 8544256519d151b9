"""
Shared pytest fixtures for civiltime tests.

This module provides:
- Isolation of the process defaults (bridge, settings, formatting service)
- A fixed clock and a UTC bridge so expensive operations are deterministic
- A fake formatting service that records how often it is consulted

Usage:
    def test_weekday(utc_bridge):
        assert LocalDate(2022, 5, 7).weekday == 7
"""

import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Generator

import pytest

# Ensure civiltime package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from civiltime.core.bridge import AbsoluteTimeBridge, reset_bridge, set_bridge
from civiltime.core.clock import FixedClock
from civiltime.core.formatting import DateStyle, set_formatting_service
from civiltime.core.logging import configure_logging
from civiltime.core.settings import clear_settings_cache

FIXED_INSTANT = datetime(2024, 3, 15, 10, 30, 45, 123456, tzinfo=UTC)


# =============================================================================
# Isolation
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Keep library debug events out of test output."""
    configure_logging(level="WARNING", json_format=False)


@pytest.fixture(autouse=True)
def _isolate_defaults(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Every test starts from an unconfigured environment."""
    for key in ("TIMEZONE", "DATE_TIMEZONE", "CALENDAR", "LOCALE", "LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(f"CIVILTIME_{key}", raising=False)
    clear_settings_cache()
    reset_bridge()
    yield
    reset_bridge()
    clear_settings_cache()
    set_formatting_service(None)


# =============================================================================
# Clock / bridge
# =============================================================================


@pytest.fixture
def fixed_clock() -> FixedClock:
    """2024-03-15T10:30:45.123456Z, a Friday."""
    return FixedClock(FIXED_INSTANT)


@pytest.fixture
def utc_bridge(fixed_clock: FixedClock) -> AbsoluteTimeBridge:
    """UTC for both field kinds, fixed clock, installed as the process default."""
    bridge = AbsoluteTimeBridge(timezone=UTC, date_timezone=UTC, clock=fixed_clock)
    set_bridge(bridge)
    return bridge


# =============================================================================
# Formatting
# =============================================================================


class FakeFormattingService:
    """
    In-memory FormattingService.

    ``twelve_hour`` lists the locales that use an AM/PM clock. Every
    hour-cycle lookup is recorded in ``hour_cycle_calls``.
    """

    def __init__(self, twelve_hour: set[str] | None = None, current: str = "en_GB"):
        self.twelve_hour = twelve_hour if twelve_hour is not None else {"en_US"}
        self.current = current
        self.hour_cycle_calls: list[str | None] = []

    def current_locale(self) -> str:
        return self.current

    def hour_cycle_uses_ampm(self, locale: str | None) -> bool:
        self.hour_cycle_calls.append(locale)
        return locale in self.twelve_hour

    def am_symbol(self, locale: str | None) -> str:
        return "AM"

    def pm_symbol(self, locale: str | None) -> str:
        return "PM"

    def localized_date_string(self, instant: datetime, locale: str | None, style: DateStyle) -> str:
        return f"{locale}|{DateStyle(style).value}|{instant.date().isoformat()}"


@pytest.fixture
def fake_formatting() -> FakeFormattingService:
    return FakeFormattingService()


@pytest.fixture
def sample_payload() -> dict[str, Any]:
    """A pydantic payload mixing both value types."""
    return {"due": "2022-05-07", "starts_at": "2022-05-07T09:30:00"}
