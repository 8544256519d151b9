"""Current-time providers.

``SystemClock`` reads the real clock; ``FixedClock`` always answers the same
instant and is what tests inject into the bridge.
"""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo


class SystemClock:
    """The machine clock, expressed in ``tz`` (system local when None)."""

    def __init__(self, tz: tzinfo | None = None):
        self._tz = tz

    def now(self) -> datetime:
        if self._tz is None:
            return datetime.now().astimezone()
        return datetime.now(self._tz)

    def __repr__(self) -> str:
        return f"SystemClock(tz={self._tz!r})"


class FixedClock:
    """A clock frozen at one instant. Naive instants are taken as UTC."""

    def __init__(self, instant: datetime):
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        self._instant = instant

    def now(self) -> datetime:
        return self._instant

    def __repr__(self) -> str:
        return f"FixedClock({self._instant.isoformat()!r})"


__all__ = ["SystemClock", "FixedClock"]
