"""Time sources for the activity store.

The store stamps rows from its own clock rather than from values passed in
by callers. Production uses SystemClock (UTC, second precision, matching
SQLite's CURRENT_TIMESTAMP); tests inject a FixedClock.
"""

import threading
from datetime import UTC, date, datetime, timedelta
from typing import Protocol

from focus_timer.constants import TIMESTAMP_FORMAT


class Clock(Protocol):
    """Anything that can tell the store what time it is."""

    def now(self) -> datetime:
        """Current UTC time, naive, truncated to whole seconds."""
        ...


class SystemClock:
    """Wall-clock time in UTC."""

    def now(self) -> datetime:
        return datetime.now(UTC).replace(tzinfo=None, microsecond=0)


class FixedClock:
    """Manually advanced clock for deterministic timestamps."""

    def __init__(self, start: datetime):
        self._now = start.replace(microsecond=0)
        self._lock = threading.Lock()

    def now(self) -> datetime:
        with self._lock:
            return self._now

    def advance(self, **kwargs: float) -> datetime:
        """Move the clock forward by a timedelta built from kwargs.

        Returns:
            The new current time.
        """
        with self._lock:
            self._now = self._now + timedelta(**kwargs)
            return self._now

    def set(self, value: datetime) -> None:
        with self._lock:
            self._now = value.replace(microsecond=0)


def format_timestamp(value: datetime) -> str:
    """Render a datetime the way the schema stores it."""
    return value.strftime(TIMESTAMP_FORMAT)


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse a stored timestamp; None passes through."""
    if value is None:
        return None
    return datetime.fromisoformat(value)


def today(clock: Clock) -> date:
    return clock.now().date()
