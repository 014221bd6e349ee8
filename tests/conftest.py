"""Pytest configuration and fixtures for focus-timer-store tests."""

import logging
from collections.abc import Callable, Iterator
from datetime import datetime
from pathlib import Path

import pytest

from focus_timer.constants import PACKAGE_LOGGER_NAME
from focus_timer.store.clock import FixedClock
from focus_timer.store.core import ActivityStore, reset_activity_store

# Midday UTC, so +/- a few hours never crosses a calendar day by accident
FIXED_START = datetime(2026, 3, 14, 12, 0, 0)


@pytest.fixture
def fixed_clock() -> FixedClock:
    """Provide a manually advanced clock starting at FIXED_START."""
    return FixedClock(FIXED_START)


@pytest.fixture
def store(tmp_path: Path, fixed_clock: FixedClock) -> Iterator[ActivityStore]:
    """Create an ActivityStore with a real temp SQLite database.

    Yields:
        ActivityStore stamped by fixed_clock
    """
    db_path = tmp_path / "focus" / "activity.db"
    activity_store = ActivityStore(db_path, clock=fixed_clock)
    try:
        yield activity_store
    finally:
        activity_store.close()


@pytest.fixture(autouse=True)
def _reset_store_singleton() -> Iterator[None]:
    """Never leak the process-wide store between tests."""
    reset_activity_store()
    yield
    reset_activity_store()


@pytest.fixture
def add_daily_stats(store: ActivityStore) -> Callable[..., None]:
    """Insert daily_stats rows directly; the store has no writer for them."""

    def _add(
        day: str,
        work_minutes: int = 0,
        break_minutes: int = 0,
        cycles: int = 0,
        blocked: int = 0,
    ) -> None:
        with store._transaction("daily_stats") as conn:
            conn.execute(
                """
                INSERT INTO daily_stats (date, total_work_time_minutes,
                                         total_break_time_minutes, completed_cycles,
                                         blocked_attempts)
                VALUES (?, ?, ?, ?, ?)
                """,
                (day, work_minutes, break_minutes, cycles, blocked),
            )

    return _add


@pytest.fixture
def restore_package_logger() -> Iterator[logging.Logger]:
    """Undo any handler or level changes made to the focus_timer logger."""
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    saved = (package_logger.level, package_logger.propagate, list(package_logger.handlers))
    yield package_logger
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(saved[0])
    package_logger.propagate = saved[1]
    for handler in saved[2]:
        package_logger.addHandler(handler)
