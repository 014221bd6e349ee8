"""Tests for row dataclass defaults."""

from __future__ import annotations

from focus_timer.store.clock import SystemClock
from focus_timer.store.models import SiteVisit, TimerSession


class TestStartTimeDefaults:
    """Unsaved models get the same timestamp shape the store writes."""

    def test_default_start_times_are_utc_whole_seconds(self) -> None:
        before = SystemClock().now()
        session = TimerSession()
        visit = SiteVisit()
        after = SystemClock().now()

        for value in (session.start_time, visit.start_time):
            assert value.tzinfo is None
            assert value.microsecond == 0
            assert before <= value <= after
