"""Tests for statistics reads.

Covers:
- format_date(): day normalization
- get_daily_stats(): point lookup, absent days
- get_weekly_stats(): trailing window and ordering
- get_site_visit_stats(): per-site aggregation for one day
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime

import pytest

from focus_timer.store.clock import FixedClock
from focus_timer.store.core import ActivityStore
from focus_timer.store.stats import format_date

SITE = "video.example.com"
OTHER_SITE = "mail.example.com"


class TestFormatDate:
    """Verify day normalization."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (date(2026, 1, 5), "2026-01-05"),
            (datetime(2026, 1, 5, 23, 59, 59), "2026-01-05"),
            ("2026-01-05", "2026-01-05"),
            ("2026-01-05 08:30:00", "2026-01-05"),
        ],
    )
    def test_normalizes_to_iso_day(self, value: date | datetime | str, expected: str) -> None:
        assert format_date(value) == expected

    def test_rejects_garbage(self) -> None:
        with pytest.raises(ValueError):
            format_date("last tuesday")


class TestGetDailyStats:
    """Verify single-day reads."""

    def test_defaults_to_today(
        self, store: ActivityStore, add_daily_stats: Callable[..., None]
    ) -> None:
        add_daily_stats("2026-03-14", work_minutes=100, break_minutes=20, cycles=4, blocked=2)

        stats = store.get_daily_stats()

        assert stats is not None
        assert stats.date == date(2026, 3, 14)
        assert stats.total_work_minutes == 100
        assert stats.total_break_minutes == 20
        assert stats.completed_cycles == 4
        assert stats.blocked_attempts == 2
        assert stats.created_at is not None

    def test_explicit_day(self, store: ActivityStore, add_daily_stats: Callable[..., None]) -> None:
        add_daily_stats("2026-03-01", work_minutes=50)

        stats = store.get_daily_stats(datetime(2026, 3, 1, 18, 0))

        assert stats is not None
        assert stats.total_work_minutes == 50

    def test_missing_day_returns_none(self, store: ActivityStore) -> None:
        assert store.get_daily_stats(date(1999, 12, 31)) is None

    def test_today_follows_store_clock(
        self,
        store: ActivityStore,
        fixed_clock: FixedClock,
        add_daily_stats: Callable[..., None],
    ) -> None:
        add_daily_stats("2026-03-15", cycles=1)
        assert store.get_daily_stats() is None

        fixed_clock.advance(days=1)

        stats = store.get_daily_stats()
        assert stats is not None
        assert stats.completed_cycles == 1


class TestGetWeeklyStats:
    """Verify the trailing seven-day window."""

    def test_window_and_order(
        self, store: ActivityStore, add_daily_stats: Callable[..., None]
    ) -> None:
        # Today is 2026-03-14, so the window starts at 2026-03-07
        add_daily_stats("2026-03-14", work_minutes=14)
        add_daily_stats("2026-03-06", work_minutes=6)
        add_daily_stats("2026-03-10", work_minutes=10)
        add_daily_stats("2026-03-07", work_minutes=7)
        add_daily_stats("2026-02-01", work_minutes=1)

        weekly = store.get_weekly_stats()

        assert [row.date for row in weekly] == [
            date(2026, 3, 7),
            date(2026, 3, 10),
            date(2026, 3, 14),
        ]
        assert [row.total_work_minutes for row in weekly] == [7, 10, 14]

    def test_empty_table(self, store: ActivityStore) -> None:
        assert store.get_weekly_stats() == []


class TestGetSiteVisitStats:
    """Verify per-site daily aggregation."""

    def test_no_visits_returns_zero_count_and_null_total(self, store: ActivityStore) -> None:
        stats = store.get_site_visit_stats(SITE, date(2026, 3, 14))

        assert stats.site_url == SITE
        assert stats.date == date(2026, 3, 14)
        assert stats.visit_count == 0
        assert stats.total_duration_seconds is None
        assert stats.blocked_attempts == 0

    def test_open_visit_counts_without_duration(self, store: ActivityStore) -> None:
        store.start_site_visit(SITE)

        stats = store.get_site_visit_stats(SITE)

        assert stats.visit_count == 1
        assert stats.total_duration_seconds is None

    def test_aggregates_closed_and_blocked_visits(
        self, store: ActivityStore, fixed_clock: FixedClock
    ) -> None:
        first = store.start_site_visit(SITE)
        fixed_clock.advance(seconds=90)
        store.end_site_visit(first)

        second = store.start_site_visit(SITE)
        fixed_clock.advance(seconds=30)
        store.end_site_visit(second)

        store.start_site_visit(SITE, blocked=True)
        store.start_site_visit(OTHER_SITE, blocked=True)

        stats = store.get_site_visit_stats(SITE)

        assert stats.visit_count == 3
        assert stats.total_duration_seconds == 120
        assert stats.blocked_attempts == 1

    def test_only_counts_requested_day(
        self, store: ActivityStore, fixed_clock: FixedClock
    ) -> None:
        store.start_site_visit(SITE)
        fixed_clock.advance(days=1)
        store.start_site_visit(SITE)
        store.start_site_visit(SITE)

        assert store.get_site_visit_stats(SITE, date(2026, 3, 14)).visit_count == 1
        assert store.get_site_visit_stats(SITE, "2026-03-15").visit_count == 2

    def test_to_dict(self, store: ActivityStore) -> None:
        stats = store.get_site_visit_stats(SITE, date(2026, 3, 14))
        assert stats.to_dict() == {
            "site_url": SITE,
            "date": "2026-03-14",
            "visit_count": 0,
            "total_duration_seconds": None,
            "blocked_attempts": 0,
        }
