"""Statistics reads for the activity store.

daily_stats rows are precomputed elsewhere; this module only reads them.
Per-site visit totals are aggregated on the fly from site_visits.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING

from focus_timer.constants import DATE_FORMAT, WEEKLY_WINDOW_DAYS
from focus_timer.store.clock import today
from focus_timer.store.models import DailyStats, SiteVisitStats

if TYPE_CHECKING:
    from focus_timer.store.core import ActivityStore

logger = logging.getLogger(__name__)


def format_date(value: date | datetime | str) -> str:
    """Normalize a day to its YYYY-MM-DD form.

    Args:
        value: A date, a datetime (its calendar day is used) or an ISO string.

    Returns:
        The day as YYYY-MM-DD.

    Raises:
        ValueError: If a string is not an ISO date or datetime.
    """
    if isinstance(value, datetime):
        return value.date().strftime(DATE_FORMAT)
    if isinstance(value, date):
        return value.strftime(DATE_FORMAT)
    return datetime.fromisoformat(value).date().strftime(DATE_FORMAT)


def _resolve_day(store: ActivityStore, day: date | datetime | str | None) -> str:
    return format_date(day if day is not None else today(store.clock))


def get_daily_stats(
    store: ActivityStore, day: date | datetime | str | None = None
) -> DailyStats | None:
    """Get the stats row for one day.

    Args:
        store: The ActivityStore instance.
        day: Day to look up; defaults to today on the store clock.

    Returns:
        The DailyStats row, or None if the day has no row.
    """
    formatted = _resolve_day(store, day)
    with store._reading() as conn:
        cursor = conn.execute("SELECT * FROM daily_stats WHERE date = ?", (formatted,))
        row = cursor.fetchone()
    if row is None:
        logger.debug(f"No daily stats for {formatted}")
        return None
    return DailyStats.from_row(row)


def get_weekly_stats(store: ActivityStore) -> list[DailyStats]:
    """Get stats rows dated on or after seven days before today, oldest first."""
    cutoff = format_date(today(store.clock) - timedelta(days=WEEKLY_WINDOW_DAYS))
    with store._reading() as conn:
        cursor = conn.execute(
            """
            SELECT * FROM daily_stats
            WHERE date >= ?
            ORDER BY date ASC
            """,
            (cutoff,),
        )
        return [DailyStats.from_row(row) for row in cursor.fetchall()]


def get_site_visit_stats(
    store: ActivityStore, site_url: str, day: date | datetime | str | None = None
) -> SiteVisitStats:
    """Aggregate a site's visits for one day.

    Args:
        store: The ActivityStore instance.
        site_url: Site to aggregate.
        day: Day to aggregate; defaults to today on the store clock.

    Returns:
        SiteVisitStats. A day without visits yields visit_count 0 and
        total_duration_seconds None.
    """
    formatted = _resolve_day(store, day)
    with store._reading() as conn:
        cursor = conn.execute(
            """
            SELECT
                COUNT(*) as visit_count,
                SUM(duration_seconds) as total_duration_seconds,
                SUM(CASE WHEN blocked = 1 THEN 1 ELSE 0 END) as blocked_attempts
            FROM site_visits
            WHERE site_url = ?
              AND date(start_time) = ?
            """,
            (site_url, formatted),
        )
        row = cursor.fetchone()

    return SiteVisitStats(
        site_url=site_url,
        date=date.fromisoformat(formatted),
        visit_count=row["visit_count"],
        total_duration_seconds=row["total_duration_seconds"],
        blocked_attempts=row["blocked_attempts"] or 0,
    )
