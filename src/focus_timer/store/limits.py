"""Site limit operations for the activity store."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from focus_timer.constants import TABLE_SITE_LIMITS
from focus_timer.store.clock import format_timestamp
from focus_timer.store.models import SiteLimit

if TYPE_CHECKING:
    from focus_timer.store.core import ActivityStore

logger = logging.getLogger(__name__)


def set_site_limit(store: ActivityStore, site_url: str, daily_limit_minutes: int) -> SiteLimit:
    """Create or overwrite the daily limit for a site.

    On a site_url conflict the limit and updated_at are replaced; created_at
    keeps its original value.

    Args:
        store: The ActivityStore instance.
        site_url: Site the limit applies to.
        daily_limit_minutes: Allowed minutes per day.

    Returns:
        The stored SiteLimit.
    """
    now = format_timestamp(store.clock.now())

    with store._transaction(TABLE_SITE_LIMITS) as conn:
        conn.execute(
            """
            INSERT INTO site_limits (site_url, daily_limit_minutes, created_at, updated_at)
            VALUES (:site_url, :daily_limit_minutes, :now, :now)
            ON CONFLICT(site_url) DO UPDATE SET
                daily_limit_minutes = excluded.daily_limit_minutes,
                updated_at = excluded.updated_at
            """,
            {"site_url": site_url, "daily_limit_minutes": daily_limit_minutes, "now": now},
        )
        row = conn.execute(
            "SELECT * FROM site_limits WHERE site_url = ?", (site_url,)
        ).fetchone()

    logger.debug(f"Set daily limit for {site_url} to {daily_limit_minutes} min")
    return SiteLimit.from_row(row)


def get_site_limit(store: ActivityStore, site_url: str) -> SiteLimit | None:
    """Get the limit configured for a site."""
    with store._reading() as conn:
        cursor = conn.execute("SELECT * FROM site_limits WHERE site_url = ?", (site_url,))
        row = cursor.fetchone()
    return SiteLimit.from_row(row) if row else None


def list_site_limits(store: ActivityStore) -> list[SiteLimit]:
    """All configured site limits, ordered by site_url."""
    with store._reading() as conn:
        cursor = conn.execute("SELECT * FROM site_limits ORDER BY site_url")
        return [SiteLimit.from_row(row) for row in cursor.fetchall()]
