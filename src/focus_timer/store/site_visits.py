"""Site visit operations for the activity store."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, cast

from focus_timer.constants import SECONDS_PER_DAY, TABLE_SITE_VISITS
from focus_timer.store.clock import format_timestamp
from focus_timer.store.models import SiteVisit

if TYPE_CHECKING:
    from focus_timer.store.core import ActivityStore

logger = logging.getLogger(__name__)


def start_site_visit(store: ActivityStore, site_url: str, blocked: bool = False) -> int:
    """Open a visit to a site.

    Args:
        store: The ActivityStore instance.
        site_url: Site being visited.
        blocked: True when the visit was an attempt stopped by a site limit.

    Returns:
        ID of the new visit.
    """
    now = format_timestamp(store.clock.now())

    with store._transaction(TABLE_SITE_VISITS) as conn:
        cursor = conn.execute(
            """
            INSERT INTO site_visits (site_url, start_time, blocked, created_at)
            VALUES (?, ?, ?, ?)
            """,
            (site_url, now, blocked, now),
        )
        visit_id = cast(int, cursor.lastrowid)

    logger.debug(f"Started site visit {visit_id} to {site_url} (blocked={blocked})")
    return visit_id


def end_site_visit(store: ActivityStore, visit_id: int) -> int:
    """Close a visit and compute its duration.

    duration_seconds is derived in SQL from the stored start_time and the
    store clock's current time, rounded to whole seconds. A visit that is
    unknown or already closed affects zero rows.

    Args:
        store: The ActivityStore instance.
        visit_id: Visit to close.

    Returns:
        Number of rows updated (0 or 1).
    """
    end_time = format_timestamp(store.clock.now())

    with store._transaction(TABLE_SITE_VISITS) as conn:
        cursor = conn.execute(
            f"""
            UPDATE site_visits
            SET end_time = :end_time,
                duration_seconds = CAST(
                    ROUND((julianday(:end_time) - julianday(start_time)) * {SECONDS_PER_DAY})
                    AS INTEGER
                )
            WHERE id = :visit_id AND end_time IS NULL
            """,  # noqa: S608
            {"end_time": end_time, "visit_id": visit_id},
        )
        updated = cursor.rowcount

    if updated:
        logger.debug(f"Ended site visit {visit_id}")
    else:
        logger.debug(f"End skipped: no open site visit {visit_id}")
    return updated


def get_site_visit(store: ActivityStore, visit_id: int) -> SiteVisit | None:
    """Get site visit by ID."""
    with store._reading() as conn:
        cursor = conn.execute("SELECT * FROM site_visits WHERE id = ?", (visit_id,))
        row = cursor.fetchone()
    return SiteVisit.from_row(row) if row else None
