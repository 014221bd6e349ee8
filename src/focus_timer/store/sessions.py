"""Timer session operations for the activity store.

Functions for starting and completing work/break sessions and recording the
cycles they form.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, cast

from focus_timer.constants import TABLE_COMPLETED_CYCLES, TABLE_TIMER_SESSIONS
from focus_timer.store.clock import format_timestamp
from focus_timer.store.models import CompletedCycle, TimerKind, TimerSession

if TYPE_CHECKING:
    from focus_timer.store.core import ActivityStore

logger = logging.getLogger(__name__)


def _kind_value(kind: TimerKind | str) -> str:
    # Unknown kinds are passed through so the CHECK constraint rejects them
    return kind.value if isinstance(kind, TimerKind) else str(kind)


def start_timer_session(
    store: ActivityStore,
    kind: TimerKind | str,
    duration_minutes: int,
    preset_id: str,
) -> int:
    """Insert a new, not yet completed, timer session.

    Args:
        store: The ActivityStore instance.
        kind: 'work' or 'break'.
        duration_minutes: Planned length of the countdown.
        preset_id: Opaque id of the preset the session was started from.

    Returns:
        ID of the new session.

    Raises:
        SchemaViolationError: If kind is not 'work' or 'break'.
    """
    now = store.clock.now()
    session = TimerSession(
        start_time=now,
        duration_minutes=duration_minutes,
        kind=_kind_value(kind),
        preset_id=preset_id,
        completed=False,
        created_at=now,
    )

    with store._transaction(TABLE_TIMER_SESSIONS) as conn:
        cursor = conn.execute(
            """
            INSERT INTO timer_sessions (start_time, duration_minutes, type, preset_id,
                                        completed, created_at)
            VALUES (:start_time, :duration_minutes, :type, :preset_id,
                    :completed, :created_at)
            """,
            session.to_row(),
        )
        session_id = cast(int, cursor.lastrowid)

    logger.debug(
        f"Started {session.kind} session {session_id} "
        f"({duration_minutes} min, preset={preset_id})"
    )
    return session_id


def complete_timer_session(store: ActivityStore, session_id: int) -> int:
    """Stamp end_time and mark a session completed.

    Only an uncompleted session is updated, so end_time is written once.
    An unknown or already completed id affects zero rows; that is not an error.

    Args:
        store: The ActivityStore instance.
        session_id: Session to complete.

    Returns:
        Number of rows updated (0 or 1).
    """
    end_time = format_timestamp(store.clock.now())

    with store._transaction(TABLE_TIMER_SESSIONS) as conn:
        cursor = conn.execute(
            """
            UPDATE timer_sessions
            SET end_time = ?, completed = 1
            WHERE id = ? AND completed = 0
            """,
            (end_time, session_id),
        )
        updated = cursor.rowcount

    if updated:
        logger.debug(f"Completed timer session {session_id}")
    else:
        logger.debug(f"Complete skipped: no open timer session {session_id}")
    return updated


def get_timer_session(store: ActivityStore, session_id: int) -> TimerSession | None:
    """Get timer session by ID."""
    with store._reading() as conn:
        cursor = conn.execute("SELECT * FROM timer_sessions WHERE id = ?", (session_id,))
        row = cursor.fetchone()
    return TimerSession.from_row(row) if row else None


def record_completed_cycle(
    store: ActivityStore,
    work_session_id: int,
    break_session_id: int | None = None,
) -> int:
    """Record a work session and its following break as one cycle.

    Whether the sessions are actually completed is the caller's concern;
    only their existence is enforced, by foreign key.

    Args:
        store: The ActivityStore instance.
        work_session_id: The work session.
        break_session_id: The break session, if one followed.

    Returns:
        ID of the new cycle.

    Raises:
        SchemaViolationError: If either id does not reference a timer session.
    """
    completed_at = format_timestamp(store.clock.now())

    with store._transaction(TABLE_COMPLETED_CYCLES) as conn:
        cursor = conn.execute(
            """
            INSERT INTO completed_cycles (work_session_id, break_session_id, completed_at)
            VALUES (?, ?, ?)
            """,
            (work_session_id, break_session_id, completed_at),
        )
        cycle_id = cast(int, cursor.lastrowid)

    logger.debug(
        f"Recorded cycle {cycle_id}: work={work_session_id}, break={break_session_id}"
    )
    return cycle_id


def get_completed_cycle(store: ActivityStore, cycle_id: int) -> CompletedCycle | None:
    """Get completed cycle by ID."""
    with store._reading() as conn:
        cursor = conn.execute("SELECT * FROM completed_cycles WHERE id = ?", (cycle_id,))
        row = cursor.fetchone()
    return CompletedCycle.from_row(row) if row else None
