"""Core ActivityStore class for the focus timer.

Contains the ActivityStore class (connection ownership, transactions, schema
bootstrap and delegation to operation modules) and the process-wide accessor.
"""

import logging
import sqlite3
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date, datetime
from pathlib import Path

from focus_timer.config import StoreConfig
from focus_timer.constants import DB_CONNECT_TIMEOUT_SECONDS, IN_MEMORY_DB
from focus_timer.exceptions import DatabaseConnectionError, SchemaViolationError
from focus_timer.logging_config import configure_logging_from_config
from focus_timer.store import backup, limits, sessions, site_visits, stats
from focus_timer.store.clock import Clock, SystemClock
from focus_timer.store.models import (
    CompletedCycle,
    DailyStats,
    SiteLimit,
    SiteVisit,
    SiteVisitStats,
    TimerKind,
    TimerSession,
)
from focus_timer.store.schema import SCHEMA_SQL

logger = logging.getLogger(__name__)


class ActivityStore:
    """SQLite-based store for timer sessions, site visits, limits and stats.

    Owns exactly one connection for its lifetime. Statements are serialized
    through a re-entrant lock so one store can be shared across threads.
    """

    def __init__(self, db_path: Path | str = IN_MEMORY_DB, clock: Clock | None = None):
        """Open the database and bootstrap the schema.

        Args:
            db_path: Path to SQLite database file, or ':memory:'.
            clock: Time source for every stored timestamp. Defaults to UTC wall clock.

        Raises:
            DatabaseConnectionError: If the database cannot be opened.
        """
        self.db_path = str(db_path)
        self.clock: Clock = clock or SystemClock()
        self._lock = threading.RLock()
        self._conn: sqlite3.Connection | None = self._connect()
        self.ensure_schema()

    @property
    def is_in_memory(self) -> bool:
        return self.db_path == IN_MEMORY_DB

    @property
    def closed(self) -> bool:
        return self._conn is None

    def _connect(self) -> sqlite3.Connection:
        """Open the single owned connection."""
        try:
            if not self.is_in_memory:
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(
                self.db_path,
                check_same_thread=False,
                timeout=DB_CONNECT_TIMEOUT_SECONDS,
            )
            conn.row_factory = sqlite3.Row
            # completed_cycles references timer_sessions
            conn.execute("PRAGMA foreign_keys = ON")
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Failed to open activity database at {self.db_path}: {e}")
            raise DatabaseConnectionError(
                f"Could not open activity database: {e}", db_path=self.db_path
            ) from e
        logger.debug(f"Opened activity database at {self.db_path}")
        return conn

    def _get_connection(self) -> sqlite3.Connection:
        """Get the owned connection.

        Raises:
            DatabaseConnectionError: If the store has been closed.
        """
        if self._conn is None:
            raise DatabaseConnectionError("Activity store is closed", db_path=self.db_path)
        return self._conn

    @contextmanager
    def _transaction(self, table: str | None = None) -> Iterator[sqlite3.Connection]:
        """Context manager for write transactions.

        Constraint failures roll back and surface as SchemaViolationError;
        any other exception rolls back and propagates unchanged.

        Args:
            table: Table the write targets, reported on constraint failures.
        """
        with self._lock:
            conn = self._get_connection()
            try:
                yield conn
                conn.commit()
            except sqlite3.IntegrityError as e:
                conn.rollback()
                logger.warning(f"Constraint violation on {table or 'database'}: {e}")
                raise SchemaViolationError(
                    f"Write rejected by schema constraint: {e}",
                    table=table,
                    constraint=str(e),
                ) from e
            except sqlite3.Error as e:
                conn.rollback()
                logger.error(f"Database transaction error: {e}", exc_info=True)
                raise
            except Exception:
                # Writes made before the failure must not ride along on the next commit
                conn.rollback()
                raise

    @contextmanager
    def _reading(self) -> Iterator[sqlite3.Connection]:
        """Hold the statement lock for a read."""
        with self._lock:
            yield self._get_connection()

    def ensure_schema(self) -> None:
        """Create any missing tables and indexes. Existing rows are untouched."""
        with self._transaction() as conn:
            conn.executescript(SCHEMA_SQL)
        logger.info(f"Activity store schema ready ({self.db_path})")

    def list_tables(self) -> list[str]:
        """Names of the user tables in the database, sorted."""
        with self._reading() as conn:
            cursor = conn.execute(
                "SELECT name FROM sqlite_master "
                "WHERE type = 'table' AND name NOT LIKE 'sqlite_%' ORDER BY name"
            )
            return [row["name"] for row in cursor.fetchall()]

    def close(self) -> None:
        """Close the connection. Later operations raise DatabaseConnectionError."""
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
                logger.debug(f"Closed activity database at {self.db_path}")

    # ==========================================================================
    # Timer session operations - delegate to sessions module
    # ==========================================================================

    def start_timer_session(
        self, kind: TimerKind | str, duration_minutes: int, preset_id: str
    ) -> int:
        """Start a work or break session and return its id."""
        return sessions.start_timer_session(self, kind, duration_minutes, preset_id)

    def complete_timer_session(self, session_id: int) -> int:
        """Mark a session completed; returns the number of rows affected."""
        return sessions.complete_timer_session(self, session_id)

    def get_timer_session(self, session_id: int) -> TimerSession | None:
        """Get timer session by ID."""
        return sessions.get_timer_session(self, session_id)

    def record_completed_cycle(
        self, work_session_id: int, break_session_id: int | None = None
    ) -> int:
        """Record a work/break cycle and return its id."""
        return sessions.record_completed_cycle(self, work_session_id, break_session_id)

    def get_completed_cycle(self, cycle_id: int) -> CompletedCycle | None:
        """Get completed cycle by ID."""
        return sessions.get_completed_cycle(self, cycle_id)

    # ==========================================================================
    # Site visit operations - delegate to site_visits module
    # ==========================================================================

    def start_site_visit(self, site_url: str, blocked: bool = False) -> int:
        """Open a site visit and return its id."""
        return site_visits.start_site_visit(self, site_url, blocked=blocked)

    def end_site_visit(self, visit_id: int) -> int:
        """Close a site visit; returns the number of rows affected."""
        return site_visits.end_site_visit(self, visit_id)

    def get_site_visit(self, visit_id: int) -> SiteVisit | None:
        """Get site visit by ID."""
        return site_visits.get_site_visit(self, visit_id)

    # ==========================================================================
    # Site limit operations - delegate to limits module
    # ==========================================================================

    def set_site_limit(self, site_url: str, daily_limit_minutes: int) -> SiteLimit:
        """Create or overwrite the daily limit for a site."""
        return limits.set_site_limit(self, site_url, daily_limit_minutes)

    def get_site_limit(self, site_url: str) -> SiteLimit | None:
        """Get the limit configured for a site."""
        return limits.get_site_limit(self, site_url)

    def list_site_limits(self) -> list[SiteLimit]:
        """All configured site limits, ordered by site."""
        return limits.list_site_limits(self)

    # ==========================================================================
    # Statistics - delegate to stats module
    # ==========================================================================

    def get_daily_stats(self, day: date | datetime | str | None = None) -> DailyStats | None:
        """Get the stats row for a day (today by default)."""
        return stats.get_daily_stats(self, day)

    def get_weekly_stats(self) -> list[DailyStats]:
        """Get stats rows for the trailing seven days, oldest first."""
        return stats.get_weekly_stats(self)

    def get_site_visit_stats(
        self, site_url: str, day: date | datetime | str | None = None
    ) -> SiteVisitStats:
        """Get visit totals for a site on a day (today by default)."""
        return stats.get_site_visit_stats(self, site_url, day)

    # ==========================================================================
    # Export - delegate to backup module
    # ==========================================================================

    def export_data(self) -> bytes:
        """Serialize the whole database to bytes."""
        return backup.export_data(self)

    def export_to_file(self, output_path: Path) -> int:
        """Write a database image to a file; returns bytes written."""
        return backup.export_to_file(self, output_path)


# Module-level singleton
_store: ActivityStore | None = None
_store_lock = threading.Lock()


def get_activity_store(
    config: StoreConfig | None = None,
    clock: Clock | None = None,
    setup_logging: bool = False,
) -> ActivityStore:
    """Get or create the process-wide activity store.

    The first call opens the database and bootstraps the schema; concurrent
    first calls are serialized so only one store is ever constructed. Later
    calls return the same instance and ignore their arguments.

    Args:
        config: Store configuration (only used on first call).
        clock: Time source (only used on first call).
        setup_logging: Apply the config's log level, file and rotation to the
            focus_timer logger before opening the database (first call only).

    Returns:
        The shared ActivityStore.

    Raises:
        DatabaseConnectionError: If the database cannot be opened.
    """
    global _store
    if _store is None:
        with _store_lock:
            if _store is None:
                store_config = config or StoreConfig()
                if setup_logging:
                    configure_logging_from_config(store_config)
                _store = ActivityStore(store_config.get_effective_db_path(), clock=clock)
    return _store


def reset_activity_store() -> None:
    """Close and discard the process-wide store.

    The next get_activity_store() call builds a fresh one. Used on
    application shutdown and between tests.
    """
    global _store
    with _store_lock:
        if _store is not None:
            _store.close()
        _store = None
