"""Activity store package.

Modules:
- schema.py: SQL for the five tables
- clock.py: Injectable time sources
- models.py: Row dataclasses (TimerSession, CompletedCycle, SiteVisit, DailyStats, SiteLimit)
- core.py: ActivityStore with connection management, plus the process-wide accessor
- sessions.py: Timer session and cycle operations
- site_visits.py: Site visit operations
- limits.py: Site limit upsert and lookups
- stats.py: Daily, weekly and per-site reads
- backup.py: Database export

Public APIs are re-exported here.
"""

from focus_timer.store.clock import Clock, FixedClock, SystemClock
from focus_timer.store.core import (
    ActivityStore,
    get_activity_store,
    reset_activity_store,
)
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
from focus_timer.store.stats import format_date

__all__ = [
    # Main class and accessor
    "ActivityStore",
    "get_activity_store",
    "reset_activity_store",
    # Clocks
    "Clock",
    "FixedClock",
    "SystemClock",
    # Data models
    "CompletedCycle",
    "DailyStats",
    "SiteLimit",
    "SiteVisit",
    "SiteVisitStats",
    "TimerKind",
    "TimerSession",
    # Schema and helpers
    "SCHEMA_SQL",
    "format_date",
]
