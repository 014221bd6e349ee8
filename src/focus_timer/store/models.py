"""Data models for the activity store.

Dataclasses mirroring the five tables, plus the SiteVisitStats aggregate.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any

from focus_timer.constants import TIMER_KIND_BREAK, TIMER_KIND_WORK
from focus_timer.store.clock import SystemClock, format_timestamp, parse_timestamp


class TimerKind(str, Enum):
    """Kind of timer session."""

    WORK = TIMER_KIND_WORK
    BREAK = TIMER_KIND_BREAK


def _required_timestamp(value: str | None) -> datetime:
    parsed = parse_timestamp(value)
    if parsed is None:
        raise ValueError("Expected a stored timestamp, got NULL")
    return parsed


@dataclass
class TimerSession:
    """A single work or break countdown."""

    id: int | None = None
    start_time: datetime = field(default_factory=SystemClock().now)
    end_time: datetime | None = None
    duration_minutes: int = 0
    kind: str = TIMER_KIND_WORK
    preset_id: str = ""
    completed: bool = False
    created_at: datetime | None = None

    def to_row(self) -> dict[str, Any]:
        """Convert to database row (the column is named 'type')."""
        return {
            "start_time": format_timestamp(self.start_time),
            "end_time": format_timestamp(self.end_time) if self.end_time else None,
            "duration_minutes": self.duration_minutes,
            "type": self.kind,
            "preset_id": self.preset_id,
            "completed": self.completed,
            "created_at": format_timestamp(self.created_at) if self.created_at else None,
        }

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "TimerSession":
        """Create from database row."""
        return cls(
            id=row["id"],
            start_time=_required_timestamp(row["start_time"]),
            end_time=parse_timestamp(row["end_time"]),
            duration_minutes=row["duration_minutes"],
            kind=row["type"],
            preset_id=row["preset_id"],
            completed=bool(row["completed"]),
            created_at=parse_timestamp(row["created_at"]),
        )


@dataclass
class CompletedCycle:
    """A work session paired with the break that followed it, if any."""

    id: int | None = None
    work_session_id: int = 0
    break_session_id: int | None = None
    completed_at: datetime | None = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "CompletedCycle":
        return cls(
            id=row["id"],
            work_session_id=row["work_session_id"],
            break_session_id=row["break_session_id"],
            completed_at=parse_timestamp(row["completed_at"]),
        )


@dataclass
class SiteVisit:
    """Time spent on one website.

    duration_seconds stays None until the visit is ended.
    """

    id: int | None = None
    site_url: str = ""
    start_time: datetime = field(default_factory=SystemClock().now)
    end_time: datetime | None = None
    duration_seconds: int | None = None
    blocked: bool = False
    created_at: datetime | None = None

    @property
    def is_open(self) -> bool:
        return self.end_time is None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "SiteVisit":
        return cls(
            id=row["id"],
            site_url=row["site_url"],
            start_time=_required_timestamp(row["start_time"]),
            end_time=parse_timestamp(row["end_time"]),
            duration_seconds=row["duration_seconds"],
            blocked=bool(row["blocked"]),
            created_at=parse_timestamp(row["created_at"]),
        )


@dataclass
class DailyStats:
    """Precomputed totals for one calendar day."""

    id: int | None = None
    date: date | None = None
    total_work_minutes: int = 0
    total_break_minutes: int = 0
    completed_cycles: int = 0
    blocked_attempts: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "DailyStats":
        return cls(
            id=row["id"],
            date=date.fromisoformat(row["date"]),
            total_work_minutes=row["total_work_time_minutes"] or 0,
            total_break_minutes=row["total_break_time_minutes"] or 0,
            completed_cycles=row["completed_cycles"] or 0,
            blocked_attempts=row["blocked_attempts"] or 0,
            created_at=parse_timestamp(row["created_at"]),
            updated_at=parse_timestamp(row["updated_at"]),
        )


@dataclass
class SiteLimit:
    """Daily time allowance for one site."""

    id: int | None = None
    site_url: str = ""
    daily_limit_minutes: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "SiteLimit":
        return cls(
            id=row["id"],
            site_url=row["site_url"],
            daily_limit_minutes=row["daily_limit_minutes"],
            created_at=parse_timestamp(row["created_at"]),
            updated_at=parse_timestamp(row["updated_at"]),
        )


@dataclass
class SiteVisitStats:
    """Per-site totals for one calendar day.

    total_duration_seconds is None when no visit that day has ended yet.
    """

    site_url: str
    date: date
    visit_count: int = 0
    total_duration_seconds: int | None = None
    blocked_attempts: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "site_url": self.site_url,
            "date": self.date.isoformat(),
            "visit_count": self.visit_count,
            "total_duration_seconds": self.total_duration_seconds,
            "blocked_attempts": self.blocked_attempts,
        }
