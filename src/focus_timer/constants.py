"""Constants for the focus timer store.

Table names, enumerations, configuration defaults and environment variable
names live here so the store modules and config never hardcode them.
"""

from typing import Final

# =============================================================================
# Tables
# =============================================================================

TABLE_TIMER_SESSIONS: Final[str] = "timer_sessions"
TABLE_COMPLETED_CYCLES: Final[str] = "completed_cycles"
TABLE_SITE_VISITS: Final[str] = "site_visits"
TABLE_DAILY_STATS: Final[str] = "daily_stats"
TABLE_SITE_LIMITS: Final[str] = "site_limits"
ALL_TABLES: Final[tuple[str, ...]] = (
    TABLE_TIMER_SESSIONS,
    TABLE_COMPLETED_CYCLES,
    TABLE_SITE_VISITS,
    TABLE_DAILY_STATS,
    TABLE_SITE_LIMITS,
)

# =============================================================================
# Timer session kinds
# =============================================================================

TIMER_KIND_WORK: Final[str] = "work"
TIMER_KIND_BREAK: Final[str] = "break"
VALID_TIMER_KINDS: Final[tuple[str, ...]] = (TIMER_KIND_WORK, TIMER_KIND_BREAK)

# =============================================================================
# Date / time formats
# =============================================================================

# Same shape as SQLite's CURRENT_TIMESTAMP so julianday()/date() accept it
TIMESTAMP_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
DATE_FORMAT: Final[str] = "%Y-%m-%d"
WEEKLY_WINDOW_DAYS: Final[int] = 7
SECONDS_PER_DAY: Final[int] = 86400

# =============================================================================
# Database
# =============================================================================

IN_MEMORY_DB: Final[str] = ":memory:"
DEFAULT_DB_PATH: Final[str] = IN_MEMORY_DB
DB_CONNECT_TIMEOUT_SECONDS: Final[float] = 30.0
SQLITE_HEADER: Final[bytes] = b"SQLite format 3\x00"

# =============================================================================
# Configuration
# =============================================================================

CONFIG_DIR: Final[str] = ".focus"
CONFIG_FILENAME: Final[str] = "config.yaml"
CONFIG_KEY_STORE: Final[str] = "activity_store"

ENV_DB_PATH: Final[str] = "FOCUS_TIMER_DB_PATH"
ENV_LOG_LEVEL: Final[str] = "FOCUS_TIMER_LOG_LEVEL"
ENV_DEBUG: Final[str] = "FOCUS_TIMER_DEBUG"
ENV_TRUTHY_VALUES: Final[tuple[str, ...]] = ("1", "true", "yes")

# =============================================================================
# Logging
# =============================================================================

PACKAGE_LOGGER_NAME: Final[str] = "focus_timer"
LOG_LEVEL_DEBUG: Final[str] = "DEBUG"
LOG_LEVEL_INFO: Final[str] = "INFO"
LOG_LEVEL_WARNING: Final[str] = "WARNING"
LOG_LEVEL_ERROR: Final[str] = "ERROR"
VALID_LOG_LEVELS: Final[tuple[str, ...]] = (
    LOG_LEVEL_DEBUG,
    LOG_LEVEL_INFO,
    LOG_LEVEL_WARNING,
    LOG_LEVEL_ERROR,
)
DEFAULT_LOG_LEVEL: Final[str] = LOG_LEVEL_INFO

DEFAULT_LOG_ROTATION_ENABLED: Final[bool] = True
DEFAULT_LOG_MAX_SIZE_MB: Final[int] = 5
MIN_LOG_MAX_SIZE_MB: Final[int] = 1
MAX_LOG_MAX_SIZE_MB: Final[int] = 100
DEFAULT_LOG_BACKUP_COUNT: Final[int] = 3
MAX_LOG_BACKUP_COUNT: Final[int] = 20
