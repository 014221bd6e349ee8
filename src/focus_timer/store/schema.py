"""Database schema for the activity store.

Every statement is IF NOT EXISTS, so the script can run on every startup
without touching existing data. There is no version table: the schema is
created, never migrated.
"""

SCHEMA_SQL = """
-- Timer sessions (one work or break countdown)
CREATE TABLE IF NOT EXISTS timer_sessions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    start_time DATETIME NOT NULL,
    end_time DATETIME,  -- Set once, by completion
    duration_minutes INTEGER NOT NULL,
    type TEXT NOT NULL CHECK(type IN ('work', 'break')),
    preset_id TEXT NOT NULL,  -- Opaque reference to an external preset
    completed BOOLEAN DEFAULT 0,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX IF NOT EXISTS idx_timer_sessions_start ON timer_sessions(start_time);

-- Completed cycles (work session plus optional following break)
CREATE TABLE IF NOT EXISTS completed_cycles (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    work_session_id INTEGER NOT NULL,
    break_session_id INTEGER,
    completed_at DATETIME DEFAULT CURRENT_TIMESTAMP,
    FOREIGN KEY (work_session_id) REFERENCES timer_sessions(id),
    FOREIGN KEY (break_session_id) REFERENCES timer_sessions(id)
);

-- Site visits (duration_seconds computed when the visit ends)
CREATE TABLE IF NOT EXISTS site_visits (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    site_url TEXT NOT NULL,
    start_time DATETIME NOT NULL,
    end_time DATETIME,
    duration_seconds INTEGER,
    blocked BOOLEAN DEFAULT 0,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX IF NOT EXISTS idx_site_visits_site_start ON site_visits(site_url, start_time);

-- Daily stats (one row per calendar day, populated outside this layer)
CREATE TABLE IF NOT EXISTS daily_stats (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    date DATE UNIQUE NOT NULL,
    total_work_time_minutes INTEGER DEFAULT 0,
    total_break_time_minutes INTEGER DEFAULT 0,
    completed_cycles INTEGER DEFAULT 0,
    blocked_attempts INTEGER DEFAULT 0,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
    updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
);

-- Site limits (one row per site, upserted)
CREATE TABLE IF NOT EXISTS site_limits (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    site_url TEXT UNIQUE NOT NULL,
    daily_limit_minutes INTEGER NOT NULL,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
    updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
);
"""
