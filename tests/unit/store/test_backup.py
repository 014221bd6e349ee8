"""Tests for database export."""

from __future__ import annotations

import sqlite3
from pathlib import Path

from focus_timer.constants import SQLITE_HEADER
from focus_timer.store.core import ActivityStore


def _open_image(image: bytes) -> sqlite3.Connection:
    conn = sqlite3.connect(":memory:")
    conn.deserialize(image)
    return conn


class TestExportData:
    """Verify the exported image is a complete database."""

    def test_image_has_sqlite_header(self, store: ActivityStore) -> None:
        image = store.export_data()
        assert image.startswith(SQLITE_HEADER)

    def test_image_contains_rows(self, store: ActivityStore) -> None:
        session_id = store.start_timer_session("work", 25, "p1")
        store.set_site_limit("example.com", 30)

        conn = _open_image(store.export_data())
        try:
            row = conn.execute(
                "SELECT type, duration_minutes FROM timer_sessions WHERE id = ?", (session_id,)
            ).fetchone()
            limit = conn.execute("SELECT daily_limit_minutes FROM site_limits").fetchone()
        finally:
            conn.close()

        assert row == ("work", 25)
        assert limit == (30,)

    def test_in_memory_store_exports(self) -> None:
        memory_store = ActivityStore()
        try:
            memory_store.start_site_visit("example.com")
            conn = _open_image(memory_store.export_data())
            try:
                count = conn.execute("SELECT COUNT(*) FROM site_visits").fetchone()[0]
            finally:
                conn.close()
        finally:
            memory_store.close()

        assert count == 1


class TestExportToFile:
    """Verify file export."""

    def test_writes_openable_database(self, store: ActivityStore, tmp_path: Path) -> None:
        store.start_timer_session("break", 5, "p1")
        output = tmp_path / "exports" / "activity-backup.db"

        written = store.export_to_file(output)

        assert output.exists()
        assert written == output.stat().st_size
        conn = sqlite3.connect(output)
        try:
            count = conn.execute("SELECT COUNT(*) FROM timer_sessions").fetchone()[0]
        finally:
            conn.close()
        assert count == 1

    def test_leaves_no_temp_files(self, store: ActivityStore, tmp_path: Path) -> None:
        export_dir = tmp_path / "exports"
        store.export_to_file(export_dir / "activity-backup.db")
        assert [p.name for p in export_dir.iterdir()] == ["activity-backup.db"]

    def test_overwrites_previous_export(self, store: ActivityStore, tmp_path: Path) -> None:
        output = tmp_path / "activity-backup.db"
        output.write_bytes(b"stale")

        store.export_to_file(output)

        assert output.read_bytes().startswith(SQLITE_HEADER)
