"""SQLite database layer for daily application usage."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from datetime import date, timedelta
from pathlib import Path
from typing import Iterator, Optional, Protocol

from .models import (
    DailyUsageRecord,
    duration_to_nanos,
    format_day,
    nanos_to_duration,
)


class UsageStoreError(RuntimeError):
    """Raised when daily usage cannot be read or written."""


class UsageStore(Protocol):
    def upsert_daily_usage(self, app_name: str, day: date, usage: timedelta) -> None:
        ...

    def get_daily_usage(self, app_name: str, day: date) -> Optional[timedelta]:
        ...

    def close(self) -> None:
        ...


def open_database(path: Path) -> sqlite3.Connection:
    """Open (and initialize) the SQLite database."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(path, isolation_level=None)
    conn.row_factory = sqlite3.Row
    initialize_schema(conn)
    return conn


@contextmanager
def database_connection(path: Path) -> Iterator[sqlite3.Connection]:
    conn = open_database(path)
    try:
        yield conn
    finally:
        conn.close()


def initialize_schema(conn: sqlite3.Connection) -> None:
    conn.executescript(
        """
        CREATE TABLE IF NOT EXISTS daily_logs (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            window_name TEXT NOT NULL,
            date TEXT NOT NULL,
            usage INTEGER NOT NULL DEFAULT 0,
            UNIQUE (window_name, date)
        );
        """
    )


def upsert_daily_usage(
    conn: sqlite3.Connection, app_name: str, day: date, usage: timedelta
) -> None:
    """Replace the stored total for ``(app_name, day)``."""
    conn.execute(
        """
        INSERT OR REPLACE INTO daily_logs (window_name, date, usage)
        VALUES (?, ?, ?)
        """,
        (app_name, format_day(day), duration_to_nanos(usage)),
    )


def fetch_daily_usage(
    conn: sqlite3.Connection, app_name: str, day: date
) -> Optional[timedelta]:
    row = conn.execute(
        "SELECT usage FROM daily_logs WHERE window_name = ? AND date = ?",
        (app_name, format_day(day)),
    ).fetchone()
    if row is None:
        return None
    return nanos_to_duration(row["usage"])


def fetch_usage_for_day(conn: sqlite3.Connection, day: date) -> list[DailyUsageRecord]:
    """Return every stored record for ``day``, largest usage first."""
    rows = conn.execute(
        """
        SELECT window_name, usage
        FROM daily_logs
        WHERE date = ?
        ORDER BY usage DESC, window_name;
        """,
        (format_day(day),),
    )
    return [
        DailyUsageRecord(
            app_name=row["window_name"],
            day=day,
            usage=nanos_to_duration(row["usage"]),
        )
        for row in rows
    ]


class SqliteUsageStore:
    """Persistence for daily usage totals backed by a SQLite file."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = Path(db_path)
        try:
            self._conn = open_database(self.db_path)
        except (sqlite3.Error, OSError) as exc:
            raise UsageStoreError(f"Cannot open database {self.db_path}: {exc}") from exc

    def upsert_daily_usage(self, app_name: str, day: date, usage: timedelta) -> None:
        try:
            upsert_daily_usage(self._conn, app_name, day, usage)
        except sqlite3.Error as exc:
            raise UsageStoreError(f"Failed to store usage for {app_name!r}: {exc}") from exc

    def get_daily_usage(self, app_name: str, day: date) -> Optional[timedelta]:
        try:
            return fetch_daily_usage(self._conn, app_name, day)
        except sqlite3.Error as exc:
            raise UsageStoreError(f"Failed to read usage for {app_name!r}: {exc}") from exc

    def records_for_day(self, day: date) -> list[DailyUsageRecord]:
        return fetch_usage_for_day(self._conn, day)

    def close(self) -> None:
        self._conn.close()
