"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), the per-request FastAPI dependency handing that
connection to the services (``get_db``) and the start-up migration
routine (``init_db``).

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import os
import sqlite3
from pathlib import Path
from typing import AsyncIterator

from .config import settings


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS mindfull_users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            username TEXT NOT NULL,
            pw TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS mindfull_entries (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            date_created TEXT NOT NULL,
            month_created TEXT NOT NULL,
            mood TEXT NOT NULL,
            stress_level INTEGER NOT NULL,
            gratitude1 TEXT NOT NULL,
            gratitude2 TEXT NOT NULL,
            gratitude3 TEXT NOT NULL,
            notes TEXT NOT NULL,
            userid INTEGER NOT NULL,
            FOREIGN KEY(userid) REFERENCES mindfull_users(id) ON DELETE CASCADE
        );

        CREATE INDEX IF NOT EXISTS idx_mindfull_entries_userid ON mindfull_entries(userid);
        """,
    ),
]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be read by
    name.  Foreign key enforcement is off by default in SQLite and is
    switched on per connection.
    """
    conn = sqlite3.connect(get_database_path())
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


async def get_db() -> AsyncIterator[sqlite3.Connection]:
    """FastAPI dependency yielding one connection per request.

    Declared ``async`` so the connection is opened on the event loop
    thread, the same thread the async endpoints and services use it on.

    Services commit their own writes before returning, so the change is
    durable before the response goes out; the exit code here may run
    only after the response has been sent.  It just closes the
    connection, discarding anything left uncommitted.
    """
    conn = get_connection()
    try:
        yield conn
    finally:
        conn.close()


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version and applies any newer entries of
    ``MIGRATIONS``.  Append new migrations with an incremented version.
    """
    conn = get_connection()
    try:
        cursor = conn.cursor()
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version
        conn.commit()
    finally:
        conn.close()
