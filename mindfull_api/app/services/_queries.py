"""
Parameterized statement builders shared by the services.

Column names are never taken from request bodies directly: callers
pass only keys that appear in a resource's field table.  Values are
always bound as parameters.
"""

import sqlite3
from typing import Any, List, Mapping, Optional


def select_all(conn: sqlite3.Connection, table: str) -> List[sqlite3.Row]:
    return conn.execute(f"SELECT * FROM {table}").fetchall()


def select_by_id(conn: sqlite3.Connection, table: str, row_id: int) -> Optional[sqlite3.Row]:
    return conn.execute(f"SELECT * FROM {table} WHERE id = ?", (row_id,)).fetchone()


def insert_returning(conn: sqlite3.Connection, table: str, values: Mapping[str, Any]) -> sqlite3.Row:
    """Insert one row and read it back, generated id included."""
    columns = ", ".join(values)
    placeholders = ", ".join("?" for _ in values)
    cursor = conn.execute(
        f"INSERT INTO {table} ({columns}) VALUES ({placeholders})",
        tuple(values.values()),
    )
    return select_by_id(conn, table, cursor.lastrowid)


def delete_by_id(conn: sqlite3.Connection, table: str, row_id: int) -> int:
    cursor = conn.execute(f"DELETE FROM {table} WHERE id = ?", (row_id,))
    return cursor.rowcount


def update_by_id(conn: sqlite3.Connection, table: str, row_id: int, values: Mapping[str, Any]) -> int:
    """Set only the given columns on one row; returns the affected-row count."""
    if not values:
        return 0
    assignments = ", ".join(f"{column} = ?" for column in values)
    cursor = conn.execute(
        f"UPDATE {table} SET {assignments} WHERE id = ?",
        (*values.values(), row_id),
    )
    return cursor.rowcount
