"""
Business logic for journal entries.

All queries run against the ``mindfull_entries`` table through the
connection supplied by the caller.  The service does not check that
``userid`` names an existing user; the foreign key in the schema does.
"""

import logging
import sqlite3
from typing import Any, Dict, List, Optional

from . import _queries


TABLE = "mindfull_entries"


class EntryService:
    """Data access for ``mindfull_entries``."""

    @classmethod
    async def get_all_entries(cls, conn: sqlite3.Connection) -> List[sqlite3.Row]:
        """Return every entry in storage order."""
        return _queries.select_all(conn, TABLE)

    @classmethod
    async def insert_entry(cls, conn: sqlite3.Connection, new_entry: Dict[str, Any]) -> sqlite3.Row:
        """Insert an entry and return the stored row.

        Raises ``sqlite3.IntegrityError`` when a column is null or
        ``userid`` references no user.
        """
        logger = logging.getLogger(__name__)
        row = _queries.insert_returning(conn, TABLE, new_entry)
        conn.commit()
        logger.info("Created entry %s for user %s", row["id"], row["userid"])
        return row

    @classmethod
    async def get_by_id(cls, conn: sqlite3.Connection, entry_id: int) -> Optional[sqlite3.Row]:
        return _queries.select_by_id(conn, TABLE, entry_id)

    @classmethod
    async def delete_entry(cls, conn: sqlite3.Connection, entry_id: int) -> int:
        logger = logging.getLogger(__name__)
        affected = _queries.delete_by_id(conn, TABLE, entry_id)
        conn.commit()
        if affected:
            logger.info("Deleted entry %s", entry_id)
        return affected

    @classmethod
    async def update_entry(cls, conn: sqlite3.Connection, entry_id: int, new_entry_fields: Dict[str, Any]) -> int:
        """Update only the provided columns of an entry.

        Returns the number of rows affected (0 when ``entry_id`` does
        not exist).
        """
        logger = logging.getLogger(__name__)
        affected = _queries.update_by_id(conn, TABLE, entry_id, new_entry_fields)
        conn.commit()
        logger.info("Updated entry %s (%s)", entry_id, ", ".join(new_entry_fields))
        return affected
