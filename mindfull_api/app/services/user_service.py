"""
Business logic for users.

All queries run against the ``mindfull_users`` table through the
connection supplied by the caller.  Passwords are stored as given.
"""

import logging
import sqlite3
from typing import Any, Dict, List, Optional

from . import _queries


TABLE = "mindfull_users"


class UserService:
    """Data access for ``mindfull_users``."""

    @classmethod
    async def get_all_users(cls, conn: sqlite3.Connection) -> List[sqlite3.Row]:
        """Return every user in storage order."""
        return _queries.select_all(conn, TABLE)

    @classmethod
    async def insert_user(cls, conn: sqlite3.Connection, new_user: Dict[str, Any]) -> sqlite3.Row:
        """Insert a user and return the stored row.

        ``sqlite3.IntegrityError`` propagates on constraint violations.
        """
        logger = logging.getLogger(__name__)
        row = _queries.insert_returning(conn, TABLE, new_user)
        conn.commit()
        logger.info("Created user %s", row["id"])
        return row

    @classmethod
    async def get_by_id(cls, conn: sqlite3.Connection, user_id: int) -> Optional[sqlite3.Row]:
        return _queries.select_by_id(conn, TABLE, user_id)

    @classmethod
    async def delete_user(cls, conn: sqlite3.Connection, user_id: int) -> int:
        """Delete a user; returns the number of rows removed."""
        logger = logging.getLogger(__name__)
        affected = _queries.delete_by_id(conn, TABLE, user_id)
        conn.commit()
        if affected:
            logger.info("Deleted user %s", user_id)
        return affected

    @classmethod
    async def update_user(cls, conn: sqlite3.Connection, user_id: int, new_user_fields: Dict[str, Any]) -> int:
        """Update the given columns of a user; returns the affected-row count."""
        logger = logging.getLogger(__name__)
        affected = _queries.update_by_id(conn, TABLE, user_id, new_user_fields)
        conn.commit()
        logger.info("Updated user %s (%s)", user_id, ", ".join(new_user_fields))
        return affected
