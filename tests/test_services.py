import asyncio
import sqlite3

import pytest

from mindfull_api.app.core.db import get_connection
from mindfull_api.app.services.entry_service import EntryService
from mindfull_api.app.services.user_service import UserService


@pytest.fixture
def conn(database):
    connection = get_connection()
    yield connection
    connection.close()


def run(coro):
    return asyncio.run(coro)


def test_insert_user_returns_stored_row(conn):
    row = run(UserService.insert_user(conn, {"username": "Newbie", "pw": "654321"}))
    assert dict(row) == {"id": 1, "username": "Newbie", "pw": "654321"}
    assert dict(run(UserService.get_by_id(conn, 1))) == dict(row)


def test_get_by_id_returns_none_when_absent(conn):
    assert run(UserService.get_by_id(conn, 99)) is None
    assert run(EntryService.get_by_id(conn, 99)) is None


def test_delete_returns_affected_row_count(conn, test_users):
    assert run(UserService.delete_user(conn, 3)) == 1
    assert run(UserService.delete_user(conn, 3)) == 0


def test_update_changes_only_given_columns(conn, test_entries):
    affected = run(EntryService.update_entry(conn, 2, {"notes": "changed"}))
    assert affected == 1
    row = run(EntryService.get_by_id(conn, 2))
    assert row["notes"] == "changed"
    assert row["mood"] == test_entries[1]["mood"]


def test_update_missing_row_affects_nothing(conn, test_users):
    assert run(UserService.update_user(conn, 99, {"username": "ghost"})) == 0


def test_list_returns_storage_order(conn, test_entries):
    rows = run(EntryService.get_all_entries(conn))
    assert [row["id"] for row in rows] == [1, 2, 3]


def test_insert_entry_propagates_constraint_errors(conn, test_users):
    with pytest.raises(sqlite3.IntegrityError):
        run(EntryService.insert_entry(conn, {"date_created": "1/1/2021", "userid": 1}))
