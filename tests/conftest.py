import pytest
from fastapi.testclient import TestClient

from mindfull_api.app.core.config import settings
from mindfull_api.app.core.db import get_connection, init_db
from mindfull_api.app.main import create_app


API_TOKEN = "test-api-token"


def make_users_array():
    return [
        {"id": 1, "username": "Dunder", "pw": "password1"},
        {"id": 2, "username": "Mifflin", "pw": "password2"},
        {"id": 3, "username": "Scranton", "pw": "password3"},
    ]


def make_entries_array():
    return [
        {
            "id": 1,
            "date_created": "1/1/2021",
            "month_created": "January",
            "mood": "Happy",
            "stress_level": 3,
            "gratitude1": "Coffee",
            "gratitude2": "Sunshine",
            "gratitude3": "Friends",
            "notes": "A good start to the year",
            "userid": 1,
        },
        {
            "id": 2,
            "date_created": "2/14/2021",
            "month_created": "February",
            "mood": "Calm",
            "stress_level": 5,
            "gratitude1": "Music",
            "gratitude2": "Books",
            "gratitude3": "Rain",
            "notes": "Quiet day",
            "userid": 1,
        },
        {
            "id": 3,
            "date_created": "3/3/2021",
            "month_created": "March",
            "mood": "Anxious",
            "stress_level": 8,
            "gratitude1": "Family",
            "gratitude2": "Tea",
            "gratitude3": "Sleep",
            "notes": "Deadline week",
            "userid": 2,
        },
    ]


def insert_rows(table, rows):
    conn = get_connection()
    try:
        for row in rows:
            columns = ", ".join(row)
            placeholders = ", ".join("?" for _ in row)
            conn.execute(
                f"INSERT INTO {table} ({columns}) VALUES ({placeholders})",
                tuple(row.values()),
            )
        conn.commit()
    finally:
        conn.close()


@pytest.fixture
def database(tmp_path, monkeypatch):
    """Point the app at a fresh SQLite file with the schema applied."""
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "mindfull_test.db"))
    monkeypatch.setattr(settings, "api_token", API_TOKEN)
    monkeypatch.setattr(settings, "debug", False)
    init_db()
    return settings.database_url


@pytest.fixture
def app(database):
    return create_app()


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        test_client.headers.update({"Authorization": f"Bearer {API_TOKEN}"})
        yield test_client


@pytest.fixture
def anon_client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def test_users(database):
    users = make_users_array()
    insert_rows("mindfull_users", users)
    return users


@pytest.fixture
def test_entries(test_users):
    entries = make_entries_array()
    insert_rows("mindfull_entries", entries)
    return entries


@pytest.fixture
def error_client(app):
    """Client that returns 500 responses instead of re-raising server errors."""
    with TestClient(app, raise_server_exceptions=False) as test_client:
        test_client.headers.update({"Authorization": f"Bearer {API_TOKEN}"})
        yield test_client
