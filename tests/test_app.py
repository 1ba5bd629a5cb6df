import logging

from fastapi.testclient import TestClient

from mindfull_api.app.core.config import settings
from mindfull_api.app.core.db import get_connection, init_db
from mindfull_api.app.core.logging_config import setup_logging


def test_root_responds_with_hello_world(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.text == "Hello, world!"


class TestAuthorization:
    def test_missing_token_responds_with_401(self, anon_client):
        response = anon_client.get("/api/users")
        assert response.status_code == 401
        assert response.json() == {"error": {"message": "Unauthorized request"}}
        assert response.headers["www-authenticate"] == "Bearer"

    def test_wrong_token_responds_with_401(self, anon_client):
        response = anon_client.get("/api/entries", headers={"Authorization": "Bearer not-the-token"})
        assert response.status_code == 401

    def test_non_bearer_scheme_responds_with_401(self, anon_client):
        response = anon_client.get("/", headers={"Authorization": "Basic dXNlcjpwYXNz"})
        assert response.status_code == 401

    def test_unset_token_rejects_everything(self, client, monkeypatch):
        monkeypatch.setattr(settings, "api_token", "")
        response = client.get("/api/users")
        assert response.status_code == 401

    def test_gate_runs_before_existence_check(self, anon_client):
        response = anon_client.delete("/api/users/123456")
        assert response.status_code == 401


class TestErrors:
    def test_unknown_route_uses_error_envelope(self, client):
        response = client.get("/api/nothing-here")
        assert response.status_code == 404
        assert response.json() == {"error": {"message": "Not Found"}}

    def test_debug_mode_exposes_storage_error(self, app, test_users, monkeypatch):
        monkeypatch.setattr(settings, "debug", True)
        with TestClient(app, raise_server_exceptions=False) as client:
            client.headers.update({"Authorization": f"Bearer {settings.api_token}"})
            response = client.post(
                "/api/entries",
                json={
                    "date_created": "1/1/2021",
                    "month_created": "January",
                    "mood": "Happy",
                    "stress_level": 5,
                    "gratitude1": "A",
                    "gratitude2": "B",
                    "gratitude3": "C",
                    "notes": "test",
                    "userid": 42,
                },
            )
        assert response.status_code == 500
        assert "FOREIGN KEY constraint failed" in response.json()["error"]["message"]


class TestMigrations:
    def test_creates_both_tables(self, database):
        conn = get_connection()
        try:
            rows = conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'").fetchall()
        finally:
            conn.close()
        names = {row["name"] for row in rows}
        assert {"mindfull_users", "mindfull_entries", "migrations"} <= names

    def test_is_idempotent(self, database):
        init_db()
        conn = get_connection()
        try:
            versions = [row["version"] for row in conn.execute("SELECT version FROM migrations")]
        finally:
            conn.close()
        assert versions == [1]


def test_setup_logging_leaves_configured_root_alone():
    root = logging.getLogger()
    sentinel = logging.NullHandler()
    root.addHandler(sentinel)
    try:
        before = list(root.handlers)
        assert setup_logging("DEBUG") is False
        assert root.handlers == before
    finally:
        root.removeHandler(sentinel)


def spy_on_response_start(app, query, seen):
    """Wrap ``app`` so ``query`` runs on a fresh connection as the response starts."""

    async def wrapped(scope, receive, send):
        async def send_with_check(message):
            if message["type"] == "http.response.start":
                conn = get_connection()
                try:
                    seen.append(conn.execute(query).fetchone()[0])
                finally:
                    conn.close()
            await send(message)

        await app(scope, receive, send_with_check)

    return wrapped


class TestWritesCommittedBeforeResponse:
    def make_client(self, app, query, seen):
        test_client = TestClient(spy_on_response_start(app, query, seen))
        test_client.headers.update({"Authorization": f"Bearer {settings.api_token}"})
        return test_client

    def test_created_user_visible_when_201_starts(self, app, test_users):
        seen = []
        with self.make_client(app, "SELECT COUNT(*) FROM mindfull_users", seen) as client:
            response = client.post("/api/users", json={"username": "Newbie", "pw": "654321"})
        assert response.status_code == 201
        assert seen == [len(test_users) + 1]

    def test_patched_entry_visible_when_204_starts(self, app, test_entries):
        seen = []
        with self.make_client(app, "SELECT notes FROM mindfull_entries WHERE id = 2", seen) as client:
            response = client.patch("/api/entries/2", json={"notes": "testing-update"})
        assert response.status_code == 204
        assert seen == ["testing-update"]

    def test_deleted_entry_gone_when_204_starts(self, app, test_entries):
        seen = []
        with self.make_client(app, "SELECT COUNT(*) FROM mindfull_entries WHERE id = 2", seen) as client:
            response = client.delete("/api/entries/2")
        assert response.status_code == 204
        assert seen == [0]
