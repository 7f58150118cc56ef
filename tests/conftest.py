import sqlite3
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from headless_cms_api.app.core.config import Settings
from headless_cms_api.app.main import create_app


ADMIN_PASSWORD = "secret"


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 10, 19, 8, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def settings(tmp_path):
    return Settings(
        admin_password=ADMIN_PASSWORD,
        token_expiry_hours=24,
        database_url=str(tmp_path / "blog.db"),
        api_prefix="/api",
    )


@pytest.fixture
def client(settings, clock):
    with TestClient(create_app(settings, clock)) as test_client:
        yield test_client


@pytest.fixture
def token(client):
    response = client.post("/admin/login", json={"password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return response.json()["token"]


@pytest.fixture
def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def create_post(client, auth_headers):
    def _create(title="Hi", content="World"):
        response = client.post("/posts", json={"title": title, "content": content}, headers=auth_headers)
        assert response.status_code == 201
        return response.json()["data"]

    return _create


@pytest.fixture
def db_rows(settings):
    """Return all rows of a table straight from the SQLite file."""

    def _rows(table):
        conn = sqlite3.connect(settings.database_url)
        conn.row_factory = sqlite3.Row
        try:
            return [dict(row) for row in conn.execute(f"SELECT * FROM {table}")]
        finally:
            conn.close()

    return _rows
