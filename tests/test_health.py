# tests/test_health.py

"""
Tests for health check endpoints.
"""

from types import SimpleNamespace
from unittest.mock import patch

from fastapi.testclient import TestClient


def test_health_app(client: TestClient):
    response = client.get("/health/app")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_health_db_ok(client: TestClient, fake_db):
    with patch("core.supabase_client.get_supabase_client", return_value=fake_db):
        response = client.get("/health/db")

    data = response.json()
    assert data["status"] == "ok"
    assert set(data["details"]["tables"]) == {"profiles", "events", "attendance"}


def test_health_db_degraded(client: TestClient, fake_db):
    fake_db.fail("events", "select")

    with patch("core.supabase_client.get_supabase_client", return_value=fake_db):
        data = client.get("/health/db").json()

    assert data["status"] == "degraded"
    assert data["details"]["tables"]["events"]["status"] == "error"


def test_health_db_not_configured(client: TestClient):
    with patch("core.supabase_client.get_supabase_client", return_value=None):
        data = client.get("/health/db").json()

    assert data["status"] == "not_configured"


def test_startup_skips_routes_without_path(app):
    app.router.routes.append(SimpleNamespace(methods=None))

    with TestClient(app) as test_client:
        assert test_client.get("/health/app").status_code == 200
