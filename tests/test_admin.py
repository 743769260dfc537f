# tests/test_admin.py

"""
Tests for the admin overview and first-admin bootstrap.
"""

import datetime as dt

from fastapi.testclient import TestClient

from core.config import settings


def test_overview_stats(client: TestClient, login_as, fake_db, admin_user, member_user, pending_user):
    login_as(admin_user)
    day = dt.date.today().isoformat()
    fake_db.add_event("e1", "Practice", day)
    fake_db.add_event("e2", "Match", day, type="MATCH")
    fake_db.add_attendance("e1", admin_user.id, "GOING")
    fake_db.add_attendance("e1", member_user.id, "GOING")
    fake_db.add_attendance("e2", member_user.id, "ABSENT")

    response = client.get("/admin/overview")

    assert response.status_code == 200
    data = response.json()
    assert data["event_count"] == 2
    assert data["pending_count"] == 1
    assert data["stats"] == {"totalEvents": 2, "activeMembers": 2, "averageAttendance": 1.0}
    assert len(data["users"]) == 3


def test_overview_with_no_events(client: TestClient, login_as, admin_user):
    login_as(admin_user)

    stats = client.get("/admin/overview").json()["stats"]

    assert stats["averageAttendance"] == 0.0


def test_overview_is_admin_only(client: TestClient, login_as, member_user):
    login_as(member_user)

    assert client.get("/admin/overview").status_code == 403


def test_bootstrap_promotes_first_admin(client: TestClient, login_as, fake_db, pending_user):
    login_as(pending_user)

    response = client.post("/admin/bootstrap")

    assert response.status_code == 200
    data = response.json()
    assert data["screen"] == "MAIN"
    assert data["profile"]["role"] == "ADMIN"
    row = fake_db.find("profiles", id=pending_user.id)
    assert (row["role"], row["is_approved"]) == ("ADMIN", True)


def test_bootstrap_refused_when_admin_exists(client: TestClient, login_as, fake_db, admin_user, member_user):
    login_as(member_user)

    response = client.post("/admin/bootstrap")

    assert response.status_code == 403
    assert fake_db.find("profiles", id=member_user.id)["role"] == "MEMBER"


def test_bootstrap_disabled(client: TestClient, login_as, fake_db, member_user, monkeypatch):
    monkeypatch.setattr(settings, "ALLOW_ADMIN_BOOTSTRAP", False)
    login_as(member_user)

    response = client.post("/admin/bootstrap")

    assert response.status_code == 403
    assert response.json()["detail"] == "Admin bootstrap is disabled"


def test_bootstrap_requires_login(client: TestClient, login_as):
    login_as(None)

    assert client.post("/admin/bootstrap").status_code == 401
