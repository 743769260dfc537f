# tests/test_auth.py

"""
Tests for authentication endpoints.
"""

from types import SimpleNamespace

from fastapi.testclient import TestClient


def auth_session(user_id, token="test-token"):
    return SimpleNamespace(user=SimpleNamespace(id=user_id), access_token=token)


def test_login_success(client: TestClient, fake_db, member_user):
    """Test successful login."""
    fake_db.auth.sign_in_with_password.return_value = SimpleNamespace(
        session=auth_session(member_user.id)
    )

    response = client.post(
        "/auth/login",
        json={"email": " U2@Example.com ", "password": "password123"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["access_token"] == "test-token"
    assert data["session"]["screen"] == "MAIN"
    assert data["session"]["profile"]["name"] == "Ken Sato"
    credentials = fake_db.auth.sign_in_with_password.call_args.args[0]
    assert credentials["email"] == "u2@example.com"


def test_login_pending_user_goes_to_pending_screen(client: TestClient, fake_db, pending_user):
    fake_db.auth.sign_in_with_password.return_value = SimpleNamespace(
        session=auth_session(pending_user.id)
    )

    response = client.post(
        "/auth/login",
        json={"email": "u9@example.com", "password": "password123"}
    )

    assert response.status_code == 200
    assert response.json()["session"]["screen"] == "PENDING_APPROVAL"


def test_login_invalid_credentials(client: TestClient, fake_db):
    """Test login with invalid credentials."""
    fake_db.auth.sign_in_with_password.side_effect = Exception("Invalid credentials")

    response = client.post(
        "/auth/login",
        json={"email": "test@example.com", "password": "wrongpassword"}
    )

    assert response.status_code == 401
    assert "Invalid email or password" in response.json()["detail"]


def test_login_without_profile(client: TestClient, fake_db):
    fake_db.auth.sign_in_with_password.return_value = SimpleNamespace(
        session=auth_session("ghost")
    )

    response = client.post(
        "/auth/login",
        json={"email": "ghost@example.com", "password": "password123"}
    )

    assert response.status_code == 401
    assert response.json()["detail"]["screen"] == "LOGIN"


def test_signup_creates_pending_profile(client: TestClient, fake_db):
    fake_db.auth.sign_up.return_value = SimpleNamespace(user=SimpleNamespace(id="new-user"))

    response = client.post(
        "/auth/signup",
        json={"name": " Yuki Mori ", "email": "Yuki@Example.com", "password": "password123"}
    )

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "pending"
    assert data["screen"] == "PENDING_APPROVAL"
    assert data["profile"]["isApproved"] is False

    row = fake_db.find("profiles", id="new-user")
    assert row["name"] == "Yuki Mori"
    assert row["email"] == "yuki@example.com"
    assert row["role"] == "MEMBER"
    assert row["is_approved"] is False


def test_signup_rejected_by_provider(client: TestClient, fake_db):
    fake_db.auth.sign_up.side_effect = Exception("User already registered")

    response = client.post(
        "/auth/signup",
        json={"name": "Ken", "email": "u2@example.com", "password": "password123"}
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "User already registered"
    assert fake_db.tables["profiles"] == []


def test_signup_requires_name(client: TestClient):
    response = client.post(
        "/auth/signup",
        json={"name": "  ", "email": "a@example.com", "password": "password123"}
    )

    assert response.status_code == 422


def test_logout_returns_login_screen(client: TestClient, fake_db):
    response = client.post("/auth/logout")

    assert response.status_code == 200
    assert response.json()["screen"] == "LOGIN"
    fake_db.auth.sign_out.assert_called_once()


def test_session_without_token(client: TestClient):
    response = client.get("/auth/session")

    assert response.status_code == 200
    assert response.json() == {"state": "UNAUTHENTICATED", "screen": "LOGIN", "profile": None}


def test_session_with_token(client: TestClient, fake_db, admin_user):
    fake_db.auth.get_user.return_value = SimpleNamespace(user=SimpleNamespace(id=admin_user.id))

    response = client.get("/auth/session", headers={"Authorization": "Bearer test-token"})

    assert response.status_code == 200
    data = response.json()
    assert data["state"] == "AUTHENTICATED"
    assert data["screen"] == "MAIN"
    assert data["profile"]["role"] == "ADMIN"


def test_session_with_rejected_token(client: TestClient, fake_db):
    fake_db.auth.get_user.side_effect = Exception("JWT expired")

    response = client.get("/auth/session", headers={"Authorization": "Bearer stale"})

    assert response.json()["screen"] == "LOGIN"


def test_logout_revokes_bearer_session(client: TestClient, fake_db):
    response = client.post("/auth/logout", headers={"Authorization": "Bearer test-token"})

    assert response.json()["state"] == "UNAUTHENTICATED"
    fake_db.auth.admin.sign_out.assert_called_once_with("test-token")
    fake_db.auth.sign_out.assert_not_called()
