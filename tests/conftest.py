# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import pytest
from fastapi.testclient import TestClient
from typing import Generator

from main import create_app
from dependencies.auth import get_gateway, get_session_context
from models.session import SessionContext
from models.user import User
from services.db_service import SupabaseGateway
from fake_supabase import FakeSupabase


@pytest.fixture(autouse=True)
def reset_cache():
    """Reset the team cache before each test."""
    from core.cache import cache_clear
    cache_clear()
    yield
    cache_clear()


@pytest.fixture
def fake_db() -> FakeSupabase:
    """In-memory Supabase tables."""
    return FakeSupabase()


@pytest.fixture
def gateway(fake_db) -> SupabaseGateway:
    return SupabaseGateway(fake_db)


@pytest.fixture
def admin_user(fake_db) -> User:
    return User.from_row(fake_db.add_profile("u1", "Taro Tanaka", role="ADMIN"))


@pytest.fixture
def member_user(fake_db) -> User:
    return User.from_row(fake_db.add_profile("u2", "Ken Sato"))


@pytest.fixture
def pending_user(fake_db) -> User:
    return User.from_row(fake_db.add_profile("u9", "New Comer", is_approved=False))


@pytest.fixture(scope="function")
def app(gateway):
    """Create a test FastAPI application wired to the fake store."""
    app = create_app()
    app.dependency_overrides[get_gateway] = lambda: gateway
    yield app
    app.dependency_overrides = {}


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def login_as(app):
    """
    Pretend auth already succeeded for the given profile.
    login_as(None) simulates a missing/invalid token.
    """
    def _login(user):
        ctx = (
            SessionContext.authenticated(user, "test-token")
            if user is not None
            else SessionContext.unauthenticated()
        )
        app.dependency_overrides[get_session_context] = lambda: ctx
        return ctx
    return _login
