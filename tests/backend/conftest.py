"""
Backend-specific test fixtures and configuration.

These fixtures extend the global fixtures with helpers for testing the
FastAPI routes without a MongoDB server.
"""

import sys
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "backend"))


# =============================================================================
# FastAPI Test Client Fixtures
# =============================================================================

@pytest.fixture
def app(user_service):
    """
    FastAPI app whose UserService runs over the in-memory store.

    The lifespan is not entered, so no MongoDB connection is attempted.
    """
    from clinic.dependencies.auth import get_user_service
    from clinic.main import app

    async def _override():
        return user_service

    app.dependency_overrides[get_user_service] = _override
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> Generator:
    """TestClient for the app, without running startup."""
    yield TestClient(app)


@pytest.fixture
def seeded_admin(user_service, run_async):
    """An admin account with a known password."""
    from clinic.models.user import User, UserRole

    admin = User(
        role=UserRole.ADMIN,
        name="Clinic Admin",
        username="admin",
        password="adminPass1",
    )
    return run_async(user_service.create(admin))


@pytest.fixture
def run_async():
    """Run a coroutine to completion from a synchronous test."""
    import asyncio

    def _run(coro):
        return asyncio.run(coro)
    return _run


@pytest.fixture
def logged_in_client(client, seeded_admin) -> TestClient:
    """A client carrying the admin's remember token cookie."""
    response = client.post(
        "/auth/login",
        json={"username": "admin", "password": "adminPass1"},
    )
    assert response.status_code == 200
    return client


# =============================================================================
# Response Assertion Helpers
# =============================================================================

@pytest.fixture
def assert_error_response():
    """Helper to assert error response structure."""
    def _assert(response, status_code: int, detail_contains: str = None):
        assert response.status_code == status_code
        data = response.json()
        assert "detail" in data
        if detail_contains:
            assert detail_contains.lower() in data["detail"].lower()
    return _assert
