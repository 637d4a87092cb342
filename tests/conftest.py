"""
Global test fixtures for the clinic backend.

This module provides shared fixtures for all tests including:
- Mock MongoDB (mongomock-motor)
- An in-memory UserDB for service and pipeline tests
- Test settings with a cheap bcrypt work factor
- Test user factories
"""

import copy
import sys
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio
from bson import ObjectId

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from clinic.config import Settings  # noqa: E402
from clinic.core.exceptions import ErrorKind, NotFoundError, UserError  # noqa: E402
from clinic.core.security import PasswordHasher  # noqa: E402
from clinic.core.tokens import TokenHMAC  # noqa: E402
from clinic.models.user import User, UserRole  # noqa: E402
from clinic.services.user_service import UserService  # noqa: E402
from clinic.services.user_validator import UserValidator  # noqa: E402

TEST_PEPPER = "test-pepper"
TEST_HMAC_KEY = "test-hmac-key"


# =============================================================================
# In-memory UserDB
# =============================================================================

class InMemoryUserStore:
    """
    UserDB keeping documents in a dict.

    Documents are stored exactly as User.to_document() produces them, and
    usernames are unique as with the MongoDB index.
    """

    def __init__(self):
        self.documents: dict[str, dict[str, Any]] = {}

    def _username_taken(self, username: str, own_id: str | None = None) -> bool:
        return any(
            doc["username"] == username and user_id != own_id
            for user_id, doc in self.documents.items()
        )

    def _load(self, user_id: str) -> User:
        return User.from_document({**copy.deepcopy(self.documents[user_id]), "_id": user_id})

    async def create(self, user: User) -> User:
        if self._username_taken(user.username):
            raise UserError(ErrorKind.USERNAME_TAKEN)
        user.id = str(ObjectId())
        self.documents[user.id] = copy.deepcopy(user.to_document())
        return user

    async def update(self, user: User) -> User:
        if user.id not in self.documents:
            raise NotFoundError()
        if self._username_taken(user.username, own_id=user.id):
            raise UserError(ErrorKind.USERNAME_TAKEN)
        self.documents[user.id] = copy.deepcopy(user.to_document())
        return user

    async def delete(self, user_id: str) -> None:
        if self.documents.pop(user_id, None) is None:
            raise NotFoundError()

    async def find_by_id(self, user_id: str) -> User:
        if user_id not in self.documents:
            raise NotFoundError()
        return self._load(user_id)

    async def find_by_username(self, username: str) -> User:
        return self._find_first("username", username)

    async def find_by_remember_hash(self, remember_hash: str) -> User:
        return self._find_first("remember_hash", remember_hash)

    async def find_by_role(self, role: UserRole) -> list[User]:
        role_value = role.value if isinstance(role, UserRole) else role
        matches = [
            self._load(user_id)
            for user_id, doc in self.documents.items()
            if doc.get("role") == role_value
        ]
        return sorted(matches, key=lambda u: u.username)

    def _find_first(self, field: str, value: str) -> User:
        for user_id, doc in self.documents.items():
            if doc.get(field) == value:
                return self._load(user_id)
        raise NotFoundError()


# =============================================================================
# Settings and crypto fixtures
# =============================================================================

@pytest.fixture
def test_settings() -> Settings:
    """Settings with test secrets and the minimum bcrypt work factor."""
    return Settings(
        pepper=TEST_PEPPER,
        hmac_key=TEST_HMAC_KEY,
        bcrypt_rounds=4,
        mongo_db_name="clinic_test_db",
    )


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(TEST_PEPPER, rounds=4)


@pytest.fixture
def token_hmac() -> TokenHMAC:
    return TokenHMAC(TEST_HMAC_KEY)


# =============================================================================
# Service fixtures
# =============================================================================

@pytest.fixture
def user_store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def validator(user_store, hasher, token_hmac) -> UserValidator:
    return UserValidator(user_store, hasher, token_hmac)


@pytest.fixture
def user_service(validator, hasher) -> UserService:
    return UserService(
        validator,
        hasher,
        admin_username="admin",
        admin_initial_password="adminPass",
    )


# =============================================================================
# MongoDB Fixtures (mongomock-motor)
# =============================================================================

@pytest_asyncio.fixture
async def mock_async_mongo_client():
    """
    Create an async mock MongoDB client using mongomock-motor.
    """
    try:
        from mongomock_motor import AsyncMongoMockClient
    except ImportError:
        pytest.skip("mongomock-motor not installed")
    client = AsyncMongoMockClient(tz_aware=True)
    yield client
    client.close()


@pytest_asyncio.fixture
async def mock_clinic_db(mock_async_mongo_client):
    """Provide mock clinic_db database with the app's indexes."""
    from clinic.database.databases import clinic_db
    from clinic.database.indexes import create_indexes

    db = mock_async_mongo_client[clinic_db.DB_NAME]
    await create_indexes(db)
    yield db


# =============================================================================
# User Fixtures
# =============================================================================

@pytest.fixture
def make_user():
    """Factory for unsaved users with valid defaults."""
    def _make(**overrides) -> User:
        fields = {
            "name": "Dr. Test",
            "username": "doc1",
            "password": "longenough1",
            "role": UserRole.PHYSICIAN,
        }
        fields.update(overrides)
        return User(**fields)
    return _make
