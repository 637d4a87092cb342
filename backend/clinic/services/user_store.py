"""
MongoDB persistence for users.
"""
import logging
from contextlib import AbstractAsyncContextManager
from typing import Any, Callable, Optional, Protocol

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from clinic.core.exceptions import ErrorKind, NotFoundError, UserError
from clinic.database.connections import client_session
from clinic.database.databases import clinic_db
from clinic.models.user import User, UserRole

SessionFactory = Callable[[], AbstractAsyncContextManager[Any]]


class UserDB(Protocol):
    """Operations shared by the store, the validator and the service."""

    async def create(self, user: User) -> User: ...

    async def update(self, user: User) -> User: ...

    async def delete(self, user_id: str) -> None: ...

    async def find_by_id(self, user_id: str) -> User: ...

    async def find_by_username(self, username: str) -> User: ...

    async def find_by_remember_hash(self, remember_hash: str) -> User: ...

    async def find_by_role(self, role: UserRole) -> list[User]: ...


class UserMongo:
    """
    UserDB backed by the clinic_db.user collection.

    Each call runs inside its own client session, opened and ended by the
    session factory. No validation happens here; see UserValidator.
    """

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        logger: Optional[logging.Logger] = None,
        session_factory: Optional[SessionFactory] = None,
    ):
        """Initialize with clinic database."""
        self.db = db
        self.users_collection = db[clinic_db.Collections.USERS]
        self.logger = logger or logging.getLogger(__name__)
        self._session_factory = session_factory or (lambda: client_session(db.client))

    # ==================== Data modifying methods ====================

    async def create(self, user: User) -> User:
        """
        Insert a new user document and assign its id.

        Raises:
            UserError: USERNAME_TAKEN if the unique username index rejects it
        """
        self.logger.info("Creating user with username: %s", user.username)
        async with self._session_factory() as session:
            try:
                result = await self.users_collection.insert_one(
                    user.to_document(), session=session
                )
            except DuplicateKeyError as e:
                raise UserError(ErrorKind.USERNAME_TAKEN) from e
        user.id = str(result.inserted_id)
        return user

    async def update(self, user: User) -> User:
        """
        Replace the stored document with the given user's fields.

        Raises:
            NotFoundError: If no user has this id
            UserError: USERNAME_TAKEN if the unique username index rejects it
        """
        self.logger.debug("Updating user: %s", user.id)
        async with self._session_factory() as session:
            try:
                result = await self.users_collection.replace_one(
                    {"_id": ObjectId(user.id)},
                    user.to_document(),
                    session=session,
                )
            except DuplicateKeyError as e:
                raise UserError(ErrorKind.USERNAME_TAKEN) from e
        if result.matched_count == 0:
            raise NotFoundError()
        return user

    async def delete(self, user_id: str) -> None:
        """
        Remove a user document permanently.

        Raises:
            NotFoundError: If no user has this id
        """
        self.logger.info("Deleting user: %s", user_id)
        async with self._session_factory() as session:
            result = await self.users_collection.delete_one(
                {"_id": ObjectId(user_id)}, session=session
            )
        if result.deleted_count == 0:
            raise NotFoundError()

    # ==================== Single user fetch methods ====================

    async def find_by_id(self, user_id: str) -> User:
        return await self._find_one({"_id": ObjectId(user_id)})

    async def find_by_username(self, username: str) -> User:
        self.logger.debug("Fetching user by username: %s", username)
        return await self._find_one({"username": username})

    async def find_by_remember_hash(self, remember_hash: str) -> User:
        return await self._find_one({"remember_hash": remember_hash})

    async def _find_one(self, query: dict[str, Any]) -> User:
        async with self._session_factory() as session:
            user_doc = await self.users_collection.find_one(query, session=session)
        if not user_doc:
            raise NotFoundError()
        return User.from_document(user_doc)

    # ==================== List fetch methods ====================

    async def find_by_role(self, role: UserRole) -> list[User]:
        """List all users carrying a role, ordered by username."""
        role_value = role.value if isinstance(role, UserRole) else role
        async with self._session_factory() as session:
            cursor = self.users_collection.find(
                {"role": role_value},
                sort=[("username", 1)],
                session=session,
            )
            user_docs = await cursor.to_list(length=None)
        return [User.from_document(doc) for doc in user_docs]
