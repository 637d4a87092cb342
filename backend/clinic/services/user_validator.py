"""
Validation pipeline in front of the user store.

Create and update run an ordered list of steps over the candidate user.
The lists are plain data (CREATE_STEPS, UPDATE_STEPS) naming methods of
UserValidator. A step either mutates the user in place or raises UserError;
the first error stops the run and nothing is written.
"""
import logging
import re
from datetime import datetime, timezone
from typing import Awaitable, Callable, Iterable, Optional

from bson import ObjectId

from clinic.core.exceptions import ErrorKind, NotFoundError, UserError
from clinic.core.security import PasswordHasher
from clinic.core.tokens import (
    REMEMBER_TOKEN_BYTES,
    TokenHMAC,
    generate_remember_token,
    token_num_bytes,
)
from clinic.models.user import User, UserRole
from clinic.services.user_store import UserDB

MIN_PASSWORD_LENGTH = 8
EMAIL_REGEX = re.compile(r"^[a-z0-9._%+\-]+@[a-z0-9.\-]+\.[a-z]{2,16}$")

ValidationStep = Callable[[User], Awaitable[None]]

CREATE_STEPS: tuple[str, ...] = (
    "password_required",
    "password_min_length",
    "hash_password",
    "password_hash_required",
    "set_remember_if_unset",
    "remember_min_bytes",
    "hmac_remember",
    "remember_hash_required",
    "username_required",
    "normalize_username",
    "username_format",
    "username_available",
    "role_required",
    "ensure_created_at",
)

UPDATE_STEPS: tuple[str, ...] = (
    "password_min_length",
    "hash_password",
    "password_hash_required",
    "remember_min_bytes",
    "hmac_remember",
    "remember_hash_required",
    "normalize_username",
    "username_format",
    "username_available",
    "role_required",
    "ensure_updated_at",
)


async def run_steps(user: User, steps: Iterable[ValidationStep]) -> None:
    """Run steps in order, stopping at the first raised UserError."""
    for step in steps:
        await step(user)


class UserValidator:
    """UserDB that validates and normalizes users before delegating to a store."""

    def __init__(
        self,
        store: UserDB,
        hasher: PasswordHasher,
        hmac: TokenHMAC,
        logger: Optional[logging.Logger] = None,
    ):
        self.store = store
        self.hasher = hasher
        self.hmac = hmac
        self.logger = logger or logging.getLogger(__name__)

    def steps(self, names: Iterable[str]) -> list[ValidationStep]:
        """Resolve step names to bound validation methods."""
        return [getattr(self, name) for name in names]

    # ==================== Data modifying methods ====================

    async def create(self, user: User) -> User:
        await run_steps(user, self.steps(CREATE_STEPS))
        return await self.store.create(user)

    async def update(self, user: User) -> User:
        """Validate and persist every field of an existing user."""
        self.valid_id(user.id)
        await run_steps(user, self.steps(UPDATE_STEPS))
        return await self.store.update(user)

    async def delete(self, user_id: str) -> None:
        self.valid_id(user_id)
        await self.store.delete(user_id)

    # ==================== Fetch methods ====================

    async def find_by_id(self, user_id: str) -> User:
        self.valid_id(user_id)
        return await self.store.find_by_id(user_id)

    async def find_by_username(self, username: str) -> User:
        user = User(username=username)
        await run_steps(user, [self.username_required, self.normalize_username])
        return await self.store.find_by_username(user.username)

    async def find_by_remember(self, token: str) -> User:
        """Find the owner of a plaintext remember token."""
        if not token:
            raise NotFoundError()
        user = User(remember=token)
        await self.hmac_remember(user)
        return await self.store.find_by_remember_hash(user.remember_hash)

    async def find_by_remember_hash(self, remember_hash: str) -> User:
        return await self.store.find_by_remember_hash(remember_hash)

    async def find_by_role(self, role: UserRole) -> list[User]:
        return await self.store.find_by_role(role)

    @staticmethod
    def valid_id(user_id: Optional[str]) -> None:
        if not user_id or not ObjectId.is_valid(user_id):
            raise UserError(ErrorKind.INVALID_ID)

    # ==================== Password steps ====================

    async def password_required(self, user: User) -> None:
        if not user.password:
            raise UserError(ErrorKind.PASSWORD_REQUIRED)

    async def password_min_length(self, user: User) -> None:
        if not user.password:
            return
        if len(user.password) < MIN_PASSWORD_LENGTH:
            raise UserError(ErrorKind.PASSWORD_TOO_SHORT)

    async def hash_password(self, user: User) -> None:
        if not user.password:
            return
        user.password_hash = self.hasher.hash(user.password)
        user.password = ""

    async def password_hash_required(self, user: User) -> None:
        if not user.password_hash:
            raise UserError(ErrorKind.PASSWORD_REQUIRED)

    # ==================== Remember token steps ====================

    async def set_remember_if_unset(self, user: User) -> None:
        if user.remember:
            return
        user.remember = generate_remember_token()

    async def remember_min_bytes(self, user: User) -> None:
        if not user.remember:
            return
        if token_num_bytes(user.remember) < REMEMBER_TOKEN_BYTES:
            raise UserError(ErrorKind.REMEMBER_TOO_SHORT)

    async def hmac_remember(self, user: User) -> None:
        if not user.remember:
            return
        user.remember_hash = self.hmac.hash(user.remember)

    async def remember_hash_required(self, user: User) -> None:
        if not user.remember_hash:
            raise UserError(ErrorKind.REMEMBER_REQUIRED)

    # ==================== Username steps ====================

    async def username_required(self, user: User) -> None:
        if not user.username:
            raise UserError(ErrorKind.USERNAME_REQUIRED)

    async def normalize_username(self, user: User) -> None:
        user.username = user.username.strip().lower()

    async def username_format(self, user: User) -> None:
        # Only email-shaped usernames are checked
        if "@" not in user.username:
            return
        if not EMAIL_REGEX.match(user.username):
            raise UserError(ErrorKind.USERNAME_INVALID)

    async def username_available(self, user: User) -> None:
        """
        Reject a username held by a different user.

        This is a read followed later by a separate write. Concurrent creates
        can both pass here; the unique index on username is what finally
        rejects the second insert.
        """
        try:
            existing = await self.find_by_username(user.username)
        except NotFoundError:
            return
        if existing.id != user.id:
            raise UserError(ErrorKind.USERNAME_TAKEN)

    # ==================== Role and timestamp steps ====================

    async def role_required(self, user: User) -> None:
        if not user.role:
            raise UserError(ErrorKind.ROLE_REQUIRED)

    async def ensure_created_at(self, user: User) -> None:
        if user.created_at is None:
            user.created_at = datetime.now(timezone.utc)

    async def ensure_updated_at(self, user: User) -> None:
        user.updated_at = datetime.now(timezone.utc)
