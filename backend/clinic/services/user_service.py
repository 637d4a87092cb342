"""
User service for account management and authentication.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from clinic.config import Settings
from clinic.core.exceptions import ErrorKind, NotFoundError, UserError
from clinic.core.security import PasswordHasher
from clinic.core.tokens import TokenHMAC, generate_remember_token
from clinic.models.user import User, UserRole
from clinic.services.user_store import UserMongo
from clinic.services.user_validator import UserValidator

ADMIN_DISPLAY_NAME = "Clinic Admin"


class UserService:
    """Service for user operations."""

    def __init__(
        self,
        validator: UserValidator,
        hasher: PasswordHasher,
        admin_username: str = "admin",
        admin_initial_password: str = "adminPass",
        logger: Optional[logging.Logger] = None,
    ):
        self.validator = validator
        self.hasher = hasher
        self.admin_username = admin_username
        self.admin_initial_password = admin_initial_password
        self.logger = logger or logging.getLogger(__name__)

    # ==================== UserDB delegation ====================

    async def create(self, user: User) -> User:
        return await self.validator.create(user)

    async def update(self, user: User) -> User:
        return await self.validator.update(user)

    async def delete(self, user_id: str) -> None:
        await self.validator.delete(user_id)

    async def find_by_id(self, user_id: str) -> User:
        return await self.validator.find_by_id(user_id)

    async def find_by_username(self, username: str) -> User:
        return await self.validator.find_by_username(username)

    async def find_by_remember(self, token: str) -> User:
        return await self.validator.find_by_remember(token)

    async def find_by_remember_hash(self, remember_hash: str) -> User:
        return await self.validator.find_by_remember_hash(remember_hash)

    async def find_by_role(self, role: UserRole) -> list[User]:
        return await self.validator.find_by_role(role)

    # ==================== Authentication ====================

    async def authenticate(self, username: str, password: str) -> User:
        """
        Authenticate a user with username and password.

        Args:
            username: Identity key as typed by the user
            password: Plaintext password

        Returns:
            The matching User

        Raises:
            UserError: UNKNOWN_USERNAME or INCORRECT_PASSWORD. Both carry the
                same public message; only the logs tell them apart.
            UserError: HASHING_FAILED if the stored hash cannot be checked
        """
        try:
            found_user = await self.find_by_username(username)
        except UserError as e:
            if e.kind not in (ErrorKind.NOT_FOUND, ErrorKind.USERNAME_REQUIRED):
                raise
            # Equalize timing with the wrong-password path
            self.hasher.dummy_verify()
            self.logger.info("Login failed: unknown username %r", username)
            raise UserError(ErrorKind.UNKNOWN_USERNAME) from e

        if not self.hasher.verify(password, found_user.password_hash):
            self.logger.info("Login failed: incorrect password for user %s", found_user.id)
            raise UserError(ErrorKind.INCORRECT_PASSWORD)

        return found_user

    async def sign_in(self, user: User) -> User:
        """
        Issue a fresh remember token for an authenticated user.

        Returns:
            The user, carrying the plaintext token in user.remember
        """
        user.remember = generate_remember_token()
        user.last_login_at = datetime.now(timezone.utc)
        user = await self.update(user)
        self.logger.info("User %s signed in", user.id)
        return user

    async def sign_out(self, user: User) -> User:
        """Rotate the remember token so the presented one stops resolving."""
        user.remember = generate_remember_token()
        user = await self.update(user)
        self.logger.info("User %s signed out", user.id)
        return user

    # ==================== Bootstrap ====================

    async def ensure_admin(self) -> None:
        """
        Create the default admin account unless it already exists.

        Safe to call on every start. The admin is created with the configured
        initial password and flagged for a password change.
        """
        self.logger.debug("Ensuring admin with username: %s", self.admin_username)
        try:
            await self.find_by_username(self.admin_username)
            self.logger.debug("Admin exists with username: %s", self.admin_username)
            return
        except NotFoundError:
            pass

        admin = User(
            role=UserRole.ADMIN,
            name=ADMIN_DISPLAY_NAME,
            username=self.admin_username,
            password=self.admin_initial_password,
            password_change_required=True,
        )
        self.logger.info("Creating default admin user with username: %s", self.admin_username)
        try:
            await self.create(admin)
        except UserError as e:
            # Another process created it between our lookup and insert
            if e.kind != ErrorKind.USERNAME_TAKEN:
                raise
            self.logger.info("Admin %s was created concurrently", self.admin_username)
            return
        self.logger.info("Created admin user %s", admin.id)


def build_user_service(
    db: AsyncIOMotorDatabase,
    settings: Settings,
    logger: Optional[logging.Logger] = None,
) -> UserService:
    """
    Wire the store, validator and service for a database.

    Secrets and the logger are passed explicitly into each layer.
    """
    store = UserMongo(db, logger=logger)
    hasher = PasswordHasher(settings.pepper, rounds=settings.bcrypt_rounds)
    hmac = TokenHMAC(settings.hmac_key)
    validator = UserValidator(store, hasher, hmac, logger=logger)
    return UserService(
        validator,
        hasher,
        admin_username=settings.admin_username,
        admin_initial_password=settings.admin_initial_password,
        logger=logger,
    )
