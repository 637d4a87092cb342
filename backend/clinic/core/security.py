"""
Password hashing with a server-wide pepper.
"""
from passlib.context import CryptContext

from clinic.core.exceptions import ErrorKind, UserError

DEFAULT_BCRYPT_ROUNDS = 12


class PasswordHasher:
    """
    bcrypt password hasher.

    Every password is concatenated with the deployment pepper before it is
    hashed, so a leaked hash cannot be attacked without the pepper as well.
    The salt and work factor travel inside the returned hash string.

    bcrypt only reads 72 bytes of input, so the peppered password is run
    through HMAC-SHA256 first (passlib bcrypt_sha256). Every byte of the
    password and the pepper reaches the hash.
    """

    def __init__(self, pepper: str, rounds: int = DEFAULT_BCRYPT_ROUNDS):
        self.pepper = pepper
        self.rounds = rounds
        self.pwd_context = CryptContext(
            schemes=["bcrypt_sha256"],
            deprecated="auto",
            bcrypt_sha256__rounds=rounds,
        )

    def hash(self, plain_password: str) -> str:
        """
        Hash a plain password using bcrypt.

        Args:
            plain_password: The plain text password to hash

        Returns:
            Hashed password string, e.g. "$bcrypt-sha256$v=2,t=2b,r=12$..."

        Raises:
            UserError: HASHING_FAILED if the bcrypt backend fails
        """
        try:
            return self.pwd_context.hash(plain_password + self.pepper)
        except (ValueError, TypeError) as e:
            raise UserError(ErrorKind.HASHING_FAILED, str(e)) from e

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """
        Verify a plain password against a stored hash.

        The comparison is constant time.

        Args:
            plain_password: The plain text password to verify
            hashed_password: The stored hash to compare against

        Returns:
            True if password matches, False otherwise

        Raises:
            UserError: HASHING_FAILED if the stored hash is malformed
        """
        try:
            return self.pwd_context.verify(plain_password + self.pepper, hashed_password)
        except (ValueError, TypeError) as e:
            raise UserError(ErrorKind.HASHING_FAILED, str(e)) from e

    def dummy_verify(self) -> None:
        """Spend the time of one verification without a stored hash."""
        self.pwd_context.dummy_verify()
