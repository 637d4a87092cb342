"""
Remember tokens: generation, size checks and HMAC indexing.

A remember token is handed to the client once and never stored. Only its
HMAC is persisted, which is enough to find the owner when the client
presents the token again.
"""
import base64
import binascii
import hashlib
import hmac
import secrets

from clinic.core.exceptions import ErrorKind, UserError

REMEMBER_TOKEN_BYTES = 32


def generate_remember_token(num_bytes: int = REMEMBER_TOKEN_BYTES) -> str:
    """Return num_bytes of secure randomness as URL-safe base64 text."""
    return base64.urlsafe_b64encode(secrets.token_bytes(num_bytes)).decode("ascii")


def token_num_bytes(token: str) -> int:
    """
    Count the raw bytes encoded in a base64 token.

    Raises:
        UserError: REMEMBER_MALFORMED if the token is not URL-safe base64
    """
    try:
        return len(base64.b64decode(token.encode("ascii"), altchars=b"-_", validate=True))
    except (binascii.Error, ValueError) as e:
        raise UserError(ErrorKind.REMEMBER_MALFORMED) from e


class TokenHMAC:
    """Keyed SHA-256 hashing of remember tokens."""

    def __init__(self, key: str):
        self._key = key.encode("utf-8")

    def hash(self, token: str) -> str:
        digest = hmac.new(self._key, token.encode("utf-8"), hashlib.sha256).digest()
        return base64.urlsafe_b64encode(digest).decode("ascii")
