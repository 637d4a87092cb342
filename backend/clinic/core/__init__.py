"""
Core module - Password hashing, remember tokens, errors and logging.
"""
from clinic.core.exceptions import ErrorKind, NotFoundError, UserError
from clinic.core.log import setup_logging
from clinic.core.security import PasswordHasher
from clinic.core.tokens import (
    TokenHMAC,
    generate_remember_token,
    token_num_bytes,
)

__all__ = [
    "ErrorKind",
    "NotFoundError",
    "UserError",
    "setup_logging",
    "PasswordHasher",
    "TokenHMAC",
    "generate_remember_token",
    "token_num_bytes",
]
