"""
Error taxonomy for the user-identity core.

Every failure raised by the core is a UserError tagged with an ErrorKind.
Only kinds listed in PUBLIC_MESSAGES may be shown to an end user; the rest
are private and only ever logged.
"""
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Kinds of user-identity failures."""
    # Lookup outcome
    NOT_FOUND = "not_found"

    # Validation
    PASSWORD_REQUIRED = "password_required"
    PASSWORD_TOO_SHORT = "password_too_short"
    USERNAME_REQUIRED = "username_required"
    USERNAME_INVALID = "username_invalid"
    USERNAME_TAKEN = "username_taken"
    ROLE_REQUIRED = "role_required"

    # Credentials
    UNKNOWN_USERNAME = "unknown_username"
    INCORRECT_PASSWORD = "incorrect_password"

    # Private
    INVALID_ID = "invalid_id"
    REMEMBER_TOO_SHORT = "remember_too_short"
    REMEMBER_MALFORMED = "remember_malformed"
    REMEMBER_REQUIRED = "remember_required"
    HASHING_FAILED = "hashing_failed"


INVALID_CREDENTIALS_MESSAGE = "Invalid username or password."
GENERIC_MESSAGE = "Something went wrong. Please try again later."

PUBLIC_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.NOT_FOUND: "Resource not found.",
    ErrorKind.PASSWORD_REQUIRED: "Password is required.",
    ErrorKind.PASSWORD_TOO_SHORT: "Password must be at least 8 characters long.",
    ErrorKind.USERNAME_REQUIRED: "Username is required.",
    ErrorKind.USERNAME_INVALID: "Username is not a valid email address.",
    ErrorKind.USERNAME_TAKEN: "Username is already taken.",
    ErrorKind.ROLE_REQUIRED: "User role is required.",
    ErrorKind.UNKNOWN_USERNAME: INVALID_CREDENTIALS_MESSAGE,
    ErrorKind.INCORRECT_PASSWORD: INVALID_CREDENTIALS_MESSAGE,
}

CREDENTIAL_KINDS = frozenset({ErrorKind.UNKNOWN_USERNAME, ErrorKind.INCORRECT_PASSWORD})

_DETAILS: dict[ErrorKind, str] = {
    ErrorKind.NOT_FOUND: "resource not found",
    ErrorKind.PASSWORD_REQUIRED: "password is required",
    ErrorKind.PASSWORD_TOO_SHORT: "password must be at least 8 characters long",
    ErrorKind.USERNAME_REQUIRED: "username is required",
    ErrorKind.USERNAME_INVALID: "username is not a valid email address",
    ErrorKind.USERNAME_TAKEN: "username is already taken",
    ErrorKind.ROLE_REQUIRED: "user role is required",
    ErrorKind.UNKNOWN_USERNAME: "no user with that username",
    ErrorKind.INCORRECT_PASSWORD: "incorrect password provided",
    ErrorKind.INVALID_ID: "ID provided was invalid",
    ErrorKind.REMEMBER_TOO_SHORT: "remember token should be at least 32 bytes",
    ErrorKind.REMEMBER_MALFORMED: "remember token is not valid base64",
    ErrorKind.REMEMBER_REQUIRED: "remember token is required",
    ErrorKind.HASHING_FAILED: "password hashing failed",
}


class UserError(Exception):
    """Failure raised by the user-identity core."""

    def __init__(self, kind: ErrorKind, detail: Optional[str] = None):
        self.kind = kind
        self.detail = detail or _DETAILS[kind]
        super().__init__(f"users: {self.detail}")

    @property
    def is_public(self) -> bool:
        """Whether the message may be displayed to an end user."""
        return self.kind in PUBLIC_MESSAGES

    @property
    def is_credential_error(self) -> bool:
        return self.kind in CREDENTIAL_KINDS

    @property
    def public_message(self) -> str:
        """User-facing text; private kinds collapse to a generic message."""
        return PUBLIC_MESSAGES.get(self.kind, GENERIC_MESSAGE)


class NotFoundError(UserError):
    """A lookup, update or delete matched no user."""

    def __init__(self, detail: Optional[str] = None):
        super().__init__(ErrorKind.NOT_FOUND, detail)
