"""
Translation of core errors into HTTP responses.
"""
import logging

from fastapi import HTTPException, status

from clinic.core.exceptions import ErrorKind, UserError

logger = logging.getLogger(__name__)

HTTP_STATUS: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID_ID: status.HTTP_404_NOT_FOUND,
    ErrorKind.PASSWORD_REQUIRED: status.HTTP_400_BAD_REQUEST,
    ErrorKind.PASSWORD_TOO_SHORT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.USERNAME_REQUIRED: status.HTTP_400_BAD_REQUEST,
    ErrorKind.USERNAME_INVALID: status.HTTP_400_BAD_REQUEST,
    ErrorKind.ROLE_REQUIRED: status.HTTP_400_BAD_REQUEST,
    ErrorKind.USERNAME_TAKEN: status.HTTP_409_CONFLICT,
    ErrorKind.UNKNOWN_USERNAME: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INCORRECT_PASSWORD: status.HTTP_401_UNAUTHORIZED,
}


def to_http_exception(error: UserError) -> HTTPException:
    """
    Build the HTTPException for a core error.

    Only the public message of the error kind is sent to the client.
    Private kinds are logged with their detail and answered generically.
    Credential failures are logged with their real reason, since both share
    one public message.
    """
    if not error.is_public:
        logger.error("Internal user error (%s): %s", error.kind.value, error.detail)
    elif error.is_credential_error:
        logger.info("Rejected login (%s)", error.kind.value)

    status_code = HTTP_STATUS.get(error.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    detail = error.public_message
    if error.kind == ErrorKind.INVALID_ID:
        detail = UserError(ErrorKind.NOT_FOUND).public_message
    return HTTPException(status_code=status_code, detail=detail)
