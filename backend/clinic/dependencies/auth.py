"""
Authentication dependencies for route protection.
"""
import logging
from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Request, status

from clinic.config import get_settings
from clinic.core.exceptions import NotFoundError, UserError
from clinic.database.connections import get_database
from clinic.models.user import User
from clinic.services.user_service import UserService, build_user_service

logger = logging.getLogger(__name__)


async def get_user_service() -> UserService:
    """Dependency to get UserService instance."""
    db = await get_database()
    return build_user_service(db, get_settings())


async def get_optional_user(
    request: Request,
    user_service: Annotated[UserService, Depends(get_user_service)],
) -> Optional[User]:
    """
    Dependency resolving the user from the remember token cookie.

    Returns None for anonymous requests: no cookie, or a token that no
    longer matches any user.
    """
    token = request.cookies.get(get_settings().remember_cookie_name)
    if not token:
        return None

    try:
        user = await user_service.find_by_remember(token)
    except NotFoundError:
        return None
    except UserError as e:
        logger.warning("Rejected remember token: %s", e.detail)
        return None

    return user


async def get_current_user(
    user: Annotated[Optional[User], Depends(get_optional_user)],
) -> User:
    """
    Dependency requiring a signed-in user.

    Raises:
        HTTPException 401: If the request carries no valid remember token
    """
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Login required",
        )
    return user


# Type alias for cleaner route signatures
CurrentUser = Annotated[User, Depends(get_current_user)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
