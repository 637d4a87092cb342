"""
Authentication router for login, logout and the current user.
"""
from fastapi import APIRouter, Response

from clinic.config import get_settings
from clinic.core.exceptions import UserError
from clinic.dependencies.auth import CurrentUser, UserServiceDep
from clinic.dependencies.errors import to_http_exception
from clinic.schemas.auth import LoginRequest, LogoutResponse
from clinic.schemas.user import UserResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/login",
    response_model=UserResponse,
    summary="Login and receive a remember token cookie",
)
async def login(
    response: Response,
    body: LoginRequest,
    user_service: UserServiceDep,
):
    """
    Authenticate with username and password.

    On success the HttpOnly `remember_token` cookie identifies the session.
    Unknown usernames and wrong passwords get the same 401 response.
    """
    try:
        user = await user_service.authenticate(body.username, body.password)
        user = await user_service.sign_in(user)
    except UserError as e:
        raise to_http_exception(e)

    settings = get_settings()
    response.set_cookie(
        key=settings.remember_cookie_name,
        value=user.remember,
        httponly=True,
        secure=settings.is_prod,
        samesite="lax",
    )
    return UserResponse.from_user(user)


@router.post(
    "/logout",
    response_model=LogoutResponse,
    summary="Logout and invalidate the remember token",
)
async def logout(
    response: Response,
    current_user: CurrentUser,
    user_service: UserServiceDep,
):
    """
    Rotate the user's remember token and clear the cookie.

    The account itself is untouched; only the old session stops working.
    """
    try:
        await user_service.sign_out(current_user)
    except UserError as e:
        raise to_http_exception(e)

    response.delete_cookie(get_settings().remember_cookie_name)
    return LogoutResponse()


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get current user info",
)
async def get_current_user_info(current_user: CurrentUser):
    """Get information about the currently authenticated user."""
    return UserResponse.from_user(current_user)
