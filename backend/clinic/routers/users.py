"""
User administration router.

Every route requires a signed-in user. Role tags are carried and listed
here but not used for access decisions.
"""
import logging

from fastapi import APIRouter, Query, status

from clinic.core.exceptions import UserError
from clinic.dependencies.auth import CurrentUser, UserServiceDep
from clinic.dependencies.errors import to_http_exception
from clinic.models.user import UserRole
from clinic.schemas.user import UserCreate, UserResponse, UserUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
)
async def create_user(
    body: UserCreate,
    current_user: CurrentUser,
    user_service: UserServiceDep,
):
    """
    Create a new user account.

    - **username**: Unique username or email address
    - **password**: Password (minimum 8 characters)
    - **role**: admin, physician or staff
    """
    try:
        user = await user_service.create(body.to_user())
    except UserError as e:
        raise to_http_exception(e)

    logger.info("User %s created by %s", user.id, current_user.id)
    return UserResponse.from_user(user)


@router.get(
    "",
    response_model=list[UserResponse],
    summary="List users by role",
)
async def list_users(
    current_user: CurrentUser,
    user_service: UserServiceDep,
    role: UserRole = Query(UserRole.PHYSICIAN, description="Role to list"),
):
    """List users carrying a role; physicians by default, as on the admin dashboard."""
    users = await user_service.find_by_role(role)
    logger.debug("Fetched %d users with role %s", len(users), role.value)
    return [UserResponse.from_user(u) for u in users]


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get a user",
)
async def get_user(
    user_id: str,
    current_user: CurrentUser,
    user_service: UserServiceDep,
):
    try:
        user = await user_service.find_by_id(user_id)
    except UserError as e:
        raise to_http_exception(e)
    return UserResponse.from_user(user)


@router.patch(
    "/{user_id}",
    response_model=UserResponse,
    summary="Update a user",
)
async def update_user(
    user_id: str,
    body: UserUpdate,
    current_user: CurrentUser,
    user_service: UserServiceDep,
):
    """
    Update a user. Omitted fields keep their stored values; an omitted
    password leaves the stored hash untouched.
    """
    try:
        user = await user_service.find_by_id(user_id)
        user = await user_service.update(body.apply_to(user))
    except UserError as e:
        raise to_http_exception(e)
    return UserResponse.from_user(user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a user",
)
async def delete_user(
    user_id: str,
    current_user: CurrentUser,
    user_service: UserServiceDep,
):
    try:
        await user_service.delete(user_id)
    except UserError as e:
        raise to_http_exception(e)

    logger.info("User %s deleted by %s", user_id, current_user.id)
