"""
FastAPI dependencies for authentication and error translation.
"""
from clinic.dependencies.auth import (
    CurrentUser,
    UserServiceDep,
    get_current_user,
    get_optional_user,
    get_user_service,
)
from clinic.dependencies.errors import to_http_exception

__all__ = [
    "CurrentUser",
    "UserServiceDep",
    "get_current_user",
    "get_optional_user",
    "get_user_service",
    "to_http_exception",
]
