"""
Request and response schemas for API endpoints.
"""
from clinic.schemas.auth import LoginRequest, LogoutResponse
from clinic.schemas.user import UserCreate, UserResponse, UserUpdate

__all__ = [
    # Auth
    "LoginRequest",
    "LogoutResponse",
    # User
    "UserCreate",
    "UserResponse",
    "UserUpdate",
]
