"""
Authentication request/response schemas.
"""
from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Login request body."""
    username: str = Field(..., description="Username")
    password: str = Field(..., description="User password")


class LogoutResponse(BaseModel):
    message: str = Field(default="Logged out", description="Success message")
