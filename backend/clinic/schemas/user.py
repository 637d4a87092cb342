"""
User request/response schemas.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from clinic.models.user import Address, Contact, User, UserRole


class UserCreate(BaseModel):
    """User creation request."""
    name: str = Field(default="", description="Display name")
    username: str = Field(default="", description="Unique username or email")
    password: str = Field(default="", description="Password (min 8 characters)")
    role: Optional[UserRole] = Field(None, description="Role tag")
    contact: Optional[Contact] = None
    addresses: list[Address] = Field(default_factory=list)

    def to_user(self) -> User:
        return User(**self.model_dump())


class UserUpdate(BaseModel):
    """User update request. Omitted fields keep their stored value."""
    name: Optional[str] = Field(None, description="New display name")
    username: Optional[str] = Field(None, description="New username")
    password: Optional[str] = Field(None, description="New password")
    role: Optional[UserRole] = Field(None, description="New role tag")
    contact: Optional[Contact] = None
    addresses: Optional[list[Address]] = None

    def apply_to(self, user: User) -> User:
        """Return a copy of a stored user with the supplied fields replaced."""
        data = user.model_dump(by_alias=True)
        data.update(self.model_dump(exclude_none=True))
        if self.password:
            data["password_change_required"] = False
        return User.model_validate(data)


class UserResponse(BaseModel):
    """User information response (excludes password and token hashes)."""
    id: str = Field(..., description="User ID")
    name: str = Field(..., description="Display name")
    username: str = Field(..., description="Username")
    role: str = Field(..., description="Role tag")
    password_change_required: bool = Field(default=False)
    created_at: Optional[datetime] = Field(None, description="Account creation date")
    updated_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None
    contact: Optional[Contact] = None
    addresses: list[Address] = Field(default_factory=list)

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            username=user.username,
            role=user.role,
            password_change_required=user.password_change_required,
            created_at=user.created_at,
            updated_at=user.updated_at,
            last_login_at=user.last_login_at,
            contact=user.contact,
            addresses=user.addresses,
        )
