"""
User model for the clinic database.
"""
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class UserRole(str, Enum):
    """User role tags."""
    ADMIN = "admin"
    PHYSICIAN = "physician"
    STAFF = "staff"


class AddressType(str, Enum):
    BILLING = "billing_address"
    DELIVERY = "delivery_address"


class Contact(BaseModel):
    """Contact details, carried through without validation."""
    email: Optional[str] = None
    home_phone: Optional[str] = None
    office_phone: Optional[str] = None
    mobile_phone: Optional[str] = None


class Address(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    address_type: Optional[AddressType] = None
    full_name: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    pincode: Optional[int] = None
    state: Optional[str] = None
    country: Optional[str] = None


class User(BaseModel):
    """
    User document model for MongoDB clinic_db.user collection.

    password and remember hold plaintext secrets only while a create or
    update call is in flight. They are excluded from every dump, so they can
    never reach the database; only password_hash and remember_hash do.
    """

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    id: Optional[str] = Field(None, alias="_id", description="MongoDB ObjectId as string")
    role: Optional[UserRole] = Field(None, description="Role tag")
    name: str = Field(default="", description="Display name")
    username: str = Field(default="", description="Unique identity key")

    password: str = Field(default="", exclude=True, description="Transient plaintext password")
    password_hash: str = Field(default="", description="Peppered bcrypt hash")
    password_change_required: bool = Field(
        default=False,
        description="Password must be changed at next login",
    )

    remember: str = Field(default="", exclude=True, description="Transient plaintext remember token")
    remember_hash: str = Field(default="", description="HMAC of the remember token")

    created_at: Optional[datetime] = Field(None, description="Account creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")
    last_login_at: Optional[datetime] = Field(None, description="Last successful login")

    contact: Optional[Contact] = None
    addresses: list[Address] = Field(default_factory=list)
    profile_id: Optional[str] = None

    def to_document(self) -> dict[str, Any]:
        """Serialize to a MongoDB document, without the _id field."""
        return self.model_dump(by_alias=True, exclude={"id"}, exclude_none=True)

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "User":
        """Build a User from a MongoDB document."""
        doc = dict(doc)
        doc["_id"] = str(doc["_id"])
        return cls.model_validate(doc)
