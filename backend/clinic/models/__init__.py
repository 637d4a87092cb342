"""
Pydantic models for database documents and data structures.
"""
from clinic.models.user import Address, AddressType, Contact, User, UserRole

__all__ = [
    "Address",
    "AddressType",
    "Contact",
    "User",
    "UserRole",
]
