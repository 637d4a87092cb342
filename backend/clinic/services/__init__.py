"""
Service layer - user store, validation pipeline and user service.
"""
from clinic.services.user_store import UserDB, UserMongo
from clinic.services.user_validator import CREATE_STEPS, UPDATE_STEPS, UserValidator
from clinic.services.user_service import UserService, build_user_service

__all__ = [
    "UserDB",
    "UserMongo",
    "CREATE_STEPS",
    "UPDATE_STEPS",
    "UserValidator",
    "UserService",
    "build_user_service",
]
