"""
API routers.
"""
from clinic.routers import auth, health, users

__all__ = ["auth", "health", "users"]
