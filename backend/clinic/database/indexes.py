"""
Index management.
Ensures the indexes the user store relies on exist on startup.
"""
from motor.motor_asyncio import AsyncIOMotorDatabase

from clinic.database.databases import clinic_db


async def create_indexes(db: AsyncIOMotorDatabase) -> None:
    """Create necessary indexes for the clinic database."""
    users = db[clinic_db.Collections.USERS]

    # Unique username also rejects duplicates from concurrent creates
    await users.create_index("username", unique=True)
    await users.create_index("remember_hash")
    await users.create_index("role")
