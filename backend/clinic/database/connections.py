"""
Database connection management for MongoDB.
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorClientSession,
    AsyncIOMotorDatabase,
)

from clinic.config import get_settings

# Global connection instance
_mongo_client: Optional[AsyncIOMotorClient] = None


async def get_mongo_client() -> AsyncIOMotorClient:
    """Get or create MongoDB client."""
    global _mongo_client
    if _mongo_client is None:
        settings = get_settings()
        _mongo_client = AsyncIOMotorClient(settings.mongo_uri, tz_aware=True)
    return _mongo_client


async def close_connections():
    """Close all database connections."""
    global _mongo_client

    if _mongo_client is not None:
        _mongo_client.close()
        _mongo_client = None


async def get_database(db_name: Optional[str] = None) -> AsyncIOMotorDatabase:
    """Get a specific MongoDB database by name, defaulting to the clinic database."""
    client = await get_mongo_client()
    return client[db_name or get_settings().mongo_db_name]


@asynccontextmanager
async def client_session(client: AsyncIOMotorClient) -> AsyncIterator[AsyncIOMotorClientSession]:
    """
    Scope a MongoDB client session to a single operation.

    The session is ended on every exit path, including errors raised by the
    operation using it.
    """
    session = await client.start_session()
    try:
        yield session
    finally:
        await session.end_session()
