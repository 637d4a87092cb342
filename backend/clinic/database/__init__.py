"""
Database module - MongoDB connections, indexes and database definitions.
"""
from clinic.database.connections import (
    get_mongo_client,
    close_connections,
    get_database,
    client_session,
)
from clinic.database.databases import clinic_db
from clinic.database.indexes import create_indexes

__all__ = [
    "get_mongo_client",
    "close_connections",
    "get_database",
    "client_session",
    "clinic_db",
    "create_indexes",
]
