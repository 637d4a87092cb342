"""
Database definitions and collection constants.
"""
from clinic.database.databases import clinic_db

__all__ = ["clinic_db"]
