"""
Clinic database configuration.
Stores staff accounts used for authentication.
"""

DB_NAME = "clinic_db"


class Collections:
    """Collection names in clinic_db."""
    USERS = "user"
