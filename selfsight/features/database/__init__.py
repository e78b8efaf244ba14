"""
Database Feature Module - Organized Data Access Layer

Usage:
    from selfsight.features.database import get_database_client

    db = get_database_client()
    rows = db.entries.list_for_user(user_id)
"""

from selfsight.features.database.client import DatabaseClient, get_database_client

__all__ = [
    "DatabaseClient",
    "get_database_client",
]
