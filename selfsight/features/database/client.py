"""
Database Client - Unified Access to Data Repositories

Thin wrapper over the Supabase client that exposes domain repositories.
"""

import logging
from functools import lru_cache

from selfsight.core.database import get_supabase
from selfsight.features.database.repositories.entries import EntriesRepository

logger = logging.getLogger("SelfSight.Database")


class DatabaseClient:
    """
    Unified database client providing access to all repositories.

    Usage:
        db = get_database_client()
        rows = db.entries.list_for_user(user_id)
    """

    def __init__(self, client=None):
        self._client = client if client is not None else get_supabase()
        self.entries = EntriesRepository(self._client)

        logger.info("Database client initialized with all repositories")


@lru_cache(maxsize=1)
def get_database_client() -> DatabaseClient:
    """Get the singleton database client."""
    return DatabaseClient()
