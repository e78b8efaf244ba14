"""Database Repositories - Organized data access."""

from selfsight.features.database.repositories.entries import EntriesRepository

__all__ = [
    "EntriesRepository",
]
