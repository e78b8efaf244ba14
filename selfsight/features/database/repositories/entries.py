"""
Journal Entries Repository - row-level access to ``journal_entries``.

Every query is scoped to the owning user id. Failures are logged and raised
as StoreError so the entry store can decide whether to degrade.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from selfsight.core.config import settings
from selfsight.shared.errors import StoreError

logger = logging.getLogger("SelfSight.Database.Entries")


class EntriesRepository:
    """Repository for journal entry operations."""

    def __init__(self, client, table: Optional[str] = None):
        """Initialize with Supabase client."""
        self.client = client
        self.table_name = table or settings.ENTRIES_TABLE

    def _table(self):
        return self.client.table(self.table_name)

    def list_for_user(self, user_id: str) -> List[Dict[str, Any]]:
        """All entries of a user, newest first."""
        try:
            result = self._table().select("*").eq(
                "user_id", user_id
            ).order("created_at", desc=True).execute()
            return result.data or []
        except Exception as e:
            logger.error(f"Error listing entries for user {user_id}: {e}")
            raise StoreError("Could not load journal entries", operation="select") from e

    def get_by_id(self, user_id: str, entry_id: str) -> Optional[Dict[str, Any]]:
        try:
            result = self._table().select("*").eq("id", entry_id).eq("user_id", user_id).execute()
            return result.data[0] if result.data else None
        except Exception as e:
            logger.error(f"Error getting entry {entry_id}: {e}")
            raise StoreError("Could not load journal entry", operation="select") from e

    def create(self, user_id: str, title: str, content: str, tags: List[str]) -> Dict[str, Any]:
        """Insert an entry and return the stored row."""
        payload = {
            "title": title,
            "content": content,
            "tags": tags,
            "user_id": user_id,
        }
        try:
            result = self._table().insert(payload).execute()
        except Exception as e:
            logger.error(f"Error creating entry for user {user_id}: {e}")
            raise StoreError("Could not save journal entry", operation="insert") from e

        if not result.data:
            raise StoreError("Insert returned no row", operation="insert")

        logger.info(f"Entry created: {result.data[0].get('id')}")
        return result.data[0]

    def update(self, user_id: str, entry_id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Apply updates; returns the updated row or None when nothing matched."""
        updates = {**updates, "updated_at": datetime.now(timezone.utc).isoformat()}
        try:
            result = self._table().update(updates).eq("id", entry_id).eq("user_id", user_id).execute()
        except Exception as e:
            logger.error(f"Error updating entry {entry_id}: {e}")
            raise StoreError("Could not update journal entry", operation="update") from e

        if not result.data:
            return None
        logger.info(f"Updated entry {entry_id}")
        return result.data[0]

    def delete(self, user_id: str, entry_id: str) -> bool:
        """Delete an entry; returns False when nothing matched."""
        try:
            result = self._table().delete().eq("id", entry_id).eq("user_id", user_id).execute()
        except Exception as e:
            logger.error(f"Error deleting entry {entry_id}: {e}")
            raise StoreError("Could not delete journal entry", operation="delete") from e

        deleted = bool(result.data)
        if deleted:
            logger.info(f"Deleted entry {entry_id}")
        return deleted
