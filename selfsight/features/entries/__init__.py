"""
Journal entries feature module.

- store: CRUD with local-cache fallback, search and tag helpers
- export: text/HTML downloads of a single entry
"""

from selfsight.features.entries.models import DiaryEntry, EntryList, EntryWrite
from selfsight.features.entries.store import EntryStore

__all__ = [
    "DiaryEntry",
    "EntryList",
    "EntryStore",
    "EntryWrite",
]
