"""
Entry Store - journal entry CRUD with a local-cache fallback.

Reads and creates degrade to the local cache when the remote store fails;
the caller gets a notice to show. Updates and deletes of stored entries go
straight to the remote store and propagate its failures. Last write wins.
"""

import logging
import time
import uuid
from collections import OrderedDict
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from selfsight.features.analysis.remote import (
    RemoteAnalyzerClient,
    describe_degradation,
    merge_payload,
)
from selfsight.features.database.repositories.entries import EntriesRepository
from selfsight.features.entries.dates import format_date
from selfsight.features.entries.models import DiaryEntry, EntryList, EntryWrite
from selfsight.services.local_cache import LocalCache, entries_key
from selfsight.shared.errors import (
    AuthenticationError,
    NotFoundError,
    StoreError,
    ValidationError,
)

logger = logging.getLogger("SelfSight.Entries")

OFFLINE_SAVE_NOTICE = "Could not reach the journal store. Your entry was saved on this device only."
OFFLINE_READ_NOTICE = "Could not reach the journal store. Showing entries saved on this device."


def normalize_tags(tags: Optional[Iterable[str]]) -> List[str]:
    """Trim, drop blanks and duplicates, keep first-seen order."""
    seen: List[str] = []
    for tag in tags or []:
        tag = tag.strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


def filter_entries(
    entries: Iterable[DiaryEntry],
    query: Optional[str] = None,
    tag: Optional[str] = None,
) -> List[DiaryEntry]:
    """Case-insensitive substring search over title and content, newest first."""
    needle = (query or "").lower()
    matched = [
        entry for entry in entries
        if (needle in entry.title.lower() or needle in entry.content.lower())
        and (not tag or tag in entry.tags)
    ]
    return sorted(matched, key=lambda entry: entry.created_at, reverse=True)


def group_by_day(entries: Iterable[DiaryEntry]) -> Dict[str, List[DiaryEntry]]:
    """Group entries under their ``M/D/YYYY`` label, preserving order."""
    groups: Dict[str, List[DiaryEntry]] = OrderedDict()
    for entry in entries:
        groups.setdefault(format_date(entry.created_at), []).append(entry)
    return groups


def collect_tags(entries: Iterable[DiaryEntry]) -> List[str]:
    return sorted({tag for entry in entries for tag in entry.tags})


class EntryStore:
    """Journal entries of one backend, scoped per call by user id."""

    def __init__(
        self,
        repository: EntriesRepository,
        cache: LocalCache,
        analyzer: Optional[RemoteAnalyzerClient] = None,
    ):
        self.repository = repository
        self.cache = cache
        self.analyzer = analyzer or RemoteAnalyzerClient()

    # =========================================================================
    # LOCAL CACHE
    # =========================================================================

    def _cached(self, user_id: str) -> List[DiaryEntry]:
        return [DiaryEntry.model_validate(item) for item in self.cache.get(entries_key(user_id), [])]

    def _write_cache(self, user_id: str, entries: List[DiaryEntry]) -> None:
        self.cache.set(entries_key(user_id), [entry.model_dump(mode="json") for entry in entries])

    def _replace_cached(self, user_id: str, entry: DiaryEntry) -> None:
        cached = self._cached(user_id)
        if any(item.id == entry.id for item in cached):
            self._write_cache(user_id, [entry if item.id == entry.id else item for item in cached])

    def _new_fallback_id(self, user_id: str) -> str:
        taken = {entry.id for entry in self._cached(user_id)}
        while True:
            candidate = f"entry-{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}"
            if candidate not in taken:
                return candidate

    # =========================================================================
    # VALIDATION
    # =========================================================================

    @staticmethod
    def _require_user(user_id: Optional[str]) -> None:
        if not user_id:
            raise AuthenticationError("User must be logged in")

    @staticmethod
    def _validate_text(title: Optional[str], content: Optional[str]) -> None:
        missing = [name for name, value in (("title", title), ("content", content)) if not (value or "").strip()]
        if missing:
            raise ValidationError(
                "Please provide both a title and content for your entry",
                details={"missing": missing},
            )

    # =========================================================================
    # OPERATIONS
    # =========================================================================

    def create(
        self,
        user_id: str,
        title: str,
        content: str,
        tags: Optional[Iterable[str]] = None,
    ) -> EntryWrite:
        self._require_user(user_id)
        self._validate_text(title, content)
        tags = normalize_tags(tags)

        try:
            row = self.repository.create(user_id, title, content, tags)
        except StoreError as exc:
            logger.warning("Remote insert failed, saving entry locally: %s", exc.message)
            entry = DiaryEntry(
                id=self._new_fallback_id(user_id),
                user_id=user_id,
                title=title,
                content=content,
                tags=tags,
                created_at=datetime.now(timezone.utc),
                is_fallback=True,
            )
            self._write_cache(user_id, [entry] + self._cached(user_id))
            return EntryWrite(entry=entry, degraded=True, notice=OFFLINE_SAVE_NOTICE)

        entry = DiaryEntry.from_row(row)
        self._write_cache(user_id, [entry] + [item for item in self._cached(user_id) if item.id != entry.id])
        return EntryWrite(entry=entry)

    def list(self, user_id: str) -> EntryList:
        self._require_user(user_id)
        cached = self._cached(user_id)

        try:
            rows = self.repository.list_for_user(user_id)
        except StoreError as exc:
            logger.warning("Remote read failed, serving %s cached entries: %s", len(cached), exc.message)
            entries = sorted(cached, key=lambda entry: entry.created_at, reverse=True)
            return EntryList(entries=entries, degraded=True, notice=OFFLINE_READ_NOTICE)

        remote = [DiaryEntry.from_row(row) for row in rows]
        remote_ids = {entry.id for entry in remote}
        local_only = [entry for entry in cached if entry.is_fallback and entry.id not in remote_ids]

        entries = sorted(local_only + remote, key=lambda entry: entry.created_at, reverse=True)
        self._write_cache(user_id, entries)
        return EntryList(entries=entries)

    def get(self, user_id: str, entry_id: str) -> DiaryEntry:
        self._require_user(user_id)
        cached = {entry.id: entry for entry in self._cached(user_id)}

        if entry_id in cached and cached[entry_id].is_fallback:
            return cached[entry_id]

        try:
            row = self.repository.get_by_id(user_id, entry_id)
        except StoreError as exc:
            logger.warning("Remote read of %s failed, trying cache: %s", entry_id, exc.message)
            if entry_id in cached:
                return cached[entry_id]
            raise

        if row is None:
            raise NotFoundError("Entry not found", resource_type="entry", resource_id=entry_id)
        return DiaryEntry.from_row(row)

    def update(
        self,
        user_id: str,
        entry_id: str,
        title: str,
        content: str,
        tags: Optional[Iterable[str]] = None,
    ) -> DiaryEntry:
        self._require_user(user_id)
        self._validate_text(title, content)
        changes = {"title": title, "content": content, "tags": normalize_tags(tags)}
        return self._apply(user_id, entry_id, changes)

    def delete(self, user_id: str, entry_id: str) -> None:
        self._require_user(user_id)
        cached = self._cached(user_id)
        local = next((entry for entry in cached if entry.id == entry_id and entry.is_fallback), None)

        if local is None and not self.repository.delete(user_id, entry_id):
            raise NotFoundError("Entry not found", resource_type="entry", resource_id=entry_id)

        self._write_cache(user_id, [entry for entry in cached if entry.id != entry_id])
        logger.info("Entry %s deleted", entry_id)

    async def analyze(self, user_id: str, entry_id: str) -> EntryWrite:
        """Analyze an entry and save the result onto it."""
        entry = self.get(user_id, entry_id)

        result = await self.analyzer.analyze(entry.title, entry.content)
        logger.info(
            "Entry analyzed",
            extra={"entry_id": entry_id, "mood": result.mood, "fallback": result.fallback},
        )

        updated = self._apply(user_id, entry_id, merge_payload(result), current=entry)
        return EntryWrite(entry=updated, degraded=result.fallback, notice=describe_degradation(result))

    def _apply(
        self,
        user_id: str,
        entry_id: str,
        changes: Dict,
        current: Optional[DiaryEntry] = None,
    ) -> DiaryEntry:
        """Write changes remotely, or into the cache for device-only entries."""
        if current is None:
            current = next((entry for entry in self._cached(user_id) if entry.id == entry_id), None)

        if current is not None and current.is_fallback:
            updated = current.model_copy(update={**changes, "updated_at": datetime.now(timezone.utc)})
            self._replace_cached(user_id, updated)
            return updated

        row = self.repository.update(user_id, entry_id, changes)
        if row is None:
            raise NotFoundError("Entry not found", resource_type="entry", resource_id=entry_id)

        updated = DiaryEntry.from_row(row)
        self._replace_cached(user_id, updated)
        return updated

    def get_all_tags(self, user_id: str) -> List[str]:
        return collect_tags(self.list(user_id).entries)
