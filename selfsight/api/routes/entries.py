"""
Journal Entry API Routes

CRUD, search, tags, on-demand analysis and export for the signed-in user's
entries. Degraded results (local-cache fallbacks, offline analyses) come back
with ``degraded: true`` and a ``notice`` for the client to show.
"""

import logging
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, Response

from selfsight.api.dependencies import get_current_user, get_entry_store
from selfsight.api.models import (
    CreateEntryRequest,
    EntriesResponse,
    EntryResponse,
    TagsResponse,
    UpdateEntryRequest,
)
from selfsight.features.entries.export import render_export
from selfsight.features.entries.store import EntryStore, filter_entries, group_by_day
from selfsight.features.profiles.models import User

router = APIRouter(tags=["Entries"])
logger = logging.getLogger("SelfSight.API.Entries")


@router.get("/entries", response_model=EntriesResponse)
async def list_entries(
    q: Optional[str] = Query(default=None, description="Search title and content"),
    tag: Optional[str] = Query(default=None),
    user: User = Depends(get_current_user),
    store: EntryStore = Depends(get_entry_store),
) -> EntriesResponse:
    """List entries newest first, optionally filtered by search term and tag."""
    result = store.list(user.id)
    entries = filter_entries(result.entries, q, tag)
    groups = {day: [entry.id for entry in items] for day, items in group_by_day(entries).items()}

    return EntriesResponse(
        status="degraded" if result.degraded else "success",
        entries=entries,
        groups=groups,
        degraded=result.degraded,
        notice=result.notice,
    )


@router.post("/entries", response_model=EntryResponse, status_code=201)
async def create_entry(
    request: CreateEntryRequest,
    user: User = Depends(get_current_user),
    store: EntryStore = Depends(get_entry_store),
) -> EntryResponse:
    result = store.create(user.id, request.title, request.content, request.tags)
    return EntryResponse(
        status="degraded" if result.degraded else "success",
        entry=result.entry,
        degraded=result.degraded,
        notice=result.notice or "Journal entry saved!",
    )


@router.get("/entries/tags", response_model=TagsResponse)
async def list_tags(
    user: User = Depends(get_current_user),
    store: EntryStore = Depends(get_entry_store),
) -> TagsResponse:
    """Every tag used across the user's entries."""
    return TagsResponse(status="success", tags=store.get_all_tags(user.id))


@router.get("/entries/{entry_id}", response_model=EntryResponse)
async def get_entry(
    entry_id: str,
    user: User = Depends(get_current_user),
    store: EntryStore = Depends(get_entry_store),
) -> EntryResponse:
    return EntryResponse(status="success", entry=store.get(user.id, entry_id))


@router.put("/entries/{entry_id}", response_model=EntryResponse)
async def update_entry(
    entry_id: str,
    request: UpdateEntryRequest,
    user: User = Depends(get_current_user),
    store: EntryStore = Depends(get_entry_store),
) -> EntryResponse:
    entry = store.update(user.id, entry_id, request.title, request.content, request.tags)
    return EntryResponse(status="success", entry=entry, notice="Journal entry updated!")


@router.delete("/entries/{entry_id}")
async def delete_entry(
    entry_id: str,
    user: User = Depends(get_current_user),
    store: EntryStore = Depends(get_entry_store),
):
    store.delete(user.id, entry_id)
    return {"status": "success", "entry_id": entry_id}


@router.post("/entries/{entry_id}/analyze", response_model=EntryResponse)
async def analyze_entry(
    entry_id: str,
    user: User = Depends(get_current_user),
    store: EntryStore = Depends(get_entry_store),
) -> EntryResponse:
    """Run the analysis for one entry and save it onto the entry."""
    result = await store.analyze(user.id, entry_id)
    return EntryResponse(
        status="degraded" if result.degraded else "success",
        entry=result.entry,
        degraded=result.degraded,
        notice=result.notice or "Entry analyzed successfully!",
    )


@router.get("/entries/{entry_id}/export")
async def export_entry(
    entry_id: str,
    format: Literal["text", "html"] = Query(default="text"),
    user: User = Depends(get_current_user),
    store: EntryStore = Depends(get_entry_store),
) -> Response:
    """Download one entry as a text or standalone HTML file."""
    entry = store.get(user.id, entry_id)
    body, media_type, filename = render_export(entry, format)

    logger.info("Exporting entry %s as %s", entry_id, format)
    return Response(
        content=body,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
