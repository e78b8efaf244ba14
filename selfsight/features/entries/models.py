"""Journal entry models."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class DiaryEntry(BaseModel):
    """One journal record. Analysis fields stay None until an analysis is saved."""

    id: str
    user_id: str
    title: str
    content: str
    created_at: datetime
    updated_at: Optional[datetime] = None
    tags: List[str] = Field(default_factory=list)

    mood: Optional[str] = None
    emotions: Optional[List[str]] = None
    strength: Optional[str] = None
    weakness: Optional[str] = None
    insight: Optional[str] = None
    analysis: Optional[Dict[str, Any]] = None

    # Only present in the local cache; the remote insert failed.
    is_fallback: bool = False

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_default(cls, value: Any) -> Any:
        return value or []

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "DiaryEntry":
        """Build an entry from a ``journal_entries`` row; empty columns read as unset."""
        return cls(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            title=row.get("title") or "",
            content=row.get("content") or "",
            created_at=row["created_at"],
            updated_at=row.get("updated_at"),
            tags=row.get("tags") or [],
            mood=row.get("mood") or None,
            emotions=row.get("emotions") or None,
            strength=row.get("strength") or None,
            weakness=row.get("weakness") or None,
            insight=row.get("insight") or None,
            analysis=row.get("analysis") or None,
            is_fallback=bool(row.get("is_fallback", False)),
        )

    @property
    def is_analyzed(self) -> bool:
        return bool(self.mood)


class EntryList(BaseModel):
    """Entries plus the degraded-mode notice when they came from the local cache."""

    entries: List[DiaryEntry] = Field(default_factory=list)
    degraded: bool = False
    notice: Optional[str] = None


class EntryWrite(BaseModel):
    """Result of a create/analyze call, with an optional user notice."""

    entry: DiaryEntry
    degraded: bool = False
    notice: Optional[str] = None
