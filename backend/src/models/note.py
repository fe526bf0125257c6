"""Note-related Pydantic models."""

from __future__ import annotations

from datetime import datetime, timezone
import math
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

WORDS_PER_MINUTE = 200


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_tag(tag: str | None) -> str:
    if not isinstance(tag, str):
        return ""
    return tag.strip().lower()


def normalize_tags(tags: Any) -> list[str]:
    """Normalize a tag collection, dropping blanks and duplicates (order kept)."""
    if tags is None:
        return []
    if isinstance(tags, str):
        tags = [tags]
    normalized: list[str] = []
    for tag in tags:
        cleaned = normalize_tag(tag)
        if cleaned and cleaned not in normalized:
            normalized.append(cleaned)
    return normalized


def count_words(content: str | None) -> int:
    return len((content or "").split())


def estimate_reading_time(word_count: int) -> int:
    """Minutes needed to read ``word_count`` words, rounded up."""
    return math.ceil(word_count / WORDS_PER_MINUTE)


class Note(BaseModel):
    """Complete note with content, tags and derived metrics."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "2",
                "title": "Second Brain",
                "content": "Building a Second Brain is key.",
                "tags": ["pkm"],
                "folder_id": None,
                "is_daily_note": False,
                "properties": {},
                "created_at": "2025-01-10T09:00:00Z",
                "updated_at": "2025-01-15T14:30:00Z",
                "word_count": 6,
                "reading_time": 1,
            }
        }
    )

    id: str = Field(..., min_length=1, description="Unique note identifier")
    title: str = Field(..., description="Display title")
    content: str = Field("", description="Markdown content")
    tags: list[str] = Field(default_factory=list, description="Normalized tag set")
    folder_id: Optional[str] = None
    is_daily_note: bool = False
    properties: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
    word_count: int = Field(0, ge=0)
    reading_time: int = Field(0, ge=0, description="Estimated reading time in minutes")

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value: Any) -> list[str]:
        return normalize_tags(value)

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def with_metrics(self) -> "Note":
        """Return a copy whose word count and reading time match the content."""
        words = count_words(self.content)
        return self.model_copy(
            update={"word_count": words, "reading_time": estimate_reading_time(words)}
        )


class NoteCreate(BaseModel):
    """Request payload to create a note."""

    id: Optional[str] = Field(None, min_length=1, description="Explicit id (generated if omitted)")
    title: str = Field(..., min_length=1)
    content: str = ""
    tags: list[str] = Field(default_factory=list)
    folder_id: Optional[str] = None
    is_daily_note: bool = False
    properties: dict[str, Any] = Field(default_factory=dict)

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value: Any) -> list[str]:
        return normalize_tags(value)


class NoteUpdate(BaseModel):
    """Request payload to update a note. Omitted fields are left untouched."""

    title: Optional[str] = Field(None, min_length=1)
    content: Optional[str] = None
    tags: Optional[list[str]] = None
    folder_id: Optional[str] = None
    is_daily_note: Optional[bool] = None
    properties: Optional[dict[str, Any]] = None

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value: Any) -> Optional[list[str]]:
        if value is None:
            return None
        return normalize_tags(value)


class NoteFilters(BaseModel):
    """Listing filters applied by the note store."""

    folder_id: Optional[str] = None
    tags: Optional[list[str]] = Field(None, description="Notes must carry every tag")
    search: Optional[str] = Field(None, description="Substring of title or content")
    limit: int = Field(100, ge=1)
    offset: int = Field(0, ge=0)


class NoteSummary(BaseModel):
    """Lightweight representation used for listings."""

    id: str
    title: str
    tags: list[str] = Field(default_factory=list)
    folder_id: Optional[str] = None
    updated_at: datetime

    @classmethod
    def from_note(cls, note: Note) -> "NoteSummary":
        return cls(
            id=note.id,
            title=note.title,
            tags=list(note.tags),
            folder_id=note.folder_id,
            updated_at=note.updated_at,
        )


__all__ = [
    "Note",
    "NoteCreate",
    "NoteUpdate",
    "NoteFilters",
    "NoteSummary",
    "normalize_tag",
    "normalize_tags",
    "count_words",
    "estimate_reading_time",
]
