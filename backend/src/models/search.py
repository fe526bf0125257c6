"""Search request/response models."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class SearchMatch(BaseModel):
    """Location of a query hit inside a note field."""

    field: Literal["title", "content"]
    start: int = Field(..., ge=0)
    end: int = Field(..., ge=0)
    text: str


class SearchResult(BaseModel):
    """Full-text search result payload."""

    note_id: str
    title: str
    content_snippet: str = Field(..., description="Prefix excerpt of the note body")
    relevance_score: float = Field(..., ge=0.0, le=1.0, description="1.0 title hit, 0.5 body hit")
    matches: list[SearchMatch] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class SearchOptions(BaseModel):
    """Options for a free-text search.

    Every field is optional; the defaults reproduce a plain title/content search.
    """

    limit: Optional[int] = Field(None, ge=1, description="Maximum results (unlimited when omitted)")
    include_content: bool = Field(True, description="Match note bodies as well as titles")
    folder_filter: Optional[list[str]] = Field(
        None, description="Only notes in one of these folders"
    )
    tag_filter: Optional[list[str]] = Field(None, description="Only notes carrying every tag")


class DateRange(BaseModel):
    """Inclusive creation-time window."""

    start: datetime
    end: datetime

    @field_validator("start", "end")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @model_validator(mode="after")
    def _check_order(self) -> "DateRange":
        if self.end < self.start:
            raise ValueError("date_range.end must not precede date_range.start")
        return self


class SearchFilters(BaseModel):
    """Structured filters for advanced search. All provided fields must match."""

    title: Optional[str] = None
    content: Optional[str] = None
    tags: Optional[list[str]] = None
    folder_id: Optional[str] = None
    date_range: Optional[DateRange] = None
    properties: Optional[dict[str, Any]] = None
    has_backlinks: Optional[bool] = None


__all__ = ["SearchMatch", "SearchResult", "SearchOptions", "DateRange", "SearchFilters"]
