"""Link index and tag models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Link(BaseModel):
    """Wikilink found in a note body, resolved against the collection."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "source_id": "2",
                "target_id": "1",
                "link_text": "Welcome to KB Pro",
                "block_id": None,
                "is_resolved": True,
            }
        }
    )

    source_id: str
    target_id: Optional[str] = Field(None, description="Null if unresolved")
    link_text: str
    block_id: Optional[str] = None
    is_resolved: bool


class Tag(BaseModel):
    """Tag with aggregated count."""

    tag_name: str
    count: int = Field(..., ge=0)


__all__ = ["Link", "Tag"]
