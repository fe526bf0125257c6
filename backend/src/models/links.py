"""Link suggestion models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_LINK_CONFIDENCE = 0.85


class LinkSuggestion(BaseModel):
    """Proposed link from a note to another note whose title it mentions."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "source_id": "2",
                "target_id": "1",
                "target_title": "Welcome to KB Pro",
                "confidence": 0.85,
            }
        },
    )

    source_id: str
    target_id: str
    target_title: str
    confidence: float = Field(
        DEFAULT_LINK_CONFIDENCE,
        ge=0.0,
        le=1.0,
        description="Fixed heuristic score, not a probability",
    )


class ApplyLinkRequest(BaseModel):
    """Request payload to accept a link suggestion."""

    target_id: str = Field(..., min_length=1)


__all__ = ["LinkSuggestion", "ApplyLinkRequest", "DEFAULT_LINK_CONFIDENCE"]
