"""HTTP API routes for neural-linker suggestions."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from ...models.links import ApplyLinkRequest, LinkSuggestion
from ...models.note import Note
from ...services.linker import LinkSuggestionService
from ..dependencies import get_link_service

router = APIRouter()

LinkServiceDep = Annotated[LinkSuggestionService, Depends(get_link_service)]


@router.get("/api/notes/{note_id:path}/link-suggestions", response_model=list[LinkSuggestion])
async def get_link_suggestions(note_id: str, link_service: LinkServiceDep):
    """Suggest links to notes whose titles this note mentions."""
    return link_service.suggest_for(note_id)


@router.post("/api/notes/{note_id:path}/link-suggestions/apply", response_model=Note)
async def apply_link_suggestion(
    note_id: str, request: ApplyLinkRequest, link_service: LinkServiceDep
):
    """Accept a suggestion by wrapping the first mention in a wikilink."""
    if not link_service.enabled:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"error": "feature_disabled", "message": "Link suggestions are disabled"},
        )
    try:
        return link_service.accept(note_id, request.target_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


__all__ = ["router"]
