"""HTTP API routes for search operations."""

from __future__ import annotations

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from ...models.index import Tag
from ...models.note import NoteSummary
from ...models.search import SearchFilters, SearchOptions, SearchResult
from ...services.config import AppConfig, get_config
from ...services.note_store import NoteStore
from ...services.search import SearchService
from ..dependencies import get_note_store, get_search_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/api/search", response_model=list[SearchResult])
async def search_notes(
    search_service: Annotated[SearchService, Depends(get_search_service)],
    config: Annotated[AppConfig, Depends(get_config)],
    q: str = Query(..., max_length=256),
    limit: Optional[int] = Query(None, ge=1),
    tags: Optional[list[str]] = Query(None),
    folders: Optional[list[str]] = Query(None),
    include_content: bool = Query(True),
):
    """Title/content search. Queries shorter than two characters return nothing."""
    options = SearchOptions(
        limit=limit or config.search_limit,
        include_content=include_content,
        folder_filter=folders,
        tag_filter=tags,
    )
    results = search_service.search(q, options)
    logger.info("Search served", extra={"query": q, "result_count": len(results)})
    return results


@router.get("/api/search/suggestions", response_model=list[str])
async def search_suggestions(
    search_service: Annotated[SearchService, Depends(get_search_service)],
    q: str = Query(..., max_length=256),
):
    """Autocomplete note titles by prefix."""
    return search_service.suggestions(q)


@router.post("/api/search/advanced", response_model=list[NoteSummary])
async def advanced_search(
    filters: SearchFilters,
    search_service: Annotated[SearchService, Depends(get_search_service)],
):
    """Structured search across title, content, tags, folder, dates and backlinks."""
    return [NoteSummary.from_note(note) for note in search_service.advanced_search(filters)]


@router.get("/api/tags", response_model=list[Tag])
async def get_tags(store: Annotated[NoteStore, Depends(get_note_store)]):
    """Get all tags with usage counts."""
    return store.get_tags()


__all__ = ["router"]
