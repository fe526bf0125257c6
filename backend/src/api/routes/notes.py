"""HTTP API routes for note operations."""

from __future__ import annotations

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ...models.note import Note, NoteCreate, NoteFilters, NoteSummary, NoteUpdate
from ...services.note_store import NoteStore
from ..dependencies import get_note_store

router = APIRouter()

StoreDep = Annotated[NoteStore, Depends(get_note_store)]


@router.get("/api/notes", response_model=list[NoteSummary])
async def list_notes(
    store: StoreDep,
    folder_id: Optional[str] = Query(None, description="Only notes in this folder"),
    tags: Optional[list[str]] = Query(None, description="Notes must carry every tag"),
    search: Optional[str] = Query(None, description="Substring of title or content"),
    limit: int = Query(100, ge=1),
    offset: int = Query(0, ge=0),
):
    """List notes in insertion order."""
    filters = NoteFilters(folder_id=folder_id, tags=tags, search=search, limit=limit, offset=offset)
    return [NoteSummary.from_note(note) for note in store.list_notes(filters)]


@router.post("/api/notes", response_model=Note, status_code=status.HTTP_201_CREATED)
async def create_note(create: NoteCreate, store: StoreDep):
    """Create a new note."""
    try:
        return store.create_note(create)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"error": "note_already_exists", "message": str(e)},
        )


@router.get("/api/notes/{note_id:path}", response_model=Note)
async def get_note(note_id: str, store: StoreDep):
    """Get a specific note by id."""
    return store.get_note(note_id)


@router.put("/api/notes/{note_id:path}", response_model=Note)
async def update_note(note_id: str, update: NoteUpdate, store: StoreDep):
    """Update fields of an existing note."""
    return store.update_note(note_id, update)


@router.delete("/api/notes/{note_id:path}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(note_id: str, store: StoreDep):
    """Delete a note."""
    store.delete_note(note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
