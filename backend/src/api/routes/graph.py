"""HTTP API routes for the link graph and backlinks."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from ...models.graph import GraphData
from ...models.index import Link
from ...models.note import NoteSummary
from ...services import graph as graph_service
from ...services.note_store import NoteStore
from ..dependencies import get_note_store

router = APIRouter()

StoreDep = Annotated[NoteStore, Depends(get_note_store)]


@router.get("/api/graph", response_model=GraphData)
async def get_graph_data(store: StoreDep) -> GraphData:
    """Retrieve graph visualization data."""
    return graph_service.build_graph(store.all_notes())


@router.get("/api/notes/{note_id:path}/backlinks", response_model=list[NoteSummary])
async def get_backlinks(note_id: str, store: StoreDep):
    """Get all notes that link to this note."""
    store.get_note(note_id)
    backlinks = graph_service.get_backlinks(note_id, store.all_notes())
    return [NoteSummary.from_note(note) for note in backlinks]


@router.get("/api/notes/{note_id:path}/links", response_model=list[Link])
async def get_outgoing_links(note_id: str, store: StoreDep):
    """Wikilinks written in this note, resolved or not."""
    note = store.get_note(note_id)
    return graph_service.resolve_links(note, store.all_notes())


__all__ = ["router"]
