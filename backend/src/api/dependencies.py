"""Shared FastAPI dependencies."""

from __future__ import annotations

from functools import lru_cache
import logging
from typing import Annotated, Iterable, List

from fastapi import Depends

from ..services.config import AppConfig, get_config
from ..services.linker import LinkSuggestionService
from ..services.note_store import NoteStore
from ..services.search import SearchService

logger = logging.getLogger(__name__)

# Last path segments served by GET sub-resource routes under /api/notes/{id}/.
NOTE_SUBRESOURCES = ("backlinks", "links", "link-suggestions")


def shadowed_note_ids(note_ids: Iterable[str]) -> List[str]:
    """Ids that ``GET /api/notes/{id}`` cannot reach.

    A nested id such as ``ideas/links`` resolves to the outgoing-links route of
    note ``ideas``. Updates and deletes still reach the note.
    """
    shadowed = []
    for note_id in note_ids:
        parent, _, last = note_id.rpartition("/")
        if parent and last in NOTE_SUBRESOURCES:
            shadowed.append(note_id)
    return shadowed


@lru_cache(maxsize=1)
def get_note_store() -> NoteStore:
    """Process-wide note store, seeded from ``KB_VAULT_PATH`` when configured."""
    store = NoteStore()
    config = get_config()
    if config.vault_path is not None:
        count = store.load_vault(config.vault_path)
        logger.info("Seeded note store from %s (%d notes)", config.vault_path, count)
        for note_id in shadowed_note_ids(note.id for note in store.all_notes()):
            logger.warning(
                "Note id collides with a sub-resource route; GET /api/notes/%s is unreachable",
                note_id,
                extra={"note_id": note_id},
            )
    return store


def get_search_service(
    store: Annotated[NoteStore, Depends(get_note_store)],
    config: Annotated[AppConfig, Depends(get_config)],
) -> SearchService:
    return SearchService(store, suggestion_limit=config.suggestion_limit)


def get_link_service(
    store: Annotated[NoteStore, Depends(get_note_store)],
    config: Annotated[AppConfig, Depends(get_config)],
) -> LinkSuggestionService:
    return LinkSuggestionService(store, config=config)


__all__ = ["shadowed_note_ids", "get_note_store", "get_search_service", "get_link_service"]
