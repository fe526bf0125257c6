"""Local full-text search over a note collection.

Matching is case-insensitive substring containment against the title and the
body. Scoring is deliberately two-tiered: a title hit scores 1.0, a body-only
hit scores 0.5. Results are ordered by score with a stable sort, so notes with
equal scores keep the collection's iteration (insertion) order.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..models.note import Note, normalize_tags
from ..models.search import SearchFilters, SearchOptions, SearchResult
from .graph import backlinked_ids
from .note_store import NoteStore

logger = logging.getLogger(__name__)

TITLE_SCORE = 1.0
CONTENT_SCORE = 0.5
SNIPPET_LENGTH = 150
SNIPPET_SUFFIX = "..."
MIN_QUERY_LENGTH = 2
MIN_SUGGESTION_QUERY_LENGTH = 2
MAX_SUGGESTION_QUERY_LENGTH = 9
DEFAULT_SUGGESTION_LIMIT = 5


def make_snippet(content: str) -> str:
    """Prefix excerpt used in search results."""
    return content[:SNIPPET_LENGTH] + SNIPPET_SUFFIX


def _passes_options(note: Note, options: SearchOptions) -> bool:
    if options.folder_filter is not None and note.folder_id not in options.folder_filter:
        return False
    if options.tag_filter:
        required = normalize_tags(options.tag_filter)
        if not all(tag in note.tags for tag in required):
            return False
    return True


def search_notes(
    query: str,
    notes: Sequence[Note],
    options: SearchOptions | None = None,
) -> List[SearchResult]:
    """Rank ``notes`` against ``query``. Queries shorter than two characters match nothing."""
    if len(query) < MIN_QUERY_LENGTH:
        return []

    options = options or SearchOptions()
    needle = query.lower()

    results: List[SearchResult] = []
    for note in notes:
        if not _passes_options(note, options):
            continue
        title_hit = needle in note.title.lower()
        content_hit = options.include_content and needle in note.content.lower()
        if not (title_hit or content_hit):
            continue
        results.append(
            SearchResult(
                note_id=note.id,
                title=note.title,
                content_snippet=make_snippet(note.content),
                relevance_score=TITLE_SCORE if title_hit else CONTENT_SCORE,
                matches=[],
                created_at=note.created_at,
                updated_at=note.updated_at,
            )
        )

    # sorted() is stable: equal scores keep collection order
    results = sorted(results, key=lambda result: result.relevance_score, reverse=True)
    if options.limit is not None:
        results = results[: options.limit]

    logger.debug(
        "Search completed",
        extra={"query": query, "note_count": len(notes), "result_count": len(results)},
    )
    return results


def get_suggestions(
    query: str,
    notes: Sequence[Note],
    limit: int = DEFAULT_SUGGESTION_LIMIT,
) -> List[str]:
    """Autocomplete note titles starting with ``query`` (2 to 9 characters only)."""
    if not MIN_SUGGESTION_QUERY_LENGTH <= len(query) <= MAX_SUGGESTION_QUERY_LENGTH:
        return []
    prefix = query.lower()
    titles = [note.title for note in notes if note.title.lower().startswith(prefix)]
    return titles[:limit]


def advanced_search(filters: SearchFilters, notes: Sequence[Note]) -> List[Note]:
    """Filter notes by every provided field of ``filters``."""
    matched: List[Note] = list(notes)

    if filters.title:
        title = filters.title.lower()
        matched = [note for note in matched if title in note.title.lower()]
    if filters.content:
        content = filters.content.lower()
        matched = [note for note in matched if content in note.content.lower()]
    if filters.tags:
        required = normalize_tags(filters.tags)
        matched = [note for note in matched if all(tag in note.tags for tag in required)]
    if filters.folder_id:
        matched = [note for note in matched if note.folder_id == filters.folder_id]
    if filters.date_range is not None:
        window = filters.date_range
        matched = [note for note in matched if window.start <= note.created_at <= window.end]
    if filters.properties:
        matched = [
            note
            for note in matched
            if all(note.properties.get(key) == value for key, value in filters.properties.items())
        ]
    if filters.has_backlinks is not None:
        linked = backlinked_ids(notes)
        matched = [note for note in matched if (note.id in linked) == filters.has_backlinks]

    return matched


class SearchService:
    """Run the search functions against the current contents of a note store."""

    def __init__(self, store: NoteStore, *, suggestion_limit: int = DEFAULT_SUGGESTION_LIMIT):
        self.store = store
        self.suggestion_limit = suggestion_limit

    def search(self, query: str, options: Optional[SearchOptions] = None) -> List[SearchResult]:
        return search_notes(query, self.store.all_notes(), options)

    def suggestions(self, query: str) -> List[str]:
        return get_suggestions(query, self.store.all_notes(), limit=self.suggestion_limit)

    def advanced_search(self, filters: SearchFilters) -> List[Note]:
        return advanced_search(filters, self.store.all_notes())


__all__ = [
    "search_notes",
    "get_suggestions",
    "advanced_search",
    "make_snippet",
    "SearchService",
]
