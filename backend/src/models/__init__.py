"""Pydantic models for data validation and serialization."""

from .graph import GraphData, GraphLink, GraphNode
from .index import Link, Tag
from .links import ApplyLinkRequest, LinkSuggestion
from .note import Note, NoteCreate, NoteFilters, NoteSummary, NoteUpdate
from .search import DateRange, SearchFilters, SearchMatch, SearchOptions, SearchResult

__all__ = [
    "Note",
    "NoteCreate",
    "NoteUpdate",
    "NoteFilters",
    "NoteSummary",
    "Link",
    "Tag",
    "LinkSuggestion",
    "ApplyLinkRequest",
    "GraphData",
    "GraphNode",
    "GraphLink",
    "SearchResult",
    "SearchMatch",
    "SearchOptions",
    "SearchFilters",
    "DateRange",
]
