"""Service layer: note store, search engine, neural linker and link graph."""

from .config import AppConfig, configure_logging, get_config, reload_config
from .graph import build_graph, get_backlinks, get_forward_links, get_link_count, resolve_links
from .link_parser import extract_wikilinks, normalize_slug, parse_link_text
from .linker import LinkSuggestionService, apply_link, suggest_links
from .note_store import NoteNotFoundError, NoteStore
from .search import SearchService, advanced_search, get_suggestions, search_notes

__all__ = [
    "AppConfig",
    "get_config",
    "reload_config",
    "configure_logging",
    "NoteStore",
    "NoteNotFoundError",
    "SearchService",
    "search_notes",
    "get_suggestions",
    "advanced_search",
    "LinkSuggestionService",
    "suggest_links",
    "apply_link",
    "extract_wikilinks",
    "normalize_slug",
    "parse_link_text",
    "resolve_links",
    "get_backlinks",
    "get_forward_links",
    "get_link_count",
    "build_graph",
]
