"""HTTP API route handlers."""

from . import graph, links, notes, search

__all__ = ["graph", "links", "notes", "search"]
