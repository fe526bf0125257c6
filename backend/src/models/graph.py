"""Note graph payloads."""

from __future__ import annotations

from pydantic import BaseModel, Field


class GraphNode(BaseModel):
    """A note rendered as a graph vertex."""

    id: str = Field(..., description="Note id")
    label: str = Field(..., description="Note title")
    val: int = Field(default=1, ge=1, description="1 + number of distinct backlinking notes")
    group: str = Field(..., description="Folder id, or 'root' for unfiled notes")


class GraphLink(BaseModel):
    """Resolved wikilink edge between two distinct notes."""

    source: str
    target: str


class GraphData(BaseModel):
    nodes: list[GraphNode] = Field(default_factory=list)
    links: list[GraphLink] = Field(default_factory=list)


__all__ = ["GraphNode", "GraphLink", "GraphData"]
