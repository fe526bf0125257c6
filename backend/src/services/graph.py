"""Wikilink resolution, backlinks and graph building over a note collection."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Sequence, Set, Tuple

from ..models.graph import GraphData, GraphLink, GraphNode
from ..models.index import Link
from ..models.note import Note
from .link_parser import extract_link_targets, normalize_slug

logger = logging.getLogger(__name__)

ROOT_GROUP = "root"


def build_title_index(notes: Iterable[Note]) -> Dict[str, Note]:
    """Map title slugs to notes; the first note in collection order wins."""
    index: Dict[str, Note] = {}
    for note in notes:
        slug = normalize_slug(note.title)
        if slug and slug not in index:
            index[slug] = note
    return index


def _resolve_target(text: str, slug_index: Mapping[str, Note], by_id: Mapping[str, Note]):
    slug = normalize_slug(text)
    if slug and slug in slug_index:
        return slug_index[slug]
    return by_id.get(text)


def resolve_links(
    note: Note,
    notes: Sequence[Note],
    *,
    slug_index: Mapping[str, Note] | None = None,
    by_id: Mapping[str, Note] | None = None,
) -> List[Link]:
    """Resolve every wikilink in ``note`` by title slug, falling back to exact id."""
    if slug_index is None:
        slug_index = build_title_index(notes)
    if by_id is None:
        by_id = {candidate.id: candidate for candidate in notes}

    links: List[Link] = []
    for title, block_id in extract_link_targets(note.content):
        target = _resolve_target(title, slug_index, by_id)
        links.append(
            Link(
                source_id=note.id,
                target_id=target.id if target else None,
                link_text=title,
                block_id=block_id,
                is_resolved=target is not None,
            )
        )
    return links


def _edges(notes: Sequence[Note]) -> List[Tuple[str, str]]:
    """Distinct resolved (source, target) pairs, self-links dropped, in collection order."""
    slug_index = build_title_index(notes)
    by_id = {note.id: note for note in notes}
    seen: Set[Tuple[str, str]] = set()
    edges: List[Tuple[str, str]] = []
    for note in notes:
        for link in resolve_links(note, notes, slug_index=slug_index, by_id=by_id):
            if not link.is_resolved or link.target_id == note.id:
                continue
            edge = (note.id, link.target_id)
            if edge not in seen:
                seen.add(edge)
                edges.append(edge)
    return edges


def _most_recent_first(notes: Iterable[Note]) -> List[Note]:
    return sorted(notes, key=lambda note: note.updated_at, reverse=True)


def get_backlinks(note_id: str, notes: Sequence[Note]) -> List[Note]:
    """Notes that link to ``note_id``, most recently updated first."""
    sources = {source for source, target in _edges(notes) if target == note_id}
    return _most_recent_first(note for note in notes if note.id in sources)


def get_forward_links(note_id: str, notes: Sequence[Note]) -> List[Note]:
    """Notes that ``note_id`` links to, most recently updated first."""
    targets = {target for source, target in _edges(notes) if source == note_id}
    return _most_recent_first(note for note in notes if note.id in targets)


def backlinked_ids(notes: Sequence[Note]) -> Set[str]:
    """Ids of notes that at least one other note links to."""
    return {target for _, target in _edges(notes)}


def get_link_count(note_id: str, notes: Sequence[Note]) -> int:
    """Forward links plus backlinks for a note."""
    edges = _edges(notes)
    forward = sum(1 for source, _ in edges if source == note_id)
    backward = sum(1 for _, target in edges if target == note_id)
    return forward + backward


def build_graph(notes: Sequence[Note]) -> GraphData:
    """Build graph visualization data for the whole collection."""
    edges = _edges(notes)
    inbound: Dict[str, int] = {}
    for _, target in edges:
        inbound[target] = inbound.get(target, 0) + 1

    nodes = [
        GraphNode(
            id=note.id,
            label=note.title,
            val=1 + inbound.get(note.id, 0),
            group=note.folder_id or ROOT_GROUP,
        )
        for note in notes
    ]
    links = [GraphLink(source=source, target=target) for source, target in edges]
    logger.debug(
        "Graph built",
        extra={"node_count": len(nodes), "link_count": len(links)},
    )
    return GraphData(nodes=nodes, links=links)


__all__ = [
    "build_title_index",
    "resolve_links",
    "get_backlinks",
    "get_forward_links",
    "backlinked_ids",
    "get_link_count",
    "build_graph",
]
