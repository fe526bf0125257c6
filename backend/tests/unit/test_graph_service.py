from datetime import datetime, timedelta, timezone

import pytest

from backend.src.models.note import Note
from backend.src.services.graph import (
    build_graph,
    get_backlinks,
    get_forward_links,
    get_link_count,
    resolve_links,
)

BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


def _note(note_id: str, title: str, content: str = "", minutes: int = 0, **kwargs) -> Note:
    stamp = BASE_TIME + timedelta(minutes=minutes)
    return Note(id=note_id, title=title, content=content, created_at=BASE_TIME, updated_at=stamp, **kwargs)


@pytest.fixture()
def notes() -> list[Note]:
    return [
        _note("hub", "Hub Note", "Links to [[Leaf One]] and [[leaf_two]] and [[Missing]].", minutes=1),
        _note("leaf-1", "Leaf One", "Back to [[Hub Note]] and to [[Leaf One]].", minutes=5, folder_id="leaves"),
        _note("leaf-2", "Leaf Two", "Refers to [[hub]] by id.", minutes=3, folder_id="leaves"),
        _note("lonely", "Lonely", "No links."),
    ]


def test_resolve_links_by_slug_and_id(notes: list[Note]) -> None:
    links = resolve_links(notes[0], notes)

    assert [(link.link_text, link.target_id, link.is_resolved) for link in links] == [
        ("Leaf One", "leaf-1", True),
        ("leaf_two", "leaf-2", True),
        ("Missing", None, False),
    ]
    assert resolve_links(notes[2], notes)[0].target_id == "hub"


def test_backlinks_most_recent_first(notes: list[Note]) -> None:
    backlinks = get_backlinks("hub", notes)

    assert [note.id for note in backlinks] == ["leaf-1", "leaf-2"]


def test_self_links_are_ignored(notes: list[Note]) -> None:
    assert [note.id for note in get_backlinks("leaf-1", notes)] == ["hub"]
    assert [note.id for note in get_forward_links("leaf-1", notes)] == ["hub"]


def test_forward_links_and_count(notes: list[Note]) -> None:
    assert [note.id for note in get_forward_links("hub", notes)] == ["leaf-1", "leaf-2"]
    assert get_link_count("hub", notes) == 4
    assert get_link_count("lonely", notes) == 0


def test_build_graph(notes: list[Note]) -> None:
    graph = build_graph(notes)

    nodes = {node.id: node for node in graph.nodes}
    assert nodes["hub"].val == 3
    assert nodes["leaf-1"].val == 2
    assert nodes["lonely"].val == 1
    assert nodes["leaf-2"].group == "leaves"
    assert nodes["hub"].group == "root"
    assert {(link.source, link.target) for link in graph.links} == {
        ("hub", "leaf-1"),
        ("hub", "leaf-2"),
        ("leaf-1", "hub"),
        ("leaf-2", "hub"),
    }


def test_build_graph_empty() -> None:
    graph = build_graph([])

    assert graph.nodes == []
    assert graph.links == []
