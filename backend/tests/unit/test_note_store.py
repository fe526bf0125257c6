from datetime import datetime, timezone
from pathlib import Path

import pytest

from backend.src.models.note import Note, NoteCreate, NoteFilters, NoteUpdate
from backend.src.services.note_store import NoteNotFoundError, NoteStore


@pytest.fixture()
def store() -> NoteStore:
    return NoteStore()


def test_create_note_computes_metrics(store: NoteStore) -> None:
    content = " ".join(["word"] * 401)

    note = store.create_note(NoteCreate(title="Essay", content=content, tags=[" PKM ", "pkm", ""]))

    assert note.id
    assert note.word_count == 401
    assert note.reading_time == 3
    assert note.tags == ["pkm"]
    assert note.created_at == note.updated_at
    assert note.created_at.tzinfo is not None


def test_empty_note_has_zero_metrics(store: NoteStore) -> None:
    note = store.create_note(NoteCreate(title="Blank"))

    assert note.word_count == 0
    assert note.reading_time == 0


def test_duplicate_ids_are_rejected(store: NoteStore) -> None:
    store.create_note(NoteCreate(id="a", title="First"))

    with pytest.raises(ValueError):
        store.create_note(NoteCreate(id="a", title="Again"))


def test_update_applies_only_given_fields(store: NoteStore) -> None:
    note = store.create_note(NoteCreate(id="a", title="Title", content="one two", folder_id="inbox"))

    updated = store.update_note("a", NoteUpdate(content="one two three"))

    assert updated.title == "Title"
    assert updated.folder_id == "inbox"
    assert updated.word_count == 3
    assert updated.updated_at >= note.updated_at

    cleared = store.update_note("a", NoteUpdate(folder_id=None))
    assert cleared.folder_id is None


def test_unknown_ids_raise_not_found(store: NoteStore) -> None:
    with pytest.raises(NoteNotFoundError):
        store.get_note("missing")
    with pytest.raises(NoteNotFoundError):
        store.update_note("missing", NoteUpdate(title="x"))
    with pytest.raises(NoteNotFoundError):
        store.delete_note("missing")


def test_delete_note(store: NoteStore) -> None:
    store.create_note(NoteCreate(id="a", title="Gone soon"))

    store.delete_note("a")

    assert "a" not in store
    assert len(store) == 0


def test_snapshots_are_copies(store: NoteStore) -> None:
    store.create_note(NoteCreate(id="a", title="Original", tags=["x"]))

    snapshot = store.all_notes()
    snapshot[0].tags.append("mutated")

    assert store.get_note("a").tags == ["x"]


def test_list_notes_filters_and_paginates(store: NoteStore) -> None:
    store.create_note(NoteCreate(id="1", title="Alpha", tags=["work"], folder_id="f1"))
    store.create_note(NoteCreate(id="2", title="Beta", content="alpha inside", tags=["work", "done"]))
    store.create_note(NoteCreate(id="3", title="Gamma", folder_id="f1"))

    assert [n.id for n in store.list_notes()] == ["1", "2", "3"]
    assert [n.id for n in store.list_notes(NoteFilters(folder_id="f1"))] == ["1", "3"]
    assert [n.id for n in store.list_notes(NoteFilters(tags=["WORK", "done"]))] == ["2"]
    assert [n.id for n in store.list_notes(NoteFilters(search="ALPHA"))] == ["1", "2"]
    assert [n.id for n in store.list_notes(NoteFilters(limit=1, offset=1))] == ["2"]


def test_get_tags_counts(store: NoteStore) -> None:
    store.create_note(NoteCreate(title="A", tags=["work", "ideas"]))
    store.create_note(NoteCreate(title="B", tags=["work"]))

    tags = store.get_tags()

    assert [(tag.tag_name, tag.count) for tag in tags] == [("work", 2), ("ideas", 1)]


def test_naive_timestamps_are_treated_as_utc() -> None:
    note = Note(id="n", title="t", created_at=datetime(2025, 1, 1), updated_at=datetime(2025, 1, 2))

    assert note.created_at.tzinfo == timezone.utc


def test_load_vault_reads_frontmatter(tmp_path: Path, store: NoteStore) -> None:
    (tmp_path / "projects").mkdir()
    (tmp_path / "welcome.md").write_text(
        "---\ntitle: Welcome to KB Pro\ntags: [Intro]\ncreated: 2025-01-10T09:00:00Z\n"
        "status: draft\n---\nStart here.\n",
        encoding="utf-8",
    )
    (tmp_path / "projects" / "second-brain.md").write_text(
        "# Second Brain\n\nBuilding a Second Brain is key.\n", encoding="utf-8"
    )
    (tmp_path / "projects" / "custom.md").write_text(
        "---\nid: custom-id\n---\nNo heading\n", encoding="utf-8"
    )
    (tmp_path / "ignored.txt").write_text("not a note", encoding="utf-8")

    loaded = store.load_vault(tmp_path)

    assert loaded == 3
    welcome = store.get_note("welcome")
    assert welcome.title == "Welcome to KB Pro"
    assert welcome.tags == ["intro"]
    assert welcome.folder_id is None
    assert welcome.properties == {"status": "draft"}
    assert welcome.created_at == datetime(2025, 1, 10, 9, 0, tzinfo=timezone.utc)

    brain = store.get_note("projects/second-brain")
    assert brain.title == "Second Brain"
    assert brain.folder_id == "projects"
    assert brain.word_count == 9

    custom = store.get_note("custom-id")
    assert custom.title == "custom"


def test_load_vault_rejects_missing_directory(tmp_path: Path, store: NoteStore) -> None:
    with pytest.raises(ValueError):
        store.load_vault(tmp_path / "nope")
