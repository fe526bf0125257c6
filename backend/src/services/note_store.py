"""In-memory note collection shared by the search and link engines."""

from __future__ import annotations

from datetime import date, datetime, timezone
import logging
from pathlib import Path
import re
import threading
from typing import Any, Dict, Iterable, List, Optional, Tuple
import uuid

import frontmatter

from ..models.index import Tag
from ..models.note import Note, NoteCreate, NoteFilters, NoteUpdate, normalize_tags

logger = logging.getLogger(__name__)

H1_PATTERN = re.compile(r"^\s*#\s+(.+)$", re.MULTILINE)
RESERVED_FRONTMATTER_KEYS = {"id", "title", "tags", "folder_id", "is_daily_note", "created", "updated"}


class NoteNotFoundError(KeyError):
    """Raised when a note id is not present in the store."""

    def __init__(self, note_id: str):
        self.note_id = note_id
        super().__init__(note_id)

    def __str__(self) -> str:
        return f"Note not found: {self.note_id}"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_timestamp(value: Any, fallback: datetime) -> datetime:
    """Coerce frontmatter timestamps (datetime, date or ISO string) to aware datetimes."""
    parsed: Optional[datetime] = None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            parsed = None
    if parsed is None:
        return fallback
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _derive_title(relative_path: Path, metadata: Dict[str, Any], body: str) -> str:
    title = metadata.get("title")
    if isinstance(title, str) and title.strip():
        return title.strip()
    match = H1_PATTERN.search(body or "")
    if match:
        return match.group(1).strip()
    stem = relative_path.stem
    return stem.replace("-", " ").replace("_", " ").strip() or stem


class NoteStore:
    """Thread-safe, insertion-ordered note repository.

    Engines never see the live objects: ``all_notes`` hands out copies.
    """

    def __init__(self, notes: Iterable[Note] | None = None) -> None:
        self._notes: Dict[str, Note] = {}
        self._lock = threading.RLock()
        for note in notes or ():
            self.add_note(note)

    def __len__(self) -> int:
        with self._lock:
            return len(self._notes)

    def __contains__(self, note_id: object) -> bool:
        with self._lock:
            return note_id in self._notes

    def add_note(self, note: Note) -> Note:
        """Insert a fully formed note, recomputing its metrics."""
        stored = note.with_metrics()
        with self._lock:
            if stored.id in self._notes:
                raise ValueError(f"Note already exists: {stored.id}")
            self._notes[stored.id] = stored
        return stored.model_copy(deep=True)

    def create_note(self, create: NoteCreate) -> Note:
        """Create a note with fresh timestamps."""
        now = _utcnow()
        note = Note(
            id=create.id or str(uuid.uuid4()),
            title=create.title,
            content=create.content,
            tags=create.tags,
            folder_id=create.folder_id,
            is_daily_note=create.is_daily_note,
            properties=dict(create.properties),
            created_at=now,
            updated_at=now,
        )
        stored = self.add_note(note)
        logger.info(
            "Note created",
            extra={"note_id": stored.id, "word_count": stored.word_count},
        )
        return stored

    def update_note(self, note_id: str, update: NoteUpdate) -> Note:
        """Apply the fields present in ``update`` and refresh ``updated_at``."""
        changes = update.model_dump(exclude_unset=True)
        for key in ("title", "content", "tags", "is_daily_note", "properties"):
            if key in changes and changes[key] is None:
                del changes[key]

        with self._lock:
            current = self._notes.get(note_id)
            if current is None:
                raise NoteNotFoundError(note_id)
            changes["updated_at"] = max(_utcnow(), current.created_at)
            updated = current.model_copy(update=changes).with_metrics()
            self._notes[note_id] = updated

        logger.info(
            "Note updated",
            extra={"note_id": note_id, "fields": sorted(k for k in changes if k != "updated_at")},
        )
        return updated.model_copy(deep=True)

    def delete_note(self, note_id: str) -> None:
        with self._lock:
            if self._notes.pop(note_id, None) is None:
                raise NoteNotFoundError(note_id)
        logger.info("Note deleted", extra={"note_id": note_id})

    def get_note(self, note_id: str) -> Note:
        with self._lock:
            note = self._notes.get(note_id)
            if note is None:
                raise NoteNotFoundError(note_id)
            return note.model_copy(deep=True)

    def all_notes(self) -> Tuple[Note, ...]:
        """Snapshot of every note in insertion order."""
        with self._lock:
            return tuple(note.model_copy(deep=True) for note in self._notes.values())

    def list_notes(self, filters: NoteFilters | None = None) -> List[Note]:
        """List notes matching folder, tag and substring filters, then paginate."""
        filters = filters or NoteFilters()
        notes: Iterable[Note] = self.all_notes()

        if filters.folder_id:
            notes = [note for note in notes if note.folder_id == filters.folder_id]
        if filters.tags:
            required = normalize_tags(filters.tags)
            notes = [note for note in notes if all(tag in note.tags for tag in required)]
        if filters.search:
            needle = filters.search.lower()
            notes = [
                note
                for note in notes
                if needle in note.title.lower() or needle in note.content.lower()
            ]

        notes = list(notes)
        return notes[filters.offset : filters.offset + filters.limit]

    def get_tags(self) -> List[Tag]:
        """Tags with usage counts, most used first."""
        counts: Dict[str, int] = {}
        for note in self.all_notes():
            for tag in note.tags:
                counts[tag] = counts.get(tag, 0) + 1
        ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
        return [Tag(tag_name=name, count=count) for name, count in ordered]

    def load_vault(self, vault_path: str | Path) -> int:
        """
        Load every Markdown file under ``vault_path`` into the store.

        Returns the number of notes added. Files that fail to parse or whose id
        is already present are skipped with a warning.
        """
        base = Path(vault_path).expanduser().resolve()
        if not base.is_dir():
            raise ValueError(f"Vault path is not a directory: {base}")

        loaded = 0
        for file_path in sorted(base.rglob("*.md")):
            if not file_path.is_file():
                continue
            relative_path = file_path.relative_to(base)
            try:
                note = self._read_vault_note(file_path, relative_path)
            except Exception as exc:
                logger.warning("Failed to read note %s: %s", file_path, exc)
                continue
            if note.id in self:
                logger.warning("Duplicate note id %s in %s, skipping", note.id, file_path)
                continue
            self.add_note(note)
            loaded += 1

        logger.info("Vault loaded", extra={"vault_path": str(base), "note_count": loaded})
        return loaded

    def _read_vault_note(self, file_path: Path, relative_path: Path) -> Note:
        post = frontmatter.load(file_path)
        metadata = dict(post.metadata or {})
        body = post.content or ""

        modified = datetime.fromtimestamp(file_path.stat().st_mtime, tz=timezone.utc)
        created_at = _parse_timestamp(metadata.get("created"), modified)
        updated_at = _parse_timestamp(metadata.get("updated"), modified)

        default_id = relative_path.with_suffix("").as_posix()
        parent = relative_path.parent.as_posix()
        folder_id = metadata.get("folder_id") or (parent if parent != "." else None)

        return Note(
            id=str(metadata.get("id") or default_id),
            title=_derive_title(relative_path, metadata, body),
            content=body,
            tags=metadata.get("tags"),
            folder_id=str(folder_id) if folder_id else None,
            is_daily_note=bool(metadata.get("is_daily_note", False)),
            properties={
                key: value
                for key, value in metadata.items()
                if key not in RESERVED_FRONTMATTER_KEYS
            },
            created_at=created_at,
            updated_at=max(updated_at, created_at),
        )


__all__ = ["NoteStore", "NoteNotFoundError"]
