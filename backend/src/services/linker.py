"""Neural linker: suggest links to notes whose titles a note mentions.

A target is suggested when its title (three characters or longer) appears as a
whole word in the note body, case-insensitively, and the body does not
already link to it as ``[[Exact Title]]`` or ``(note-id)``. Titles are escaped
before they are placed in a pattern, so ``C++ Notes (Draft)`` is matched
literally. Word boundaries are only meaningful next to word characters, so a
title ending in punctuation (``C++``) only matches when a word character follows.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Sequence, Tuple

from ..models.links import DEFAULT_LINK_CONFIDENCE, LinkSuggestion
from ..models.note import Note, NoteUpdate
from .config import AppConfig, get_config
from .link_parser import WIKILINK_PATTERN, create_wikilink
from .note_store import NoteStore

logger = logging.getLogger(__name__)

MIN_TITLE_LENGTH = 3


def title_pattern(title: str) -> re.Pattern[str]:
    """Case-insensitive whole-word pattern for a literal title."""
    return re.compile(rf"\b{re.escape(title)}\b", re.IGNORECASE)


def is_already_linked(content: str, target: Note) -> bool:
    """True when ``content`` holds ``[[target.title]]`` or ``(target.id)`` verbatim."""
    return create_wikilink(target.title) in content or f"({target.id})" in content


def suggest_links(note: Note, notes: Sequence[Note]) -> List[LinkSuggestion]:
    """Propose links from ``note`` to every other note whose title it mentions."""
    suggestions: List[LinkSuggestion] = []
    content = note.content

    for target in notes:
        if target.id == note.id:
            continue
        if len(target.title) < MIN_TITLE_LENGTH:
            continue
        if title_pattern(target.title).search(content) is None:
            continue
        if is_already_linked(content, target):
            continue
        suggestions.append(
            LinkSuggestion(
                source_id=note.id,
                target_id=target.id,
                target_title=target.title,
                confidence=DEFAULT_LINK_CONFIDENCE,
            )
        )

    logger.debug(
        "Link suggestions computed",
        extra={"note_id": note.id, "suggestion_count": len(suggestions)},
    )
    return suggestions


def _wikilink_spans(content: str) -> List[Tuple[int, int]]:
    return [match.span() for match in WIKILINK_PATTERN.finditer(content)]


def first_unlinked_mention(content: str, title: str) -> Optional[re.Match[str]]:
    """First whole-word mention of ``title`` that sits outside every ``[[...]]`` span."""
    spans = _wikilink_spans(content)
    for match in title_pattern(title).finditer(content):
        if not any(start < match.end() and match.start() < end for start, end in spans):
            return match
    return None


def apply_link(content: str, target_title: str) -> str:
    """Wrap the first unlinked mention of ``target_title`` in ``[[...]]``, keeping its casing.

    Mentions already inside a wikilink are left alone, so applying the same
    link twice never nests brackets.
    """
    match = first_unlinked_mention(content, target_title)
    if match is None:
        return content
    return content[: match.start()] + create_wikilink(match.group(0)) + content[match.end() :]


class LinkSuggestionService:
    """Suggest and accept links for notes held in a note store."""

    def __init__(self, store: NoteStore, config: Optional[AppConfig] = None) -> None:
        self.store = store
        self.config = config or get_config()

    @property
    def enabled(self) -> bool:
        return self.config.enable_link_suggestions

    def suggest_for(self, note_id: str) -> List[LinkSuggestion]:
        """Suggestions for a stored note; empty when the linker is switched off.

        Targets whose every mention already sits inside a wikilink, in any
        casing, are dropped.
        """
        note = self.store.get_note(note_id)
        if not self.enabled:
            return []
        return [
            suggestion
            for suggestion in suggest_links(note, self.store.all_notes())
            if first_unlinked_mention(note.content, suggestion.target_title) is not None
        ]

    def accept(self, note_id: str, target_id: str) -> Note:
        """Link the first mention of the target's title inside the source note."""
        if note_id == target_id:
            raise ValueError("A note cannot link to itself")
        note = self.store.get_note(note_id)
        target = self.store.get_note(target_id)

        new_content = apply_link(note.content, target.title)
        if new_content == note.content:
            raise ValueError(f"Note {note_id} has no unlinked mention of '{target.title}'")

        updated = self.store.update_note(note_id, NoteUpdate(content=new_content))
        logger.info(
            "Link suggestion accepted",
            extra={"note_id": note_id, "target_id": target_id},
        )
        return updated


__all__ = [
    "suggest_links",
    "apply_link",
    "first_unlinked_mention",
    "is_already_linked",
    "title_pattern",
    "LinkSuggestionService",
    "MIN_TITLE_LENGTH",
]
