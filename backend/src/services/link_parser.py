"""Wikilink and block-reference parsing for Markdown note bodies."""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple

WIKILINK_PATTERN = re.compile(r"\[\[([^\]]+)\]\]")
BLOCK_REF_PATTERN = re.compile(r"\(\(([^\)]+)\)\)")


def normalize_slug(text: str | None) -> str:
    """Normalize text into a slug suitable for wikilink matching."""
    if not text:
        return ""
    slug = text.strip().lower()
    slug = re.sub(r"[\s_]+", "-", slug)
    slug = re.sub(r"[^a-z0-9-]", "", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def extract_wikilinks(content: str | None) -> List[str]:
    """Extract wikilink text from a Markdown body, de-duplicated in order."""
    seen: Dict[str, None] = {}
    for match in WIKILINK_PATTERN.finditer(content or ""):
        link_text = match.group(1).strip()
        if link_text and link_text not in seen:
            seen[link_text] = None
    return list(seen.keys())


def extract_block_refs(content: str | None) -> List[str]:
    """Extract ``((block-id))`` references."""
    return [match.group(1) for match in BLOCK_REF_PATTERN.finditer(content or "")]


def extract_link_targets(content: str | None) -> List[Tuple[str, Optional[str]]]:
    """Return ``(title, block_id)`` pairs for every wikilink, keeping block suffixes."""
    targets: List[Tuple[str, Optional[str]]] = []
    seen = set()
    for match in WIKILINK_PATTERN.finditer(content or ""):
        title = match.group(1).strip()
        if not title:
            continue
        block_id = None
        tail = (content or "")[match.end():]
        block_match = BLOCK_REF_PATTERN.match(tail)
        if block_match:
            block_id = block_match.group(1)
        key = (title, block_id)
        if key not in seen:
            seen.add(key)
            targets.append(key)
    return targets


def parse_link_text(link: str) -> Tuple[str, Optional[str]]:
    """
    Split ``[[Note]]((block))`` into its title and optional block id.

    Brackets are optional: ``Note`` parses to ``("Note", None)``.
    """
    block_id = None
    block_match = BLOCK_REF_PATTERN.search(link)
    if block_match:
        block_id = block_match.group(1)
        link = link.replace(block_match.group(0), "")
    title = link.replace("[[", "").replace("]]", "").strip()
    return title, block_id


def create_wikilink(title: str) -> str:
    return f"[[{title}]]"


def create_block_ref(note_id: str, block_id: str) -> str:
    return f"[[{note_id}]](({block_id}))"


def is_wikilink(text: str) -> bool:
    return WIKILINK_PATTERN.search(text or "") is not None


__all__ = [
    "WIKILINK_PATTERN",
    "BLOCK_REF_PATTERN",
    "normalize_slug",
    "extract_wikilinks",
    "extract_block_refs",
    "extract_link_targets",
    "parse_link_text",
    "create_wikilink",
    "create_block_ref",
    "is_wikilink",
]
