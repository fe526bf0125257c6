import pytest

from backend.src.services.link_parser import (
    create_block_ref,
    create_wikilink,
    extract_block_refs,
    extract_link_targets,
    extract_wikilinks,
    is_wikilink,
    normalize_slug,
    parse_link_text,
)


def test_extract_wikilinks_in_order_without_duplicates() -> None:
    content = "This is a [[note]] and another [[link to note]] and [[ note ]] again"

    assert extract_wikilinks(content) == ["note", "link to note"]


def test_extract_wikilinks_handles_empty_content() -> None:
    assert extract_wikilinks("") == []
    assert extract_wikilinks(None) == []


def test_extract_block_refs() -> None:
    assert extract_block_refs("see [[Note]]((abc123)) and ((def))") == ["abc123", "def"]


def test_extract_link_targets_keeps_block_suffix() -> None:
    content = "[[Note]]((b1)) then [[Other]] then [[Note]]((b1))"

    assert extract_link_targets(content) == [("Note", "b1"), ("Other", None)]


@pytest.mark.parametrize(
    ("link", "expected"),
    [
        ("[[Note]]", ("Note", None)),
        ("[[Note]]((block))", ("Note", "block")),
        ("Plain title", ("Plain title", None)),
    ],
)
def test_parse_link_text(link: str, expected: tuple) -> None:
    assert parse_link_text(link) == expected


def test_create_links() -> None:
    assert create_wikilink("My Note") == "[[My Note]]"
    assert create_block_ref("n1", "b1") == "[[n1]]((b1))"


def test_is_wikilink() -> None:
    assert is_wikilink("a [[b]] c")
    assert not is_wikilink("a [b] c")


@pytest.mark.parametrize(
    ("text", "slug"),
    [
        ("  Hello World!  ", "hello-world"),
        ("snake_case title", "snake-case-title"),
        ("C++ Notes (Draft)", "c-notes-draft"),
        ("", ""),
        (None, ""),
    ],
)
def test_normalize_slug(text, slug: str) -> None:
    assert normalize_slug(text) == slug
