"""Unit tests for core/outline/build.py"""

import pytest

from outbreak.core.models import Chunk, ChunkKind, ListNesting
from outbreak.core.outline.build import outline_chunks


def heading(text: str) -> Chunk:
    return Chunk(kind=ChunkKind.heading, text=text, level=len(text) - len(text.lstrip("#")))


def paragraph(text: str) -> Chunk:
    return Chunk(kind=ChunkKind.paragraph, text=text)


def bullets(text: str) -> Chunk:
    return Chunk(kind=ChunkKind.list, text=text)


def test_headings_nest_by_level():
    """Content nests under the nearest shallower heading."""
    chunks = [heading("# h1"), paragraph("paragraph"), heading("## h2"), paragraph("next paragraph")]
    assert outline_chunks(chunks) == "- # h1\n  - paragraph\n  - ## h2\n    - next paragraph"


def test_sibling_and_skipped_levels():
    """Equal or shallower headings pop the stack; skipped levels nest one step."""
    chunks = [
        heading("## a"), heading("#### b"), paragraph("under b"),
        heading("### c"), heading("# d"), paragraph("top"),
    ]
    assert outline_chunks(chunks) == (
        "- ## a\n"
        "  - #### b\n"
        "    - under b\n"
        "  - ### c\n"
        "- # d\n"
        "  - top"
    )


def test_paragraph_continuation_lines():
    """Continuation lines are indented past the bullet."""
    assert outline_chunks([paragraph("one\ntwo")]) == "- one\n  two"


def test_list_lines_unchanged():
    chunks = [heading("# h"), bullets("- a\n  - b")]
    assert outline_chunks(chunks) == "- # h\n  - a\n    - b"


def test_frontmatter_verbatim_then_blank():
    """Frontmatter is emitted as-is followed by a blank line."""
    chunks = [Chunk(kind=ChunkKind.frontmatter, text="---\na: b\n---"), paragraph("body")]
    assert outline_chunks(chunks) == "---\na: b\n---\n\n- body"


def test_empty_lines_in_chunk_stay_empty():
    """Blank lines inside a fenced paragraph carry no indentation."""
    chunks = [heading("# h"), paragraph("```\na\n\nb\n```")]
    assert outline_chunks(chunks) == "- # h\n  - ```\n    a\n\n    b\n    ```"


@pytest.fixture(name="nesting_chunks")
def nesting_chunks_fixture():
    return [
        heading("# h1"),
        bullets("- a\n- b\n  - c"),
        heading("## h2"),
        paragraph("paragraph"),
        bullets("- a\n- b\n  - c"),
        paragraph("paragraph"),
    ]


def test_list_nesting_none(nesting_chunks):
    assert outline_chunks(nesting_chunks, ListNesting.none) == (
        "- # h1\n"
        "  - a\n"
        "  - b\n"
        "    - c\n"
        "  - ## h2\n"
        "    - paragraph\n"
        "    - a\n"
        "    - b\n"
        "      - c\n"
        "    - paragraph"
    )


def test_list_nesting_paragraph(nesting_chunks):
    """Only the list that follows a paragraph gains a level."""
    assert outline_chunks(nesting_chunks, ListNesting.paragraph) == (
        "- # h1\n"
        "  - a\n"
        "  - b\n"
        "    - c\n"
        "  - ## h2\n"
        "    - paragraph\n"
        "      - a\n"
        "      - b\n"
        "        - c\n"
        "    - paragraph"
    )


def test_list_nesting_separate(nesting_chunks):
    """A list after a paragraph hangs under an empty placeholder bullet."""
    assert outline_chunks(nesting_chunks, "separate") == (
        "- # h1\n"
        "  - a\n"
        "  - b\n"
        "    - c\n"
        "  - ## h2\n"
        "    - paragraph\n"
        "    -\n"
        "      - a\n"
        "      - b\n"
        "        - c\n"
        "    - paragraph"
    )


def test_no_chunks():
    assert outline_chunks([]) == ""
