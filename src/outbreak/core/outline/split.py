"""Chunk splitting: group rewritten lines into outline-sized chunks"""

import re

from outbreak.core.models import Chunk, ChunkKind


HEADING_RE = re.compile(r'^#+\s')
LIST_ITEM_RE = re.compile(r'^\s*(?:-|\d+\.)\s')

FRONTMATTER_DELIMITER = "---"
FENCE = "```"
BLOCK_BEGIN = "#+BEGIN_"
BLOCK_END = "#+END_"


def heading_level(content: str) -> int:
    """Count leading '#' (e.g. '## Title' -> 2)."""
    return len(content) - len(content.lstrip('#'))


def classify(line: str) -> ChunkKind:
    if HEADING_RE.match(line):
        return ChunkKind.heading
    if LIST_ITEM_RE.match(line):
        return ChunkKind.list
    return ChunkKind.paragraph


def split_into_chunks(text: str, frontmatter: bool = True) -> list[Chunk]:
    """Split a document into frontmatter, heading, paragraph and list chunks.

    Fenced code and #+BEGIN_/#+END_ blocks are never split, even by blank
    lines. Blank lines end paragraphs; a list survives a blank line when the
    next line is another item or is indented. A leading --- that is never
    closed is ordinary text.
    """
    chunks: list[Chunk] = []
    current: list[str] = []
    kind: ChunkKind | None = None
    in_fence = False
    depth = 0
    pending_blank = False

    def _commit() -> None:
        nonlocal current, kind, pending_blank
        if current and kind is not None:
            content = "\n".join(current)
            level = heading_level(content) if kind is ChunkKind.heading else 0
            chunks.append(Chunk(kind=kind, text=content, level=level))
        current, kind, pending_blank = [], None, False

    for line in text.split("\n"):
        if kind is ChunkKind.frontmatter:
            current.append(line)
            if line == FRONTMATTER_DELIMITER:
                _commit()
            continue
        if frontmatter and not chunks and kind is None and line == FRONTMATTER_DELIMITER:
            kind = ChunkKind.frontmatter
            current.append(line)
            continue

        stripped = line.strip()
        was_inside = in_fence or depth > 0
        if stripped.startswith(FENCE):
            in_fence = not in_fence
        elif not in_fence:
            if stripped.startswith(BLOCK_BEGIN):
                depth += 1
            elif stripped.startswith(BLOCK_END):
                depth = max(depth - 1, 0)

        if was_inside and kind is not None:
            current.append(line if stripped else "")
            continue

        if not stripped:
            if kind is ChunkKind.list:
                pending_blank = True
            else:
                _commit()
            continue

        line_kind = classify(line)
        if kind is ChunkKind.list and line_kind is not ChunkKind.heading:
            if not pending_blank or line_kind is ChunkKind.list or line[0].isspace():
                current.append(line)
                pending_blank = False
                continue

        # Any list still open here ends; other kinds end on a kind change
        if kind is ChunkKind.list or (kind is not None and line_kind is not kind):
            _commit()
        kind = line_kind
        current.append(line)
        if kind is ChunkKind.heading:
            _commit()

    if kind is ChunkKind.frontmatter:
        return split_into_chunks(text, frontmatter=False)
    _commit()
    return chunks
