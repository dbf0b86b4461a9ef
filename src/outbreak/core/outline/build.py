"""Outline building: render chunks as a nested Logseq bullet outline"""

from outbreak.core.models import Chunk, ChunkKind, ListNesting


INDENT = "  "


def _indented(lines: list[str], indent: str, first: str = "", rest: str = "") -> list[str]:
    """Prefix each non-empty line; empty lines stay empty."""
    return [
        f"{indent}{first if i == 0 else rest}{line}" if line else ""
        for i, line in enumerate(lines)
    ]


def outline_chunks(chunks: list[Chunk], list_nesting: ListNesting | str = ListNesting.none) -> str:
    """Render chunks as bullets nested under the nearest shallower heading."""
    nesting = ListNesting(list_nesting)
    out: list[str] = []
    stack = [0]                 # open heading levels; 0 is the document root
    previous: Chunk | None = None

    for chunk in chunks:
        lines = chunk.text.split("\n")
        if chunk.kind is ChunkKind.frontmatter:
            out.extend([chunk.text, ""])

        elif chunk.kind is ChunkKind.heading:
            while len(stack) > 1 and stack[-1] >= chunk.level:
                stack.pop()
            out.append(f"{INDENT * (len(stack) - 1)}- {chunk.text}")
            stack.append(chunk.level)

        elif chunk.kind is ChunkKind.paragraph:
            out.extend(_indented(lines, INDENT * (len(stack) - 1), first="- ", rest=INDENT))

        else:
            indent = INDENT * (len(stack) - 1)
            after_paragraph = previous is not None and previous.kind is ChunkKind.paragraph
            if after_paragraph and nesting is ListNesting.separate:
                out.append(f"{indent}-")
            if after_paragraph and nesting is not ListNesting.none:
                indent += INDENT
            out.extend(_indented(lines, indent))

        previous = chunk
    return "\n".join(out)
