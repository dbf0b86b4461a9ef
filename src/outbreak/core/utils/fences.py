"""Fenced code detection for the rewrite rules"""

from itertools import groupby
from typing import Callable

from markdown_it import MarkdownIt


def _make_parser() -> MarkdownIt:
    return MarkdownIt("commonmark")


def fenced_lines(text: str) -> set[int]:
    """Return 0-based indices of lines inside top-level fenced code blocks.

    Fences nested in block quotes are ignored; their lines are quote lines.
    """
    lines: set[int] = set()
    depth = 0
    for token in _make_parser().parse(text):
        if token.type == "blockquote_open":
            depth += 1
        elif token.type == "blockquote_close":
            depth -= 1
        elif token.type == "fence" and depth == 0 and token.map:
            start, end = token.map
            lines.update(range(start, end))
    return lines


def outside_fences(text: str, convert: Callable[[str], str]) -> str:
    """Apply convert to each run of lines outside fenced code; fences are kept verbatim."""
    skip = fenced_lines(text)
    if not skip:
        return convert(text)
    runs: list[str] = []
    for fenced, group in groupby(enumerate(text.split("\n")), key=lambda pair: pair[0] in skip):
        run = "\n".join(line for _, line in group)
        runs.append(run if fenced else convert(run))
    return "\n".join(runs)
