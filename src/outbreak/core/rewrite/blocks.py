"""Quote and callout rule: '>' blocks to Logseq #+BEGIN_/#+END_ blocks"""

import re
from typing import Optional, Union

from outbreak.core.models import BlockKind, QuoteBlock, Rule
from outbreak.core.utils.fences import fenced_lines


CALLOUT_ALIASES: tuple[tuple[BlockKind, tuple[str, ...]], ...] = (
    (BlockKind.note,      ("note", "info", "summary", "tldr", "abstract")),
    (BlockKind.tip,       ("tip", "hint", "help", "question", "faq")),
    (BlockKind.important, ("important", "attention")),
    (BlockKind.caution,   ("caution", "todo")),
    (BlockKind.warning,   ("warning", "error", "danger", "bug", "fail", "failure", "missing")),
    (BlockKind.example,   ("example",)),
    (BlockKind.quote,     ("quote", "cite")),
)
CALLOUT_KINDS = {alias: kind for kind, aliases in CALLOUT_ALIASES for alias in aliases}

QUOTE_RE = re.compile(r'^(\s*)>')
CALLOUT_RE = re.compile(r'^\[!([\w-]+)\][+-]?\s?(.*)$')

Item = Union[str, QuoteBlock]


def callout_kind(name: str) -> BlockKind:
    """Map an Obsidian callout type onto a Logseq block type; unknown types are quotes."""
    return CALLOUT_KINDS.get(name.lower(), BlockKind.quote)


def split_quote(line: str) -> Optional[tuple[str, int, str]]:
    """Return (indent, depth, text) for a quote line, or None.

    Each '>' marker may be followed by one space; depth is the marker count.
    """
    m = QUOTE_RE.match(line)
    if not m:
        return None
    indent = m.group(1)
    rest = line[len(indent):]
    depth = 0
    while rest.startswith(">"):
        depth += 1
        rest = rest[1:]
        if rest.startswith(" "):
            rest = rest[1:]
    return indent, depth, rest.rstrip()


def parse_blocks(lines: list[str], skip: set[int] = frozenset()) -> list[Item]:
    """Group consecutive quote lines into QuoteBlock trees; other lines pass through."""
    items: list[Item] = []
    open_blocks: list[QuoteBlock] = []     # outermost first; index = depth - 1

    for i, line in enumerate(lines):
        quote = None if i in skip else split_quote(line)
        if quote is None or (open_blocks and quote[0] != open_blocks[0].indent):
            open_blocks.clear()
        if quote is None:
            items.append(line)
            continue

        indent, depth, text = quote
        if not text and depth < len(open_blocks):
            # An empty line one level up only closes the deeper blocks
            del open_blocks[depth:]
            continue
        del open_blocks[depth:]
        callout = CALLOUT_RE.match(text)
        content: Optional[str] = text
        while len(open_blocks) < depth:
            innermost = len(open_blocks) == depth - 1
            block = QuoteBlock(kind=BlockKind.quote, indent=indent)
            if innermost and callout:
                block.kind = callout_kind(callout.group(1))
                block.title = callout.group(2).strip() or None
                content = None
            (open_blocks[-1].children if open_blocks else items).append(block)
            open_blocks.append(block)
        if content is not None:
            open_blocks[-1].children.append(content)
    return items


def render_blocks(items: list[Item]) -> list[str]:
    """Flatten parsed items into lines; content lines take their block's indent."""
    lines: list[str] = []
    pending: list[tuple[Item, str]] = [(item, "") for item in reversed(items)]
    while pending:
        item, indent = pending.pop()
        if isinstance(item, str):
            lines.append(indent + item if item else "")
            continue
        lines.append(f"{item.indent}#+BEGIN_{item.kind.value}")
        if item.title:
            lines.append(f"{item.indent}**{item.title}**")
        pending.append((f"{item.indent}#+END_{item.kind.value}", ""))
        pending.extend((child, item.indent) for child in reversed(item.children))
    return lines


def convert_blocks(text: str) -> str:
    """Convert quotes and callouts; lines in fenced code are left alone."""
    lines = text.split("\n")
    return "\n".join(render_blocks(parse_blocks(lines, fenced_lines(text))))


blocks_rule = Rule(name="blocks", convert=convert_blocks)
