"""Numbered list rule: 'N. item' to a bullet with a Logseq order-list property"""

import re

from outbreak.core.models import Rule
from outbreak.core.utils.fences import fenced_lines


NUMBERED_RE = re.compile(r'^(\s*)\d+\.\s+(.*)$')
ORDER_PROPERTY = "logseq.order-list-type:: number"


def convert_numbered_lists(text: str) -> str:
    skip = fenced_lines(text)
    out: list[str] = []
    for i, line in enumerate(text.split("\n")):
        m = None if i in skip else NUMBERED_RE.match(line)
        if m is None:
            out.append(line)
            continue
        indent, item = m.groups()
        out.append(f"{indent}- {item}")
        out.append(f"{indent}  {ORDER_PROPERTY}")
    return "\n".join(out)


numbered_lists_rule = Rule(name="numbered_lists", convert=convert_numbered_lists)
