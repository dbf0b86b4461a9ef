"""Intermediate data models for the rewrite and outline pipeline"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Union


class ChunkKind(str, Enum):
    """Restrict chunks to the structural units the outliner understands"""
    frontmatter = "frontmatter"
    heading = "heading"
    paragraph = "paragraph"
    list = "list"


class ListNesting(str, Enum):
    """How a list that follows a paragraph is placed in the outline"""
    none = "none"
    paragraph = "paragraph"
    separate = "separate"


class BlockKind(str, Enum):
    """Logseq begin/end block types (https://docs.logseq.com/#/page/advanced%20commands)"""
    note = "NOTE"
    tip = "TIP"
    important = "IMPORTANT"
    caution = "CAUTION"
    warning = "WARNING"
    example = "EXAMPLE"
    quote = "QUOTE"


class TaskDateType(str, Enum):
    deadline = "deadline"
    scheduled = "scheduled"
    start = "start"
    created = "created"
    done = "done"
    cancelled = "cancelled"


@dataclass(frozen=True)
class Rule:
    """A named whole-document rewrite; rules run in a fixed order."""
    name: str
    convert: Callable[[str], str]


@dataclass
class Chunk:
    """A run of lines forming one outline block; not persisted."""
    kind:  ChunkKind
    text:  str
    level: int = 0      # number of leading '#' for headings; 0 otherwise


@dataclass(frozen=True)
class TaskDate:
    type: TaskDateType
    date: str           # YYYY-MM-DD as written in the source


@dataclass
class Task:
    """A parsed task line, re-emitted as a status line plus metadata lines."""
    indent:   str
    status:   str
    body:     str
    dates:    list[TaskDate] = field(default_factory=list)
    priority: Optional[str] = None


@dataclass
class QuoteBlock:
    """One quote or callout; children are content lines or nested blocks."""
    kind:     BlockKind
    indent:   str
    title:    Optional[str] = None
    children: list[Union[str, "QuoteBlock"]] = field(default_factory=list)
