"""Pipeline entry points: translate, outline, and full document conversion"""

import logging
from typing import Optional

from outbreak.config import TranslationConfig
from outbreak.core.models import ListNesting
from outbreak.core.outline.build import outline_chunks
from outbreak.core.outline.split import split_into_chunks
from outbreak.core.rewrite.frontmatter import extract_properties
from outbreak.core.rewrite.rules import body_rules, rewrite


logger = logging.getLogger(__name__)


def translate(text: str, config: Optional[TranslationConfig] = None) -> str:
    """Apply every rewrite rule, frontmatter included, without outlining."""
    return rewrite(text, config or TranslationConfig())


def outline_markdown(text: str, list_nesting: ListNesting | str = ListNesting.none) -> str:
    """Outline already-rewritten text without applying any rule."""
    chunks = split_into_chunks(text)
    logger.debug("split into %d chunk(s)", len(chunks))
    return outline_chunks(chunks, list_nesting)


def convert_document(raw_text: str, config: Optional[TranslationConfig] = None) -> str:
    """Convert one Obsidian document into a Logseq page.

    Frontmatter becomes page properties at the top; the body is rewritten,
    split into chunks and rendered as an outline.
    """
    config = config or TranslationConfig()
    text = raw_text.replace("\r\n", "\n")

    properties, body = extract_properties(text)
    body = rewrite(body, config, rules=body_rules(config))
    chunks = split_into_chunks(body)
    logger.debug("%d propert(ies), %d chunk(s)", len(properties), len(chunks))

    outline = outline_chunks(chunks, config.list_nesting)
    if properties:
        return "\n".join(properties) + "\n\n" + outline
    return outline
