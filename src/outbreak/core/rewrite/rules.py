"""Ordered rewrite rule set and the rule runner"""

import logging
from typing import Optional

from outbreak.config import TranslationConfig
from outbreak.core.models import Rule
from outbreak.core.rewrite.blocks import blocks_rule
from outbreak.core.rewrite.frontmatter import frontmatter_rule
from outbreak.core.rewrite.inline import embeds_rule, highlights_rule, wikilinks_rule
from outbreak.core.rewrite.lists import numbered_lists_rule
from outbreak.core.rewrite.tasks import tasks_rule


logger = logging.getLogger(__name__)


def body_rules(config: TranslationConfig) -> list[Rule]:
    """All rules except frontmatter, in application order."""
    return [
        blocks_rule,
        tasks_rule(config.tasks),
        highlights_rule,
        wikilinks_rule,
        numbered_lists_rule,
        embeds_rule,
    ]


def build_rules(config: TranslationConfig) -> list[Rule]:
    return [frontmatter_rule, *body_rules(config)]


def rewrite(text: str, config: TranslationConfig, rules: Optional[list[Rule]] = None) -> str:
    """Apply each rule to the whole document in order."""
    for rule in build_rules(config) if rules is None else rules:
        text = rule.convert(text)
        logger.debug("applied rule %s", rule.name)
    return text
