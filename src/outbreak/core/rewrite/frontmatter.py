"""Frontmatter rule: YAML header to Logseq page properties"""

import logging
import re
from typing import Any, Union

import yaml

from outbreak.core.errors import FrontmatterError
from outbreak.core.models import Rule


logger = logging.getLogger(__name__)

FRONTMATTER_RE = re.compile(r'^---\n(?:(.*?)\n)?---(?:\n|$)', re.DOTALL)

RENAMED_KEYS = {"aliases": "alias", "tag": "tags"}
DROPPED_KEYS = {"title"}
LINKED_KEYS = {"created"}

PropertyValue = Union[str, list[str]]


def parse_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter, body); ({}, text) when there is no leading --- block.

    Uses the failsafe BaseLoader so dates, numbers and booleans stay strings.
    """
    m = FRONTMATTER_RE.match(text)
    if not m:
        return {}, text
    try:
        data = yaml.load(m.group(1) or "", Loader=yaml.BaseLoader)
    except yaml.YAMLError as e:
        raise FrontmatterError(f"Invalid YAML frontmatter: {e}") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontmatterError(f"Invalid YAML frontmatter: expected a mapping, got {type(data).__name__}")
    return data, text[m.end():]


def _values(key: str, value: Any) -> list[str]:
    if isinstance(value, dict):
        raise FrontmatterError(f"Unsupported nested mapping for property '{key}'")
    if isinstance(value, list):
        if any(isinstance(v, (dict, list)) for v in value):
            raise FrontmatterError(f"Unsupported nested value for property '{key}'")
        return [v for v in value if v.strip()]
    return [value] if value.strip() else []


def rename_properties(frontmatter: dict[str, Any]) -> dict[str, PropertyValue]:
    """Map Obsidian property names and values onto Logseq ones, skipping empty entries."""
    properties: dict[str, PropertyValue] = {}
    for key, value in frontmatter.items():
        key = str(key)
        if key in DROPPED_KEYS:
            continue
        name = RENAMED_KEYS.get(key) or re.sub(r'\s+', "-", key.strip())
        values = _values(key, value)
        if not values:
            continue
        if name in LINKED_KEYS:
            values = [f"[[{v}]]" for v in values]

        if name in properties:                      # e.g. both tag and tags
            existing = properties[name]
            values = (existing if isinstance(existing, list) else [existing]) + values
        properties[name] = values if isinstance(value, list) or len(values) > 1 else values[0]
    return properties


def format_properties(properties: dict[str, PropertyValue]) -> list[str]:
    return [
        f"{name}:: {', '.join(value) if isinstance(value, list) else value}"
        for name, value in properties.items()
    ]


def extract_properties(text: str) -> tuple[list[str], str]:
    """Return (property lines, body) for a document."""
    frontmatter, body = parse_frontmatter(text)
    properties = format_properties(rename_properties(frontmatter))
    if frontmatter and not properties:
        logger.debug("frontmatter had no convertible properties")
    return properties, body


def convert_frontmatter(text: str) -> str:
    """Replace a leading frontmatter block with `key:: value` property lines."""
    if not FRONTMATTER_RE.match(text):
        return text
    properties, body = extract_properties(text)
    if not properties:
        return body
    return "\n".join(properties) + "\n" + body


frontmatter_rule = Rule(name="frontmatter", convert=convert_frontmatter)
