"""Inline rules: highlights, wiki-links and embeds"""

import re
from pathlib import PurePosixPath

from outbreak.core.models import Rule
from outbreak.core.utils.fences import outside_fences


ASSET_EXTENSIONS = frozenset({
    "png", "jpg", "jpeg", "gif", "bmp", "svg", "webp", "avif",
    "mp3", "webm", "wav", "m4a", "ogg", "3gp", "flac",
    "mp4", "ogv", "mov", "mkv",
    "pdf",
})
ASSETS_DIR = "assets"

BLANK_LINE_RE = re.compile(r'\n[ \t]*\n')
EMBED_RE = re.compile(r'!\[\[([^\]\n]+)\]\]')
MEDIA_RE = re.compile(r'!\[([^\]\n]*)\]\(([^\s)]+)\)')
VIDEO_URL_RE = re.compile(r'^https?://(?:www\.|m\.)?(?:youtube\.com/watch\?v=|youtu\.be/|vimeo\.com/)\S+$')
TWEET_URL_RE = re.compile(r'^https?://(?:www\.|mobile\.)?(?:twitter\.com|x\.com)/\w+/status/\d+\S*$')


def is_escaped(text: str, pos: int) -> bool:
    """True if text[pos] is preceded by an odd number of backslashes."""
    count = 0
    pos -= 1
    while pos >= 0 and text[pos] == "\\":
        count += 1
        pos -= 1
    return count % 2 == 1


def is_asset(name: str) -> bool:
    return PurePosixPath(name).suffix.lower().lstrip(".") in ASSET_EXTENSIONS


def asset_path(name: str) -> str:
    """Assets are flattened into the graph's assets/ directory."""
    return f"{ASSETS_DIR}/{PurePosixPath(name).name}"


def _highlights(text: str) -> str:
    text = text.replace("====", "^^^^").replace("===", "^^^")
    out: list[str] = []
    i = 0
    while (start := text.find("==", i)) != -1:
        out.append(text[i:start])
        end = text.find("=", start + 2)
        if end == -1 or not text.startswith("==", end) or BLANK_LINE_RE.search(text, start + 2, end):
            out.append("==")
            i = start + 2
            continue
        if is_escaped(text, start):
            out.append(text[start:end + 2])
        else:
            out.append(f"^^{text[start + 2:end]}^^")
        i = end + 2
    out.append(text[i:])
    return "".join(out)


def convert_highlights(text: str) -> str:
    """'==X==' -> '^^X^^'; escaped markers, unterminated markers and code are kept.

    A highlight may span lines but never a blank line.
    """
    return outside_fences(text, _highlights)


def _convert_link(text: str, start: int, inner: str) -> str:
    link = f"[[{inner}]]"
    if (start > 0 and text[start - 1] == "!") or is_escaped(text, start):
        return link
    page, sep, alias = inner.partition("|")
    if not sep or not page or not alias:
        return link
    if page == alias:
        return f"[[{page}]]"
    if is_asset(page):
        return f"[{alias}]({asset_path(page)})"
    return f"[{alias}]([[{page}]])"


def _wikilinks(text: str) -> str:
    out: list[str] = []
    i = 0
    while (start := text.find("[[", i)) != -1:
        close = text.find("]", start + 2)
        inner = text[start + 2:close]
        if close == -1 or not text.startswith("]]", close) or "\n" in inner:
            out.append(text[i:start + 2])
            i = start + 2
            continue
        out.append(text[i:start])
        out.append(_convert_link(text, start, inner))
        i = close + 2
    out.append(text[i:])
    return "".join(out)


def convert_wikilinks(text: str) -> str:
    """'[[page|alias]]' -> '[alias]([[page]])'; embeds are left to convert_embeds."""
    return outside_fences(text, _wikilinks)


def _embed(m: re.Match) -> str:
    if is_escaped(m.string, m.start()):
        return m.group(0)
    target, _, alias = m.group(1).partition("|")
    if is_asset(target):
        return f"![{alias or target}]({asset_path(target)})"
    return f"{{{{embed [[{target}]]}}}}"


def _media(m: re.Match) -> str:
    url = m.group(2)
    if is_escaped(m.string, m.start()):
        return m.group(0)
    if VIDEO_URL_RE.match(url):
        return f"{{{{video {url}}}}}"
    if TWEET_URL_RE.match(url):
        return f"{{{{tweet {url}}}}}"
    return m.group(0)


def convert_embeds(text: str) -> str:
    """Asset/page embeds and video/tweet image links to Logseq macros."""
    return outside_fences(text, lambda run: MEDIA_RE.sub(_media, EMBED_RE.sub(_embed, run)))


highlights_rule = Rule(name="highlights", convert=convert_highlights)
wikilinks_rule = Rule(name="wikilinks", convert=convert_wikilinks)
embeds_rule = Rule(name="embeds", convert=convert_embeds)
