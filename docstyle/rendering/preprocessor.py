#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Markdown Preprocessor - rewrite extension syntax before parsing.

In this order:
1. ^^text^^ -> <sup>text</sup>
2. ~~text~~ -> <del>text</del>
3. [IMAGE|TABLE|FORMULA-CAPTION: text] -> <x-caption type=".." text="..">

Caption markers travel through the Markdown parser as an inline HTML tag
(so emphasis or link rules never touch the caption text) and are turned
back into marker text right after parsing. Marker normalization then gives
every caption its own paragraph, directly after the block it describes.
"""

import html
import logging
import re

from bs4 import BeautifulSoup, NavigableString, Tag

from ..formatting.utils.constants import CAPTION_KINDS

logger = logging.getLogger(__name__)

CAPTION_TAG = "x-caption"

_SUPERSCRIPT_RE = re.compile(r"\^\^([^^]+)\^\^")
_STRIKETHROUGH_RE = re.compile(r"~~([^~]+)~~")
_CAPTION_MARKER_RE = re.compile(r"\[(" + "|".join(CAPTION_KINDS) + r")-CAPTION:\s*([^\]]+)\]")


def _escape_attribute(value: str) -> str:
    return value.replace("&", "&amp;").replace('"', "&quot;").replace("'", "&#39;")


def _caption_tag(match: "re.Match") -> str:
    kind, text = match.group(1), match.group(2)
    return f'<{CAPTION_TAG} type="{kind}" text="{_escape_attribute(text)}"></{CAPTION_TAG}>'


def preprocess_markdown(text: str) -> str:
    """Apply the extension rewrites in their fixed order."""
    text = _SUPERSCRIPT_RE.sub(r"<sup>\1</sup>", text)
    text = _STRIKETHROUGH_RE.sub(r"<del>\1</del>", text)
    return _CAPTION_MARKER_RE.sub(_caption_tag, text)


def caption_marker_text(kind: str, text: str) -> str:
    return f"[{kind}-CAPTION: {text}]"


def _is_blank(node) -> bool:
    if isinstance(node, NavigableString):
        return not node.strip()
    return isinstance(node, Tag) and node.name == "br"


def _move_to_own_paragraph(soup: BeautifulSoup, marker: NavigableString) -> None:
    """
    Give a caption marker its own <p> right after its container.

    `![alt](a.png)` followed by a caption line parses as one paragraph;
    after this the image paragraph and the caption paragraph are siblings.
    """
    parent = marker.parent
    if isinstance(parent, Tag) and parent.name == "p":
        others = [n for n in parent.contents if n is not marker]
        if all(_is_blank(n) for n in others):
            return
        # Drop the soft break between the block content and the marker
        previous = marker.previous_sibling
        while previous is not None and _is_blank(previous):
            before = previous.previous_sibling
            previous.extract()
            previous = before
        following = list(marker.next_siblings)
        paragraph = soup.new_tag("p")
        marker.extract()
        paragraph.append(marker)
        parent.insert_after(paragraph)
        if following and not all(_is_blank(n) for n in following):
            # Text after the marker stays in a paragraph of its own
            tail = soup.new_tag("p")
            for node in following:
                tail.append(node.extract())
            paragraph.insert_after(tail)
        else:
            for node in following:
                node.extract()
        return

    paragraph = soup.new_tag("p")
    marker.replace_with(paragraph)
    paragraph.append(marker)


def restore_caption_markers(soup: BeautifulSoup) -> int:
    """
    Replace <x-caption> tags with `[TYPE-CAPTION: text]` text nodes.

    Returns:
        Number of markers restored
    """
    markers = []
    for tag in soup.find_all(CAPTION_TAG):
        # Attribute values come back entity-decoded from the parser
        text = html.unescape(tag.get("text", ""))
        marker = NavigableString(caption_marker_text(tag.get("type", ""), text))
        tag.replace_with(marker)
        markers.append(marker)

    for marker in markers:
        _move_to_own_paragraph(soup, marker)

    if markers:
        logger.debug(f"Restored {len(markers)} caption marker(s)")
    return len(markers)
