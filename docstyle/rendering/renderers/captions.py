#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Caption attachment shared by the image, table and formula renderers.

A caption is the paragraph right after a block whose whole text is
`[KIND-CAPTION: text]`. Attaching it removes the marker paragraph, takes
the next number for that kind and inserts a caption div after the block.
Blocks without a caption don't consume a number.
"""

import re
from typing import Optional

from bs4 import BeautifulSoup, Tag

from ...formatting.numbering import format_caption
from ...formatting.style_engine import RenderContext
from ...formatting.utils.constants import CAPTION_KINDS, DEFAULT_CAPTION_FORMATS

CAPTION_MARKER_RE = re.compile(
    r"^\[(" + "|".join(CAPTION_KINDS) + r")-CAPTION:\s*(.+)\]$", re.DOTALL
)


def is_caption_marker(text: str) -> bool:
    return CAPTION_MARKER_RE.match(text.strip()) is not None


def match_caption(tag: Optional[Tag], kind: str) -> Optional[str]:
    """Caption text if `tag` is a caption paragraph of `kind`."""
    if tag is None or tag.name != "p":
        return None
    match = CAPTION_MARKER_RE.match(tag.get_text().strip())
    if match is None or CAPTION_KINDS[match.group(1)] != kind:
        return None
    return match.group(2).strip()


def attach_caption(soup: BeautifulSoup, ctx: RenderContext, block: Tag, kind: str) -> Optional[Tag]:
    """
    Consume the caption paragraph following `block`.

    Returns:
        The inserted caption div, or None when `block` has no caption
    """
    content = match_caption(block.find_next_sibling(), kind)
    if content is None:
        return None
    block.find_next_sibling().decompose()

    entity_type = f"{kind}-caption"
    number = ctx.captions.next(kind)
    caption_id = ctx.generate_id(entity_type, content)
    template = (
        ctx.resolve(entity_type, caption_id).get("captionFormat")
        or DEFAULT_CAPTION_FORMATS[kind]
    )

    caption = soup.new_tag("div")
    caption["id"] = caption_id
    caption["data-type"] = entity_type
    caption.string = format_caption(template, number, content)
    block.insert_after(caption)
    return caption


def style_captions(soup: BeautifulSoup, ctx: RenderContext, kind: str) -> int:
    """Apply the caption style to every caption of `kind`."""
    entity_type = f"{kind}-caption"
    captions = soup.find_all("div", attrs={"data-type": entity_type})
    for caption in captions:
        ctx.style(caption, entity_type, caption["id"])
    return len(captions)
