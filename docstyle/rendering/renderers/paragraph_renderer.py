#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Paragraph renderer.

Skipped paragraphs:
- inside <figure>
- inside list items (the list renderer owns their indentation)
- caption markers left without a block to attach to
"""

from bs4 import BeautifulSoup

from ...formatting.style_engine import RenderContext
from .captions import is_caption_marker


def style_paragraphs(soup: BeautifulSoup, ctx: RenderContext) -> int:
    styled = 0
    for paragraph in soup.find_all("p"):
        if paragraph.find_parent(["figure", "li"]) is not None:
            continue
        text = paragraph.get_text()
        if is_caption_marker(text):
            continue
        element_id = ctx.generate_id("p", text)
        ctx.style(paragraph, "paragraph", element_id)
        styled += 1
    return styled
