#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Inline renderers - links, highlight, superscript, subscript, strikethrough.

Each applies its entity style, then the usual browser-like fallback for
whatever the profile didn't specify.
"""

from typing import Iterable, List, Tuple

from bs4 import BeautifulSoup

from ...formatting.style_engine import (
    RenderContext,
    append_default_declarations,
    join_css,
    set_style_attribute,
)
from ...formatting.utils.constants import HIGHLIGHT_DEFAULT_BACKGROUND

Defaults = Iterable[Tuple[str, Iterable[str]]]

LINK_DEFAULTS = (
    ("color: #0066cc", {"color"}),
    ("text-decoration: underline", {"text-decoration"}),
)
SUPERSCRIPT_DEFAULTS = (
    ("vertical-align: super", {"vertical-align"}),
    ("font-size: 0.8em", {"font-size"}),
)
SUBSCRIPT_DEFAULTS = (
    ("vertical-align: sub", {"vertical-align"}),
    ("font-size: 0.8em", {"font-size"}),
)
STRIKETHROUGH_DEFAULTS = (
    ("text-decoration: line-through", {"text-decoration"}),
)


def _style_all(soup: BeautifulSoup, ctx: RenderContext, tags: List[str],
               entity_type: str, id_type: str, defaults: Defaults) -> int:
    elements = soup.find_all(tags)
    for element in elements:
        element_id = ctx.generate_id(id_type, element.get_text())
        css = ctx.style(element, entity_type, element_id)
        set_style_attribute(element, append_default_declarations(css, defaults))
    return len(elements)


def style_links(soup: BeautifulSoup, ctx: RenderContext) -> int:
    links = soup.find_all("a")
    for link in links:
        element_id = ctx.generate_id("link", link.get("href", "") + link.get_text())
        css = ctx.style(link, "link", element_id)
        set_style_attribute(link, append_default_declarations(css, LINK_DEFAULTS))
    return len(links)


def style_highlights(soup: BeautifulSoup, ctx: RenderContext) -> int:
    """
    <mark>: highlightColor / highlightBackgroundColor take precedence over
    color / backgroundColor; a yellow background is the fallback.
    """
    marks = soup.find_all("mark")
    for mark in marks:
        element_id = ctx.generate_id("mark", mark.get_text())
        style = ctx.resolve("highlight", element_id)
        if style.get("highlightColor"):
            style["color"] = style["highlightColor"]
        if style.get("highlightBackgroundColor"):
            style["backgroundColor"] = style["highlightBackgroundColor"]
        if not style.get("backgroundColor"):
            style["backgroundColor"] = HIGHLIGHT_DEFAULT_BACKGROUND
        css = ctx.style(mark, "highlight", element_id, style)
        set_style_attribute(mark, join_css(css, "padding: 2px 4px", "border-radius: 2px"))
    return len(marks)


def style_superscripts(soup: BeautifulSoup, ctx: RenderContext) -> int:
    return _style_all(soup, ctx, ["sup"], "superscript", "sup", SUPERSCRIPT_DEFAULTS)


def style_subscripts(soup: BeautifulSoup, ctx: RenderContext) -> int:
    return _style_all(soup, ctx, ["sub"], "subscript", "sub", SUBSCRIPT_DEFAULTS)


def style_strikethrough(soup: BeautifulSoup, ctx: RenderContext) -> int:
    return _style_all(soup, ctx, ["del", "s"], "strikethrough", "del", STRIKETHROUGH_DEFAULTS)
