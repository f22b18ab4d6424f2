#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Image renderer - wrappers, captions and asset token refresh.

Each <img> is wrapped in a styled div (data-type="image"). A paragraph
that holds nothing but the image is replaced by the wrapper. The caption
paragraph after the image's block becomes a numbered caption div.

Asset URLs (settings.asset_url_prefix) are authorized by a `token` query
parameter because <img> can't send headers. The token is rewritten on
every render so a stale one is never reused.
"""

import logging
from typing import Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from bs4 import BeautifulSoup, NavigableString, Tag

from ...formatting.style_engine import RenderContext, format_number
from ...formatting.utils.constants import IMAGE_DEFAULT_MAX_WIDTH
from .captions import attach_caption, style_captions

logger = logging.getLogger(__name__)

IMAGE_ALIGN_CSS = {
    "center": " margin: 0 auto;",
    "right": " margin-left: auto;",
    "left": " margin-left: 0;",
}


def refresh_asset_token(src: str, token: Optional[str], prefix: str = "/api/upload/") -> str:
    """
    Set (or drop, when there is no token) the `token` parameter of an asset URL.

    Relative URLs stay relative. Non-asset URLs are returned unchanged.
    """
    if not src or prefix not in src:
        return src
    parts = urlsplit(src)
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != "token"]
    if token:
        query.append(("token", token))
    return urlunsplit(parts._replace(query=urlencode(query)))


def _holds_only(paragraph: Tag, node: Tag) -> bool:
    for child in paragraph.contents:
        if child is node:
            continue
        if isinstance(child, NavigableString) and not child.strip():
            continue
        return False
    return True


def attach_image_captions(soup: BeautifulSoup, ctx: RenderContext) -> int:
    """Wrap images and attach their captions. Returns captions attached."""
    attached = 0
    for img in soup.find_all("img"):
        wrapper = img.wrap(soup.new_tag("div", attrs={"data-type": "image"}))
        paragraph = wrapper.find_parent("p")
        if paragraph is not None and _holds_only(paragraph, wrapper):
            paragraph.replace_with(wrapper.extract())
            block = wrapper
        else:
            block = paragraph or wrapper
        # Several images in one paragraph: the caption belongs to the last
        if block is not wrapper and block.find_all("img")[-1] is not img:
            continue
        if attach_caption(soup, ctx, block, "image") is not None:
            attached += 1
    return attached


def image_css(style: dict) -> str:
    max_width = style.get("maxWidth") or IMAGE_DEFAULT_MAX_WIDTH
    css = f"max-width: {format_number(max_width)}%; height: auto; display: block;"
    return css + IMAGE_ALIGN_CSS.get(style.get("textAlign", ""), "")


def style_images(soup: BeautifulSoup, ctx: RenderContext) -> int:
    wrappers = soup.find_all("div", attrs={"data-type": "image"})
    for wrapper in wrappers:
        img = wrapper.find("img")
        src = img.get("src", "")
        element_id = ctx.generate_id("img", src + img.get("alt", ""))
        style = ctx.resolve("image", element_id)
        ctx.style(wrapper, "image", element_id, style)
        img["style"] = image_css(style)
        refreshed = refresh_asset_token(src, ctx.auth_token, ctx.asset_url_prefix)
        if refreshed != src:
            img["src"] = refreshed
    style_captions(soup, ctx, "image")
    return len(wrappers)
