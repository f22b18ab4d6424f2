#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Code renderers - fenced/indented code blocks and inline code.
"""

from bs4 import BeautifulSoup

from ...formatting.style_engine import RenderContext, without_keys


def style_code_blocks(soup: BeautifulSoup, ctx: RenderContext) -> int:
    """Style the <pre> around each code block."""
    styled = 0
    for pre in soup.find_all("pre"):
        code = pre.find("code")
        if code is None:
            continue
        element_id = ctx.generate_id("code", code.get_text())
        ctx.style(pre, "code", element_id)
        styled += 1
    return styled


def style_inline_code(soup: BeautifulSoup, ctx: RenderContext) -> int:
    """Inline <code>: profile style plus a padded background chip."""
    styled = 0
    for code in soup.find_all("code"):
        if code.find_parent("pre") is not None:
            continue
        element_id = ctx.generate_id("code-inline", code.get_text())
        style = without_keys(ctx.resolve("code-inline", element_id))
        chip = "padding: 2px 4px; border-radius: 3px" if style.get("backgroundColor") else ""
        ctx.style(code, "code-inline", element_id, style, extra_css=chip)
        styled += 1
    return styled
