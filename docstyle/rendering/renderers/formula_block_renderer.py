#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Formula renderer - styling of rendered formula blocks and inline formulas.

Formula markup itself is produced before Markdown parsing (see
rendering.formula_renderer); this module wraps `.formula-block` elements,
attaches their captions and applies the formula styles.
"""

from bs4 import BeautifulSoup

from config.constants import SELECTABLE_CLASS

from ...formatting.style_engine import RenderContext, add_class, set_style_attribute, style_to_css, without_keys
from .captions import attach_caption, style_captions

FORMULA_BLOCK_CLASS = "formula-block"
FORMULA_INLINE_CLASS = "formula-inline"


def attach_formula_captions(soup: BeautifulSoup, ctx: RenderContext) -> int:
    """Wrap formula blocks and attach their captions. Returns captions attached."""
    attached = 0
    for block in soup.find_all(class_=FORMULA_BLOCK_CLASS):
        wrapper = block.wrap(soup.new_tag("div", attrs={"data-type": "formula"}))
        if attach_caption(soup, ctx, wrapper, "formula") is not None:
            attached += 1
    return attached


def style_formulas(soup: BeautifulSoup, ctx: RenderContext) -> int:
    wrappers = soup.find_all("div", attrs={"data-type": "formula"})
    for wrapper in wrappers:
        block = wrapper.find(class_=FORMULA_BLOCK_CLASS)
        element_id = ctx.generate_id("formula", block.get_text())
        style = ctx.resolve("formula", element_id)
        ctx.style(wrapper, "formula", element_id, style)
        set_style_attribute(block, style_to_css(without_keys(style)))
        if ctx.selectable:
            add_class(block, SELECTABLE_CLASS)
    style_captions(soup, ctx, "formula")

    inline = soup.find_all("span", class_=FORMULA_INLINE_CLASS)
    for span in inline:
        element_id = ctx.generate_id("formula-inline", span.get_text())
        style = without_keys(ctx.resolve("formula", element_id))
        ctx.style(span, "formula-inline", element_id, style)
    return len(wrappers) + len(inline)
