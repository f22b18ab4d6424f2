#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Blockquote and horizontal rule renderers.

Both append fallback CSS only for properties the profile left unset.
"""

from bs4 import BeautifulSoup

from ...formatting.style_engine import RenderContext, append_default_declarations, set_style_attribute

BORDER_PROPERTIES = {"border", "border-left", "border-top", "border-width", "border-style", "border-color"}
MARGIN_PROPERTIES = {"margin", "margin-top", "margin-bottom"}

BLOCKQUOTE_DEFAULTS = (
    ("border-left: 3px solid #ccc", BORDER_PROPERTIES),
    ("padding-left: 1em", {"padding-left"}),
    ("margin: 1em 0", MARGIN_PROPERTIES),
)

HORIZONTAL_RULE_DEFAULTS = (
    ("border: none", BORDER_PROPERTIES),
    ("border-top: 1px solid #ccc", BORDER_PROPERTIES),
    ("margin: 1em 0", MARGIN_PROPERTIES),
)


def style_blockquotes(soup: BeautifulSoup, ctx: RenderContext) -> int:
    quotes = soup.find_all("blockquote")
    for quote in quotes:
        element_id = ctx.generate_id("blockquote", quote.get_text())
        css = ctx.style(quote, "blockquote", element_id)
        set_style_attribute(quote, append_default_declarations(css, BLOCKQUOTE_DEFAULTS))
    return len(quotes)


def style_horizontal_rules(soup: BeautifulSoup, ctx: RenderContext) -> int:
    rules = soup.find_all("hr")
    for rule in rules:
        element_id = ctx.generate_id("hr", f"hr-{len(ctx.used_ids)}")
        css = ctx.style(rule, "horizontal-rule", element_id)
        set_style_attribute(rule, append_default_declarations(css, HORIZONTAL_RULE_DEFAULTS))
    return len(rules)
