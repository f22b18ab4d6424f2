#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Table renderer - wrapper, cell borders and captions.
"""

from bs4 import BeautifulSoup

from ...formatting.style_engine import RenderContext, format_number, join_css, style_to_css, without_keys
from ...formatting.utils.constants import TABLE_CELL_PADDING_PX, TABLE_DEFAULT_BORDER
from .captions import attach_caption, style_captions

BORDER_KEYS = ("borderWidth", "borderColor", "borderStyle")


def attach_table_captions(soup: BeautifulSoup, ctx: RenderContext) -> int:
    """Wrap tables and attach their captions. Returns captions attached."""
    attached = 0
    for table in soup.find_all("table"):
        wrapper = table.wrap(soup.new_tag("div", attrs={"data-type": "table"}))
        if attach_caption(soup, ctx, wrapper, "table") is not None:
            attached += 1
    return attached


def cell_css(style: dict) -> str:
    width = style.get("borderWidth") or TABLE_DEFAULT_BORDER["borderWidth"]
    border_style = style.get("borderStyle") or TABLE_DEFAULT_BORDER["borderStyle"]
    color = style.get("borderColor") or TABLE_DEFAULT_BORDER["borderColor"]
    return f"border: {format_number(width)}px {border_style} {color}; padding: {TABLE_CELL_PADDING_PX}px;"


def style_tables(soup: BeautifulSoup, ctx: RenderContext) -> int:
    wrappers = soup.find_all("div", attrs={"data-type": "table"})
    for wrapper in wrappers:
        table = wrapper.find("table")
        element_id = ctx.generate_id("table", table.get_text())
        style = ctx.resolve("table", element_id)

        # Borders belong to the cells, margins to the wrapper
        ctx.style(wrapper, "table", element_id, without_keys(style, BORDER_KEYS))
        table["style"] = join_css(
            style_to_css(without_keys(style)),
            "border-collapse: collapse",
            "width: 100%",
        )
        css = cell_css(style)
        for cell in table.find_all(["th", "td"]):
            # Column alignment from the Markdown table is kept
            cell["style"] = join_css(cell.get("style", ""), css)
    style_captions(soup, ctx, "table")
    return len(wrappers)
