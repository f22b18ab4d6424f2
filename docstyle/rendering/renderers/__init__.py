#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Entity renderers.

Structure functions (number_*, attach_*, inject_*) reshape the tree;
style functions (style_*) assign ids and write styles. Every function
takes (soup, ctx) and returns how many elements it handled.
"""

from .heading_renderer import number_headings, style_headings
from .paragraph_renderer import style_paragraphs
from .list_renderer import (
    inject_list_markers,
    style_unordered_lists,
    style_ordered_lists,
    style_task_lists,
)
from .image_renderer import attach_image_captions, style_images, refresh_asset_token
from .table_renderer import attach_table_captions, style_tables
from .formula_block_renderer import attach_formula_captions, style_formulas
from .code_renderer import style_code_blocks, style_inline_code
from .block_renderer import style_blockquotes, style_horizontal_rules
from .inline_renderer import (
    style_links,
    style_highlights,
    style_superscripts,
    style_subscripts,
    style_strikethrough,
)

__all__ = [
    "number_headings",
    "style_headings",
    "style_paragraphs",
    "inject_list_markers",
    "style_unordered_lists",
    "style_ordered_lists",
    "style_task_lists",
    "attach_image_captions",
    "style_images",
    "refresh_asset_token",
    "attach_table_captions",
    "style_tables",
    "attach_formula_captions",
    "style_formulas",
    "style_code_blocks",
    "style_inline_code",
    "style_blockquotes",
    "style_horizontal_rules",
    "style_links",
    "style_highlights",
    "style_superscripts",
    "style_subscripts",
    "style_strikethrough",
]
