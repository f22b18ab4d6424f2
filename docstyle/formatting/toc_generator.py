#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Table of Contents Generator - dot-leader TOC pages from headings.

Provides:
- TOC items from a Markdown source (raw heading text, so the TOC renders
  inline LaTeX itself and never repeats body numbering prefixes)
- Heading -> page mapping from the paginator's element -> page map
- Flat HTML (one top-level div per line) that the paginator can split

TOC numbers come from the TOC's own counters. They are not shared with
body heading numbering and can disagree with it (e.g. body numbering off,
TOC numbering on).
"""

import html
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from bs4 import BeautifulSoup, Tag

from config.constants import (
    BASE_FONT_FAMILY,
    MM_TO_PX,
    TOC_DOT_CHAR,
    TOC_DOT_COUNT,
    TOC_DOT_LETTER_SPACING_EM,
)
from config.settings import settings
from ..rendering.formula_renderer import FormulaRenderer, render_formulas_in_text
from ..rendering.markdown_parser import markdown_to_soup
from ..rendering.preprocessor import preprocess_markdown
from .profile import TableOfContentsSettings
from .style_engine import format_number
from .utils.constants import HEADING_LEVELS

logger = logging.getLogger(__name__)

HEADING_TAGS = [f"h{level}" for level in HEADING_LEVELS]


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass
class TocItem:
    """Single entry in the Table of Contents."""
    level: int                          # Heading level (1-6)
    text: str                           # Heading text (may hold inline LaTeX)
    is_manual: bool = False             # Added by hand, not from a heading
    page_number: Optional[int] = None   # Explicit page, used when unmapped

    def __repr__(self):
        indent = "  " * (self.level - 1)
        return f"{indent}[L{self.level}] {self.text}"


# =============================================================================
# COLLECTION
# =============================================================================

def collect_toc_items(markdown: str, max_level: int = 6) -> List[TocItem]:
    """TOC items for every heading of a Markdown document, in order."""
    if not markdown or not markdown.strip():
        return []
    soup = markdown_to_soup(preprocess_markdown(markdown))
    items = []
    for heading in soup.find_all(HEADING_TAGS):
        level = int(heading.name[1])
        if level <= max_level:
            items.append(TocItem(level=level, text=heading.get_text().strip()))
    return items


def _top_level_index(tag: Tag, top_level: List[Tag]) -> Optional[int]:
    node = tag
    while node is not None:
        for index, candidate in enumerate(top_level):
            if candidate is node:
                return index
        node = node.parent
    return None


def map_toc_pages(html_text: str, element_page_map: Sequence[int]) -> List[int]:
    """
    Page index of each heading in a rendered document.

    Args:
        html_text: The HTML that was paginated
        element_page_map: Top-level element index -> page index

    Returns:
        Page index per heading, in document order
    """
    soup = BeautifulSoup(html_text, "html.parser")
    top_level = [child for child in soup.contents if isinstance(child, Tag)]
    pages = []
    for heading in soup.find_all(HEADING_TAGS):
        index = _top_level_index(heading, top_level)
        if index is not None and index < len(element_page_map):
            pages.append(element_page_map[index])
        else:
            pages.append(0)
    return pages


# =============================================================================
# RENDERING
# =============================================================================

def _number_prefix(counters: List[int], level: int) -> str:
    for deeper in range(level, len(counters)):
        counters[deeper] = 0
    counters[level - 1] += 1
    return ".".join(str(max(1, c)) for c in counters[:level]) + " "


def render_table_of_contents(
    items: Sequence[TocItem],
    toc_settings: Optional[TableOfContentsSettings] = None,
    page_map: Optional[Sequence[int]] = None,
    page_offset: int = 0,
    formula_renderer: Optional[FormulaRenderer] = None,
) -> str:
    """
    Render TOC lines with dot leaders.

    Args:
        items: TOC items in document order
        toc_settings: Profile TOC settings (defaults when None)
        page_map: Item index -> page index from pagination
        page_offset: Added to mapped page indexes (front matter, TOC pages, 1-based numbering)
        formula_renderer: LaTeX renderer for item text

    Returns:
        HTML: a title div followed by one `toc-line` div per item ("" when no items)
    """
    if not items:
        return ""
    s = toc_settings or TableOfContentsSettings()
    font_size = format_number(float(s.font_size))
    indent_per_level = s.indent_per_level * MM_TO_PX
    gap_em = format_number(TOC_DOT_LETTER_SPACING_EM * 3)
    title = s.title or settings.toc_title

    lines = [
        f'<div class="toc-title" style="text-align: center; '
        f'font-size: {format_number(float(s.font_size) + 2)}pt; font-weight: bold; '
        f'margin-bottom: 16pt; font-family: {BASE_FONT_FAMILY};">{html.escape(title)}</div>'
    ]

    counters = [0] * len(HEADING_LEVELS)
    for index, item in enumerate(items):
        level = max(1, min(len(HEADING_LEVELS), item.level or 1))

        if page_map is not None and index < len(page_map):
            page = page_offset + page_map[index]
        else:
            page = item.page_number or 0
        display_page = str(page) if page > 0 else ""

        prefix = _number_prefix(counters, level) if s.numbering_enabled else ""
        indent = (level - 1) * indent_per_level if s.nesting_enabled else 0
        margin_left = f"{format_number(indent)}px" if indent > 0 else "0"

        line_style = (
            f"font-size: {font_size}pt; font-style: {s.font_style}; font-weight: {s.font_weight}; "
            f"margin-left: {margin_left}; font-family: {BASE_FONT_FAMILY}; display: flex; "
            f"align-items: flex-end; margin-bottom: 4pt; min-width: 0; overflow: hidden;"
        )
        dots_style = (
            f"flex: 1 0 2em; min-width: 2em; padding: 0 {gap_em}em 0 6px; "
            f"font-size: {font_size}pt; font-weight: {s.font_weight}; color: #333; "
            f"letter-spacing: {format_number(TOC_DOT_LETTER_SPACING_EM)}em; "
            f"overflow: hidden; white-space: nowrap;"
        )
        text = render_formulas_in_text(prefix + (item.text or ""), renderer=formula_renderer,
                                       escape_text=True)
        lines.append(
            f'<div class="toc-line" data-toc-index="{index}" style="{line_style}">'
            f'<span class="toc-text" style="flex: 0 1 auto; min-width: 0; max-width: 60%; '
            f'overflow-wrap: break-word; word-break: break-word; background: white;">{text}</span>'
            f'<span class="toc-dots" style="{dots_style}">{TOC_DOT_CHAR * TOC_DOT_COUNT}</span>'
            f'<span class="toc-page" style="flex-shrink: 0; margin-left: {gap_em}em;">{display_page}</span>'
            f'</div>'
        )

    logger.debug(f"TOC rendered: {len(items)} item(s)")
    return "\n".join(lines)
