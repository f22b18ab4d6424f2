#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Print Layout - paginated pages -> one printable HTML document.

Features:
- @page rule sized to the profile's paper (margins live in the page frame)
- One fixed-size frame per page, page-break-after between frames
- Page number header/footer per pageNumbers ({n}, {total}, align, font)
- Optional table of contents in front of the body, with page references
  shifted by the number of TOC pages
"""

import html
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from config.constants import BASE_FONT_FAMILY, BASE_FONT_SIZE_PT, BASE_LINE_HEIGHT, MM_TO_PX, PT_TO_PX
from ..formatting.page_layout import PageDimensions, calculate_page_dimensions
from ..formatting.profile import Overrides, PageNumberSettings, ProfileData
from ..formatting.style_engine import format_number
from ..formatting.toc_generator import collect_toc_items, map_toc_pages, render_table_of_contents
from ..rendering.document_renderer import DocumentRenderer
from ..rendering.formula_renderer import FormulaRenderer
from .measurer import Measurer, create_measurer
from .paginator import split_into_pages

logger = logging.getLogger(__name__)

PAGE_NUMBER_LINE_HEIGHT = 1.2


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass
class PrintLayout:
    """Result of a full layout run."""
    html: str                                            # printable document
    pages: List[str] = field(default_factory=list)       # body pages
    toc_pages: List[str] = field(default_factory=list)   # TOC pages (front)
    element_page_map: List[int] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.toc_pages) + len(self.pages)


# =============================================================================
# GEOMETRY
# =============================================================================

def page_number_band(profile: Optional[ProfileData]) -> float:
    """Height in px reserved for the page number line (0 when disabled)."""
    numbers = _page_numbers(profile)
    if not numbers.enabled:
        return 0.0
    return numbers.font_size * PAGE_NUMBER_LINE_HEIGHT * PT_TO_PX


def page_content_height(profile: Optional[ProfileData], dims: Optional[PageDimensions] = None) -> float:
    """Content height available to the paginator after the page number band."""
    dims = dims or calculate_page_dimensions(profile)
    return dims.content_height - page_number_band(profile)


def _page_numbers(profile: Optional[ProfileData]) -> PageNumberSettings:
    return profile.page_settings.page_numbers if profile is not None else PageNumberSettings()


# =============================================================================
# DOCUMENT ASSEMBLY
# =============================================================================

def _page_number_html(numbers: PageNumberSettings, number: int, total: int,
                      dims: PageDimensions) -> str:
    text = numbers.format.replace("{n}", str(number)).replace("{total}", str(total))
    css = [
        "position: absolute",
        "left: 0",
        "right: 0",
        f"padding: 0 {format_number(dims.margins.right)}px 0 {format_number(dims.margins.left)}px",
        f"font-family: {numbers.font_family}",
        f"font-style: {numbers.font_style}",
        f"font-size: {format_number(numbers.font_size)}pt",
        f"text-align: {numbers.align}",
        "color: #000",
    ]
    if numbers.position == "top":
        css.append(f"top: {format_number(dims.margins.top)}px")
        css_class = "page-header"
    else:
        offset = numbers.bottom_offset * MM_TO_PX if numbers.bottom_offset is not None else dims.margins.bottom
        css.append(f"bottom: {format_number(offset)}px")
        css_class = "page-footer"
    return f'<div class="{css_class}" style="{"; ".join(css)};">{html.escape(text)}</div>'


def build_print_document(
    pages: List[str],
    profile: Optional[ProfileData] = None,
    first_page_number: int = 1,
    title: str = "",
) -> str:
    """
    Wrap pages into a printable HTML document.

    Args:
        pages: Page HTML fragments, in print order
        profile: Style profile (page size, margins, page numbers)
        first_page_number: Number printed on the first page
        title: <title> of the document

    Returns:
        Complete HTML document
    """
    dims = calculate_page_dimensions(profile)
    numbers = _page_numbers(profile)
    page = profile.page_settings if profile is not None else None
    width_mm, height_mm = dims.width_mm, dims.height_mm
    band = page_number_band(profile)

    padding_top = dims.margins.top + (band if numbers.enabled and numbers.position == "top" else 0)
    padding_bottom = dims.margins.bottom + (band if numbers.enabled and numbers.position != "top" else 0)
    line_height = (page.global_line_height if page and page.global_line_height else BASE_LINE_HEIGHT)

    css = (
        f"@page {{ size: {format_number(width_mm)}mm {format_number(height_mm)}mm; margin: 0; }}\n"
        "body { margin: 0; background: white; }\n"
        f".page {{ position: relative; width: {format_number(dims.width)}px; "
        f"height: {format_number(dims.height)}px; overflow: hidden; box-sizing: border-box; "
        "page-break-after: always; break-after: page; }\n"
        ".page:last-child { page-break-after: auto; break-after: auto; }\n"
        f".page-content {{ box-sizing: border-box; width: 100%; height: 100%; "
        f"padding: {format_number(padding_top)}px {format_number(dims.margins.right)}px "
        f"{format_number(padding_bottom)}px {format_number(dims.margins.left)}px; "
        f"font-family: {BASE_FONT_FAMILY}; font-size: {format_number(BASE_FONT_SIZE_PT)}pt; "
        f"line-height: {format_number(line_height)}; color: #1a1a1a; }}\n"
    )

    total = first_page_number + len(pages) - 1
    frames = []
    for index, page_html in enumerate(pages):
        number = first_page_number + index
        number_html = _page_number_html(numbers, number, total, dims) if numbers.enabled else ""
        frames.append(
            f'<div class="page" data-page-number="{number}">'
            f'<div class="page-content">{page_html}</div>{number_html}</div>'
        )

    return (
        '<!DOCTYPE html>\n<html>\n<head>\n<meta charset="utf-8">\n'
        f"<title>{html.escape(title)}</title>\n<style>\n{css}</style>\n</head>\n<body>\n"
        + "\n".join(frames)
        + "\n</body>\n</html>\n"
    )


# =============================================================================
# FULL LAYOUT
# =============================================================================

async def layout_document(
    markdown: str,
    profile: Optional[ProfileData] = None,
    overrides: Optional[Overrides] = None,
    measurer: Optional[Measurer] = None,
    include_toc: bool = False,
    auth_token: Optional[str] = None,
    formula_renderer: Optional[FormulaRenderer] = None,
    first_page_number: int = 1,
    title: str = "",
) -> PrintLayout:
    """
    Render, paginate and assemble a printable document.

    Usage:
        layout = await layout_document(markdown, profile, include_toc=True)
        Path("out.html").write_text(layout.html, encoding="utf-8")

    TOC pages go first. Body page references in the TOC are shifted by the
    number of TOC pages, so the TOC is paginated twice (once to count its
    pages, once with final numbers).
    """
    renderer = DocumentRenderer(profile=profile, formula_renderer=formula_renderer)
    body_html = renderer.render_html(markdown, overrides=overrides, auth_token=auth_token)

    dims = calculate_page_dimensions(profile)
    height = page_content_height(profile, dims)
    width = dims.content_width

    owns_measurer = measurer is None
    if owns_measurer:
        measurer = create_measurer()

    try:
        body = await split_into_pages(body_html, height, width, measurer=measurer)

        toc_pages: List[str] = []
        items = collect_toc_items(markdown) if include_toc else []
        if items:
            toc_settings = profile.table_of_contents if profile is not None else None
            page_map = map_toc_pages(body_html, body.element_page_map)
            draft = render_table_of_contents(items, toc_settings, page_map, first_page_number,
                                             formula_renderer)
            toc_count = (await split_into_pages(draft, height, width, measurer=measurer)).page_count
            toc_html = render_table_of_contents(items, toc_settings, page_map,
                                                first_page_number + toc_count, formula_renderer)
            toc_pages = (await split_into_pages(toc_html, height, width, measurer=measurer)).pages
    finally:
        if owns_measurer:
            await measurer.close()

    document = build_print_document(toc_pages + body.pages, profile, first_page_number, title)
    logger.info(f"Print layout: {len(toc_pages)} TOC page(s) + {body.page_count} body page(s)")
    return PrintLayout(
        html=document,
        pages=body.pages,
        toc_pages=toc_pages,
        element_page_map=body.element_page_map,
    )
