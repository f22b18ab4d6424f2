#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Paginator - split rendered HTML into fixed-height pages.

Greedy first-fit over the top-level blocks of a document:
- blocks are never split and keep their order
- a block taller than the page gets a page of its own
- every block is placed on exactly one page (element -> page map)

Heights come from a Measurer (heuristic by default, Chromium on request).
The loop yields to the event loop between blocks, so cancelling the
awaiting task stops an in-flight pass.
"""

import asyncio
import copy
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from bs4 import BeautifulSoup, Tag

from config.constants import MEASURE_YIELD_EVERY
from .measurer import Measurer, create_measurer

logger = logging.getLogger(__name__)


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass
class PaginationResult:
    """Pages (HTML fragments) plus the top-level element -> page index map."""
    pages: List[str] = field(default_factory=lambda: [""])
    element_page_map: List[int] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)


# =============================================================================
# PACKING
# =============================================================================

class PageCursor:
    """Greedy first-fit placement, one block at a time."""

    def __init__(self, capacity: float):
        self.capacity = capacity
        self.page = 0
        self.used = 0.0
        self.has_content = False

    def place(self, height: float) -> int:
        """Page index for the next block of `height`."""
        if height > self.capacity:
            # Oversize: flush, take an exclusive page
            if self.has_content:
                self.page += 1
            page = self.page
            self.page += 1
            self.used = 0.0
            self.has_content = False
            return page
        if self.has_content and self.used + height > self.capacity:
            self.page += 1
            self.used = 0.0
        self.used += height
        self.has_content = True
        return self.page


def pack_pages(heights: Sequence[float], capacity: float) -> List[int]:
    """
    Greedy page assignment for block heights.

    Args:
        heights: Height of each block, in document order
        capacity: Page content height

    Returns:
        Page index per block (non-decreasing, starts at 0)
    """
    cursor = PageCursor(capacity)
    return [cursor.place(height) for height in heights]


def _top_level_elements(html: str) -> List[Tag]:
    soup = BeautifulSoup(html, "html.parser")
    return [node for node in soup.contents if isinstance(node, Tag)]


def _assemble_pages(elements: Sequence[Tag], page_map: Sequence[int]) -> List[str]:
    if not page_map:
        return [""]
    pages: List[List[str]] = [[] for _ in range(page_map[-1] + 1)]
    for element, page in zip(elements, page_map):
        pages[page].append(str(copy.copy(element)))
    return ["".join(parts) for parts in pages]


async def _aligned_heights(elements: List[Tag], fragments: List[str],
                           measurer: Measurer, content_width: float) -> List[float]:
    """Per-element heights; mismatched indexes are measured in isolation."""
    result = await measurer.measure(fragments, content_width)
    heights: List[float] = []
    for index, element in enumerate(elements):
        aligned = (
            index < len(result.heights)
            and (index >= len(result.tag_names) or result.tag_names[index] == element.name)
        )
        if aligned:
            heights.append(result.heights[index])
        else:
            logger.debug(f"Measurement mismatch at element {index} <{element.name}>, measuring alone")
            heights.append(await measurer.measure_one(fragments[index], content_width))
        if index % MEASURE_YIELD_EVERY == 0:
            await asyncio.sleep(0)
    return heights


# =============================================================================
# PAGINATION
# =============================================================================

async def split_into_pages(
    html: str,
    page_content_height: float,
    content_width: float,
    measurer: Optional[Measurer] = None,
) -> PaginationResult:
    """
    Split rendered HTML into pages.

    Usage:
        dims = calculate_page_dimensions(profile)
        result = await split_into_pages(html, dims.content_height, dims.content_width)
        result.pages              # HTML per page
        result.element_page_map   # top-level element index -> page index

    Args:
        html: Rendered document HTML
        page_content_height: Usable page height in px
        content_width: Usable page width in px
        measurer: Layout backend (default from settings; closed afterwards)

    Returns:
        PaginationResult
    """
    if not html or not html.strip():
        return PaginationResult(pages=[""], element_page_map=[])

    elements = _top_level_elements(html)
    if not elements:
        return PaginationResult(pages=[html], element_page_map=[])

    owns_measurer = measurer is None
    if owns_measurer:
        measurer = create_measurer()

    try:
        fragments = [str(element) for element in elements]
        heights = await _aligned_heights(elements, fragments, measurer, content_width)
    finally:
        if owns_measurer:
            await measurer.close()

    total = sum(heights)
    if total <= page_content_height:
        logger.info(f"Pagination: {len(elements)} element(s) fit on one page ({total:.0f}px)")
        return PaginationResult(pages=[html], element_page_map=[0] * len(elements))

    cursor = PageCursor(page_content_height)
    page_map: List[int] = []
    for height in heights:
        page_map.append(cursor.place(height))
        await asyncio.sleep(0)

    pages = _assemble_pages(elements, page_map)
    logger.info(
        f"Pagination: {len(elements)} element(s) -> {len(pages)} page(s), "
        f"capacity {page_content_height:.0f}px, content {total:.0f}px"
    )
    return PaginationResult(pages=pages, element_page_map=page_map)
