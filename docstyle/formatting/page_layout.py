#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Page Layout - page geometry for pagination and print.

Manages:
- Page sizes (A3, A4, A5, Letter, Legal) in millimetres
- Orientation (landscape swaps width and height)
- Margins, converted to CSS pixels at 96 DPI
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from config.constants import MM_TO_PX
from .profile import PageSettings, ProfileData
from .utils.constants import DEFAULT_PAGE_SIZE, PAGE_SIZES_MM

logger = logging.getLogger(__name__)


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass
class Margins:
    """Page margins in pixels."""
    top: float
    right: float
    bottom: float
    left: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "top": self.top,
            "right": self.right,
            "bottom": self.bottom,
            "left": self.left,
        }


@dataclass
class PageDimensions:
    """Page box and content area in pixels."""
    width: float
    height: float
    margins: Margins
    width_mm: float
    height_mm: float

    @property
    def content_width(self) -> float:
        return self.width - self.margins.left - self.margins.right

    @property
    def content_height(self) -> float:
        return self.height - self.margins.top - self.margins.bottom

    def to_dict(self) -> Dict[str, float]:
        return {
            "width": self.width,
            "height": self.height,
            "content_width": self.content_width,
            "content_height": self.content_height,
        }


# =============================================================================
# GEOMETRY
# =============================================================================

def mm_to_px(mm: float) -> float:
    return mm * MM_TO_PX


def page_size_mm(size: str, orientation: str = "portrait") -> Tuple[float, float]:
    """(width, height) in mm; unknown sizes fall back to A4."""
    if size not in PAGE_SIZES_MM:
        logger.warning(f"Unknown page size '{size}', using {DEFAULT_PAGE_SIZE}")
        size = DEFAULT_PAGE_SIZE
    width, height = PAGE_SIZES_MM[size]
    if orientation == "landscape":
        width, height = height, width
    return width, height


def calculate_page_dimensions(profile: Optional[ProfileData] = None) -> PageDimensions:
    """
    Page geometry for a profile.

    Usage:
        dims = calculate_page_dimensions(profile)
        result = await split_into_pages(html, dims.content_height, dims.content_width)
    """
    page = profile.page_settings if profile is not None else PageSettings()
    width_mm, height_mm = page_size_mm(page.size, page.orientation)
    margins = page.margins
    return PageDimensions(
        width=mm_to_px(width_mm),
        height=mm_to_px(height_mm),
        margins=Margins(
            top=mm_to_px(margins.top),
            right=mm_to_px(margins.right),
            bottom=mm_to_px(margins.bottom),
            left=mm_to_px(margins.left),
        ),
        width_mm=width_mm,
        height_mm=height_mm,
    )
