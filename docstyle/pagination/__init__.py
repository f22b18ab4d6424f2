#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Pagination - measured, non-splitting page layout for print.

Pipeline:
    rendered HTML -> Measurer (heuristic | browser) -> greedy pages -> print document
"""

from .measurer import (
    Measurer,
    MeasureResult,
    HeuristicMeasurer,
    BrowserMeasurer,
    create_measurer,
)
from .paginator import PaginationResult, PageCursor, pack_pages, split_into_pages
from .print_layout import (
    PrintLayout,
    build_print_document,
    layout_document,
    page_content_height,
)

__all__ = [
    "Measurer",
    "MeasureResult",
    "HeuristicMeasurer",
    "BrowserMeasurer",
    "create_measurer",
    "PaginationResult",
    "PageCursor",
    "pack_pages",
    "split_into_pages",
    "PrintLayout",
    "build_print_document",
    "layout_document",
    "page_content_height",
]
