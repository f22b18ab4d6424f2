#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
docstyle - Markdown styling and pagination engine.

Renders author-written Markdown into styled, paginated HTML for print/PDF
export, driven by a style profile with per-element overrides.

Usage:
    from docstyle import render_document, get_default_profile

    html = render_document(markdown, profile=get_default_profile())
"""

__version__ = "1.0.0"

from .exceptions import DocstyleError, ProfileLoadError, MeasurementError
from .formatting import (
    ProfileData,
    get_default_profile,
    load_profile,
    load_overrides,
    compute_style_delta,
    update_override,
    calculate_page_dimensions,
    collect_toc_items,
    render_table_of_contents,
)
from .rendering import DocumentRenderer, RenderResult, render_document
from .pagination import (
    HeuristicMeasurer,
    BrowserMeasurer,
    split_into_pages,
    build_print_document,
    layout_document,
)

__all__ = [
    "__version__",
    "DocstyleError",
    "ProfileLoadError",
    "MeasurementError",
    "ProfileData",
    "get_default_profile",
    "load_profile",
    "load_overrides",
    "compute_style_delta",
    "update_override",
    "calculate_page_dimensions",
    "collect_toc_items",
    "render_table_of_contents",
    "DocumentRenderer",
    "RenderResult",
    "render_document",
    "HeuristicMeasurer",
    "BrowserMeasurer",
    "split_into_pages",
    "build_print_document",
    "layout_document",
]
