#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Formatting - profiles, style resolution, numbering, page geometry, TOC.

Stages served:
1. Style Resolution - profile entity styles + per-element override deltas
2. Numbering - heading counters and caption counters
3. Page Geometry - page box and content area for pagination
4. Table of Contents - dot-leader lines with page references
"""

from .profile import (
    EntityStyle,
    ENTITY_STYLE_KEYS,
    Overrides,
    ProfileData,
    PageSettings,
    PageMargins,
    PageNumberSettings,
    HeadingTemplate,
    HeadingNumberingSettings,
    TableOfContentsSettings,
    get_default_profile,
    load_profile,
    load_overrides,
)
from .numbering import HeadingNumbering, CaptionCounters, format_caption
from .style_engine import (
    RenderContext,
    generate_element_id,
    get_base_style,
    resolve_style,
    style_to_css,
    apply_styles,
)
from .style_delta import (
    compute_style_delta,
    is_delta_empty,
    update_override,
    find_orphaned_overrides,
)
from .page_layout import PageDimensions, Margins, calculate_page_dimensions
from .toc_generator import (
    TocItem,
    collect_toc_items,
    map_toc_pages,
    render_table_of_contents,
)

__all__ = [
    # Profile
    "EntityStyle",
    "ENTITY_STYLE_KEYS",
    "Overrides",
    "ProfileData",
    "PageSettings",
    "PageMargins",
    "PageNumberSettings",
    "HeadingTemplate",
    "HeadingNumberingSettings",
    "TableOfContentsSettings",
    "get_default_profile",
    "load_profile",
    "load_overrides",
    # Numbering
    "HeadingNumbering",
    "CaptionCounters",
    "format_caption",
    # Style engine
    "RenderContext",
    "generate_element_id",
    "get_base_style",
    "resolve_style",
    "style_to_css",
    "apply_styles",
    # Override deltas
    "compute_style_delta",
    "is_delta_empty",
    "update_override",
    "find_orphaned_overrides",
    # Page layout
    "PageDimensions",
    "Margins",
    "calculate_page_dimensions",
    # Table of contents
    "TocItem",
    "collect_toc_items",
    "map_toc_pages",
    "render_table_of_contents",
]
