#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Formatting Constants - heading levels, caption defaults and page sizes.
"""

# =============================================================================
# HEADINGS
# =============================================================================

HEADING_LEVELS = (1, 2, 3, 4, 5, 6)


# =============================================================================
# CAPTIONS
# =============================================================================

# Caption kinds as written in markers: [IMAGE-CAPTION: text]
CAPTION_KINDS = {
    "IMAGE": "image",
    "TABLE": "table",
    "FORMULA": "formula",
}

DEFAULT_CAPTION_FORMATS = {
    "image": "Рисунок {n} - {content}",
    "table": "Таблица {n} - {content}",
    "formula": "Формула {n} - {content}",
}


# =============================================================================
# FONTS
# =============================================================================

# Generic fallbacks appended after a profile font family
FONT_FALLBACKS = {
    "Times New Roman": "Times, serif",
    "Georgia": "serif",
    "Arial": "Helvetica, sans-serif",
    "Calibri": "sans-serif",
    "Verdana": "sans-serif",
    "Courier New": "Courier, monospace",
}


# =============================================================================
# PAGE LAYOUT
# =============================================================================

# Paper sizes in millimetres (portrait)
PAGE_SIZES_MM = {
    "A3": (297.0, 420.0),
    "A4": (210.0, 297.0),
    "A5": (148.0, 210.0),
    "Letter": (215.9, 279.4),
    "Legal": (215.9, 355.6),
}

DEFAULT_PAGE_SIZE = "A4"
DEFAULT_MARGIN_MM = 20.0


# =============================================================================
# RENDERER DEFAULTS
# =============================================================================

LIST_BULLET_MARKER = "• "
LIST_MARKER_CLASS = "list-marker"
IMAGE_DEFAULT_MAX_WIDTH = 100
TABLE_CELL_PADDING_PX = 8
TABLE_DEFAULT_BORDER = {
    "borderStyle": "solid",
    "borderWidth": 1,
    "borderColor": "#333",
}
HIGHLIGHT_DEFAULT_BACKGROUND = "#ffeb3b"
