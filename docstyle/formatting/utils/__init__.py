#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Formatting utilities - constants.
"""

from .constants import (
    HEADING_LEVELS,
    CAPTION_KINDS,
    DEFAULT_CAPTION_FORMATS,
    FONT_FALLBACKS,
    PAGE_SIZES_MM,
    DEFAULT_PAGE_SIZE,
    DEFAULT_MARGIN_MM,
)

__all__ = [
    "HEADING_LEVELS",
    "CAPTION_KINDS",
    "DEFAULT_CAPTION_FORMATS",
    "FONT_FALLBACKS",
    "PAGE_SIZES_MM",
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_MARGIN_MM",
]
