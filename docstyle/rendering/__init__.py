#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Rendering - Markdown to styled HTML.

Pipeline:
    Preprocessor -> Formula renderer -> Markdown parser -> structure passes -> style passes
"""

from .preprocessor import preprocess_markdown, restore_caption_markers
from .formula_renderer import FormulaRenderer, MathMLFormulaRenderer, render_formulas_in_text
from .markdown_parser import build_markdown_parser, markdown_to_soup
from .document_renderer import (
    DocumentRenderer,
    RenderResult,
    STRUCTURE_PASSES,
    STYLE_PASSES,
    render_document,
)

__all__ = [
    "preprocess_markdown",
    "restore_caption_markers",
    "FormulaRenderer",
    "MathMLFormulaRenderer",
    "render_formulas_in_text",
    "build_markdown_parser",
    "markdown_to_soup",
    "DocumentRenderer",
    "RenderResult",
    "STRUCTURE_PASSES",
    "STYLE_PASSES",
    "render_document",
]
