#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Document Renderer - Markdown + profile + overrides -> styled HTML.

Phases:
1. Parse      - preprocess, render formulas, Markdown -> DOM, restore captions
2. Structure  - number headings, wrap blocks and attach captions, list markers
3. Style      - ids and styles per entity

Structure passes run before any style pass, so style passes never depend
on sibling order: they find wrappers and captions by data-type.
Rendering is a pure function of its inputs; every call gets a fresh
RenderContext (used ids, counters) and a fresh DOM.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Set, Tuple

from bs4 import BeautifulSoup

from config.settings import settings
from ..formatting.profile import Overrides, ProfileData
from ..formatting.style_delta import find_orphaned_overrides
from ..formatting.style_engine import RenderContext
from .formula_renderer import FormulaRenderer, render_formulas_in_text
from .markdown_parser import markdown_to_soup
from .preprocessor import preprocess_markdown, restore_caption_markers
from .renderers import (
    attach_formula_captions,
    attach_image_captions,
    attach_table_captions,
    inject_list_markers,
    number_headings,
    style_blockquotes,
    style_code_blocks,
    style_formulas,
    style_headings,
    style_highlights,
    style_horizontal_rules,
    style_images,
    style_inline_code,
    style_links,
    style_ordered_lists,
    style_paragraphs,
    style_strikethrough,
    style_subscripts,
    style_superscripts,
    style_tables,
    style_task_lists,
    style_unordered_lists,
)

logger = logging.getLogger(__name__)

Pass = Tuple[str, Callable[[BeautifulSoup, RenderContext], int]]


# =============================================================================
# PASS TABLES
# =============================================================================

STRUCTURE_PASSES: List[Pass] = [
    ("heading numbering", number_headings),
    ("formula captions", attach_formula_captions),
    ("image captions", attach_image_captions),
    ("table captions", attach_table_captions),
    ("list markers", inject_list_markers),
]

STYLE_PASSES: List[Pass] = [
    ("formulas", style_formulas),
    ("paragraphs", style_paragraphs),
    ("headings", style_headings),
    ("images", style_images),
    ("unordered lists", style_unordered_lists),
    ("ordered lists", style_ordered_lists),
    ("task lists", style_task_lists),
    ("tables", style_tables),
    ("code blocks", style_code_blocks),
    ("inline code", style_inline_code),
    ("blockquotes", style_blockquotes),
    ("links", style_links),
    ("horizontal rules", style_horizontal_rules),
    ("highlight", style_highlights),
    ("superscript", style_superscripts),
    ("subscript", style_subscripts),
    ("strikethrough", style_strikethrough),
]


@dataclass
class RenderResult:
    """Rendered HTML plus what the editor needs to track overrides."""
    html: str
    used_ids: Set[str] = field(default_factory=set)
    orphaned_overrides: List[str] = field(default_factory=list)


class DocumentRenderer:
    """
    Render Markdown documents with a style profile.

    Usage:
        renderer = DocumentRenderer(profile=get_default_profile())
        html = renderer.render_html(markdown, overrides={"p-Intro": {"color": "#333"}})

        # With id bookkeeping for the editor
        result = renderer.render(markdown, overrides=overrides, selectable=True)
        result.orphaned_overrides  # override keys no element produced
    """

    def __init__(
        self,
        profile: Optional[ProfileData] = None,
        formula_renderer: Optional[FormulaRenderer] = None,
        asset_url_prefix: Optional[str] = None,
    ):
        self.profile = profile
        self.formula_renderer = formula_renderer
        self.asset_url_prefix = asset_url_prefix or settings.asset_url_prefix

    def parse(self, markdown: str) -> BeautifulSoup:
        """Phase 1: Markdown source -> DOM with caption markers in place."""
        text = preprocess_markdown(markdown)
        text = render_formulas_in_text(text, renderer=self.formula_renderer)
        soup = markdown_to_soup(text)
        restore_caption_markers(soup)
        return soup

    def render(
        self,
        markdown: str,
        overrides: Optional[Overrides] = None,
        selectable: bool = False,
        auth_token: Optional[str] = None,
    ) -> RenderResult:
        """
        Render a document.

        Args:
            markdown: Document source
            overrides: element id -> style delta
            selectable: Mark styled elements for click-to-select editing
            auth_token: Token for asset URLs (default: settings.auth_token)

        Returns:
            RenderResult (html is "" for blank input)
        """
        overrides = overrides or {}
        if not markdown or not markdown.strip():
            return RenderResult(html="")

        ctx = RenderContext(
            profile=self.profile,
            overrides=overrides,
            selectable=selectable,
            auth_token=auth_token if auth_token is not None else settings.auth_token,
            asset_url_prefix=self.asset_url_prefix,
        )
        soup = self.parse(markdown)

        for name, run in STRUCTURE_PASSES:
            count = run(soup, ctx)
            logger.debug(f"structure: {name} -> {count}")
        for name, run in STYLE_PASSES:
            count = run(soup, ctx)
            logger.debug(f"style: {name} -> {count}")

        html = soup.decode()
        logger.debug(f"Rendered {len(markdown)} chars -> {len(html)} chars, {len(ctx.used_ids)} ids")
        return RenderResult(
            html=html,
            used_ids=set(ctx.used_ids),
            orphaned_overrides=find_orphaned_overrides(overrides, ctx.used_ids),
        )

    def render_html(self, markdown: str, overrides: Optional[Overrides] = None,
                    selectable: bool = False, auth_token: Optional[str] = None) -> str:
        return self.render(markdown, overrides, selectable, auth_token).html


def render_document(
    markdown: str,
    profile: Optional[ProfileData] = None,
    overrides: Optional[Overrides] = None,
    selectable: bool = False,
    auth_token: Optional[str] = None,
    formula_renderer: Optional[FormulaRenderer] = None,
) -> str:
    """Render Markdown to styled HTML (see DocumentRenderer.render)."""
    renderer = DocumentRenderer(profile=profile, formula_renderer=formula_renderer)
    return renderer.render_html(markdown, overrides, selectable, auth_token)
