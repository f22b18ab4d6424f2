#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Markdown -> DOM conversion.

CommonMark via markdown-it-py with:
- raw HTML passthrough (formula markup, <sup>/<del>, caption tags)
- GFM tables, strikethrough and linkified URLs
- task lists (mdit-py-plugins)
- inline extensions: ^sup^, ~sub~, ==mark==

The HTML is loaded into BeautifulSoup (html.parser) for the renderers.
"""

import re
from typing import Optional

from bs4 import BeautifulSoup
from markdown_it import MarkdownIt
from markdown_it.rules_inline import StateInline
from mdit_py_plugins.tasklists import tasklists_plugin

_UNESCAPED_SPACE_RE = re.compile(r"(^|[^\\])(\\\\)*\s")
_UNESCAPE_RE = re.compile(r"\\([ \\!\"#$%&'()*+,./:;<=>?@\[\]^_`{|}~-])")


# =============================================================================
# INLINE RULES
# =============================================================================

def _single_marker_rule(marker: str, name: str, tag: str):
    """
    Build an inline rule for `marker text marker` (no unescaped spaces).

    Same scanning as the markdown-it sup/sub plugins: skip tokens until the
    closing marker so nested constructs like links are stepped over.
    """

    def rule(state: StateInline, silent: bool) -> bool:
        start = state.pos
        maximum = state.posMax
        if state.src[start] != marker or silent:
            return False
        if start + 2 >= maximum:
            return False

        state.pos = start + 1
        found = False
        while state.pos < maximum:
            if state.src[state.pos] == marker:
                found = True
                break
            state.md.inline.skipToken(state)

        if not found or start + 1 == state.pos:
            state.pos = start
            return False

        content = state.src[start + 1:state.pos]
        if _UNESCAPED_SPACE_RE.search(content):
            state.pos = start
            return False

        state.posMax = state.pos
        state.pos = start + 1

        token = state.push(f"{name}_open", tag, 1)
        token.markup = marker
        token = state.push("text", "", 0)
        token.content = _UNESCAPE_RE.sub(r"\1", content)
        token = state.push(f"{name}_close", tag, -1)
        token.markup = marker

        state.pos = state.posMax + 1
        state.posMax = maximum
        return True

    return rule


def _mark_rule(state: StateInline, silent: bool) -> bool:
    """==text== -> <mark>text</mark> (content is parsed as inline Markdown)."""
    start = state.pos
    maximum = state.posMax
    if silent or not state.src.startswith("==", start):
        return False

    end = state.src.find("==", start + 2, maximum)
    if end == -1 or end == start + 2:
        return False
    content = state.src[start + 2:end]
    if content[0].isspace() or content[-1].isspace():
        return False

    token = state.push("mark_open", "mark", 1)
    token.markup = "=="
    state.pos = start + 2
    state.posMax = end
    state.md.inline.tokenize(state)
    token = state.push("mark_close", "mark", -1)
    token.markup = "=="

    state.pos = end + 2
    state.posMax = maximum
    return True


def inline_extensions_plugin(md: MarkdownIt) -> None:
    """Register ^sup^, ~sub~ and ==mark== inline rules."""
    md.inline.ruler.after("emphasis", "sup", _single_marker_rule("^", "sup", "sup"))
    md.inline.ruler.after("sup", "sub", _single_marker_rule("~", "sub", "sub"))
    md.inline.ruler.after("sub", "mark", _mark_rule)


# =============================================================================
# PARSER
# =============================================================================

def build_markdown_parser(linkify: bool = True) -> MarkdownIt:
    md = MarkdownIt(
        "commonmark",
        {"html": True, "linkify": linkify, "breaks": False},
    ).enable("table").enable("strikethrough")
    if linkify:
        md.enable("linkify")
    md.use(tasklists_plugin)
    md.use(inline_extensions_plugin)
    return md


_MD_PARSER: Optional[MarkdownIt] = None


def get_markdown_parser() -> MarkdownIt:
    global _MD_PARSER
    if _MD_PARSER is None:
        _MD_PARSER = build_markdown_parser()
    return _MD_PARSER


def markdown_to_html(text: str) -> str:
    return get_markdown_parser().render(text)


def markdown_to_soup(text: str) -> BeautifulSoup:
    """Parse Markdown into a mutable DOM."""
    return BeautifulSoup(markdown_to_html(text), "html.parser")
