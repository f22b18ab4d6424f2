#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
List renderer - ordered, unordered and task lists.

Structure pass:
- Loose items (first child is a block such as <p>) get an explicit marker
  span ("• " or "{n}. ", honouring <ol start>). If any item of a list
  needs one, every item gets one and the native marker is switched off,
  so native and injected markers never mix in one list.

Style pass:
- The list element gets its entity style without textIndent
- Red line: only the first item of a top-level list is indented, from the
  paragraph textIndent (listUseParagraphTextIndent) or the list's own
  textIndent; every other item gets text-indent: 0
- Nested lists shift left by the same indent source per nesting level:
  paragraph textIndent (listUseParagraphTextIndent) or listAdditionalIndent (mm)
"""

from typing import List, Optional

from bs4 import BeautifulSoup, NavigableString, Tag

from ...formatting.style_engine import (
    RenderContext,
    format_number,
    join_css,
    set_style_attribute,
    without_keys,
)
from ...formatting.utils.constants import LIST_BULLET_MARKER, LIST_MARKER_CLASS

LIST_TAGS = ["ul", "ol"]
BLOCK_TAGS = {"p", "div", "blockquote", "pre", "table", "h1", "h2", "h3", "h4", "h5", "h6"}
MARKERS_ATTR = "data-list-markers"
TASK_LIST_ATTR = "data-task-list"


# =============================================================================
# HELPERS
# =============================================================================

def list_items(lst: Tag) -> List[Tag]:
    """Direct <li> children."""
    return lst.find_all("li", recursive=False)


def nesting_level(lst: Tag) -> int:
    """0 for a top-level list, 1 for a list inside one list item, ..."""
    return len(lst.find_parents(LIST_TAGS))


def first_block_child(item: Tag) -> Optional[Tag]:
    """First child of a loose item if it is a block element."""
    for node in item.contents:
        if isinstance(node, NavigableString):
            if node.strip():
                return None
            continue
        return node if node.name in BLOCK_TAGS else None
    return None


def is_task_list(lst: Tag) -> bool:
    return lst.name == "ul" and lst.find("input", attrs={"type": "checkbox"}) is not None


def _marker_text(lst: Tag, index: int) -> str:
    if lst.name == "ul":
        return LIST_BULLET_MARKER
    try:
        start = int(lst.get("start", 1))
    except ValueError:
        start = 1
    return f"{start + index}. "


# =============================================================================
# STRUCTURE
# =============================================================================

def inject_list_markers(soup: BeautifulSoup, ctx: RenderContext) -> int:
    """Add explicit markers to lists with loose items. Returns lists changed."""
    lists = soup.find_all(LIST_TAGS)
    for lst in lists:
        ctx.remember_text(lst)

    changed = 0
    for lst in lists:
        if is_task_list(lst):
            continue
        items = list_items(lst)
        if not any(first_block_child(item) is not None for item in items):
            continue
        for index, item in enumerate(items):
            marker = soup.new_tag("span", attrs={"class": LIST_MARKER_CLASS})
            marker.string = _marker_text(lst, index)
            target = first_block_child(item) or item
            target.insert(0, marker)
        lst[MARKERS_ATTR] = "injected"
        changed += 1
    return changed


# =============================================================================
# STYLE
# =============================================================================

def _red_line_cm(ctx: RenderContext, style: dict) -> Optional[float]:
    if style.get("listUseParagraphTextIndent"):
        return ctx.base_style("paragraph").get("textIndent")
    return style.get("textIndent")


def _nested_shift_mm(ctx: RenderContext, style: dict, level: int) -> float:
    """Left shift of a nested list: same indent source as the red line, per level."""
    if style.get("listUseParagraphTextIndent"):
        step_mm = (ctx.base_style("paragraph").get("textIndent") or 0) * 10
    else:
        step_mm = style.get("listAdditionalIndent") or 0
    return float(step_mm) * level


def _style_list(ctx: RenderContext, lst: Tag, entity_type: str, id_type: str) -> None:
    element_id = ctx.generate_id(id_type, ctx.text_of(lst))
    style = ctx.resolve(entity_type, element_id)
    extra = "list-style: none" if lst.has_attr(MARKERS_ATTR) else ""
    ctx.style(lst, entity_type, element_id, without_keys(style, ["textIndent"]), extra_css=extra)

    level = nesting_level(lst)
    red_line = _red_line_cm(ctx, style)
    shift_mm = _nested_shift_mm(ctx, style, level)

    for index, item in enumerate(list_items(lst)):
        if level == 0 and index == 0 and red_line:
            indent = f"text-indent: {format_number(float(red_line))}cm"
        else:
            indent = "text-indent: 0"
        shift = f"margin-left: {format_number(shift_mm)}mm" if shift_mm else ""
        set_style_attribute(item, join_css(indent, shift))


def style_unordered_lists(soup: BeautifulSoup, ctx: RenderContext) -> int:
    lists = soup.find_all("ul")
    for lst in lists:
        _style_list(ctx, lst, "unordered-list", "ul")
    return len(lists)


def style_ordered_lists(soup: BeautifulSoup, ctx: RenderContext) -> int:
    lists = soup.find_all("ol")
    for lst in lists:
        _style_list(ctx, lst, "ordered-list", "ol")
    return len(lists)


def style_task_lists(soup: BeautifulSoup, ctx: RenderContext) -> int:
    """Tag checkbox lists; the checkbox replaces the bullet."""
    tagged = 0
    for lst in soup.find_all("ul"):
        if not is_task_list(lst):
            continue
        lst[TASK_LIST_ATTR] = "true"
        set_style_attribute(lst, join_css(lst.get("style", ""), "list-style: none"))
        tagged += 1
    return tagged
