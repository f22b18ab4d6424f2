#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Heading renderer - hierarchical numbering and heading-N styles.
"""

from bs4 import BeautifulSoup, NavigableString, Tag

from ...formatting.style_engine import RenderContext

HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]


def _apply_template(heading: Tag, template: str, number: str) -> None:
    """
    Rewrite heading text from its level template.

    When the template contains {content} the heading's own children are
    kept in place (inline markup survives) and the template text around
    {content} is added before and after them.
    """
    if "{content}" not in template:
        heading.string = template.replace("{n}", number)
        return
    before, after = template.replace("{n}", number).split("{content}", 1)
    after = after.replace("{content}", heading.get_text())
    if before:
        heading.insert(0, NavigableString(before))
    if after:
        heading.append(NavigableString(after))


def number_headings(soup: BeautifulSoup, ctx: RenderContext) -> int:
    """Count every heading and apply enabled level templates."""
    headings = soup.find_all(HEADING_TAGS)
    for heading in headings:
        level = int(heading.name[1])
        ctx.remember_text(heading)
        number = ctx.headings.advance(level)
        template = ctx.headings.template_for(level)
        if template:
            _apply_template(heading, template, number)
    return len(headings)


def style_headings(soup: BeautifulSoup, ctx: RenderContext) -> int:
    headings = soup.find_all(HEADING_TAGS)
    for heading in headings:
        level = int(heading.name[1])
        element_id = ctx.generate_id(f"h{level}", ctx.text_of(heading))
        ctx.style(heading, f"heading-{level}", element_id)
    return len(headings)
