#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Numbering Engine - hierarchical heading numbers and sequential captions.

Heading counters:
- 6 slots, one per level
- every heading resets the deeper slots and increments its own slot,
  whether or not numbering is enabled for that level
- the number is the dotted join of every slot up to the heading level,
  zeros included: "## A" before any "#" is 0.1

Caption counters are global and monotonic per kind (image, table,
formula) and advance only for elements that actually carry a caption.
"""

from typing import Dict, List, Mapping, Optional

from .profile import HeadingTemplate
from .utils.constants import HEADING_LEVELS


class HeadingNumbering:
    """
    Hierarchical heading counters for one render pass.

    Usage:
        numbering = HeadingNumbering(profile.heading_numbering.templates)
        number = numbering.advance(2)          # "1.1"
        template = numbering.template_for(2)   # "{n} {content}" or None
    """

    def __init__(self, templates: Optional[Mapping[int, HeadingTemplate]] = None):
        self.templates = dict(templates or {})
        self.counters: List[int] = [0] * len(HEADING_LEVELS)

    def advance(self, level: int) -> str:
        """Count a heading of `level` and return its dotted number."""
        index = level - 1
        for deeper in range(index + 1, len(self.counters)):
            self.counters[deeper] = 0
        self.counters[index] += 1
        return ".".join(str(c) for c in self.counters[:index + 1])

    def template_for(self, level: int) -> Optional[str]:
        """Format string for `level`, or None when numbering is disabled there."""
        template = self.templates.get(level)
        if template is None or not template.enabled or not template.format:
            return None
        return template.format


class CaptionCounters:
    """Sequential caption numbers per kind."""

    def __init__(self):
        self._counts: Dict[str, int] = {}

    def next(self, kind: str) -> int:
        self._counts[kind] = self._counts.get(kind, 0) + 1
        return self._counts[kind]


def format_caption(template: str, number: int, content: str) -> str:
    """Substitute {n} and {content} into a caption template."""
    return template.replace("{n}", str(number)).replace("{content}", content)
