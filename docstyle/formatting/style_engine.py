#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Style Engine - resolve entity styles and write them onto DOM elements.

- Content-derived element ids (de-duplicated per render)
- Cascading resolution: profile entity style -> generic heading -> {}
  then the per-element override delta, key by key
- Deterministic CSS emission (fixed property order, defined keys only)
- RenderContext: the per-call state every renderer receives
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set, Tuple

from bs4 import Tag

from config.constants import ELEMENT_ID_CONTENT_CHARS, SELECTABLE_CLASS
from .numbering import CaptionCounters, HeadingNumbering
from .profile import EntityStyle, Overrides, ProfileData
from .utils.constants import FONT_FALLBACKS


_ID_UNSAFE_RE = re.compile(r"[^a-z0-9]", re.IGNORECASE)
_HEADING_KEY_RE = re.compile(r"^heading-[1-6]$")

MARGIN_KEYS = ("marginTop", "marginBottom", "marginLeft", "marginRight")


# =============================================================================
# ELEMENT IDS
# =============================================================================

def generate_element_id(entity_type: str, content: str, used_ids: Set[str]) -> str:
    """
    Build a content-derived id unique within one render.

    "{type}-{first 50 chars, non [a-z0-9] replaced by '-'}", suffixed with
    -1, -2, ... on collision. The id is registered in `used_ids`.
    """
    sanitized = _ID_UNSAFE_RE.sub("-", (content or "")[:ELEMENT_ID_CONTENT_CHARS])
    base = f"{entity_type}-{sanitized}"
    element_id = base
    counter = 1
    while element_id in used_ids:
        element_id = f"{base}-{counter}"
        counter += 1
    used_ids.add(element_id)
    return element_id


# =============================================================================
# STYLE RESOLUTION
# =============================================================================

def get_base_style(entity_type: str, profile: Optional[ProfileData]) -> EntityStyle:
    """Profile style for an entity type, falling back to the generic heading."""
    if profile is None:
        return {}
    styles = profile.entity_styles
    if entity_type in styles:
        return dict(styles[entity_type])
    if _HEADING_KEY_RE.match(entity_type) and "heading" in styles:
        return dict(styles["heading"])
    return {}


def resolve_style(
    entity_type: str,
    element_id: str,
    profile: Optional[ProfileData],
    overrides: Optional[Overrides] = None,
) -> EntityStyle:
    """
    Final style for one element.

    Override keys replace base keys one by one. When the merged style asks
    for the global line height it wins over any explicit lineHeight,
    including one coming from the override.
    """
    style = get_base_style(entity_type, profile)
    if overrides and element_id in overrides:
        style.update(overrides[element_id])

    if style.get("lineHeightUseGlobal") is True and profile is not None:
        global_line_height = profile.page_settings.global_line_height
        if global_line_height is not None:
            style["lineHeight"] = global_line_height
    return style


# =============================================================================
# CSS EMISSION
# =============================================================================

def format_number(value: Any) -> str:
    """14.0 -> '14', 1.25 -> '1.25' (stable across int/float inputs)."""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return ("%.4f" % value).rstrip("0").rstrip(".")
    return str(value)


def format_font_family(family: str) -> str:
    """Quote multi-word families and append generic fallbacks."""
    if "," in family:
        return family
    quoted = f"'{family}'" if " " in family else family
    fallback = FONT_FALLBACKS.get(family)
    return f"{quoted}, {fallback}" if fallback else quoted


def _is_set(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value != ""
    return True


# (style key, css property, unit); emission order is this table's order
CSS_PROPERTIES: Sequence[Tuple[str, str, str]] = (
    ("fontFamily", "font-family", ""),
    ("fontSize", "font-size", "pt"),
    ("fontWeight", "font-weight", ""),
    ("fontStyle", "font-style", ""),
    ("textAlign", "text-align", ""),
    ("textIndent", "text-indent", "cm"),
    ("lineHeight", "line-height", ""),
    ("color", "color", ""),
    ("backgroundColor", "background-color", ""),
    ("marginTop", "margin-top", "pt"),
    ("marginBottom", "margin-bottom", "pt"),
    ("marginLeft", "margin-left", "pt"),
    ("marginRight", "margin-right", "pt"),
    ("paddingLeft", "padding-left", "pt"),
    ("borderWidth", "border-width", "px"),
    ("borderColor", "border-color", ""),
    ("borderStyle", "border-style", ""),
    ("maxWidth", "max-width", "%"),
)


def style_declarations(style: EntityStyle) -> List[str]:
    """CSS declarations for the defined keys of a style, in fixed order."""
    declarations = []
    for key, prop, unit in CSS_PROPERTIES:
        value = style.get(key)
        if not _is_set(value):
            continue
        if key == "fontFamily":
            text = format_font_family(str(value))
        else:
            text = format_number(value) + unit
        declarations.append(f"{prop}: {text}")
    return declarations


def style_to_css(style: EntityStyle) -> str:
    """Deterministic 'prop: value; prop: value' string."""
    return "; ".join(style_declarations(style))


def join_css(*parts: str) -> str:
    """Join CSS fragments, dropping empty ones and stray separators."""
    cleaned = [p.strip().strip(";").strip() for p in parts]
    return "; ".join(p for p in cleaned if p)


def css_properties(css: str) -> Set[str]:
    """Property names present in a declaration string."""
    names = set()
    for declaration in css.split(";"):
        if ":" in declaration:
            names.add(declaration.split(":", 1)[0].strip().lower())
    return names


def append_default_declarations(
    css: str, defaults: Iterable[Tuple[str, Iterable[str]]]
) -> str:
    """
    Append fallback declarations the style doesn't already cover.

    Args:
        css: Declarations emitted from the profile
        defaults: (declaration, equivalent property names) pairs; the
            declaration is added only if none of its equivalents is present

    Returns:
        Combined declaration string
    """
    present = css_properties(css)
    extra = [decl for decl, equivalents in defaults if not present.intersection(equivalents)]
    return join_css(css, *extra)


def without_keys(style: EntityStyle, keys: Iterable[str] = MARGIN_KEYS) -> EntityStyle:
    """Copy of a style with some keys removed (margins by default)."""
    dropped = set(keys)
    return {k: v for k, v in style.items() if k not in dropped}


def set_style_attribute(tag: Tag, css: str) -> None:
    if css:
        tag["style"] = css
    elif "style" in tag.attrs:
        del tag["style"]


def add_class(tag: Tag, class_name: str) -> None:
    classes = tag.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    if class_name not in classes:
        tag["class"] = list(classes) + [class_name]


def apply_styles(
    tag: Tag,
    entity_type: str,
    element_id: str,
    style: EntityStyle,
    selectable: bool = False,
    extra_css: str = "",
) -> str:
    """
    Write id, data-type, style and the selection marker onto an element.

    Returns:
        The CSS written to the style attribute
    """
    css = join_css(style_to_css(style), extra_css)
    tag["id"] = element_id
    tag["data-type"] = entity_type
    set_style_attribute(tag, css)
    if selectable:
        add_class(tag, SELECTABLE_CLASS)
    return css


# =============================================================================
# RENDER CONTEXT
# =============================================================================

@dataclass
class RenderContext:
    """
    Per-call render state. Created for one render and then discarded.

    Usage:
        ctx = RenderContext(profile=profile, overrides=overrides)
        element_id = ctx.generate_id("p", tag.get_text())
        ctx.style(tag, "paragraph", element_id)
    """
    profile: Optional[ProfileData] = None
    overrides: Overrides = field(default_factory=dict)
    selectable: bool = False
    auth_token: Optional[str] = None
    asset_url_prefix: str = "/api/upload/"
    used_ids: Set[str] = field(default_factory=set)
    captions: CaptionCounters = field(default_factory=CaptionCounters)
    headings: Optional[HeadingNumbering] = None
    # id(tag) -> text captured before a structural rewrite
    source_text: Dict[int, str] = field(default_factory=dict)

    def __post_init__(self):
        if self.headings is None:
            templates = self.profile.heading_numbering.templates if self.profile else None
            self.headings = HeadingNumbering(templates)

    def generate_id(self, entity_type: str, content: str) -> str:
        return generate_element_id(entity_type, content, self.used_ids)

    def resolve(self, entity_type: str, element_id: str) -> EntityStyle:
        return resolve_style(entity_type, element_id, self.profile, self.overrides)

    def base_style(self, entity_type: str) -> EntityStyle:
        return get_base_style(entity_type, self.profile)

    def style(self, tag: Tag, entity_type: str, element_id: str,
              style: Optional[EntityStyle] = None, extra_css: str = "") -> str:
        """Resolve (unless given) and apply a style to `tag`."""
        if style is None:
            style = self.resolve(entity_type, element_id)
        return apply_styles(tag, entity_type, element_id, style,
                            selectable=self.selectable, extra_css=extra_css)

    def remember_text(self, tag: Tag, text: Optional[str] = None) -> None:
        """Capture the text an element's id derives from, before rewriting it."""
        self.source_text.setdefault(id(tag), tag.get_text() if text is None else text)

    def text_of(self, tag: Tag) -> str:
        return self.source_text.get(id(tag), tag.get_text())
