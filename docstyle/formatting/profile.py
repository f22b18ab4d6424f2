#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Style Profile - the user-editable description of how a document looks.

A profile holds:
- Page settings (size, orientation, margins, page numbers, global line height)
- Entity styles (one flat EntityStyle per construct: paragraph, heading-1, table...)
- Heading numbering templates (per level format + enabled flag)
- Table of contents settings

Profiles arrive as camelCase JSON from the editing UI; snake_case field
names are accepted as well. Validation happens upstream, so every section
is optional and a missing section behaves as empty.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional, TypedDict, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from ..exceptions import ProfileLoadError
from .utils.constants import DEFAULT_MARGIN_MM, DEFAULT_PAGE_SIZE


# =============================================================================
# ENTITY STYLE
# =============================================================================

class EntityStyle(TypedDict, total=False):
    """Flat, partial style record for one construct type (units noted)."""
    fontFamily: str
    fontSize: float                  # pt
    fontWeight: str
    fontStyle: str
    textAlign: str
    textIndent: float                # cm
    lineHeight: float
    lineHeightUseGlobal: bool
    color: str
    backgroundColor: str
    highlightColor: str
    highlightBackgroundColor: str
    marginTop: float                 # pt
    marginBottom: float              # pt
    marginLeft: float                # pt
    marginRight: float               # pt
    paddingLeft: float               # pt
    listAdditionalIndent: float      # mm
    listUseParagraphTextIndent: bool
    borderWidth: float               # px
    borderColor: str
    borderStyle: str
    maxWidth: float                  # %
    captionFormat: str


ENTITY_STYLE_KEYS = tuple(EntityStyle.__annotations__)

# element id -> style delta
Overrides = Dict[str, Dict[str, Any]]


# =============================================================================
# PROFILE MODELS
# =============================================================================

class _ProfileModel(BaseModel):
    """Base model: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class PageMargins(_ProfileModel):
    """Page margins in millimetres"""
    top: float = DEFAULT_MARGIN_MM
    right: float = DEFAULT_MARGIN_MM
    bottom: float = DEFAULT_MARGIN_MM
    left: float = DEFAULT_MARGIN_MM


class PageNumberSettings(_ProfileModel):
    """Page number footer/header"""
    enabled: bool = True
    position: str = "bottom"          # top | bottom
    align: str = "center"             # left | center | right
    format: str = "{n}"
    font_size: float = 12
    font_style: str = "normal"
    font_family: str = "Times New Roman"
    bottom_offset: Optional[float] = None  # mm from the page edge


class PageSettings(_ProfileModel):
    """Paper and page-level typography"""
    size: str = DEFAULT_PAGE_SIZE
    orientation: str = "portrait"     # portrait | landscape
    margins: PageMargins = Field(default_factory=PageMargins)
    page_numbers: PageNumberSettings = Field(default_factory=PageNumberSettings)
    global_line_height: Optional[float] = None


class HeadingTemplate(_ProfileModel):
    """Numbering template for one heading level ({n}, {content})"""
    format: str = "{n} {content}"
    enabled: bool = False


class HeadingNumberingSettings(_ProfileModel):
    templates: Dict[int, HeadingTemplate] = Field(default_factory=dict)


class TableOfContentsSettings(_ProfileModel):
    """Table of contents appearance"""
    font_style: str = "normal"
    font_weight: str = "normal"
    font_size: float = 14
    indent_per_level: float = 5       # mm
    nesting_enabled: bool = True
    numbering_enabled: bool = True
    title: Optional[str] = None


class ProfileData(_ProfileModel):
    """
    Complete style profile.

    Usage:
        profile = ProfileData.from_json(text)
        style = profile.entity_styles.get("paragraph", {})
    """
    page_settings: PageSettings = Field(default_factory=PageSettings)
    entity_styles: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    heading_numbering: HeadingNumberingSettings = Field(
        default_factory=HeadingNumberingSettings
    )
    table_of_contents: TableOfContentsSettings = Field(
        default_factory=TableOfContentsSettings
    )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProfileData":
        """Build from the JSON-shaped dict sent by the editor."""
        try:
            return cls.model_validate(data or {})
        except ValidationError as e:
            raise ProfileLoadError(f"Invalid profile: {e}") from e

    @classmethod
    def from_json(cls, text: str) -> "ProfileData":
        """Build from a JSON document."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ProfileLoadError(f"Profile is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ProfileLoadError("Profile JSON must be an object")
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize back to the camelCase wire shape."""
        return self.model_dump(by_alias=True, exclude_none=True)


def load_profile(path: Union[str, Path]) -> ProfileData:
    """
    Load a profile JSON file.

    Raises:
        ProfileLoadError: If the file can't be read or decoded
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ProfileLoadError(f"Cannot read profile {path}: {e}") from e
    return ProfileData.from_json(text)


def load_overrides(path: Union[str, Path]) -> Overrides:
    """
    Load an overrides JSON file ({element_id: style delta}).

    Raises:
        ProfileLoadError: If the file can't be read or decoded
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise ProfileLoadError(f"Cannot read overrides {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ProfileLoadError(f"Overrides are not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ProfileLoadError("Overrides JSON must be an object")
    return data


# =============================================================================
# DEFAULT PROFILE (GOST)
# =============================================================================

def _text_style(font_size: float, align: str, margin_top: float,
                margin_bottom: float, **extra: Any) -> Dict[str, Any]:
    style = {
        "fontFamily": "Times New Roman",
        "fontSize": font_size,
        "fontWeight": "normal",
        "fontStyle": "normal",
        "textAlign": align,
        "lineHeight": 1.5,
        "lineHeightUseGlobal": True,
        "marginTop": margin_top,
        "marginBottom": margin_bottom,
    }
    style.update(extra)
    return style


def get_default_profile() -> ProfileData:
    """
    Default profile following GOST document conventions.

    Times New Roman 14pt, line height 1.5, 1.25cm red line, A4 with 20mm
    margins, centered page numbers at the bottom.
    """
    heading_sizes = {1: 18, 2: 16, 3: 15, 4: 14, 5: 13, 6: 12}
    heading_margins = {1: 12, 2: 10, 3: 8, 4: 6, 5: 6, 6: 6}

    entity_styles: Dict[str, Dict[str, Any]] = {
        "paragraph": _text_style(14, "justify", 0, 0, textIndent=1.25),
    }
    for level, size in heading_sizes.items():
        entity_styles[f"heading-{level}"] = _text_style(
            size,
            "center" if level <= 2 else "left",
            heading_margins[level],
            heading_margins[level],
            fontWeight="bold",
            textIndent=0,
        )
    for key in ("ordered-list", "unordered-list"):
        entity_styles[key] = _text_style(
            14, "left", 6, 6,
            textIndent=1.25,
            listAdditionalIndent=0,
            listUseParagraphTextIndent=True,
        )
    entity_styles["table"] = _text_style(
        14, "center", 6, 6,
        borderWidth=1, borderColor="#000000", borderStyle="solid",
    )
    entity_styles["image"] = {
        "textAlign": "center", "maxWidth": 100, "marginTop": 6, "marginBottom": 6,
    }
    entity_styles["formula"] = {
        "textAlign": "center", "marginTop": 6, "marginBottom": 6,
    }
    for kind, word in (("image", "Рисунок"), ("table", "Таблица"), ("formula", "Формула")):
        entity_styles[f"{kind}-caption"] = _text_style(
            14, "center", 0, 12, captionFormat=f"{word} {{n}} - {{content}}",
        )
    entity_styles["highlight"] = {
        "highlightColor": "#000000",
        "highlightBackgroundColor": "#ffeb3b",
    }
    entity_styles["code"] = {
        "fontFamily": "Courier New",
        "fontSize": 12,
        "backgroundColor": "#f5f5f5",
        "marginTop": 6,
        "marginBottom": 6,
        "lineHeight": 1.5,
        "lineHeightUseGlobal": True,
    }

    return ProfileData(
        page_settings=PageSettings(global_line_height=1.5),
        entity_styles=entity_styles,
        heading_numbering=HeadingNumberingSettings(
            templates={level: HeadingTemplate() for level in heading_sizes}
        ),
        table_of_contents=TableOfContentsSettings(),
    )
