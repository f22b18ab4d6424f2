"""
Unit tests for docstyle/formatting/profile.py
"""
import json

import pytest

from docstyle.exceptions import ProfileLoadError
from docstyle.formatting.profile import (
    ProfileData,
    get_default_profile,
    load_overrides,
    load_profile,
)


CAMEL_PROFILE = {
    "pageSettings": {
        "size": "A5",
        "orientation": "landscape",
        "margins": {"top": 15, "right": 10, "bottom": 15, "left": 30},
        "pageNumbers": {"enabled": True, "position": "top", "format": "- {n} -", "bottomOffset": 5},
        "globalLineHeight": 1.15,
    },
    "entityStyles": {"paragraph": {"fontSize": 12, "textIndent": 1}},
    "headingNumbering": {"templates": {"1": {"format": "{n}. {content}", "enabled": True}}},
    "tableOfContents": {"indentPerLevel": 7, "numberingEnabled": False, "unknownKey": 1},
}


class TestProfileData:
    """Test profile decoding."""

    def test_camel_case_wire_format(self):
        profile = ProfileData.from_dict(CAMEL_PROFILE)
        assert profile.page_settings.size == "A5"
        assert profile.page_settings.margins.left == 30
        assert profile.page_settings.page_numbers.bottom_offset == 5
        assert profile.page_settings.global_line_height == 1.15
        assert profile.heading_numbering.templates[1].enabled is True
        assert profile.table_of_contents.indent_per_level == 7

    def test_missing_sections_are_empty(self):
        profile = ProfileData.from_dict({})
        assert profile.entity_styles == {}
        assert profile.heading_numbering.templates == {}
        assert profile.page_settings.size == "A4"

    def test_round_trip(self):
        profile = ProfileData.from_dict(CAMEL_PROFILE)
        data = profile.to_dict()
        assert data["pageSettings"]["pageNumbers"]["bottomOffset"] == 5
        assert ProfileData.from_dict(data) == profile

    def test_invalid_json(self):
        with pytest.raises(ProfileLoadError):
            ProfileData.from_json("{not json")

    def test_non_object_json(self):
        with pytest.raises(ProfileLoadError):
            ProfileData.from_json("[1, 2]")

    def test_invalid_field(self):
        with pytest.raises(ProfileLoadError):
            ProfileData.from_dict({"pageSettings": {"margins": {"top": "wide"}}})


class TestLoading:
    """Test profile and override files."""

    def test_load_profile(self, temp_dir):
        path = temp_dir / "profile.json"
        path.write_text(json.dumps(CAMEL_PROFILE), encoding="utf-8")
        assert load_profile(path).entity_styles["paragraph"]["fontSize"] == 12

    def test_load_missing_profile(self, temp_dir):
        with pytest.raises(ProfileLoadError):
            load_profile(temp_dir / "nope.json")

    def test_load_overrides(self, temp_dir):
        path = temp_dir / "overrides.json"
        path.write_text(json.dumps({"p-Intro": {"color": "red"}}), encoding="utf-8")
        assert load_overrides(path) == {"p-Intro": {"color": "red"}}

    def test_overrides_must_be_object(self, temp_dir):
        path = temp_dir / "overrides.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(ProfileLoadError):
            load_overrides(path)


class TestDefaultProfile:
    """Test the built-in GOST profile."""

    def test_typography(self):
        profile = get_default_profile()
        paragraph = profile.entity_styles["paragraph"]
        assert paragraph["fontFamily"] == "Times New Roman"
        assert paragraph["fontSize"] == 14
        assert paragraph["textIndent"] == 1.25
        assert profile.page_settings.global_line_height == 1.5

    def test_caption_formats(self):
        styles = get_default_profile().entity_styles
        assert styles["image-caption"]["captionFormat"] == "Рисунок {n} - {content}"
        assert styles["table-caption"]["captionFormat"] == "Таблица {n} - {content}"

    def test_heading_numbering_off(self):
        templates = get_default_profile().heading_numbering.templates
        assert set(templates) == {1, 2, 3, 4, 5, 6}
        assert not any(t.enabled for t in templates.values())
