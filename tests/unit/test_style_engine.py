"""
Unit tests for docstyle/formatting/style_engine.py and style_delta.py
"""
import pytest
from bs4 import BeautifulSoup

from docstyle.formatting.profile import PageSettings, ProfileData
from docstyle.formatting.style_delta import (
    compute_style_delta,
    find_orphaned_overrides,
    is_delta_empty,
    update_override,
)
from docstyle.formatting.style_engine import (
    RenderContext,
    append_default_declarations,
    apply_styles,
    format_font_family,
    format_number,
    generate_element_id,
    get_base_style,
    resolve_style,
    style_to_css,
)


class TestGenerateElementId:
    """Test content-derived element ids."""

    def test_sanitizes_content(self):
        assert generate_element_id("p", "Hello, world!", set()) == "p-Hello--world-"

    def test_truncates_to_50_chars(self):
        element_id = generate_element_id("p", "a" * 80, set())
        assert element_id == "p-" + "a" * 50

    def test_collisions_get_suffixes(self):
        used = set()
        ids = [generate_element_id("p", "Same", used) for _ in range(3)]
        assert ids == ["p-Same", "p-Same-1", "p-Same-2"]
        assert used == set(ids)

    def test_non_ascii_replaced(self):
        assert generate_element_id("h1", "Введение", set()) == "h1-" + "-" * 8

    def test_empty_content(self):
        assert generate_element_id("hr", "", set()) == "hr-"


class TestResolveStyle:
    """Test base style lookup and override merging."""

    @pytest.fixture
    def profile(self):
        return ProfileData(
            page_settings=PageSettings(global_line_height=2.0),
            entity_styles={
                "paragraph": {"fontSize": 14, "lineHeight": 1.5},
                "heading": {"fontWeight": "bold"},
                "heading-2": {"fontSize": 16},
            },
        )

    def test_specific_entity(self, profile):
        assert get_base_style("heading-2", profile) == {"fontSize": 16}

    def test_generic_heading_fallback(self, profile):
        assert get_base_style("heading-3", profile) == {"fontWeight": "bold"}

    def test_unknown_entity_is_empty(self, profile):
        assert get_base_style("blockquote", profile) == {}

    def test_no_profile(self):
        assert resolve_style("paragraph", "p-x", None) == {}

    def test_override_replaces_keys(self, profile):
        style = resolve_style("paragraph", "p-x", profile, {"p-x": {"fontSize": 20, "color": "red"}})
        assert style == {"fontSize": 20, "lineHeight": 1.5, "color": "red"}

    def test_override_for_other_element_ignored(self, profile):
        style = resolve_style("paragraph", "p-x", profile, {"p-y": {"fontSize": 20}})
        assert style["fontSize"] == 14

    def test_global_line_height_wins(self, profile):
        overrides = {"p-x": {"lineHeightUseGlobal": True, "lineHeight": 3}}
        style = resolve_style("paragraph", "p-x", profile, overrides)
        assert style["lineHeight"] == 2.0

    def test_base_style_not_mutated(self, profile):
        resolve_style("paragraph", "p-x", profile, {"p-x": {"fontSize": 99}})
        assert profile.entity_styles["paragraph"]["fontSize"] == 14


class TestCssEmission:
    """Test deterministic CSS output."""

    def test_units_and_order(self):
        css = style_to_css({
            "marginTop": 6,
            "fontSize": 14,
            "textIndent": 1.25,
            "lineHeight": 1.5,
            "maxWidth": 80,
        })
        assert css == "font-size: 14pt; text-indent: 1.25cm; line-height: 1.5; margin-top: 6pt; max-width: 80%"

    def test_skips_undefined_and_empty(self):
        assert style_to_css({"color": "", "fontSize": None, "fontWeight": "bold"}) == "font-weight: bold"

    def test_non_css_keys_ignored(self):
        assert style_to_css({"captionFormat": "x", "listAdditionalIndent": 5}) == ""

    def test_font_family_fallback(self):
        assert format_font_family("Times New Roman") == "'Times New Roman', Times, serif"
        assert format_font_family("Arial, sans-serif") == "Arial, sans-serif"

    def test_format_number(self):
        assert format_number(14.0) == "14"
        assert format_number(1.25) == "1.25"
        assert format_number(3) == "3"

    def test_append_default_declarations(self):
        defaults = (("color: blue", {"color"}), ("text-decoration: underline", {"text-decoration"}))
        css = append_default_declarations("color: red", defaults)
        assert css == "color: red; text-decoration: underline"

    def test_apply_styles_writes_attributes(self):
        soup = BeautifulSoup("<p>x</p>", "html.parser")
        tag = soup.p
        apply_styles(tag, "paragraph", "p-x", {"fontSize": 12}, selectable=True)
        assert tag["id"] == "p-x"
        assert tag["data-type"] == "paragraph"
        assert tag["style"] == "font-size: 12pt"
        assert "element-selectable" in tag["class"]

    def test_empty_style_has_no_style_attribute(self):
        soup = BeautifulSoup("<p>x</p>", "html.parser")
        apply_styles(soup.p, "paragraph", "p-x", {})
        assert not soup.p.has_attr("style")


class TestRenderContext:
    """Test per-render state."""

    def test_fresh_state_per_context(self):
        first = RenderContext()
        first.generate_id("p", "x")
        second = RenderContext()
        assert second.used_ids == set()

    def test_remembered_text(self):
        soup = BeautifulSoup("<h1>Title</h1>", "html.parser")
        ctx = RenderContext()
        ctx.remember_text(soup.h1)
        soup.h1.string = "1 Title"
        assert ctx.text_of(soup.h1) == "Title"


class TestStyleDelta:
    """Test override deltas."""

    def test_delta_keeps_changed_keys(self):
        delta = compute_style_delta({"fontSize": 16, "color": "red"}, {"fontSize": 14, "color": "red"})
        assert delta == {"fontSize": 16}

    def test_delta_round_trip(self):
        base = {"fontSize": 14, "color": "black", "textAlign": "left"}
        current = {"fontSize": 18, "color": "black", "textAlign": "center"}
        delta = compute_style_delta(current, base)
        merged = dict(base)
        merged.update(delta)
        assert merged == current

    def test_empty_delta(self):
        assert is_delta_empty(compute_style_delta({"a": 1}, {"a": 1}))

    def test_update_override_sets_delta(self):
        overrides = update_override({}, "p-x", {"fontSize": 16}, {"fontSize": 14})
        assert overrides == {"p-x": {"fontSize": 16}}

    def test_reverting_removes_key(self):
        base = {"fontSize": 14}
        overrides = {"p-x": {"fontSize": 16}, "p-y": {"color": "red"}}
        updated = update_override(overrides, "p-x", {"fontSize": 14}, base)
        assert "p-x" not in updated
        assert updated["p-y"] == {"color": "red"}

    def test_update_is_copy_on_write(self):
        overrides = {"p-x": {"fontSize": 16}}
        update_override(overrides, "p-x", {"fontSize": 14}, {"fontSize": 14})
        assert overrides == {"p-x": {"fontSize": 16}}

    def test_orphaned_overrides(self):
        orphans = find_orphaned_overrides({"p-b": {}, "p-a": {}, "p-kept": {}}, {"p-kept"})
        assert orphans == ["p-a", "p-b"]
