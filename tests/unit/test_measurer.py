"""
Unit tests for docstyle/pagination/measurer.py (heuristic backend)
"""
import time

import pytest
from PIL import Image

from docstyle.pagination import measurer as measurer_module
from docstyle.pagination.measurer import (
    BrowserMeasurer,
    HeuristicMeasurer,
    create_measurer,
    css_length_px,
    parse_inline_style,
)

NO_MARGIN = "margin-top: 0pt; margin-bottom: 0pt"
LINE_PX = 14 * 96 / 72 * 1.5  # 14pt at line height 1.5


@pytest.fixture
def measurer():
    return HeuristicMeasurer(font_size_pt=14, line_height=1.5)


class TestCssHelpers:
    """Test inline style parsing."""

    def test_parse_inline_style(self):
        assert parse_inline_style("font-size: 14pt; COLOR: red;") == {"font-size": "14pt", "color": "red"}

    @pytest.mark.parametrize("value,expected", [
        ("12px", 12.0),
        ("12pt", 16.0),
        ("1em", 20.0),
        ("0", 0.0),
        ("2.54cm", 96.0),
    ])
    def test_css_length_px(self, value, expected):
        assert css_length_px(value, font_px=20) == pytest.approx(expected, rel=1e-3)

    def test_unparseable_length(self):
        assert css_length_px("auto", font_px=20, default=5) == 5


class TestHeuristicMeasurer:
    """Test the browser-free box model."""

    @pytest.mark.asyncio
    async def test_single_line_paragraph(self, measurer):
        html = f'<p style="font-size: 14pt; line-height: 1.5; {NO_MARGIN}">Short</p>'
        assert await measurer.measure_one(html, 600) == pytest.approx(LINE_PX)

    @pytest.mark.asyncio
    async def test_default_paragraph_margins(self, measurer):
        height = await measurer.measure_one("<p>Short</p>", 600)
        assert height == pytest.approx(LINE_PX + 2 * 14 * 96 / 72)

    @pytest.mark.asyncio
    async def test_wrapping(self, measurer):
        html = f'<p style="{NO_MARGIN}">{"a" * 25}</p>'
        # 9.33px glyphs, 10 per line at 100px -> 3 lines
        assert await measurer.measure_one(html, 100) == pytest.approx(3 * LINE_PX)

    @pytest.mark.asyncio
    async def test_heading_larger_than_paragraph(self, measurer):
        result = await measurer.measure(["<h1>Title</h1>", "<p>Title</p>"], 600)
        assert result.heights[0] > result.heights[1]
        assert result.tag_names == ["h1", "p"]
        assert result.total_height == pytest.approx(sum(result.heights))

    @pytest.mark.asyncio
    async def test_image_from_attributes(self, measurer):
        html = '<img src="x.png" width="400" height="200">'
        assert await measurer.measure_one(html, 200) == pytest.approx(100)

    @pytest.mark.asyncio
    async def test_missing_image_fallback(self, measurer):
        assert await measurer.measure_one('<img src="missing/none.png">', 600) == pytest.approx(200)

    @pytest.mark.asyncio
    async def test_local_image_probed(self, temp_dir):
        Image.new("RGB", (100, 50)).save(temp_dir / "pic.png")
        measurer = HeuristicMeasurer(asset_root=temp_dir)
        assert await measurer.measure_one('<div><img src="pic.png"></div>', 600) == pytest.approx(50)

    @pytest.mark.asyncio
    async def test_slow_image_decode_uses_fallback(self, temp_dir, monkeypatch):
        Image.new("RGB", (100, 50)).save(temp_dir / "slow.png")

        def slow_read(path):
            time.sleep(0.3)
            return (100, 50)

        monkeypatch.setattr(measurer_module, "_read_image_size", slow_read)
        measurer = HeuristicMeasurer(asset_root=temp_dir, image_timeout=0.01)
        assert await measurer.measure_one('<div><img src="slow.png"></div>', 600) == pytest.approx(200)
        assert measurer._image_sizes == {"slow.png": None}

    @pytest.mark.asyncio
    async def test_table_rows(self, measurer):
        html = "<table><tr><td>a</td><td>b</td></tr><tr><td>c</td><td>d</td></tr></table>"
        assert await measurer.measure_one(html, 600) == pytest.approx(2 * (LINE_PX + 16))

    @pytest.mark.asyncio
    async def test_pre_lines(self, measurer):
        html = '<pre style="margin: 0">a\nb\nc</pre>'
        assert await measurer.measure_one(html, 600) == pytest.approx(3 * LINE_PX)

    @pytest.mark.asyncio
    async def test_empty_fragment(self, measurer):
        result = await measurer.measure([""], 600)
        assert result.heights == [0]
        assert result.tag_names == [""]


class TestCreateMeasurer:
    """Test backend selection."""

    def test_heuristic(self):
        assert isinstance(create_measurer("heuristic"), HeuristicMeasurer)

    def test_browser(self):
        assert isinstance(create_measurer("browser"), BrowserMeasurer)

    def test_unknown(self):
        with pytest.raises(ValueError):
            create_measurer("ruler")
