"""
Unit tests for docstyle/pagination/paginator.py
"""
import asyncio

import pytest
from bs4 import BeautifulSoup

from conftest import FakeMeasurer, MisalignedMeasurer, blocks
from docstyle.pagination.paginator import PaginationResult, pack_pages, split_into_pages


def page_heights(page_html):
    soup = BeautifulSoup(page_html, "html.parser")
    return [float(tag["data-h"]) for tag in soup.find_all(True, recursive=False)]


class TestPackPages:
    """Test greedy page assignment."""

    def test_fills_pages_in_order(self):
        assert pack_pages([40, 40, 40, 40], 100) == [0, 0, 1, 1]

    def test_exact_fit(self):
        assert pack_pages([50, 50, 50], 100) == [0, 0, 1]

    def test_oversize_gets_exclusive_page(self):
        assert pack_pages([30, 150, 30], 100) == [0, 1, 2]

    def test_oversize_first(self):
        assert pack_pages([150, 30, 30], 100) == [0, 1, 1]

    def test_consecutive_oversize(self):
        assert pack_pages([150, 150], 100) == [0, 1]

    def test_empty(self):
        assert pack_pages([], 100) == []


class TestSplitIntoPages:
    """Test pagination of rendered HTML."""

    @pytest.mark.asyncio
    async def test_empty_html(self, fake_measurer):
        result = await split_into_pages("", 100, 500, measurer=fake_measurer)
        assert result.pages == [""]
        assert result.element_page_map == []

    @pytest.mark.asyncio
    async def test_fits_on_one_page(self, fake_measurer):
        html = blocks([10, 20, 30])
        result = await split_into_pages(html, 100, 500, measurer=fake_measurer)
        assert result.pages == [html]
        assert result.element_page_map == [0, 0, 0]

    @pytest.mark.asyncio
    async def test_greedy_split(self, fake_measurer):
        result = await split_into_pages(blocks([40, 40, 40, 40, 40]), 100, 500, measurer=fake_measurer)
        assert result.page_count == 3
        assert result.element_page_map == [0, 0, 1, 1, 2]
        assert [page_heights(p) for p in result.pages] == [[40, 40], [40, 40], [40]]

    @pytest.mark.asyncio
    async def test_page_capacity_invariant(self, fake_measurer):
        heights = [35, 10, 60, 5, 90, 45, 45, 120, 20, 80]
        result = await split_into_pages(blocks(heights), 100, 500, measurer=fake_measurer)
        for page in result.pages:
            on_page = page_heights(page)
            assert len(on_page) == 1 or sum(on_page) <= 100

    @pytest.mark.asyncio
    async def test_blocks_never_split_and_order_kept(self, fake_measurer):
        html = blocks([70, 70, 70, 200, 10])
        result = await split_into_pages(html, 100, 500, measurer=fake_measurer)
        assert "".join(result.pages) == html
        assert result.element_page_map == sorted(result.element_page_map)
        assert len(result.element_page_map) == 5

    @pytest.mark.asyncio
    async def test_oversize_element_alone(self, fake_measurer):
        result = await split_into_pages(blocks([30, 250, 30]), 100, 500, measurer=fake_measurer)
        assert [page_heights(p) for p in result.pages] == [[30], [250], [30]]

    @pytest.mark.asyncio
    async def test_mismatched_index_measured_alone(self):
        measurer = MisalignedMeasurer(bad_index=1)
        result = await split_into_pages(blocks([60, 60, 60]), 100, 500, measurer=measurer)
        assert len(measurer.measure_one_calls) == 1
        assert 'data-h="60"' in measurer.measure_one_calls[0]
        assert result.element_page_map == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_missing_tag_names_trusted(self):
        measurer = FakeMeasurer(drop_tags=True)
        result = await split_into_pages(blocks([60, 60]), 100, 500, measurer=measurer)
        assert measurer.measure_one_calls == []
        assert result.element_page_map == [0, 1]

    @pytest.mark.asyncio
    async def test_caller_measurer_not_closed(self, fake_measurer):
        await split_into_pages(blocks([10]), 100, 500, measurer=fake_measurer)
        assert fake_measurer.closed is False

    @pytest.mark.asyncio
    async def test_cancellation(self):
        class SlowMeasurer(FakeMeasurer):
            async def measure(self, fragments, content_width):
                await asyncio.sleep(10)
                return await super().measure(fragments, content_width)

        task = asyncio.create_task(split_into_pages(blocks([10] * 50), 100, 500, measurer=SlowMeasurer()))
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    def test_result_defaults(self):
        result = PaginationResult()
        assert result.pages == [""]
        assert result.page_count == 1
