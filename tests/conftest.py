"""
Pytest configuration and shared fixtures for docstyle tests.
"""
import sys
import shutil
import tempfile
from pathlib import Path
from typing import Dict, Generator, List, Optional

import pytest
from bs4 import BeautifulSoup

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from docstyle.formatting.profile import (
    HeadingNumberingSettings,
    HeadingTemplate,
    ProfileData,
    get_default_profile,
)
from docstyle.pagination.measurer import Measurer, MeasureResult
from docstyle.rendering.formula_renderer import FormulaRenderer


# ============================================================================
# Fixtures: Profiles
# ============================================================================

@pytest.fixture
def default_profile() -> ProfileData:
    """Built-in GOST profile (heading numbering disabled)."""
    return get_default_profile()


@pytest.fixture
def numbered_profile() -> ProfileData:
    """Profile with heading-1 numbering and a custom image caption format."""
    return ProfileData(
        entity_styles={
            "paragraph": {"fontSize": 14, "textIndent": 1.25},
            "heading-1": {"fontSize": 18, "fontWeight": "bold"},
            "image-caption": {"captionFormat": "Рисунок {n} - {content}"},
        },
        heading_numbering=HeadingNumberingSettings(
            templates={1: HeadingTemplate(format="{n} {content}", enabled=True)}
        ),
    )


@pytest.fixture
def all_levels_numbered_profile() -> ProfileData:
    """Every heading level numbered with the plain '{n} {content}' template."""
    return ProfileData(
        heading_numbering=HeadingNumberingSettings(
            templates={
                level: HeadingTemplate(format="{n} {content}", enabled=True)
                for level in range(1, 7)
            }
        ),
    )


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


# ============================================================================
# Helpers
# ============================================================================

def parse(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


class FakeMeasurer(Measurer):
    """
    Measurer reading heights from markup.

    Each top-level element's height is its `data-h` attribute (default
    `default_height`). Records calls so tests can check alignment fallbacks.
    """

    def __init__(self, default_height: float = 10.0, drop_tags: bool = False):
        self.default_height = default_height
        self.drop_tags = drop_tags
        self.measure_calls = 0
        self.measure_one_calls: List[str] = []
        self.closed = False

    def _height(self, fragment: str) -> float:
        soup = parse(fragment)
        element = soup.find(True)
        if element is None:
            return 0.0
        return float(element.get("data-h", self.default_height))

    async def measure(self, fragments: List[str], content_width: float) -> MeasureResult:
        self.measure_calls += 1
        heights = [self._height(f) for f in fragments]
        tags = [] if self.drop_tags else [parse(f).find(True).name for f in fragments]
        return MeasureResult(total_height=sum(heights), heights=heights, tag_names=tags)

    async def measure_one(self, fragment: str, content_width: float) -> float:
        self.measure_one_calls.append(fragment)
        return self._height(fragment)

    async def close(self) -> None:
        self.closed = True


class MisalignedMeasurer(FakeMeasurer):
    """Reports a wrong tag name for one index to force isolated measurement."""

    def __init__(self, bad_index: int, **kwargs):
        super().__init__(**kwargs)
        self.bad_index = bad_index

    async def measure(self, fragments: List[str], content_width: float) -> MeasureResult:
        result = await super().measure(fragments, content_width)
        result.tag_names[self.bad_index] = "bogus"
        result.heights[self.bad_index] = 0.0
        return result


class FailingFormulaRenderer(FormulaRenderer):
    """Rejects formulas containing 'bad', renders the rest as <m>latex</m>."""

    def __init__(self):
        self.calls: Dict[str, int] = {}

    def render(self, latex: str, display: bool) -> str:
        self.calls[latex] = self.calls.get(latex, 0) + 1
        if "bad" in latex:
            raise ValueError(f"cannot parse {latex}")
        return f"<m>{latex}</m>"


def blocks(heights: List[float], tag: str = "p") -> str:
    """Top-level HTML blocks with the given fake heights."""
    return "".join(f'<{tag} data-h="{h}">block {i}</{tag}>' for i, h in enumerate(heights))


@pytest.fixture
def fake_measurer() -> FakeMeasurer:
    return FakeMeasurer()


@pytest.fixture
def failing_formula_renderer() -> FailingFormulaRenderer:
    return FailingFormulaRenderer()
