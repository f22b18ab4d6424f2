#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Measurement backends for pagination.

Pagination needs the rendered height of every top-level block at a fixed
content width. Two backends:

- HeuristicMeasurer (default): pure Python box model over the inline
  styles the renderers write (font-size, line-height, margins,
  text-indent), average glyph width for line wrapping, table rows, list
  items, images from width/height attributes or probed with Pillow.
- BrowserMeasurer: real layout in headless Chromium through Playwright.

Image waits race a bounded timeout and always resolve, so a broken or
slow image degrades accuracy instead of blocking layout.
"""

import asyncio
import logging
import math
import re
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import AsyncIterator, Dict, List, Optional, Tuple, Union
from urllib.parse import unquote, urlsplit

from bs4 import BeautifulSoup, NavigableString, Tag
from PIL import Image
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from config.constants import (
    AVERAGE_GLYPH_WIDTH_EM,
    BASE_FONT_FAMILY,
    CM_TO_PT,
    FALLBACK_IMAGE_HEIGHT_PX,
    MM_TO_PX,
    PT_TO_PX,
)
from config.settings import settings
from ..exceptions import MeasurementError

logger = logging.getLogger(__name__)


# =============================================================================
# RESULT / INTERFACE
# =============================================================================

@dataclass
class MeasureResult:
    """Heights in px of the top-level blocks of one layout."""
    total_height: float
    heights: List[float] = field(default_factory=list)
    tag_names: List[str] = field(default_factory=list)


class Measurer(ABC):
    """
    Layout backend used by the paginator.

    measure() lays all fragments out together (index-aligned heights);
    measure_one() lays a single fragment out in an isolated container.
    """

    @abstractmethod
    async def measure(self, fragments: List[str], content_width: float) -> MeasureResult:
        ...

    @abstractmethod
    async def measure_one(self, fragment: str, content_width: float) -> float:
        ...

    async def close(self) -> None:
        """Release backend resources (no-op by default)."""
        return None


# =============================================================================
# CSS HELPERS
# =============================================================================

_LENGTH_RE = re.compile(r"^(-?\d*\.?\d+)(px|pt|cm|mm|em|%)?$")

# Browser default block margins (em of the element's font size)
DEFAULT_MARGINS_EM = {
    "p": 1.0, "h1": 0.67, "h2": 0.83, "h3": 1.0, "h4": 1.33, "h5": 1.67, "h6": 2.33,
    "ul": 1.0, "ol": 1.0, "blockquote": 1.0, "pre": 1.0, "figure": 1.0, "hr": 0.5,
}
HEADING_FONT_SCALE = {"h1": 2.0, "h2": 1.5, "h3": 1.17, "h4": 1.0, "h5": 0.83, "h6": 0.67}
BLOCK_TAGS = {
    "p", "div", "section", "article", "figure", "blockquote", "pre", "table", "ul", "ol", "li",
    "h1", "h2", "h3", "h4", "h5", "h6", "hr", "img",
}
LIST_PADDING_PX = 40
TABLE_CELL_PADDING_PX = 16


def parse_inline_style(style: str) -> Dict[str, str]:
    declarations = {}
    for part in (style or "").split(";"):
        if ":" in part:
            name, value = part.split(":", 1)
            declarations[name.strip().lower()] = value.strip()
    return declarations


def css_length_px(value: Optional[str], font_px: float, default: float = 0.0) -> float:
    """'14pt', '1.25cm', '1em', '8px', '0' -> px. Unparseable values give `default`."""
    if value is None:
        return default
    match = _LENGTH_RE.match(value.strip().lower())
    if match is None:
        return default
    number, unit = float(match.group(1)), match.group(2) or "px"
    if unit == "pt":
        return number * PT_TO_PX
    if unit == "cm":
        return number * CM_TO_PT * PT_TO_PX
    if unit == "mm":
        return number * MM_TO_PX
    if unit == "em":
        return number * font_px
    if unit == "%":
        return default
    return number


def _box_sides(value: Optional[str], font_px: float) -> Optional[Tuple[float, float]]:
    """(top, bottom) from a margin/padding shorthand."""
    if not value:
        return None
    parts = value.split()
    lengths = [css_length_px(p, font_px) for p in parts]
    if len(lengths) == 1:
        return lengths[0], lengths[0]
    if len(lengths) in (2, 3):
        return lengths[0], lengths[2] if len(lengths) == 3 else lengths[0]
    return lengths[0], lengths[2]


def _line_height(value: Optional[str], font_px: float, inherited: float) -> float:
    """Line height as a multiplier of the font size."""
    if value is None:
        return inherited
    value = value.strip().lower()
    if value == "normal":
        return 1.2
    try:
        return float(value)
    except ValueError:
        px = css_length_px(value, font_px, default=inherited * font_px)
        return px / font_px if font_px else inherited


def _read_image_size(path: Path) -> Tuple[int, int]:
    with Image.open(path) as image:
        return image.size


# =============================================================================
# HEURISTIC MEASURER
# =============================================================================

class HeuristicMeasurer(Measurer):
    """
    Browser-free layout estimate.

    Usage:
        measurer = HeuristicMeasurer(asset_root="docs/")
        result = await measurer.measure(fragments, content_width=642.5)
    """

    def __init__(
        self,
        asset_root: Optional[Union[str, Path]] = None,
        image_timeout: Optional[float] = None,
        font_size_pt: Optional[float] = None,
        line_height: Optional[float] = None,
    ):
        self.asset_root = Path(asset_root) if asset_root is not None else None
        self.image_timeout = image_timeout if image_timeout is not None else settings.image_decode_timeout
        self.font_px = (font_size_pt or settings.default_font_size_pt) * PT_TO_PX
        self.line_height = line_height or settings.default_line_height
        self._image_sizes: Dict[str, Optional[Tuple[int, int]]] = {}

    async def measure(self, fragments: List[str], content_width: float) -> MeasureResult:
        soups = [BeautifulSoup(fragment, "html.parser") for fragment in fragments]
        await self._probe_images(soups)
        heights, names = [], []
        for soup in soups:
            blocks = [node for node in soup.contents if isinstance(node, Tag)]
            heights.append(sum(self._block_height(b, content_width, self.font_px, self.line_height)
                               for b in blocks))
            names.append(blocks[0].name if blocks else "")
        return MeasureResult(total_height=sum(heights), heights=heights, tag_names=names)

    async def measure_one(self, fragment: str, content_width: float) -> float:
        result = await self.measure([fragment], content_width)
        return result.total_height

    # -------------------------------------------------------------------------
    # Images
    # -------------------------------------------------------------------------

    def _local_path(self, src: str) -> Optional[Path]:
        parts = urlsplit(src)
        if parts.scheme or parts.netloc or src.startswith("data:"):
            return None
        root = self.asset_root or Path.cwd()
        path = root / unquote(parts.path).lstrip("/")
        return path if path.is_file() else None

    async def _probe(self, src: str) -> Optional[Tuple[int, int]]:
        path = self._local_path(src)
        if path is None:
            return None
        try:
            return await asyncio.wait_for(asyncio.to_thread(_read_image_size, path), self.image_timeout)
        except asyncio.TimeoutError:
            logger.debug(f"Image probe timed out: {src}")
        except OSError as e:
            logger.debug(f"Image probe failed for {src}: {e}")
        return None

    async def _probe_images(self, soups: List[BeautifulSoup]) -> None:
        sources = sorted({
            img["src"]
            for soup in soups
            for img in soup.find_all("img")
            if img.get("src") and img["src"] not in self._image_sizes
        })
        if not sources:
            return
        sizes = await asyncio.gather(*(self._probe(src) for src in sources))
        self._image_sizes.update(zip(sources, sizes))

    def _image_height(self, img: Tag, width: float) -> float:
        css = parse_inline_style(img.get("style", ""))
        max_width = width
        if css.get("max-width", "").endswith("%"):
            max_width = width * float(css["max-width"][:-1] or 100) / 100

        size = None
        try:
            if img.get("width") and img.get("height"):
                size = (float(img["width"]), float(img["height"]))
        except ValueError:
            size = None
        if size is None:
            size = self._image_sizes.get(img.get("src", ""))
        if not size or not size[0]:
            return float(FALLBACK_IMAGE_HEIGHT_PX)

        natural_width, natural_height = size
        scale = min(1.0, max_width / natural_width) if natural_width else 1.0
        return natural_height * scale

    # -------------------------------------------------------------------------
    # Box model
    # -------------------------------------------------------------------------

    def _text_height(self, text: str, width: float, font_px: float,
                     line_height: float, indent_px: float = 0.0) -> float:
        text = " ".join(text.split())
        if not text:
            return 0.0
        glyph_px = font_px * AVERAGE_GLYPH_WIDTH_EM
        per_line = max(1, int(width / glyph_px)) if glyph_px else len(text)
        extra = int(max(0.0, indent_px) / glyph_px) if glyph_px else 0
        lines = math.ceil((len(text) + extra) / per_line)
        return lines * font_px * line_height

    def _inline_run_height(self, nodes: List, width: float, font_px: float,
                           line_height: float, indent_px: float) -> float:
        text_parts = []
        image_height = 0.0
        for node in nodes:
            if isinstance(node, NavigableString):
                text_parts.append(str(node))
                continue
            text_parts.append(node.get_text())
            for img in node.find_all("img") if node.name != "img" else [node]:
                image_height += self._image_height(img, width)
        text_height = self._text_height("".join(text_parts), width, font_px, line_height, indent_px)
        return max(text_height, image_height) if image_height and not text_height else text_height + image_height

    def _children_height(self, tag: Tag, width: float, font_px: float,
                         line_height: float, indent_px: float) -> float:
        total = 0.0
        run: List = []
        for child in tag.children:
            if isinstance(child, Tag) and child.name in BLOCK_TAGS:
                if run:
                    total += self._inline_run_height(run, width, font_px, line_height, indent_px)
                    run = []
                total += self._block_height(child, width, font_px, line_height)
            elif isinstance(child, (Tag, NavigableString)):
                run.append(child)
        if run:
            total += self._inline_run_height(run, width, font_px, line_height, indent_px)
        return total

    def _table_height(self, table: Tag, width: float, font_px: float, line_height: float) -> float:
        total = 0.0
        for row in table.find_all("tr"):
            cells = row.find_all(["td", "th"], recursive=False)
            if not cells:
                continue
            cell_width = max(1.0, width / len(cells) - TABLE_CELL_PADDING_PX)
            tallest = max(self._text_height(c.get_text(), cell_width, font_px, line_height) for c in cells)
            total += max(tallest, font_px * line_height) + TABLE_CELL_PADDING_PX
        return total

    def _block_height(self, tag: Tag, width: float, font_px: float, line_height: float) -> float:
        css = parse_inline_style(tag.get("style", ""))
        name = tag.name

        if "font-size" in css:
            font_px = css_length_px(css["font-size"], font_px, default=font_px)
        elif name in HEADING_FONT_SCALE:
            font_px *= HEADING_FONT_SCALE[name]
        line_height = _line_height(css.get("line-height"), font_px, line_height)

        default_margin = DEFAULT_MARGINS_EM.get(name, 0.0) * font_px
        if name in ("ul", "ol") and tag.find_parent(["ul", "ol"]) is not None:
            default_margin = 0.0
        top, bottom = _box_sides(css.get("margin"), font_px) or (default_margin, default_margin)
        top = css_length_px(css.get("margin-top"), font_px, default=top)
        bottom = css_length_px(css.get("margin-bottom"), font_px, default=bottom)

        inner_width = width - css_length_px(css.get("margin-left"), font_px) \
            - css_length_px(css.get("padding-left"), font_px)
        if name in ("ul", "ol"):
            inner_width -= LIST_PADDING_PX
        inner_width = max(inner_width, font_px)
        indent_px = css_length_px(css.get("text-indent"), font_px)

        if name == "img":
            content = self._image_height(tag, width)
        elif name == "hr":
            content = 2.0
        elif name == "table":
            content = self._table_height(tag, inner_width, font_px, line_height)
        elif name == "pre":
            lines = tag.get_text().rstrip("\n").count("\n") + 1
            content = lines * font_px * line_height
        else:
            content = self._children_height(tag, inner_width, font_px, line_height, indent_px)

        padding = _box_sides(css.get("padding"), font_px) or (0.0, 0.0)
        return top + padding[0] + content + padding[1] + bottom


# =============================================================================
# BROWSER MEASURER
# =============================================================================

WAIT_FOR_IMAGES_JS = """
async (timeoutMs) => {
    const images = Array.from(document.querySelectorAll('#measure img'));
    await Promise.all(images.map((img) => {
        const decoded = img.decode ? img.decode().catch(() => undefined) : Promise.resolve();
        const timeout = new Promise((resolve) => setTimeout(resolve, timeoutMs));
        return Promise.race([decoded, timeout]);
    }));
}
"""

MEASURE_JS = """
() => {
    const root = document.getElementById('measure');
    const children = Array.from(root.children);
    return {
        total: root.scrollHeight,
        heights: children.map((el) => {
            const cs = getComputedStyle(el);
            return el.offsetHeight + parseFloat(cs.marginTop) + parseFloat(cs.marginBottom);
        }),
        tags: children.map((el) => el.tagName.toLowerCase()),
    };
}
"""


class BrowserMeasurer(Measurer):
    """
    Chromium layout through Playwright.

    Usage:
        async with BrowserMeasurer() as measurer:
            result = await split_into_pages(html, height, width, measurer=measurer)

    Used without `async with`, each call starts and stops its own browser.
    """

    def __init__(
        self,
        headless: Optional[bool] = None,
        image_timeout_ms: Optional[int] = None,
        font_size_pt: Optional[float] = None,
        line_height: Optional[float] = None,
    ):
        self.headless = settings.browser_headless if headless is None else headless
        self.image_timeout_ms = image_timeout_ms or settings.image_decode_timeout_ms
        self.font_size_pt = font_size_pt or settings.default_font_size_pt
        self.line_height = line_height or settings.default_line_height
        self._playwright = None
        self._browser = None

    async def __aenter__(self) -> "BrowserMeasurer":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def start(self) -> None:
        if self._browser is not None:
            return
        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(headless=self.headless)
        except PlaywrightError as e:
            await self.close()
            raise MeasurementError(f"Cannot start Chromium: {e}") from e
        logger.debug("Measurement browser started")

    async def close(self) -> None:
        browser, pw = self._browser, self._playwright
        self._browser = None
        self._playwright = None
        if browser is not None:
            await browser.close()
        if pw is not None:
            await pw.stop()

    @asynccontextmanager
    async def _page(self) -> AsyncIterator:
        owns_browser = self._browser is None
        if owns_browser:
            await self.start()
        page = await self._browser.new_page()
        try:
            yield page
        finally:
            await page.close()
            if owns_browser:
                await self.close()

    def _document(self, html: str, content_width: float) -> str:
        return (
            '<!DOCTYPE html><html><head><meta charset="utf-8"><style>'
            "body { margin: 0; }"
            f"#measure {{ position: absolute; left: -10000px; top: 0; visibility: hidden; "
            f"width: {content_width}px; font-family: {BASE_FONT_FAMILY}; "
            f"font-size: {self.font_size_pt}pt; line-height: {self.line_height}; }}"
            f'</style></head><body><div id="measure">{html}</div></body></html>'
        )

    async def _layout(self, html: str, content_width: float) -> dict:
        async with self._page() as page:
            await page.set_content(self._document(html, content_width))
            await page.evaluate(WAIT_FOR_IMAGES_JS, self.image_timeout_ms)
            return await page.evaluate(MEASURE_JS)

    async def measure(self, fragments: List[str], content_width: float) -> MeasureResult:
        data = await self._layout("".join(fragments), content_width)
        return MeasureResult(
            total_height=float(data["total"]),
            heights=[float(h) for h in data["heights"]],
            tag_names=list(data["tags"]),
        )

    async def measure_one(self, fragment: str, content_width: float) -> float:
        data = await self._layout(fragment, content_width)
        return float(data["total"])


def create_measurer(backend: Optional[str] = None, **kwargs) -> Measurer:
    """Measurer for a backend name ('heuristic' or 'browser'; default from settings)."""
    backend = (backend or settings.measure_backend).lower()
    if backend == "heuristic":
        return HeuristicMeasurer(**kwargs)
    if backend == "browser":
        return BrowserMeasurer(**kwargs)
    raise ValueError(f"Unknown measure backend: {backend}")
