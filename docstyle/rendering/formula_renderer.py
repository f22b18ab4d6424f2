r"""
Formula Rendering Module

Finds LaTeX formulas in Markdown source and replaces them with HTML:
- Display math: $$...$$, \[...\]  -> <div class="formula-block">
- Inline math:  $...$,  \(...\)   -> <span class="formula-inline">

Display patterns are scanned first so an inline pattern can never match
across a multi-line block. A formula the renderer rejects is kept as
escaped source inside an error-marked element; the render goes on.

Code spans are not excluded from the scan: a `$` inside code can be taken
for a formula delimiter.
"""

import html
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

import regex
from latex2mathml.converter import convert as latex_to_mathml

logger = logging.getLogger(__name__)


class FormulaRenderer(ABC):
    """LaTeX -> HTML renderer. Implementations raise on bad input."""

    @abstractmethod
    def render(self, latex: str, display: bool) -> str:
        """
        Render one formula

        Args:
            latex: Formula source without delimiters
            display: True for block (display) mode

        Returns:
            HTML markup for the formula
        """
        ...


class MathMLFormulaRenderer(FormulaRenderer):
    """Renders LaTeX to MathML with latex2mathml."""

    def render(self, latex: str, display: bool) -> str:
        return latex_to_mathml(latex, display="block" if display else "inline")


# Delimiter patterns in scan order: (pattern, display mode)
FORMULA_PATTERNS: List[Tuple["regex.Pattern", bool]] = [
    (regex.compile(r"\$\$([^$]+)\$\$"), True),
    (regex.compile(r"\\\[([^\]]+)\\\]"), True),
    (regex.compile(r"\$([^$\n]+)\$"), False),
    (regex.compile(r"\\\(([^)]+)\\\)"), False),
]

PLACEHOLDER_PREFIX = "⟪DOCSTYLE_FORMULA_"
PLACEHOLDER_SUFFIX = "⟫"
_PLACEHOLDER_RE = regex.compile(r"⟪DOCSTYLE_FORMULA_(\d+)⟫")


@dataclass
class FormulaScan:
    """State for one scan: rendered fragments and the per-call cache."""
    renderer: FormulaRenderer
    fragments: List[str] = field(default_factory=list)
    cache: Dict[Tuple[bool, str], str] = field(default_factory=dict)
    errors: int = 0

    def render(self, latex: str, display: bool) -> str:
        key = (display, latex.strip())
        if key not in self.cache:
            self.cache[key] = self._render_uncached(latex.strip(), display)
        return self.cache[key]

    def _render_uncached(self, latex: str, display: bool) -> str:
        try:
            markup = self.renderer.render(latex, display)
        except Exception as e:
            # Renderer failures are content problems, not engine failures
            self.errors += 1
            logger.warning(f"Formula render failed ({type(e).__name__}): {latex[:80]}")
            if display:
                return f'<div class="formula-block formula-error">{html.escape(latex)}</div>'
            return f'<span class="formula-error">{html.escape(latex)}</span>'
        if display:
            return f'<div class="formula-block">{markup}</div>'
        return f'<span class="formula-inline">{markup}</span>'

    def protect(self, text: str) -> str:
        """Replace every formula with a placeholder, patterns in scan order."""
        for pattern, display in FORMULA_PATTERNS:
            text = pattern.sub(self._placeholder_for(display), text)
        return text

    def _placeholder_for(self, display: bool) -> Callable[["regex.Match"], str]:
        def replace(match: "regex.Match") -> str:
            self.fragments.append(self.render(match.group(1), display))
            return f"{PLACEHOLDER_PREFIX}{len(self.fragments) - 1}{PLACEHOLDER_SUFFIX}"
        return replace

    def restore(self, text: str) -> str:
        return _PLACEHOLDER_RE.sub(lambda m: self.fragments[int(m.group(1))], text)


def render_formulas_in_text(
    text: str,
    renderer: Optional[FormulaRenderer] = None,
    escape_text: bool = False,
) -> str:
    """
    Replace LaTeX formulas in `text` with rendered HTML.

    Args:
        text: Markdown (or plain) text
        renderer: Formula renderer (default: MathML)
        escape_text: HTML-escape the text around the formulas (for plain
            text inserted into markup, e.g. TOC entries)

    Returns:
        Text with formulas rendered
    """
    if not text:
        return text
    scan = FormulaScan(renderer=renderer or MathMLFormulaRenderer())
    protected = scan.protect(text)
    if escape_text:
        protected = html.escape(protected, quote=False)
    result = scan.restore(protected)
    if scan.fragments:
        logger.debug(f"Rendered {len(scan.fragments)} formula(s), {scan.errors} failed")
    return result
