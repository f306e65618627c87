"""String width measurement used by the wrapper and the drawing surfaces."""
from __future__ import annotations

from typing import Protocol

from reportlab.pdfbase import pdfmetrics

from code_renderer.model.layout_config import MONOSPACE_WIDTH_FACTOR


class MetricsProvider(Protocol):
    """Anything that can report the rendered width of a string."""

    def measure_width(self, font: str, size: float, text: str) -> float:
        ...


class MonospaceMetrics:
    """Character-count estimate: every glyph advances ``size * factor`` points."""

    def __init__(self, factor: float = MONOSPACE_WIDTH_FACTOR) -> None:
        self.factor = factor

    def measure_width(self, font: str, size: float, text: str) -> float:
        return len(text) * size * self.factor


class ReportLabMetrics:
    """Widths from the AFM/TTF metrics ReportLab knows for registered fonts."""

    def measure_width(self, font: str, size: float, text: str) -> float:
        return pdfmetrics.stringWidth(text, font, size)
