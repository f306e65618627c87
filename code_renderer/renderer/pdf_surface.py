"""Drawing surface backed by a ReportLab canvas."""
from __future__ import annotations

import io
from typing import Optional

from reportlab.lib.colors import HexColor
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from code_renderer.layout.metrics import ReportLabMetrics
from code_renderer.renderer.surface import (
    ALIGN_CENTER,
    ALIGN_RIGHT,
    DEFAULT_STROKE_WIDTH,
    TextOptions,
    truncate_to_width,
)
from code_renderer.utils.logger import get_logger

LOGGER = get_logger(__name__)

DEFAULT_FONT = "Helvetica"
DEFAULT_FONT_SIZE = 10.0
DEFAULT_FILL = "#000000"


class PdfSurface:
    """Draw pages onto an in-memory PDF and hand back the finished bytes.

    The layout engine works top-down; ReportLab's origin is bottom-left, so
    every y coordinate is flipped against the current page height here.
    """

    def __init__(self, title: str = "", author: str = "code_renderer") -> None:
        self._buffer = io.BytesIO()
        self._canvas = canvas.Canvas(self._buffer)
        self._canvas.setTitle(title)
        self._canvas.setAuthor(author)
        self._canvas.setCreator(author)
        self._metrics = ReportLabMetrics()
        self._page_open = False
        self._page_count = 0
        self._page_height = 0.0
        self._font = DEFAULT_FONT
        self._font_size = DEFAULT_FONT_SIZE
        self._fill = DEFAULT_FILL
        self._finished: Optional[bytes] = None

    @property
    def page_count(self) -> int:
        return self._page_count

    # ------------------------------------------------------------------
    # Page management
    def add_page(self, width: float, height: float) -> None:
        if self._page_open:
            self._canvas.showPage()
        self._canvas.setPageSize((width, height))
        self._page_height = height
        self._page_open = True
        self._page_count += 1
        # showPage resets the graphics state.
        self._canvas.setFont(self._font, self._font_size)
        self._canvas.setFillColor(HexColor(self._fill))

    def finish(self) -> bytes:
        """Close the last page and return the serialized document."""
        if self._finished is None:
            if self._page_open:
                self._canvas.showPage()
                self._page_open = False
            self._canvas.save()
            self._finished = self._buffer.getvalue()
            LOGGER.debug("Serialized %d page(s), %d bytes", self._page_count, len(self._finished))
        return self._finished

    # ------------------------------------------------------------------
    # Drawing primitives
    def measure_width(self, font: str, size: float, text: str) -> float:
        return self._metrics.measure_width(font, size, text)

    def set_font(self, name: str, size: float) -> None:
        self._canvas.setFont(name, size)
        self._font = name
        self._font_size = size

    def set_fill_color(self, color: str) -> None:
        self._canvas.setFillColor(HexColor(color))
        self._fill = color

    def draw_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        fill_color: Optional[str],
        stroke_color: Optional[str] = None,
        stroke_width: float = DEFAULT_STROKE_WIDTH,
    ) -> None:
        c = self._canvas
        if fill_color:
            c.setFillColor(HexColor(fill_color))
        if stroke_color:
            c.setStrokeColor(HexColor(stroke_color))
            c.setLineWidth(stroke_width)
        c.rect(
            x,
            self._flip(y) - height,
            width,
            height,
            stroke=1 if stroke_color else 0,
            fill=1 if fill_color else 0,
        )
        c.setFillColor(HexColor(self._fill))

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, color: str, stroke_width: float) -> None:
        c = self._canvas
        c.setStrokeColor(HexColor(color))
        c.setLineWidth(stroke_width)
        c.line(x1, self._flip(y1), x2, self._flip(y2))

    def draw_text(self, text: str, x: float, y: float, options: TextOptions = TextOptions()) -> None:
        if options.truncate_with_ellipsis and options.width is not None:
            text = truncate_to_width(self._metrics, self._font, self._font_size, text, options.width)
        if not text:
            return

        ascent, _ = pdfmetrics.getAscentDescent(self._font, self._font_size)
        baseline = self._flip(y + ascent)
        c = self._canvas
        if options.align == ALIGN_CENTER and options.width is not None:
            c.drawCentredString(x + options.width / 2, baseline, text)
        elif options.align == ALIGN_RIGHT and options.width is not None:
            c.drawRightString(x + options.width, baseline, text)
        else:
            c.drawString(x, baseline, text)

    def _flip(self, y: float) -> float:
        return self._page_height - y
