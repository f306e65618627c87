"""Drawing-surface contract consumed by the layout engine.

Coordinates are in points with the origin at the top-left corner of the page
and y growing downwards. For text, ``y`` is the top of the text row.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

from code_renderer.layout.metrics import MetricsProvider, ReportLabMetrics

ALIGN_LEFT = "left"
ALIGN_CENTER = "center"
ALIGN_RIGHT = "right"

DEFAULT_STROKE_WIDTH = 0.5


@dataclass(frozen=True, slots=True)
class TextOptions:
    """Placement hints for ``draw_text``."""

    width: Optional[float] = None
    align: str = ALIGN_LEFT
    truncate_with_ellipsis: bool = False
    no_wrap: bool = True


class DrawingSurface(Protocol):
    """Primitive drawing operations plus string measurement."""

    @property
    def page_count(self) -> int:
        ...

    def add_page(self, width: float, height: float) -> None:
        ...

    def measure_width(self, font: str, size: float, text: str) -> float:
        ...

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
        ...

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, color: str, stroke_width: float) -> None:
        ...

    def draw_text(self, text: str, x: float, y: float, options: TextOptions = TextOptions()) -> None:
        ...

    def set_font(self, name: str, size: float) -> None:
        ...

    def set_fill_color(self, color: str) -> None:
        ...

    def finish(self) -> bytes:
        ...


def truncate_to_width(
    metrics: MetricsProvider,
    font: str,
    size: float,
    text: str,
    max_width: float,
    ellipsis: str = "...",
) -> str:
    """Shorten ``text`` with a trailing ellipsis until it fits ``max_width``."""
    if metrics.measure_width(font, size, text) <= max_width:
        return text
    for end in range(len(text) - 1, -1, -1):
        candidate = text[:end] + ellipsis
        if metrics.measure_width(font, size, candidate) <= max_width:
            return candidate
    return ""


@dataclass(slots=True)
class DrawOp:
    """A single recorded drawing call."""

    kind: str
    args: Dict[str, Any]


@dataclass(slots=True)
class RecordedPage:
    width: float
    height: float
    ops: List[DrawOp] = field(default_factory=list)

    def texts(self) -> List[str]:
        """Text of every ``draw_text`` call on the page, in drawing order."""
        return [op.args["text"] for op in self.ops if op.kind == "text"]


class RecordingSurface:
    """In-memory surface that records draw calls page by page.

    Used for layout dry runs: it measures strings exactly like the PDF
    surface (unless given other metrics) but produces no document bytes.
    """

    def __init__(self, metrics: Optional[MetricsProvider] = None) -> None:
        self._metrics = metrics or ReportLabMetrics()
        self.pages: List[RecordedPage] = []
        self.font: Optional[str] = None
        self.font_size: float = 0.0
        self.fill_color: Optional[str] = None

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def add_page(self, width: float, height: float) -> None:
        self.pages.append(RecordedPage(width=width, height=height))

    def measure_width(self, font: str, size: float, text: str) -> float:
        return self._metrics.measure_width(font, size, text)

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
        self._record(
            "rect",
            x=x,
            y=y,
            width=width,
            height=height,
            fill_color=fill_color,
            stroke_color=stroke_color,
            stroke_width=stroke_width,
        )

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, color: str, stroke_width: float) -> None:
        self._record("line", x1=x1, y1=y1, x2=x2, y2=y2, color=color, stroke_width=stroke_width)

    def draw_text(self, text: str, x: float, y: float, options: TextOptions = TextOptions()) -> None:
        if options.truncate_with_ellipsis and options.width is not None:
            text = truncate_to_width(self._metrics, self.font or "", self.font_size, text, options.width)
        self._record(
            "text",
            text=text,
            x=x,
            y=y,
            font=self.font,
            size=self.font_size,
            color=self.fill_color,
            width=options.width,
            align=options.align,
        )

    def set_font(self, name: str, size: float) -> None:
        self.font = name
        self.font_size = size

    def set_fill_color(self, color: str) -> None:
        self.fill_color = color

    def finish(self) -> bytes:
        return b""

    def _record(self, kind: str, **args: Any) -> None:
        if not self.pages:
            raise RuntimeError("No page has been added to the surface")
        self.pages[-1].ops.append(DrawOp(kind=kind, args=args))
