"""Break styled tokens into visual rows that fit a fixed column width."""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from code_renderer.layout.metrics import MetricsProvider, MonospaceMetrics
from code_renderer.model.elements import Segment, StyledToken, VisualLine, font_variant
from code_renderer.model.layout_config import GEOMETRY_EPSILON, LayoutConfig
from code_renderer.utils.logger import get_logger

LOGGER = get_logger(__name__)


class TokenWrapper:
    """Greedy token wrapper.

    Tokens are placed whole while they fit. A token that overflows moves to a
    fresh row (indented by ``wrap_indent_width``); if it is still wider than a
    full row it is split character by character. Every row receives at least
    one character so degenerate widths cannot stall the loop. The text of the
    emitted segments, read in order, is exactly the text of the input tokens.
    """

    def __init__(self, config: LayoutConfig, metrics: MetricsProvider) -> None:
        self._config = config
        self._metrics = metrics
        self._fallback = MonospaceMetrics()
        self._wrap_indent_width: Optional[float] = None

    @property
    def wrap_indent_width(self) -> float:
        if self._wrap_indent_width is None:
            indent = " " * self._config.wrap_indent_chars
            self._wrap_indent_width = self._measure(indent, self._config.code_font) if indent else 0.0
        return self._wrap_indent_width

    # ------------------------------------------------------------------
    # Public API
    def wrap(
        self,
        tokens: Sequence[StyledToken],
        start_x: float,
        available_width: float,
        context: str = "",
    ) -> List[VisualLine]:
        """Return the visual rows for one source line; never fewer than one."""

        boundary = start_x + available_width
        indent_x = start_x + self.wrap_indent_width
        lines: List[VisualLine] = [VisualLine(start_x=start_x)]
        x = start_x

        for token in tokens:
            if not token.text:
                continue

            font = font_variant(self._config.code_font, token.style)
            width = self._measure(token.text, font, context)

            if self._fits(x, width, boundary):
                lines[-1].segments.append(self._segment(token, token.text, x))
                x += width
                continue

            if not lines[-1].is_empty:
                lines.append(VisualLine(start_x=indent_x))
                x = indent_x
                if self._fits(x, width, boundary):
                    lines[-1].segments.append(self._segment(token, token.text, x))
                    x += width
                    continue

            x = self._split_token(token, font, x, boundary, indent_x, lines, context)

        return lines

    # ------------------------------------------------------------------
    # Helpers
    def _split_token(
        self,
        token: StyledToken,
        font: str,
        x: float,
        boundary: float,
        indent_x: float,
        lines: List[VisualLine],
        context: str,
    ) -> float:
        remaining = token.text
        while remaining:
            count, used = self._fit_prefix(remaining, font, boundary - x, context)
            if count == 0:
                if not lines[-1].is_empty:
                    lines.append(VisualLine(start_x=indent_x))
                    x = indent_x
                    continue
                # Force one character onto an empty row.
                count = 1
                used = self._measure(remaining[0], font, context)
                LOGGER.debug("Forcing character %r onto an over-narrow row %s", remaining[0], context)

            lines[-1].segments.append(self._segment(token, remaining[:count], x))
            x += used
            remaining = remaining[count:]
            if remaining:
                lines.append(VisualLine(start_x=indent_x))
                x = indent_x
        return x

    def _fit_prefix(self, text: str, font: str, room: float, context: str) -> Tuple[int, float]:
        """Count how many leading characters of ``text`` fit into ``room``."""
        count = 0
        used = 0.0
        for char in text:
            char_width = self._measure(char, font, context)
            if used + char_width > room + GEOMETRY_EPSILON:
                break
            used += char_width
            count += 1
        return count, used

    @staticmethod
    def _fits(x: float, width: float, boundary: float) -> bool:
        return x + width <= boundary + GEOMETRY_EPSILON

    @staticmethod
    def _segment(token: StyledToken, text: str, x: float) -> Segment:
        return Segment(text=text, color=token.color, style=token.style, x_offset=x)

    def _measure(self, text: str, font: str, context: str = "") -> float:
        size = self._config.font_size
        try:
            return float(self._metrics.measure_width(font, size, text))
        except Exception as exc:
            LOGGER.warning("Could not measure %r in %s %s: %s; using monospace estimate", text, font, context, exc)
            return self._fallback.measure_width(font, size, text)

