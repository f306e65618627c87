"""Fixed chrome of a code page: header, footer, gutter and code block frame."""
from __future__ import annotations

from code_renderer.layout.metrics import MonospaceMetrics
from code_renderer.layout.page_cursor import PageCursorState
from code_renderer.model.elements import FontStyle, HighlightedFile, font_variant
from code_renderer.model.layout_config import LayoutConfig
from code_renderer.model.theme_model import Theme
from code_renderer.renderer.surface import ALIGN_CENTER, ALIGN_RIGHT, DrawingSurface, TextOptions
from code_renderer.utils.logger import get_logger

LOGGER = get_logger(__name__)

BORDER_WIDTH_PT = 0.5
FRAME_WIDTH_PT = 0.75
LANGUAGE_LABEL_MAX_WIDTH_PT = 130.0


class PageDecorator:
    """Draws everything on a code page that does not depend on the code itself.

    Output is a pure function of the cursor state and the file, so drawing the
    same page twice yields identical calls.
    """

    def __init__(self, surface: DrawingSurface, config: LayoutConfig, theme: Theme) -> None:
        self._surface = surface
        self._config = config
        self._theme = theme
        self._fallback = MonospaceMetrics()

    def draw_chrome(self, state: PageCursorState, file: HighlightedFile) -> None:
        self.draw_code_frame(file)
        self.draw_header(file)
        self.draw_footer(state.logical_page)

    # ------------------------------------------------------------------
    # Sections
    def draw_code_frame(self, file: HighlightedFile) -> None:
        config = self._config
        theme = self._theme
        left = config.margins.left
        top = config.code_area_top
        height = config.code_area_height

        self._surface.draw_rect(
            left,
            top,
            config.content_width,
            height,
            fill_color=theme.background_color,
            stroke_color=theme.border_color,
            stroke_width=FRAME_WIDTH_PT,
        )

        if not config.show_line_numbers:
            return

        gutter = config.gutter_width(file.max_line_number)
        self._surface.draw_rect(left, top, gutter, height, fill_color=theme.line_number_background)
        self._surface.draw_line(left + gutter, top, left + gutter, top + height, theme.border_color, BORDER_WIDTH_PT)

    def draw_header(self, file: HighlightedFile) -> None:
        config = self._config
        theme = self._theme
        left = config.margins.left
        top = config.margins.top
        width = config.content_width
        padding = config.code_block_padding
        text_y = top + (config.header_height - config.chrome_font_size) / 2

        self._surface.draw_rect(left, top, width, config.header_height, fill_color=theme.header_footer_background)

        label = (file.language or "").upper()
        label_width = 0.0
        if label:
            self._surface.set_font(config.text_font, config.chrome_font_size)
            self._surface.set_fill_color(theme.header_footer_color)
            label_width = min(
                self._measure(config.text_font, config.chrome_font_size, label),
                LANGUAGE_LABEL_MAX_WIDTH_PT,
            )
            self._surface.draw_text(
                label,
                left + width - padding - label_width,
                text_y,
                TextOptions(width=label_width, align=ALIGN_RIGHT, truncate_with_ellipsis=True),
            )

        path_font = font_variant(config.text_font, FontStyle.BOLD)
        self._surface.set_font(path_font, config.chrome_font_size)
        self._surface.set_fill_color(theme.header_footer_color)
        path_width = width - padding * 2 - (label_width + padding if label else 0.0)
        self._surface.draw_text(
            file.relative_path,
            left + padding,
            text_y,
            TextOptions(width=max(path_width, 0.0), truncate_with_ellipsis=True),
        )

        rule_y = top + config.header_height
        self._surface.draw_line(left, rule_y, left + width, rule_y, theme.border_color, BORDER_WIDTH_PT)

    def draw_footer(self, logical_page: int) -> None:
        config = self._config
        theme = self._theme
        left = config.margins.left
        width = config.content_width
        footer_top = config.code_area_bottom
        text_y = footer_top + (config.footer_height - config.chrome_font_size) / 2

        self._surface.draw_rect(left, footer_top, width, config.footer_height, fill_color=theme.header_footer_background)
        self._surface.draw_line(left, footer_top, left + width, footer_top, theme.border_color, BORDER_WIDTH_PT)

        self._surface.set_font(config.text_font, config.chrome_font_size)
        self._surface.set_fill_color(theme.header_footer_color)
        self._surface.draw_text(
            footer_label(logical_page),
            left,
            text_y,
            TextOptions(width=width, align=ALIGN_CENTER),
        )

    def _measure(self, font: str, size: float, text: str) -> float:
        try:
            return float(self._surface.measure_width(font, size, text))
        except Exception as exc:
            LOGGER.warning("Could not measure %r in %s: %s; using monospace estimate", text, font, exc)
            return self._fallback.measure_width(font, size, text)


def footer_label(logical_page: int) -> str:
    return f"Page {logical_page}"
