"""Lay out and draw the code pages of a single highlighted file."""
from __future__ import annotations

from typing import Optional

from code_renderer.layout.page_cursor import PageCursor, PageCursorState
from code_renderer.layout.token_wrapper import TokenWrapper
from code_renderer.model.elements import HighlightedFile, Segment, SourceLine, VisualLine, font_variant
from code_renderer.model.layout_config import LayoutConfig
from code_renderer.model.theme_model import Theme
from code_renderer.renderer.page_decorator import PageDecorator
from code_renderer.renderer.surface import ALIGN_RIGHT, DrawingSurface, TextOptions
from code_renderer.utils.logger import get_logger

LOGGER = get_logger(__name__)


class FileRenderError(Exception):
    """Raised when a file cannot be laid out; carries the cursor state at failure."""

    def __init__(self, relative_path: str, state: PageCursorState) -> None:
        super().__init__(f"Failed to render {relative_path}")
        self.relative_path = relative_path
        self.state = state


class FileRenderer:
    """Drives the token wrapper and page cursor across every line of one file."""

    def __init__(
        self,
        surface: DrawingSurface,
        config: LayoutConfig,
        theme: Theme,
        decorator: Optional[PageDecorator] = None,
        wrapper: Optional[TokenWrapper] = None,
    ) -> None:
        self._surface = surface
        self._config = config
        self._theme = theme
        self._decorator = decorator or PageDecorator(surface, config, theme)
        self._wrapper = wrapper or TokenWrapper(config, surface)

    # ------------------------------------------------------------------
    # Public API
    def render_file(self, file: HighlightedFile, state: PageCursorState) -> PageCursorState:
        """Render ``file`` starting on a fresh page; return the cursor state afterwards.

        Output-stream failures (``OSError``) propagate untouched. Any other
        error is wrapped in ``FileRenderError`` with the state reached so far.
        """
        cursor = PageCursor(state)
        try:
            self._render(file, cursor)
        except OSError:
            raise
        except Exception as exc:
            raise FileRenderError(file.relative_path, cursor.state) from exc
        return cursor.state

    def open_page(self, cursor: PageCursor, file: HighlightedFile) -> PageCursorState:
        """Start a new physical page and draw the code-page chrome on it."""
        state = cursor.advance_page()
        self._surface.add_page(self._config.page_width, self._config.page_height)
        self._decorator.draw_chrome(state, file)
        return state

    # ------------------------------------------------------------------
    # Layout loop
    def _render(self, file: HighlightedFile, cursor: PageCursor) -> None:
        config = self._config
        line_height = config.line_height
        max_line_number = file.max_line_number
        code_x = config.code_start_x(max_line_number)
        code_width = config.code_width(max_line_number)
        digits = config.line_number_digits(max_line_number)

        first_page = self.open_page(cursor, file).logical_page
        rows = 0

        for line in file.lines:
            context = f"(line {line.line_number} of {file.relative_path})"
            visual_lines = self._wrapper.wrap(line.tokens, code_x, code_width, context=context)

            for index, visual_line in enumerate(visual_lines):
                if cursor.would_overflow(line_height):
                    self.open_page(cursor, file)

                y = cursor.state.current_y
                if config.show_line_numbers:
                    marker = str(line.line_number).zfill(digits) if index == 0 else config.wrap_marker
                    self._draw_gutter_text(marker, y, max_line_number)
                self._draw_visual_line(visual_line, y, line, file)
                cursor.advance_line(line_height)
                rows += 1

        LOGGER.info(
            "Rendered %s: %d line(s) in %d row(s), pages %d-%d",
            file.relative_path,
            file.line_count,
            rows,
            first_page,
            cursor.state.logical_page,
        )

    def _draw_gutter_text(self, text: str, y: float, max_line_number: int) -> None:
        config = self._config
        padding = config.code_block_padding
        self._surface.set_font(config.code_font, config.font_size)
        self._surface.set_fill_color(self._theme.line_number_color)
        self._surface.draw_text(
            text,
            config.margins.left + padding / 2,
            y,
            TextOptions(width=config.gutter_width(max_line_number) - padding, align=ALIGN_RIGHT),
        )

    def _draw_visual_line(self, visual_line: VisualLine, y: float, line: SourceLine, file: HighlightedFile) -> None:
        for segment in visual_line.segments:
            try:
                self._draw_segment(segment, y)
            except OSError:
                raise
            except Exception as exc:
                LOGGER.warning(
                    "Skipping token %r on line %d of %s: %s",
                    segment.text,
                    line.line_number,
                    file.relative_path,
                    exc,
                )

    def _draw_segment(self, segment: Segment, y: float) -> None:
        self._surface.set_font(font_variant(self._config.code_font, segment.style), self._config.font_size)
        self._surface.set_fill_color(segment.color or self._theme.default_color)
        self._surface.draw_text(segment.text, segment.x_offset, y)
