"""Top-level document flow: cover, table of contents, then every file."""
from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional, Sequence

from code_renderer.layout.page_cursor import PageCursor, PageCursorState
from code_renderer.layout.toc_estimator import TocEstimator, ordered_files
from code_renderer.model.document_model import RenderReport
from code_renderer.model.elements import FontStyle, HighlightedFile, font_variant
from code_renderer.model.layout_config import LayoutConfig
from code_renderer.model.theme_model import Theme
from code_renderer.renderer.file_renderer import FileRenderer, FileRenderError
from code_renderer.renderer.page_decorator import PageDecorator
from code_renderer.renderer.surface import ALIGN_CENTER, DrawingSurface, TextOptions
from code_renderer.renderer.toc_renderer import TocRenderer, TocRow
from code_renderer.utils.logger import get_logger

LOGGER = get_logger(__name__)

COVER_TITLE_SIZE_PT = 24.0
COVER_REPO_SIZE_PT = 16.0
COVER_DATE_SIZE_PT = 12.0
COVER_TITLE_POSITION = 0.2
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class DocumentAssembler:
    """Owns the page cursor for a whole document and sequences its sections."""

    def __init__(
        self,
        surface: DrawingSurface,
        config: LayoutConfig,
        theme: Theme,
        repo_name: str = "",
        generated_at: Optional[datetime] = None,
    ) -> None:
        self._surface = surface
        self._config = config
        self._theme = theme
        self._repo_name = repo_name
        self._generated_at = generated_at
        self._decorator = PageDecorator(surface, config, theme)
        self._file_renderer = FileRenderer(surface, config, theme, decorator=self._decorator)
        self._toc = TocRenderer(surface, config, theme)
        self.report = RenderReport()

    # ------------------------------------------------------------------
    # Public API
    def render(self, files: Sequence[HighlightedFile]) -> int:
        """Lay out the complete document and return its physical page count."""
        ordered = ordered_files(files)
        self.report = RenderReport()
        cursor = PageCursor(PageCursorState.initial(self._config))

        self._add_cover(cursor)

        toc_pages: List[List[TocRow]] = []
        if len(ordered) > 1:
            toc_pages = self._toc.paginate(ordered)
        else:
            LOGGER.info("Skipping table of contents (%d file)", len(ordered))

        first_logical_page = 1 + len(toc_pages)
        if toc_pages:
            estimates = TocEstimator(self._config).estimate(ordered, first_logical_page)
            self.report.estimates = dict(estimates)
            self._add_toc(cursor, toc_pages, estimates)

        cursor.begin_file_content(first_logical_page)
        state = self._render_files(ordered, cursor.state)

        self.report.physical_page_count = state.physical_page
        self.report.toc_page_count = len(toc_pages)
        LOGGER.info(
            "Laid out %d page(s): 1 cover, %d table of contents, %d file page(s)",
            state.physical_page,
            len(toc_pages),
            state.physical_page - 1 - len(toc_pages),
        )
        return state.physical_page

    # ------------------------------------------------------------------
    # Sections
    def _add_cover(self, cursor: PageCursor) -> None:
        config = self._config
        surface = self._surface
        cursor.advance_page()
        surface.add_page(config.page_width, config.page_height)

        left = config.margins.left
        width = config.content_width
        centered = TextOptions(width=width, align=ALIGN_CENTER, truncate_with_ellipsis=True)
        content_height = config.page_height - config.margins.top - config.margins.bottom
        y = config.margins.top + content_height * COVER_TITLE_POSITION

        surface.set_font(font_variant(config.text_font, FontStyle.BOLD), COVER_TITLE_SIZE_PT)
        surface.set_fill_color(self._theme.default_color)
        surface.draw_text(config.title, left, y, centered)
        y += COVER_TITLE_SIZE_PT * 1.2 + 2 * COVER_REPO_SIZE_PT * 1.2

        surface.set_font(config.text_font, COVER_REPO_SIZE_PT)
        surface.draw_text(f"Repository: {self._repo_name}", left, y, centered)
        y += COVER_REPO_SIZE_PT * 1.2 + COVER_DATE_SIZE_PT * 1.2

        generated_at = self._generated_at or datetime.now()
        surface.set_font(config.text_font, COVER_DATE_SIZE_PT)
        surface.set_fill_color(self._theme.muted_text_color)
        surface.draw_text(f"Generated: {generated_at.strftime(TIMESTAMP_FORMAT)}", left, y, centered)

        LOGGER.info("Added cover page")

    def _add_toc(self, cursor: PageCursor, pages: List[List[TocRow]], estimates: Dict[str, int]) -> None:
        cursor.enter_toc()
        for index, rows in enumerate(pages):
            cursor.advance_page()
            self._surface.add_page(self._config.page_width, self._config.page_height)
            self._toc.draw_page(rows, estimates, first=index == 0)
        LOGGER.info("Added table of contents (%d page(s))", len(pages))

    def _render_files(self, files: Sequence[HighlightedFile], state: PageCursorState) -> PageCursorState:
        for file in files:
            start_page = state.logical_page + 1
            self.report.actual_start_pages[file.relative_path] = start_page

            try:
                state = self._file_renderer.render_file(file, state)
            except FileRenderError as exc:
                reason = str(exc.__cause__ or exc)
                LOGGER.error("Could not render %s: %s", file.relative_path, reason)
                self.report.failed_files[file.relative_path] = reason
                state = self._add_placeholder(file, exc.state, reason)

            estimated = self.report.estimates.get(file.relative_path)
            if estimated is not None and estimated != start_page:
                LOGGER.info("TOC estimate for %s was page %d, actual %d", file.relative_path, estimated, start_page)
        return state

    def _add_placeholder(self, file: HighlightedFile, state: PageCursorState, reason: str) -> PageCursorState:
        """Emit one chrome-decorated page stating that ``file`` could not be rendered.

        The surface cannot take pages back, so any pages the file drew before it
        failed stay in the document and the placeholder follows them. If the
        chrome itself is what failed, the page carries only the error line.
        """
        config = self._config
        cursor = PageCursor(state)
        page_state = cursor.advance_page()
        self._surface.add_page(config.page_width, config.page_height)
        try:
            self._decorator.draw_chrome(page_state, file)
        except OSError:
            raise
        except Exception as exc:
            LOGGER.warning("Drawing placeholder page for %s without chrome: %s", file.relative_path, exc)

        x = config.code_start_x(file.max_line_number)
        self._surface.set_font(config.code_font, config.font_size)
        self._surface.set_fill_color(self._theme.muted_text_color)
        self._surface.draw_text(
            f"Could not render {file.relative_path}: {reason}",
            x,
            page_state.current_y,
            TextOptions(width=config.code_width(file.max_line_number), truncate_with_ellipsis=True),
        )
        return cursor.advance_line(config.line_height)
