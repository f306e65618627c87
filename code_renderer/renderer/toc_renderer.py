"""Table of contents pages: pagination of entries and drawing with dot leaders."""
from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import List, Mapping, Sequence

from code_renderer.layout.toc_estimator import ordered_files
from code_renderer.model.elements import FontStyle, HighlightedFile, font_variant
from code_renderer.model.layout_config import GEOMETRY_EPSILON, LayoutConfig
from code_renderer.model.theme_model import Theme
from code_renderer.renderer.surface import ALIGN_CENTER, ALIGN_RIGHT, DrawingSurface, TextOptions

TOC_TITLE_SIZE_PT = 18.0
TOC_ENTRY_SIZE_PT = 12.0
TOC_LINE_HEIGHT_PT = TOC_ENTRY_SIZE_PT * 1.2
TOC_TITLE_BLOCK_PT = TOC_TITLE_SIZE_PT * 1.2 + 2 * TOC_LINE_HEIGHT_PT
TOC_DIRECTORY_ROW_PT = TOC_LINE_HEIGHT_PT * 1.5
TOC_INDENT_PT = 20.0
TOC_DOT_PADDING_PT = 5.0
DOT_LEADER = ". "

ROW_DIRECTORY = "directory"
ROW_FILE = "file"


@dataclass(frozen=True, slots=True)
class TocRow:
    """One line of the table of contents."""

    kind: str
    text: str
    file_path: str = ""
    indent: float = 0.0

    @property
    def height(self) -> float:
        return TOC_DIRECTORY_ROW_PT if self.kind == ROW_DIRECTORY else TOC_LINE_HEIGHT_PT


def build_rows(files: Sequence[HighlightedFile]) -> List[TocRow]:
    """Rows in document order, with a heading whenever the parent directory changes."""
    rows: List[TocRow] = []
    current_dir = None
    for file in ordered_files(files):
        directory = posixpath.dirname(file.relative_path)
        if directory != current_dir:
            current_dir = directory
            if directory:
                rows.append(TocRow(kind=ROW_DIRECTORY, text=f"/{directory}"))
        rows.append(
            TocRow(
                kind=ROW_FILE,
                text=posixpath.basename(file.relative_path),
                file_path=file.relative_path,
                indent=TOC_INDENT_PT if directory else 0.0,
            )
        )
    return rows


class TocRenderer:
    """Splits TOC rows into pages and draws them.

    Pagination depends only on the file list, never on page numbers, so the
    number of TOC pages is known before any page estimate is made.
    """

    def __init__(self, surface: DrawingSurface, config: LayoutConfig, theme: Theme) -> None:
        self._surface = surface
        self._config = config
        self._theme = theme

    @property
    def _top(self) -> float:
        return self._config.margins.top

    @property
    def _bottom(self) -> float:
        return self._config.page_height - self._config.margins.bottom

    def paginate(self, files: Sequence[HighlightedFile]) -> List[List[TocRow]]:
        rows = build_rows(files)
        pages: List[List[TocRow]] = [[]]
        y = self._top + TOC_TITLE_BLOCK_PT

        for index, row in enumerate(rows):
            needed = row.height
            if row.kind == ROW_DIRECTORY and index + 1 < len(rows):
                # Keep a heading together with its first entry.
                needed += rows[index + 1].height
            if pages[-1] and y + needed > self._bottom + GEOMETRY_EPSILON:
                pages.append([])
                y = self._top
            pages[-1].append(row)
            y += row.height

        return pages

    def draw_page(self, rows: Sequence[TocRow], estimates: Mapping[str, int], first: bool) -> None:
        config = self._config
        left = config.margins.left
        width = config.content_width
        y = self._top

        if first:
            self._surface.set_font(font_variant(config.text_font, FontStyle.BOLD), TOC_TITLE_SIZE_PT)
            self._surface.set_fill_color(self._theme.default_color)
            self._surface.draw_text(config.toc_title, left, y, TextOptions(width=width, align=ALIGN_CENTER))
            y += TOC_TITLE_BLOCK_PT

        for row in rows:
            if row.kind == ROW_DIRECTORY:
                self._draw_directory(row, y + (TOC_DIRECTORY_ROW_PT - TOC_LINE_HEIGHT_PT))
            else:
                self._draw_entry(row, y, estimates)
            y += row.height

    # ------------------------------------------------------------------
    # Row drawing
    def _draw_directory(self, row: TocRow, y: float) -> None:
        config = self._config
        self._surface.set_font(font_variant(config.text_font, FontStyle.BOLD), TOC_ENTRY_SIZE_PT)
        self._surface.set_fill_color(self._theme.default_color)
        self._surface.draw_text(
            row.text,
            config.margins.left,
            y,
            TextOptions(width=config.content_width, truncate_with_ellipsis=True),
        )

    def _draw_entry(self, row: TocRow, y: float, estimates: Mapping[str, int]) -> None:
        config = self._config
        font = config.text_font
        surface = self._surface
        start_x = config.margins.left + row.indent
        right_edge = config.margins.left + config.content_width

        page_label = str(estimates[row.file_path]) if row.file_path in estimates else "?"
        label_width = surface.measure_width(font, TOC_ENTRY_SIZE_PT, page_label)
        name_room = max(right_edge - start_x - label_width - 2 * TOC_DOT_PADDING_PT, 0.0)

        surface.set_font(font, TOC_ENTRY_SIZE_PT)
        surface.set_fill_color(self._theme.default_color)
        surface.draw_text(row.text, start_x, y, TextOptions(width=name_room, truncate_with_ellipsis=True))
        surface.draw_text(page_label, right_edge - label_width, y, TextOptions(width=label_width, align=ALIGN_RIGHT))

        name_width = min(surface.measure_width(font, TOC_ENTRY_SIZE_PT, row.text), name_room)
        dots_start = start_x + name_width + TOC_DOT_PADDING_PT
        dots_room = right_edge - label_width - TOC_DOT_PADDING_PT - dots_start
        dot_width = surface.measure_width(font, TOC_ENTRY_SIZE_PT, DOT_LEADER)
        if dot_width > 0 and dots_room > dot_width:
            surface.set_fill_color(self._theme.toc_leader_color)
            surface.draw_text(DOT_LEADER * int(dots_room // dot_width), dots_start, y)
