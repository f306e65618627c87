"""Immutable page geometry shared by every layout component for one run."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from code_renderer.utils.units import PAPER_SIZES, parse_paper_size

DEFAULT_FONT_SIZE_PT = 9.0
DEFAULT_LINE_HEIGHT_MULTIPLIER = 1.4
DEFAULT_CODE_BLOCK_PADDING_PT = 10.0
DEFAULT_GUTTER_GAP_PT = 10.0
DEFAULT_MIN_GUTTER_WIDTH_PT = 35.0
GUTTER_DIGIT_WIDTH_FACTOR = 0.65
MONOSPACE_WIDTH_FACTOR = 0.6  # Courier advance width is 600/1000 em
MIN_FONT_SIZE_PT = 2.0
MAX_FONT_SIZE_PT = 72.0

# Absorbs float drift when y positions are accumulated line by line.
GEOMETRY_EPSILON = 1e-6


@dataclass(frozen=True, slots=True)
class Margins:
    top: float = 50.0
    right: float = 40.0
    bottom: float = 50.0
    left: float = 40.0


@dataclass(frozen=True, slots=True)
class LayoutConfig:
    """Fonts, page size, margins and spacing policy for a document run."""

    font_size: float = DEFAULT_FONT_SIZE_PT
    code_font: str = "Courier"
    text_font: str = "Helvetica"
    page_width: float = PAPER_SIZES["A4"][0]
    page_height: float = PAPER_SIZES["A4"][1]
    margins: Margins = Margins()
    header_height: float = 25.0
    footer_height: float = 25.0
    show_line_numbers: bool = True
    line_height_multiplier: float = DEFAULT_LINE_HEIGHT_MULTIPLIER
    code_block_padding: float = DEFAULT_CODE_BLOCK_PADDING_PT
    gutter_gap: float = DEFAULT_GUTTER_GAP_PT
    min_gutter_width: float = DEFAULT_MIN_GUTTER_WIDTH_PT
    wrap_indent_chars: int = 2
    wrap_marker: str = "»"
    chrome_font_size: float = 9.0
    title: str = "Code Repository Documentation"
    toc_title: str = "Table of Contents"

    def __post_init__(self) -> None:
        if not MIN_FONT_SIZE_PT < self.font_size <= MAX_FONT_SIZE_PT:
            raise ValueError(
                f"Invalid font size {self.font_size}: must be greater than {MIN_FONT_SIZE_PT:g} "
                f"and at most {MAX_FONT_SIZE_PT:g} points"
            )
        if self.page_width <= 0 or self.page_height <= 0:
            raise ValueError("Page dimensions must be positive")
        if self.line_height_multiplier <= 0:
            raise ValueError("Line height multiplier must be positive")
        if self.wrap_indent_chars < 0:
            raise ValueError("Wrap indent cannot be negative")
        if self.content_width <= 0:
            raise ValueError("Horizontal margins leave no room for content")
        if self.content_height < self.line_height:
            raise ValueError("Vertical margins, header and footer leave no room for a single code line")

    @classmethod
    def from_options(
        cls,
        *,
        font_size: float = DEFAULT_FONT_SIZE_PT,
        paper_size: str | Tuple[float, float] = "A4",
        show_line_numbers: bool = True,
        title: Optional[str] = None,
        **overrides,
    ) -> "LayoutConfig":
        """Build a config from CLI-style options, resolving named paper sizes."""
        if isinstance(paper_size, str):
            width, height = parse_paper_size(paper_size)
        else:
            width, height = paper_size
        if title is not None:
            overrides["title"] = title
        return cls(
            font_size=float(font_size),
            page_width=float(width),
            page_height=float(height),
            show_line_numbers=show_line_numbers,
            **overrides,
        )

    # ------------------------------------------------------------------
    # Vertical geometry
    @property
    def line_height(self) -> float:
        return self.font_size * self.line_height_multiplier

    @property
    def code_area_top(self) -> float:
        """Top edge of the code block, directly below the header band."""
        return self.margins.top + self.header_height

    @property
    def code_area_bottom(self) -> float:
        return self.page_height - self.margins.bottom - self.footer_height

    @property
    def code_area_height(self) -> float:
        return self.code_area_bottom - self.code_area_top

    @property
    def page_top(self) -> float:
        """First y position a code line may occupy."""
        return self.code_area_top + self.code_block_padding / 2

    @property
    def page_bottom(self) -> float:
        """No code line may extend below this y position."""
        return self.code_area_bottom - self.code_block_padding / 2

    @property
    def content_height(self) -> float:
        return self.page_bottom - self.page_top

    @property
    def lines_per_page(self) -> int:
        """Code lines that fit between ``page_top`` and ``page_bottom``."""
        return max(1, math.floor(self.content_height / self.line_height + GEOMETRY_EPSILON))

    # ------------------------------------------------------------------
    # Horizontal geometry
    @property
    def content_width(self) -> float:
        return self.page_width - self.margins.left - self.margins.right

    @property
    def fallback_char_width(self) -> float:
        """Monospace advance used when a string cannot be measured."""
        return self.font_size * MONOSPACE_WIDTH_FACTOR

    @staticmethod
    def line_number_digits(max_line_number: int) -> int:
        return len(str(max(1, max_line_number)))

    def gutter_width(self, max_line_number: int) -> float:
        """Width of the line-number column, or 0 when line numbers are hidden."""
        if not self.show_line_numbers:
            return 0.0
        digits = self.line_number_digits(max_line_number)
        return max(
            digits * self.font_size * GUTTER_DIGIT_WIDTH_FACTOR + self.code_block_padding,
            self.min_gutter_width + self.code_block_padding,
        )

    def code_start_x(self, max_line_number: int) -> float:
        if self.show_line_numbers:
            return self.margins.left + self.gutter_width(max_line_number) + self.gutter_gap
        return self.margins.left + self.code_block_padding

    def code_width(self, max_line_number: int) -> float:
        """Horizontal room for code text, excluding gutter and right padding."""
        used = self.code_start_x(max_line_number) - self.margins.left
        return max(self.content_width - used - self.code_block_padding, 0.0)
