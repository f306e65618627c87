"""In-memory representation of highlighted sources and their rendered rows."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class FontStyle(Enum):
    """Closed set of font styles a token can be drawn with."""

    NORMAL = "normal"
    BOLD = "bold"
    ITALIC = "italic"


# Standard PDF font families and their styled variants.
_FONT_VARIANTS: Dict[str, Dict[FontStyle, str]] = {
    "Courier": {FontStyle.BOLD: "Courier-Bold", FontStyle.ITALIC: "Courier-Oblique"},
    "Helvetica": {FontStyle.BOLD: "Helvetica-Bold", FontStyle.ITALIC: "Helvetica-Oblique"},
    "Times-Roman": {FontStyle.BOLD: "Times-Bold", FontStyle.ITALIC: "Times-Italic"},
}


def font_variant(base_font: str, style: FontStyle) -> str:
    """Return the concrete font name for ``base_font`` drawn in ``style``."""
    if style is FontStyle.NORMAL:
        return base_font
    variants = _FONT_VARIANTS.get(base_font)
    if variants is not None:
        return variants[style]
    suffix = "-Bold" if style is FontStyle.BOLD else "-Italic"
    return base_font + suffix


@dataclass(frozen=True, slots=True)
class StyledToken:
    """A run of source text sharing one color and font style."""

    text: str
    color: Optional[str] = None
    style: FontStyle = FontStyle.NORMAL


@dataclass(frozen=True, slots=True)
class SourceLine:
    """One line of a source file split into styled tokens."""

    line_number: int
    tokens: Tuple[StyledToken, ...] = ()

    @property
    def text(self) -> str:
        return "".join(token.text for token in self.tokens)


@dataclass(frozen=True, slots=True)
class SourceFile:
    """A text file picked up from the repository, before highlighting."""

    absolute_path: str
    relative_path: str
    content: str
    extension: str = ""


@dataclass(frozen=True, slots=True)
class HighlightedFile:
    """A source file whose lines have been tokenized and styled."""

    relative_path: str
    language: str
    lines: Tuple[SourceLine, ...] = ()

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def max_line_number(self) -> int:
        """Largest line number in the file, at least 1 so gutters never collapse."""
        if not self.lines:
            return 1
        return max(line.line_number for line in self.lines)


@dataclass(frozen=True, slots=True)
class Segment:
    """A piece of a token placed at an absolute horizontal offset."""

    text: str
    color: Optional[str]
    style: FontStyle
    x_offset: float


@dataclass(slots=True)
class VisualLine:
    """One physically drawn row; a whole source line or a wrapped fragment of it."""

    start_x: float
    segments: List[Segment] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(segment.text for segment in self.segments)

    @property
    def is_empty(self) -> bool:
        return not self.segments


@dataclass(frozen=True, slots=True)
class PageEstimate:
    """Estimated logical start page of a file, as listed in the table of contents."""

    file_path: str
    start_logical_page: int
