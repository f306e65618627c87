"""Vertical flow and page bookkeeping for the rendered document."""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum

from code_renderer.model.layout_config import GEOMETRY_EPSILON, LayoutConfig


class RenderPhase(IntEnum):
    """Document sections in the order they are produced."""

    COVER = 0
    TOC = 1
    FILE_CONTENT = 2


@dataclass(frozen=True, slots=True)
class PageCursorState:
    """Position of the layout flow.

    ``physical_page`` counts every page in the document, cover and table of
    contents included; it is 0 before the first page is opened.
    ``logical_page`` is the number printed in code-page footers and only moves
    while file content is being laid out.
    """

    physical_page: int
    logical_page: int
    current_y: float
    page_top: float
    page_bottom: float
    phase: RenderPhase = RenderPhase.COVER

    @classmethod
    def initial(cls, config: LayoutConfig) -> "PageCursorState":
        return cls(
            physical_page=0,
            logical_page=0,
            current_y=config.page_top,
            page_top=config.page_top,
            page_bottom=config.page_bottom,
        )


class PageCursor:
    """Applies page and line moves to a ``PageCursorState``.

    The state itself is immutable; every move replaces ``self.state`` with a
    new value so callers can hand the latest state to the next component.
    """

    def __init__(self, state: PageCursorState) -> None:
        self.state = state

    def would_overflow(self, line_height: float) -> bool:
        """True when a row of ``line_height`` would cross ``page_bottom``."""
        return self.state.current_y + line_height > self.state.page_bottom + GEOMETRY_EPSILON

    def advance_page(self) -> PageCursorState:
        state = self.state
        logical = state.logical_page + 1 if state.phase is RenderPhase.FILE_CONTENT else state.logical_page
        self.state = replace(
            state,
            physical_page=state.physical_page + 1,
            logical_page=logical,
            current_y=state.page_top,
        )
        return self.state

    def advance_line(self, line_height: float) -> PageCursorState:
        self.state = replace(self.state, current_y=self.state.current_y + line_height)
        return self.state

    def enter_toc(self) -> PageCursorState:
        return self._enter(RenderPhase.TOC)

    def begin_file_content(self, first_logical_page: int) -> PageCursorState:
        """Switch to file content; the next page opened shows ``first_logical_page``."""
        if first_logical_page < 1:
            raise ValueError(f"Logical page numbers start at 1, got {first_logical_page}")
        self._enter(RenderPhase.FILE_CONTENT)
        self.state = replace(self.state, logical_page=first_logical_page - 1)
        return self.state

    def _enter(self, phase: RenderPhase) -> PageCursorState:
        if phase < self.state.phase:
            raise ValueError(f"Cannot move from {self.state.phase.name} back to {phase.name}")
        self.state = replace(self.state, phase=phase)
        return self.state
