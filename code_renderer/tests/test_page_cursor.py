"""Tests for vertical flow and page numbering."""
import unittest

from code_renderer.layout.page_cursor import PageCursor, PageCursorState, RenderPhase
from code_renderer.tests.fakes import fifty_line_config


class PageCursorTest(unittest.TestCase):
    """Validate overflow checks, page advances and phase transitions."""

    def setUp(self) -> None:
        self.config = fifty_line_config()
        self.cursor = PageCursor(PageCursorState.initial(self.config))

    def test_initial_state_precedes_first_page(self) -> None:
        state = self.cursor.state

        self.assertEqual(state.physical_page, 0)
        self.assertEqual(state.logical_page, 0)
        self.assertIs(state.phase, RenderPhase.COVER)
        self.assertEqual(state.page_top, 45.0)
        self.assertEqual(state.page_bottom, 545.0)

    def test_would_overflow_only_past_page_bottom(self) -> None:
        cases = [
            (535.0, 10.0, False),
            (536.0, 10.0, True),
            (45.0, 10.0, False),
            (545.0, 0.5, True),
        ]
        for current_y, line_height, expected in cases:
            with self.subTest(current_y=current_y, line_height=line_height):
                cursor = PageCursor(
                    PageCursorState(
                        physical_page=1,
                        logical_page=1,
                        current_y=current_y,
                        page_top=45.0,
                        page_bottom=545.0,
                    )
                )
                self.assertEqual(cursor.would_overflow(line_height), expected)

    def test_accumulated_lines_fill_page_exactly(self) -> None:
        cursor = PageCursor(PageCursorState.initial(fifty_line_config(line_height_multiplier=1.1)))
        line_height = 11.0
        rows = 0
        while not cursor.would_overflow(line_height):
            cursor.advance_line(line_height)
            rows += 1

        self.assertEqual(rows, 45)
        self.assertLessEqual(cursor.state.current_y, cursor.state.page_bottom + 1e-6)

    def test_cover_and_toc_pages_do_not_advance_logical_numbers(self) -> None:
        self.cursor.advance_page()
        self.cursor.enter_toc()
        self.cursor.advance_page()

        self.assertEqual(self.cursor.state.physical_page, 2)
        self.assertEqual(self.cursor.state.logical_page, 0)

    def test_file_pages_advance_logical_numbers(self) -> None:
        self.cursor.advance_page()
        self.cursor.begin_file_content(2)
        first = self.cursor.advance_page()
        second = self.cursor.advance_page()

        self.assertEqual((first.physical_page, first.logical_page), (2, 2))
        self.assertEqual((second.physical_page, second.logical_page), (3, 3))
        self.assertEqual(second.current_y, second.page_top)

    def test_moves_do_not_mutate_previous_states(self) -> None:
        before = self.cursor.state
        self.cursor.advance_line(10.0)
        self.cursor.advance_page()

        self.assertEqual(before.current_y, 45.0)
        self.assertEqual(before.physical_page, 0)

    def test_phase_cannot_move_backwards(self) -> None:
        self.cursor.begin_file_content(1)

        with self.assertRaises(ValueError):
            self.cursor.enter_toc()

    def test_first_logical_page_must_be_positive(self) -> None:
        with self.assertRaises(ValueError):
            self.cursor.begin_file_content(0)


if __name__ == "__main__":
    unittest.main()
