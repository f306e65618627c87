"""Tests for horizontal token wrapping."""
import unittest

from code_renderer.layout.token_wrapper import TokenWrapper
from code_renderer.model.elements import FontStyle, StyledToken
from code_renderer.model.layout_config import LayoutConfig
from code_renderer.tests.fakes import FixedWidthMetrics


class ZeroWidthMetrics:
    def measure_width(self, font, size, text):
        return 0.0


class ExplodingMetrics:
    """Fails for bold text only."""

    def measure_width(self, font, size, text):
        if font.endswith("-Bold"):
            raise KeyError(font)
        return float(len(text))


def tokens(*texts):
    return [StyledToken(text=text) for text in texts]


class TokenWrapperTest(unittest.TestCase):
    """Validate row breaking and text preservation."""

    def setUp(self) -> None:
        self.config = LayoutConfig(font_size=10.0, wrap_indent_chars=0)
        self.wrapper = TokenWrapper(self.config, FixedWidthMetrics(1.0))

    def test_segments_concatenate_to_input_text(self) -> None:
        cases = {
            "short line": (tokens("def", " ", "main", "():"), 40.0),
            "many tokens across rows": (tokens(*["abc "] * 30), 17.0),
            "single long token": (tokens("y" * 123), 10.0),
            "zero width column": (tokens("abc", "de"), 0.0),
            "empty line": ((), 40.0),
            "only empty tokens": (tokens("", ""), 40.0),
        }
        for name, (line_tokens, width) in cases.items():
            with self.subTest(name=name):
                rows = self.wrapper.wrap(line_tokens, 0.0, width)
                expected = "".join(token.text for token in line_tokens)
                self.assertEqual("".join(row.text for row in rows), expected)
                self.assertGreaterEqual(len(rows), 1)

    def test_empty_line_yields_single_empty_row(self) -> None:
        rows = self.wrapper.wrap((), 12.0, 40.0)

        self.assertEqual(len(rows), 1)
        self.assertTrue(rows[0].is_empty)
        self.assertEqual(rows[0].start_x, 12.0)

    def test_long_unbroken_token_splits_into_full_rows(self) -> None:
        rows = self.wrapper.wrap(tokens("q" * 500), 0.0, 40.0)

        self.assertEqual(len(rows), 13)
        for row in rows:
            self.assertEqual(len(row.segments), 1)
        self.assertEqual([len(row.text) for row in rows], [40] * 12 + [20])
        self.assertEqual("".join(row.text for row in rows), "q" * 500)

    def test_token_moves_whole_to_next_row_when_it_fits_there(self) -> None:
        rows = self.wrapper.wrap(tokens("aaaaaa", "bbbbbb"), 0.0, 10.0)

        self.assertEqual([row.text for row in rows], ["aaaaaa", "bbbbbb"])
        self.assertEqual(rows[1].segments[0].x_offset, 0.0)

    def test_wrapped_rows_are_indented(self) -> None:
        config = LayoutConfig(font_size=10.0, wrap_indent_chars=2)
        wrapper = TokenWrapper(config, FixedWidthMetrics(1.0))

        rows = wrapper.wrap(tokens("a" * 25), 100.0, 10.0)

        self.assertEqual(wrapper.wrap_indent_width, 2.0)
        self.assertEqual(rows[0].start_x, 100.0)
        for row in rows[1:]:
            self.assertEqual(row.start_x, 102.0)
            self.assertEqual(row.segments[0].x_offset, 102.0)
        self.assertEqual([len(row.text) for row in rows], [10, 8, 7])

    def test_segment_offsets_advance_by_measured_width(self) -> None:
        rows = self.wrapper.wrap(tokens("ab", "cde", "f"), 5.0, 40.0)

        offsets = [segment.x_offset for segment in rows[0].segments]
        self.assertEqual(offsets, [5.0, 7.0, 10.0])

    def test_zero_available_width_forces_one_character_per_row(self) -> None:
        rows = self.wrapper.wrap(tokens("hello"), 0.0, 0.0)

        self.assertEqual([row.text for row in rows], ["h", "e", "l", "l", "o"])

    def test_zero_width_metrics_terminate(self) -> None:
        wrapper = TokenWrapper(self.config, ZeroWidthMetrics())

        rows = wrapper.wrap(tokens("x" * 1000), 0.0, 0.0)

        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0].text, "x" * 1000)

    def test_segments_keep_token_style_and_color(self) -> None:
        token = StyledToken(text="return", color="#d73a49", style=FontStyle.BOLD)

        rows = self.wrapper.wrap([token], 0.0, 4.0)

        for row in rows:
            segment = row.segments[0]
            self.assertEqual(segment.color, "#d73a49")
            self.assertIs(segment.style, FontStyle.BOLD)

    def test_metrics_failure_falls_back_to_monospace_estimate(self) -> None:
        wrapper = TokenWrapper(self.config, ExplodingMetrics())
        bold = StyledToken(text="abcd", style=FontStyle.BOLD)

        with self.assertLogs("code_renderer.layout.token_wrapper", level="WARNING") as captured:
            rows = wrapper.wrap([bold, StyledToken(text="z")], 0.0, 100.0)

        self.assertEqual(rows[0].text, "abcdz")
        # Four characters at 10pt * 0.6 put the next token at x = 24.
        self.assertAlmostEqual(rows[0].segments[1].x_offset, 24.0)
        self.assertIn("monospace estimate", captured.output[0])


if __name__ == "__main__":
    unittest.main()
