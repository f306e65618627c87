"""Tests for layout configuration and derived geometry."""
import unittest

from code_renderer.model.layout_config import LayoutConfig, Margins
from code_renderer.tests.fakes import fifty_line_config
from code_renderer.utils.units import PAPER_SIZES


class LayoutConfigTest(unittest.TestCase):
    """Validate defaults, validation and geometry helpers."""

    def test_defaults(self) -> None:
        config = LayoutConfig()

        self.assertEqual(config.font_size, 9.0)
        self.assertEqual((config.page_width, config.page_height), PAPER_SIZES["A4"])
        self.assertEqual(config.margins, Margins(top=50.0, right=40.0, bottom=50.0, left=40.0))
        self.assertAlmostEqual(config.line_height, 12.6)
        self.assertEqual(config.code_font, "Courier")

    def test_vertical_geometry(self) -> None:
        config = fifty_line_config()

        self.assertEqual(config.code_area_top, 40.0)
        self.assertEqual(config.code_area_bottom, 550.0)
        self.assertEqual(config.page_top, 45.0)
        self.assertEqual(config.page_bottom, 545.0)
        self.assertEqual(config.content_height, 500.0)
        self.assertEqual(config.lines_per_page, 50)

    def test_lines_per_page_is_at_least_one(self) -> None:
        config = fifty_line_config(font_size=10.0, line_height_multiplier=49.0)

        self.assertEqual(config.lines_per_page, 1)

    def test_gutter_width_has_minimum_and_grows_with_digits(self) -> None:
        config = LayoutConfig(font_size=10.0)

        self.assertEqual(config.gutter_width(9), 45.0)
        self.assertEqual(config.gutter_width(99999), 45.0)
        self.assertAlmostEqual(config.gutter_width(1234567), 7 * 6.5 + 10.0)

    def test_code_start_depends_on_line_numbers(self) -> None:
        with_numbers = LayoutConfig(font_size=10.0)
        without_numbers = LayoutConfig(font_size=10.0, show_line_numbers=False)

        self.assertEqual(with_numbers.code_start_x(10), 40.0 + 45.0 + 10.0)
        self.assertEqual(without_numbers.code_start_x(10), 50.0)
        self.assertEqual(without_numbers.gutter_width(10), 0.0)
        self.assertAlmostEqual(without_numbers.code_width(10), without_numbers.content_width - 20.0)

    def test_line_number_digits(self) -> None:
        cases = [(0, 1), (1, 1), (9, 1), (10, 2), (999, 3), (1000, 4)]
        for max_line, digits in cases:
            with self.subTest(max_line=max_line):
                self.assertEqual(LayoutConfig.line_number_digits(max_line), digits)

    def test_invalid_values_raise(self) -> None:
        cases = [
            dict(font_size=2.0),
            dict(font_size=100.0),
            dict(page_width=0.0),
            dict(line_height_multiplier=0.0),
            dict(wrap_indent_chars=-1),
            dict(margins=Margins(left=300.0, right=300.0)),
            dict(page_height=150.0),
        ]
        for options in cases:
            with self.subTest(options=options):
                with self.assertRaises(ValueError):
                    LayoutConfig(**options)

    def test_from_options_resolves_paper_size(self) -> None:
        config = LayoutConfig.from_options(font_size=11, paper_size="letter", show_line_numbers=False, title="Demo")

        self.assertEqual((config.page_width, config.page_height), (612.0, 792.0))
        self.assertEqual(config.font_size, 11.0)
        self.assertFalse(config.show_line_numbers)
        self.assertEqual(config.title, "Demo")

    def test_from_options_accepts_custom_size_and_overrides(self) -> None:
        config = LayoutConfig.from_options(paper_size="500,700", wrap_marker=">")

        self.assertEqual((config.page_width, config.page_height), (500.0, 700.0))
        self.assertEqual(config.wrap_marker, ">")

    def test_config_is_frozen(self) -> None:
        config = LayoutConfig()

        with self.assertRaises(AttributeError):
            config.font_size = 12.0


if __name__ == "__main__":
    unittest.main()
