"""Tests for paper size parsing."""
import unittest

from code_renderer.utils.units import parse_paper_size


class UnitsTest(unittest.TestCase):
    """Validate paper size names and custom sizes."""

    def test_named_sizes_are_case_insensitive(self) -> None:
        cases = {
            "A4": (595.28, 841.89),
            "a4": (595.28, 841.89),
            "Letter": (612.0, 792.0),
            " LETTER ": (612.0, 792.0),
        }
        for name, expected in cases.items():
            with self.subTest(name=name):
                self.assertEqual(parse_paper_size(name), expected)

    def test_custom_size(self) -> None:
        self.assertEqual(parse_paper_size("400, 600.5"), (400.0, 600.5))

    def test_invalid_sizes_raise(self) -> None:
        for value in ["", "A5", "100", "100,abc", "1,2,3", "-10,200", "0,0"]:
            with self.subTest(value=value):
                with self.assertRaises(ValueError):
                    parse_paper_size(value)


if __name__ == "__main__":
    unittest.main()
