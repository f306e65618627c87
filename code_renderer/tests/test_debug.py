"""Tests for the render report and its JSON dump."""
import json
import tempfile
import unittest
from pathlib import Path

from code_renderer.model.document_model import RenderReport
from code_renderer.utils.debug import REPORT_FILENAME, DebugDumper


class RenderReportTest(unittest.TestCase):
    """Validate divergence detection and persistence."""

    def setUp(self) -> None:
        self.report = RenderReport(
            physical_page_count=9,
            toc_page_count=1,
            estimates={"a.py": 2, "b.py": 4, "c.py": 7},
            actual_start_pages={"a.py": 2, "b.py": 5, "c.py": 7},
            failed_files={"c.py": "bad token"},
        )

    def test_divergences(self) -> None:
        self.assertEqual(self.report.divergences(), {"b.py": (4, 5)})
        self.assertEqual(RenderReport().divergences(), {})

    def test_dump_writes_json(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            directory = Path(tmp) / "debug"

            target = DebugDumper(directory).dump(self.report)

            self.assertEqual(target, directory / REPORT_FILENAME)
            payload = json.loads(target.read_text(encoding="utf-8"))

        self.assertEqual(payload["physical_page_count"], 9)
        self.assertEqual(payload["toc_page_count"], 1)
        self.assertEqual(payload["failed_files"], {"c.py": "bad token"})
        self.assertEqual(payload["divergences"], {"b.py": [4, 5]})


if __name__ == "__main__":
    unittest.main()
