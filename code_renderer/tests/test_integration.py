"""
Integration tests for the complete rendering pipeline.

Tests the end-to-end flow from a source directory to a written PDF file.
"""

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from code_renderer.main import cli, run, write_output
from code_renderer.model.layout_config import LayoutConfig
from code_renderer.model.theme_model import DARK_THEME
from code_renderer.renderer.document_assembler import DocumentAssembler
from code_renderer.renderer.pdf_surface import PdfSurface
from code_renderer.tests.fakes import make_file, make_file_from_lines


class IntegrationTest(unittest.TestCase):
    """Integration tests for complete source-to-PDF processing."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.workdir = Path(self._tmp.name)
        self.repo = self.workdir / "demo-repo"
        (self.repo / "pkg").mkdir(parents=True)
        (self.repo / "pkg" / "core.py").write_text(
            "# Core helpers\n\ndef add(a, b):\n    return a + b\n" + "x = 1\n" * 120,
            encoding="utf-8",
        )
        (self.repo / "README.md").write_text("# Demo\n\nSome words.\n", encoding="utf-8")
        (self.repo / "image.png").write_bytes(b"\x89PNG\r\n\x1a\n\x00\x00")

    def tearDown(self):
        self._tmp.cleanup()

    def test_pdf_surface_produces_pdf_bytes(self):
        """Render directly onto the ReportLab surface."""
        surface = PdfSurface(title="Demo")
        files = [
            make_file("a.py", 60),
            make_file_from_lines("b.py", ["w" * 400, "", "short"]),
        ]

        pages = DocumentAssembler(surface, LayoutConfig(), DARK_THEME, repo_name="demo").render(files)
        data = surface.finish()

        self.assertEqual(pages, surface.page_count)
        self.assertTrue(data.startswith(b"%PDF"))
        self.assertIs(surface.finish(), data)

    def test_run_writes_pdf_and_report(self):
        """Run the whole pipeline on a small repository."""
        output = self.workdir / "out" / "code.pdf"
        debug_dir = self.workdir / "debug"

        report = run(str(self.repo), str(output), title="Demo", debug_dir=str(debug_dir))

        self.assertTrue(output.read_bytes().startswith(b"%PDF"))
        self.assertEqual(sorted(report.actual_start_pages), ["README.md", "pkg/core.py"])
        self.assertEqual(report.toc_page_count, 1)
        self.assertEqual(report.failed_files, {})
        payload = json.loads((debug_dir / "render_report.json").read_text(encoding="utf-8"))
        self.assertEqual(payload["physical_page_count"], report.physical_page_count)

    def test_dry_run_writes_nothing(self):
        """Dry runs lay out pages without creating the output file."""
        output = self.workdir / "dry.pdf"

        report = run(str(self.repo), str(output), dry_run=True, show_line_numbers=False, paper_size="Letter")

        self.assertFalse(output.exists())
        self.assertGreaterEqual(report.physical_page_count, 4)

    def test_empty_directory_renders_nothing(self):
        """An empty repository is not an error."""
        empty = self.workdir / "empty"
        empty.mkdir()

        with self.assertLogs("code_renderer.main", level="WARNING"):
            report = run(str(empty), str(self.workdir / "empty.pdf"))

        self.assertIsNone(report)
        self.assertFalse((self.workdir / "empty.pdf").exists())

    def test_write_output_leaves_no_partial_file(self):
        """A failed replace removes the temporary file."""
        target = self.workdir / "atomic" / "code.pdf"

        with mock.patch("code_renderer.main.os.replace", side_effect=OSError("read-only file system")):
            with self.assertRaises(OSError):
                write_output(b"%PDF-1.4 partial", target)

        self.assertFalse(target.exists())
        self.assertEqual(os.listdir(target.parent), [])

    def test_write_output_replaces_existing_file(self):
        target = self.workdir / "code.pdf"
        target.write_bytes(b"old")

        write_output(b"%PDF-new", target)

        self.assertEqual(target.read_bytes(), b"%PDF-new")

    def test_cli_exit_codes(self):
        """The CLI reports validation and fatal errors with status 1."""
        output = str(self.workdir / "cli.pdf")
        cases = [
            ([str(self.repo), "-o", output, "--dry-run"], 0),
            ([str(self.workdir / "missing"), "-o", output], 1),
            ([str(self.repo), "-o", output, "--paper-size", "A9"], 1),
            ([str(self.repo), "-o", output, "-f", "500"], 1),
        ]
        for argv, expected in cases:
            with self.subTest(argv=argv):
                with self.assertLogs("code_renderer", level="INFO"):
                    self.assertEqual(cli(argv), expected)

    def test_cli_rejects_unknown_theme(self):
        with self.assertRaises(SystemExit):
            with mock.patch("sys.stderr"):
                cli([str(self.repo), "--theme", "neon"])


if __name__ == '__main__':
    unittest.main()
