"""Entry-point for the code renderer pipeline."""
from __future__ import annotations

import os
import sys
import tempfile
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence

from code_renderer.model.document_model import RenderReport
from code_renderer.model.elements import HighlightedFile, SourceFile
from code_renderer.model.layout_config import DEFAULT_FONT_SIZE_PT, LayoutConfig
from code_renderer.model.theme_model import DEFAULT_THEMES, Theme
from code_renderer.renderer.document_assembler import DocumentAssembler
from code_renderer.renderer.pdf_surface import PdfSurface
from code_renderer.renderer.surface import DrawingSurface, RecordingSurface
from code_renderer.source.file_finder import FileFinder
from code_renderer.source.highlighter import Highlighter
from code_renderer.utils.debug import DebugDumper
from code_renderer.utils.logger import configure_logging, get_logger

LOGGER = get_logger(__name__)

DEFAULT_OUTPUT = "code-output.pdf"
DEFAULT_TITLE = "Code Repository Documentation"


def collect_sources(source_path: Path) -> List[SourceFile]:
    """Find every printable text file under ``source_path``."""
    return FileFinder(source_path).find()


def highlight_sources(sources: Sequence[SourceFile], theme: Theme) -> List[HighlightedFile]:
    """Tokenize and color each source file."""
    return Highlighter(theme).highlight_all(sources)


def render_document(
    files: Sequence[HighlightedFile],
    config: LayoutConfig,
    theme: Theme,
    surface: DrawingSurface,
    repo_name: str = "",
    generated_at: Optional[datetime] = None,
) -> RenderReport:
    """Lay out cover, table of contents and code pages onto ``surface``."""
    assembler = DocumentAssembler(surface, config, theme, repo_name=repo_name, generated_at=generated_at)
    assembler.render(files)
    return assembler.report


def write_output(data: bytes, output_path: Path) -> None:
    """Write ``data`` atomically: no partial file is left behind on failure."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{output_path.name}.", suffix=".tmp", dir=output_path.parent)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
        os.replace(tmp_name, output_path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise


def run(
    source: str,
    output: str = DEFAULT_OUTPUT,
    *,
    title: str = DEFAULT_TITLE,
    font_size: float = DEFAULT_FONT_SIZE_PT,
    theme_name: str = "light",
    show_line_numbers: bool = True,
    paper_size: str = "A4",
    dry_run: bool = False,
    debug_dir: Optional[str] = None,
) -> Optional[RenderReport]:
    """Run the source files → highlighted tokens → paginated PDF pipeline.

    Returns ``None`` when no source files were found.
    """
    source_path = Path(source).resolve()
    if not source_path.exists():
        raise FileNotFoundError(f"Source path not found: {source_path}")

    theme = DEFAULT_THEMES.require(theme_name)
    config = LayoutConfig.from_options(
        font_size=font_size,
        paper_size=paper_size,
        show_line_numbers=show_line_numbers,
        title=title,
    )

    sources = collect_sources(source_path)
    if not sources:
        LOGGER.warning("No source files found in %s, nothing to render", source_path)
        return None

    files = highlight_sources(sources, theme)
    repo_name = source_path.name if source_path.is_dir() else source_path.parent.name
    surface: DrawingSurface = RecordingSurface() if dry_run else PdfSurface(title=title)
    report = render_document(files, config, theme, surface, repo_name=repo_name)

    if dry_run:
        LOGGER.info("Dry run: %d page(s) laid out, nothing written", report.physical_page_count)
    else:
        output_path = Path(output).resolve()
        write_output(surface.finish(), output_path)
        LOGGER.info("PDF written to %s (%d pages)", output_path, report.physical_page_count)

    if report.failed_files:
        LOGGER.error("%d file(s) could not be rendered: %s", len(report.failed_files), ", ".join(report.failed_files))
    if debug_dir:
        DebugDumper(Path(debug_dir)).dump(report)
    return report


def build_parser():
    import argparse

    parser = argparse.ArgumentParser(description="Render a source tree into a paginated, syntax-highlighted PDF")
    parser.add_argument("source", help="Path to a source directory or a single file")
    parser.add_argument("-o", "--output", default=DEFAULT_OUTPUT, help="Output path for the generated PDF")
    parser.add_argument("-t", "--title", default=DEFAULT_TITLE, help="Title for the cover page")
    parser.add_argument("-f", "--font-size", type=float, default=DEFAULT_FONT_SIZE_PT, help="Code font size in points")
    parser.add_argument("--theme", default="light", choices=DEFAULT_THEMES.names(), help="Color theme")
    parser.add_argument("--no-line-numbers", action="store_true", help="Hide the line number gutter")
    parser.add_argument("--paper-size", default="A4", help="A4, Letter, or WIDTH,HEIGHT in points")
    parser.add_argument("--dry-run", action="store_true", help="Lay out pages without writing a PDF")
    parser.add_argument("--debug-dir", help="Directory to write a JSON render report")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def cli(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    try:
        run(
            args.source,
            args.output,
            title=args.title,
            font_size=args.font_size,
            theme_name=args.theme,
            show_line_numbers=not args.no_line_numbers,
            paper_size=args.paper_size,
            dry_run=args.dry_run,
            debug_dir=args.debug_dir,
        )
    except (OSError, ValueError, KeyError) as exc:
        LOGGER.error("Rendering failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(cli())
