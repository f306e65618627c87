"""Dry-run page estimation for the table of contents."""
from __future__ import annotations

import math
from typing import Dict, Iterable, List, Sequence

from code_renderer.model.elements import HighlightedFile, PageEstimate
from code_renderer.model.layout_config import LayoutConfig
from code_renderer.utils.logger import get_logger

LOGGER = get_logger(__name__)


def ordered_files(files: Iterable[HighlightedFile]) -> List[HighlightedFile]:
    """Return files in document order: case-sensitive lexicographic relative path.

    Both the table of contents and the code pages iterate this ordering, which
    keeps the listed start pages aligned with the rendered ones.
    """
    return sorted(files, key=lambda item: item.relative_path)


class TocEstimator:
    """Predicts the logical page each file will start on.

    The model assumes one visual row per source line. Long lines that wrap
    push real files onto more pages than estimated; footers never use these
    numbers, so the divergence is cosmetic and limited to the TOC listing.
    """

    def __init__(self, config: LayoutConfig) -> None:
        self._config = config

    @property
    def lines_per_page(self) -> int:
        return self._config.lines_per_page

    def pages_needed(self, file: HighlightedFile) -> int:
        return max(1, math.ceil(file.line_count / self.lines_per_page))

    def estimate_pages(self, files: Sequence[HighlightedFile], start_logical_page: int) -> List[PageEstimate]:
        estimates: List[PageEstimate] = []
        current = start_logical_page
        for file in ordered_files(files):
            estimates.append(PageEstimate(file_path=file.relative_path, start_logical_page=current))
            current += self.pages_needed(file)

        LOGGER.debug(
            "Estimated %d file(s) over logical pages %d-%d (%d lines per page)",
            len(estimates),
            start_logical_page,
            current - 1,
            self.lines_per_page,
        )
        return estimates

    def estimate(self, files: Sequence[HighlightedFile], start_logical_page: int) -> Dict[str, int]:
        """Map each relative path to its estimated starting logical page."""
        return {
            estimate.file_path: estimate.start_logical_page
            for estimate in self.estimate_pages(files, start_logical_page)
        }
