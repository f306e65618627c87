"""Summary of one document render, kept for logging and debug dumps."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple


@dataclass(slots=True)
class RenderReport:
    """What the assembler produced and where the TOC estimate diverged."""

    physical_page_count: int = 0
    toc_page_count: int = 0
    estimates: Dict[str, int] = field(default_factory=dict)
    actual_start_pages: Dict[str, int] = field(default_factory=dict)
    failed_files: Dict[str, str] = field(default_factory=dict)

    def divergences(self) -> Dict[str, Tuple[int, int]]:
        """Files whose real start page differs from the estimate, as ``(estimated, actual)``."""
        return {
            path: (estimated, self.actual_start_pages[path])
            for path, estimated in self.estimates.items()
            if path in self.actual_start_pages and self.actual_start_pages[path] != estimated
        }
