"""Helpers to persist render summaries for debugging."""
from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any

from code_renderer.model.document_model import RenderReport

REPORT_FILENAME = "render_report.json"


class DebugDumper:
    """Writes intermediate artifacts onto disk for inspection."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def dump(self, report: RenderReport) -> Path:
        """Persist the render report as JSON for offline analysis."""
        self.directory.mkdir(parents=True, exist_ok=True)
        payload = self._serialize(report)
        payload["divergences"] = {path: list(pair) for path, pair in report.divergences().items()}
        target = self.directory / REPORT_FILENAME
        target.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
        return target

    def _serialize(self, value: Any) -> Any:
        if is_dataclass(value):
            return {k: self._serialize(v) for k, v in asdict(value).items()}
        if isinstance(value, dict):
            return {k: self._serialize(v) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [self._serialize(v) for v in value]
        return value
