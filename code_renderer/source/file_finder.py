"""Discover the source files of a repository that are worth printing."""
from __future__ import annotations

import fnmatch
import os
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from code_renderer.model.elements import SourceFile
from code_renderer.utils.logger import get_logger

LOGGER = get_logger(__name__)

DEFAULT_MAX_FILE_SIZE = 5 * 1024 * 1024
BINARY_SNIFF_BYTES = 8192

ALWAYS_IGNORED_DIRS = {
    ".git", ".svn", ".hg", ".idea", ".vscode", ".vs",
    "node_modules", "bower_components", "dist", "build", "coverage",
    "__pycache__", ".pytest_cache", ".mypy_cache", ".ruff_cache", ".tox", ".nox",
    ".venv", "venv",
}

BINARY_EXTENSIONS = {
    "png", "jpg", "jpeg", "gif", "bmp", "tiff", "webp", "ico", "svg",
    "mp3", "wav", "ogg", "flac",
    "mp4", "avi", "mov", "wmv", "mkv",
    "pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx",
    "zip", "rar", "gz", "tar", "7z",
    "exe", "dll", "so", "dylib", "app", "o", "a", "obj",
    "jar", "class", "pyc", "pyo",
    "woff", "woff2", "ttf", "otf", "eot",
    "lock", "log",
}


class IgnoreRules:
    """``.gitignore``-style patterns matched with ``fnmatch``.

    Patterns are tested against the POSIX relative path and the bare file
    name. The last matching pattern wins, so ``!pattern`` can re-include a
    file excluded by an earlier line.
    """

    def __init__(self, patterns: Iterable[str] = ()) -> None:
        self._rules: List[Tuple[str, bool]] = []
        self.extend(patterns)

    @classmethod
    def from_gitignore(cls, path: Path, extra: Iterable[str] = ()) -> "IgnoreRules":
        rules = cls()
        if path.is_file():
            rules.extend(path.read_text(encoding="utf-8", errors="replace").splitlines())
            LOGGER.debug("Loaded ignore rules from %s", path)
        rules.extend(extra)
        return rules

    def extend(self, patterns: Iterable[str]) -> None:
        for raw in patterns:
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            negated = line.startswith("!")
            if negated:
                line = line[1:]
            # Directory-only and anchored markers reduce to plain path globs here.
            line = line.strip("/")
            if line:
                self._rules.append((line, negated))

    def ignores(self, relative_path: str) -> bool:
        name = relative_path.rsplit("/", 1)[-1]
        ignored = False
        for pattern, negated in self._rules:
            if self._matches(pattern, relative_path, name):
                ignored = not negated
        return ignored

    @staticmethod
    def _matches(pattern: str, relative_path: str, name: str) -> bool:
        if fnmatch.fnmatchcase(relative_path, pattern) or fnmatch.fnmatchcase(name, pattern):
            return True
        # A bare directory pattern excludes everything below that directory.
        parts = relative_path.split("/")[:-1]
        prefixes = ("/".join(parts[: index + 1]) for index in range(len(parts)))
        return any(fnmatch.fnmatchcase(part, pattern) for part in parts) or any(
            fnmatch.fnmatchcase(prefix, pattern) for prefix in prefixes
        )


class FileFinder:
    """Walks a directory tree and loads every readable UTF-8 text file."""

    def __init__(
        self,
        root: Path,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
        extra_ignore: Iterable[str] = (),
    ) -> None:
        self.root = Path(root).resolve()
        self.max_file_size = max_file_size
        self.rules = IgnoreRules.from_gitignore(self.root / ".gitignore", extra_ignore)

    def find(self) -> List[SourceFile]:
        if not self.root.exists():
            raise FileNotFoundError(f"Source path not found: {self.root}")
        if self.root.is_file():
            source = self._load(self.root, self.root.name)
            return [source] if source else []

        LOGGER.info("Scanning directory: %s", self.root)
        found: List[SourceFile] = []
        for dirpath, dirnames, filenames in os.walk(self.root):
            dirnames[:] = sorted(d for d in dirnames if d not in ALWAYS_IGNORED_DIRS)
            for filename in sorted(filenames):
                path = Path(dirpath) / filename
                relative_path = path.relative_to(self.root).as_posix()
                source = self._consider(path, relative_path)
                if source is not None:
                    found.append(source)

        found.sort(key=lambda item: item.relative_path)
        LOGGER.info("Found %d source file(s) under %s", len(found), self.root)
        return found

    # ------------------------------------------------------------------
    # Helpers
    def _consider(self, path: Path, relative_path: str) -> Optional[SourceFile]:
        if self.rules.ignores(relative_path):
            LOGGER.debug("Ignoring (ignore rules): %s", relative_path)
            return None
        if extension_of(path) in BINARY_EXTENSIONS:
            LOGGER.debug("Ignoring (binary extension): %s", relative_path)
            return None
        return self._load(path, relative_path)

    def _load(self, path: Path, relative_path: str) -> Optional[SourceFile]:
        try:
            size = path.stat().st_size
        except OSError as exc:
            LOGGER.warning("Could not stat %s (skipping): %s", relative_path, exc)
            return None
        if size > self.max_file_size:
            LOGGER.warning("Ignoring (larger than %d bytes): %s", self.max_file_size, relative_path)
            return None

        try:
            data = path.read_bytes()
        except OSError as exc:
            LOGGER.warning("Could not read %s (skipping): %s", relative_path, exc)
            return None
        if b"\x00" in data[:BINARY_SNIFF_BYTES]:
            LOGGER.debug("Ignoring (binary content): %s", relative_path)
            return None
        try:
            content = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            LOGGER.warning("Could not read %s as UTF-8 (skipping): %s", relative_path, exc)
            return None

        return SourceFile(
            absolute_path=str(path),
            relative_path=relative_path,
            content=content,
            extension=extension_of(path),
        )


def extension_of(path: Path) -> str:
    return path.suffix[1:].lower()
