"""
Text normalization utilities for source code.

Handles line-ending cleanup, tab expansion and removal of characters that the
standard PDF fonts cannot draw.
"""

import re


class TextNormalizer:
    """Normalizes source text before it is tokenized."""

    # Invisible characters that would otherwise be measured and drawn
    SPECIAL_CHARS = {
        '\ufeff': '',       # Byte order mark → remove
        '\u200b': '',       # Zero-width space → remove
        '\u200c': '',       # Zero-width non-joiner → remove
        '\u200d': '',       # Zero-width joiner → remove
        '\u00a0': ' ',      # Non-breaking space → regular space
    }

    # Regex for removing control characters (except tabs and newlines)
    CONTROL_CHARS_PATTERN = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]')

    def __init__(self, tab_size: int = 4):
        """Initialize text normalizer.

        Args:
            tab_size: Column width used when expanding tab characters.
        """
        if tab_size < 1:
            raise ValueError(f"tab_size must be positive, got {tab_size}")
        self.tab_size = tab_size

    def normalize_text(self, text: str) -> str:
        """Normalize source text for layout."""
        if not text:
            return text

        normalized = self._normalize_line_endings(text)
        normalized = self._replace_special_chars(normalized)
        normalized = self._remove_control_chars(normalized)
        return self._expand_tabs(normalized)

    def _normalize_line_endings(self, text: str) -> str:
        """Convert CRLF and bare CR line endings to LF."""
        return text.replace('\r\n', '\n').replace('\r', '\n')

    def _replace_special_chars(self, text: str) -> str:
        """Replace special Unicode characters with normalized equivalents."""
        for original, replacement in self.SPECIAL_CHARS.items():
            text = text.replace(original, replacement)
        return text

    def _remove_control_chars(self, text: str) -> str:
        """Remove control characters that shouldn't appear in rendered code."""
        return self.CONTROL_CHARS_PATTERN.sub('', text)

    def _expand_tabs(self, text: str) -> str:
        # Per line, so tab stops restart at each line start.
        return '\n'.join(line.expandtabs(self.tab_size) for line in text.split('\n'))
