"""Tokenize source files with Pygments and resolve theme colors per token."""
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from pygments.lexer import Lexer
from pygments.lexers import get_lexer_for_filename
from pygments.lexers.special import TextLexer
from pygments.token import (
    Comment,
    Keyword,
    Literal,
    Name,
    Number,
    Operator,
    Punctuation,
    String,
    Token,
    _TokenType,
)
from pygments.util import ClassNotFound

from code_renderer.model.elements import HighlightedFile, SourceFile, SourceLine, StyledToken
from code_renderer.model.theme_model import Theme
from code_renderer.utils.logger import get_logger
from code_renderer.utils.text_normalizer import TextNormalizer

LOGGER = get_logger(__name__)

LEXER_OPTIONS = {"stripnl": False, "ensurenl": False}

# Most specific token types first; the first containing type wins.
TOKEN_KINDS: Tuple[Tuple[_TokenType, str], ...] = (
    (Comment, "comment"),
    (Keyword.Constant, "literal"),
    (Keyword, "keyword"),
    (String.Regex, "regexp"),
    (String, "string"),
    (Number, "number"),
    (Name.Builtin, "built_in"),
    (Name.Function, "function"),
    (Name.Class, "class"),
    (Name.Decorator, "meta"),
    (Name.Tag, "tag"),
    (Name.Attribute, "attr"),
    (Name.Property, "property"),
    (Name.Variable, "variable"),
    (Name.Constant, "literal"),
    (Token.Generic.Heading, "title"),
    (Token.Generic.Subheading, "title"),
    (Operator, "operator"),
    (Punctuation, "punctuation"),
    (Literal, "literal"),
)


def token_kind(ttype: _TokenType) -> Optional[str]:
    """Map a Pygments token type onto a theme key, or ``None`` for plain text."""
    for parent, kind in TOKEN_KINDS:
        if ttype in parent:
            return kind
    return None


def lexer_for(source: SourceFile) -> Lexer:
    try:
        return get_lexer_for_filename(source.relative_path, **LEXER_OPTIONS)
    except ClassNotFound:
        LOGGER.debug("No lexer for %s, using plain text", source.relative_path)
        return TextLexer(**LEXER_OPTIONS)


def language_label(lexer: Lexer) -> str:
    return lexer.aliases[0] if lexer.aliases else lexer.name.lower()


class Highlighter:
    """Turns ``SourceFile`` objects into ``HighlightedFile`` token lines."""

    def __init__(self, theme: Theme, normalizer: Optional[TextNormalizer] = None) -> None:
        self.theme = theme
        self.normalizer = normalizer or TextNormalizer()

    def highlight(self, source: SourceFile) -> HighlightedFile:
        text = self.normalizer.normalize_text(source.content)
        lexer = lexer_for(source)
        try:
            tokens = list(lexer.get_tokens(text))
        except Exception as exc:
            LOGGER.warning("Highlighting %s failed, using plain text: %s", source.relative_path, exc)
            lexer = TextLexer(**LEXER_OPTIONS)
            tokens = list(lexer.get_tokens(text))

        lines = self._split_lines(tokens, text)
        LOGGER.debug("Highlighted %s as %s (%d lines)", source.relative_path, lexer.name, len(lines))
        return HighlightedFile(
            relative_path=source.relative_path,
            language=language_label(lexer),
            lines=tuple(lines),
        )

    def highlight_all(self, sources: Iterable[SourceFile]) -> List[HighlightedFile]:
        return [self.highlight(source) for source in sources]

    def _split_lines(self, tokens: Sequence[Tuple[_TokenType, str]], text: str) -> List[SourceLine]:
        """Split token values on newlines; a single trailing newline adds no line."""
        rows: List[List[StyledToken]] = []
        current: List[StyledToken] = []
        for ttype, value in tokens:
            kind = token_kind(ttype)
            color = self.theme.color_for(kind)
            style = self.theme.style_for(kind)
            for index, part in enumerate(value.split("\n")):
                if index > 0:
                    rows.append(current)
                    current = []
                if part:
                    current.append(StyledToken(text=part, color=color, style=style))

        if text and not text.endswith("\n"):
            rows.append(current)

        return [SourceLine(line_number=number, tokens=tuple(row)) for number, row in enumerate(rows, start=1)]
