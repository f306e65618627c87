"""Theme model captures the color scheme used for code pages."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from code_renderer.model.elements import FontStyle


@dataclass(frozen=True, slots=True)
class Theme:
    """Colors for page chrome plus per-token-kind colors and font styles."""

    name: str
    default_color: str
    background_color: str
    line_number_color: str
    line_number_background: str
    header_footer_color: str
    header_footer_background: str
    border_color: str
    token_colors: Dict[str, str] = field(default_factory=dict)
    font_styles: Dict[str, FontStyle] = field(default_factory=dict)
    toc_leader_color: str = "#aaaaaa"
    muted_text_color: str = "#555555"

    def color_for(self, kind: Optional[str]) -> str:
        """Return the color of a token kind, falling back to the default text color."""
        if kind is None:
            return self.default_color
        return self.token_colors.get(kind, self.default_color)

    def style_for(self, kind: Optional[str]) -> FontStyle:
        if kind is None:
            return FontStyle.NORMAL
        return self.font_styles.get(kind, FontStyle.NORMAL)


LIGHT_THEME = Theme(
    name="light",
    default_color="#24292e",
    background_color="#ffffff",
    line_number_color="#aaaaaa",
    line_number_background="#f6f8fa",
    header_footer_color="#586069",
    header_footer_background="#f6f8fa",
    border_color="#e1e4e8",
    token_colors={
        "comment": "#6a737d",
        "keyword": "#d73a49",
        "string": "#032f62",
        "number": "#005cc5",
        "literal": "#005cc5",
        "built_in": "#005cc5",
        "function": "#6f42c1",
        "title": "#6f42c1",
        "class": "#6f42c1",
        "property": "#005cc5",
        "operator": "#d73a49",
        "punctuation": "#24292e",
        "tag": "#22863a",
        "attr": "#6f42c1",
        "variable": "#e36209",
        "regexp": "#032f62",
        "meta": "#005cc5",
    },
    font_styles={"comment": FontStyle.ITALIC},
)

DARK_THEME = Theme(
    name="dark",
    default_color="#c9d1d9",
    background_color="#0d1117",
    line_number_color="#8b949e",
    line_number_background="#161b22",
    header_footer_color="#8b949e",
    header_footer_background="#161b22",
    border_color="#30363d",
    token_colors={
        "comment": "#8b949e",
        "keyword": "#ff7b72",
        "string": "#a5d6ff",
        "number": "#79c0ff",
        "literal": "#79c0ff",
        "built_in": "#79c0ff",
        "function": "#d2a8ff",
        "title": "#d2a8ff",
        "class": "#d2a8ff",
        "property": "#79c0ff",
        "operator": "#ff7b72",
        "punctuation": "#c9d1d9",
        "tag": "#7ee787",
        "attr": "#d2a8ff",
        "variable": "#ffa657",
        "regexp": "#a5d6ff",
        "meta": "#79c0ff",
    },
    font_styles={"comment": FontStyle.ITALIC},
    toc_leader_color="#6e7681",
    muted_text_color="#8b949e",
)


class ThemeCatalog:
    """Collection of themes keyed by lower-case name."""

    def __init__(self, themes: Mapping[str, Theme]):
        self._themes = {name.lower(): theme for name, theme in themes.items()}

    def get(self, name: Optional[str]) -> Optional[Theme]:
        """Return the theme registered under ``name``, if any."""
        if name is None:
            return None
        return self._themes.get(name.lower())

    def require(self, name: str) -> Theme:
        theme = self.get(name)
        if theme is None:
            available = ", ".join(self.names())
            raise KeyError(f'Unknown theme "{name}". Available themes: {available}')
        return theme

    def names(self) -> list[str]:
        return sorted(self._themes)

    def all(self) -> Mapping[str, Theme]:
        """Return read-only view of registered themes."""
        return dict(self._themes)


DEFAULT_THEMES = ThemeCatalog({"light": LIGHT_THEME, "dark": DARK_THEME})
