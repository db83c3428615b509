"""Built-in report themes.

A theme is selected explicitly by identifier and passed to the renderer;
there is no process-wide current theme.
"""

from __future__ import annotations

from enum import Enum

from covhtml.errors import ThemeNotFoundError
from covhtml.themes.base import JinjaTemplateEngine, TemplateEngine, Theme, load_style


class ThemeName(Enum):
    """Identifiers of the built-in themes."""

    GOLANG = "golang"
    KIT = "kit"


_DESCRIPTIONS = {
    ThemeName.GOLANG: "Plain theme in the style of the Go documentation",
    ThemeName.KIT: "Dark theme with coverage bars",
}

DEFAULT_THEME = ThemeName.GOLANG


def get_theme(name: str | ThemeName = DEFAULT_THEME) -> Theme:
    """Return the theme registered under *name*.

    Raises:
        ThemeNotFoundError: If no theme has that identifier.
    """
    try:
        key = name if isinstance(name, ThemeName) else ThemeName(name)
    except ValueError as e:
        known = ", ".join(t.value for t in ThemeName)
        raise ThemeNotFoundError(f"unknown theme {name!r} (available: {known})") from e
    return Theme(
        name=key.value,
        description=_DESCRIPTIONS[key],
        style=load_style(f"{key.value}.css"),
        engine=JinjaTemplateEngine(f"{key.value}.html.j2"),
    )


def list_themes() -> list[Theme]:
    """Return all built-in themes, default first."""
    return [get_theme(name) for name in ThemeName]


__all__ = [
    "DEFAULT_THEME",
    "JinjaTemplateEngine",
    "TemplateEngine",
    "Theme",
    "ThemeName",
    "get_theme",
    "list_themes",
]
