"""ANSI palettes for archive tree listings.

Themes only color the tree listing. Highlighting of JSON output uses a
separate pygments style setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the tree renderer."""

    name: str
    reset: str
    tree_marker: str
    tree_dir: str
    tree_dir_implicit: str
    tree_file: str
    tree_size: str
    tree_time: str
    diagnostic: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    tree_marker="\033[38;5;44m",
    tree_dir="\033[1;34m",
    tree_dir_implicit="\033[34m",
    tree_file="\033[38;5;252m",
    tree_size="\033[38;5;109m",
    tree_time="\033[2;38;5;250m",
    diagnostic="\033[38;5;214m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    tree_marker="\033[38;5;39m",
    tree_dir="\033[1;38;5;45m",
    tree_dir_implicit="\033[38;5;45m",
    tree_file="\033[38;5;252m",
    tree_size="\033[38;5;73m",
    tree_time="\033[2;38;5;110m",
    diagnostic="\033[38;5;215m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    tree_marker="",
    tree_dir="",
    tree_dir_implicit="",
    tree_file="",
    tree_size="",
    tree_time="",
    diagnostic="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    candidate = str(name or "").strip().lower()
    return _THEMES.get(candidate, DEFAULT_THEME)


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "resolve_theme",
]
