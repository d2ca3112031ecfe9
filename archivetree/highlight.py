"""Pygments highlighting for JSON tree exports."""

from __future__ import annotations

from functools import lru_cache

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import JsonLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

FALLBACK_STYLE = "monokai"


def normalize_style(style: str) -> str:
    """Return ``style`` when pygments knows it, otherwise the fallback style."""
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return FALLBACK_STYLE
    return style


@lru_cache(maxsize=None)
def _formatter_for_style(style: str) -> Terminal256Formatter:
    return Terminal256Formatter(style=style)


def highlight_json(text: str, style: str = FALLBACK_STYLE) -> str:
    """Return ``text`` with ANSI colors for terminal display."""
    formatter = _formatter_for_style(normalize_style(style))
    return highlight(text, JsonLexer(), formatter)


__all__ = [
    "FALLBACK_STYLE",
    "highlight_json",
    "normalize_style",
]
