"""Persistent JSON config helpers.

Stores build caps and listing preferences.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from .archive_model import DEFAULT_MAX_DEPTH, DEFAULT_MAX_ENTRIES, BuildLimits

APP_NAME = "archivetree"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_STYLE = "monokai"
# JSON export nests two containers per directory level and the json encoder
# is bounded by the interpreter recursion limit.
MAX_DEPTH_CEILING = 400


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored to keep runtime behavior
    non-fatal when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def _load_int(key: str, default: int, minimum: int, maximum: int | None = None) -> int:
    """Read an integer config value.

    Booleans and values below ``minimum`` fall back to ``default``; values
    above ``maximum`` are clamped to it.
    """
    value = load_config().get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    if value < minimum:
        return default
    if maximum is not None and value > maximum:
        return maximum
    return value


def load_build_limits() -> BuildLimits:
    """Return entry-count and depth caps for tree construction.

    ``max_depth`` never exceeds ``MAX_DEPTH_CEILING``.
    """
    return BuildLimits(
        max_entries=_load_int("max_entries", DEFAULT_MAX_ENTRIES, 0),
        max_depth=_load_int("max_depth", DEFAULT_MAX_DEPTH, 1, MAX_DEPTH_CEILING),
    )


def save_build_limits(limits: BuildLimits) -> None:
    config = load_config()
    config["max_entries"] = int(limits.max_entries)
    config["max_depth"] = int(limits.max_depth)
    save_config(config)


def load_show_compressed() -> bool:
    """Return persisted compressed-size preference.

    Only explicit boolean values are accepted; any other type falls back to
    ``False``.
    """
    value = load_config().get("show_compressed")
    return bool(value) if isinstance(value, bool) else False


def save_show_compressed(show_compressed: bool) -> None:
    config = load_config()
    config["show_compressed"] = bool(show_compressed)
    save_config(config)


def load_style() -> str:
    """Return the persisted pygments style name, or the default."""
    value = load_config().get("style")
    return value if isinstance(value, str) and value else DEFAULT_STYLE


def save_style(style: str) -> None:
    config = load_config()
    config["style"] = str(style)
    save_config(config)
