"""Command-line front door for archivetree.

Parses CLI options, reads the archive listing, and builds the finalized tree.
Then prints it as an indented listing or as JSON.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import zipfile
from pathlib import Path

from . import config
from .archive_model import BuildLimits, TreeStructureError, parse_zip_as_tree
from .highlight import highlight_json
from .render import format_diagnostic, render_tree_lines, tree_to_dict
from .ui_theme import available_theme_names, resolve_theme


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _depth_limit(value: str) -> int:
    """argparse type for ``--max-depth``: positive and at most the depth ceiling."""
    parsed = _positive_int(value)
    if parsed > config.MAX_DEPTH_CEILING:
        raise argparse.ArgumentTypeError(f"value must be <= {config.MAX_DEPTH_CEILING}")
    return parsed


def _nonnegative_int(value: str) -> int:
    """argparse type for integer values where ``0`` means unlimited."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="archivetree",
        description="List a zip archive as a directory tree with aggregated sizes.",
    )
    parser.add_argument("path", help="Path to a zip-family archive (.zip, .jar, .docx, ...).")
    parser.add_argument("--json", action="store_true", help="Print the tree as JSON.")
    parser.add_argument(
        "--compressed",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Show compressed sizes next to uncompressed sizes.",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"Tree listing theme ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--style", default=None, help="Pygments style name for --json output.")
    parser.add_argument(
        "--max-entries",
        type=_nonnegative_int,
        default=None,
        help="Refuse archives listing more entries than this (0 = unlimited).",
    )
    parser.add_argument(
        "--max-depth",
        type=_depth_limit,
        default=None,
        help=f"Refuse paths nested deeper than this (at most {config.MAX_DEPTH_CEILING}).",
    )
    parser.add_argument(
        "--save-defaults",
        action="store_true",
        help="Persist --compressed, --style and the limits as defaults.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log skipped entries to stderr.")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and print the tree for one archive.

    ``argv`` is primarily for tests; when omitted ``sys.argv`` is used.
    Unreadable archives and structural failures exit with a message.
    """
    args = _build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")

    path = Path(args.path)
    if not path.is_file():
        raise SystemExit(f"Path not found: {path}")

    stored_limits = config.load_build_limits()
    limits = BuildLimits(
        max_entries=stored_limits.max_entries if args.max_entries is None else args.max_entries,
        max_depth=stored_limits.max_depth if args.max_depth is None else args.max_depth,
    )
    show_compressed = config.load_show_compressed() if args.compressed is None else args.compressed
    style = args.style or config.load_style()
    if args.save_defaults:
        config.save_build_limits(limits)
        config.save_show_compressed(show_compressed)
        config.save_style(style)

    try:
        tree = parse_zip_as_tree(path, limits=limits)
    except zipfile.BadZipFile as exc:
        raise SystemExit(f"Not a zip archive: {path} ({exc})") from exc
    except TreeStructureError as exc:
        raise SystemExit(f"Cannot build archive tree for {path}: {exc}") from exc

    use_color = not args.no_color and sys.stdout.isatty()
    if args.json:
        text = json.dumps(tree_to_dict(tree), indent=2, ensure_ascii=False) + "\n"
        sys.stdout.write(highlight_json(text, style) if use_color else text)
    else:
        theme = resolve_theme(args.theme, no_color=not use_color)
        for line in render_tree_lines(tree, show_compressed=show_compressed, theme=theme):
            sys.stdout.write(line + "\n")

    stderr_theme = resolve_theme(args.theme, no_color=args.no_color or not sys.stderr.isatty())
    for diagnostic in tree.diagnostics:
        sys.stderr.write(format_diagnostic(diagnostic, stderr_theme) + "\n")


if __name__ == "__main__":
    main()
