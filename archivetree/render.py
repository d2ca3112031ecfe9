"""Text and JSON projections of a finalized archive tree."""

from __future__ import annotations

from .archive_model import ArchiveNode, ArchiveTree, DirectoryNode, TreeDiagnostic, iter_nodes
from .ui_theme import DEFAULT_THEME, UITheme


def _size_label(node: ArchiveNode, show_compressed: bool) -> str:
    if show_compressed:
        return f"[{node.size_label} / {node.compressed_size_label} packed]"
    return f"[{node.size_label}]"


def format_tree_row(
    depth: int,
    node: ArchiveNode,
    *,
    show_compressed: bool = False,
    theme: UITheme | None = None,
) -> str:
    """Render one tree row as ANSI-styled display text."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    size = f" {active_theme.tree_size}{_size_label(node, show_compressed)}{reset}"
    if isinstance(node, DirectoryNode):
        indent = "  " * depth
        dir_color = active_theme.tree_dir if node.explicit else active_theme.tree_dir_implicit
        return f"{indent}{active_theme.tree_marker}▾ {reset}{dir_color}{node.name}/{reset}{size}"

    # Align file names under the parent directory arrow column.
    indent = "  " * depth + "  "
    modified = f"  {active_theme.tree_time}{node.modified_label}{reset}" if node.modified_label else ""
    return f"{indent}{active_theme.tree_file}{node.name}{reset}{size}{modified}"


def render_tree_lines(
    tree: ArchiveTree,
    *,
    show_compressed: bool = False,
    theme: UITheme | None = None,
) -> list[str]:
    """Render every node of ``tree`` as one row, depth-first in display order."""
    return [
        format_tree_row(depth, node, show_compressed=show_compressed, theme=theme)
        for depth, node in iter_nodes(tree)
    ]


def format_diagnostic(diagnostic: TreeDiagnostic, theme: UITheme | None = None) -> str:
    active_theme = theme or DEFAULT_THEME
    return (
        f"{active_theme.diagnostic}{diagnostic.kind}{active_theme.reset}: "
        f"{diagnostic.entry_name!r}: {diagnostic.message}"
    )


def _node_fields(node: ArchiveNode) -> dict[str, object]:
    if isinstance(node, DirectoryNode):
        return {
            "type": "directory",
            "name": node.name,
            "path": node.entry_name,
            "explicit": node.explicit,
            "size": node.aggregate_raw_size,
            "compressed_size": node.aggregate_compressed_size,
            "size_label": node.size_label,
            "compressed_size_label": node.compressed_size_label,
            "children": [],
        }
    return {
        "type": "file",
        "name": node.name,
        "path": node.entry_name,
        "size": node.raw_size,
        "compressed_size": node.compressed_size,
        "size_label": node.size_label,
        "compressed_size_label": node.compressed_size_label,
        "modified": node.modified_label or None,
    }


def node_to_dict(node: ArchiveNode) -> dict[str, object]:
    """Return a JSON-serializable mapping for ``node`` and its subtree."""
    payload = _node_fields(node)
    pending: list[tuple[ArchiveNode, dict[str, object]]] = [(node, payload)]
    while pending:
        current, current_payload = pending.pop()
        if not isinstance(current, DirectoryNode):
            continue
        children = current_payload["children"]
        assert isinstance(children, list)
        for child in current.children:
            child_payload = _node_fields(child)
            children.append(child_payload)
            pending.append((child, child_payload))
    return payload


def tree_to_dict(tree: ArchiveTree) -> dict[str, object]:
    """Return a JSON-serializable summary of ``tree`` including diagnostics."""
    return {
        "files": len(tree.file_index),
        "directories": len(tree.directory_index),
        "size": tree.total_raw_size,
        "compressed_size": tree.total_compressed_size,
        "roots": [node_to_dict(node) for node in tree.roots],
        "diagnostics": [
            {"kind": item.kind, "entry": item.entry_name, "message": item.message}
            for item in tree.diagnostics
        ],
    }


__all__ = [
    "format_diagnostic",
    "format_tree_row",
    "node_to_dict",
    "render_tree_lines",
    "tree_to_dict",
]
