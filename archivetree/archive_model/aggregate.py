"""Size roll-ups and display ordering for a built archive tree."""

from __future__ import annotations

import unicodedata
from collections.abc import Callable

from .formatting import format_bytes
from .types import ArchiveNode, ArchiveTree, DirectoryNode, TreeStructureError


def name_sort_key(name: str) -> tuple[str, str, tuple[bool, ...], str]:
    """Collation key that orders names the way a root-locale comparison does.

    Accents and case are ignored first, then accents break ties, then lowercase
    sorts before uppercase. The raw string makes the key total.
    """
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()
    accented = unicodedata.normalize("NFKC", name).casefold()
    uppercase_marks = tuple(ch.isupper() for ch in name)
    return base, accented, uppercase_marks, name


def sort_nodes(nodes: list[ArchiveNode], sort_key: Callable[[str], object] = name_sort_key) -> None:
    """Sort ``nodes`` in place: directories first, then by ``sort_key(name)``."""
    nodes.sort(key=lambda node: (not node.is_directory, sort_key(node.name)))


def finalize_archive_tree(
    tree: ArchiveTree,
    *,
    sort_key: Callable[[str], object] = name_sort_key,
    format_size: Callable[[int], str] = format_bytes,
) -> ArchiveTree:
    """Sort every child list and compute per-directory aggregate sizes in place.

    Directories are visited post-order, so a directory's aggregate is computed
    after all of its descendants. Running this twice gives the same result.
    A directory reachable from itself, reachable through two parents, or not
    reachable from ``tree.roots`` at all raises ``TreeStructureError``.
    """
    active: set[int] = set()
    completed: set[int] = set()

    def visit(top: DirectoryNode) -> None:
        # Explicit stack: archive paths may nest deeper than the recursion limit.
        stack: list[tuple[DirectoryNode, bool]] = [(top, False)]
        while stack:
            directory, children_done = stack.pop()
            key = id(directory)
            if children_done:
                raw_size = 0
                compressed_size = 0
                for child in directory.children:
                    if isinstance(child, DirectoryNode):
                        raw_size += child.aggregate_raw_size
                        compressed_size += child.aggregate_compressed_size
                    else:
                        raw_size += child.raw_size
                        compressed_size += child.compressed_size
                directory.aggregate_raw_size = raw_size
                directory.aggregate_compressed_size = compressed_size
                directory.size_label = format_size(raw_size)
                directory.compressed_size_label = format_size(compressed_size)
                active.discard(key)
                completed.add(key)
                continue

            if key in active:
                raise TreeStructureError(f"directory {directory.entry_name!r} contains itself")
            if key in completed:
                raise TreeStructureError(f"directory {directory.entry_name!r} has more than one parent")
            active.add(key)

            sort_nodes(directory.children, sort_key)
            stack.append((directory, True))
            stack.extend(
                (child, False) for child in reversed(directory.children) if isinstance(child, DirectoryNode)
            )

    sort_nodes(tree.roots, sort_key)
    for node in tree.roots:
        if isinstance(node, DirectoryNode):
            visit(node)

    for path, directory in tree.directory_index.items():
        if id(directory) not in completed:
            raise TreeStructureError(f"directory {path!r} is not reachable from the archive roots")

    tree.finalized = True
    return tree


__all__ = [
    "finalize_archive_tree",
    "name_sort_key",
    "sort_nodes",
]
