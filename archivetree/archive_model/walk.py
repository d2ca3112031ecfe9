"""Read-only traversal helpers over a finalized archive tree."""

from __future__ import annotations

from collections.abc import Iterator

from .types import ArchiveNode, ArchiveTree, DirectoryNode, FileNode


def iter_nodes(tree: ArchiveTree) -> Iterator[tuple[int, ArchiveNode]]:
    """Yield ``(depth, node)`` pairs depth-first in display order."""
    stack: list[tuple[int, ArchiveNode]] = [(0, node) for node in reversed(tree.roots)]
    while stack:
        depth, node = stack.pop()
        yield depth, node
        if isinstance(node, DirectoryNode):
            stack.extend((depth + 1, child) for child in reversed(node.children))


def iter_files(source: ArchiveTree | DirectoryNode) -> Iterator[FileNode]:
    """Yield every file reachable from a tree or from one directory."""
    pending: list[ArchiveNode] = list(source.roots if isinstance(source, ArchiveTree) else source.children)
    while pending:
        node = pending.pop()
        if isinstance(node, DirectoryNode):
            pending.extend(node.children)
        else:
            yield node


def find_node(tree: ArchiveTree, path: str) -> ArchiveNode | None:
    """Look up a node by archive path; a single trailing ``/`` is tolerated.

    Exact keys win, so ``"a/"`` finds the empty-named directory built from
    ``a//b`` before falling back to ``"a"``.
    """
    key = path.lstrip("/")
    candidates = [key, key[:-1]] if key.endswith("/") else [key]
    for candidate in candidates:
        directory = tree.directory_index.get(candidate)
        if directory is not None:
            return directory
        file_node = tree.file_index.get(candidate)
        if file_node is not None:
            return file_node
    return None


__all__ = [
    "find_node",
    "iter_files",
    "iter_nodes",
]
