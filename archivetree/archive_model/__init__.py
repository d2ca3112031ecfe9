"""Domain model for archive listings reconstructed as directory trees.

This package contains the non-UI core:
- entry/node datatypes (files, explicit and implicit directories)
- two-phase tree construction from a flat, unordered entry list
- post-order size aggregation and directories-first ordering
- byte-size/timestamp label formatting and a ``zipfile`` adapter
"""

from __future__ import annotations

from .aggregate import finalize_archive_tree, name_sort_key, sort_nodes
from .build import (
    DEFAULT_MAX_DEPTH,
    DEFAULT_MAX_ENTRIES,
    BuildLimits,
    build_and_finalize,
    build_archive_tree,
    path_depth,
    split_parent_path,
)
from .formatting import coerce_timestamp, format_bytes, format_timestamp
from .types import (
    ArchiveEntry,
    ArchiveNode,
    ArchiveTree,
    DirectoryNode,
    FileNode,
    TreeDiagnostic,
    TreeStructureError,
)
from .walk import find_node, iter_files, iter_nodes
from .zip_source import entries_from_zipfile, parse_zip_as_tree, read_entry_bytes

__all__ = [
    "ArchiveEntry",
    "ArchiveNode",
    "ArchiveTree",
    "DirectoryNode",
    "FileNode",
    "TreeDiagnostic",
    "TreeStructureError",
    "DEFAULT_MAX_DEPTH",
    "DEFAULT_MAX_ENTRIES",
    "BuildLimits",
    "build_archive_tree",
    "build_and_finalize",
    "split_parent_path",
    "path_depth",
    "finalize_archive_tree",
    "name_sort_key",
    "sort_nodes",
    "format_bytes",
    "format_timestamp",
    "coerce_timestamp",
    "iter_nodes",
    "iter_files",
    "find_node",
    "entries_from_zipfile",
    "parse_zip_as_tree",
    "read_entry_bytes",
]
