"""Archive-tree construction from a flat, unordered archive listing.

Construction runs in two phases over an arena of slots:

1. every archive entry gets a slot and is attached to its parent directory,
   synthesizing an *implicit* directory slot when the parent path has not been
   seen yet (implicit slots are queued, not attached);
2. queued implicit directories are attached to their own parents the same
   way until the queue drains.

Slots reference children by arena index and directories are looked up by
path, so no node ever points back at its parent. Nodes are materialized only
after file/directory conflicts have been resolved.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime

from .aggregate import finalize_archive_tree
from .formatting import format_bytes, format_timestamp
from .types import (
    ArchiveEntry,
    ArchiveNode,
    ArchiveTree,
    DiagnosticKind,
    DirectoryNode,
    FileNode,
    TreeDiagnostic,
    TreeStructureError,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 1_000_000
DEFAULT_MAX_DEPTH = 256


@dataclass(frozen=True)
class BuildLimits:
    """Caps that turn pathological archives into fast failures.

    ``max_entries`` of ``0`` disables the entry-count cap.
    """

    max_entries: int = DEFAULT_MAX_ENTRIES
    max_depth: int = DEFAULT_MAX_DEPTH


@dataclass
class _Slot:
    path: str
    is_directory: bool
    explicit: bool = False
    entry: ArchiveEntry | None = None
    modified_time: datetime | None = None
    children: list[int] = field(default_factory=list)
    dropped: bool = False


def split_parent_path(path: str) -> tuple[str | None, str]:
    """Split ``path`` into ``(parent_path, name)``.

    ``parent_path`` is ``None`` for root-level paths. Empty segments are kept:
    ``"a//b"`` has parent ``"a/"`` whose own name is ``""``.
    """
    parent, separator, name = path.rpartition("/")
    if not separator:
        return None, name
    return parent, name


def path_depth(path: str) -> int:
    """Number of ``/``-separated segments in a logical path."""
    return path.count("/") + 1


class _ArenaBuilder:
    def __init__(self, limits: BuildLimits) -> None:
        self.limits = limits
        self.slots: list[_Slot] = []
        self.root_slots: list[int] = []
        self.files: dict[str, int] = {}
        self.directories: dict[str, int] = {}
        self.pending: deque[int] = deque()
        self.diagnostics: list[TreeDiagnostic] = []

    def report(self, kind: DiagnosticKind, entry_name: str, message: str) -> None:
        logger.debug("archive entry %r: %s", entry_name, message)
        self.diagnostics.append(TreeDiagnostic(kind=kind, entry_name=entry_name, message=message))

    def _new_slot(self, slot: _Slot) -> int:
        if path_depth(slot.path) > self.limits.max_depth:
            raise TreeStructureError(
                f"path {slot.path!r} is nested deeper than {self.limits.max_depth} levels"
            )
        self.slots.append(slot)
        return len(self.slots) - 1

    def _new_directory(self, path: str, *, explicit: bool, modified_time: datetime | None = None) -> int:
        index = self._new_slot(
            _Slot(path=path, is_directory=True, explicit=explicit, modified_time=modified_time)
        )
        self.directories[path] = index
        return index

    def _attach(self, index: int) -> None:
        parent_path, _name = split_parent_path(self.slots[index].path)
        if parent_path is None:
            self.root_slots.append(index)
            return
        parent_index = self.directories.get(parent_path)
        if parent_index is None:
            parent_index = self._new_directory(parent_path, explicit=False)
            self.pending.append(parent_index)
        self.slots[parent_index].children.append(index)

    def add_entry(self, entry: ArchiveEntry) -> None:
        path = entry.logical_path
        if not path:
            self.report("malformed_path", entry.entry_name, "path has no usable segments; skipped")
            return

        if entry.is_directory:
            existing = self.directories.get(path)
            if existing is None:
                self._attach(self._new_directory(path, explicit=True, modified_time=entry.modified_time))
                return
            slot = self.slots[existing]
            if slot.explicit:
                self.report("duplicate_directory", entry.entry_name, "directory listed more than once; kept first")
                return
            # Explicit record for a directory first seen as a path prefix.
            slot.explicit = True
            slot.modified_time = entry.modified_time
            return

        if path in self.files:
            self.report("duplicate_file", entry.entry_name, "file listed more than once; kept first")
            return
        index = self._new_slot(
            _Slot(path=path, is_directory=False, entry=entry, modified_time=entry.modified_time)
        )
        self.files[path] = index
        self._attach(index)

    def attach_pending(self) -> None:
        while self.pending:
            self._attach(self.pending.popleft())

    def drop_conflicting_files(self) -> None:
        for path in [path for path in self.files if path in self.directories]:
            index = self.files.pop(path)
            slot = self.slots[index]
            slot.dropped = True
            assert slot.entry is not None
            self.report(
                "file_directory_conflict",
                slot.entry.entry_name,
                f"path {path!r} is also a directory; file dropped",
            )

    def materialize(
        self,
        format_size: Callable[[int], str],
        format_time: Callable[[datetime | None], str],
    ) -> ArchiveTree:
        nodes: list[ArchiveNode | None] = []
        for slot in self.slots:
            _parent, name = split_parent_path(slot.path)
            if slot.dropped:
                nodes.append(None)
            elif slot.is_directory:
                nodes.append(
                    DirectoryNode(
                        name=name,
                        entry_name=slot.path,
                        explicit=slot.explicit,
                        modified_time=slot.modified_time,
                    )
                )
            else:
                assert slot.entry is not None
                nodes.append(
                    FileNode(
                        name=name,
                        entry_name=slot.path,
                        raw_size=slot.entry.raw_size,
                        compressed_size=slot.entry.compressed_size,
                        size_label=format_size(slot.entry.raw_size),
                        compressed_size_label=format_size(slot.entry.compressed_size),
                        modified_time=slot.modified_time,
                        modified_label=format_time(slot.modified_time),
                    )
                )

        def live(indices: list[int]) -> list[ArchiveNode]:
            return [node for node in (nodes[index] for index in indices) if node is not None]

        tree = ArchiveTree(roots=live(self.root_slots), diagnostics=list(self.diagnostics))
        for path, index in self.directories.items():
            directory = nodes[index]
            assert isinstance(directory, DirectoryNode)
            directory.children = live(self.slots[index].children)
            tree.directory_index[path] = directory
        for path, index in self.files.items():
            file_node = nodes[index]
            assert isinstance(file_node, FileNode)
            tree.file_index[path] = file_node
        return tree


def build_archive_tree(
    entries: Iterable[ArchiveEntry],
    *,
    limits: BuildLimits | None = None,
    format_size: Callable[[int], str] = format_bytes,
    format_time: Callable[[datetime | None], str] = format_timestamp,
) -> ArchiveTree:
    """Build an unsorted, unaggregated tree from a flat archive listing.

    Bad records (empty paths, duplicates, files shadowed by directories) are
    skipped and listed in ``tree.diagnostics``. Exceeding ``limits`` raises
    ``TreeStructureError``. Call ``finalize_archive_tree`` before handing the
    tree to consumers.
    """
    limits = limits or BuildLimits()
    entry_list = list(entries)
    if limits.max_entries and len(entry_list) > limits.max_entries:
        raise TreeStructureError(
            f"archive lists {len(entry_list)} entries; limit is {limits.max_entries}"
        )

    builder = _ArenaBuilder(limits)
    for entry in entry_list:
        builder.add_entry(entry)
    builder.attach_pending()
    builder.drop_conflicting_files()
    tree = builder.materialize(format_size, format_time)
    logger.info(
        "built archive tree: %d files, %d directories, %d diagnostics",
        len(tree.file_index),
        len(tree.directory_index),
        len(tree.diagnostics),
    )
    return tree


def build_and_finalize(
    entries: Iterable[ArchiveEntry],
    *,
    limits: BuildLimits | None = None,
    format_size: Callable[[int], str] = format_bytes,
    format_time: Callable[[datetime | None], str] = format_timestamp,
) -> ArchiveTree:
    """Build and finalize in one step; the tree is complete when returned."""
    tree = build_archive_tree(entries, limits=limits, format_size=format_size, format_time=format_time)
    return finalize_archive_tree(tree, format_size=format_size)


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "DEFAULT_MAX_ENTRIES",
    "BuildLimits",
    "build_and_finalize",
    "build_archive_tree",
    "path_depth",
    "split_parent_path",
]
