"""Domain datatypes for archive entries and the reconstructed directory tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal


class TreeStructureError(ValueError):
    """Fatal archive-tree construction error (cycles, depth or size caps)."""


DiagnosticKind = Literal[
    "malformed_path",
    "file_directory_conflict",
    "duplicate_file",
    "duplicate_directory",
]


@dataclass(frozen=True)
class TreeDiagnostic:
    """One skipped or dropped archive record, surfaced to the caller."""

    kind: DiagnosticKind
    entry_name: str
    message: str


@dataclass(frozen=True)
class ArchiveEntry:
    """One record from a parsed archive listing.

    ``entry_name`` is the full ``/``-delimited path as stored in the archive;
    directory records usually carry a trailing ``/``.
    """

    entry_name: str
    is_directory: bool = False
    raw_size: int = 0
    compressed_size: int = 0
    modified_time: datetime | None = None

    @property
    def logical_path(self) -> str:
        """Path used for lookups: surrounding separators stripped."""
        return self.entry_name.strip("/")

    @property
    def name(self) -> str:
        return self.logical_path.rsplit("/", 1)[-1]


@dataclass(frozen=True)
class FileNode:
    """Leaf node for one file entry, with display labels already formatted."""

    name: str
    entry_name: str
    raw_size: int
    compressed_size: int
    size_label: str = ""
    compressed_size_label: str = ""
    modified_time: datetime | None = None
    modified_label: str = ""

    @property
    def is_directory(self) -> bool:
        return False


@dataclass
class DirectoryNode:
    """Directory node owning its children.

    ``explicit`` is ``False`` for directories synthesized because some entry's
    path runs through them without the archive recording them. Aggregate sizes
    and labels are filled in by ``finalize_archive_tree``.
    """

    name: str
    entry_name: str
    explicit: bool = False
    modified_time: datetime | None = None
    children: list["ArchiveNode"] = field(default_factory=list)
    aggregate_raw_size: int = 0
    aggregate_compressed_size: int = 0
    size_label: str = ""
    compressed_size_label: str = ""

    @property
    def is_directory(self) -> bool:
        return True


ArchiveNode = DirectoryNode | FileNode


@dataclass
class ArchiveTree:
    """Root-level nodes plus path-keyed indices over every node."""

    roots: list[ArchiveNode] = field(default_factory=list)
    file_index: dict[str, FileNode] = field(default_factory=dict)
    directory_index: dict[str, DirectoryNode] = field(default_factory=dict)
    diagnostics: list[TreeDiagnostic] = field(default_factory=list)
    finalized: bool = False

    @property
    def total_raw_size(self) -> int:
        return sum(node.raw_size for node in self.file_index.values())

    @property
    def total_compressed_size(self) -> int:
        return sum(node.compressed_size for node in self.file_index.values())


__all__ = [
    "ArchiveEntry",
    "ArchiveNode",
    "ArchiveTree",
    "DiagnosticKind",
    "DirectoryNode",
    "FileNode",
    "TreeDiagnostic",
    "TreeStructureError",
]
