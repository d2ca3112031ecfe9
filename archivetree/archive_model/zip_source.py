"""Adapter from ``zipfile`` listings to archive entries and finalized trees."""

from __future__ import annotations

import io
import os
import zipfile
from typing import BinaryIO

from .build import BuildLimits, build_and_finalize
from .formatting import coerce_timestamp
from .types import ArchiveEntry, ArchiveTree

ZipSource = bytes | str | os.PathLike | BinaryIO


def _open_zip(source: ZipSource) -> zipfile.ZipFile:
    if isinstance(source, (bytes, bytearray, memoryview)):
        return zipfile.ZipFile(io.BytesIO(bytes(source)))
    return zipfile.ZipFile(source)


def entries_from_zipfile(archive: zipfile.ZipFile) -> list[ArchiveEntry]:
    """Return one ``ArchiveEntry`` per central-directory record, in archive order."""
    return [
        ArchiveEntry(
            entry_name=info.filename,
            is_directory=info.is_dir(),
            raw_size=info.file_size,
            compressed_size=info.compress_size,
            modified_time=coerce_timestamp(info.date_time),
        )
        for info in archive.infolist()
    ]


def parse_zip_as_tree(source: ZipSource, *, limits: BuildLimits | None = None) -> ArchiveTree:
    """Open a zip archive (bytes, path, or binary file) and return its finalized tree.

    ``zipfile.BadZipFile`` propagates when ``source`` is not a zip archive.
    """
    with _open_zip(source) as archive:
        entries = entries_from_zipfile(archive)
    return build_and_finalize(entries, limits=limits)


def read_entry_bytes(source: ZipSource, entry_name: str) -> bytes:
    """Return the uncompressed bytes of one file entry.

    ``entry_name`` may be a tree path (no surrounding ``/``) or the name as
    stored in the archive. Raises ``KeyError`` when no such file exists.
    """
    with _open_zip(source) as archive:
        for info in archive.infolist():
            if info.is_dir():
                continue
            if info.filename == entry_name or info.filename.strip("/") == entry_name:
                return archive.read(info)
    raise KeyError(entry_name)


__all__ = [
    "ZipSource",
    "entries_from_zipfile",
    "parse_zip_as_tree",
    "read_entry_bytes",
]
