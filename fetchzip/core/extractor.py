"""
Safe zip extraction.

Every entry name in an archive is untrusted. Before anything is written for
an entry, its target path is normalized, resolved through any symlinks and
checked to be inside the destination, so a crafted name such as ``../../etc/passwd`` aborts the whole
extraction instead of escaping it ("zip-slip"). Entries written before the
offending one are left in place.

Archives are not required to list parent directories; they are created on
demand for every entry.
"""

from __future__ import annotations

import logging
import os
import stat
import zipfile
import zlib
from dataclasses import dataclass
from typing import Callable, Optional

from ..common.constants import DEFAULT_CHUNK_SIZE, DEFAULT_FILE_MODE
from ..common.errors import ArchiveOpenError, PathTraversalError, StorageError
from .filesystem import Filesystem, OsFilesystem
from .resources import scoped

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArchiveEntry:
    """A single file or directory stored in an archive."""

    name: str
    is_dir: bool
    mode: int
    size: int = 0

    @classmethod
    def from_zipinfo(cls, info: zipfile.ZipInfo) -> 'ArchiveEntry':
        unix_mode = info.external_attr >> 16
        # Only archives written on Unix (create_system 3) record permission bits.
        mode = unix_mode & 0o777 if info.create_system == 3 else DEFAULT_FILE_MODE
        return cls(
            name=info.filename,
            is_dir=info.is_dir() or stat.S_ISDIR(unix_mode),
            mode=mode,
            size=info.file_size,
        )


def _within(root: str, path: str) -> bool:
    return os.path.commonpath([root, path]) == root


def sanitize_extract_path(
    entry_name: str,
    destination: str,
    resolve: Callable[[str], str] = os.path.realpath,
) -> str:
    """
    Resolve `entry_name` under `destination` and make sure it stays there.

    The joined path is first normalized and compared with the destination
    path segment by path segment, so ``/out`` never admits ``/outside/file``.
    Both paths are then passed through `resolve` (symlinks followed) and
    compared again, so a link already present in the destination cannot
    carry an entry outside it.

    Args:
        entry_name: Path recorded in the archive
        destination: Extraction root
        resolve: Canonicalizes a path; the filesystem's `realpath`

    Returns:
        The normalized absolute target path

    Raises:
        PathTraversalError: If the entry resolves outside `destination`
    """
    root = os.path.abspath(destination)
    if os.path.isabs(entry_name):
        raise PathTraversalError(entry_name, destination)
    target = os.path.normpath(os.path.join(root, entry_name))
    if not _within(root, target):
        raise PathTraversalError(entry_name, destination)
    if not _within(resolve(root), resolve(target)):
        raise PathTraversalError(entry_name, destination)
    return target


def _remove(fs: Filesystem, path: str) -> None:
    try:
        fs.remove(path)
    except OSError as exc:
        raise StorageError(f"Cannot remove {path}: {exc}", path) from exc


def _materialize(
    fs: Filesystem,
    archive: zipfile.ZipFile,
    info: zipfile.ZipInfo,
    destination: str,
    chunk_size: int,
) -> None:
    entry = ArchiveEntry.from_zipinfo(info)
    target = sanitize_extract_path(entry.name, destination, fs.realpath)

    if fs.realpath(target) == fs.realpath(destination):
        if entry.is_dir:
            try:
                fs.makedirs(target)
            except OSError as exc:
                raise StorageError(f"Cannot create directory {target}: {exc}", target) from exc
            return
        raise PathTraversalError(entry.name, destination)

    # An existing directory already has the shape a directory entry needs.
    if not (entry.is_dir and fs.isdir(target)):
        _remove(fs, target)

    # Create the full path as a directory so every ancestor exists, even for
    # a nested file entry whose parents are not listed in the archive.
    try:
        fs.makedirs(target)
    except OSError as exc:
        raise StorageError(f"Cannot create directory {target}: {exc}", target) from exc
    if entry.is_dir:
        return

    # The target itself must become a file: drop the directory just created.
    _remove(fs, target)

    label = f"{archive.filename or '<archive>'}:{entry.name}"
    try:
        reader = archive.open(info, "r")
    except (zipfile.BadZipFile, NotImplementedError, RuntimeError) as exc:
        raise ArchiveOpenError(label, str(exc)) from exc
    with scoped(reader):
        try:
            writer = fs.open_write(target, entry.mode)
        except OSError as exc:
            raise StorageError(f"Cannot create {target}: {exc}", target) from exc
        with scoped(writer):
            while True:
                try:
                    chunk = reader.read(chunk_size)
                except (zipfile.BadZipFile, EOFError, zlib.error) as exc:
                    raise ArchiveOpenError(label, str(exc)) from exc
                if not chunk:
                    break
                try:
                    writer.write(chunk)
                except OSError as exc:
                    raise StorageError(f"Cannot write {target}: {exc}", target) from exc
            try:
                writer.flush()
            except OSError as exc:
                raise StorageError(f"Cannot write {target}: {exc}", target) from exc


def extract(
    archive_path: str,
    destination: str,
    *,
    fs: Optional[Filesystem] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    logger: Optional[logging.Logger] = None,
) -> int:
    """
    Extract every entry of the zip archive at `archive_path` into `destination`.

    Entries are processed in archive order. Existing nodes at an entry's path
    are replaced rather than merged.

    Returns:
        Number of entries processed

    Raises:
        ArchiveOpenError: If the archive cannot be opened or an entry cannot be decompressed
        PathTraversalError: If an entry resolves outside `destination`
        StorageError: If a local remove, mkdir or write fails
    """
    fs = fs or OsFilesystem()
    logger = logger or _log

    try:
        handle = fs.open_read(archive_path)
    except OSError as exc:
        raise ArchiveOpenError(archive_path, str(exc)) from exc

    with scoped(handle):
        try:
            archive = zipfile.ZipFile(handle, "r")
        except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError) as exc:
            raise ArchiveOpenError(archive_path, str(exc)) from exc
        with scoped(archive):
            members = archive.infolist()
            for info in members:
                _materialize(fs, archive, info, destination, chunk_size)

    logger.info("Extracted %s into %s (%d entries)", archive_path, destination, len(members))
    return len(members)
