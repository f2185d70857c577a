"""Filesystem capability used by the fetch, extract and find operations.

Two implementations are provided: `OsFilesystem` for the real disk and
`MemoryFilesystem`, which keeps every node in a dictionary. Both report
failures with the same `OSError` subclasses so callers can treat them alike.
"""

from __future__ import annotations

import errno
import io
import os
import posixpath
import stat
from dataclasses import dataclass, field
from typing import BinaryIO, Dict, Iterator, Optional, Protocol


@dataclass(frozen=True)
class WalkEntry:
    """A node visited by `Filesystem.walk`; `error` is set when the node could not be read."""

    path: str
    name: str
    is_dir: bool = False
    error: Optional[OSError] = None


class Filesystem(Protocol):
    def create(self, path: str) -> BinaryIO:
        ...

    def open_read(self, path: str) -> BinaryIO:
        ...

    def open_write(self, path: str, mode: int) -> BinaryIO:
        ...

    def remove(self, path: str) -> None:
        ...

    def makedirs(self, path: str) -> None:
        ...

    def isdir(self, path: str) -> bool:
        ...

    def exists(self, path: str) -> bool:
        ...

    def realpath(self, path: str) -> str:
        ...

    def walk(self, root: str) -> Iterator[WalkEntry]:
        ...


def _base_name(path: str) -> str:
    stripped = path.rstrip("/")
    return os.path.basename(stripped) if stripped else path


class OsFilesystem:
    """`Filesystem` backed by the operating system."""

    def create(self, path: str) -> BinaryIO:
        return open(path, "wb")

    def open_read(self, path: str) -> BinaryIO:
        return open(path, "rb")

    def open_write(self, path: str, mode: int) -> BinaryIO:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
        return os.fdopen(fd, "wb")

    def remove(self, path: str) -> None:
        try:
            if os.path.isdir(path) and not os.path.islink(path):
                os.rmdir(path)
            else:
                os.unlink(path)
        except FileNotFoundError:
            pass

    def makedirs(self, path: str) -> None:
        os.makedirs(path, exist_ok=True)

    def isdir(self, path: str) -> bool:
        return os.path.isdir(path) and not os.path.islink(path)

    def exists(self, path: str) -> bool:
        return os.path.lexists(path)

    def realpath(self, path: str) -> str:
        return os.path.realpath(path)

    def walk(self, root: str) -> Iterator[WalkEntry]:
        info = os.lstat(root)
        yield from self._walk(root, _base_name(root), stat.S_ISDIR(info.st_mode))

    def _walk(self, path: str, name: str, is_dir: bool) -> Iterator[WalkEntry]:
        yield WalkEntry(path, name, is_dir)
        if not is_dir:
            return
        try:
            names = sorted(os.listdir(path))
        except OSError as exc:
            yield WalkEntry(path, name, is_dir, exc)
            return
        for child in names:
            child_path = os.path.join(path, child)
            try:
                child_info = os.lstat(child_path)
            except OSError as exc:
                yield WalkEntry(child_path, child, False, exc)
                continue
            yield from self._walk(child_path, child, stat.S_ISDIR(child_info.st_mode))


@dataclass
class _MemoryNode:
    is_dir: bool
    mode: int
    data: bytes = field(default=b"", repr=False)


class _MemoryWriter(io.BytesIO):
    """Buffer that commits its content to the owning node on close."""

    def __init__(self, node: _MemoryNode):
        super().__init__()
        self._node = node

    def close(self) -> None:
        if not self.closed:
            self._node.data = self.getvalue()
        super().close()


class MemoryFilesystem:
    """`Filesystem` kept entirely in memory; relative paths resolve against the working directory."""

    def __init__(self) -> None:
        self._nodes: Dict[str, _MemoryNode] = {"/": _MemoryNode(is_dir=True, mode=0o755)}

    @staticmethod
    def _key(path: str) -> str:
        return posixpath.normpath(os.path.abspath(path))

    def _parent_dir(self, key: str) -> _MemoryNode:
        parent = self._nodes.get(posixpath.dirname(key))
        if parent is None:
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), key)
        if not parent.is_dir:
            raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), key)
        return parent

    def _children(self, key: str) -> list:
        prefix = key.rstrip("/") + "/"
        return sorted(
            k[len(prefix):] for k in self._nodes
            if k != key and k.startswith(prefix) and "/" not in k[len(prefix):]
        )

    def create(self, path: str) -> BinaryIO:
        return self.open_write(path, 0o666)

    def open_read(self, path: str) -> BinaryIO:
        key = self._key(path)
        node = self._nodes.get(key)
        if node is None:
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)
        if node.is_dir:
            raise IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR), path)
        return io.BytesIO(node.data)

    def open_write(self, path: str, mode: int) -> BinaryIO:
        key = self._key(path)
        node = self._nodes.get(key)
        if node is not None and node.is_dir:
            raise IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR), path)
        self._parent_dir(key)
        if node is None:
            node = _MemoryNode(is_dir=False, mode=mode & 0o777)
            self._nodes[key] = node
        node.data = b""
        return _MemoryWriter(node)

    def remove(self, path: str) -> None:
        key = self._key(path)
        node = self._nodes.get(key)
        if node is None:
            return
        if node.is_dir and (key == "/" or self._children(key)):
            raise OSError(errno.ENOTEMPTY, os.strerror(errno.ENOTEMPTY), path)
        del self._nodes[key]

    def makedirs(self, path: str) -> None:
        key = self._key(path)
        current = "/"
        for part in key.strip("/").split("/"):
            if not part:
                continue
            current = posixpath.join(current, part)
            node = self._nodes.get(current)
            if node is None:
                self._nodes[current] = _MemoryNode(is_dir=True, mode=0o777)
            elif not node.is_dir:
                raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), current)

    def isdir(self, path: str) -> bool:
        node = self._nodes.get(self._key(path))
        return node is not None and node.is_dir

    def exists(self, path: str) -> bool:
        return self._key(path) in self._nodes

    def realpath(self, path: str) -> str:
        """Return the canonical absolute form of `path`; there are no links to follow."""
        return self._key(path)

    def mode(self, path: str) -> int:
        """Return the permission bits recorded for `path`."""
        node = self._nodes.get(self._key(path))
        if node is None:
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)
        return node.mode

    def read_bytes(self, path: str) -> bytes:
        with self.open_read(path) as handle:
            return handle.read()

    def walk(self, root: str) -> Iterator[WalkEntry]:
        node = self._nodes.get(self._key(root))
        if node is None:
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), root)
        yield from self._walk(root, _base_name(root), node.is_dir)

    def _walk(self, path: str, name: str, is_dir: bool) -> Iterator[WalkEntry]:
        yield WalkEntry(path, name, is_dir)
        if not is_dir:
            return
        for child in self._children(self._key(path)):
            child_path = posixpath.join(path, child)
            child_node = self._nodes.get(self._key(child_path))
            if child_node is None:
                continue
            yield from self._walk(child_path, child, child_node.is_dir)
