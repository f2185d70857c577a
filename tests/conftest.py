"""Shared fixtures: zip archives built at test time and fake HTTP clients."""

from __future__ import annotations

import io
import os
import sys
import zipfile
from typing import Iterable, List, Optional, Tuple, Union

import pytest

# Ensure project root is on sys.path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from fetchzip.core.http import HttpResponse  # noqa: E402

# (name, content, mode); a name ending with "/" is a directory entry.
Entry = Union[Tuple[str, bytes], Tuple[str, bytes, int]]


def build_zip(entries: Iterable[Entry]) -> bytes:
    """Return the bytes of a zip archive holding `entries` in the given order."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        for item in entries:
            name, data = item[0], item[1]
            mode = item[2] if len(item) > 2 else (0o755 if name.endswith("/") else 0o644)
            info = zipfile.ZipInfo(name)
            info.compress_type = zipfile.ZIP_DEFLATED
            info.external_attr = (mode & 0xFFFF) << 16
            if name.endswith("/"):
                info.external_attr |= 0x40000000 | 0x10  # S_IFDIR, MS-DOS directory flag
            archive.writestr(info, data)
    return buffer.getvalue()


class TrackingBody(io.BytesIO):
    """Response body that remembers whether it was closed."""

    def __init__(self, data: bytes = b"", fail_after: Optional[int] = None):
        super().__init__(data)
        self.was_closed = False
        self._fail_after = fail_after

    def read(self, size: int = -1) -> bytes:
        if self._fail_after is not None:
            remaining = self._fail_after - self.tell()
            if remaining <= 0:
                raise ConnectionResetError("connection reset by peer")
            size = remaining if size < 0 else min(size, remaining)
        return super().read(size)

    def close(self) -> None:
        self.was_closed = True
        super().close()


class FakeHttpClient:
    """`HttpClient` answering every GET with a canned status and body."""

    def __init__(self, status: int = 200, body: bytes = b"", fail_after: Optional[int] = None):
        self.status = status
        self.body = TrackingBody(body, fail_after)
        self.requested: List[str] = []

    def get(self, url: str) -> HttpResponse:
        self.requested.append(url)
        return HttpResponse(self.status, self.body)


@pytest.fixture
def zip_file(tmp_path):
    """Write a zip built from entries to disk and return its path as a string."""

    def _make(entries: Iterable[Entry], name: str = "test.zip") -> str:
        path = tmp_path / name
        path.write_bytes(build_zip(entries))
        return str(path)

    return _make
