"""Download a URL into a uniquely named staging file."""

from __future__ import annotations

import logging
import uuid
from http.client import HTTPException
from typing import Callable, Optional

from ..common.config import staging_path
from ..common.constants import DEFAULT_CHUNK_SIZE
from ..common.errors import RemoteFetchError, StorageError, TransportError
from .filesystem import Filesystem, OsFilesystem
from .http import HttpClient, UrllibHttpClient
from .resources import scoped

_log = logging.getLogger(__name__)


def new_identifier() -> str:
    """Return a fresh, globally unique identifier for a staging file."""
    return uuid.uuid4().hex


def fetch(
    url: str,
    *,
    fs: Optional[Filesystem] = None,
    http: Optional[HttpClient] = None,
    id_provider: Callable[[], str] = new_identifier,
    staging_dir: Optional[str] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    logger: Optional[logging.Logger] = None,
) -> str:
    """Download `url` into the staging area and return the staging identifier.

    The file lands at ``staging_path(identifier, staging_dir)``. Nothing is
    written unless the server answers with exactly 200.

    Raises:
        TransportError: the request failed or the body could not be read
        RemoteFetchError: the response status was not 200
        StorageError: the staging file could not be created or written
    """
    fs = fs or OsFilesystem()
    http = http or UrllibHttpClient()
    logger = logger or _log

    with scoped(http.get(url)) as response:
        if response.status != 200:
            raise RemoteFetchError(url, response.status)

        identifier = id_provider()
        path = staging_path(identifier, staging_dir)
        try:
            sink = fs.create(path)
        except OSError as exc:
            raise StorageError(f"Cannot create staging file {path}: {exc}", path) from exc

        with scoped(sink):
            written = 0
            while True:
                try:
                    chunk = response.read(chunk_size)
                except (OSError, HTTPException) as exc:
                    raise TransportError(f"Reading body of {url} failed: {exc}") from exc
                if not chunk:
                    break
                try:
                    sink.write(chunk)
                except OSError as exc:
                    raise StorageError(f"Cannot write staging file {path}: {exc}", path) from exc
                written += len(chunk)
            try:
                sink.flush()
            except OSError as exc:
                raise StorageError(f"Cannot write staging file {path}: {exc}", path) from exc

    logger.info("Downloaded %s as %s (%d bytes)", url, path, written)
    return identifier
