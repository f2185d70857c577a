"""Download-then-extract composition of the fetch and extract operations."""

from __future__ import annotations

import logging
from typing import Optional

from ..common.config import FetchzipSettings
from ..common.errors import StorageError
from .extractor import extract
from .fetcher import fetch
from .filesystem import Filesystem, OsFilesystem
from .http import HttpClient, UrllibHttpClient


def fetch_and_extract(
    url: str,
    destination: str,
    *,
    keep_archive: bool = False,
    settings: Optional[FetchzipSettings] = None,
    fs: Optional[Filesystem] = None,
    http: Optional[HttpClient] = None,
    logger: Optional[logging.Logger] = None,
) -> str:
    """Download `url`, unpack it into `destination` and return the staging identifier.

    The staged archive is removed after a successful extraction unless
    `keep_archive` is set. On failure it is left in place for inspection.
    """
    settings = settings or FetchzipSettings.from_env()
    fs = fs or OsFilesystem()
    http = http or UrllibHttpClient(timeout=settings.http_timeout)

    identifier = fetch(
        url,
        fs=fs,
        http=http,
        staging_dir=settings.staging_dir,
        chunk_size=settings.chunk_size,
        logger=logger,
    )
    archive_path = settings.staging_path(identifier)
    extract(archive_path, destination, fs=fs, chunk_size=settings.chunk_size, logger=logger)

    if not keep_archive:
        try:
            fs.remove(archive_path)
        except OSError as exc:
            raise StorageError(f"Cannot remove staged archive {archive_path}: {exc}", archive_path) from exc
    return identifier
