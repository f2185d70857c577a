"""fetchzip - download zip archives, unpack them safely and search the result.

Provides:
* `fetch` - download a URL into a uniquely named staging file
* `extract` - unpack a zip archive while refusing entries that escape the destination
* `find_files` - recursive base-name search with a regular expression
* `fetch_and_extract` - the usual download-then-unpack flow
* Thin CLI wrapper (`fetchzip`)

The three core operations share no state; filesystem and HTTP access go
through small capability objects so callers can substitute their own.
"""

from ._version import __version__
from .common.config import FetchzipSettings, staging_path
from .common.errors import (
    ArchiveOpenError,
    FetchzipError,
    PathTraversalError,
    PatternError,
    RemoteFetchError,
    StorageError,
    TransportError,
    WalkError,
)
from .common.logging_config import configure_logging  # noqa: F401
from .core.extractor import ArchiveEntry, extract, sanitize_extract_path
from .core.fetcher import fetch, new_identifier
from .core.filesystem import MemoryFilesystem, OsFilesystem
from .core.finder import find_files
from .core.http import UrllibHttpClient
from .core.pipeline import fetch_and_extract

__all__ = [
	"__version__",
	"configure_logging",
	"FetchzipSettings",
	"staging_path",
	"fetch",
	"new_identifier",
	"extract",
	"sanitize_extract_path",
	"ArchiveEntry",
	"find_files",
	"fetch_and_extract",
	"OsFilesystem",
	"MemoryFilesystem",
	"UrllibHttpClient",
	"FetchzipError",
	"TransportError",
	"RemoteFetchError",
	"StorageError",
	"ArchiveOpenError",
	"PathTraversalError",
	"PatternError",
	"WalkError",
]
