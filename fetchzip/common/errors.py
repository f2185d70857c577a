"""
Custom exception classes for fetchzip.
"""

from typing import Optional


class FetchzipError(Exception):
    """Base exception class for fetchzip errors."""
    pass


class TransportError(FetchzipError):
    """Raised when the HTTP request cannot be performed or its body cannot be read."""
    pass


class RemoteFetchError(FetchzipError):
    """Raised when the server answers with a status other than 200."""

    def __init__(self, url: str, status: int):
        super().__init__(f"Received non 200 response code {status} for {url}")
        self.url = url
        self.status = status


class StorageError(FetchzipError):
    """Raised when a local read, write or remove fails."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class ArchiveOpenError(FetchzipError):
    """Raised when the archive cannot be opened as a zip file."""

    def __init__(self, archive_path: str, reason: str):
        super().__init__(f"Cannot open archive {archive_path}: {reason}")
        self.archive_path = archive_path


class PathTraversalError(FetchzipError):
    """Raised when an archive entry would be written outside the destination."""

    def __init__(self, entry_name: str, destination: str):
        super().__init__(f"{entry_name}: illegal file path")
        self.entry_name = entry_name
        self.destination = destination


class PatternError(FetchzipError):
    """Raised when a search pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str):
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")
        self.pattern = pattern


class WalkError(FetchzipError):
    """Raised when a directory tree cannot be walked from its root."""

    def __init__(self, root: str, reason: str):
        super().__init__(f"Cannot walk {root}: {reason}")
        self.root = root
