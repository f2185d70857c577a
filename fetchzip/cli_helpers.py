"""Shared CLI helpers for fetchzip commands."""

import sys
from typing import Optional

from fetchzip.common.constants import ExitCodes
from fetchzip.common.errors import (
    ArchiveOpenError,
    PathTraversalError,
    PatternError,
    RemoteFetchError,
    StorageError,
    TransportError,
    WalkError,
)


def exit_with_error(message: str, exit_code: int) -> None:
    """Print an error message and exit with the specified code."""
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(exit_code)


def map_exception_to_exit_code(exc: Exception) -> Optional[int]:
    """Translate known exceptions to fetchzip exit codes."""
    if isinstance(exc, TransportError):
        return ExitCodes.TRANSPORT_FAILED
    if isinstance(exc, RemoteFetchError):
        return ExitCodes.REMOTE_FETCH_FAILED
    if isinstance(exc, StorageError):
        return ExitCodes.STORAGE_FAILED
    if isinstance(exc, ArchiveOpenError):
        return ExitCodes.ARCHIVE_OPEN_FAILED
    if isinstance(exc, PathTraversalError):
        return ExitCodes.PATH_TRAVERSAL
    if isinstance(exc, PatternError):
        return ExitCodes.INVALID_PATTERN
    if isinstance(exc, WalkError):
        return ExitCodes.WALK_FAILED
    return None


def fail(exc: Exception) -> None:
    """Report `exc` on stderr and exit with its mapped code."""
    exit_code = map_exception_to_exit_code(exc)
    if exit_code is None:
        exit_code = ExitCodes.UNEXPECTED_ERROR
    exit_with_error(str(exc), exit_code)
